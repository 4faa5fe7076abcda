from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

import MySQLdb
from flask import Flask
from flask_mysqldb import MySQL


class DatabaseUnavailable(RuntimeError):
	pass


def error_message(exc: Exception) -> str:
	# MySQLdb errors carry (errno, message)
	if isinstance(exc, MySQLdb.Error) and len(exc.args) >= 2:
		return str(exc.args[1])
	return str(exc)


def _fetchall_dict(cursor) -> List[Dict[str, Any]]:
	rows = cursor.fetchall() or []
	if rows and isinstance(rows[0], dict):
		return list(rows)
	desc = [col[0] for col in cursor.description or ()]
	return [dict(zip(desc, r)) for r in rows]


class ReportDatabase:
	"""One long-lived MySQL connection shared by every request.

	The connection is opened once by :meth:`connect`. MySQLdb connections are
	not thread-safe, so statements are serialized over it with a lock.
	There is no reconnect: if the connection is lost, queries keep failing
	until the process restarts.
	"""

	def __init__(self, mysql: Optional[MySQL] = None) -> None:
		self.mysql = mysql or MySQL()
		self._conn = None
		self._lock = threading.Lock()

	def init_app(self, app: Flask) -> None:
		self.mysql.init_app(app)

	@property
	def connected(self) -> bool:
		return self._conn is not None

	def connect(self, app: Flask) -> bool:
		with app.app_context():
			try:
				conn = self.mysql.connect
				conn.autocommit(True)
			except MySQLdb.Error as exc:
				app.logger.error("Database connection failed: %s", error_message(exc))
				return False
		self._conn = conn
		app.logger.info("Connected to MySQL database %s", app.config.get("MYSQL_DB"))
		return True

	def fetch_all(self, sql: str) -> List[Dict[str, Any]]:
		if self._conn is None:
			raise DatabaseUnavailable("Database connection is not established")
		with self._lock:
			cur = self._conn.cursor()
			try:
				cur.execute(sql)
				return _fetchall_dict(cur)
			finally:
				cur.close()

	def ping(self) -> bool:
		if self._conn is None:
			return False
		with self._lock:
			try:
				self._conn.ping()
			except MySQLdb.Error:
				return False
		return True

	def close(self) -> None:
		conn, self._conn = self._conn, None
		if conn is not None:
			conn.close()
