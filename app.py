from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from flask import Flask, Response, jsonify, make_response
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound

from config import PORT, Config
from database import ReportDatabase, error_message
from reports import REPORTS, ReportDefinition, ResultShape


def api_response(payload: Any, status: int = 200) -> Response:
	return make_response(jsonify(payload), status)


def error_response(message: str, status: int, *, details: Optional[Dict[str, Any]] = None) -> Response:
	payload: Dict[str, Any] = {"error": message, "status": status}
	if details:
		payload["details"] = details
	return api_response(payload, status=status)


def _jsonable_row(row: Mapping[str, Any]) -> Dict[str, Any]:
	out = dict(row)
	for key, value in out.items():
		if isinstance(value, (dt.date, dt.datetime)):
			out[key] = str(value)
	return out


def shape_result(report: ReportDefinition, rows: List[Mapping[str, Any]]) -> Any:
	if report.shape is ResultShape.SINGLE_ROW:
		return _jsonable_row(rows[0]) if rows else {}
	return [_jsonable_row(r) for r in rows]


def register_reports(app: Flask, db: ReportDatabase, reports: Iterable[ReportDefinition] = REPORTS) -> None:
	"""Bind one GET route per report definition.

	Every view runs the report's SQL on ``db`` and answers 200 with the shaped
	rows, or 500 with ``{"error": ...}`` when the query fails.
	"""

	def make_view(report: ReportDefinition):
		def view() -> Response:
			try:
				rows = db.fetch_all(report.sql)
			except Exception as e:
				app.logger.error("Report %s failed: %s", report.name, e)
				return error_response(error_message(e), 500)
			return api_response(shape_result(report, rows))

		return view

	for report in reports:
		app.add_url_rule(report.route, endpoint=report.name, view_func=make_view(report), methods=["GET"])


def create_app(config: Optional[Mapping[str, Any]] = None, db: Optional[ReportDatabase] = None) -> Flask:
	app = Flask(__name__)
	app.config.from_object(Config)
	if config:
		app.config.update(config)

	app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
	CORS(app, origins="*", send_wildcard=True)

	if db is None:
		db = ReportDatabase()
		db.init_app(app)
		db.connect(app)
	app.extensions["report_db"] = db

	@app.get("/")
	def index() -> Response:
		return api_response({"message": "Backend API is running!"})

	@app.get("/health")
	def health() -> Response:
		if db.ping():
			return api_response({"status": "ok"})
		return api_response({"status": "unavailable"}, status=503)

	@app.get("/api/reports")
	def list_reports() -> Response:
		return api_response([r.describe() for r in REPORTS])

	register_reports(app, db)

	@app.errorhandler(NotFound)
	def _not_found(err: NotFound):
		return error_response("Not found", 404)

	@app.errorhandler(Exception)
	def _unhandled(err: Exception):
		if isinstance(err, HTTPException):
			resp = error_response(err.name, err.code or 500)
			for key, value in err.get_headers():
				if key.lower() != "content-type":
					resp.headers[key] = value
			return resp
		app.logger.exception("Unhandled error: %s", err)
		return error_response("Internal server error", 500)

	return app


if __name__ == "__main__":
	logging.basicConfig(level=Config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
	app = create_app()
	app.logger.info("Server running on http://localhost:%d", PORT)
	for rule in sorted(r.rule for r in app.url_map.iter_rules() if r.endpoint != "static"):
		app.logger.info("  GET %s", rule)
	app.run(host="0.0.0.0", port=PORT)
