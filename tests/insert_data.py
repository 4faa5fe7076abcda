import os
import sys

from flask import Flask
from flask_mysqldb import MySQL


SCHEMA = (
	"DROP TABLE IF EXISTS tbl_invoice",
	"DROP TABLE IF EXISTS tbl_booking",
	"DROP TABLE IF EXISTS tbl_activity_log",
	"""
	CREATE TABLE tbl_invoice (
		inv_id INT AUTO_INCREMENT PRIMARY KEY,
		client_id INT NOT NULL,
		inv_name VARCHAR(120) NOT NULL,
		inv_date DATE NOT NULL,
		inv_tot DECIMAL(14,2) NOT NULL,
		acc_post TINYINT NOT NULL DEFAULT 0,
		inv_cancelled_status TINYINT NOT NULL DEFAULT 0
	)
	""",
	"""
	CREATE TABLE tbl_booking (
		b_id INT AUTO_INCREMENT PRIMARY KEY,
		b_status INT NOT NULL,
		b_v_load_port VARCHAR(60) NULL,
		b_v_dis_port VARCHAR(60) NULL,
		bk_chgs_tot_selling DECIMAL(14,2) NOT NULL
	)
	""",
	"""
	CREATE TABLE tbl_activity_log (
		activity_id INT AUTO_INCREMENT PRIMARY KEY,
		activity_module VARCHAR(60) NOT NULL,
		activity_action VARCHAR(60) NOT NULL,
		activity_desc VARCHAR(255) NOT NULL,
		activity_datetime DATETIME NOT NULL,
		user_id INT NOT NULL
	)
	""",
)

INSERT_INVOICE_AGED = """
	INSERT INTO tbl_invoice (client_id, inv_name, inv_date, inv_tot, acc_post, inv_cancelled_status)
	VALUES (%s, %s, DATE_SUB(CURDATE(), INTERVAL %s DAY), %s, %s, %s)
"""

INSERT_INVOICE_MONTHLY = """
	INSERT INTO tbl_invoice (client_id, inv_name, inv_date, inv_tot, acc_post, inv_cancelled_status)
	VALUES (%s, %s, DATE_SUB(CURDATE(), INTERVAL %s MONTH), %s, 1, 0)
"""

# (client_id, inv_name, age_days, inv_tot, acc_post, inv_cancelled_status)
AGED_INVOICES = (
	(1, "Harbour Freight", 30, "100.00", 0, 0),
	(2, "Delta Cargo", 31, "200.00", 0, 0),
	(1, "Harbour Freight", 5, "5000000.00", 0, 1),
	(3, "Summit Imports", 200, "1000000.00", 1, 0),
	(4, "Ocean Lines", 120, "1500000.00", 1, 0),
)

MONTHLY_CLIENT = (5, "Monthly Traders")
MONTHLY_INVOICES = 14

ROUTES = (
	("Colombo", "Singapore", 12),
	("Colombo", "Dubai", 11),
	("Colombo", "Rotterdam", 10),
	("Colombo", "Hamburg", 9),
	("Colombo", "Chennai", 8),
	("Colombo", "Shanghai", 7),
	("Colombo", "Jebel Ali", 6),
	("Colombo", "Felixstowe", 5),
	("Colombo", "Busan", 4),
	("Colombo", "Durban", 3),
	("Colombo", "Santos", 2),
	("Colombo", "Sydney", 1),
)

ACTIVITY_ROWS = 25

# Expected totals over non-cancelled invoices.
EXPECTED_TOTAL_REVENUE = "2500314.00"
EXPECTED_TOTAL_INVOICES = 18


def _make_app(db_name: str) -> Flask:
	app = Flask(__name__)
	app.config["MYSQL_USER"] = os.getenv("DB_USER", "root")
	app.config["MYSQL_PASSWORD"] = os.getenv("DB_PASSWORD", "password")
	app.config["MYSQL_HOST"] = os.getenv("DB_HOST", "localhost")
	app.config["MYSQL_DB"] = db_name
	app.config["MYSQL_PORT"] = int(os.getenv("DB_PORT", "3306"))
	app.config["MYSQL_CURSORCLASS"] = "DictCursor"
	return app


def seed_logistics(db_name: str) -> None:
	"""Recreate the report tables in ``db_name`` with boundary-case rows."""
	app = _make_app(db_name)
	mysql = MySQL(app)

	with app.app_context():
		cur = mysql.connection.cursor()
		for statement in SCHEMA:
			cur.execute(statement)

		for row in AGED_INVOICES:
			cur.execute(INSERT_INVOICE_AGED, row)
		for months_back in range(MONTHLY_INVOICES):
			cur.execute(INSERT_INVOICE_MONTHLY, (MONTHLY_CLIENT[0], MONTHLY_CLIENT[1], months_back, "1.00"))

		for load_port, dis_port, volume in ROUTES:
			for _ in range(volume):
				cur.execute(
					"""
					INSERT INTO tbl_booking (b_status, b_v_load_port, b_v_dis_port, bk_chgs_tot_selling)
					VALUES (%s,%s,%s,%s)
					""",
					(1, load_port, dis_port, "100.00"),
				)
		cur.execute(
			"""
			INSERT INTO tbl_booking (b_status, b_v_load_port, b_v_dis_port, bk_chgs_tot_selling)
			VALUES (%s,%s,%s,%s)
			""",
			(2, "Colombo", None, "50.00"),
		)

		for i in range(ACTIVITY_ROWS):
			cur.execute(
				"""
				INSERT INTO tbl_activity_log
					(activity_module, activity_action, activity_desc, activity_datetime, user_id)
				VALUES (%s,%s,%s,DATE_SUB(NOW(), INTERVAL %s MINUTE),%s)
				""",
				("booking", "update", f"Booking {i} updated", i, 1 + i % 3),
			)

		mysql.connection.commit()


if __name__ == "__main__":
	try:
		target = os.getenv("LOGISTICS_TEST_DB", "gensoft_logistics_test")
		seed_logistics(target)
		print(f"Seeded report tables in {target}")
	except Exception as exc:
		print(f"ERROR: {exc}")
		sys.exit(1)
