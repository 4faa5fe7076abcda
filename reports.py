"""Fixed aggregate reports served by the API.

Each entry pairs a route with a literal MySQL statement and the shape the
caller expects back. Statements take no parameters; any future filter must
go through driver parameter binding (``cursor.execute(sql, params)``).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class ResultShape(str, enum.Enum):
	SINGLE_ROW = "single_row"
	ROW_LIST = "row_list"


@dataclass(frozen=True)
class ReportDefinition:
	name: str
	route: str
	label: str
	sql: str
	shape: ResultShape = ResultShape.ROW_LIST

	def describe(self) -> Dict[str, str]:
		return {
			"name": self.name,
			"route": self.route,
			"label": self.label,
			"shape": self.shape.value,
		}


# Aging thresholds are inclusive upper bounds on DATEDIFF(NOW(), inv_date).
AGING_BUCKETS: Tuple[Tuple[int, str], ...] = (
	(30, "0-30 days"),
	(60, "31-60 days"),
	(90, "61-90 days"),
)
AGING_OVERFLOW = "90+ days"

# Segment thresholds are strict lower bounds on a client's total revenue.
SEGMENTS: Tuple[Tuple[int, str], ...] = (
	(1000000, "VIP (>1M)"),
	(500000, "Premium (500K-1M)"),
	(100000, "Standard (100K-500K)"),
)
SEGMENT_FLOOR = "New (<100K)"


def _case_sql(expr: str, op: str, buckets: Tuple[Tuple[int, str], ...], fallback: str) -> str:
	whens = "\n".join(
		f"\t\t\t\t\tWHEN {expr} {op} {bound} THEN '{label}'" for bound, label in buckets
	)
	return f"CASE\n{whens}\n\t\t\t\t\tELSE '{fallback}'\n\t\t\t\tEND"


def _rank_sql(column: str, labels: Tuple[str, ...]) -> str:
	whens = "\n".join(
		f"\t\t\t\t\tWHEN '{label}' THEN {rank}" for rank, label in enumerate(labels, start=1)
	)
	return f"CASE {column}\n{whens}\n\t\t\t\t\tELSE {len(labels) + 1}\n\t\t\t\tEND"


_AGING_CASE = _case_sql("DATEDIFF(NOW(), inv_date)", "<=", AGING_BUCKETS, AGING_OVERFLOW)
_AGING_RANK = _rank_sql("aging_category", tuple(label for _, label in AGING_BUCKETS))
_SEGMENT_CASE = _case_sql("total_revenue", ">", SEGMENTS, SEGMENT_FLOOR)


REPORTS: Tuple[ReportDefinition, ...] = (
	ReportDefinition(
		name="financial_summary",
		route="/api/financial/summary",
		label="Financial summary",
		shape=ResultShape.SINGLE_ROW,
		sql="""
			SELECT
				SUM(inv_tot) AS total_revenue,
				COUNT(*) AS total_invoices,
				AVG(inv_tot) AS avg_invoice_value
			FROM tbl_invoice
			WHERE inv_cancelled_status = 0
		""",
	),
	ReportDefinition(
		name="revenue_by_month",
		route="/api/financial/revenue-by-month",
		label="Revenue by month (last 12)",
		sql="""
			SELECT
				DATE_FORMAT(inv_date, '%Y-%m') AS month,
				SUM(inv_tot) AS revenue,
				COUNT(*) AS invoice_count
			FROM tbl_invoice
			WHERE inv_cancelled_status = 0
			GROUP BY DATE_FORMAT(inv_date, '%Y-%m')
			ORDER BY month DESC
			LIMIT 12
		""",
	),
	ReportDefinition(
		name="outstanding",
		route="/api/financial/outstanding",
		label="Outstanding invoices by aging",
		sql=f"""
			SELECT
				{_AGING_CASE} AS aging_category,
				SUM(inv_tot) AS amount,
				COUNT(*) AS count
			FROM tbl_invoice
			WHERE acc_post = 0 AND inv_cancelled_status = 0
			GROUP BY aging_category
			ORDER BY
				{_AGING_RANK}
		""",
	),
	ReportDefinition(
		name="booking_stats",
		route="/api/operational/bookings",
		label="Bookings by status",
		sql="""
			SELECT
				b_status,
				COUNT(*) AS count,
				SUM(bk_chgs_tot_selling) AS total_value
			FROM tbl_booking
			GROUP BY b_status
		""",
	),
	ReportDefinition(
		name="top_routes",
		route="/api/operational/top-routes",
		label="Top 10 routes by volume",
		sql="""
			SELECT
				CONCAT(b_v_load_port, ' → ', b_v_dis_port) AS route,
				COUNT(*) AS volume,
				SUM(bk_chgs_tot_selling) AS value
			FROM tbl_booking
			WHERE b_v_load_port IS NOT NULL AND b_v_dis_port IS NOT NULL
			GROUP BY route
			ORDER BY volume DESC
			LIMIT 10
		""",
	),
	ReportDefinition(
		name="top_customers",
		route="/api/customers/top",
		label="Top 10 customers by revenue",
		sql="""
			SELECT
				client_id,
				inv_name AS client_name,
				COUNT(*) AS booking_count,
				SUM(inv_tot) AS total_revenue
			FROM tbl_invoice
			WHERE inv_cancelled_status = 0
			GROUP BY client_id, inv_name
			ORDER BY total_revenue DESC
			LIMIT 10
		""",
	),
	ReportDefinition(
		name="customer_segmentation",
		route="/api/customers/segmentation",
		label="Customer segmentation by revenue",
		sql=f"""
			SELECT
				{_SEGMENT_CASE} AS segment,
				COUNT(*) AS customer_count,
				SUM(total_revenue) AS segment_revenue
			FROM (
				SELECT
					client_id,
					SUM(inv_tot) AS total_revenue
				FROM tbl_invoice
				WHERE inv_cancelled_status = 0
				GROUP BY client_id
			) AS customer_totals
			GROUP BY segment
			ORDER BY segment_revenue DESC
		""",
	),
	ReportDefinition(
		name="recent_activities",
		route="/api/activities/recent",
		label="Latest 20 activity log entries",
		sql="""
			SELECT
				activity_module,
				activity_action,
				activity_desc,
				activity_datetime,
				user_id
			FROM tbl_activity_log
			ORDER BY activity_datetime DESC
			LIMIT 20
		""",
	),
)


def get_report(name: str) -> Optional[ReportDefinition]:
	for report in REPORTS:
		if report.name == name:
			return report
	return None
