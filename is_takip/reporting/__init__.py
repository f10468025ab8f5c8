"""
Reporting module for İş Takip.

Provides CSV export of periodic reports and monthly cash flow.
"""

from is_takip.reporting.export import (
    cash_flow_frame,
    customer_frame,
    export_cash_flow,
    export_periodic_report,
    personnel_frame,
)

__all__ = [
    "customer_frame",
    "personnel_frame",
    "cash_flow_frame",
    "export_periodic_report",
    "export_cash_flow",
]
