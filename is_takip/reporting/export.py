"""
Tabular export of reports for the İş Takip project.

Turns periodic reports and cash-flow summaries into pandas DataFrames and
writes them as CSV. Amounts are exported as floats rounded to 2 decimals;
currency formatting is left to whoever opens the file.
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from is_takip.aggregation.cash_flow import CashFlowSummary
from is_takip.aggregation.periodic_report import PeriodicReport

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = ["customer_id", "name", "job_count", "income", "cost", "net_profit", "profit_margin"]
PERSONNEL_COLUMNS = ["personnel_id", "name", "job_count", "earnings"]
TRANSACTION_COLUMNS = ["id", "date", "type", "description", "amount_in", "amount_out"]


def _money_columns(df: pd.DataFrame, columns) -> pd.DataFrame:
    for column in columns:
        if column in df.columns:
            df[column] = df[column].apply(lambda v: None if v is None else round(float(v), 2))
    return df


def customer_frame(report: PeriodicReport) -> pd.DataFrame:
    df = pd.DataFrame([asdict(row) for row in report.customer_data], columns=CUSTOMER_COLUMNS)
    return _money_columns(df, ["income", "cost", "net_profit", "profit_margin"])


def personnel_frame(report: PeriodicReport) -> pd.DataFrame:
    df = pd.DataFrame([asdict(row) for row in report.personnel_data], columns=PERSONNEL_COLUMNS)
    return _money_columns(df, ["earnings"])


def cash_flow_frame(summary: CashFlowSummary) -> pd.DataFrame:
    df = pd.DataFrame([asdict(t) for t in summary.transactions], columns=TRANSACTION_COLUMNS)
    return _money_columns(df, ["amount_in", "amount_out"])


def report_totals(report: PeriodicReport) -> Dict[str, float]:
    return {
        "total_income": round(float(report.total_income), 2),
        "total_cost": round(float(report.total_cost), 2),
        "net_profit": round(float(report.net_profit), 2),
        "job_count": report.job_count,
    }


def export_periodic_report(report: PeriodicReport, output_dir: Union[str, Path]) -> Dict[str, Path]:
    """
    Write the periodic report as three CSV files.

    Args:
        report: Report to export.
        output_dir: Directory to write into. Created if missing.

    Returns:
        Mapping of table name ("summary", "customers", "personnel") to file path.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = {
        "summary": output_dir / "report_summary.csv",
        "customers": output_dir / "report_customers.csv",
        "personnel": output_dir / "report_personnel.csv",
    }
    pd.DataFrame([report_totals(report)]).to_csv(paths["summary"], index=False)
    customer_frame(report).to_csv(paths["customers"], index=False)
    personnel_frame(report).to_csv(paths["personnel"], index=False)

    logger.info(f"Periodic report exported to: {output_dir}")
    return paths


def export_cash_flow(summary: CashFlowSummary, output_path: Union[str, Path]) -> Path:
    """Write the cash-flow transactions as a single CSV file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    cash_flow_frame(summary).to_csv(output_path, index=False)
    logger.info(f"Cash flow exported to: {output_path} ({len(summary.transactions)} transactions)")
    return output_path
