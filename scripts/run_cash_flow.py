"""
Script to generate the monthly cash-flow statement from a backend snapshot.

Usage: python scripts/run_cash_flow.py [YEAR MONTH]
Defaults to the current month.

Output: CSV file (one row per transaction)
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Union

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from is_takip.aggregation.cash_flow import monthly_cash_flow
from is_takip.data_loader import load_snapshot
from is_takip.reporting.export import export_cash_flow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def run_cash_flow(
    snapshot_path: Union[str, Path],
    output_dir: Union[str, Path],
    year: int,
    month: int,
):
    """
    Build and export the cash flow of one month.

    Returns:
        The CashFlowSummary that was exported.
    """
    snapshot = load_snapshot(snapshot_path)
    summary = monthly_cash_flow(
        snapshot.personnel,
        snapshot.personnel_payments,
        snapshot.incomes,
        snapshot.expenses,
        month=month,
        year=year,
    )
    output_path = Path(output_dir) / f"cash_flow_{year}_{month:02d}.csv"
    export_cash_flow(summary, output_path)

    logger.info("=" * 60)
    logger.info(f"CASH FLOW {year}-{month:02d}")
    logger.info("=" * 60)
    logger.info(f"Transactions: {len(summary.transactions)}")
    logger.info(f"  Total income: {summary.total_income:.2f}")
    logger.info(f"  Total expense: {summary.total_expense:.2f}")
    logger.info(f"  Net flow: {summary.net_flow:.2f}")
    logger.info("=" * 60)

    return summary


if __name__ == "__main__":
    today = date.today()
    if len(sys.argv) >= 3:
        year, month = int(sys.argv[1]), int(sys.argv[2])
    else:
        year, month = today.year, today.month
    run_cash_flow(
        snapshot_path="data/snapshot.json",
        output_dir="data/reports",
        year=year,
        month=month,
    )
