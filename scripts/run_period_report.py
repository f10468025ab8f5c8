"""
Script to generate the periodic (date range) report from a backend snapshot.

Generates:
1. Overall income, cost, net profit and job count
2. Customer table (sorted by net profit)
3. Personnel table (sorted by earnings)

Output: CSV files
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Union

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from is_takip.aggregation.periodic_report import periodic_report, resolve_date_range
from is_takip.data_loader import load_snapshot
from is_takip.reporting.export import export_periodic_report

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def run_period_report(
    snapshot_path: Union[str, Path],
    output_dir: Union[str, Path],
    period: str = "default",
    today: Optional[date] = None,
):
    """
    Load a snapshot, build the report for a named period and export it.

    Args:
        snapshot_path: JSON snapshot of the backend collections.
        output_dir: Directory for the CSV files.
        period: "this_month", "last_month", "this_year" or "default".
        today: Reference day for the period. Defaults to today.

    Returns:
        The PeriodicReport that was exported.
    """
    start, end = resolve_date_range(period, today)
    snapshot = load_snapshot(snapshot_path)

    logger.info("=" * 80)
    logger.info("İŞ TAKİP - PERIODIC REPORT")
    logger.info("=" * 80)
    logger.info(f"Snapshot: {snapshot_path}")
    logger.info(f"Period: {period} ({start} - {end})")

    report = periodic_report(
        snapshot.customer_jobs,
        snapshot.customers,
        snapshot.personnel,
        start,
        end,
    )
    paths = export_periodic_report(report, output_dir)

    logger.info("")
    logger.info(f"[SUMMARY] Jobs: {report.job_count}")
    logger.info(f"  Total income: {report.total_income:.2f}")
    logger.info(f"  Total cost: {report.total_cost:.2f}")
    logger.info(f"  Net profit: {report.net_profit:.2f}")
    logger.info(f"  Customers: {len(report.customer_data)}  Personnel: {len(report.personnel_data)}")
    for name, path in paths.items():
        logger.info(f"Saved {name}: {path}")
    logger.info("=" * 80)

    return report


if __name__ == "__main__":
    period = sys.argv[1] if len(sys.argv) > 1 else "default"
    run_period_report(
        snapshot_path="data/snapshot.json",
        output_dir="data/reports",
        period=period,
    )
