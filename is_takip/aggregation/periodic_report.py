"""
Periodic report module for the İş Takip project.

Summarizes the jobs of a date range: overall income, cost and net profit,
one row per customer (with profit margin) and one row per person (with
earnings).
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from is_takip.aggregation.job_costs import job_cost
from is_takip.dates import DateLike, in_range, resolve_date_range
from is_takip.models import ZERO, Customer, CustomerJob, Personnel

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")

__all__ = [
    "CustomerReportRow",
    "PersonnelReportRow",
    "PeriodicReport",
    "PeriodicReportBuilder",
    "periodic_report",
    "profit_margin",
    "resolve_date_range",
]


@dataclass(frozen=True)
class CustomerReportRow:
    customer_id: int
    name: str
    job_count: int
    income: Decimal
    cost: Decimal
    net_profit: Decimal
    profit_margin: Decimal


@dataclass(frozen=True)
class PersonnelReportRow:
    personnel_id: int
    name: str
    job_count: int
    earnings: Decimal


@dataclass(frozen=True)
class PeriodicReport:
    total_income: Decimal = ZERO
    total_cost: Decimal = ZERO
    net_profit: Decimal = ZERO
    job_count: int = 0
    customer_data: List[CustomerReportRow] = field(default_factory=list)
    personnel_data: List[PersonnelReportRow] = field(default_factory=list)


def profit_margin(income: Decimal, cost: Decimal) -> Decimal:
    """Net profit as a percentage of income. Exactly 0 when income is 0."""
    if income == 0:
        return ZERO
    return (income - cost) / income * HUNDRED


class PeriodicReportBuilder:
    """
    Builds periodic reports over a fixed roster of customers and personnel.

    Jobs whose customer or personnel are not in the roster still count toward
    the overall totals but produce no report row.
    """

    def __init__(
        self,
        customers: Iterable[Customer],
        personnel: Iterable[Personnel],
    ) -> None:
        """
        Initialize the report builder.

        Args:
            customers: Customers that get a row in the customer table.
            personnel: Personnel that get a row in the personnel table.
        """
        self.customers = list(customers)
        self.personnel = list(personnel)

    def build(
        self,
        jobs: Iterable[CustomerJob],
        start: DateLike,
        end: DateLike,
    ) -> PeriodicReport:
        """
        Build the report for jobs dated within [start 00:00:00, end 23:59:59].

        Args:
            jobs: All customer jobs; jobs outside the range are ignored.
            start: First day of the range (inclusive).
            end: Last day of the range (inclusive).

        Returns:
            PeriodicReport. Customer rows are sorted by net profit descending,
            personnel rows by earnings descending; rows with no jobs in range
            are left out.
        """
        jobs_in_range = [job for job in jobs if in_range(job.date, start, end)]
        logger.info(f"Building periodic report for {start} - {end}: {len(jobs_in_range)} jobs in range")

        customer_totals: Dict[int, Dict] = {
            c.id: {"name": c.name, "job_count": 0, "income": ZERO, "cost": ZERO}
            for c in self.customers
        }
        personnel_totals: Dict[int, Dict] = {
            p.id: {"name": p.name, "job_count": 0, "earnings": ZERO}
            for p in self.personnel
        }

        total_income = ZERO
        total_cost = ZERO
        for job in jobs_in_range:
            cost = job_cost(job)
            total_income += job.income
            total_cost += cost

            row = customer_totals.get(job.customer_id)
            if row is not None:
                row["job_count"] += 1
                row["income"] += job.income
                row["cost"] += cost

            for personnel_id in job.personnel_ids:
                person_row = personnel_totals.get(personnel_id)
                if person_row is None:
                    continue
                person_row["job_count"] += 1
                entry = job.payment_for(personnel_id)
                if entry is not None:
                    person_row["earnings"] += entry.payment

        customer_data = [
            CustomerReportRow(
                customer_id=customer_id,
                name=row["name"],
                job_count=row["job_count"],
                income=row["income"],
                cost=row["cost"],
                net_profit=row["income"] - row["cost"],
                profit_margin=profit_margin(row["income"], row["cost"]),
            )
            for customer_id, row in customer_totals.items()
            if row["job_count"] > 0
        ]
        customer_data.sort(key=lambda r: r.net_profit, reverse=True)

        personnel_data = [
            PersonnelReportRow(
                personnel_id=personnel_id,
                name=row["name"],
                job_count=row["job_count"],
                earnings=row["earnings"],
            )
            for personnel_id, row in personnel_totals.items()
            if row["job_count"] > 0
        ]
        personnel_data.sort(key=lambda r: r.earnings, reverse=True)

        return PeriodicReport(
            total_income=total_income,
            total_cost=total_cost,
            net_profit=total_income - total_cost,
            job_count=len(jobs_in_range),
            customer_data=customer_data,
            personnel_data=personnel_data,
        )


def periodic_report(
    jobs: Iterable[CustomerJob],
    customers: Iterable[Customer],
    personnel: Iterable[Personnel],
    start: DateLike,
    end: DateLike,
) -> PeriodicReport:
    """
    Wrapper function to quickly build a periodic report.

    Example:
        >>> report = periodic_report(jobs, customers, personnel, "2024-03-01", "2024-03-31")
        >>> print(f"Net profit: {report.net_profit}")
    """
    return PeriodicReportBuilder(customers=customers, personnel=personnel).build(jobs, start, end)
