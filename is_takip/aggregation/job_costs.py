"""
Job cost and profit calculations for the İş Takip project.

A job's cost is what was paid out to personnel (hakediş) plus the materials
consumed; its profit is income minus that cost. Customer figures are sums over
the customer's jobs.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List

from is_takip.models import ZERO, CustomerJob

GENERAL_LOCATION = "Genel İşler"


@dataclass(frozen=True)
class CustomerAggregate:
    income: Decimal
    cost: Decimal
    net_profit: Decimal


def personnel_cost(job: CustomerJob) -> Decimal:
    """Sum of all personnel payment entries on the job."""
    return sum((entry.payment for entry in job.personnel_payments or ()), ZERO)


def material_cost(job: CustomerJob) -> Decimal:
    """Sum of quantity x unit price over the job's materials."""
    return sum((material.cost for material in job.materials or ()), ZERO)


def job_cost(job: CustomerJob) -> Decimal:
    """
    Total cost of a job.

    Args:
        job: Customer job. Missing payment or material collections count as empty.

    Returns:
        Personnel cost plus material cost.
    """
    return personnel_cost(job) + material_cost(job)


def job_profit(job: CustomerJob) -> Decimal:
    """Job income minus job cost. May be negative."""
    return job.income - job_cost(job)


def customer_jobs(customer_id: int, jobs: Iterable[CustomerJob]) -> List[CustomerJob]:
    """The customer's jobs, newest first. Jobs on the same day keep their input order."""
    selected = [job for job in jobs if job.customer_id == customer_id]
    return sorted(selected, key=lambda job: job.date, reverse=True)


def customer_aggregate(customer_id: int, jobs: Iterable[CustomerJob]) -> CustomerAggregate:
    """
    Income, cost and net profit over all jobs of one customer.

    Args:
        customer_id: Customer to aggregate.
        jobs: All customer jobs; jobs of other customers are ignored.

    Returns:
        CustomerAggregate with zero values when the customer has no jobs.
    """
    income = ZERO
    cost = ZERO
    for job in jobs:
        if job.customer_id != customer_id:
            continue
        income += job.income
        cost += job_cost(job)
    return CustomerAggregate(income=income, cost=cost, net_profit=income - cost)


def jobs_by_location(jobs: Iterable[CustomerJob]) -> Dict[str, List[CustomerJob]]:
    """
    Group jobs by their location.

    Groups appear in the order their first job is seen. Jobs without a location
    are grouped under "Genel İşler".
    """
    groups: Dict[str, List[CustomerJob]] = {}
    for job in jobs:
        location = job.location.strip() if job.location else ""
        groups.setdefault(location or GENERAL_LOCATION, []).append(job)
    return groups
