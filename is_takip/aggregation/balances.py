"""
Personnel balance calculations for the İş Takip project.

A person's balance is what they earned on jobs (hakediş) minus what has been
paid to them. A payment may be linked to one job through ``customer_job_id``;
the per-job balance uses only those linked payments.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from is_takip.dates import DateLike, in_range
from is_takip.models import ZERO, CustomerJob, Personnel, PersonnelPayment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonnelStatement:
    """Account statement of one person, as shown on the personnel detail page."""

    personnel_id: int
    total_due: Decimal
    total_paid: Decimal
    balance: Decimal
    open_jobs: List[CustomerJob] = field(default_factory=list)
    payments: List[PersonnelPayment] = field(default_factory=list)


def personnel_earning(personnel_id: int, job: CustomerJob) -> Decimal:
    """
    What the person earned on a single job.

    Returns 0 when the person is not assigned to the job or has no payment entry.
    """
    if personnel_id not in job.personnel_ids:
        return ZERO
    entry = job.payment_for(personnel_id)
    if entry is None:
        logger.debug(f"Personnel {personnel_id} assigned to job {job.id} without a payment entry")
        return ZERO
    return entry.payment


def total_earnings(personnel_id: int, jobs: Iterable[CustomerJob]) -> Decimal:
    return sum((personnel_earning(personnel_id, job) for job in jobs), ZERO)


def total_paid(personnel_id: int, payments: Iterable[PersonnelPayment]) -> Decimal:
    return sum(
        (payment.amount for payment in payments if payment.personnel_id == personnel_id),
        ZERO,
    )


def personnel_balance(
    personnel_id: int,
    jobs: Iterable[CustomerJob],
    payments: Iterable[PersonnelPayment],
) -> Decimal:
    """
    Outstanding balance of a person.

    Args:
        personnel_id: Person to compute the balance for.
        jobs: All customer jobs.
        payments: All personnel payments.

    Returns:
        Total earnings minus total paid. Positive means the company still owes
        the person; negative means the person was overpaid.
    """
    return total_earnings(personnel_id, jobs) - total_paid(personnel_id, payments)


def job_balance(
    personnel_id: int,
    job: CustomerJob,
    payments: Iterable[PersonnelPayment],
) -> Decimal:
    """The person's earning on the job minus payments linked to that job."""
    paid = sum(
        (
            payment.amount
            for payment in payments
            if payment.personnel_id == personnel_id and payment.customer_job_id == job.id
        ),
        ZERO,
    )
    return personnel_earning(personnel_id, job) - paid


def personnel_balance_map(
    personnel: Iterable[Personnel],
    jobs: Iterable[CustomerJob],
    payments: Iterable[PersonnelPayment],
) -> Dict[int, Decimal]:
    """Balance of every person in the roster, keyed by personnel id."""
    jobs = list(jobs)
    payments = list(payments)
    return {person.id: personnel_balance(person.id, jobs, payments) for person in personnel}


def personnel_statement(
    personnel_id: int,
    jobs: Iterable[CustomerJob],
    payments: Iterable[PersonnelPayment],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> PersonnelStatement:
    """
    Build the account statement of one person.

    Totals and balance always cover the full history. The date range only
    narrows the listed open jobs and payments.

    Args:
        personnel_id: Person to report on.
        jobs: All customer jobs.
        payments: All personnel payments.
        start: Optional first day (inclusive) for the listed jobs and payments.
        end: Optional last day (inclusive) for the listed jobs and payments.

    Returns:
        PersonnelStatement whose open_jobs are the person's jobs in range with a
        non-zero job balance, and whose payments are the person's payments in
        range, both newest first.
    """
    own_jobs = [job for job in jobs if personnel_id in job.personnel_ids]
    own_payments = [payment for payment in payments if payment.personnel_id == personnel_id]

    due = total_earnings(personnel_id, own_jobs)
    paid = total_paid(personnel_id, own_payments)

    open_jobs = [
        job
        for job in own_jobs
        if in_range(job.date, start, end) and job_balance(personnel_id, job, own_payments) != 0
    ]
    listed_payments = [payment for payment in own_payments if in_range(payment.date, start, end)]

    return PersonnelStatement(
        personnel_id=personnel_id,
        total_due=due,
        total_paid=paid,
        balance=due - paid,
        open_jobs=_newest_first(open_jobs),
        payments=_newest_first(listed_payments),
    )


def _newest_first(items: List) -> List:
    return sorted(items, key=lambda item: item.date, reverse=True)
