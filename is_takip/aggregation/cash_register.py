"""
Cash register (Kasa) views for the İş Takip project.

Three related summaries:

- The main cash register: every job as one entry (income in, material cost
  out), plus paid shared expenses and personnel payments made from the Kasa.
  Personnel cost of a job is not booked here; it only shows up once a real
  payment is made.
- Shared expense balances between the two partners (Ortak Kasa).
- The ledger book (Defter) of receivables and payables.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional

from is_takip.aggregation.cash_flow import Transaction, totals
from is_takip.aggregation.job_costs import material_cost
from is_takip.dates import DateLike, in_range
from is_takip.models import (
    ZERO,
    Customer,
    CustomerJob,
    EntryStatus,
    EntryType,
    LedgerEntry,
    Payer,
    Personnel,
    PersonnelPayment,
    SharedExpense,
)

TYPE_JOB = "İş Kaydı"
TYPE_SHARED_EXPENSE = "Ortak Gider"
TYPE_PERSONNEL_PAYMENT = "Personel Ödemesi"

UNKNOWN_CUSTOMER = "Bilinmeyen Müşteri"
UNKNOWN_PERSON = "Bilinmeyen"


@dataclass(frozen=True)
class SharedExpenseBalances:
    """Positive partner balance: paid more than their half."""

    omer: Decimal
    baris: Decimal
    kasa: Decimal


@dataclass(frozen=True)
class LedgerSummary:
    unpaid_receivables: List[LedgerEntry] = field(default_factory=list)
    paid_receivables: List[LedgerEntry] = field(default_factory=list)
    unpaid_payables: List[LedgerEntry] = field(default_factory=list)
    paid_payables: List[LedgerEntry] = field(default_factory=list)
    total_unpaid_receivable: Decimal = ZERO
    total_unpaid_payable: Decimal = ZERO


def cash_register_transactions(
    jobs: Iterable[CustomerJob],
    customers: Iterable[Customer],
    shared_expenses: Iterable[SharedExpense],
    payments: Iterable[PersonnelPayment],
    personnel: Iterable[Personnel],
) -> List[Transaction]:
    """
    All movements of the main cash register, newest first.

    Args:
        jobs: All customer jobs. Each contributes one entry.
        customers: Used to describe job entries.
        shared_expenses: Only paid ones with payer Kasa are booked.
        payments: Only personnel payments with payer Kasa are booked.
        personnel: Used to describe payment entries.

    Returns:
        List of Transaction sorted by date descending, stable on ties.
    """
    jobs = list(jobs)
    customer_names = {customer.id: customer.name for customer in customers}
    person_names = {person.id: person.name for person in personnel}
    jobs_by_id = {job.id: job for job in jobs}

    transactions: List[Transaction] = []
    for job in jobs:
        customer_name = customer_names.get(job.customer_id, UNKNOWN_CUSTOMER)
        transactions.append(
            Transaction(
                id=f"job-{job.id}",
                date=job.date,
                type=TYPE_JOB,
                description=f"{customer_name} - {job.location}",
                amount_in=job.income,
                amount_out=material_cost(job),
            )
        )

    for expense in shared_expenses:
        if expense.status != EntryStatus.PAID or expense.payer != Payer.KASA:
            continue
        transactions.append(
            Transaction(
                id=f"se-{expense.id}",
                date=expense.date,
                type=TYPE_SHARED_EXPENSE,
                description=expense.description,
                amount_out=expense.amount,
            )
        )

    for payment in payments:
        if payment.payer != Payer.KASA:
            continue
        description = f"Personel Ödemesi: {person_names.get(payment.personnel_id, UNKNOWN_PERSON)}"
        job = jobs_by_id.get(payment.customer_job_id) if payment.customer_job_id else None
        if job is not None:
            description += f" ({job.location})"
        transactions.append(
            Transaction(
                id=f"ppay-{payment.id}",
                date=payment.date,
                type=TYPE_PERSONNEL_PAYMENT,
                description=description,
                amount_out=payment.amount,
            )
        )

    return sorted(transactions, key=lambda t: t.date, reverse=True)


def filter_by_date_range(
    transactions: Iterable[Transaction],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[Transaction]:
    """Transactions within [start 00:00, end 23:59:59.999999]. Missing bounds are open."""
    return [t for t in transactions if in_range(t.date, start, end)]


def transaction_types(transactions: Iterable[Transaction]) -> List[str]:
    """Distinct transaction types, alphabetically."""
    return sorted({t.type for t in transactions})


def register_totals(transactions: Iterable[Transaction]) -> dict:
    incoming, outgoing = totals(transactions)
    return {"income": incoming, "expense": outgoing, "net": incoming - outgoing}


def shared_expense_balances(shared_expenses: Iterable[SharedExpense]) -> SharedExpenseBalances:
    """
    Split paid shared expenses between the two partners.

    Each partner owes half of everything paid (including what the Kasa paid);
    their balance is what they paid minus that half.
    """
    paid_by = {payer: ZERO for payer in Payer}
    for expense in shared_expenses:
        if expense.status == EntryStatus.PAID:
            paid_by[expense.payer] += expense.amount

    share = sum(paid_by.values(), ZERO) / 2
    return SharedExpenseBalances(
        omer=paid_by[Payer.OMER] - share,
        baris=paid_by[Payer.BARIS] - share,
        kasa=paid_by[Payer.KASA],
    )


def ledger_summary(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    """
    Group ledger entries by direction and status.

    Unpaid entries are sorted by due date (falling back to the entry date),
    earliest first. Paid entries are sorted by paid date (falling back to the
    entry date), latest first.
    """
    entries = list(entries)

    def unpaid(entry_type: EntryType) -> List[LedgerEntry]:
        selected = [e for e in entries if e.type == entry_type and e.status == EntryStatus.UNPAID]
        return sorted(selected, key=lambda e: e.due_date or e.date)

    def paid(entry_type: EntryType) -> List[LedgerEntry]:
        selected = [e for e in entries if e.type == entry_type and e.status == EntryStatus.PAID]
        return sorted(selected, key=lambda e: e.paid_date or e.date, reverse=True)

    unpaid_receivables = unpaid(EntryType.INCOME)
    unpaid_payables = unpaid(EntryType.EXPENSE)
    return LedgerSummary(
        unpaid_receivables=unpaid_receivables,
        paid_receivables=paid(EntryType.INCOME),
        unpaid_payables=unpaid_payables,
        paid_payables=paid(EntryType.EXPENSE),
        total_unpaid_receivable=sum((e.amount for e in unpaid_receivables), ZERO),
        total_unpaid_payable=sum((e.amount for e in unpaid_payables), ZERO),
    )
