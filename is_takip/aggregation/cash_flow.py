"""
Monthly cash-flow calculation for the İş Takip project.

Unifies ad hoc incomes, ad hoc expenses and personnel payments of one calendar
month into a single list of transactions with incoming and outgoing amounts.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, Union

from is_takip.dates import in_month
from is_takip.models import ZERO, Expense, Income, Personnel, PersonnelPayment

logger = logging.getLogger(__name__)

TYPE_INCOME = "Gelir"
TYPE_EXPENSE = "Gider"
TYPE_PERSONNEL_PAYMENT = "Personel Ödemesi"

UNKNOWN_PERSONNEL = "Bilinmeyen Personel"


@dataclass(frozen=True)
class Transaction:
    """
    One cash movement in a common shape.

    Payments and ad hoc entries set one of amount_in and amount_out. Job
    entries in the cash register set both: income in, material cost out.
    """

    id: str
    date: datetime
    type: str
    description: str
    amount_in: Optional[Decimal] = None
    amount_out: Optional[Decimal] = None


@dataclass(frozen=True)
class CashFlowSummary:
    transactions: List[Transaction] = field(default_factory=list)
    total_income: Decimal = ZERO
    total_expense: Decimal = ZERO
    net_flow: Decimal = ZERO


def monthly_cash_flow(
    personnel: Iterable[Personnel],
    payments: Iterable[PersonnelPayment],
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    month: int,
    year: int,
) -> CashFlowSummary:
    """
    Cash flow of one calendar month.

    Args:
        personnel: Roster used to name the payees of personnel payments.
        payments: All personnel payments (outgoing).
        incomes: All ad hoc incomes (incoming).
        expenses: All ad hoc expenses (outgoing).
        month: Calendar month, 1-12.
        year: Calendar year.

    Returns:
        CashFlowSummary with transactions sorted newest first (same-date
        transactions keep incomes, expenses, payments order), total_income,
        total_expense and net_flow = total_income - total_expense.
    """
    names = {person.id: person.name for person in personnel}
    transactions: List[Transaction] = []

    for income in incomes:
        if in_month(income.date, month, year):
            transactions.append(
                Transaction(
                    id=f"inc-{income.id}",
                    date=income.date,
                    type=TYPE_INCOME,
                    description=income.description,
                    amount_in=income.amount,
                )
            )

    for expense in expenses:
        if in_month(expense.date, month, year):
            transactions.append(
                Transaction(
                    id=f"exp-{expense.id}",
                    date=expense.date,
                    type=TYPE_EXPENSE,
                    description=expense.description,
                    amount_out=expense.amount,
                )
            )

    for payment in payments:
        if in_month(payment.date, month, year):
            name = names.get(payment.personnel_id)
            if name is None:
                logger.warning(f"Payment {payment.id} refers to unknown personnel {payment.personnel_id}")
                name = UNKNOWN_PERSONNEL
            transactions.append(
                Transaction(
                    id=f"ppay-{payment.id}",
                    date=payment.date,
                    type=TYPE_PERSONNEL_PAYMENT,
                    description=f"Ödeme: {name}",
                    amount_out=payment.amount,
                )
            )

    total_income, total_expense = totals(transactions)
    return CashFlowSummary(
        transactions=sorted(transactions, key=lambda t: t.date, reverse=True),
        total_income=total_income,
        total_expense=total_expense,
        net_flow=total_income - total_expense,
    )


def totals(transactions: Iterable[Transaction]) -> Tuple[Decimal, Decimal]:
    """Sum of incoming and outgoing amounts, in that order."""
    incoming = ZERO
    outgoing = ZERO
    for transaction in transactions:
        incoming += transaction.amount_in or ZERO
        outgoing += transaction.amount_out or ZERO
    return incoming, outgoing


def monthly_finance_transactions(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
    month: int,
    year: int,
) -> List[Union[Income, Expense]]:
    """Incomes and expenses of the month as one list, newest first."""
    combined: List[Union[Income, Expense]] = [i for i in incomes if in_month(i.date, month, year)]
    combined.extend(e for e in expenses if in_month(e.date, month, year))
    return sorted(combined, key=lambda item: item.date, reverse=True)


def search_transactions(transactions: Iterable, query: str) -> List:
    """Case-insensitive substring filter on the description. Empty query keeps all."""
    transactions = list(transactions)
    if not query:
        return transactions
    needle = query.casefold()
    return [t for t in transactions if needle in t.description.casefold()]
