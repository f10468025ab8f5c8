"""Tests for the cash register, shared expenses and the ledger book."""
from datetime import datetime
from decimal import Decimal

from conftest import make_payment
from is_takip.aggregation.cash_register import (
    TYPE_JOB,
    cash_register_transactions,
    filter_by_date_range,
    ledger_summary,
    register_totals,
    shared_expense_balances,
    transaction_types,
)
from is_takip.models import EntryStatus, EntryType, LedgerEntry, Payer, SharedExpense


def _shared(expense_id, amount, payer, status=EntryStatus.PAID, date=datetime(2024, 3, 1)):
    return SharedExpense(id=expense_id, description=f"Gider {expense_id}", amount=Decimal(amount),
                         date=date, payer=payer, status=status)


def test_register_books_jobs_with_material_cost_only(jobs, customers, personnel):
    """A job enters with its income in and only its material cost out."""
    transactions = cash_register_transactions(jobs, customers, [], [], personnel)
    job_entry = next(t for t in transactions if t.id == "job-10")
    assert job_entry.type == TYPE_JOB
    assert job_entry.description == "Yılmaz Apartmanı - Blok A"
    assert job_entry.amount_in == Decimal("1000")
    assert job_entry.amount_out == Decimal("100")


def test_register_only_books_kasa_payments_and_paid_kasa_expenses(jobs, customers, personnel, payments):
    """Payments and shared expenses paid by a partner stay out of the Kasa."""
    shared = [
        _shared(1, "40", Payer.KASA),
        _shared(2, "60", Payer.OMER),
        _shared(3, "80", Payer.KASA, status=EntryStatus.UNPAID),
    ]
    transactions = cash_register_transactions(jobs, customers, shared, payments, personnel)
    ids = [t.id for t in transactions]
    assert "se-1" in ids
    assert "se-2" not in ids and "se-3" not in ids
    assert "ppay-100" in ids and "ppay-101" in ids
    assert "ppay-102" not in ids

    linked = next(t for t in transactions if t.id == "ppay-100")
    assert linked.description == "Personel Ödemesi: Ahmet (Blok A)"


def test_register_is_newest_first_and_filterable(jobs, customers, personnel, payments):
    """Date filtering uses inclusive day bounds."""
    transactions = cash_register_transactions(jobs, customers, [], payments, personnel)
    dates = [t.date for t in transactions]
    assert dates == sorted(dates, reverse=True)

    march = filter_by_date_range(transactions, "2024-03-01", "2024-03-20")
    assert [t.id for t in march] == ["job-11", "ppay-100", "job-10"]

    totals = register_totals(march)
    assert totals["income"] == Decimal("1500")
    assert totals["expense"] == Decimal("400")
    assert totals["net"] == Decimal("1100")
    assert transaction_types(march) == ["Personel Ödemesi", "İş Kaydı"]


def test_shared_expense_balances_split_in_half():
    """Each partner owes half of all paid shared expenses."""
    balances = shared_expense_balances([
        _shared(1, "300", Payer.OMER),
        _shared(2, "100", Payer.BARIS),
        _shared(3, "200", Payer.KASA),
        _shared(4, "999", Payer.OMER, status=EntryStatus.UNPAID),
    ])
    assert balances.omer == Decimal("0")
    assert balances.baris == Decimal("-200")
    assert balances.kasa == Decimal("200")


def test_ledger_summary_sorting_and_totals():
    """Unpaid by due date ascending, paid by paid date descending."""
    def entry(entry_id, entry_type, status, date, due=None, paid=None, amount="10"):
        return LedgerEntry(id=entry_id, date=datetime.fromisoformat(date), description=str(entry_id),
                           amount=Decimal(amount), type=entry_type, status=status,
                           due_date=datetime.fromisoformat(due) if due else None,
                           paid_date=datetime.fromisoformat(paid) if paid else None)

    summary = ledger_summary([
        entry(1, EntryType.INCOME, EntryStatus.UNPAID, "2024-01-01", due="2024-05-01", amount="100"),
        entry(2, EntryType.INCOME, EntryStatus.UNPAID, "2024-02-01", amount="50"),
        entry(3, EntryType.INCOME, EntryStatus.PAID, "2024-01-01", paid="2024-03-01"),
        entry(4, EntryType.INCOME, EntryStatus.PAID, "2024-04-01"),
        entry(5, EntryType.EXPENSE, EntryStatus.UNPAID, "2024-01-01", amount="70"),
    ])
    assert [e.id for e in summary.unpaid_receivables] == [2, 1]
    assert [e.id for e in summary.paid_receivables] == [4, 3]
    assert [e.id for e in summary.unpaid_payables] == [5]
    assert summary.paid_payables == []
    assert summary.total_unpaid_receivable == Decimal("150")
    assert summary.total_unpaid_payable == Decimal("70")


def test_only_job_entries_carry_both_amounts(jobs, customers, personnel, payments):
    """Job entries have income in and material cost out; every other entry has one side."""
    shared = [_shared(1, "400", Payer.KASA)]
    transactions = cash_register_transactions(jobs, customers, shared, payments, personnel)

    for transaction in transactions:
        both = transaction.amount_in is not None and transaction.amount_out is not None
        assert both == (transaction.type == TYPE_JOB)
