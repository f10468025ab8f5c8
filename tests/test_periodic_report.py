"""Tests for the periodic report."""
from datetime import date
from decimal import Decimal

import pytest

from conftest import make_job
from is_takip.aggregation.periodic_report import (
    PeriodicReportBuilder,
    periodic_report,
    profit_margin,
    resolve_date_range,
)
from is_takip.models import Customer, Personnel


def test_report_totals_for_march(jobs, customers, personnel):
    """Only March jobs count; totals are summed over them."""
    report = periodic_report(jobs, customers, personnel, "2024-03-01", "2024-03-31")
    assert report.job_count == 2
    assert report.total_income == Decimal("1500")
    assert report.total_cost == Decimal("750")
    assert report.net_profit == Decimal("750")


def test_range_is_inclusive_of_whole_end_day(customers, personnel):
    """A job late on the end day is inside; one on the next day is not."""
    jobs = [
        make_job(1, date="2024-03-31T23:30:00", income="100"),
        make_job(2, date="2024-04-01T00:00:00", income="100"),
        make_job(3, date="2024-03-01T00:00:00", income="100"),
    ]
    report = periodic_report(jobs, customers, personnel, "2024-03-01", "2024-03-31")
    assert report.job_count == 2


def test_customer_rows_sorted_by_net_profit(jobs, customers, personnel):
    """Customers without jobs in range get no row."""
    report = periodic_report(jobs, customers, personnel, "2024-01-01", "2024-12-31")
    assert [row.name for row in report.customer_data] == ["Kaya İnşaat", "Yılmaz Apartmanı"]

    kaya = report.customer_data[0]
    assert kaya.job_count == 1
    assert kaya.income == Decimal("2000")
    assert kaya.cost == Decimal("900")
    assert kaya.net_profit == Decimal("1100")
    assert kaya.profit_margin == Decimal("55")


def test_personnel_rows_sorted_by_earnings(jobs, customers, personnel):
    """Personnel rows count assigned jobs and sum earnings."""
    report = periodic_report(jobs, customers, personnel, "2024-01-01", "2024-12-31")
    rows = [(row.name, row.job_count, row.earnings) for row in report.personnel_data]
    assert rows == [("Mehmet", 2, Decimal("800")), ("Ahmet", 2, Decimal("450"))]


def test_unknown_customer_counts_in_totals_only(personnel):
    """Jobs of a customer outside the roster add to totals but produce no row."""
    jobs = [make_job(1, customer_id=77, income="300")]
    report = periodic_report(jobs, [Customer(id=1, name="A")], personnel, "2024-03-01", "2024-03-31")
    assert report.total_income == Decimal("300")
    assert report.customer_data == []


@pytest.mark.parametrize("cost", ["0", "100", "-5"])
def test_profit_margin_is_zero_without_income(cost):
    """Zero income gives a zero margin for any cost."""
    assert profit_margin(Decimal("0"), Decimal(cost)) == 0


def test_zero_income_customer_row_has_zero_margin(personnel):
    """A customer whose jobs brought no income still gets a finite margin."""
    jobs = [make_job(1, customer_id=1, income="0", payments=[(1, "50")])]
    report = periodic_report(jobs, [Customer(id=1, name="A")], personnel, "2024-03-01", "2024-03-31")
    row = report.customer_data[0]
    assert row.profit_margin == 0
    assert row.net_profit == Decimal("-50")


def test_empty_report():
    """No jobs gives an all-zero report."""
    report = PeriodicReportBuilder(customers=[], personnel=[]).build([], "2024-01-01", "2024-01-31")
    assert (report.total_income, report.total_cost, report.net_profit, report.job_count) == (0, 0, 0, 0)
    assert report.customer_data == [] and report.personnel_data == []


def test_personnel_outside_roster_is_skipped(customers):
    """Only roster personnel get rows."""
    jobs = [make_job(1, income="100", payments=[(9, "40")])]
    report = periodic_report(jobs, customers, [Personnel(id=1, name="Ahmet")], "2024-03-01", "2024-03-31")
    assert report.personnel_data == []


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this_month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last_month", (date(2024, 1, 1), date(2024, 1, 31))),
        ("this_year", (date(2024, 1, 1), date(2024, 2, 14))),
        ("default", (date(2023, 1, 1), date(2024, 2, 29))),
    ],
)
def test_resolve_date_range(period, expected):
    """Named periods resolve against the reference day."""
    assert resolve_date_range(period, today=date(2024, 2, 14)) == expected


def test_resolve_date_range_rejects_unknown_period():
    with pytest.raises(ValueError):
        resolve_date_range("next_decade", today=date(2024, 2, 14))
