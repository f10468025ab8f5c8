"""Tests for the monthly timesheet (puantaj)."""
from datetime import datetime
from decimal import Decimal

from is_takip.aggregation.timesheet import (
    DEFAULT_WORK_HOURS,
    monthly_timesheet,
    monthly_wage_total,
)
from is_takip.models import WorkDay


def _day(day_id, personnel_id, date, wage, hours=None):
    return WorkDay(
        id=day_id,
        personnel_id=personnel_id,
        date=datetime.fromisoformat(date),
        location="Blok A",
        job_description="Sıva",
        wage=Decimal(wage),
        hours=None if hours is None else Decimal(hours),
    )


WORK_DAYS = [
    _day(1, 1, "2024-03-12", "1200"),
    _day(2, 1, "2024-03-04", "1200", hours="6"),
    _day(3, 2, "2024-03-05", "900"),
    _day(4, 2, "2024-04-01", "900"),
    _day(5, 99, "2024-03-06", "700"),
]


def test_monthly_timesheet_rolls_up_per_person(personnel):
    """Days, hours (8 by default) and earnings are summed per person in roster order."""
    rows = monthly_timesheet(personnel, WORK_DAYS, 3, 2024)

    assert [row.name for row in rows] == ["Ahmet", "Mehmet"]
    ahmet, mehmet = rows
    assert ahmet.total_days == 2
    assert ahmet.total_hours == Decimal("14")
    assert ahmet.total_earnings == Decimal("2400")
    assert [day.id for day in ahmet.work_days] == [2, 1]
    assert mehmet.total_days == 1
    assert mehmet.total_hours == DEFAULT_WORK_HOURS
    assert mehmet.total_earnings == Decimal("900")


def test_people_without_days_and_unknown_people_are_left_out(personnel):
    rows = monthly_timesheet(personnel, WORK_DAYS, 4, 2024)
    assert [(row.personnel_id, row.total_days) for row in rows] == [(2, 1)]
    assert monthly_timesheet(personnel, [], 3, 2024) == []


def test_monthly_wage_total_counts_known_personnel_only(personnel):
    """The unknown person's 700 stays out of the March total."""
    assert monthly_wage_total(personnel, WORK_DAYS, 3, 2024) == Decimal("3300")
    assert monthly_wage_total(personnel, WORK_DAYS, 5, 2024) == Decimal("0")
