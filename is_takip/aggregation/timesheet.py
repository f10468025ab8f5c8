"""
Monthly timesheet (puantaj) for the İş Takip project.

Rolls the attendance days of one calendar month up per person: days worked,
hours and wage earnings. A day without recorded hours counts as a full
8-hour day.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List

from is_takip.dates import in_month
from is_takip.models import ZERO, Personnel, WorkDay

logger = logging.getLogger(__name__)

DEFAULT_WORK_HOURS = Decimal("8")


@dataclass(frozen=True)
class TimesheetRow:
    personnel_id: int
    name: str
    total_days: int
    total_hours: Decimal
    total_earnings: Decimal
    work_days: List[WorkDay] = field(default_factory=list)


def work_hours(day: WorkDay) -> Decimal:
    return day.hours or DEFAULT_WORK_HOURS


def monthly_timesheet(
    personnel: Iterable[Personnel],
    work_days: Iterable[WorkDay],
    month: int,
    year: int,
) -> List[TimesheetRow]:
    """
    Timesheet of one calendar month.

    Args:
        personnel: Roster; rows follow its order.
        work_days: All attendance days.
        month: Calendar month, 1-12.
        year: Calendar year.

    Returns:
        One TimesheetRow per person with at least one day in the month. Each
        row lists its days oldest first. Days of people missing from the
        roster are left out.
    """
    monthly = [day for day in work_days if in_month(day.date, month, year)]

    rows = []
    for person in personnel:
        days = sorted(
            (day for day in monthly if day.personnel_id == person.id),
            key=lambda day: day.date,
        )
        if not days:
            continue
        rows.append(
            TimesheetRow(
                personnel_id=person.id,
                name=person.name,
                total_days=len(days),
                total_hours=sum((work_hours(day) for day in days), ZERO),
                total_earnings=sum((day.wage for day in days), ZERO),
                work_days=days,
            )
        )

    logger.info(f"Timesheet {year}-{month:02d}: {len(rows)} personnel, {len(monthly)} work days")
    return rows


def monthly_wage_total(
    personnel: Iterable[Personnel],
    work_days: Iterable[WorkDay],
    month: int,
    year: int,
) -> Decimal:
    """Total wages of the month's work days, counting only people in the roster."""
    known = {person.id for person in personnel}
    total = ZERO
    for day in work_days:
        if not in_month(day.date, month, year):
            continue
        if day.personnel_id not in known:
            logger.debug(f"Work day {day.id} refers to unknown personnel {day.personnel_id}")
            continue
        total += day.wage
    return total
