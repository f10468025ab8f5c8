"""
Domain model for the İş Takip project.

Typed, immutable records for personnel, customers, customer jobs, payments,
attendance days and ad hoc cash movements. Each record can be built from the
camelCase JSON the backend API returns via ``from_dict``; construction is
lenient about missing optional fields so that aggregation never has to guard
against them.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from is_takip.dates import parse_date

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class Payer(str, Enum):
    """Who paid: one of the two partners or the company cash register."""

    OMER = "Ömer"
    BARIS = "Barış"
    KASA = "Kasa"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    CARD = "card"


class IncomePaymentMethod(str, Enum):
    TRY = "TRY"
    USD = "USD"
    EUR = "EUR"
    GOLD = "GOLD"


class GoldType(str, Enum):
    GRAM = "gram"
    QUARTER = "quarter"
    FULL = "full"


class EntryType(str, Enum):
    """Ledger entry direction: income is a receivable, expense is a payable."""

    INCOME = "income"
    EXPENSE = "expense"


class EntryStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


def to_amount(value: Any) -> Decimal:
    """
    Convert a JSON amount (int, float, str or None) to Decimal.

    Floats go through ``str`` so that 0.1 stays 0.1. Missing or unparseable
    values count as 0.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning(f"Unparseable amount {value!r}, using 0")
        return ZERO


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _enum_or_default(enum_cls, value: Any, default):
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(f"Unknown {enum_cls.__name__} value {value!r}, using {default}")
        return default


@dataclass(frozen=True)
class PersonnelNote:
    text: str
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Personnel:
    id: int
    name: str
    note: Optional[PersonnelNote] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError(f"Personnel {self.id} must have a non-empty name")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Personnel":
        note = None
        if data.get("note"):
            updated = data.get("noteUpdatedAt")
            note = PersonnelNote(
                text=data["note"],
                updated_at=parse_date(updated) if updated else None,
            )
        return cls(id=int(data["id"]), name=data.get("name", ""), note=note)


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    contact_info: str = ""
    address: str = ""
    job_description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Customer":
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            contact_info=data.get("contactInfo") or "",
            address=data.get("address") or "",
            job_description=data.get("jobDescription") or "",
        )


@dataclass(frozen=True)
class Material:
    name: str
    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO
    unit: str = ""
    id: Optional[int] = None

    @property
    def cost(self) -> Decimal:
        return self.quantity * self.unit_price

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Material":
        return cls(
            id=_optional_int(data.get("id")),
            name=data.get("name") or "",
            unit=data.get("unit") or "",
            quantity=to_amount(data.get("quantity")),
            unit_price=to_amount(data.get("unitPrice")),
        )


@dataclass(frozen=True)
class JobPersonnelPayment:
    """Earning (hakediş) of one assigned person on one job."""

    personnel_id: int
    payment: Decimal = ZERO
    payment_method: PaymentMethod = PaymentMethod.CASH
    days_worked: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobPersonnelPayment":
        return cls(
            personnel_id=int(data["personnelId"]),
            payment=to_amount(data.get("payment")),
            payment_method=_enum_or_default(
                PaymentMethod, data.get("paymentMethod"), PaymentMethod.CASH
            ),
            days_worked=int(data.get("daysWorked") or 0),
        )


@dataclass(frozen=True)
class CustomerJob:
    id: int
    customer_id: int
    date: datetime
    location: str = ""
    description: str = ""
    income: Decimal = ZERO
    income_payment_method: IncomePaymentMethod = IncomePaymentMethod.TRY
    income_gold_type: Optional[GoldType] = None
    personnel_ids: Tuple[int, ...] = ()
    personnel_payments: Tuple[JobPersonnelPayment, ...] = ()
    materials: Tuple[Material, ...] = ()
    # Recorded with the job but not part of job_cost; reports leave it out.
    other_expenses: Decimal = ZERO

    def payment_for(self, personnel_id: int) -> Optional[JobPersonnelPayment]:
        """Return the person's payment entry on this job, or None."""
        for entry in self.personnel_payments:
            if entry.personnel_id == personnel_id:
                return entry
        return None

    def validate(self) -> List[str]:
        """
        Check the job's internal invariants.

        Returns:
            List of human-readable problems. Empty when the job is consistent.
            Problems are reported, never raised; aggregation tolerates them.
        """
        problems = []
        assigned = set(self.personnel_ids)
        for entry in self.personnel_payments:
            if entry.personnel_id not in assigned:
                problems.append(
                    f"Job {self.id}: payment entry for personnel {entry.personnel_id} "
                    f"who is not assigned to the job"
                )
        if self.income_gold_type is not None and self.income_payment_method != IncomePaymentMethod.GOLD:
            problems.append(f"Job {self.id}: gold type set on a non-gold income")
        return problems

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomerJob":
        method = _enum_or_default(
            IncomePaymentMethod, data.get("incomePaymentMethod"), IncomePaymentMethod.TRY
        )
        gold_type = None
        if method == IncomePaymentMethod.GOLD:
            gold_type = _enum_or_default(GoldType, data.get("incomeGoldType"), None)
        return cls(
            id=int(data["id"]),
            customer_id=int(data["customerId"]),
            date=parse_date(data["date"]),
            location=data.get("location") or "",
            description=data.get("description") or "",
            income=to_amount(data.get("income")),
            income_payment_method=method,
            income_gold_type=gold_type,
            personnel_ids=tuple(int(pid) for pid in data.get("personnelIds") or ()),
            personnel_payments=tuple(
                JobPersonnelPayment.from_dict(p) for p in data.get("personnelPayments") or ()
            ),
            materials=tuple(Material.from_dict(m) for m in data.get("materials") or ()),
            other_expenses=to_amount(data.get("otherExpenses")),
        )


@dataclass(frozen=True)
class PersonnelPayment:
    id: int
    personnel_id: int
    amount: Decimal
    date: datetime
    payer: Payer = Payer.KASA
    payment_method: PaymentMethod = PaymentMethod.CASH
    customer_job_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonnelPayment":
        return cls(
            id=int(data["id"]),
            personnel_id=int(data["personnelId"]),
            amount=to_amount(data.get("amount")),
            date=parse_date(data["date"]),
            payer=_enum_or_default(Payer, data.get("payer"), Payer.KASA),
            payment_method=_enum_or_default(
                PaymentMethod, data.get("paymentMethod"), PaymentMethod.CASH
            ),
            customer_job_id=_optional_int(data.get("customerJobId")),
        )


@dataclass(frozen=True)
class Income:
    id: int
    description: str
    amount: Decimal
    date: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Income":
        return cls(
            id=int(data["id"]),
            description=data.get("description") or "",
            amount=to_amount(data.get("amount")),
            date=parse_date(data["date"]),
        )


@dataclass(frozen=True)
class Expense:
    id: int
    description: str
    amount: Decimal
    date: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        return cls(
            id=int(data["id"]),
            description=data.get("description") or "",
            amount=to_amount(data.get("amount")),
            date=parse_date(data["date"]),
        )


@dataclass(frozen=True)
class SharedExpense:
    """Expense shared between the partners (Ortak Kasa)."""

    id: int
    description: str
    amount: Decimal
    date: datetime
    payer: Payer = Payer.KASA
    payment_method: PaymentMethod = PaymentMethod.CASH
    status: EntryStatus = EntryStatus.UNPAID

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SharedExpense":
        return cls(
            id=int(data["id"]),
            description=data.get("description") or "",
            amount=to_amount(data.get("amount")),
            date=parse_date(data["date"]),
            payer=_enum_or_default(Payer, data.get("payer"), Payer.KASA),
            payment_method=_enum_or_default(
                PaymentMethod, data.get("paymentMethod"), PaymentMethod.CASH
            ),
            status=_enum_or_default(EntryStatus, data.get("status"), EntryStatus.UNPAID),
        )


@dataclass(frozen=True)
class LedgerEntry:
    """Receivable or payable noted in the ledger book (Defter)."""

    id: int
    date: datetime
    description: str
    amount: Decimal
    type: EntryType
    status: EntryStatus = EntryStatus.UNPAID
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LedgerEntry":
        return cls(
            id=int(data["id"]),
            date=parse_date(data["date"]),
            description=data.get("description") or "",
            amount=to_amount(data.get("amount")),
            type=EntryType(data["type"]),
            status=_enum_or_default(EntryStatus, data.get("status"), EntryStatus.UNPAID),
            due_date=parse_date(data["dueDate"]) if data.get("dueDate") else None,
            paid_date=parse_date(data["paidDate"]) if data.get("paidDate") else None,
            notes=data.get("notes") or "",
        )


@dataclass(frozen=True)
class WorkDay:
    """One attendance day of a person (puantaj) with the daily wage."""

    id: int
    personnel_id: int
    date: datetime
    location: str = ""
    job_description: str = ""
    wage: Decimal = ZERO
    hours: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkDay":
        hours = data.get("hours")
        return cls(
            id=int(data["id"]),
            personnel_id=int(data["personnelId"]),
            date=parse_date(data["date"]),
            location=data.get("location") or "",
            job_description=data.get("jobDescription") or "",
            wage=to_amount(data.get("wage")),
            hours=to_amount(hours) if hours else None,
        )


@dataclass
class Snapshot:
    """All domain collections as loaded from the backend at one point in time."""

    personnel: List[Personnel] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    customer_jobs: List[CustomerJob] = field(default_factory=list)
    personnel_payments: List[PersonnelPayment] = field(default_factory=list)
    incomes: List[Income] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    shared_expenses: List[SharedExpense] = field(default_factory=list)
    ledger_entries: List[LedgerEntry] = field(default_factory=list)
    work_days: List[WorkDay] = field(default_factory=list)
