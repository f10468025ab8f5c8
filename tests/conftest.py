"""Shared fixtures: a small snapshot of personnel, customers, jobs and payments."""
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from is_takip.models import (  # noqa: E402
    Customer,
    CustomerJob,
    Expense,
    Income,
    JobPersonnelPayment,
    Material,
    Payer,
    Personnel,
    PersonnelPayment,
)


def make_job(job_id, customer_id=1, date="2024-03-10", income="0", payments=(), materials=(), location=""):
    """Build a job; ``payments`` is a sequence of (personnel_id, amount)."""
    return CustomerJob(
        id=job_id,
        customer_id=customer_id,
        date=datetime.fromisoformat(date),
        location=location,
        income=Decimal(income),
        personnel_ids=tuple(pid for pid, _ in payments),
        personnel_payments=tuple(
            JobPersonnelPayment(personnel_id=pid, payment=Decimal(amount)) for pid, amount in payments
        ),
        materials=tuple(
            Material(name=name, quantity=Decimal(qty), unit_price=Decimal(price))
            for name, qty, price in materials
        ),
    )


def make_payment(payment_id, personnel_id, amount, date="2024-03-15", job_id=None, payer=Payer.KASA):
    return PersonnelPayment(
        id=payment_id,
        personnel_id=personnel_id,
        amount=Decimal(amount),
        date=datetime.fromisoformat(date),
        customer_job_id=job_id,
        payer=payer,
    )


@pytest.fixture
def personnel():
    return [Personnel(id=1, name="Ahmet"), Personnel(id=2, name="Mehmet"), Personnel(id=3, name="Ali")]


@pytest.fixture
def customers():
    return [Customer(id=1, name="Yılmaz Apartmanı"), Customer(id=2, name="Kaya İnşaat"), Customer(id=3, name="Boş Müşteri")]


@pytest.fixture
def jobs():
    return [
        make_job(10, customer_id=1, date="2024-03-05", income="1000",
                 payments=[(1, "300"), (2, "200")], materials=[("Boya", "2", "50")], location="Blok A"),
        make_job(11, customer_id=1, date="2024-03-20", income="500",
                 payments=[(1, "150")], location="Blok B"),
        make_job(12, customer_id=2, date="2024-04-02", income="2000",
                 payments=[(2, "600")], materials=[("Kablo", "10", "30")], location="Depo"),
    ]


@pytest.fixture
def payments():
    return [
        make_payment(100, 1, "300", date="2024-03-06", job_id=10),
        make_payment(101, 1, "50", date="2024-03-25"),
        make_payment(102, 2, "800", date="2024-04-10", payer=Payer.OMER),
    ]


@pytest.fixture
def incomes():
    return [
        Income(id=1, description="Hurda satışı", amount=Decimal("500"), date=datetime(2024, 3, 5)),
        Income(id=2, description="Depozito iadesi", amount=Decimal("250"), date=datetime(2024, 4, 1)),
    ]


@pytest.fixture
def expenses():
    return [
        Expense(id=1, description="Yakıt", amount=Decimal("200"), date=datetime(2024, 3, 10)),
        Expense(id=2, description="Kira", amount=Decimal("1000"), date=datetime(2024, 2, 28)),
    ]
