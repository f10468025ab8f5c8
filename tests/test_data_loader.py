"""Tests for snapshot loading and record parsing."""
import json
from datetime import datetime
from decimal import Decimal

import pytest

from is_takip.data_loader import SnapshotError, SnapshotLoader, load_snapshot
from is_takip.models import GoldType, IncomePaymentMethod, Payer, PaymentMethod

SNAPSHOT = {
    "personnel": [{"id": 1, "name": "Ahmet", "note": "Usta", "noteUpdatedAt": "2024-03-01T09:00:00"}],
    "customers": [{"id": "5", "name": "Yılmaz", "contactInfo": "0555", "address": "Ankara"}],
    "customerJobs": [
        {
            "id": 10,
            "customerId": 5,
            "date": "2024-03-05",
            "location": "Blok A",
            "description": "Boya",
            "income": 1000,
            "incomePaymentMethod": "GOLD",
            "incomeGoldType": "quarter",
            "personnelIds": [1],
            "personnelPayments": [{"personnelId": 1, "payment": 300.5, "daysWorked": 2}],
            "materials": [{"id": 1, "name": "Boya", "unit": "kg", "quantity": 2, "unitPrice": "50"}],
        },
        {"id": 11, "customerId": 5, "date": "2024-03-06", "income": 200},
    ],
    "personnelPayments": [
        {"id": 100, "personnelId": 1, "amount": 300, "date": "2024-03-06T10:00:00", "customerJobId": 10},
        {"id": 101, "personnelId": 1, "amount": 50, "date": "2024-03-07", "payer": "Ömer", "paymentMethod": "transfer"},
    ],
    "incomes": [{"id": 1, "description": "Hurda", "amount": 500, "date": "2024-03-05"}],
    "expenses": [],
    "somethingElse": [1, 2, 3],
}


def test_load_snapshot_from_dict():
    """Records are parsed from camelCase JSON with lenient defaults."""
    snapshot = load_snapshot(SNAPSHOT)

    assert snapshot.personnel[0].note.text == "Usta"
    assert snapshot.customers[0].id == 5
    assert snapshot.expenses == []
    assert snapshot.shared_expenses == []

    job = snapshot.customer_jobs[0]
    assert job.date == datetime(2024, 3, 5)
    assert job.income == Decimal("1000")
    assert job.income_payment_method == IncomePaymentMethod.GOLD
    assert job.income_gold_type == GoldType.QUARTER
    assert job.personnel_payments[0].payment == Decimal("300.5")
    assert job.personnel_payments[0].days_worked == 2
    assert job.materials[0].cost == Decimal("100")

    bare = snapshot.customer_jobs[1]
    assert bare.personnel_payments == () and bare.materials == ()

    first, second = snapshot.personnel_payments
    assert first.payer == Payer.KASA and first.customer_job_id == 10
    assert second.payer == Payer.OMER and second.payment_method == PaymentMethod.TRANSFER


def test_load_snapshot_from_file(tmp_path):
    """A snapshot file is read once and gives the same collections."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(SNAPSHOT, ensure_ascii=False), encoding="utf-8")

    loader = SnapshotLoader(snapshot_path=path)
    snapshot = loader.load()
    assert len(snapshot.customer_jobs) == 2
    assert loader.get_statistics()["personnelPayments"] == 2
    assert loader.get_statistics()["sharedExpenses"] == 0


def test_missing_file_raises(tmp_path):
    with pytest.raises(SnapshotError):
        SnapshotLoader(snapshot_path=tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_malformed_record_names_collection():
    """A record without a date fails the load and says where."""
    with pytest.raises(SnapshotError, match="incomes"):
        load_snapshot({"incomes": [{"id": 1, "amount": 5}]})


def test_collection_must_be_a_list():
    with pytest.raises(SnapshotError, match="customers"):
        load_snapshot({"customers": {"id": 1}})


def test_inconsistent_payment_is_logged_not_raised(caplog):
    """A payment linked to a job its person is not on only produces a warning."""
    data = {
        "customerJobs": [{"id": 1, "customerId": 1, "date": "2024-01-01", "personnelIds": [2]}],
        "personnelPayments": [{"id": 1, "personnelId": 3, "amount": 10, "date": "2024-01-02", "customerJobId": 1}],
    }
    snapshot = load_snapshot(data)
    assert len(snapshot.personnel_payments) == 1
    assert "not assigned to job 1" in caplog.text


def test_work_days_are_loaded():
    """Attendance days come from the workDays collection; hours are optional."""
    snapshot = load_snapshot({
        "workDays": [
            {"id": 1, "personnelId": 1, "date": "2024-03-04", "location": "Blok A",
             "jobDescription": "Sıva", "wage": 1200},
            {"id": 2, "personnelId": 1, "date": "2024-03-05", "wage": "1200", "hours": 6},
        ]
    })
    first, second = snapshot.work_days
    assert first.job_description == "Sıva"
    assert first.wage == Decimal("1200")
    assert first.hours is None
    assert second.hours == Decimal("6")
    assert second.location == ""
