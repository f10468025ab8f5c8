"""
Snapshot loader module for the İş Takip project.

Builds the domain collections from a JSON snapshot of the backend data, either
a file on disk or an already decoded dictionary (e.g. the body returned by the
backend API through the gateway).

Snapshot keys (all optional, each a list of camelCase records):
personnel, customers, customerJobs, personnelPayments, incomes, expenses,
sharedExpenses, defterEntries, workDays.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from is_takip.models import (
    Customer,
    CustomerJob,
    Expense,
    Income,
    LedgerEntry,
    Personnel,
    PersonnelPayment,
    SharedExpense,
    Snapshot,
    WorkDay,
)

logger = logging.getLogger(__name__)

# snapshot key -> (Snapshot attribute, record class)
COLLECTIONS = {
    "personnel": ("personnel", Personnel),
    "customers": ("customers", Customer),
    "customerJobs": ("customer_jobs", CustomerJob),
    "personnelPayments": ("personnel_payments", PersonnelPayment),
    "incomes": ("incomes", Income),
    "expenses": ("expenses", Expense),
    "sharedExpenses": ("shared_expenses", SharedExpense),
    "defterEntries": ("ledger_entries", LedgerEntry),
    "workDays": ("work_days", WorkDay),
}


class SnapshotError(Exception):
    """Snapshot could not be read or contains malformed records."""
    pass


class SnapshotLoader:
    """
    Loads a snapshot of all domain collections.

    Records are parsed leniently (missing optional fields get defaults), but a
    record without a usable id or date makes the whole load fail with
    SnapshotError naming the collection and position.
    """

    def __init__(
        self,
        snapshot_path: Optional[Union[str, Path]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the snapshot loader.

        Args:
            snapshot_path: Path to a JSON snapshot file.
            data: Already decoded snapshot. Used instead of the file when given.
        """
        if snapshot_path is None and data is None:
            raise ValueError("Either snapshot_path or data must be provided")
        self.snapshot_path = Path(snapshot_path) if snapshot_path is not None else None
        self._raw: Optional[Dict[str, Any]] = data
        if self._raw is None:
            self._validate_path()

    def _validate_path(self) -> None:
        if not self.snapshot_path.exists():
            raise SnapshotError(f"Snapshot file not found: {self.snapshot_path}")
        logger.info(f"Snapshot file validated: {self.snapshot_path}")

    def load_raw(self) -> Dict[str, Any]:
        """
        Return the decoded snapshot dictionary, reading the file once.

        Raises:
            SnapshotError: If the file is not valid JSON or not a JSON object.
        """
        if self._raw is not None:
            return self._raw

        logger.info(f"Loading snapshot from: {self.snapshot_path}")
        try:
            with open(self.snapshot_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
        if not isinstance(raw, dict):
            raise SnapshotError("Snapshot must be a JSON object")
        self._raw = raw
        return raw

    def load(self) -> Snapshot:
        """
        Parse every known collection into domain records.

        Returns:
            Snapshot with one list per collection; missing keys give empty lists.

        Raises:
            SnapshotError: If a collection is not a list or a record is malformed.
        """
        raw = self.load_raw()
        snapshot = Snapshot()
        for key, (attribute, record_cls) in COLLECTIONS.items():
            records = self._parse_collection(key, raw.get(key) or [], record_cls.from_dict)
            setattr(snapshot, attribute, records)

        unknown = set(raw) - set(COLLECTIONS)
        if unknown:
            logger.debug(f"Ignoring unknown snapshot keys: {sorted(unknown)}")

        self._log_inconsistencies(snapshot)
        return snapshot

    @staticmethod
    def _parse_collection(key: str, items: Any, parse: Callable[[Dict[str, Any]], Any]) -> List[Any]:
        if not isinstance(items, list):
            raise SnapshotError(f"Snapshot key '{key}' must be a list")
        records = []
        for index, item in enumerate(items):
            try:
                records.append(parse(item))
            except (KeyError, TypeError, ValueError) as e:
                raise SnapshotError(f"Malformed record in '{key}' at index {index}: {e!s}") from e
        logger.info(f"Loaded {len(records)} records from '{key}'")
        return records

    @staticmethod
    def _log_inconsistencies(snapshot: Snapshot) -> None:
        jobs_by_id = {job.id: job for job in snapshot.customer_jobs}
        for job in snapshot.customer_jobs:
            for problem in job.validate():
                logger.warning(problem)
        for payment in snapshot.personnel_payments:
            if payment.customer_job_id is None:
                continue
            job = jobs_by_id.get(payment.customer_job_id)
            if job is None or payment.personnel_id not in job.personnel_ids:
                logger.warning(
                    f"Payment {payment.id}: personnel {payment.personnel_id} "
                    f"is not assigned to job {payment.customer_job_id}"
                )

    def get_statistics(self) -> Dict[str, int]:
        """
        Get record counts per collection.

        Returns:
            Dictionary mapping snapshot key to the number of records.
        """
        raw = self.load_raw()
        return {key: len(raw.get(key) or []) for key in COLLECTIONS}


def load_snapshot(source: Union[str, Path, Dict[str, Any]]) -> Snapshot:
    """
    Wrapper function to load a snapshot from a file path or a decoded dict.

    Example:
        >>> snapshot = load_snapshot("data/snapshot.json")
        >>> print(len(snapshot.customer_jobs))
    """
    if isinstance(source, dict):
        return SnapshotLoader(data=source).load()
    return SnapshotLoader(snapshot_path=source).load()
