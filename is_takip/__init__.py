"""
İş Takip - job tracking finances for a small service company

Main package: domain model and pure aggregation of balances, job profit,
cash flow and periodic reports over snapshots loaded from the backend API.
"""

from is_takip.data_loader import SnapshotLoader, load_snapshot
from is_takip.models import Snapshot

__all__ = [
    "SnapshotLoader",
    "load_snapshot",
    "Snapshot",
]

__version__ = "0.3.0"
