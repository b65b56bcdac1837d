"""Repository implementations package."""
from .record_store import KeyValueRecordRepository, RecordStore

__all__ = [
    "KeyValueRecordRepository",
    "RecordStore",
]
