"""
Storage interfaces (abstractions).
Using Protocol for structural subtyping (duck typing with type hints).
"""
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ytratio.repositories.record_store import RecordStore


@runtime_checkable
class KeyValueStore(Protocol):
    """
    String-to-string store, the shape of a browser's local storage.
    Production: file-backed implementation.
    Testing: in-memory implementation.
    """

    def get_item(self, key: str) -> Optional[str]:
        """
        Fetch the value stored under a key.

        Returns:
            The stored string, None if the key is absent
        """
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""
        ...

    def remove_item(self, key: str) -> bool:
        """
        Delete a key.

        Returns:
            True if the key existed
        """
        ...


@runtime_checkable
class RecordRepository(Protocol):
    """
    Interface for loading and persisting the whole record store.
    A load never fails: a missing or corrupted store loads as empty.
    """

    def load(self) -> "RecordStore":
        """
        Load the current record store.

        Returns:
            The persisted store, empty if absent or unreadable
        """
        ...

    def save(self, store: "RecordStore") -> None:
        """
        Persist the record store, replacing the previous snapshot.

        Args:
            store: Records to persist
        """
        ...
