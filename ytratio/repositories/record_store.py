"""
Record store: latest metrics per video, and its persistence as a JSON blob
under a namespace key of a string-to-string store.
"""
import json
import logging
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from ytratio.models.interfaces import KeyValueStore
from ytratio.models.schemas import VideoRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Ordered mapping from video id to its latest VideoRecord.

    Iteration follows insertion order; re-observing a video moves it to the
    end, so ties in the rankings favour records seen earlier.
    """

    def __init__(self, records: Optional[Iterable[VideoRecord]] = None) -> None:
        self._records: Dict[str, VideoRecord] = {}
        for record in records or []:
            self.upsert(record)

    def upsert(self, record: VideoRecord) -> None:
        """Replace any record with the same id and append the new one."""
        self._records.pop(record.id, None)
        self._records[record.id] = record

    def get(self, video_id: str) -> Optional[VideoRecord]:
        return self._records.get(video_id)

    def remove(self, video_id: str) -> bool:
        """Delete a record, returns True if it existed."""
        return self._records.pop(video_id, None) is not None

    def remove_many(self, video_ids: Iterable[str]) -> int:
        """Delete several records, returns how many existed."""
        return sum(1 for video_id in video_ids if self.remove(video_id))

    def records(self) -> List[VideoRecord]:
        return list(self._records.values())

    def ids(self) -> List[str]:
        return list(self._records)

    def copy(self) -> "RecordStore":
        return RecordStore(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, video_id: object) -> bool:
        return video_id in self._records

    def __iter__(self) -> Iterator[VideoRecord]:
        return iter(list(self._records.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordStore):
            return NotImplemented
        return list(self._records.items()) == list(other._records.items())

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)})"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_json(self) -> str:
        """Serialize as a JSON object keyed by video id."""
        return json.dumps(
            {
                video_id: record.model_dump(mode="json", by_alias=True)
                for video_id, record in self._records.items()
            }
        )

    @classmethod
    def from_json(cls, blob: Optional[str]) -> "RecordStore":
        """
        Deserialize a blob produced by to_json.

        A missing or unparsable blob gives an empty store. Entries that are
        not valid records are skipped.
        """
        if blob is None:
            return cls()

        try:
            data = json.loads(blob)
        except ValueError as e:
            logger.warning(f"Corrupted record store, starting empty: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.warning(
                f"Corrupted record store, expected an object, got {type(data).__name__}"
            )
            return cls()

        store = cls()
        for key, value in data.items():
            try:
                store.upsert(VideoRecord.model_validate(value))
            except ValidationError:
                logger.warning(
                    f"Skipping invalid stored record: {key}",
                    extra={"video_id": key},
                )
        return store


class KeyValueRecordRepository:
    """
    RecordRepository storing the whole record store as one JSON string
    under a fixed namespace key.
    """

    def __init__(self, kv_store: KeyValueStore, namespace: str = "us-yt-ratio") -> None:
        """
        Args:
            kv_store: KeyValueStore holding the serialized records
            namespace: Key under which the records are stored
        """
        self._kv_store = kv_store
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def load(self) -> RecordStore:
        return RecordStore.from_json(self._kv_store.get_item(self._namespace))

    def save(self, store: RecordStore) -> None:
        self._kv_store.set_item(self._namespace, store.to_json())
        logger.debug(
            f"Persisted {len(store)} records",
            extra={"namespace": self._namespace},
        )
