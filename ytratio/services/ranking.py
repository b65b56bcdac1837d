"""
Ranking facade.
Merges an observation into the record store, rebuilds the rankings,
enforces the retention cap and persists the result.
"""
import logging
from threading import Lock
from typing import Any, List, Optional, Tuple

from ytratio.core.exceptions import IneligibleRecordError, NotFoundError
from ytratio.core.telemetry import (
    OBSERVATIONS_INGESTED,
    OBSERVATIONS_REJECTED,
    RECORDS_PRUNED,
    STORE_SIZE,
    tracer,
)
from ytratio.models.interfaces import RecordRepository
from ytratio.models.schemas import Bucket, IngestResult, RankingConfig, VideoRecord
from ytratio.repositories.record_store import RecordStore
from ytratio.services.bucketizer import bucketize
from ytratio.services.retention import enforce

logger = logging.getLogger(__name__)


def rank(store: RecordStore, config: RankingConfig) -> Tuple[List[Bucket], List[str]]:
    """
    Compute capped rankings for a store without modifying it.

    Returns:
        Tuple of (rankings, ids_over_the_cap)
    """
    buckets = bucketize(store, config.floor, config.factor)
    return enforce(buckets, config.max_per_bucket)


def ingest(
    observation: Any,
    store: RecordStore,
    config: RankingConfig,
) -> Tuple[RecordStore, List[Bucket]]:
    """
    Merge one observation and rebuild the rankings.

    The given store is left untouched. The observed video may itself be
    pruned if it does not make the top of its ranking.

    Args:
        observation: VideoRecord or observation mapping
        store: Current record store snapshot
        config: Ranking parameters

    Returns:
        Tuple of (updated_store, rankings)

    Raises:
        IneligibleRecordError: observation lacks valid counts
        InvalidConfigurationError: config cannot produce rankings
    """
    record = VideoRecord.from_observation(observation)

    updated = store.copy()
    updated.upsert(record)

    buckets, removed_ids = rank(updated, config)
    updated.remove_many(removed_ids)

    return updated, buckets


class RankingService:
    """
    Ranking service bound to a record repository.

    Load, ingest and save run under one lock, so concurrent requests of this
    process cannot overwrite each other's records. Other processes sharing
    the same storage remain last-writer-wins.
    """

    def __init__(
        self,
        repository: RecordRepository,
        config: Optional[RankingConfig] = None,
    ) -> None:
        """
        Initialize ranking service with dependencies.

        Args:
            repository: Where the record store is loaded from and saved to
            config: Ranking parameters (default: 100 views, factor 10, 10 per ranking)
        """
        self._repository = repository
        self._config = config or RankingConfig()
        self._lock = Lock()

    @property
    def config(self) -> RankingConfig:
        return self._config

    def ingest(self, observation: Any) -> Optional[IngestResult]:
        """
        Record an observation and return the updated rankings.

        Args:
            observation: Observed video, None when the page offered nothing

        Returns:
            IngestResult, None if there was no observation

        Raises:
            IneligibleRecordError: nothing is stored or returned
            InvalidConfigurationError: nothing is stored or returned
        """
        if observation is None:
            logger.debug("No observation available, nothing to ingest")
            return None

        try:
            record = VideoRecord.from_observation(observation)
        except IneligibleRecordError as e:
            OBSERVATIONS_REJECTED.inc()
            logger.info(f"Ineligible observation ignored: {e.details.get('errors')}")
            raise

        with self._lock, tracer.start_as_current_span("ytratio.ingest") as span:
            span.set_attribute("ytratio.video_id", record.id)

            store = self._repository.load()
            updated, rankings = ingest(record, store, self._config)
            self._repository.save(updated)

        previous_ids = store.ids()
        if record.id not in store:
            previous_ids.append(record.id)
        removed_ids = [video_id for video_id in previous_ids if video_id not in updated]
        retained = record.id in updated

        OBSERVATIONS_INGESTED.inc()
        RECORDS_PRUNED.inc(len(removed_ids))
        STORE_SIZE.set(len(updated))

        logger.info(
            f"Ingested video: ratio={record.ratio:.2f}, views={record.view_count}, "
            f"retained={retained}, pruned={len(removed_ids)}, records={len(updated)}",
            extra={"video_id": record.id},
        )

        return IngestResult(
            record=record,
            retained=retained,
            removed_ids=removed_ids,
            rankings=rankings,
        )

    def get_rankings(self) -> List[Bucket]:
        """Current rankings. The store is not modified."""
        rankings, _ = self.snapshot()
        return rankings

    def snapshot(self) -> Tuple[List[Bucket], int]:
        """
        Current rankings and store size, both from a single load.

        Returns:
            Tuple of (rankings, total_records)
        """
        with self._lock:
            store = self._repository.load()
        rankings, _ = rank(store, self._config)
        STORE_SIZE.set(len(store))
        return rankings, len(store)

    def get_record(self, video_id: str) -> VideoRecord:
        """
        Fetch the stored record of a video.

        Raises:
            NotFoundError: the video was never seen or has been pruned
        """
        record = self._repository.load().get(video_id)
        if record is None:
            raise NotFoundError("Video", video_id)
        return record

    def store_size(self) -> int:
        size = len(self._repository.load())
        STORE_SIZE.set(size)
        return size
