"""
Retention enforcer.
Caps every ranking and reports the records that fell off.
"""
import logging
from typing import List, Tuple

from ytratio.core.exceptions import InvalidConfigurationError
from ytratio.models.schemas import Bucket

logger = logging.getLogger(__name__)


def enforce(
    buckets: List[Bucket],
    max_per_bucket: int,
) -> Tuple[List[Bucket], List[str]]:
    """
    Keep the top max_per_bucket entries of every bucket.

    Buckets must already be ranked. The caller is expected to delete the
    removed ids from the record store.

    Returns:
        Tuple of (pruned_buckets, removed_ids)

    Raises:
        InvalidConfigurationError: max_per_bucket is not a non-negative integer
    """
    if isinstance(max_per_bucket, bool) or not isinstance(max_per_bucket, int):
        raise InvalidConfigurationError(
            "max_per_bucket", max_per_bucket, "must be an integer"
        )
    if max_per_bucket < 0:
        raise InvalidConfigurationError("max_per_bucket", max_per_bucket, "must be >= 0")

    pruned: List[Bucket] = []
    removed_ids: List[str] = []

    for bucket in buckets:
        if len(bucket.entries) > max_per_bucket:
            removed_ids.extend(r.id for r in bucket.entries[max_per_bucket:])
            bucket = bucket.model_copy(
                update={"entries": bucket.entries[:max_per_bucket]}
            )
        pruned.append(bucket)

    if removed_ids:
        logger.debug(f"Retention cap {max_per_bucket} removed {len(removed_ids)} records")

    return pruned, removed_ids
