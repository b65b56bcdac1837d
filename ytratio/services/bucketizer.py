"""
Bucketizer.
Partitions records into geometrically growing view-count ranges and ranks
each range by ratio.
"""
import logging
import math
from collections.abc import Mapping
from numbers import Real
from typing import Dict, Iterable, List, Union

from ytratio.core.exceptions import InvalidConfigurationError
from ytratio.models.schemas import Bucket, Number, VideoRecord

logger = logging.getLogger(__name__)


def validate_bounds(floor: Number, factor: Number) -> None:
    """
    Check the parameters of the boundary sequence.

    Raises:
        InvalidConfigurationError: floor <= 0, or factor does not grow the
            sequence (factor <= 1)
    """
    for name, value in (("floor", floor), ("factor", factor)):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidConfigurationError(name, value, "must be a number")
        if not math.isfinite(value):
            raise InvalidConfigurationError(name, value, "must be finite")

    if floor <= 0:
        raise InvalidConfigurationError("floor", floor, "must be > 0")
    if factor <= 0:
        raise InvalidConfigurationError("factor", factor, "must be > 0")
    if factor <= 1:
        # Boundaries would never increase: no range could hold a record
        raise InvalidConfigurationError("factor", factor, "must be > 1")


class BucketBoundaries:
    """
    Boundaries floor, floor*factor, floor*factor^2, ... extended on demand.

    Boundaries are built by repeated multiplication; the logarithm only
    gives a first guess of the index, corrected against those boundaries.
    """

    def __init__(self, floor: Number, factor: Number) -> None:
        validate_bounds(floor, factor)
        self._factor = factor
        self._log_factor = math.log(factor)
        self._bounds: List[Number] = [floor]

    def __getitem__(self, index: int) -> Number:
        while len(self._bounds) <= index:
            self._bounds.append(self._bounds[-1] * self._factor)
        return self._bounds[index]

    def index_of(self, view_count: Number) -> int:
        """Index of the range [b(i), b(i+1)) holding view_count (>= floor)."""
        guess = math.floor(
            (math.log(view_count) - math.log(self._bounds[0])) / self._log_factor
        )
        index = max(int(guess), 0)

        # A value equal to a boundary belongs to the upper range
        while view_count >= self[index + 1]:
            index += 1
        while index > 0 and view_count < self[index]:
            index -= 1
        return index


def bucketize(
    records: Union[Iterable[VideoRecord], Mapping],
    floor: Number,
    factor: Number,
) -> List[Bucket]:
    """
    Group records by view-count range and rank each range.

    Args:
        records: Records in insertion order (a mapping's values are used)
        floor: Lowest view count ranked; range 0 starts here
        factor: Growth factor between consecutive ranges

    Returns:
        Non-empty buckets by ascending lower bound, entries by ratio
        descending (ties keep input order)

    Raises:
        InvalidConfigurationError: invalid floor or factor
    """
    boundaries = BucketBoundaries(floor, factor)

    if isinstance(records, Mapping):
        records = records.values()

    grouped: Dict[int, List[VideoRecord]] = {}
    skipped = 0
    for record in records:
        if record.view_count < floor:
            skipped += 1
            continue
        grouped.setdefault(boundaries.index_of(record.view_count), []).append(record)

    buckets = [
        Bucket(
            lower=boundaries[index],
            upper=boundaries[index + 1],
            # sorted() is stable, reverse=True included
            entries=sorted(grouped[index], key=lambda r: r.ratio, reverse=True),
        )
        for index in sorted(grouped)
    ]

    logger.debug(
        f"Bucketized {sum(len(b.entries) for b in buckets)} records into "
        f"{len(buckets)} rankings, {skipped} below floor"
    )
    return buckets
