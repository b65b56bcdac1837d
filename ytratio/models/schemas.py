"""
Domain models using Pydantic.
Video records, rankings and the API views built on them.
"""
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field

from ytratio.core.exceptions import IneligibleRecordError

Number = Union[int, float]

# Largest count stored; every count up to it converts to float exactly
MAX_COUNT = 2 ** 53

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


# =============================================================================
# Domain Models (Internal)
# =============================================================================


class VideoRecord(BaseModel):
    """
    Latest observed metrics of a video.
    Field aliases match the persisted JSON layout.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    id: str = Field(..., min_length=1, description="Stable video identifier")
    title: str = Field(default="", description="Video title, latest wins")
    view_count: int = Field(
        ..., ge=0, le=MAX_COUNT, alias="viewCount", description="View count"
    )
    likes: int = Field(..., ge=0, le=MAX_COUNT, description="Like count")
    dislikes: int = Field(..., ge=0, le=MAX_COUNT, description="Dislike count")

    @computed_field
    @property
    def ratio(self) -> float:
        """Likes per dislike; videos without dislikes rank by their likes."""
        if self.dislikes != 0:
            return self.likes / self.dislikes
        return float(self.likes)

    @classmethod
    def from_observation(cls, observation: Any) -> "VideoRecord":
        """
        Build a record from a scraped observation.

        Raises:
            IneligibleRecordError: counts are missing, not integers or negative
        """
        if isinstance(observation, VideoRecord):
            return observation
        if not isinstance(observation, dict):
            raise IneligibleRecordError(
                f"expected an observation object, got {type(observation).__name__}"
            )
        try:
            return cls.model_validate(observation)
        except ValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "message": err["msg"],
                }
                for err in e.errors()
            ]
            raise IneligibleRecordError("invalid video metrics", errors) from e


class Bucket(BaseModel):
    """Half-open view-count range [lower, upper) with its entries ranked by ratio."""

    lower: Number
    upper: Number
    entries: List[VideoRecord] = Field(default_factory=list)


class RankingConfig(BaseModel):
    """Parameters of the rankings. Checked when rankings are computed."""

    floor: Number = Field(default=100, description="Lowest ranked view count")
    factor: Number = Field(default=10, description="Growth factor between rankings")
    max_per_bucket: int = Field(default=10, description="Retention cap per ranking")

    @classmethod
    def from_settings(cls, settings: Any) -> "RankingConfig":
        return cls(
            floor=settings.RANKING_LOWEST_VIEW_COUNT,
            factor=settings.RANKING_STEP,
            max_per_bucket=settings.RANKING_MAX_VIDEOS,
        )


class IngestResult(BaseModel):
    """Outcome of merging one observation into the record store."""

    record: VideoRecord
    retained: bool = Field(..., description="False if pruned in the same pass")
    removed_ids: List[str] = Field(default_factory=list)
    rankings: List[Bucket] = Field(default_factory=list)

    @property
    def ratio(self) -> float:
        return self.record.ratio


# =============================================================================
# API Models (External)
# =============================================================================


def format_view_count(value: Number) -> str:
    """Format a bucket boundary with thousands separators."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


class RankingEntryView(BaseModel):
    """Single line of a ranking."""

    position: int = Field(..., ge=1, description="1-based rank")
    id: str
    title: str
    ratio: float = Field(..., description="Ratio rounded to two decimals")
    view_count: int
    url: str


class RankingView(BaseModel):
    """One ranking ready for display."""

    lower: Number
    upper: Number
    label: str = Field(..., description='e.g. "100 - 1,000 views"')
    entries: List[RankingEntryView]

    @classmethod
    def from_bucket(cls, bucket: Bucket) -> "RankingView":
        return cls(
            lower=bucket.lower,
            upper=bucket.upper,
            label=(
                f"{format_view_count(bucket.lower)} - "
                f"{format_view_count(bucket.upper)} views"
            ),
            entries=[
                RankingEntryView(
                    position=position,
                    id=record.id,
                    title=record.title,
                    ratio=round(record.ratio, 2),
                    view_count=record.view_count,
                    url=WATCH_URL.format(video_id=record.id),
                )
                for position, record in enumerate(bucket.entries, start=1)
            ],
        )


class RankingsResponse(BaseModel):
    """Rankings endpoint response."""

    rankings: List[RankingView]
    total_records: int = Field(..., ge=0, description="Records in the store")


class IngestResponse(BaseModel):
    """Observation endpoint response."""

    id: str
    ratio: float = Field(..., description="Current ratio of the observed video")
    retained: bool
    removed_ids: List[str]
    rankings: List[RankingView]

    @classmethod
    def from_result(cls, result: IngestResult) -> "IngestResponse":
        return cls(
            id=result.record.id,
            ratio=round(result.ratio, 2),
            retained=result.retained,
            removed_ids=result.removed_ids,
            rankings=[RankingView.from_bucket(b) for b in result.rankings],
        )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: dict = Field(..., description="Error details")
