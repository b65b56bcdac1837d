"""
Rankings API router.
Receives video observations and serves the ranked buckets.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path, Response, status

from ytratio.api.dependencies import get_ranking_service
from ytratio.models.schemas import (
    ErrorResponse,
    IngestResponse,
    RankingsResponse,
    RankingView,
    VideoRecord,
)
from ytratio.services.ranking import RankingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["rankings"])


@router.post(
    "/observations",
    response_model=IngestResponse,
    summary="Record a Video Observation",
    description="""
    Store the latest metrics of a video and return the updated rankings.

    The body is `{id, title, viewCount, likes, dislikes}`, or `null` when
    the page had no likes / dislikes to report (nothing is done).
    The observed video is dropped if it does not make its ranking.
    """,
    responses={
        200: {"description": "Observation stored, rankings returned"},
        204: {"description": "No observation, nothing done"},
        422: {"model": ErrorResponse, "description": "Observation not eligible"},
    },
)
def post_observation(
    observation: Optional[Dict[str, Any]] = Body(default=None),
    ranking_service: RankingService = Depends(get_ranking_service),
) -> IngestResponse:
    result = ranking_service.ingest(observation)
    if result is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return IngestResponse.from_result(result)


@router.get(
    "/rankings",
    response_model=RankingsResponse,
    summary="Get Rankings",
    description="Rankings of likes / dislikes ratios grouped by view count.",
)
def get_rankings(
    ranking_service: RankingService = Depends(get_ranking_service),
) -> RankingsResponse:
    rankings, total_records = ranking_service.snapshot()
    return RankingsResponse(
        rankings=[RankingView.from_bucket(bucket) for bucket in rankings],
        total_records=total_records,
    )


@router.get(
    "/videos/{video_id}",
    response_model=VideoRecord,
    summary="Get Stored Video",
    responses={404: {"model": ErrorResponse, "description": "Video not stored"}},
)
def get_video(
    video_id: str = Path(..., min_length=1),
    ranking_service: RankingService = Depends(get_ranking_service),
) -> VideoRecord:
    return ranking_service.get_record(video_id)
