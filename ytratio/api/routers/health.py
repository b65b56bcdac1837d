"""
Health check router for observability.
"""
from fastapi import APIRouter, Depends

from ytratio.api.dependencies import get_ranking_service
from ytratio.services.ranking import RankingService

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health Check")
def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/health/ready", summary="Readiness Check")
def readiness_check(
    ranking_service: RankingService = Depends(get_ranking_service),
) -> dict:
    """
    Readiness check.
    Loads the record store and reports the ranking parameters.
    """
    config = ranking_service.config
    return {
        "status": "ready",
        "store": {"records": ranking_service.store_size()},
        "rankings": {
            "floor": config.floor,
            "factor": config.factor,
            "max_per_bucket": config.max_per_bucket,
        },
    }
