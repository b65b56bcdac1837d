"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from ytratio.api.dependencies import get_ranking_service
from ytratio.core.kvstore import InMemoryKeyValueStore
from ytratio.main import app
from ytratio.models.schemas import RankingConfig, VideoRecord
from ytratio.repositories.record_store import KeyValueRecordRepository
from ytratio.services.ranking import RankingService

NAMESPACE = "us-yt-ratio"


@pytest.fixture
def make_record():
    """Factory fixture for VideoRecord with a default title."""

    def _make(video_id, view_count, likes, dislikes, title=None):
        return VideoRecord(
            id=video_id,
            title=title or f"Video {video_id}",
            view_count=view_count,
            likes=likes,
            dislikes=dislikes,
        )

    return _make


@pytest.fixture
def kv_store():
    """Fixture for an empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def record_repository(kv_store):
    """Fixture for a record repository over the in-memory store."""
    return KeyValueRecordRepository(kv_store, namespace=NAMESPACE)


@pytest.fixture
def ranking_config():
    """Fixture for ranking parameters: 100 views, factor 10, 2 per ranking."""
    return RankingConfig(floor=100, factor=10, max_per_bucket=2)


@pytest.fixture
def ranking_service(record_repository, ranking_config):
    """Fixture for a ranking service with isolated storage."""
    return RankingService(repository=record_repository, config=ranking_config)


@pytest.fixture
def example_records(make_record):
    """
    A and B tie at ratio 5 in [100, 1000), C alone in [1000, 10000).
    """
    return [
        make_record("A", 150, 10, 2),
        make_record("B", 150, 20, 4),
        make_record("C", 5000, 9, 1),
    ]


@pytest.fixture
def test_client(ranking_service):
    """
    TestClient fixture with dependency overrides.
    Uses an in-memory ranking service for isolation.
    """
    app.dependency_overrides[get_ranking_service] = lambda: ranking_service

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
