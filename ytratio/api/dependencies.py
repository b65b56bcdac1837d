"""
Dependency injection container.
Creates and wires the storage and ranking components.
Uses FastAPI's dependency injection system.
"""
import logging
from functools import lru_cache
from typing import Union

from ytratio.config import get_settings
from ytratio.core.kvstore import FileKeyValueStore, InMemoryKeyValueStore
from ytratio.models.schemas import RankingConfig
from ytratio.repositories.record_store import KeyValueRecordRepository
from ytratio.services.ranking import RankingService

logger = logging.getLogger(__name__)


# =============================================================================
# Singleton Instances (Application Lifetime)
# =============================================================================


@lru_cache()
def get_key_value_store() -> Union[FileKeyValueStore, InMemoryKeyValueStore]:
    """Get singleton key-value store, file-backed when STORAGE_PATH is set."""
    settings = get_settings()
    if settings.STORAGE_PATH:
        logger.info(f"Using file storage: {settings.STORAGE_PATH}")
        return FileKeyValueStore(settings.STORAGE_PATH)
    logger.info("Using in-memory storage, records are lost on restart")
    return InMemoryKeyValueStore()


@lru_cache()
def get_record_repository() -> KeyValueRecordRepository:
    """Get singleton record repository."""
    return KeyValueRecordRepository(
        get_key_value_store(),
        namespace=get_settings().STORAGE_NAMESPACE,
    )


@lru_cache()
def get_ranking_config() -> RankingConfig:
    """Get ranking parameters from settings."""
    return RankingConfig.from_settings(get_settings())


@lru_cache()
def get_ranking_service() -> RankingService:
    """
    Get singleton ranking service.
    A single instance is required: it serializes ingests with its lock.
    """
    return RankingService(
        repository=get_record_repository(),
        config=get_ranking_config(),
    )


# =============================================================================
# Cleanup Functions
# =============================================================================


def clear_caches() -> None:
    """Clear all cached singleton instances (for testing)."""
    get_key_value_store.cache_clear()
    get_record_repository.cache_clear()
    get_ranking_config.cache_clear()
    get_ranking_service.cache_clear()
