"""Core infrastructure components."""
from .exceptions import (
    AppException,
    IneligibleRecordError,
    InvalidConfigurationError,
    NotFoundError,
)
from .kvstore import FileKeyValueStore, InMemoryKeyValueStore

__all__ = [
    "AppException",
    "FileKeyValueStore",
    "IneligibleRecordError",
    "InMemoryKeyValueStore",
    "InvalidConfigurationError",
    "NotFoundError",
]
