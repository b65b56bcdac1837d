"""
Unit tests for core infrastructure: key-value stores, exceptions, logging
and telemetry setup.
"""
import json
import logging
from unittest.mock import MagicMock, patch

from fastapi import FastAPI

from ytratio.config.logging import JsonFormatter
from ytratio.core.exceptions import (
    IneligibleRecordError,
    InvalidConfigurationError,
    NotFoundError,
)
from ytratio.core.kvstore import FileKeyValueStore, InMemoryKeyValueStore
from ytratio.core.telemetry import setup_telemetry
from ytratio.models.interfaces import KeyValueStore, RecordRepository
from ytratio.models.schemas import RankingConfig


class TestInMemoryKeyValueStore:
    def test_get_set(self):
        store = InMemoryKeyValueStore()
        store.set_item("key", "value")
        assert store.get_item("key") == "value"
        assert store.get_item("missing") is None

    def test_remove_clear(self):
        store = InMemoryKeyValueStore({"k1": "v1", "k2": "v2"})

        assert store.remove_item("k1") is True
        assert store.get_item("k1") is None
        assert store.remove_item("missing") is False

        store.clear()
        assert store.size() == 0


class TestFileKeyValueStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "storage" / "local.json"

        FileKeyValueStore(str(path)).set_item("us-yt-ratio", '{"a": 1}')

        assert FileKeyValueStore(str(path)).get_item("us-yt-ratio") == '{"a": 1}'
        assert json.loads(path.read_text()) == {"us-yt-ratio": '{"a": 1}'}

    def test_missing_file_is_empty(self, tmp_path):
        store = FileKeyValueStore(str(tmp_path / "nothing.json"))

        assert store.get_item("key") is None
        assert store.size() == 0

    def test_unreadable_file_is_empty(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{oops")
        store = FileKeyValueStore(str(path))

        assert store.get_item("key") is None

        store.set_item("key", "value")
        assert store.get_item("key") == "value"

    def test_remove_and_clear(self, tmp_path):
        store = FileKeyValueStore(str(tmp_path / "kv.json"))
        store.set_item("k1", "v1")
        store.set_item("k2", "v2")

        assert store.remove_item("k1") is True
        assert store.remove_item("k1") is False
        assert store.size() == 1

        store.clear()
        assert store.get_item("k2") is None
        assert list(tmp_path.iterdir()) == [tmp_path / "kv.json"]


class TestExceptions:
    def test_invalid_configuration_to_dict(self):
        exc = InvalidConfigurationError("factor", 0, "must be > 0")

        body = exc.to_dict()

        assert exc.status_code == 500
        assert body["error"]["code"] == "INVALID_CONFIGURATION"
        assert body["error"]["details"]["parameter"] == "factor"

    def test_ineligible_record(self):
        exc = IneligibleRecordError("invalid video metrics", [{"field": "likes"}])

        assert exc.status_code == 422
        assert exc.to_dict()["error"]["details"]["errors"] == [{"field": "likes"}]

    def test_not_found(self):
        exc = NotFoundError("Video", "abc")

        assert exc.status_code == 404
        assert "abc" in exc.message


class TestJsonFormatter:
    def test_includes_video_context(self):
        record = logging.LogRecord(
            "ytratio.services.ranking", logging.INFO, __file__, 1, "Ingested", None, None
        )
        record.video_id = "abc"

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["message"] == "Ingested"
        assert data["video_id"] == "abc"


class TestRankingConfig:
    def test_from_settings(self):
        settings = MagicMock()
        settings.RANKING_LOWEST_VIEW_COUNT = 1000
        settings.RANKING_STEP = 100
        settings.RANKING_MAX_VIDEOS = 5

        config = RankingConfig.from_settings(settings)

        assert (config.floor, config.factor, config.max_per_bucket) == (1000, 100, 5)


class TestTelemetry:
    @patch("ytratio.core.telemetry.get_settings")
    @patch("ytratio.core.telemetry.Instrumentator")
    def test_setup_telemetry_prometheus_enabled(self, mock_instrumentator, mock_get_settings):
        mock_settings = MagicMock()
        mock_settings.ENABLE_PROMETHEUS = True
        mock_settings.ENABLE_OTEL = False
        mock_get_settings.return_value = mock_settings

        app = FastAPI()
        setup_telemetry(app)

        mock_instrumentator.assert_called_once()
        mock_instrumentator.return_value.instrument.assert_called_once_with(app)

    @patch("ytratio.core.telemetry.get_settings")
    @patch("ytratio.core.telemetry.trace")
    @patch("ytratio.core.telemetry.OTLPSpanExporter")
    @patch("ytratio.core.telemetry.BatchSpanProcessor")
    @patch("ytratio.core.telemetry.FastAPIInstrumentor")
    def test_setup_telemetry_otel_enabled(
        self, mock_fastapi_instr, mock_processor, mock_exporter, mock_trace, mock_get_settings
    ):
        mock_settings = MagicMock()
        mock_settings.ENABLE_PROMETHEUS = False
        mock_settings.ENABLE_OTEL = True
        mock_settings.APP_NAME = "test"
        mock_settings.APP_VERSION = "1.0"
        mock_settings.DEBUG = False
        mock_get_settings.return_value = mock_settings

        app = FastAPI()
        setup_telemetry(app)

        mock_fastapi_instr.instrument_app.assert_called_once()
        mock_processor.assert_called_once()
        mock_trace.set_tracer_provider.assert_called_once()


class TestInterfaces:
    def test_stores_satisfy_key_value_protocol(self, tmp_path):
        assert isinstance(InMemoryKeyValueStore(), KeyValueStore)
        assert isinstance(FileKeyValueStore(str(tmp_path / "kv.json")), KeyValueStore)

    def test_repository_satisfies_record_protocol(self, record_repository):
        assert isinstance(record_repository, RecordRepository)
