"""Tests for audit loggers."""

import asyncio
import json
import logging
from datetime import timedelta

import pytest

from neo_preferences.config.constants import AuditAction
from neo_preferences.core.entities import AuditFilter, AuditLogEntry
from neo_preferences.core.exceptions import PreferenceError
from neo_preferences.features.audit import (
    FileAuditLogger,
    InMemoryAuditLogger,
    LoggingAuditLogger,
    NoOpAuditLogger,
)

from conftest import BASE_TIME


def make_entry(action=AuditAction.SET, key="theme", provider="memory", offset_seconds=0, **extra):
    return AuditLogEntry(
        action=action,
        key=key,
        provider=provider,
        timestamp=BASE_TIME + timedelta(seconds=offset_seconds),
        **extra,
    )


class TestInMemoryAuditLogger:

    @pytest.fixture
    def populated(self, audit_logger):
        audit_logger.log(make_entry(AuditAction.SET, "theme", "memory", 0, value="dark"))
        audit_logger.log(make_entry(AuditAction.GET, "theme", "cache", 10, user_id="u1"))
        audit_logger.log(make_entry(AuditAction.DELETE, "lang", "memory", 20, old_value="en"))
        return audit_logger

    def test_keeps_newest_entries(self):
        logger = InMemoryAuditLogger(max_entries=2)

        for index in range(3):
            logger.log(make_entry(key=f"k{index}"))

        assert [entry.key for entry in logger.get_entries()] == ["k1", "k2"]

    def test_filters(self, populated):
        assert [e.action for e in populated.get_by_action(AuditAction.GET)] == [AuditAction.GET]
        assert len(populated.get_by_key("theme")) == 2
        assert len(populated.get_by_provider("memory")) == 2
        assert populated.get_entries(AuditFilter(user_id="u1"))[0].provider == "cache"

    def test_time_range_is_inclusive(self, populated):
        entries = populated.get_by_time_range(
            BASE_TIME + timedelta(seconds=10), BASE_TIME + timedelta(seconds=20)
        )

        assert [entry.key for entry in entries] == ["theme", "lang"]

    def test_combined_filter(self, populated):
        entries = populated.get_entries(AuditFilter(key="theme", action=AuditAction.SET))

        assert len(entries) == 1
        assert entries[0].value == "dark"

    def test_count_and_clear(self, populated):
        assert populated.count() == 3

        populated.clear()

        assert populated.count() == 0

    def test_export_and_import(self, populated):
        exported = populated.export()
        assert json.loads(exported)[0]["action"] == "set"

        restored = InMemoryAuditLogger()
        restored.import_entries(exported)

        assert restored.get_entries() == populated.get_entries()

    def test_import_rejects_bad_data(self, audit_logger):
        with pytest.raises(PreferenceError) as exc_info:
            audit_logger.import_entries('[{"action": "unknown"}]')

        assert exc_info.value.error_code == "AUDIT_IMPORT_ERROR"

    def test_import_respects_capacity(self, populated):
        small = InMemoryAuditLogger(max_entries=1)

        small.import_entries(populated.export())

        assert [entry.key for entry in small.get_entries()] == ["lang"]


class TestFileAuditLogger:

    @pytest.mark.asyncio
    async def test_flush_appends_json_lines(self, tmp_path):
        path = tmp_path / "audit.log"
        logger = FileAuditLogger(path)
        logger.log(make_entry(key="a"))
        logger.log(make_entry(key="b"))

        assert logger.pending == 2
        await logger.flush()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["key"] for line in lines] == ["a", "b"]
        assert logger.pending == 0
        assert logger.count() == 2

    @pytest.mark.asyncio
    async def test_failed_flush_requeues(self, tmp_path):
        logger = FileAuditLogger(tmp_path)
        logger.log(make_entry(key="a"))

        await logger.flush()

        assert logger.pending == 1

    @pytest.mark.asyncio
    async def test_requeued_entries_stay_in_order(self, tmp_path):
        logger = FileAuditLogger(tmp_path)
        logger.log(make_entry(key="a"))
        await logger.flush()
        logger.log(make_entry(key="b"))

        logger.file_path = tmp_path / "audit.log"
        await logger.flush()

        lines = logger.file_path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["key"] for line in lines] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_periodic_flush_and_stop(self, tmp_path):
        path = tmp_path / "audit.log"
        logger = FileAuditLogger(path, flush_interval=0.01)
        logger.start()
        logger.log(make_entry(key="a"))

        for _ in range(100):
            if path.exists() and path.read_text(encoding="utf-8"):
                break
            await asyncio.sleep(0.01)

        logger.log(make_entry(key="b"))
        await logger.stop()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["key"] for line in lines] == ["a", "b"]

    def test_clear_drops_pending(self, tmp_path):
        logger = FileAuditLogger(tmp_path / "audit.log")
        logger.log(make_entry())

        logger.clear()

        assert logger.pending == 0
        assert logger.count() == 0


class TestLoggingAuditLogger:

    def test_writes_log_record(self, caplog):
        audit = LoggingAuditLogger()

        with caplog.at_level(logging.INFO, logger="neo_preferences.audit"):
            audit.log(make_entry(AuditAction.SET, "theme", "memory", value={"mode": "dark"}))

        record = caplog.records[-1]
        assert record.name == "neo_preferences.audit"
        assert "SET theme (memory)" in record.getMessage()
        assert '{"mode": "dark"}' in record.getMessage()
        assert audit.get_entries() == []


class TestNoOpAuditLogger:

    def test_stores_nothing(self):
        audit = NoOpAuditLogger()

        audit.log(make_entry())
        audit.clear()

        assert audit.get_entries() == []
