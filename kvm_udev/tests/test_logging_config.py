"""Tests for logging configuration (logging_config.py).

This module tests:
- SensorJSONFormatter log output format
- SensorTextFormatter log output format
- setup_sensor_logging() function configuration
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime

import pytest

from kvm_udev.config import settings
from kvm_udev.logging_config import (
    SensorJSONFormatter,
    SensorTextFormatter,
    setup_sensor_logging,
)


def _record(msg="kvm_created pid=1 uuid=x", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="kvm_udev.trace",
        level=level,
        pathname="sink.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestSensorJSONFormatter:
    """Tests for SensorJSONFormatter."""

    def test_base_fields(self):
        entry = json.loads(SensorJSONFormatter("hv1").format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "kvm_udev.trace"
        assert entry["message"] == "kvm_created pid=1 uuid=x"
        assert entry["service"] == "kvm-udev"
        assert entry["host"] == "hv1"
        datetime.fromisoformat(entry["timestamp"])

    def test_host_omitted_when_empty(self):
        entry = json.loads(SensorJSONFormatter().format(_record()))
        assert "host" not in entry

    def test_trace_fields_in_extra(self):
        record = _record(event="kvm_created", pid=4321, uuid="abcd-1234")
        entry = json.loads(SensorJSONFormatter().format(record))

        assert entry["extra"] == {"event": "kvm_created", "pid": 4321, "uuid": "abcd-1234"}

    def test_non_serializable_extra_is_stringified(self):
        entry = json.loads(SensorJSONFormatter().format(_record(obj=object())))
        assert entry["extra"]["obj"].startswith("<object object")

    def test_exception_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        entry = json.loads(SensorJSONFormatter().format(record))
        assert "RuntimeError: boom" in entry["exception"]


class TestSensorTextFormatter:
    """Tests for SensorTextFormatter."""

    def test_format(self):
        line = SensorTextFormatter("hv1").format(_record())
        assert "INFO" in line
        assert "[hv1]" in line
        assert "kvm_udev.trace: kvm_created pid=1 uuid=x" in line

    def test_without_host(self):
        line = SensorTextFormatter().format(_record())
        assert "[hv1]" not in line


class TestSetupSensorLogging:
    """Tests for setup_sensor_logging()."""

    def test_json_format(self, monkeypatch, restore_root_logger):
        monkeypatch.setattr(settings, "log_format", "json")
        monkeypatch.setattr(settings, "log_level", "debug")

        setup_sensor_logging("hv1")

        [handler] = restore_root_logger.handlers
        assert isinstance(handler.formatter, SensorJSONFormatter)
        assert handler.formatter.host == "hv1"
        assert restore_root_logger.level == logging.DEBUG

    def test_text_format(self, monkeypatch, restore_root_logger):
        monkeypatch.setattr(settings, "log_format", "text")
        monkeypatch.setattr(settings, "log_level", "WARNING")

        setup_sensor_logging()

        [handler] = restore_root_logger.handlers
        assert isinstance(handler.formatter, SensorTextFormatter)
        assert restore_root_logger.level == logging.WARNING

    def test_invalid_level_defaults_to_info(self, monkeypatch, restore_root_logger):
        monkeypatch.setattr(settings, "log_level", "LOUD")

        setup_sensor_logging()

        assert restore_root_logger.level == logging.INFO

    def test_quiets_third_party_loggers(self, restore_root_logger):
        setup_sensor_logging()
        assert logging.getLogger("httpx").level == logging.WARNING
