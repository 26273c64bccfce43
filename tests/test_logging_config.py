# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from ris_client.logging_config import app_context, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root handlers and structlog defaults after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(logging.NOTSET)
    logging.getLogger("httpcore").setLevel(logging.NOTSET)


def test_app_context(settings_factory):
    processor = app_context(settings_factory())
    event = processor(None, "info", {"event": "hello"})
    assert event["service"] == "ris-client"
    assert event["environment"] == "dev"


def test_app_context_uses_given_settings(monkeypatch, settings_factory):
    """The environment comes from the settings passed in, not the process ones."""
    processor = app_context(settings_factory(environment="prod"))
    monkeypatch.setenv("RIS_MERCHANT_ID", "not-a-number")
    assert processor(None, "info", {})["environment"] == "prod"


def test_app_context_keeps_existing(settings_factory):
    processor = app_context(settings_factory())
    event = processor(None, "info", {"event": "hello", "service": "checkout"})
    assert event["service"] == "checkout"


def test_configured_environment_logged(capsys, settings_factory):
    configure_logging(settings_factory(environment="staging", log_format="json"))
    get_logger("ris_client.test").info("Request sent")

    entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert entry["environment"] == "staging"


def test_json_output(capsys, settings_factory):
    configure_logging(settings_factory(log_level="debug", log_format="json"))
    get_logger("ris_client.test").info("Request sent", mode="Q")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "Request sent"
    assert entry["mode"] == "Q"
    assert entry["level"] == "info"
    assert entry["service"] == "ris-client"
    assert entry["logger"] == "ris_client.test"


def test_text_output(capsys, settings_factory):
    configure_logging(settings_factory(log_format="text"))
    get_logger("ris_client.test").warning("No KHASH salt configured")
    assert "No KHASH salt configured" in capsys.readouterr().out


def test_levels(settings_factory):
    configure_logging(settings_factory(log_level="ERROR"))
    assert logging.getLogger().level == logging.ERROR
    assert logging.getLogger("httpx").level == logging.WARNING
    assert len(logging.getLogger().handlers) == 1
