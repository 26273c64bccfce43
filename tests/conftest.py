# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pytest configuration and shared fixtures."""

import os
from urllib.parse import parse_qs

import httpx
import pytest

from ris_client.config import Settings, clear_settings_cache
from ris_client.schema import clear_schema_cache

MERCHANT_ID = 999666
RIS_URL = "https://risk.test.example.com"
KHASH_SALT = "fake-salt-for-tests-only"
API_KEY = "test-api-key"

RIS_RESPONSE_BODY = "VERS=0695\nMODE=Q\nTRAN=P04S03NB1D3X\nAUTO=A\nSCOR=34\n"


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Isolate tests from RIS_* variables and cached settings/schema."""
    for key in list(os.environ):
        if key.upper().startswith("RIS_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    clear_schema_cache()
    yield
    clear_settings_cache()
    clear_schema_cache()


def make_settings(**overrides) -> Settings:
    """Build settings for a fully configured API-key client."""
    values = {
        "merchant_id": MERCHANT_ID,
        "url": RIS_URL,
        "khash_salt": KHASH_SALT,
        "connect_timeout": 5000,
        "api_key": API_KEY,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    """Fully configured settings."""
    return make_settings()


@pytest.fixture
def settings_factory():
    """Build settings with overrides."""
    return make_settings


class RecordingHandler:
    """httpx MockTransport handler that records posted requests."""

    def __init__(self, status_code: int = 200, body: str = RIS_RESPONSE_BODY) -> None:
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_form(self) -> dict[str, str]:
        """Decode the last posted form body."""
        body = self.requests[-1].content.decode("ascii")
        return {key: values[0] for key, values in parse_qs(body, keep_blank_values=True).items()}


@pytest.fixture
def ris_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def mock_transport(ris_handler) -> httpx.MockTransport:
    return httpx.MockTransport(ris_handler)
