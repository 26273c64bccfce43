# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for the RIS HTTP transport."""

import httpx
import pytest
from structlog.testing import capture_logs

from ris_client.errors import ConfigurationError, RisErrorCode, TransportError
from ris_client.transport import API_KEY_HEADER, RisTransport

URL = "https://risk.test.example.com"


def make_transport(handler, **kwargs) -> RisTransport:
    kwargs.setdefault("api_key", "test-api-key")
    return RisTransport(URL, 5000, transport=httpx.MockTransport(handler), **kwargs)


class TestConstruction:
    """Tests for authentication mode selection."""

    def test_api_key(self):
        transport = RisTransport(URL, 5000, api_key="key")
        assert transport.uses_api_key
        assert transport.certificate_file is None

    def test_certificate(self):
        transport = RisTransport(URL, 5000, certificate_file="client.pem", private_key_password="pw")
        assert not transport.uses_api_key
        assert transport.certificate_file == "client.pem"
        assert transport.private_key_password == "pw"

    def test_both_rejected(self):
        with pytest.raises(ConfigurationError, match="not both"):
            RisTransport(URL, 5000, api_key="key", certificate_file="client.pem")

    @pytest.mark.parametrize("api_key, certificate_file", [(None, None), ("", ""), ("", None)])
    def test_neither_rejected(self, api_key, certificate_file):
        with pytest.raises(ConfigurationError):
            RisTransport(URL, 5000, api_key=api_key, certificate_file=certificate_file)


class TestPost:
    """Tests for RisTransport.post()."""

    def test_posts_form_with_api_key(self, ris_handler):
        transport = make_transport(ris_handler)
        body = transport.post([("MERC", 999666), ("MODE", "Q"), ("PTOK", "")])

        assert body.startswith("VERS=0695")
        request = ris_handler.requests[0]
        assert request.method == "POST"
        assert request.headers[API_KEY_HEADER] == "test-api-key"
        assert ris_handler.last_form == {"MERC": "999666", "MODE": "Q", "PTOK": ""}

    def test_special_characters_encoded(self, ris_handler):
        transport = make_transport(ris_handler)
        transport.post([("EMAL", "jane+doe@example.com"), ("UDF[tier]", "gold & silver")])
        form = ris_handler.last_form
        assert form["EMAL"] == "jane+doe@example.com"
        assert form["UDF[tier]"] == "gold & silver"

    def test_missing_url(self, ris_handler):
        transport = RisTransport(
            None, 5000, api_key="key", transport=httpx.MockTransport(ris_handler)
        )
        with pytest.raises(ConfigurationError) as exc_info:
            transport.post([("MODE", "Q")])
        assert exc_info.value.parameter == "RIS_URL"
        assert ris_handler.requests == []

    @pytest.mark.parametrize("status_code", [400, 401, 500, 503])
    def test_http_error_status(self, status_code):
        transport = make_transport(lambda request: httpx.Response(status_code, text="nope"))
        with pytest.raises(TransportError) as exc_info:
            transport.post([("MODE", "Q")])
        error = exc_info.value
        assert error.code == RisErrorCode.TRANSPORT_ERROR
        assert error.status_code == status_code
        assert error.details["url"] == URL

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(TransportError, match="connection refused") as exc_info:
            transport.post([("MODE", "Q")])
        assert exc_info.value.status_code is None

    def test_timeout(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            make_transport(handler).post([("MODE", "Q")])

    def test_unreadable_certificate(self, ris_handler, tmp_path):
        transport = RisTransport(
            URL,
            5000,
            certificate_file=str(tmp_path / "absent.pem"),
            private_key_password="pw",
            transport=httpx.MockTransport(ris_handler),
        )
        with pytest.raises(ConfigurationError) as exc_info:
            transport.post([("MODE", "Q")])
        assert exc_info.value.parameter == "RIS_CERTIFICATE_FILE"
        assert ris_handler.requests == []


class TestBuildForm:
    """Tests for form building."""

    def test_values_stringified(self):
        form = RisTransport.build_form([("TOTL", 1500), ("MODE", "Q")])
        assert form == {"TOTL": "1500", "MODE": "Q"}

    def test_payment_token_not_logged(self):
        with capture_logs() as logs:
            RisTransport.build_form([("PTOK", "411111ABCDEFGHIJKLMN"), ("MODE", "Q")])
        fields = {entry["field"]: entry["value"] for entry in logs}
        assert fields == {"PTOK": "payment token hidden", "MODE": "Q"}
