# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""HTTP transport for RIS requests.

Posts a finished request as an ``application/x-www-form-urlencoded`` body.
Two authentication modes are supported, chosen at construction:

1. API key (recommended): sent in the ``X-Kount-Api-Key`` header
2. Client certificate (deprecated): PEM file holding the certificate and
   its private key, unlocked with the private key password
"""

import ssl
from collections.abc import Iterable

import httpx
import structlog

from .errors import ConfigurationError, TransportError
from .record import HIDDEN_FIELDS, HIDDEN_VALUE, FieldValue

logger = structlog.get_logger(__name__)

API_KEY_HEADER = "X-Kount-Api-Key"


class RisTransport:
    """Synchronous RIS HTTP client.

    Example usage:
        transport = RisTransport(url, connect_timeout=5000, api_key=key)
        body = transport.post(record.items())
    """

    def __init__(
        self,
        url: str | None,
        connect_timeout: int,
        api_key: str | None = None,
        certificate_file: str | None = None,
        private_key_password: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Args:
            url: RIS endpoint URL
            connect_timeout: Timeout in milliseconds
            api_key: API key, excludes certificate authentication
            certificate_file: PEM file with certificate and private key
            private_key_password: Password of the private key
            transport: httpx transport override (tests, proxies)
        """
        if api_key and certificate_file:
            raise ConfigurationError(
                "RIS_API_KEY",
                "Configure either an API key or a client certificate, not both",
            )
        if not api_key and not certificate_file:
            raise ConfigurationError(
                "RIS_API_KEY",
                "An API key or a client certificate must be configured",
            )

        self.url = url
        self.connect_timeout = connect_timeout
        self._api_key = api_key or None
        self._certificate_file = certificate_file or None
        self._private_key_password = private_key_password
        self._transport = transport

    @property
    def uses_api_key(self) -> bool:
        return self._api_key is not None

    @property
    def certificate_file(self) -> str | None:
        return self._certificate_file

    @property
    def private_key_password(self) -> str | None:
        return self._private_key_password

    def _headers(self) -> dict[str, str]:
        if self._api_key:
            logger.debug("Setting API key header")
            return {API_KEY_HEADER: self._api_key}
        logger.debug("API key not configured, using client certificate")
        return {}

    def _verify(self) -> ssl.SSLContext | bool:
        if self._api_key:
            return True
        context = ssl.create_default_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        try:
            context.load_cert_chain(
                self._certificate_file,
                password=self._private_key_password,
            )
        except OSError as e:
            logger.error(
                "Client certificate could not be loaded",
                certificate_file=self._certificate_file,
                error=str(e),
            )
            raise ConfigurationError(
                "RIS_CERTIFICATE_FILE",
                f"Client certificate could not be loaded: {e}",
            ) from e
        return context

    @staticmethod
    def build_form(params: Iterable[tuple[str, FieldValue]]) -> dict[str, str]:
        """Convert request fields to form data, logging each field."""
        form: dict[str, str] = {}
        for key, value in params:
            form[key] = str(value)
            shown = HIDDEN_VALUE if key in HIDDEN_FIELDS else form[key]
            logger.debug("Request field", field=key, value=shown)
        return form

    def post(self, params: Iterable[tuple[str, FieldValue]]) -> str:
        """Post request fields to RIS and return the raw response body.

        Raises:
            ConfigurationError: if no endpoint URL is set
            TransportError: on network failures and HTTP error statuses
        """
        if not self.url:
            raise ConfigurationError("RIS_URL")

        form = self.build_form(params)
        timeout = httpx.Timeout(self.connect_timeout / 1000)
        verify = self._verify()

        try:
            with httpx.Client(
                timeout=timeout,
                verify=verify,
                transport=self._transport,
            ) as client:
                resp = client.post(self.url, data=form, headers=self._headers())
                resp.raise_for_status()
                return resp.text
        except httpx.HTTPStatusError as e:
            logger.error(
                "RIS error response",
                status_code=e.response.status_code,
                url=self.url,
            )
            raise TransportError(
                f"RIS returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                url=self.url,
            ) from e
        except httpx.RequestError as e:
            logger.error("RIS request failed", url=self.url, error=str(e))
            raise TransportError(f"RIS request failed: {e}", url=self.url) from e
