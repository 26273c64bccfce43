# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""RIS response body reader.

RIS answers with one ``KEY=VALUE`` pair per line. This module only exposes
the pairs; interpreting scores and decisions is left to the caller.
"""

import re

import structlog

logger = structlog.get_logger(__name__)

_ERROR_KEY = re.compile(r"ERROR_\d+")
_WARNING_KEY = re.compile(r"WARNING_\d+")


class RisResponse:
    """Key/value view of a raw RIS response."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self._params: dict[str, str] = {}

        for line in raw.splitlines():
            line = line.strip()
            if not line:
                continue
            key, sep, value = line.partition("=")
            if not sep:
                logger.warning("Ignoring malformed response line", line=line)
                continue
            self._params[key.strip()] = value

    @property
    def params(self) -> dict[str, str]:
        return dict(self._params)

    def get_param(self, key: str) -> str | None:
        """Return a response value, or None when absent."""
        return self._params.get(key)

    @property
    def mode(self) -> str | None:
        return self._params.get("MODE")

    @property
    def transaction_id(self) -> str | None:
        return self._params.get("TRAN")

    @property
    def errors(self) -> list[str]:
        """Return the ERROR_<n> values in index order."""
        return self._indexed(_ERROR_KEY)

    @property
    def warnings(self) -> list[str]:
        """Return the WARNING_<n> values in index order."""
        return self._indexed(_WARNING_KEY)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def _indexed(self, pattern: re.Pattern[str]) -> list[str]:
        keys = [key for key in self._params if pattern.fullmatch(key)]
        keys.sort(key=lambda k: int(k.rsplit("_", 1)[1]))
        return [self._params[key] for key in keys]

    def __repr__(self) -> str:
        return f"RisResponse(mode={self.mode!r}, params={len(self._params)})"
