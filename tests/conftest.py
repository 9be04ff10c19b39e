"""Fixtures compartidas: settings aislados del entorno y cookie stores falsos."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.config import AppSettings
from core.domain.models import CookieRecord

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakeCookieStore:
    def __init__(self, name: str, records: list[CookieRecord] | None = None, error: Exception | None = None):
        self.name = name
        self._records = records or []
        self._error = error
        self.calls = 0

    def list_cookies(self) -> list[CookieRecord]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._records)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, request_delay_seconds=0)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
