from __future__ import annotations

import pytest

from kbo_stats.config import settings

from tests.pages import PROFILE_HTML, SEARCH_HTML


@pytest.fixture
def search_html() -> str:
    return SEARCH_HTML


@pytest.fixture
def profile_html() -> str:
    return PROFILE_HTML


@pytest.fixture
def fast_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "fetch_backoff_seconds", 0.0)
    monkeypatch.setattr(settings, "fetch_max_attempts", 3)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
