from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from urllib.parse import quote

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from kbo_stats.config import settings

logger = logging.getLogger("kbo_stats.scraper")

_RETRY_STATUSES = {408, 425, 429, 500, 502, 503, 504}


class UpstreamFetchError(RuntimeError):
    """The upstream page could not be fetched (network error, timeout, non-2xx)."""

    def __init__(self, *, url: str, status_code: int | None = None, reason: str | None = None):
        detail = f"HTTP {status_code}" if status_code is not None else (reason or "request failed")
        super().__init__(f"Upstream fetch failed ({detail}): {url}")
        self.url = url
        self.status_code = status_code
        self.reason = reason


def _retry_on(e: BaseException) -> bool:
    if isinstance(e, httpx.TransportError):
        return True
    if isinstance(e, httpx.HTTPStatusError):
        return e.response.status_code in _RETRY_STATUSES
    return False


def browser_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.kbo_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
    }


def search_url(query: str) -> str:
    base = settings.kbo_base_url.rstrip("/")
    return f"{base}/Player/FindPlayer/FindPlayerAjax.aspx?keyword={quote(query, safe='')}"


def player_url(player_id: int | str) -> str:
    base = settings.kbo_base_url.rstrip("/")
    return f"{base}/Player/PlayerInfo/PlayerDetailInfo.aspx?playerId={quote(str(player_id), safe='')}"


async def _get_once(client: httpx.AsyncClient, url: str) -> str:
    resp = await client.get(url, timeout=settings.request_timeout_seconds, follow_redirects=True)
    logger.info("fetch url=%s status=%s", url, resp.status_code)
    resp.raise_for_status()
    return resp.text


async def _get(client: httpx.AsyncClient, url: str) -> str:
    retrying = AsyncRetrying(
        stop=stop_after_attempt(settings.fetch_max_attempts),
        wait=wait_exponential(multiplier=settings.fetch_backoff_seconds, max=8),
        retry=retry_if_exception(_retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    try:
        return await retrying(_get_once, client, url)
    except httpx.HTTPStatusError as exc:
        raise UpstreamFetchError(url=url, status_code=exc.response.status_code) from exc
    except httpx.HTTPError as exc:
        # Transport errors, timeouts, invalid URLs.
        raise UpstreamFetchError(url=url, reason=type(exc).__name__) from exc


async def fetch_page(url: str, client: httpx.AsyncClient | None = None) -> str:
    if client is not None:
        return await _get(client, url)
    async with httpx.AsyncClient(headers=browser_headers()) as own_client:
        return await _get(own_client, url)


async def fetch_search_page(query: str, client: httpx.AsyncClient | None = None) -> str:
    return await fetch_page(search_url(query), client)


async def fetch_player_page(player_id: int | str, client: httpx.AsyncClient | None = None) -> str:
    return await fetch_page(player_url(player_id), client)


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """FastAPI dependency: one upstream client per request."""
    async with httpx.AsyncClient(headers=browser_headers()) as client:
        yield client
