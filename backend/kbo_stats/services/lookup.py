from __future__ import annotations

import logging
import re
from collections.abc import Sequence

import httpx

from kbo_stats.scraper.extract import PlayerCandidate, PlayerRecord, extract_candidates, extract_profile
from kbo_stats.scraper.koreabaseball import fetch_player_page, fetch_search_page

logger = logging.getLogger("kbo_stats.lookup")

_ALL_DIGITS = re.compile(r"^[0-9]+$")


def select_candidate(candidates: Sequence[PlayerCandidate], query: str | None) -> PlayerCandidate | None:
    """
    Pick one player out of an already-ranked search result.

    An all-digit query is matched against ``id``, anything else against the exact
    ``name``. Without an exact hit the first (most relevant) candidate wins.
    Returns None for a blank query or an empty result.
    """
    trimmed = (query or "").strip()
    if not trimmed or not candidates:
        return None

    if _ALL_DIGITS.match(trimmed):
        match = next((c for c in candidates if str(c.id) == trimmed), None)
    else:
        match = next((c for c in candidates if c.name == trimmed), None)
    return match if match is not None else candidates[0]


async def search_players(query: str, client: httpx.AsyncClient | None = None) -> list[PlayerCandidate]:
    html = await fetch_search_page(query, client)
    return extract_candidates(html, query)


async def find_player(query: str | None, client: httpx.AsyncClient | None = None) -> PlayerCandidate | None:
    trimmed = (query or "").strip()
    if not trimmed:
        return None

    candidates = await search_players(trimmed, client)
    player = select_candidate(candidates, trimmed)
    logger.info(
        "lookup query=%r candidates=%d selected=%s",
        trimmed,
        len(candidates),
        player.id if player else None,
    )
    return player


async def get_player_record(
    player_id: int | str,
    season: int | str,
    client: httpx.AsyncClient | None = None,
) -> PlayerRecord:
    html = await fetch_player_page(player_id, client)
    return extract_profile(html, player_id, season)
