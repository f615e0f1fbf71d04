from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from kbo_stats.schemas.player import PlayerCandidateOut
from kbo_stats.scraper.koreabaseball import get_http_client
from kbo_stats.services.lookup import search_players

router = APIRouter(tags=["search"])


@router.get("/search", response_model=list[PlayerCandidateOut])
async def search(
    query: str | None = Query(default=None, description="Player name or KBO player id"),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> list[PlayerCandidateOut]:
    trimmed = (query or "").strip()
    if not trimmed:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="query is required")
    candidates = await search_players(trimmed, client)
    return [PlayerCandidateOut.from_row(c) for c in candidates]
