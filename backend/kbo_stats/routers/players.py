from __future__ import annotations

from datetime import datetime, timezone

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status

from kbo_stats.schemas.player import PlayerRecordOut
from kbo_stats.schemas.projection import ProjectionOut
from kbo_stats.scraper.koreabaseball import get_http_client
from kbo_stats.services.lookup import find_player, get_player_record
from kbo_stats.services.projection import PROJECTION_METHOD, format_rate, project

router = APIRouter(tags=["players"])


def current_season() -> int:
    return datetime.now(timezone.utc).year


def _season_or_current(season: int | None) -> int:
    # Read the clock here, at the edge; extraction only ever sees an explicit season.
    return season if season is not None else current_season()


@router.get("/player/{player_id}", response_model=PlayerRecordOut)
async def get_player(
    player_id: str,
    season: int | None = Query(default=None, description="Season year; defaults to the current year"),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> PlayerRecordOut:
    record = await get_player_record(player_id, _season_or_current(season), client)
    return PlayerRecordOut.from_record(record)


@router.get("/player/{player_id}/projection", response_model=ProjectionOut)
async def get_player_projection(
    player_id: str,
    season: int | None = Query(default=None, description="Season year; defaults to the current year"),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> ProjectionOut:
    season_value = _season_or_current(season)
    record = await get_player_record(player_id, season_value, client)
    projected = project(record.stats)
    return ProjectionOut(
        player_id=record.player.id,
        season=str(season_value),
        avg=float(projected),
        display=format_rate(projected),
        method=PROJECTION_METHOD,
        has_stats=record.stats is not None,
    )


@router.get("/lookup", response_model=PlayerRecordOut)
async def lookup_player(
    query: str | None = Query(default=None, description="Exact player name or all-digit KBO player id"),
    season: int | None = Query(default=None, description="Season year; defaults to the current year"),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> PlayerRecordOut:
    """
    Resolve a free-text query to one player (id match, then exact name, then the
    top search hit) and return that player's record.
    """
    if not (query or "").strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="query is required")
    candidate = await find_player(query, client)
    if candidate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Player not found")
    record = await get_player_record(candidate.id, _season_or_current(season), client)
    return PlayerRecordOut.from_record(record)
