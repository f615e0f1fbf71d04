from __future__ import annotations

from typing import Literal

from kbo_stats.schemas.base import WireBaseModel


class ProjectionOut(WireBaseModel):
    player_id: str
    season: str
    avg: float
    # Same value rounded half-up and rendered with three decimals, e.g. "0.275".
    display: str
    method: Literal["current_average"] = "current_average"
    has_stats: bool
