from kbo_stats.schemas.player import PlayerCandidateOut, PlayerProfileOut, PlayerRecordOut, SeasonStatOut
from kbo_stats.schemas.projection import ProjectionOut

__all__ = [
    "PlayerCandidateOut",
    "PlayerProfileOut",
    "PlayerRecordOut",
    "ProjectionOut",
    "SeasonStatOut",
]
