from __future__ import annotations

from typing import Any

from pydantic import Field, field_serializer, field_validator

from kbo_stats.schemas.base import WireBaseModel
from kbo_stats.scraper.extract import PlayerCandidate, PlayerProfile, PlayerRecord, SeasonStat


class PlayerCandidateOut(WireBaseModel):
    id: str
    name: str
    team: str
    position: str
    image: str | None = None

    @classmethod
    def from_row(cls, row: PlayerCandidate) -> PlayerCandidateOut:
        return cls.model_validate(row.to_dict())


class PlayerProfileOut(WireBaseModel):
    id: str
    name: str = ""
    team: str = ""
    position: str = ""
    birth: str = ""
    height: str = ""
    weight: str = ""
    image: str | None = None

    @classmethod
    def from_row(cls, row: PlayerProfile) -> PlayerProfileOut:
        return cls.model_validate(row.to_dict())


class SeasonStatOut(WireBaseModel):
    season: str
    team: str = ""
    g: int = Field(default=0, alias="G")
    pa: int = Field(default=0, alias="PA")
    ab: int = Field(default=0, alias="AB")
    r: int = Field(default=0, alias="R")
    h: int = Field(default=0, alias="H")
    doubles: int = Field(default=0, alias="2B")
    triples: int = Field(default=0, alias="3B")
    hr: int = Field(default=0, alias="HR")
    rbi: int = Field(default=0, alias="RBI")
    sb: int = Field(default=0, alias="SB")
    cs: int = Field(default=0, alias="CS")
    bb: int = Field(default=0, alias="BB")
    hbp: int = Field(default=0, alias="HBP")
    so: int = Field(default=0, alias="SO")
    gdp: int = Field(default=0, alias="GDP")
    avg: float = Field(default=0.0, alias="AVG")
    obp: float = Field(default=0.0, alias="OBP")
    slg: float = Field(default=0.0, alias="SLG")
    ops: float = Field(default=0.0, alias="OPS")

    @classmethod
    def from_row(cls, row: SeasonStat) -> SeasonStatOut:
        return cls.model_validate(row.to_dict())


class PlayerRecordOut(WireBaseModel):
    player: PlayerProfileOut
    # Serialized as {} (not null) when the requested season has no row.
    stats: SeasonStatOut | None = None
    career: list[SeasonStatOut] = Field(default_factory=list)

    @field_validator("stats", mode="before")
    @classmethod
    def _empty_means_no_season(cls, value: Any) -> Any:
        if value is None or value == {}:
            return None
        return value

    @field_serializer("stats")
    def _stats_or_empty(self, stats: SeasonStatOut | None) -> dict[str, Any]:
        if stats is None:
            return {}
        return stats.model_dump(by_alias=True)

    @classmethod
    def from_record(cls, record: PlayerRecord) -> PlayerRecordOut:
        return cls.model_validate(record.to_dict())
