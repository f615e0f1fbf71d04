from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

logger = logging.getLogger("kbo_stats.scraper")

# Selectors for the KBO player pages. These match the canonical intermediate
# markup; a new scraping backend only has to produce the same classes.
_SEARCH_ITEM_SELECTOR = ".player-list .player-item"
# No "tbody" in the selector: lxml does not insert an implied <tbody>.
_STATS_ROW_SELECTOR = ".record-table tr"

_MARKUP_TAG = re.compile(r"<\s*[A-Za-z!?/]")
_MARKUP_TAG_BYTES = re.compile(rb"<\s*[A-Za-z!?/]")
_INT_PREFIX = re.compile(r"^[+-]?[0-9]+")
_FLOAT_PREFIX = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class DocumentParseError(ValueError):
    """Raised when a fetched document cannot be read as HTML at all."""

    def __init__(self, reason: str):
        super().__init__(f"Cannot parse document: {reason}")
        self.reason = reason


ColumnKind = Literal["text", "int", "rate"]


@dataclass(frozen=True)
class StatColumn:
    index: int
    attr: str
    key: str
    kind: ColumnKind


# Positional contract with the upstream record table. Upstream reordering its
# columns silently shifts every value, so this table is the one place to edit.
SEASON_STAT_COLUMNS: tuple[StatColumn, ...] = (
    StatColumn(0, "season", "season", "text"),
    StatColumn(1, "team", "team", "text"),
    StatColumn(2, "g", "G", "int"),
    StatColumn(3, "pa", "PA", "int"),
    StatColumn(4, "ab", "AB", "int"),
    StatColumn(5, "r", "R", "int"),
    StatColumn(6, "h", "H", "int"),
    StatColumn(7, "doubles", "2B", "int"),
    StatColumn(8, "triples", "3B", "int"),
    StatColumn(9, "hr", "HR", "int"),
    StatColumn(10, "rbi", "RBI", "int"),
    StatColumn(11, "sb", "SB", "int"),
    StatColumn(12, "cs", "CS", "int"),
    StatColumn(13, "bb", "BB", "int"),
    StatColumn(14, "hbp", "HBP", "int"),
    StatColumn(15, "so", "SO", "int"),
    StatColumn(16, "gdp", "GDP", "int"),
    StatColumn(17, "avg", "AVG", "rate"),
    StatColumn(18, "obp", "OBP", "rate"),
    StatColumn(19, "slg", "SLG", "rate"),
    StatColumn(20, "ops", "OPS", "rate"),
)


@dataclass(frozen=True)
class PlayerCandidate:
    id: str
    name: str
    team: str
    position: str
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "team": self.team, "position": self.position, "image": self.image}


@dataclass(frozen=True)
class PlayerProfile:
    id: str
    name: str = ""
    team: str = ""
    position: str = ""
    birth: str = ""
    height: str = ""
    weight: str = ""
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "team": self.team,
            "position": self.position,
            "birth": self.birth,
            "height": self.height,
            "weight": self.weight,
            "image": self.image,
        }


@dataclass(frozen=True)
class SeasonStat:
    season: str
    team: str = ""
    g: int = 0
    pa: int = 0
    ab: int = 0
    r: int = 0
    h: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    rbi: int = 0
    sb: int = 0
    cs: int = 0
    bb: int = 0
    hbp: int = 0
    so: int = 0
    gdp: int = 0
    avg: float = 0.0
    obp: float = 0.0
    slg: float = 0.0
    ops: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Wire form, keyed by the upstream column labels (``G``, ``2B``, ...) in column order."""
        return {col.key: getattr(self, col.attr) for col in SEASON_STAT_COLUMNS}


@dataclass(frozen=True)
class PlayerRecord:
    player: PlayerProfile
    # None when no career row matches the requested season.
    stats: SeasonStat | None = None
    career: tuple[SeasonStat, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player.to_dict(),
            "stats": self.stats.to_dict() if self.stats is not None else {},
            "career": [row.to_dict() for row in self.career],
        }


def _parse_int(s: str | None) -> int:
    """
    Base-10 parse of the leading digits ("12", " 7 ", "3*" -> 3). Anything else is 0.
    """
    if not s:
        return 0
    m = _INT_PREFIX.match(s.strip())
    return int(m.group(0)) if m else 0


def _parse_rate(s: str | None) -> float:
    """
    Decimal parse of the leading number (".275", "0.9", "1.000"). Dashes, blanks and text are 0.
    """
    if not s:
        return 0.0
    m = _FLOAT_PREFIX.match(s.strip())
    if not m:
        return 0.0
    value = float(m.group(0))
    return value if math.isfinite(value) else 0.0


def _coerce(kind: ColumnKind, text: str) -> str | int | float:
    if kind == "int":
        return _parse_int(text)
    if kind == "rate":
        return _parse_rate(text)
    return text


def _text(node: Tag | None) -> str:
    if node is None:
        return ""
    return node.get_text().strip()


def _attr(node: Tag | None, name: str) -> str | None:
    if node is None:
        return None
    value = node.get(name)
    if value is None:
        return None
    # bs4 returns multi-valued attributes (class, rel, ...) as lists.
    if isinstance(value, list):
        value = " ".join(value)
    return str(value).strip()


def parse_document(raw: str | bytes) -> BeautifulSoup:
    """
    Parse raw HTML, refusing input that is not markup at all.

    lxml will happily wrap plain text or JSON in <html><body><p>, which would look like
    a page with no players. Catch that here so "unreadable" never turns into "no data".
    """
    if isinstance(raw, bytes):
        if not raw.strip():
            raise DocumentParseError("empty document")
        if not _MARKUP_TAG_BYTES.search(raw):
            raise DocumentParseError("no markup found")
    elif isinstance(raw, str):
        if not raw.strip():
            raise DocumentParseError("empty document")
        if not _MARKUP_TAG.search(raw):
            raise DocumentParseError("no markup found")
    else:
        raise DocumentParseError(f"unsupported input type {type(raw).__name__}")

    try:
        soup = BeautifulSoup(raw, "lxml")
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(str(exc)) from exc

    if soup.find(True) is None:
        raise DocumentParseError("no elements found")
    return soup


def extract_candidates(raw: str | bytes, query: str) -> list[PlayerCandidate]:
    """
    Parse a search-results page into candidates, in document order.

    ``query`` is only used for logging; matching it against the candidates is
    done by kbo_stats.services.lookup.select_candidate.
    """
    soup = parse_document(raw)

    out: list[PlayerCandidate] = []
    for item in soup.select(_SEARCH_ITEM_SELECTOR):
        out.append(
            PlayerCandidate(
                id=_attr(item, "data-player-id") or "",
                name=_text(item.select_one(".player-name")),
                team=_text(item.select_one(".player-team")),
                position=_text(item.select_one(".player-position")),
                image=_attr(item.select_one(".player-image"), "src"),
            )
        )

    logger.debug("search query=%r candidates=%d", query, len(out))
    return out


def _season_stat_from_cells(cells: list[Tag]) -> SeasonStat:
    values: dict[str, Any] = {}
    for col in SEASON_STAT_COLUMNS:
        text = _text(cells[col.index]) if col.index < len(cells) else ""
        values[col.attr] = _coerce(col.kind, text)
    return SeasonStat(**values)


def extract_career(soup: BeautifulSoup) -> list[SeasonStat]:
    rows: list[SeasonStat] = []
    for tr in soup.select(_STATS_ROW_SELECTOR):
        if tr.find_parent("thead") is not None:
            continue
        cells = tr.find_all("td")
        # Header/separator rows carry only <th> cells.
        if not cells:
            continue
        rows.append(_season_stat_from_cells(cells))
    return rows


def select_season(career: list[SeasonStat] | tuple[SeasonStat, ...], season: int | str) -> SeasonStat | None:
    """First career row whose season text equals ``str(season)``; rows are never re-sorted."""
    wanted = str(season)
    for row in career:
        if row.season == wanted:
            return row
    return None


def extract_profile(raw: str | bytes, player_id: int | str, season: int | str) -> PlayerRecord:
    """
    Parse a player detail page into a PlayerRecord.

    Missing identity elements become "" (image: None) and a missing record table
    becomes an empty career; only unreadable input raises DocumentParseError.
    """
    soup = parse_document(raw)

    profile = PlayerProfile(
        id=str(player_id),
        name=_text(soup.select_one(".player-name")),
        team=_text(soup.select_one(".player-team")),
        position=_text(soup.select_one(".player-position")),
        birth=_text(soup.select_one(".player-birth")),
        height=_text(soup.select_one(".player-height")),
        weight=_text(soup.select_one(".player-weight")),
        image=_attr(soup.select_one(".player-image"), "src"),
    )

    career = extract_career(soup)
    stats = select_season(career, season)
    logger.debug(
        "profile player_id=%s season=%s career_rows=%d matched=%s",
        player_id,
        season,
        len(career),
        stats is not None,
    )
    return PlayerRecord(player=profile, stats=stats, career=tuple(career))
