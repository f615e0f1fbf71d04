from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from kbo_stats.scraper.extract import DocumentParseError, extract_candidates, extract_profile
from kbo_stats.scraper.koreabaseball import UpstreamFetchError
from kbo_stats.services.lookup import find_player, get_player_record, search_players
from kbo_stats.services.projection import format_rate, project


def _dump(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Look up KBO players and season batting stats.")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--search", metavar="QUERY", help="Print search candidates for QUERY")
    mode.add_argument("--lookup", metavar="QUERY", help="Resolve QUERY to one player and print the record")
    mode.add_argument("--player-id", metavar="ID", help="Print the record for one KBO player id")
    mode.add_argument("--file", type=Path, metavar="PATH", help="Extract from a saved HTML page (no network)")
    parser.add_argument(
        "--kind",
        choices=("search", "profile"),
        default="profile",
        help="Page kind for --file (default: profile)",
    )
    parser.add_argument("--season", type=int, default=None, help="Season year (default: current year)")
    parser.add_argument("--id", dest="file_player_id", default="", help="Player id to stamp on --file profiles")
    return parser


async def run(args: argparse.Namespace) -> int:
    season = args.season if args.season is not None else datetime.now(timezone.utc).year

    if args.file is not None:
        html = args.file.read_text(encoding="utf-8")
        if args.kind == "search":
            _dump([c.to_dict() for c in extract_candidates(html, "")])
        else:
            record = extract_profile(html, args.file_player_id, season)
            _dump({**record.to_dict(), "projection": format_rate(project(record.stats))})
        return 0

    given = next(v for v in (args.search, args.lookup, args.player_id) if v is not None)
    if not given.strip():
        print("query is required", file=sys.stderr)
        return 1

    if args.search is not None:
        candidates = await search_players(args.search.strip())
        _dump([c.to_dict() for c in candidates])
        return 0

    if args.lookup is not None:
        candidate = await find_player(args.lookup)
        if candidate is None:
            print(f"No player found for {args.lookup!r}", file=sys.stderr)
            return 1
        player_id = candidate.id
    else:
        player_id = args.player_id.strip()

    record = await get_player_record(player_id, season)
    _dump({**record.to_dict(), "projection": format_rate(project(record.stats))})
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except (UpstreamFetchError, DocumentParseError) as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
