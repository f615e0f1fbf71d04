import httpx
import pytest

from kbo_stats.scraper.extract import PlayerCandidate
from kbo_stats.services.lookup import find_player, get_player_record, search_players, select_candidate

from tests.pages import EMPTY_SEARCH_HTML, kbo_handler


def _candidate(player_id: str, name: str) -> PlayerCandidate:
    return PlayerCandidate(id=player_id, name=name, team="한화", position="내야수")


CANDIDATES = [
    _candidate("1", "Lee Dae-Ho"),
    _candidate("12345", "Kim"),
    _candidate("777", "Kim Tae-Kun"),
]


def test_digit_query_matches_id_not_first():
    assert select_candidate(CANDIDATES, "12345") is CANDIDATES[1]


def test_digit_query_without_match_falls_back_to_first():
    assert select_candidate(CANDIDATES, "99999") is CANDIDATES[0]


def test_query_is_trimmed():
    assert select_candidate(CANDIDATES, "  12345\n") is CANDIDATES[1]


def test_exact_name_match_not_first():
    assert select_candidate(CANDIDATES, "Kim Tae-Kun") is CANDIDATES[2]


def test_name_match_is_exact():
    # "Kim" is an exact name of the second candidate, not a prefix of the third.
    assert select_candidate(CANDIDATES, "Kim") is CANDIDATES[1]
    assert select_candidate(CANDIDATES, "kim tae-kun") is CANDIDATES[0]


def test_name_without_match_falls_back_to_first():
    assert select_candidate(CANDIDATES, "Choo Shin-Soo") is CANDIDATES[0]


def test_digit_query_is_not_matched_against_names():
    candidates = [_candidate("1", "First"), _candidate("2", "12345")]

    assert select_candidate(candidates, "12345") is candidates[0]


@pytest.mark.parametrize("query", ["", "   ", None])
def test_blank_query_is_no_player(query):
    assert select_candidate(CANDIDATES, query) is None


def test_no_candidates_is_no_player():
    assert select_candidate([], "Kim") is None


@pytest.mark.anyio
async def test_find_player_uses_search_page():
    seen: list[httpx.URL] = []
    handler = kbo_handler()

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return handler(request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(recording)) as client:
        player = await find_player("  Kim Tae-Kun ", client)

    assert player is not None
    assert player.id == "12345"
    assert seen[0].params["keyword"] == "Kim Tae-Kun"


@pytest.mark.anyio
async def test_find_player_blank_query_makes_no_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await find_player("   ", client) is None


@pytest.mark.anyio
async def test_find_player_empty_search_is_no_player():
    async with httpx.AsyncClient(transport=httpx.MockTransport(kbo_handler(search=EMPTY_SEARCH_HTML))) as client:
        assert await find_player("Nobody", client) is None
        assert await search_players("Nobody", client) == []


@pytest.mark.anyio
async def test_get_player_record_threads_season():
    async with httpx.AsyncClient(transport=httpx.MockTransport(kbo_handler())) as client:
        record = await get_player_record("76232", 2022, client)

    assert record.player.id == "76232"
    assert record.stats is not None
    assert record.stats.season == "2022"
