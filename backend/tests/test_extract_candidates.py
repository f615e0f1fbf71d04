import pytest

from kbo_stats.scraper.extract import DocumentParseError, PlayerCandidate, extract_candidates

from tests.pages import EMPTY_SEARCH_HTML


def test_candidates_in_document_order(search_html):
    candidates = extract_candidates(search_html, "김태균")

    assert [c.id for c in candidates] == ["76232", "12345"]
    assert candidates[0] == PlayerCandidate(
        id="76232",
        name="김태균",
        team="한화",
        position="내야수",
        image="https://img.example/76232.jpg",
    )


def test_missing_image_is_none(search_html):
    candidates = extract_candidates(search_html, "Kim")

    assert candidates[1].image is None
    assert candidates[1].to_dict()["image"] is None


def test_query_does_not_filter(search_html):
    candidates = extract_candidates(search_html, "nobody matches this")

    assert len(candidates) == 2


def test_ids_are_strings(search_html):
    for candidate in extract_candidates(search_html, "x"):
        assert isinstance(candidate.id, str)


@pytest.mark.parametrize(
    "html",
    [
        EMPTY_SEARCH_HTML,
        "<html><body></body></html>",
        "<div class='player-item' data-player-id='1'>outside any list</div>",
    ],
)
def test_no_items_returns_empty_list(html):
    assert extract_candidates(html, "x") == []


def test_item_with_missing_fields_defaults():
    html = '<div class="player-list"><div class="player-item" data-player-id="7"></div></div>'

    (candidate,) = extract_candidates(html, "7")

    assert candidate == PlayerCandidate(id="7", name="", team="", position="", image=None)


def test_accepts_bytes(search_html):
    candidates = extract_candidates(search_html.encode("utf-8"), "김태균")

    assert candidates[0].name == "김태균"


@pytest.mark.parametrize("raw", ["", "   \n", "no markup here", '{"players": []}', b"plain bytes"])
def test_non_markup_raises(raw):
    with pytest.raises(DocumentParseError):
        extract_candidates(raw, "x")


def test_non_text_input_raises():
    with pytest.raises(DocumentParseError):
        extract_candidates(None, "x")  # type: ignore[arg-type]
