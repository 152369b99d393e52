"""
Unit tests for the response parser and image resolver.

The model is asked for `answer||keyword||s1|s2|s3` but often ignores it,
so most of these pin down the fallbacks.
"""
import asyncio
from unittest.mock import patch, AsyncMock

import pytest

from ecobot.agent.parser import (
    APOLOGY,
    DEFAULT_IMAGE_KEYWORD,
    assemble_response,
    clean_search_term,
    parse_and_enrich,
    parse_model_output,
    resolve_search_term,
    should_fetch_image,
)


def test_parse_full_convention():
    parsed = parse_model_output(
        " Trees absorb CO2. || forest canopy || Why plant trees? | What is carbon capture?|Are forests shrinking? "
    )
    assert parsed.answer == "Trees absorb CO2."
    assert parsed.image_keyword == "forest canopy"
    assert parsed.keyword_defaulted is False
    assert parsed.suggestions == ("Why plant trees?", "What is carbon capture?", "Are forests shrinking?")


def test_parse_without_delimiter_keeps_whole_text():
    """No delimiter at all: the full text is the answer, no suggestions."""
    parsed = parse_model_output("Composting turns food scraps into soil.\nIt reduces landfill waste.")
    assert parsed.answer == "Composting turns food scraps into soil.\nIt reduces landfill waste."
    assert parsed.suggestions == ()
    assert parsed.image_keyword == DEFAULT_IMAGE_KEYWORD
    assert parsed.keyword_defaulted is True


@pytest.mark.parametrize("raw", ["", "   ", None, "||keyword||a|b", "  ||  ||  "])
def test_parse_empty_answer_falls_back_to_apology(raw):
    assert parse_model_output(raw).answer == APOLOGY


def test_parse_empty_keyword_uses_default():
    parsed = parse_model_output("Answer|| ||one|two")
    assert parsed.image_keyword == DEFAULT_IMAGE_KEYWORD
    assert parsed.keyword_defaulted is True
    assert parsed.suggestions == ("one", "two")


def test_parse_answer_and_keyword_only():
    parsed = parse_model_output("Answer||solar panels")
    assert parsed.image_keyword == "solar panels"
    assert parsed.suggestions == ()


def test_parse_drops_empty_suggestions():
    """Stray pipes (even a third ||) only produce empty entries, which are dropped."""
    parsed = parse_model_output("Answer||kw||one||two| |three|")
    assert parsed.suggestions == ("one", "two", "three")


def test_parse_does_not_cap_suggestions():
    parsed = parse_model_output("Answer||kw||a|b|c|d|e")
    assert len(parsed.suggestions) == 5


def test_parse_is_pure():
    raw = "Answer||kw||a|b|c"
    assert parse_model_output(raw) == parse_model_output(raw)


def test_clean_search_term_removes_stop_words():
    assert clean_search_term("show me pollution in Delhi") == "Delhi"
    assert clean_search_term("Give Me An IMAGE of the Amazon") == "Amazon"


def test_clean_search_term_keeps_original_when_everything_is_filtered():
    assert clean_search_term("show me the image") == "show me the image"


def test_should_fetch_image(london_snapshot):
    assert should_fetch_image(True, None) is True
    assert should_fetch_image(False, london_snapshot) is True
    assert should_fetch_image(False, None) is False


def test_resolve_search_term_prefers_model_keyword(london_snapshot):
    parsed = parse_model_output("Answer||smoggy skyline||a|b")
    assert resolve_search_term(parsed, london_snapshot, "aqi in London") == "smoggy skyline"


def test_resolve_search_term_uses_city_when_keyword_missing(london_snapshot):
    parsed = parse_model_output("Answer")
    term = resolve_search_term(parsed, london_snapshot, "aqi in London")
    assert term == "Pollution in London"
    assert clean_search_term(term) == "London"


def test_resolve_search_term_falls_back_to_query():
    parsed = parse_model_output("Answer")
    assert resolve_search_term(parsed, None, "  show me a picture of glaciers ") == "show me a picture of glaciers"
    assert resolve_search_term(parsed, None, "") == DEFAULT_IMAGE_KEYWORD


def test_assemble_response_drops_keyword():
    parsed = parse_model_output("Answer||kw||a|b|c")
    result = assemble_response(parsed, "https://img")
    assert result.response == "Answer||a|b|c"
    assert result.image == "https://img"


def test_assemble_response_with_no_suggestions():
    result = assemble_response(parse_model_output("Just an answer"), None)
    assert result.response == "Just an answer||"
    assert result.image is None


def test_parse_and_enrich_skips_image_when_not_requested(upstream_settings):
    with patch("ecobot.agent.parser.search_image", new_callable=AsyncMock) as mock_search:
        result = asyncio.run(parse_and_enrich(
            "Answer||kw||a|b", False, None, "what is composting", None, upstream_settings,
        ))
        mock_search.assert_not_awaited()
        assert result.image is None
        assert result.response == "Answer||a|b"


def test_parse_and_enrich_searches_cleaned_term(upstream_settings):
    with patch("ecobot.agent.parser.search_image", new_callable=AsyncMock, return_value="https://img") as mock_search:
        result = asyncio.run(parse_and_enrich(
            "Glaciers are melting.", True, None, "show me glaciers", None, upstream_settings,
        ))
        mock_search.assert_awaited_once_with("glaciers", None, upstream_settings)
        assert result.image == "https://img"


def test_parse_and_enrich_forces_image_for_air_quality(london_snapshot, upstream_settings):
    with patch("ecobot.agent.parser.search_image", new_callable=AsyncMock, return_value="https://img") as mock_search:
        result = asyncio.run(parse_and_enrich(
            "London air is fair.", False, london_snapshot, "aqi in London", None, upstream_settings,
        ))
        mock_search.assert_awaited_once_with("London", None, upstream_settings)
        assert result.image == "https://img"


def test_parse_and_enrich_image_failure_is_null(upstream_settings):
    with patch("ecobot.agent.parser.search_image", new_callable=AsyncMock, return_value=None):
        result = asyncio.run(parse_and_enrich(
            "Answer||kw||a", True, None, "q", None, upstream_settings,
        ))
        assert result.image is None
        assert result.response == "Answer||a"


@pytest.mark.parametrize("term,cleaned", [
    ("image, of Delhi", "Delhi"),
    ("Show me pollution in Delhi?", "Delhi"),
    ("AQI in London!", "London"),
    ("give me a picture of the Amazon rainforest.", "Amazon rainforest"),
])
def test_clean_search_term_ignores_punctuation(term, cleaned):
    assert clean_search_term(term) == cleaned


def test_clean_search_term_punctuation_only_keeps_original():
    assert clean_search_term("pollution?") == "pollution?"
