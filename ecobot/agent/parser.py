"""
Response parser and image resolver.

The model is asked for `answer||keyword||s1|s2|s3` but nothing enforces it,
so every field has a fallback:
    - no answer       -> APOLOGY
    - no keyword      -> DEFAULT_IMAGE_KEYWORD (keyword_defaulted=True)
    - no suggestions  -> []

Parsing is pure. The only I/O is the optional image search. parse_and_enrich()
runs every step in one call; the chat graph runs the same steps as separate
parse / image / respond nodes.

On the wire the keyword is dropped: the client receives
`answer||s1|s2|s3` and splits on the first `||`.
"""
import string
from dataclasses import dataclass, field

import httpx

from ecobot.config import Settings
from ecobot.models.chat import ChatResponse
from ecobot.services.air_quality import AirQualitySnapshot
from ecobot.services.images import search_image

FIELD_DELIMITER = "||"
SUGGESTION_DELIMITER = "|"

APOLOGY = "Sorry, I couldn't generate an answer. Please try asking again."
DEFAULT_IMAGE_KEYWORD = "environment"

# Filler words that hurt image search relevance
IMAGE_STOP_WORDS = frozenset({
    "give", "me", "show", "an", "image", "of", "picture",
    "the", "a", "aqi", "pollution", "in",
})


@dataclass(frozen=True)
class ParsedChatResult:
    answer: str
    image_keyword: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)
    # True when the model gave no keyword and DEFAULT_IMAGE_KEYWORD was used
    keyword_defaulted: bool = False


def parse_model_output(raw: str | None) -> ParsedChatResult:
    """Split raw model text into answer / keyword / suggestions."""
    segments = [s.strip() for s in (raw or "").split(FIELD_DELIMITER, 2)]

    answer = segments[0] or APOLOGY

    keyword = segments[1] if len(segments) > 1 else ""
    keyword_defaulted = not keyword

    suggestions: tuple[str, ...] = ()
    if len(segments) > 2:
        suggestions = tuple(
            s.strip() for s in segments[2].split(SUGGESTION_DELIMITER) if s.strip()
        )

    return ParsedChatResult(
        answer=answer,
        image_keyword=keyword or DEFAULT_IMAGE_KEYWORD,
        suggestions=suggestions,
        keyword_defaulted=keyword_defaulted,
    )


def should_fetch_image(include_image: bool, snapshot: AirQualitySnapshot | None) -> bool:
    """Air-quality answers are always illustrated; everything else only on request."""
    return bool(include_image) or snapshot is not None


def resolve_search_term(
    parsed: ParsedChatResult, snapshot: AirQualitySnapshot | None, query: str
) -> str:
    """Pick what to search for: model keyword, then the AQI city, then the raw query."""
    if not parsed.keyword_defaulted:
        return parsed.image_keyword
    if snapshot is not None:
        return f"Pollution in {snapshot.city_name}"
    if query and query.strip():
        return query.strip()
    return parsed.image_keyword


def clean_search_term(term: str) -> str:
    """Drop stop words and stray punctuation. Falls back to the original term if nothing is left."""
    words = (w.strip(string.punctuation) for w in term.split())
    kept = [w for w in words if w and w.lower() not in IMAGE_STOP_WORDS]
    return " ".join(kept) if kept else term


def assemble_response(parsed: ParsedChatResult, image_url: str | None) -> ChatResponse:
    suggestions = SUGGESTION_DELIMITER.join(parsed.suggestions)
    return ChatResponse(
        response=f"{parsed.answer}{FIELD_DELIMITER}{suggestions}",
        image=image_url,
    )


async def fetch_image_for(
    parsed: ParsedChatResult,
    snapshot: AirQualitySnapshot | None,
    query: str,
    http: httpx.AsyncClient,
    settings: Settings,
) -> str | None:
    term = clean_search_term(resolve_search_term(parsed, snapshot, query))
    return await search_image(term, http, settings)


async def parse_and_enrich(
    raw_output: str,
    include_image: bool,
    snapshot: AirQualitySnapshot | None,
    query: str,
    http: httpx.AsyncClient,
    settings: Settings,
) -> ChatResponse:
    """Parse the model output, fetch an illustration if the policy says so, build the wire payload."""
    parsed = parse_model_output(raw_output)
    image_url = None
    if should_fetch_image(include_image, snapshot):
        image_url = await fetch_image_for(parsed, snapshot, query, http, settings)
    return assemble_response(parsed, image_url)
