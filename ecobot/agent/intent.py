"""
Air-quality intent gate and prompt builder.

A single regex decides whether the user is asking about air quality in a
place ("AQI in Paris", "pollution Delhi"). On a match we fetch a live
snapshot and rewrite the prompt around it, so the model explains real numbers
instead of guessing.

The pattern is deliberately loose and over-matches ("pollution policy"
captures "policy"). A bogus city just misses at geocoding and the original
question goes through untouched.
"""
import re

import httpx

from ecobot.agent.prompts import AIR_QUALITY_PROMPT
from ecobot.config import Settings
from ecobot.services.air_quality import AirQualitySnapshot, get_air_quality

AIR_QUALITY_PATTERN = re.compile(r"\b(?:aqi|pollution)\s*(?:in\s+)?([a-z\s]+)", re.IGNORECASE)


def detect_air_quality_city(query: str) -> str | None:
    """Return the captured city name, or None when there's no air-quality intent."""
    match = AIR_QUALITY_PATTERN.search(query)
    if not match:
        return None
    city = match.group(1).strip()
    return city or None


def _fmt(value) -> str:
    if value is None:
        return "n/a"
    try:
        return f"{float(value):g}"
    except (TypeError, ValueError):
        return str(value)


def augment_prompt(question: str, snapshot: AirQualitySnapshot) -> str:
    """Embed the live reading in the user's question."""
    return AIR_QUALITY_PROMPT.format(
        question=question,
        city=snapshot.city_name,
        index=snapshot.index,
        status=snapshot.status_label,
        pm2_5=_fmt(snapshot.pm2_5),
        pm10=_fmt(snapshot.pm10),
    )


async def build_prompt(
    query: str, http: httpx.AsyncClient, settings: Settings
) -> tuple[str, AirQualitySnapshot | None]:
    """
    Returns (prompt, snapshot). With no intent, or when the lookup comes back
    empty, the prompt is the query itself and snapshot is None.
    """
    city = detect_air_quality_city(query)
    if city is None:
        return query, None

    snapshot = await get_air_quality(city, http, settings)
    if snapshot is None:
        return query, None

    return augment_prompt(query, snapshot), snapshot
