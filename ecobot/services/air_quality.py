"""
Air Quality Helper Module
=========================
Fetches LIVE air pollution readings from OpenWeather.

Two calls per lookup:
    1. Geocoding API  - city name -> first match {lat, lon, name}
    2. Air Pollution  - {lat, lon} -> AQI (1-5) + pollutant concentrations

OpenWeather's AQI is a 1-5 scale, not the 0-500 US EPA index.
Every failure here is soft: the caller gets None and the chat carries on
without live data.
"""
import logging
from dataclasses import dataclass, field

import httpx

from ecobot.config import Settings

logger = logging.getLogger("ecobot-services")


# =============================================
# AQI INDEX TO STATUS LABEL
# =============================================

AQI_STATUS_LABELS = {
    1: "Good",
    2: "Fair",
    3: "Moderate",
    4: "Poor",
    5: "Very Poor",
}

UNKNOWN_STATUS = "Unknown"


def status_label(index) -> str:
    """Map an OpenWeather AQI value to its label. Out-of-range values are 'Unknown'."""
    return AQI_STATUS_LABELS.get(index, UNKNOWN_STATUS)


@dataclass(frozen=True)
class Location:
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class AirQualitySnapshot:
    """One live reading for one city. Lives for a single request."""

    city_name: str
    index: int
    status_label: str
    components: dict[str, float] = field(default_factory=dict)

    @property
    def pm2_5(self):
        return self.components.get("pm2_5")

    @property
    def pm10(self):
        return self.components.get("pm10")


# =============================================
# UPSTREAM CALLS
# =============================================

async def geocode_city(city: str, http: httpx.AsyncClient, settings: Settings) -> Location | None:
    """Resolve a city name to coordinates. An empty result list is a normal miss."""
    if not settings.openweather_api_key:
        return None

    response = await http.get(
        settings.openweather_geo_url,
        params={"q": city, "limit": 1, "appid": settings.openweather_api_key},
        timeout=settings.upstream_timeout_seconds,
    )
    response.raise_for_status()
    results = response.json()
    if not results:
        logger.info("Geocoding found no match for %r", city)
        return None

    first = results[0]
    return Location(
        name=first.get("name") or city,
        latitude=float(first["lat"]),
        longitude=float(first["lon"]),
    )


async def fetch_pollution(location: Location, http: httpx.AsyncClient, settings: Settings) -> AirQualitySnapshot:
    """Current pollution for a resolved location."""
    response = await http.get(
        settings.openweather_air_url,
        params={
            "lat": location.latitude,
            "lon": location.longitude,
            "appid": settings.openweather_api_key,
        },
        timeout=settings.upstream_timeout_seconds,
    )
    response.raise_for_status()
    reading = response.json()["list"][0]
    index = reading["main"]["aqi"]

    return AirQualitySnapshot(
        city_name=location.name,
        index=index,
        status_label=status_label(index),
        components=dict(reading.get("components") or {}),
    )


async def get_air_quality(city: str, http: httpx.AsyncClient, settings: Settings) -> AirQualitySnapshot | None:
    """
    Geocode then fetch pollution for a city.

    Returns None when the key is missing, the city is unknown, or either
    upstream call fails in any way (HTTP error, timeout, bad payload).
    """
    if not settings.openweather_api_key:
        logger.info("OPENWEATHER_API_KEY not configured, skipping air quality lookup")
        return None

    try:
        location = await geocode_city(city, http, settings)
        if location is None:
            return None
        snapshot = await fetch_pollution(location, http, settings)
    except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        logger.warning("Air quality lookup failed for %r: %s", city, e)
        return None

    logger.info("Air quality for %s: AQI %s (%s)", snapshot.city_name, snapshot.index, snapshot.status_label)
    return snapshot
