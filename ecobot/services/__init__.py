"""Upstream collaborators: OpenWeather air quality and Pexels image search."""
from ecobot.services.air_quality import AirQualitySnapshot, get_air_quality, status_label
from ecobot.services.images import search_image

__all__ = ["AirQualitySnapshot", "get_air_quality", "search_image", "status_label"]
