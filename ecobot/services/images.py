"""
Image search against the Pexels API.

Returns the medium-size URL of the first landscape photo, or None.
Illustrations are nice-to-have, so nothing in here is allowed to fail a chat
request.
"""
import logging

import httpx

from ecobot.config import Settings

logger = logging.getLogger("ecobot-services")


async def search_image(query: str, http: httpx.AsyncClient, settings: Settings) -> str | None:
    if not settings.pexels_api_key:
        logger.info("PEXELS_API_KEY not configured, skipping image search")
        return None

    try:
        response = await http.get(
            settings.pexels_search_url,
            params={"query": query, "per_page": 1, "orientation": "landscape"},
            headers={"Authorization": settings.pexels_api_key},
            timeout=settings.upstream_timeout_seconds,
        )
        response.raise_for_status()
        photos = response.json().get("photos") or []
        if not photos:
            logger.info("No image results for %r", query)
            return None
        return photos[0]["src"]["medium"]
    except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
        logger.warning("Image search failed for %r: %s", query, e)
        return None
