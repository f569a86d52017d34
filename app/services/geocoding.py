# app/services/geocoding.py
import re

import httpx
from loguru import logger

from app.core.config import settings
from app.core.exceptions import GeocodeError, InputError
from app.schemas.venues import Location

_WHITESPACE = re.compile(r"\s+")


def clean_postcode(query: str) -> str:
    return _WHITESPACE.sub("", query or "")


async def geocode(
    client: httpx.AsyncClient, query: str, base_url: str | None = None
) -> Location:
    """
    postcodes.io lookup for a single postcode. One round trip, no retry.
    Any failure (404, network, timeout, bad payload) becomes GeocodeError.
    """
    cleaned = clean_postcode(query)
    if not cleaned:
        raise InputError("Postcode must not be empty")

    url = f"{(base_url or settings.POSTCODES_API_URL).rstrip('/')}/postcodes/{cleaned}"
    try:
        r = await client.get(url)
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPError as e:
        logger.error(f"[Geocode] {query!r}: {e}")
        raise GeocodeError(query, str(e)) from e
    except ValueError as e:
        logger.error(f"[Geocode] {query!r}: malformed response ({e})")
        raise GeocodeError(query, "malformed response") from e

    if not isinstance(data, dict):
        data = {}
    result = data.get("result")
    if data.get("status") != 200 or not isinstance(result, dict):
        logger.error(f"[Geocode] {query!r}: unexpected status {data.get('status')}")
        raise GeocodeError(query, "invalid postcode")

    try:
        lat = float(result["latitude"])
        lon = float(result["longitude"])
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"[Geocode] {query!r}: no coordinates for postcode")
        raise GeocodeError(query, "no coordinates") from e

    return Location(query=query, latitude=lat, longitude=lon)
