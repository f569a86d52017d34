# app/services/overpass.py
import random
from typing import Dict, List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import UpstreamUnavailable
from app.schemas.venues import Venue
from app.services.catalog import VenueCatalog

GEOMETRIES = ("node", "way", "relation")


def build_venue_query(
    catalog: VenueCatalog,
    category: str,
    radius_m: int,
    lat: float,
    lon: float,
    timeout_s: int = 25,
) -> str:
    """
    Overpass QL for one category around (lat, lon).
    park -> union of every park-like tag, others -> single amenity tag.
    `out center` gives ways/relations a computed center coordinate.
    """
    if category == "park":
        filters = [f'["{k}"="{v}"]' for k, v in catalog.park_tags]
    else:
        filters = [f'["amenity"="{catalog.amenity_tag(category)}"]']

    around = f"(around:{radius_m},{lat},{lon})"
    lines = [f"  {geom}{flt}{around};" for flt in filters for geom in GEOMETRIES]
    return "\n".join(
        [f"[out:json][timeout:{timeout_s}];", "(", *lines, ");", "out center;"]
    )


async def fetch_elements(
    client: httpx.AsyncClient, query: str, url: str | None = None
) -> List[Dict]:
    """
    POST the query to Overpass. Any failure is UpstreamUnavailable.
    """
    try:
        r = await client.post(
            url or settings.OVERPASS_API_URL,
            content=query.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
        )
        r.raise_for_status()
        data = r.json()
    except httpx.HTTPError as e:
        raise UpstreamUnavailable(f"Overpass request failed: {e}") from e
    except ValueError as e:
        raise UpstreamUnavailable(f"Overpass returned malformed JSON: {e}") from e

    elements = data.get("elements") if isinstance(data, dict) else None
    if not isinstance(elements, list):
        raise UpstreamUnavailable("Overpass payload has no elements list")
    return elements


def format_address(tags: Dict) -> str:
    parts = [
        str(tags[k])
        for k in ("addr:housenumber", "addr:street", "addr:city", "addr:postcode")
        if tags.get(k)
    ]
    return ", ".join(parts) if parts else "Address not available"


def _coordinates(el: Dict) -> Optional[tuple]:
    lat, lon = el.get("lat"), el.get("lon")
    if lat is None or lon is None:
        center = el.get("center") or {}
        if not isinstance(center, dict):
            raise UpstreamUnavailable(f"Overpass element {el.get('id')} has a malformed center")
        lat, lon = center.get("lat"), center.get("lon")
    try:
        return float(lat), float(lon)
    except (TypeError, ValueError):
        return None


def normalize_elements(
    elements: List[Dict],
    category: str,
    catalog: VenueCatalog,
    rng: random.Random,
    limit: int = 20,
) -> List[Venue]:
    """
    Overpass elements -> Venue list.
    Elements without a name or a resolvable coordinate are dropped;
    structurally malformed elements raise UpstreamUnavailable.
    """
    out: List[Venue] = []
    for el in elements or []:
        if len(out) >= limit:
            break
        if not isinstance(el, dict):
            raise UpstreamUnavailable("Overpass element is not an object")
        tags = el.get("tags") or {}
        name = tags.get("name") if isinstance(tags, dict) else None
        if not isinstance(tags, dict) or not isinstance(name or "", str):
            raise UpstreamUnavailable(f"Overpass element {el.get('id')} has malformed tags")
        name = (name or "").strip()
        coords = _coordinates(el)
        if not name or coords is None:
            continue
        try:
            venue_id = int(el.get("id"))
        except (TypeError, ValueError):
            continue
        try:
            venue = Venue(
                id=venue_id,
                name=name,
                category=category,
                address=format_address(tags),
                latitude=coords[0],
                longitude=coords[1],
                rating=catalog.rating(rng),
                phone=tags.get("phone") or tags.get("contact:phone"),
                website=tags.get("website") or tags.get("contact:website"),
            )
        except ValidationError as e:
            raise UpstreamUnavailable(f"Overpass element {venue_id} has malformed tags") from e
        out.append(venue)
    logger.debug(f"[Overpass] {len(elements or [])} elements -> {len(out)} venues")
    return out
