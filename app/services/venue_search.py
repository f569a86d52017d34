# app/services/venue_search.py
# -----------------------------------------------------------------------------
# Venue search orchestration
# (1) geocode every postcode concurrently, fail the search on any bad one
# (2) midpoint -> Overpass query -> normalize
# (3) Overpass failure -> mock venues (logged + counted, never raised)
# (4) distance annotation and ranking
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import random
from typing import List, Optional, Sequence

import httpx
from loguru import logger

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import InputError, UpstreamUnavailable
from app.schemas.venues import (
    Location,
    LocationDistance,
    Midpoint,
    SearchResult,
    Venue,
)
from app.services import geocoding, overpass
from app.services.catalog import VenueCatalog
from app.services.geo import distance_miles, midpoint
from app.services.mock_venues import generate_mock_venues


class VenueSearchService:
    def __init__(
        self,
        settings: Settings | None = None,
        catalog: VenueCatalog | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or default_settings
        self.catalog = catalog or VenueCatalog()
        self.transport = transport
        self.rng = rng or random.Random()
        # operator signal: how many searches were answered with mock venues
        self.fallback_count = 0

    def _client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self.settings.HTTP_TIMEOUT_S, connect=6.0)
        return httpx.AsyncClient(timeout=timeout, transport=self.transport)

    async def _geocode_all(
        self, client: httpx.AsyncClient, postcodes: Sequence[str]
    ) -> List[Location]:
        results = await asyncio.gather(
            *(
                geocoding.geocode(client, pc, self.settings.POSTCODES_API_URL)
                for pc in postcodes
            ),
            return_exceptions=True,
        )
        # every call has settled; the first failure in input order wins
        for res in results:
            if isinstance(res, BaseException):
                raise res
        return list(results)

    async def _venues_near(
        self, client: httpx.AsyncClient, center: Midpoint, category: str
    ) -> tuple[List[Venue], bool]:
        query = overpass.build_venue_query(
            self.catalog,
            category,
            self.settings.VENUE_SEARCH_RADIUS_M,
            center.latitude,
            center.longitude,
            timeout_s=int(self.settings.HTTP_TIMEOUT_S),
        )
        try:
            elements = await overpass.fetch_elements(
                client, query, self.settings.OVERPASS_API_URL
            )
            venues = overpass.normalize_elements(
                elements,
                category,
                self.catalog,
                self.rng,
                limit=self.settings.VENUE_RESULT_LIMIT,
            )
            return venues, False
        except UpstreamUnavailable as e:
            self.fallback_count += 1
            logger.warning(
                f"[VenueSearch] venue index unavailable, serving mock '{category}' venues "
                f"(fallback #{self.fallback_count}): {e}"
            )
            mocks = generate_mock_venues(
                center,
                category,
                self.catalog,
                self.rng,
                jitter_deg=self.settings.MOCK_JITTER_DEG,
            )
            return mocks, True

    async def search_venues(
        self, postcodes: Sequence[str], venue_type: Optional[str]
    ) -> SearchResult:
        cleaned = [pc.strip() for pc in postcodes or [] if pc and pc.strip()]
        if len(cleaned) < 2:
            raise InputError("Please provide at least 2 postcodes")
        category = (venue_type or "").strip().lower()
        if not category:
            raise InputError("Please provide a venue type")

        async with self._client() as client:
            locations = await self._geocode_all(client, cleaned)
            center = midpoint(locations)
            venues, fallback = await self._venues_near(client, center, category)

        ranked = []
        for v in venues:
            d = distance_miles(center.latitude, center.longitude, v.latitude, v.longitude)
            ranked.append((d, v))
        ranked.sort(key=lambda pair: pair[0])

        logger.info(
            f"[VenueSearch] {len(cleaned)} postcodes, '{category}' -> {len(ranked)} venues"
            f" around ({center.latitude:.5f}, {center.longitude:.5f})"
        )
        return SearchResult(
            midpoint=center,
            locations=[
                LocationDistance(
                    **loc.model_dump(),
                    distance_to_midpoint_miles=round(
                        distance_miles(
                            loc.latitude, loc.longitude, center.latitude, center.longitude
                        ),
                        1,
                    ),
                )
                for loc in locations
            ],
            venues=[
                v.model_copy(update={"distance_miles": round(d, 1)}) for d, v in ranked
            ],
            fallback=fallback,
        )


venue_search_service = VenueSearchService()


def get_venue_service() -> VenueSearchService:
    """FastAPI dependency"""
    return venue_search_service
