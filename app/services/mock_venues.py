# app/services/mock_venues.py
# -----------------------------------------------------------------------------
# Synthetic venues used when the Overpass API is unavailable
# - names come from the catalog table for the requested category
# - coordinates jittered around the midpoint
# -----------------------------------------------------------------------------
from __future__ import annotations

import random
from typing import List

from app.schemas.venues import Midpoint, Venue
from app.services.catalog import VenueCatalog


def generate_mock_venues(
    midpoint: Midpoint,
    category: str,
    catalog: VenueCatalog,
    rng: random.Random,
    jitter_deg: float = 0.01,
) -> List[Venue]:
    venues: List[Venue] = []
    for i, name in enumerate(catalog.mock_names_for(category), start=1):
        venues.append(
            Venue(
                id=i,
                name=name,
                category=category,
                address=f"{rng.randint(1, 100)} High Street, London",
                latitude=midpoint.latitude + rng.uniform(-jitter_deg, jitter_deg),
                longitude=midpoint.longitude + rng.uniform(-jitter_deg, jitter_deg),
                rating=catalog.rating(rng),
            )
        )
    return venues
