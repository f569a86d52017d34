# app/services/catalog.py
# -----------------------------------------------------------------------------
# Venue catalog
# - category -> OSM amenity tag table
# - park tag union (OSM splits park-like places across several keys)
# - mock venue names used when the Overpass API is down
# - placeholder rating (no real rating source yet)
# -----------------------------------------------------------------------------
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

RatingFn = Callable[[random.Random], float]


def placeholder_rating(rng: random.Random) -> float:
    """
    Stand-in rating in [3.0, 5.0), one decimal place. OSM carries no ratings;
    replace this with a real rating source when one is integrated.
    """
    return rng.randint(30, 49) / 10


CATEGORY_TAGS: Dict[str, str] = {
    "pub": "pub",
    "cafe": "cafe",
    "restaurant": "restaurant",
    "bar": "bar",
    "park": "park",
    "museum": "museum",
    "cinema": "cinema",
    "shopping": "shopping_mall",
}

PARK_TAGS: List[Tuple[str, str]] = [
    ("amenity", "park"),
    ("leisure", "park"),
    ("leisure", "garden"),
    ("leisure", "recreation_ground"),
    ("landuse", "recreation_ground"),
]

MOCK_NAMES: Dict[str, List[str]] = {
    "pub": ["The Red Lion", "The Crown", "The Kings Arms", "The White Hart", "The Rose & Crown"],
    "cafe": ["Central Perk", "The Daily Grind", "Bean There", "Coffee Corner", "Brew & Co"],
    "restaurant": ["The Ivy", "Bella Italia", "Nandos", "Pizza Express", "Wagamama"],
    "bar": ["Sky Bar", "The Alchemist", "Be At One", "Revolution", "All Bar One"],
    "park": ["Hyde Park", "Regents Park", "Green Park", "St James Park", "Victoria Park"],
    "museum": ["British Museum", "Natural History Museum", "Science Museum", "V&A", "Tate Modern"],
    "cinema": ["Odeon", "Vue", "Cineworld", "Picturehouse", "Everyman"],
    "shopping": ["Westfield", "Oxford Street", "Covent Garden", "Camden Market", "Carnaby Street"],
}


@dataclass(slots=True)
class VenueCatalog:
    category_tags: Dict[str, str] = field(default_factory=lambda: dict(CATEGORY_TAGS))
    park_tags: List[Tuple[str, str]] = field(default_factory=lambda: list(PARK_TAGS))
    mock_names: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in MOCK_NAMES.items()}
    )
    default_mock_category: str = "pub"
    mock_count: int = 5
    rating: RatingFn = placeholder_rating

    @property
    def categories(self) -> List[str]:
        return list(self.category_tags)

    def amenity_tag(self, category: str) -> str:
        # unknown categories go to Overpass literally
        return self.category_tags.get(category, category)

    def mock_names_for(self, category: str) -> List[str]:
        names = self.mock_names.get(category) or self.mock_names[self.default_mock_category]
        return names[: self.mock_count]
