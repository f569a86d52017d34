# app/schemas/venues.py

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str
    latitude: float
    longitude: float


class Midpoint(BaseModel):
    latitude: float
    longitude: float


class LocationDistance(Location):
    distance_to_midpoint_miles: float


class Venue(BaseModel):
    id: int
    name: str
    category: str
    address: str
    latitude: float
    longitude: float
    rating: float = Field(..., ge=3.0, le=5.0)
    phone: Optional[str] = None
    website: Optional[str] = None
    distance_miles: Optional[float] = None


class SearchResult(BaseModel):
    midpoint: Midpoint
    locations: List[LocationDistance]
    venues: List[Venue]
    fallback: bool = False


class VenueSearchRequest(BaseModel):
    postcodes: List[str] = Field(default_factory=list)
    venue_type: Optional[str] = None


class GroupVenueSearchRequest(BaseModel):
    venue_type: Optional[str] = None


class GroupVenueSearchResult(BaseModel):
    group_id: int
    members: List[str]
    result: SearchResult
