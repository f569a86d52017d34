# app/services/group_locations.py
# -----------------------------------------------------------------------------
# Group -> venue search input
# - members are read in join order
# - members without a saved location are skipped
# - locations and display names are kept as parallel lists
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.db import crud
from app.schemas.venues import GroupVenueSearchResult
from app.services.venue_search import VenueSearchService


@dataclass(slots=True)
class GroupLocations:
    group_id: int
    locations: List[str] = field(default_factory=list)
    display_names: List[str] = field(default_factory=list)


async def group_locations(db: AsyncSession, group_id: int) -> GroupLocations:
    group = await crud.get_group(db, group_id)
    if group is None:
        raise NotFoundError(f"Group {group_id} not found")

    out = GroupLocations(group_id=group_id)
    skipped = 0
    for _member, user in await crud.get_group_members(db, group_id):
        location = (user.location or "").strip()
        if not location:
            skipped += 1
            continue
        out.locations.append(location)
        out.display_names.append(user.name or user.email)

    if skipped:
        logger.info(f"[Group {group_id}] {skipped} member(s) have no saved location")
    return out


async def search_group_venues(
    db: AsyncSession,
    service: VenueSearchService,
    group_id: int,
    venue_type: Optional[str],
) -> GroupVenueSearchResult:
    gl = await group_locations(db, group_id)
    result = await service.search_venues(gl.locations, venue_type)
    return GroupVenueSearchResult(
        group_id=group_id, members=gl.display_names, result=result
    )
