# app/routers/groups.py
# -----------------------------------------------------------------------------
# Group meetup venue search (members' saved locations as input)
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import GeocodeError, InputError, NotFoundError
from app.db.session import get_session
from app.routers.venues import client_error
from app.schemas.venues import GroupVenueSearchRequest, GroupVenueSearchResult
from app.services.group_locations import search_group_venues
from app.services.venue_search import VenueSearchService, get_venue_service

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("/{group_id}/venues/search", response_model=GroupVenueSearchResult)
async def search_group(
    group_id: int,
    req: GroupVenueSearchRequest,
    db: AsyncSession = Depends(get_session),
    svc: VenueSearchService = Depends(get_venue_service),
):
    try:
        return await search_group_venues(db, svc, group_id, req.venue_type)
    except NotFoundError as e:
        raise HTTPException(404, detail={"error": str(e)}) from e
    except (InputError, GeocodeError) as e:
        raise client_error(e) from e
    except Exception as e:
        logger.exception(f"Error in group venue search (group {group_id})")
        raise HTTPException(
            500,
            detail={"error": "Failed to search venues", "message": str(e)},
        ) from e
