# app/routers/venues.py
# -----------------------------------------------------------------------------
# Midpoint venue search
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from app.core.exceptions import GeocodeError, InputError
from app.schemas.venues import SearchResult, VenueSearchRequest
from app.services.venue_search import VenueSearchService, get_venue_service

router = APIRouter(prefix="/venues", tags=["venues"])


def client_error(e: Exception) -> HTTPException:
    if isinstance(e, GeocodeError):
        return HTTPException(
            400,
            detail={"error": "Invalid postcode", "message": str(e), "postcode": e.query},
        )
    return HTTPException(400, detail={"error": "Invalid request", "message": str(e)})


@router.get("/categories")
async def list_categories(svc: VenueSearchService = Depends(get_venue_service)):
    return svc.catalog.categories


@router.post("/search", response_model=SearchResult)
async def search_venues(
    req: VenueSearchRequest, svc: VenueSearchService = Depends(get_venue_service)
):
    try:
        return await svc.search_venues(req.postcodes, req.venue_type)
    except (InputError, GeocodeError) as e:
        raise client_error(e) from e
    except Exception as e:
        logger.exception("Error in venue search endpoint")
        raise HTTPException(
            500,
            detail={"error": "Failed to search venues", "message": str(e)},
        ) from e
