"""
Geocoding API routes.

Used by the entry form (place/country -> marker) and the map picker
(clicked point -> place/country).
"""
import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from services.geocoding import (
    GeocodingError,
    InvalidLocationError,
    LocationNotFoundError,
    ProviderUnavailableError,
    get_default_resolver,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class CoordinatesResponse(BaseModel):
    latitude: float
    longitude: float


class ReverseResponse(BaseModel):
    place: str = ""
    country: str = ""
    country_code: str = ""
    display_name: str = ""


def geocoding_http_error(exc: GeocodingError) -> HTTPException:
    """Map a resolver failure to the status the frontend expects."""
    if isinstance(exc, InvalidLocationError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, LocationNotFoundError):
        return HTTPException(
            status_code=404,
            detail="Location not found. Pick the spot on the map instead.",
        )
    if isinstance(exc, ProviderUnavailableError):
        return HTTPException(
            status_code=503,
            detail="Geocoding service unavailable. Try again later or pick the spot on the map.",
        )
    return HTTPException(status_code=500, detail=str(exc))


@router.get("/search", response_model=CoordinatesResponse)
def search(place: Optional[str] = Query(None), country: Optional[str] = Query(None)):
    """Resolve a place and/or country to coordinates."""
    try:
        coords = get_default_resolver().resolve(place, country)
    except GeocodingError as exc:
        logger.info("geocode search failed for place=%r country=%r: %s", place, country, exc)
        raise geocoding_http_error(exc)
    return CoordinatesResponse(latitude=coords.latitude, longitude=coords.longitude)


@router.get("/reverse", response_model=ReverseResponse)
def reverse(lat: float = Query(...), lon: float = Query(...)):
    """Label a map point. Always 200; empty fields when nothing is known."""
    result = get_default_resolver().reverse_resolve(lat, lon)
    return ReverseResponse(
        place=result.place,
        country=result.country,
        country_code=result.country_code,
        display_name=result.display_name,
    )
