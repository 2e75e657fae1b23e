"""
Entries API routes.
"""
import logging
from typing import List, Optional
import datetime as dt
from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import BaseModel

from api.routes.geocoding import geocoding_http_error
from db import SessionLocal
from domain.models import Entry
from services.entries import EntriesService, EntryDraft, EntryNotFoundError
from services.geocoding import GeocodingError

router = APIRouter()
entries_service = EntriesService()
logger = logging.getLogger(__name__)


class EntryCreate(BaseModel):
    user_id: str
    title: str
    date: dt.date
    hobby: Optional[str] = None
    place: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class EntryUpdate(BaseModel):
    user_id: str
    title: Optional[str] = None
    date: Optional[dt.date] = None
    hobby: Optional[str] = None
    place: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class EntryResponse(BaseModel):
    id: str
    user_id: str
    title: str
    date: str
    hobby: Optional[str] = None
    place: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def entry_to_response(entry: Entry) -> EntryResponse:
    """Convert domain Entry to API response."""
    return EntryResponse(**entry.to_dict())


@router.get("", response_model=List[EntryResponse])
def list_entries(user_id: str = Query(...)):
    """List the user's entries, newest first."""
    with SessionLocal() as session:
        entries = entries_service.list_entries(session, user_id)
        return [entry_to_response(e) for e in entries]


@router.post("", response_model=EntryResponse, status_code=201)
def create_entry(data: EntryCreate):
    """Create an entry, geocoding place/country unless a point was picked."""
    draft = EntryDraft(**data.model_dump())
    with SessionLocal() as session:
        try:
            entry = entries_service.create_entry(session, draft)
        except GeocodingError as exc:
            raise geocoding_http_error(exc)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return entry_to_response(entry)


@router.get("/{entry_id}", response_model=EntryResponse)
def get_entry(entry_id: str, user_id: str = Query(...)):
    with SessionLocal() as session:
        try:
            entry = entries_service.get_entry(session, entry_id, user_id)
        except EntryNotFoundError:
            raise HTTPException(status_code=404, detail="Entry not found")
        return entry_to_response(entry)


@router.put("/{entry_id}", response_model=EntryResponse)
def update_entry(entry_id: str, data: EntryUpdate):
    """Partially update an entry; re-geocodes when place or country change."""
    changes = data.model_dump(exclude_unset=True)
    user_id = changes.pop("user_id")
    with SessionLocal() as session:
        try:
            entry = entries_service.update_entry(session, entry_id, user_id, changes)
        except EntryNotFoundError:
            raise HTTPException(status_code=404, detail="Entry not found")
        except GeocodingError as exc:
            raise geocoding_http_error(exc)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return entry_to_response(entry)


@router.delete("/{entry_id}", status_code=204)
def delete_entry(entry_id: str, user_id: str = Query(...)):
    with SessionLocal() as session:
        try:
            entries_service.delete_entry(session, entry_id, user_id)
        except EntryNotFoundError:
            raise HTTPException(status_code=404, detail="Entry not found")
    return Response(status_code=204)
