"""
Entry workflows: create, edit, list and delete map entries.

Coordinates are resolved from place/country when an entry is created without
a map-picked point, and again whenever an edit changes the place or country.
Geocoding failures are raised to the caller, which offers the user a manual
pin instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from domain.models import Coordinates, Entry
from repositories import EntriesRepository
from services.geocoding import LocationResolver, get_default_resolver

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "hobby", "place", "country", "date", "notes", "latitude", "longitude")


class EntryNotFoundError(Exception):
    """Entry does not exist or belongs to another user."""


@dataclass
class EntryDraft:
    """User input for a new entry."""
    user_id: str
    title: str
    date: date
    hobby: Optional[str] = None
    place: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


def _explicit_coordinates(latitude: Optional[float], longitude: Optional[float]) -> Optional[Coordinates]:
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise ValueError("Both latitude and longitude are required for a picked point")
    if not Coordinates.is_valid(latitude, longitude):
        raise ValueError(f"Coordinates out of range: {latitude}, {longitude}")
    return Coordinates(latitude=latitude, longitude=longitude)


class EntriesService:
    def __init__(
        self,
        repository: Optional[EntriesRepository] = None,
        resolver: Optional[LocationResolver] = None,
    ):
        self.repository = repository or EntriesRepository()
        self._resolver = resolver

    @property
    def resolver(self) -> LocationResolver:
        return self._resolver or get_default_resolver()

    def list_entries(self, session: Session, user_id: str) -> List[Entry]:
        if not user_id:
            raise ValueError("list_entries requires a user_id")
        return self.repository.list_entries(session, user_id)

    def get_entry(self, session: Session, entry_id: str, user_id: str) -> Entry:
        entry = self.repository.get_entry(session, entry_id)
        if entry is None or entry.user_id != user_id:
            raise EntryNotFoundError(entry_id)
        return entry

    def create_entry(self, session: Session, draft: EntryDraft) -> Entry:
        if not draft.user_id:
            raise ValueError("create_entry requires a user_id")
        if not draft.title or not draft.title.strip():
            raise ValueError("create_entry requires a title")

        coords = _explicit_coordinates(draft.latitude, draft.longitude)
        if coords is None:
            coords = self.resolver.resolve(draft.place, draft.country)

        entry = Entry(
            user_id=draft.user_id,
            title=draft.title.strip(),
            date=draft.date,
            hobby=draft.hobby,
            place=draft.place,
            country=draft.country,
            notes=draft.notes,
            latitude=coords.latitude,
            longitude=coords.longitude,
        )
        created = self.repository.create_entry(session, entry)
        logger.info("Created entry %s for user %s at %.5f,%.5f", created.id, created.user_id, coords.latitude, coords.longitude)
        return created

    def update_entry(
        self,
        session: Session,
        entry_id: str,
        user_id: str,
        changes: Dict[str, Any],
    ) -> Entry:
        """Apply a partial update.

        Only keys present in `changes` are touched. When place or country
        differ from the stored values and no new coordinates were supplied,
        the location is resolved again.
        """
        existing = self.get_entry(session, entry_id, user_id)
        updates = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        if "title" in updates and not (updates["title"] or "").strip():
            raise ValueError("title cannot be empty")

        place = updates.get("place", existing.place)
        country = updates.get("country", existing.country)
        location_changed = place != existing.place or country != existing.country

        coords = _explicit_coordinates(updates.get("latitude"), updates.get("longitude"))
        if coords is None and location_changed:
            logger.debug("Location changed for entry %s, geocoding %r / %r", entry_id, place, country)
            coords = self.resolver.resolve(place, country)
        if coords is None:
            coords = existing.coordinates

        existing.title = (updates.get("title") or existing.title).strip()
        existing.hobby = updates.get("hobby", existing.hobby)
        existing.place = place
        existing.country = country
        existing.date = updates.get("date") or existing.date
        existing.notes = updates.get("notes", existing.notes)
        existing.latitude = coords.latitude if coords else None
        existing.longitude = coords.longitude if coords else None
        existing.updated_at = datetime.utcnow()

        updated = self.repository.update_entry(session, existing)
        logger.info("Updated entry %s (location changed: %s)", entry_id, location_changed)
        return updated

    def delete_entry(self, session: Session, entry_id: str, user_id: str) -> None:
        self.get_entry(session, entry_id, user_id)
        self.repository.delete_entry(session, entry_id)
        logger.info("Deleted entry %s for user %s", entry_id, user_id)
