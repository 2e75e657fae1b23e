"""
Core domain models for HobbyMap.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional
import math
import uuid


@dataclass(frozen=True)
class LocationQuery:
    """A free-text place and/or country as typed by the user.

    Blank strings are treated as absent.
    """
    place: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_fields(cls, place: Optional[str], country: Optional[str]) -> "LocationQuery":
        place = place.strip() if isinstance(place, str) else None
        country = country.strip() if isinstance(country, str) else None
        return cls(place=place or None, country=country or None)

    @property
    def is_empty(self) -> bool:
        return not self.place and not self.country


@dataclass(frozen=True)
class Coordinates:
    """A fully populated geographic point."""
    latitude: float
    longitude: float

    @staticmethod
    def is_valid(latitude: float, longitude: float) -> bool:
        return (
            math.isfinite(latitude)
            and math.isfinite(longitude)
            and -90.0 <= latitude <= 90.0
            and -180.0 <= longitude <= 180.0
        )

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class ReverseResult:
    """Human-readable label for a coordinate. Empty fields mean unknown."""
    place: str = ""
    country: str = ""
    country_code: str = ""
    display_name: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.place or self.country or self.country_code or self.display_name)


@dataclass
class Entry:
    """
    A single activity entry shown as a marker on the user's map.

    Coordinates are filled in by geocoding the place/country, or supplied
    directly when the user picks a point on the map.
    """
    user_id: str
    title: str
    date: date
    hobby: Optional[str] = None
    place: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "hobby": self.hobby,
            "place": self.place,
            "country": self.country,
            "date": self.date.isoformat() if self.date else None,
            "notes": self.notes,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
