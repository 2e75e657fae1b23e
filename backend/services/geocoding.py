"""Forward and reverse geocoding for entry markers using OpenStreetMap Nominatim.

`LocationResolver.resolve` turns a user-entered place/country into coordinates
by walking a short ladder of query variants and stopping at the first
acceptable candidate. `LocationResolver.reverse_resolve` labels a point picked
on the map and never raises.
"""

from __future__ import annotations

import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from domain.models import Coordinates, LocationQuery, ReverseResult
from services.location_aliases import country_code_hint, normalize_country, normalize_place
from settings import settings

logger = logging.getLogger(__name__)

NOMINATIM_BASE_URL = settings.NOMINATIM_BASE_URL
SEARCH_RESULT_LIMIT = 5
RESPONSE_FORMAT = "jsonv2"

_session = requests.Session()
_last_request_ts: float = 0.0
_lock = threading.Lock()
_MIN_INTERVAL_SEC = settings.NOMINATIM_MIN_INTERVAL
_logged_ua = False

FALLBACK_UA = "hobbymap/0.1 (contact: example@example.com)"
if settings.NOMINATIM_USER_AGENT is None:
    logger.warning(
        "NOMINATIM_USER_AGENT not set in environment; using fallback UA. "
        "This may violate Nominatim usage policy."
    )


def _redact_email(ua: str) -> str:
    if "@" not in ua:
        return ua
    return re.sub(r"\S+@\S+", "<redacted>", ua)


_ua_value = settings.NOMINATIM_USER_AGENT or FALLBACK_UA
NOMINATIM_HEADERS = {
    "User-Agent": _ua_value,
}
if settings.NOMINATIM_REFERER:
    NOMINATIM_HEADERS["Referer"] = settings.NOMINATIM_REFERER

# Most specific settlement first; the first present key wins.
REVERSE_PLACE_KEYS = ("city", "town", "village", "hamlet", "county")


class GeocodingError(Exception):
    """Base class for failures surfaced by `LocationResolver.resolve`."""


class InvalidLocationError(GeocodingError):
    """Neither a place nor a country was supplied."""


class LocationNotFoundError(GeocodingError):
    """The provider answered but nothing acceptable matched."""


class ProviderUnavailableError(GeocodingError):
    """Every attempt failed at the transport level."""


class _TransportError(Exception):
    pass


@dataclass(frozen=True)
class SearchAttempt:
    """One rung of the attempt ladder."""
    query: str
    country_code: Optional[str] = None

    def params(self) -> dict[str, str]:
        params = {
            "q": self.query,
            "format": RESPONSE_FORMAT,
            "limit": str(SEARCH_RESULT_LIMIT),
            "addressdetails": "1",
        }
        if self.country_code:
            params["countrycodes"] = self.country_code
        return params


def _throttled_get(
    url: str,
    *,
    params: dict[str, Any],
    headers: dict[str, str],
    timeout: float,
) -> requests.Response:
    """Perform a GET request with a simple global rate limit."""
    global _last_request_ts
    with _lock:
        now = time.time()
        delta = now - _last_request_ts
        if delta < _MIN_INTERVAL_SEC:
            time.sleep(_MIN_INTERVAL_SEC - delta)
        _last_request_ts = time.time()
    return _session.get(url, params=params, headers=headers, timeout=timeout)


def build_attempts(
    place: Optional[str],
    country: Optional[str],
    country_code: Optional[str],
) -> List[SearchAttempt]:
    """Return the ordered, de-duplicated query ladder for a location."""
    single = place or country or ""
    combined = f"{place}, {country}" if place and country else None

    ladder: List[SearchAttempt] = []
    if country_code:
        ladder.append(SearchAttempt(single, country_code))
        if combined:
            ladder.append(SearchAttempt(combined, country_code))
    ladder.append(SearchAttempt(single))
    if combined:
        ladder.append(SearchAttempt(combined))

    attempts: List[SearchAttempt] = []
    for attempt in ladder:
        if attempt not in attempts:
            attempts.append(attempt)
    return attempts


def candidate_matches_country(candidate: dict, country_token: str, country_code: Optional[str]) -> bool:
    """Loose country match between a search candidate and the user's country.

    With a hint, a candidate that carries its own country code is judged on
    code equality alone. Otherwise the candidate's country name must contain
    (or be contained in) the normalised country text.
    """
    address = candidate.get("address")
    if not isinstance(address, dict):
        return False

    candidate_code = str(address.get("country_code") or "").strip().lower()
    if country_code and candidate_code:
        return candidate_code == country_code.lower()

    candidate_country = normalize_country(str(address.get("country") or ""))
    if not candidate_country or not country_token:
        return False
    return country_token in candidate_country or candidate_country in country_token


def _parse_coordinates(candidate: dict) -> Optional[Coordinates]:
    try:
        lat = float(candidate.get("lat"))
        lon = float(candidate.get("lon"))
    except (TypeError, ValueError):
        return None
    if not Coordinates.is_valid(lat, lon):
        return None
    return Coordinates(latitude=lat, longitude=lon)


class LocationResolver:
    """Resolve free-text places to coordinates and back via Nominatim."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or NOMINATIM_BASE_URL).rstrip("/")
        self.headers = dict(headers or NOMINATIM_HEADERS)
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT_SECONDS

    def _log_user_agent(self) -> None:
        global _logged_ua
        if not _logged_ua:
            logger.debug("Nominatim User-Agent: %s", _redact_email(self.headers.get("User-Agent", "")))
            _logged_ua = True

    def _search(self, attempt: SearchAttempt) -> List[dict]:
        """Run one search attempt; raise `_TransportError` on any transport fault."""
        self._log_user_agent()
        try:
            resp = _throttled_get(
                f"{self.base_url}/search",
                params=attempt.params(),
                headers=self.headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise _TransportError(str(exc)) from exc

        if not isinstance(data, list):
            raise _TransportError(f"expected a JSON array, got {type(data).__name__}")
        return [item for item in data if isinstance(item, dict)]

    def resolve(self, place: Optional[str], country: Optional[str]) -> Coordinates:
        """Geocode a place and/or country to a single coordinate pair.

        Raises:
            InvalidLocationError: both place and country are absent.
            LocationNotFoundError: no acceptable candidate, or its coordinates
                do not parse.
            ProviderUnavailableError: every attempt failed at the transport level.
        """
        query = LocationQuery.from_fields(place, country)
        if query.is_empty:
            raise InvalidLocationError("A place or a country is required")

        canonical_place = normalize_place(query.place)
        country_token = normalize_country(query.country)
        code = country_code_hint(query.country)
        attempts = build_attempts(canonical_place, query.country, code)

        transport_failures = 0
        for index, attempt in enumerate(attempts, start=1):
            logger.debug(
                "geocode attempt %d/%d q=%r countrycodes=%s",
                index,
                len(attempts),
                attempt.query,
                attempt.country_code,
            )
            try:
                candidates = self._search(attempt)
            except _TransportError as exc:
                transport_failures += 1
                logger.warning("Nominatim search failed for q=%r: %s", attempt.query, exc)
                continue

            chosen = self._pick_candidate(candidates, country_token, code)
            if chosen is None:
                continue

            coords = _parse_coordinates(chosen)
            if coords is None:
                raise LocationNotFoundError(
                    f"Provider returned unusable coordinates for {attempt.query!r}"
                )
            logger.info(
                "Resolved place=%r country=%r to %.6f,%.6f on attempt %d",
                query.place,
                query.country,
                coords.latitude,
                coords.longitude,
                index,
            )
            return coords

        if transport_failures == len(attempts):
            raise ProviderUnavailableError("Geocoding provider is unavailable")
        raise LocationNotFoundError(
            f"No location found for place={query.place!r} country={query.country!r}"
        )

    @staticmethod
    def _pick_candidate(candidates: List[dict], country_token: str, code: Optional[str]) -> Optional[dict]:
        if not candidates:
            return None
        if code:
            for candidate in candidates:
                if candidate_matches_country(candidate, country_token, code):
                    return candidate
            return None
        if country_token:
            for candidate in candidates:
                if candidate_matches_country(candidate, country_token, None):
                    return candidate
        return candidates[0]

    def reverse_resolve(self, latitude: float, longitude: float) -> ReverseResult:
        """Label a coordinate with place, country and country code.

        Returns an empty `ReverseResult` on network, parsing or provider
        errors; out-of-range input is left for the provider to reject.
        """
        self._log_user_agent()
        params = {
            "format": RESPONSE_FORMAT,
            "lat": str(latitude),
            "lon": str(longitude),
            "addressdetails": "1",
        }

        try:
            resp = _throttled_get(
                f"{self.base_url}/reverse",
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except Exception as exc:
            logger.warning(
                "Nominatim reverse geocode error for lat=%s lon=%s: %s", latitude, longitude, exc
            )
            return ReverseResult()

        try:
            data = resp.json()
        except Exception as exc:
            logger.warning(
                "Nominatim reverse geocode JSON error for lat=%s lon=%s: %s",
                latitude,
                longitude,
                exc,
            )
            return ReverseResult()

        if not isinstance(data, dict) or "error" in data:
            logger.warning("Nominatim reverse geocode returned no result for lat=%s lon=%s", latitude, longitude)
            return ReverseResult()

        address = data.get("address")
        if not isinstance(address, dict):
            return ReverseResult()

        display_name = str(data.get("display_name") or "")
        place = next((str(address[key]) for key in REVERSE_PLACE_KEYS if address.get(key)), display_name)
        country_code = str(address.get("country_code") or "").upper()

        return ReverseResult(
            place=place,
            country=str(address.get("country") or ""),
            country_code=country_code,
            display_name=display_name,
        )


_default_resolver: Optional[LocationResolver] = None


def get_default_resolver() -> LocationResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = LocationResolver()
    return _default_resolver
