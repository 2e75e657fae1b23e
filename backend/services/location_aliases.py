"""
Static lookup tables used to clean up user-entered places and countries
before they are sent to the geocoding provider.

Both tables are plain data. Add a row here rather than a special case in the
resolver.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

# Lower-case, whitespace-stripped country names -> ISO 3166-1 alpha-2 codes.
COUNTRY_ALIASES: List[Tuple[str, str]] = [
    ("australia", "au"),
    ("bahamas", "bs"),
    ("belize", "bz"),
    ("canada", "ca"),
    ("costarica", "cr"),
    ("croatia", "hr"),
    ("cuba", "cu"),
    ("ecuador", "ec"),
    ("egypt", "eg"),
    ("fiji", "fj"),
    ("france", "fr"),
    ("germany", "de"),
    ("greece", "gr"),
    ("honduras", "hn"),
    ("iceland", "is"),
    ("indonesia", "id"),
    ("italy", "it"),
    ("japan", "jp"),
    ("jordan", "jo"),
    ("malaysia", "my"),
    ("maldives", "mv"),
    ("malta", "mt"),
    ("mexico", "mx"),
    ("mozambique", "mz"),
    ("newzealand", "nz"),
    ("norway", "no"),
    ("palau", "pw"),
    ("philippines", "ph"),
    ("portugal", "pt"),
    ("southafrica", "za"),
    ("spain", "es"),
    ("tanzania", "tz"),
    ("thailand", "th"),
    ("uk", "gb"),
    ("unitedkingdom", "gb"),
    ("greatbritain", "gb"),
    ("us", "us"),
    ("usa", "us"),
    ("unitedstates", "us"),
    ("unitedstatesofamerica", "us"),
]

# Recurring misspellings, matched as whole words regardless of case.
PLACE_WORD_ALIASES: List[Tuple[str, str]] = [
    ("sheik", "Sheikh"),
    ("shiekh", "Sheikh"),
    ("hurgada", "Hurghada"),
    ("hurgheda", "Hurghada"),
    ("dahab city", "Dahab"),
    ("phi phi islands", "Phi Phi Islands"),
    ("koh tao island", "Koh Tao"),
    ("cozumel island", "Cozumel"),
]

# Canonical spelling for places whose casing/spacing users vary.
CANONICAL_PLACE_NAMES: List[Tuple[str, str]] = [
    ("sharm el sheikh", "Sharm El Sheikh"),
    ("sharm el-sheikh", "Sharm El Sheikh"),
    ("sharm elsheikh", "Sharm El Sheikh"),
    ("marsa alam", "Marsa Alam"),
    ("playa del carmen", "Playa del Carmen"),
]

_COUNTRY_CODES: Dict[str, str] = dict(COUNTRY_ALIASES)
_CANONICAL_PLACES: Dict[str, str] = dict(CANONICAL_PLACE_NAMES)
_WORD_PATTERNS = [
    (re.compile(r"\b" + re.escape(variant) + r"\b", re.IGNORECASE), canonical)
    for variant, canonical in PLACE_WORD_ALIASES
]
_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def normalize_country(country: Optional[str]) -> str:
    """Trim, lower-case and collapse internal whitespace. Empty string if absent."""
    if not country:
        return ""
    return collapse_whitespace(country).lower()


def country_code_hint(country: Optional[str]) -> Optional[str]:
    """Return the alpha-2 code for a known country name, else None."""
    token = normalize_country(country).replace(" ", "")
    if not token:
        return None
    return _COUNTRY_CODES.get(token)


def normalize_place(place: Optional[str]) -> Optional[str]:
    """Apply the spelling-alias tables to a free-text place.

    >>> normalize_place("Sharm El Sheik")
    'Sharm El Sheikh'
    >>> normalize_place("sharm el sheikh")
    'Sharm El Sheikh'
    """
    if not place:
        return None
    cleaned = collapse_whitespace(place)
    if not cleaned:
        return None
    for pattern, canonical in _WORD_PATTERNS:
        cleaned = pattern.sub(canonical, cleaned)
    return _CANONICAL_PLACES.get(cleaned.lower(), cleaned)
