import os
from pathlib import Path

# Basic settings helper to read environment configuration.

DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_DB_PATH = Path(__file__).resolve().parent / "data" / "hobbymap.db"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_float(val: str | None, default: float) -> float:
    if val is None or not val.strip():
        return default
    return float(val)


def _as_list(val: str | None, default: list[str]) -> list[str]:
    if val is None or not val.strip():
        return default
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.NOMINATIM_BASE_URL: str = (
            os.getenv("NOMINATIM_BASE_URL") or DEFAULT_NOMINATIM_BASE_URL
        ).rstrip("/")
        self.NOMINATIM_USER_AGENT: str | None = os.getenv("NOMINATIM_USER_AGENT")
        self.NOMINATIM_REFERER: str | None = os.getenv("NOMINATIM_REFERER")
        self.NOMINATIM_MIN_INTERVAL: float = _as_float(os.getenv("NOMINATIM_MIN_INTERVAL"), 1.1)
        self.GEOCODING_TIMEOUT_SECONDS: float = _as_float(os.getenv("GEOCODING_TIMEOUT_SECONDS"), 10.0)
        self.HOBBYMAP_DB_PATH: str = os.getenv("HOBBYMAP_DB_PATH") or str(DEFAULT_DB_PATH)
        self.CORS_ALLOW_ORIGINS: list[str] = _as_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])
        self.SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO"), False)


settings = Settings()
