"""Environment configuration."""

import os
from dataclasses import dataclass

from mixologist.providers.gemini import DEFAULT_MODEL


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _safe_float(value: str | None, default: float | None) -> float | None:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _parse_list(value: str | None, default: str) -> tuple[str, ...]:
    raw = value if value is not None else default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class MixologistConfig:
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_MODEL
    mongodb_uri: str | None = None
    mongodb_database: str = "mixologist"
    mongodb_collection: str = "searchResults"
    cache_ttl_seconds: float | None = None  # None caches forever
    frontend_origins: tuple[str, ...] = ("*",)
    max_image_bytes: int = 8 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "MixologistConfig":
        ttl = _safe_float(os.getenv("CACHE_TTL_SECONDS"), None)
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
            mongodb_uri=os.getenv("MONGODB_URI") or None,
            mongodb_database=os.getenv("MONGODB_DATABASE", "mixologist"),
            mongodb_collection=os.getenv("MONGODB_COLLECTION", "searchResults"),
            cache_ttl_seconds=ttl if ttl is not None and ttl > 0 else None,
            frontend_origins=_parse_list(os.getenv("FRONTEND_ORIGINS"), "*"),
            max_image_bytes=_parse_int(os.getenv("MAX_IMAGE_BYTES"), 8 * 1024 * 1024),
        )
