"""Tests for environment configuration."""

from mixologist.config import MixologistConfig

ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "MONGODB_URI",
    "MONGODB_DATABASE",
    "MONGODB_COLLECTION",
    "CACHE_TTL_SECONDS",
    "FRONTEND_ORIGINS",
    "MAX_IMAGE_BYTES",
)


def test_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    config = MixologistConfig.from_env()

    assert config.gemini_api_key is None
    assert config.gemini_model == "gemini-2.5-flash-lite"
    assert config.mongodb_uri is None
    assert config.mongodb_database == "mixologist"
    assert config.mongodb_collection == "searchResults"
    assert config.cache_ttl_seconds is None
    assert config.frontend_origins == ("*",)
    assert config.max_image_bytes == 8 * 1024 * 1024


def test_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "3600")
    monkeypatch.setenv("FRONTEND_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("MAX_IMAGE_BYTES", "1024")

    config = MixologistConfig.from_env()

    assert config.gemini_api_key == "key"
    assert config.mongodb_uri == "mongodb://localhost:27017"
    assert config.cache_ttl_seconds == 3600.0
    assert config.frontend_origins == ("https://a.example", "https://b.example")
    assert config.max_image_bytes == 1024


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_SECONDS", "forever")
    monkeypatch.setenv("MAX_IMAGE_BYTES", "lots")

    config = MixologistConfig.from_env()

    assert config.cache_ttl_seconds is None
    assert config.max_image_bytes == 8 * 1024 * 1024


def test_non_positive_ttl_means_no_expiry(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_SECONDS", "0")
    assert MixologistConfig.from_env().cache_ttl_seconds is None
