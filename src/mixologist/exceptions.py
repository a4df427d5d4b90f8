"""Custom exceptions for mixologist."""


class MixologistError(Exception):
    """Base exception for mixologist."""

    pass


class ConfigError(MixologistError):
    """Raised when the model API key is missing."""

    pass


class UpstreamError(MixologistError):
    """Raised when the model call fails, times out, or returns a malformed envelope."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(UpstreamError):
    """Raised when API rate limit or quota is exceeded."""

    pass


class ParseError(MixologistError):
    """Raised when a strictly validated model reply cannot be parsed."""

    pass


class ImageError(MixologistError):
    """Raised when an image payload cannot be decoded or is invalid."""

    pass


class CacheError(MixologistError):
    """Raised when the result cache backend fails."""

    pass
