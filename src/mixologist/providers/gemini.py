"""Gemini gateway implementation."""

import asyncio
import base64
import binascii
import logging
import os
import re
from io import BytesIO

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from PIL import Image, UnidentifiedImageError

from mixologist.exceptions import ConfigError, ImageError, RateLimitError, UpstreamError
from mixologist.providers.base import SEARCH, BaseGateway, GenerationSettings

DEFAULT_MODEL = "gemini-2.5-flash-lite"

_RATE_LIMIT_MARKERS = ("quota", "rate limit", "resource_exhausted")
_DATA_URL_PREFIX = re.compile(r"^data:(image/[a-z0-9.+-]+);base64,", re.IGNORECASE)

logger = logging.getLogger(__name__)


class GeminiGateway(BaseGateway):
    """Gemini generateContent gateway."""

    def __init__(self, api_key: str | None = None, model: str | None = None, *, client=None):
        """Initialize Gemini gateway.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name. Defaults to DEFAULT_MODEL.
            client: Pre-built `genai.Client`, mostly for tests.

        Raises:
            ConfigError: If no API key is provided or found.
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise ConfigError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.model = model or DEFAULT_MODEL
        self.client = client if client is not None else genai.Client(api_key=self.api_key)

    def _load_image_part(self, image_base64: str) -> types.Part:
        """Decode a base64 image (plain or data URL) into an inline part."""
        value = image_base64.strip()
        declared_mime = None
        match = _DATA_URL_PREFIX.match(value)
        if match:
            declared_mime = match.group(1).lower()
            value = value[match.end():]

        try:
            payload = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageError(f"Invalid base64 image data: {e}") from e
        if not payload:
            raise ImageError("Image payload is empty")

        try:
            with Image.open(BytesIO(payload)) as image:
                fmt = (image.format or "").upper()
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ImageError(f"Failed to open image: {e}") from e

        mime_type = Image.MIME.get(fmt) or declared_mime or "image/jpeg"
        return types.Part.from_bytes(data=payload, mime_type=mime_type)

    async def generate(
        self,
        prompt: str,
        *,
        settings: GenerationSettings = SEARCH,
        image_base64: str | None = None,
    ) -> str:
        """Call Gemini and return the first candidate's text.

        Raises:
            ImageError: If the image payload cannot be decoded
            RateLimitError: If the API quota is exceeded
            UpstreamError: On any other API failure, timeout, or malformed reply
        """
        contents: list = [prompt]
        if image_base64 is not None:
            contents.append(self._load_image_part(image_base64))

        config = types.GenerateContentConfig(
            temperature=settings.temperature,
            top_k=settings.top_k,
            top_p=settings.top_p,
            max_output_tokens=settings.max_output_tokens,
            candidate_count=settings.candidate_count,
        )

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model,
                    contents=contents,
                    config=config,
                ),
                timeout=settings.timeout,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Model request timed out after {settings.timeout:g}s") from e
        except genai_errors.APIError as e:
            code = getattr(e, "code", None)
            lowered = str(e).lower()
            if code == 429 or any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
                raise RateLimitError(f"API rate limit exceeded: {e}", status_code=code) from e
            raise UpstreamError(f"Model request failed: {e}", status_code=code) from e
        except Exception as e:
            raise UpstreamError(f"Model request failed: {e}") from e

        text = _first_text(response)
        logger.debug("model reply: %d chars", len(text))
        return text


def _first_text(response) -> str:
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) or []
    text = getattr(parts[0], "text", None) if parts else None
    if not isinstance(text, str) or not text:
        raise UpstreamError("Invalid response structure from model")
    return text


async def invoke(
    prompt: str,
    api_key: str | None,
    image_base64: str | None = None,
    *,
    settings: GenerationSettings = SEARCH,
    model: str | None = None,
) -> str:
    """One-shot model call; raises ConfigError before any network call if `api_key` is empty."""
    if not api_key:
        raise ConfigError("API key for Gemini service is not configured.")
    gateway = GeminiGateway(api_key=api_key, model=model)
    return await gateway.generate(prompt, settings=settings, image_base64=image_base64)
