"""Model gateways for mixologist."""

from mixologist.providers.base import BaseGateway, GenerationSettings
from mixologist.providers.gemini import GeminiGateway, invoke

__all__ = ["BaseGateway", "GenerationSettings", "GeminiGateway", "invoke"]
