"""Base model gateway interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationSettings:
    """Sampling parameters and timeout for one kind of model call."""

    temperature: float
    top_k: int
    top_p: float
    max_output_tokens: int
    candidate_count: int = 1
    timeout: float = 30.0


SEARCH = GenerationSettings(temperature=0.7, top_k=40, top_p=0.8, max_output_tokens=1024)
VISION = GenerationSettings(temperature=0.3, top_k=32, top_p=0.8, max_output_tokens=512)
LIQUOR_PAIR = GenerationSettings(temperature=0.8, top_k=40, top_p=0.9, max_output_tokens=768)
UPGRADE = GenerationSettings(temperature=0.8, top_k=40, top_p=0.9, max_output_tokens=1024)
COMMENT = GenerationSettings(temperature=0.8, top_k=40, top_p=0.9, max_output_tokens=256, timeout=15.0)


class BaseGateway(ABC):
    """Abstract base class for generative model gateways."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        settings: GenerationSettings = SEARCH,
        image_base64: str | None = None,
    ) -> str:
        """Send a prompt (and optionally an image) and return the reply text.

        Args:
            prompt: Rendered prompt text
            settings: Sampling parameters and timeout
            image_base64: Base64 image, optionally as a data URL

        Returns:
            The first candidate's first text part
        """
        pass
