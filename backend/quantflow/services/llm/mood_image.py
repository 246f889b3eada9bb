"""
Mood Image Service Implementation

Renders the current verdict as an abstract "market mood" image.
"""

import logging
from typing import Optional

from quantflow.services.base import ExternalAPIError, ValidationError
from quantflow.services.llm.interface import MoodImageInput, MoodImageServiceInterface
from quantflow.services.llm.client import LLMClient, get_llm_client
from quantflow.services.llm.prompts import format_mood_image_prompt

logger = logging.getLogger(__name__)

IMAGE_SIZES = ("1K", "2K", "4K")


class MoodImageService(MoodImageServiceInterface):
    """Image generation through the configured LLM provider."""

    def __init__(self, llm_client: Optional[LLMClient] = None):
        self._llm_client = llm_client

    @property
    def llm_client(self) -> LLMClient:
        """Lazy initialization of LLM client."""
        if self._llm_client is None:
            self._llm_client = get_llm_client()
        return self._llm_client

    @property
    def name(self) -> str:
        return "MoodImageService"

    async def validate_input(self, input_data: MoodImageInput) -> MoodImageInput:
        if input_data.size not in IMAGE_SIZES:
            raise ValidationError(self.name, f"Unsupported image size: {input_data.size}")
        return input_data

    async def execute(self, input_data: MoodImageInput) -> Optional[str]:
        request = await self.validate_input(input_data)
        prompt = format_mood_image_prompt(request.context, request.size)

        try:
            image = await self.llm_client.generate_image(prompt)
        except Exception as e:
            logger.error(f"Mood image generation failed for {request.context.ticker}: {e}")
            raise ExternalAPIError(self.name, "Image generation failed", {"error": str(e)}) from e

        if image is None:
            logger.warning(f"No image returned for {request.context.ticker}")
            return None
        return image.to_data_uri()

    async def health_check(self) -> bool:
        return self.llm_client.is_configured


# Singleton instance
_service_instance: Optional[MoodImageService] = None


def get_mood_image_service() -> MoodImageService:
    """Get or create mood image service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MoodImageService()
    return _service_instance
