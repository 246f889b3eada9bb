"""
LLM Orchestration Service

CONTRACT:
    Analyst:
        Input:  AnalystInput (chat history + ChatContext)
        Output: ChatMessage

    Mood Image:
        Input:  MoodImageInput (ChatContext + size)
        Output: data URI or None

LLM USAGE:
    - Primary provider from settings (Gemini by default)
    - Falls back to the next provider with a configured API key

CRITICAL RULES:
    - LLM does NO math - every number comes from the Decision Engine
    - Analyst degrades to a fixed reply when no provider answers
"""

from quantflow.services.llm.interface import (
    AnalystServiceInterface,
    MoodImageServiceInterface,
    AnalystInput,
    MoodImageInput,
    Responder,
)
from quantflow.services.llm.client import (
    LLMClient,
    LLMConfig,
    LLMProvider,
    ImageResponse,
    get_llm_client,
)
from quantflow.services.llm.analyst import AnalystService, get_analyst_service, llm_responder
from quantflow.services.llm.mood_image import MoodImageService, get_mood_image_service

__all__ = [
    # Interfaces
    "AnalystServiceInterface",
    "MoodImageServiceInterface",
    "AnalystInput",
    "MoodImageInput",
    "Responder",
    # Client
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "ImageResponse",
    "get_llm_client",
    # Services
    "AnalystService",
    "get_analyst_service",
    "llm_responder",
    "MoodImageService",
    "get_mood_image_service",
]
