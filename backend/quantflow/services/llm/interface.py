"""
LLM Service Interfaces

Defines contracts for the analyst chat and mood image services.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from quantflow.services.base import BaseService
from quantflow.schemas.chat import ChatContext, ChatMessage

# (chat history, context) -> reply text
Responder = Callable[[list[ChatMessage], ChatContext], Awaitable[str]]


@dataclass
class AnalystInput:
    """Input for the analyst chat."""

    messages: list[ChatMessage]
    context: ChatContext


@dataclass
class MoodImageInput:
    """Input for the mood image generator."""

    context: ChatContext
    size: str = "1K"


class AnalystServiceInterface(BaseService[AnalystInput, ChatMessage]):
    """
    Analyst Service Contract (Conversational Explainer).

    INPUT: AnalystInput
        - messages: Chat history, oldest first; the last one is the question
        - context: Ticker, price and verdict from the Decision Engine

    OUTPUT: ChatMessage
        - role: model
        - text: Markdown answer

    RULES:
        - NEVER do math - all numbers come from the context
        - Provider failures become a fixed apology reply, not an exception
    """

    @property
    def name(self) -> str:
        return "AnalystService"

    @abstractmethod
    async def execute(self, input_data: AnalystInput) -> ChatMessage:
        """Answer the latest question."""
        pass


class MoodImageServiceInterface(BaseService[MoodImageInput, Optional[str]]):
    """
    Mood Image Service Contract.

    INPUT: MoodImageInput
    OUTPUT: data URI of the generated image, or None if the model returned none
    """

    @property
    def name(self) -> str:
        return "MoodImageService"

    @abstractmethod
    async def execute(self, input_data: MoodImageInput) -> Optional[str]:
        """Render the current verdict as an image."""
        pass
