"""
Analyst Service Implementation

Answers questions about the current verdict through the LLM client.
The reply function is injectable so tests and offline runs never touch a
provider.
"""

import logging
from typing import Optional

from quantflow.schemas.chat import ChatContext, ChatMessage, ChatRole
from quantflow.services.base import ValidationError
from quantflow.services.llm.interface import (
    AnalystInput,
    AnalystServiceInterface,
    Responder,
)
from quantflow.services.llm.client import LLMClient, get_llm_client
from quantflow.services.llm.prompts import (
    CONNECTION_ERROR_REPLY,
    NO_RESPONSE_REPLY,
    format_analyst_system_prompt,
)

logger = logging.getLogger(__name__)


def llm_responder(llm_client: LLMClient) -> Responder:
    """Responder that sends the history through ``llm_client``."""

    async def respond(messages: list[ChatMessage], context: ChatContext) -> str:
        response = await llm_client.chat(
            system_prompt=format_analyst_system_prompt(context),
            history=messages[:-1],
            message=messages[-1].text,
        )
        return response.content

    return respond


class AnalystService(AnalystServiceInterface):
    """
    Conversational analyst.

    Falls back to a fixed reply if the provider is unavailable.
    """

    def __init__(self, responder: Optional[Responder] = None):
        self._responder = responder

    @property
    def responder(self) -> Responder:
        """Lazy initialization of the LLM-backed responder."""
        if self._responder is None:
            self._responder = llm_responder(get_llm_client())
        return self._responder

    @property
    def name(self) -> str:
        return "AnalystService"

    async def validate_input(self, input_data: AnalystInput) -> AnalystInput:
        if not input_data.messages:
            raise ValidationError(self.name, "Chat history is empty")
        if input_data.messages[-1].role != ChatRole.USER:
            raise ValidationError(self.name, "Last message must come from the user")
        return input_data

    async def execute(self, input_data: AnalystInput) -> ChatMessage:
        """Answer the last user message in the history."""
        request = await self.validate_input(input_data)

        try:
            text = await self.responder(request.messages, request.context)
        except Exception as e:
            logger.error(f"Analyst reply failed for {request.context.ticker}: {e}")
            text = CONNECTION_ERROR_REPLY

        if not text or not text.strip():
            text = NO_RESPONSE_REPLY

        return ChatMessage(role=ChatRole.MODEL, text=text)


# Singleton instance
_service_instance: Optional[AnalystService] = None


def get_analyst_service() -> AnalystService:
    """Get or create analyst service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalystService()
    return _service_instance
