"""
CONTRACT 4: Conversational Explainer

Input: ChatRequest (history) + ChatContext (from the Decision Engine)
Output: ChatResponse

The AI provider only ever sees the narrow ChatContext, never raw series.
"""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


class ChatMessage(BaseModel):
    """Single chat transcript entry."""

    role: ChatRole
    text: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=datetime.now)


class ChatContext(BaseModel):
    """What the analyst knows about the current verdict."""

    ticker: str
    current_price: float = Field(..., gt=0)
    recommendation: str = Field(..., description="BUY / SELL / HOLD")
    confidence: int = Field(..., ge=0, le=99)
    risk_level: str = Field(..., description="LOW / MEDIUM / HIGH")


class ChatRequest(BaseModel):
    """Chat history, oldest first; the last message is the question."""

    messages: list[ChatMessage] = Field(..., min_length=1, max_length=100)


class ChatResponse(BaseModel):
    message: ChatMessage
    context: ChatContext


ImageSize = Literal["1K", "2K", "4K"]


class MoodImageRequest(BaseModel):
    size: ImageSize = "1K"


class MoodImageResponse(BaseModel):
    ticker: str
    size: ImageSize
    image: Optional[str] = Field(default=None, description="data:image/png;base64 URI, if the model returned one")
    context: ChatContext
