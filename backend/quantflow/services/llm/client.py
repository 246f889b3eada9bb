"""
LLM Client Abstraction

Provides unified interface for Google Gemini, Anthropic Claude and OpenAI.
Handles provider switching and fallback.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence
import asyncio
import base64
import logging

from quantflow.schemas.chat import ChatMessage, ChatRole

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


@dataclass
class LLMConfig:
    """Configuration for LLM client."""

    provider: LLMProvider
    gemini_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    chat_model: str = "gemini-2.5-pro"
    image_model: str = "gemini-2.5-flash-image"
    max_tokens: int = 2048
    temperature: float = 0.7


@dataclass
class LLMResponse:
    """Response from LLM."""

    content: str
    model: str
    provider: LLMProvider
    usage: dict = field(default_factory=dict)


@dataclass
class ImageResponse:
    """Generated image from LLM."""

    data: bytes
    mime_type: str
    model: str
    provider: LLMProvider

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def _openai_role(role: ChatRole) -> str:
    return "assistant" if role == ChatRole.MODEL else "user"


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    provider: LLMProvider

    @abstractmethod
    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Continue a conversation: prior ``history`` plus a new user ``message``."""
        pass

    async def generate_image(self, prompt: str) -> Optional[ImageResponse]:
        """Generate an image. Providers without image support raise."""
        raise RuntimeError(f"{self.provider.value} does not support image generation")


class GeminiClient(BaseLLMClient):
    """Google Gemini client implementation."""

    provider = LLMProvider.GEMINI

    def __init__(self, config: LLMConfig):
        self.config = config

    def _get_model(self, model_name: str, system_prompt: Optional[str] = None):
        """Get Gemini model by name."""
        try:
            import google.generativeai as genai
        except ImportError:
            raise RuntimeError(
                "google-generativeai package not installed. Run: pip install google-generativeai"
            )

        genai.configure(api_key=self.config.gemini_api_key)
        if system_prompt:
            return genai.GenerativeModel(model_name, system_instruction=system_prompt)
        return genai.GenerativeModel(model_name)

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Continue a conversation using Gemini."""
        model_name = self.config.chat_model
        model = self._get_model(model_name, system_prompt)

        generation_config = {
            "temperature": temperature if temperature is not None else self.config.temperature,
            "max_output_tokens": max_tokens if max_tokens is not None else self.config.max_tokens,
        }
        gemini_history = [{"role": m.role.value, "parts": [m.text]} for m in history]

        try:
            # Gemini's send_message is synchronous, wrap in executor
            session = model.start_chat(history=gemini_history)
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(
                None,
                lambda: session.send_message(message, generation_config=generation_config),
            )

            usage = {}
            if getattr(response, "usage_metadata", None) is not None:
                usage = {
                    "prompt_tokens": response.usage_metadata.prompt_token_count,
                    "completion_tokens": response.usage_metadata.candidates_token_count,
                }

            return LLMResponse(
                content=response.text,
                model=model_name,
                provider=LLMProvider.GEMINI,
                usage=usage,
            )
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise

    async def generate_image(self, prompt: str) -> Optional[ImageResponse]:
        """Generate an image using a Gemini image model."""
        model_name = self.config.image_model
        model = self._get_model(model_name)

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(None, lambda: model.generate_content(prompt))
        except Exception as e:
            logger.error(f"Gemini image API error: {e}")
            raise

        # First inline image part wins
        for candidate in response.candidates or []:
            for part in candidate.content.parts:
                inline = getattr(part, "inline_data", None)
                if inline is not None and inline.data:
                    return ImageResponse(
                        data=inline.data,
                        mime_type=inline.mime_type or "image/png",
                        model=model_name,
                        provider=LLMProvider.GEMINI,
                    )
        return None


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client implementation."""

    provider = LLMProvider.ANTHROPIC
    DEFAULT_MODEL = "claude-sonnet-4-5"

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            try:
                import anthropic

                self._client = anthropic.AsyncAnthropic(
                    api_key=self.config.anthropic_api_key
                )
            except ImportError:
                raise RuntimeError(
                    "anthropic package not installed. Run: pip install anthropic"
                )
        return self._client

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Continue a conversation using Claude."""
        client = self._get_client()
        model = self.DEFAULT_MODEL

        messages = [{"role": _openai_role(m.role), "content": m.text} for m in history]
        messages.append({"role": "user", "content": message})

        try:
            response = await client.messages.create(
                model=model,
                max_tokens=max_tokens if max_tokens is not None else self.config.max_tokens,
                temperature=temperature if temperature is not None else self.config.temperature,
                system=system_prompt,
                messages=messages,
            )

            return LLMResponse(
                content=response.content[0].text,
                model=model,
                provider=LLMProvider.ANTHROPIC,
                usage={
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise


class OpenAIClient(BaseLLMClient):
    """OpenAI GPT client implementation."""

    provider = LLMProvider.OPENAI
    DEFAULT_MODEL = "gpt-4o"
    IMAGE_MODEL = "gpt-image-1"

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            try:
                import openai

                self._client = openai.AsyncOpenAI(api_key=self.config.openai_api_key)
            except ImportError:
                raise RuntimeError(
                    "openai package not installed. Run: pip install openai"
                )
        return self._client

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """Continue a conversation using GPT."""
        client = self._get_client()
        model = self.DEFAULT_MODEL

        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": _openai_role(m.role), "content": m.text} for m in history)
        messages.append({"role": "user", "content": message})

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature if temperature is not None else self.config.temperature,
                max_tokens=max_tokens if max_tokens is not None else self.config.max_tokens,
            )

            return LLMResponse(
                content=response.choices[0].message.content or "",
                model=model,
                provider=LLMProvider.OPENAI,
                usage={
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                },
            )
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise

    async def generate_image(self, prompt: str) -> Optional[ImageResponse]:
        """Generate an image using the OpenAI images API."""
        client = self._get_client()
        try:
            response = await client.images.generate(
                model=self.IMAGE_MODEL,
                prompt=prompt,
                size="1536x1024",
            )
        except Exception as e:
            logger.error(f"OpenAI image API error: {e}")
            raise

        if not response.data or not response.data[0].b64_json:
            return None
        return ImageResponse(
            data=base64.b64decode(response.data[0].b64_json),
            mime_type="image/png",
            model=self.IMAGE_MODEL,
            provider=LLMProvider.OPENAI,
        )


_CLIENT_CLASSES = {
    LLMProvider.GEMINI: GeminiClient,
    LLMProvider.ANTHROPIC: AnthropicClient,
    LLMProvider.OPENAI: OpenAIClient,
}


class LLMClient:
    """
    Unified LLM client with provider switching and fallback.

    Primary provider is tried first.
    Falls back to the next configured provider on failure.
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._primary: Optional[BaseLLMClient] = None
        self._fallback: Optional[BaseLLMClient] = None
        self._setup_clients()

    def _has_key(self, provider: LLMProvider) -> bool:
        return bool(getattr(self.config, f"{provider.value}_api_key"))

    def _setup_clients(self):
        """Setup primary and fallback clients based on config."""
        if self._has_key(self.config.provider):
            self._primary = _CLIENT_CLASSES[self.config.provider](self.config)

        # Fallback order follows enum order, skipping the primary
        for provider in LLMProvider:
            if provider != self.config.provider and self._has_key(provider):
                self._fallback = _CLIENT_CLASSES[provider](self.config)
                break

        if self._primary is None and self._fallback is None:
            logger.warning("No LLM API keys configured. LLM features disabled.")

    @property
    def is_configured(self) -> bool:
        return self._primary is not None or self._fallback is not None

    def _clients(self) -> list[BaseLLMClient]:
        return [c for c in (self._primary, self._fallback) if c is not None]

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResponse:
        """
        Continue a conversation with automatic fallback.

        Tries primary provider first, falls back to secondary on failure.
        """
        clients = self._clients()
        if not clients:
            raise RuntimeError("No LLM providers configured")

        for i, client in enumerate(clients):
            try:
                return await client.chat(
                    system_prompt=system_prompt,
                    history=history,
                    message=message,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except Exception as e:
                if i == len(clients) - 1:
                    raise
                logger.warning(f"{client.provider.value} chat failed: {e}, trying fallback...")

        raise RuntimeError("All LLM providers failed")

    async def generate_image(self, prompt: str) -> Optional[ImageResponse]:
        """Generate an image with automatic fallback."""
        clients = self._clients()
        if not clients:
            raise RuntimeError("No LLM providers configured")

        for i, client in enumerate(clients):
            try:
                return await client.generate_image(prompt)
            except Exception as e:
                if i == len(clients) - 1:
                    raise
                logger.warning(f"{client.provider.value} image generation failed: {e}, trying fallback...")

        raise RuntimeError("All LLM providers failed")

    def get_active_provider(self) -> Optional[LLMProvider]:
        """Get the provider that will be tried first."""
        clients = self._clients()
        return clients[0].provider if clients else None


# Singleton instance management
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create LLM client singleton."""
    global _llm_client
    if _llm_client is None:
        from quantflow.core.config import settings

        config = LLMConfig(
            provider=LLMProvider(settings.llm_primary_provider),
            gemini_api_key=settings.gemini_api_key,
            anthropic_api_key=settings.anthropic_api_key,
            openai_api_key=settings.openai_api_key,
            chat_model=settings.llm_chat_model,
            image_model=settings.llm_image_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )
        _llm_client = LLMClient(config)
    return _llm_client
