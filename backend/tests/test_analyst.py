"""Tests for the AI analyst and mood image services with stubbed providers."""

import base64

import pytest

from quantflow.schemas.chat import ChatMessage, ChatRole
from quantflow.services.base import ExternalAPIError, ValidationError
from quantflow.services.llm import (
    AnalystInput,
    AnalystService,
    ImageResponse,
    LLMClient,
    LLMConfig,
    LLMProvider,
    MoodImageInput,
    MoodImageService,
    llm_responder,
)
from quantflow.services.llm.client import LLMResponse
from quantflow.services.llm.prompts import (
    CONNECTION_ERROR_REPLY,
    NO_RESPONSE_REPLY,
    format_analyst_system_prompt,
    format_mood_image_prompt,
)


def user(text: str) -> ChatMessage:
    return ChatMessage(role=ChatRole.USER, text=text)


class FakeProvider:
    """Stands in for a provider client inside LLMClient."""

    def __init__(self, provider: LLMProvider, reply: str = "ok", fail: bool = False, image=None):
        self.provider = provider
        self.reply = reply
        self.fail = fail
        self.image = image
        self.calls = []

    async def chat(self, system_prompt, history, message, temperature=None, max_tokens=None):
        self.calls.append((system_prompt, list(history), message))
        if self.fail:
            raise ConnectionError(f"{self.provider.value} down")
        return LLMResponse(content=self.reply, model="fake", provider=self.provider)

    async def generate_image(self, prompt):
        self.calls.append(prompt)
        if self.fail:
            raise ConnectionError(f"{self.provider.value} down")
        return self.image


# =============================================================================
# ANALYST
# =============================================================================


@pytest.mark.asyncio
async def test_analyst_returns_model_reply(chat_context):
    seen = {}

    async def responder(messages, context):
        seen["messages"] = messages
        seen["context"] = context
        return "The trend is **bullish**."

    service = AnalystService(responder=responder)
    reply = await service.execute(AnalystInput(messages=[user("Why buy?")], context=chat_context))

    assert reply.role == ChatRole.MODEL
    assert reply.text == "The trend is **bullish**."
    assert seen["context"] == chat_context
    assert seen["messages"][-1].text == "Why buy?"


@pytest.mark.asyncio
async def test_analyst_provider_failure_becomes_error_reply(chat_context):
    async def responder(messages, context):
        raise ConnectionError("no network")

    service = AnalystService(responder=responder)
    reply = await service.execute(AnalystInput(messages=[user("Hi")], context=chat_context))

    assert reply.role == ChatRole.MODEL
    assert reply.text == CONNECTION_ERROR_REPLY


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   "])
async def test_analyst_empty_reply_uses_fallback_text(chat_context, text):
    async def responder(messages, context):
        return text

    service = AnalystService(responder=responder)
    reply = await service.execute(AnalystInput(messages=[user("Hi")], context=chat_context))
    assert reply.text == NO_RESPONSE_REPLY


@pytest.mark.asyncio
async def test_analyst_rejects_empty_history(chat_context):
    async def responder(messages, context):
        return "unused"

    with pytest.raises(ValidationError):
        await AnalystService(responder=responder).execute(AnalystInput(messages=[], context=chat_context))


@pytest.mark.asyncio
async def test_analyst_rejects_history_ending_with_model(chat_context):
    async def responder(messages, context):
        return "unused"

    messages = [user("Hi"), ChatMessage(role=ChatRole.MODEL, text="Hello")]
    with pytest.raises(ValidationError):
        await AnalystService(responder=responder).execute(AnalystInput(messages=messages, context=chat_context))


@pytest.mark.asyncio
async def test_llm_responder_splits_history_and_question(chat_context):
    fake = FakeProvider(LLMProvider.GEMINI, reply="answer")
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = fake

    respond = llm_responder(client)
    history = [user("first"), ChatMessage(role=ChatRole.MODEL, text="reply"), user("second")]
    text = await respond(history, chat_context)

    assert text == "answer"
    system_prompt, sent_history, message = fake.calls[0]
    assert system_prompt == format_analyst_system_prompt(chat_context)
    assert [m.text for m in sent_history] == ["first", "reply"]
    assert message == "second"


def test_analyst_system_prompt_carries_context(chat_context):
    prompt = format_analyst_system_prompt(chat_context)

    assert "You are analyzing the stock AAPL." in prompt
    assert "Current Price: $123.45." in prompt
    assert "Model Recommendation: BUY (Confidence: 75%)." in prompt
    assert "Risk Level: LOW." in prompt
    assert "markets are probabilistic" in prompt


# =============================================================================
# MOOD IMAGE
# =============================================================================


@pytest.mark.parametrize(
    "recommendation,mood",
    [
        ("BUY", "Bullish, optimistic"),
        ("SELL", "Bearish, cautious"),
        ("HOLD", "Neutral, balanced"),
    ],
)
def test_mood_prompt_follows_recommendation(chat_context, recommendation, mood):
    context = chat_context.model_copy(update={"recommendation": recommendation})
    prompt = format_mood_image_prompt(context, "2K")

    assert f"Mood: {mood}" in prompt
    assert "AAPL stock" in prompt
    assert "16:9" in prompt
    assert "2K" in prompt


@pytest.mark.asyncio
async def test_mood_image_returns_data_uri(chat_context):
    image = ImageResponse(data=b"\x89PNG", mime_type="image/png", model="fake", provider=LLMProvider.GEMINI)
    fake = FakeProvider(LLMProvider.GEMINI, image=image)
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = fake

    uri = await MoodImageService(llm_client=client).execute(MoodImageInput(context=chat_context))

    assert uri == "data:image/png;base64," + base64.b64encode(b"\x89PNG").decode("ascii")
    assert "Bullish" in fake.calls[0]


@pytest.mark.asyncio
async def test_mood_image_none_when_no_image(chat_context):
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = FakeProvider(LLMProvider.GEMINI, image=None)

    assert await MoodImageService(llm_client=client).execute(MoodImageInput(context=chat_context)) is None


@pytest.mark.asyncio
async def test_mood_image_provider_failure_raises(chat_context):
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = FakeProvider(LLMProvider.GEMINI, fail=True)

    with pytest.raises(ExternalAPIError) as exc_info:
        await MoodImageService(llm_client=client).execute(MoodImageInput(context=chat_context))
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_mood_image_rejects_unknown_size(chat_context):
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    with pytest.raises(ValidationError):
        await MoodImageService(llm_client=client).execute(MoodImageInput(context=chat_context, size="8K"))


@pytest.mark.asyncio
async def test_mood_image_health_reflects_configuration():
    unconfigured = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    configured = LLMClient(LLMConfig(provider=LLMProvider.GEMINI, gemini_api_key="key"))

    assert await MoodImageService(llm_client=unconfigured).health_check() is False
    assert await MoodImageService(llm_client=configured).health_check() is True


# =============================================================================
# LLM CLIENT
# =============================================================================


@pytest.mark.asyncio
async def test_client_without_keys_is_disabled():
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))

    assert client.is_configured is False
    assert client.get_active_provider() is None
    with pytest.raises(RuntimeError):
        await client.chat(system_prompt="s", history=[], message="m")


def test_client_primary_and_fallback_selection():
    client = LLMClient(
        LLMConfig(provider=LLMProvider.ANTHROPIC, anthropic_api_key="a", openai_api_key="o")
    )
    assert client.get_active_provider() == LLMProvider.ANTHROPIC
    assert client._fallback.provider == LLMProvider.OPENAI


def test_client_uses_fallback_when_primary_has_no_key():
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI, openai_api_key="o"))
    assert client.is_configured
    assert client.get_active_provider() == LLMProvider.OPENAI


@pytest.mark.asyncio
async def test_client_falls_back_on_failure():
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = FakeProvider(LLMProvider.GEMINI, fail=True)
    client._fallback = FakeProvider(LLMProvider.OPENAI, reply="from openai")

    response = await client.chat(system_prompt="s", history=[], message="m")

    assert response.content == "from openai"
    assert response.provider == LLMProvider.OPENAI


@pytest.mark.asyncio
async def test_client_raises_when_all_providers_fail():
    client = LLMClient(LLMConfig(provider=LLMProvider.GEMINI))
    client._primary = FakeProvider(LLMProvider.GEMINI, fail=True)
    client._fallback = FakeProvider(LLMProvider.OPENAI, fail=True)

    with pytest.raises(ConnectionError):
        await client.chat(system_prompt="s", history=[], message="m")
