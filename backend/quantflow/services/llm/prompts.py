"""
LLM Prompt Templates

Prompts for the conversational analyst and the market mood image.

CRITICAL RULES (enforced in all prompts):
- LLM does NO math - all numbers come from the Decision Engine context
- Markets are probabilistic; never present analysis as certain advice
"""

from quantflow.schemas.chat import ChatContext

# =============================================================================
# ANALYST CHAT PROMPTS
# =============================================================================

ANALYST_SYSTEM_PROMPT_TEMPLATE = """You are a Senior Quantitative Analyst at a top Wall Street firm.
You are analyzing the stock {ticker}.
Current Price: ${current_price:.2f}.
Model Recommendation: {recommendation} (Confidence: {confidence}%).
Risk Level: {risk_level}.

Your goal is to explain financial concepts, interpret the data, and provide reasoned arguments.
Be professional, concise, and data-driven. Do not give financial advice as a certainty, but as analysis.
If asked about future price, mention that markets are probabilistic.
Use markdown for formatting."""

NO_RESPONSE_REPLY = "I couldn't generate an analysis at this time."
CONNECTION_ERROR_REPLY = "Error connecting to AI Analyst. Please check your API Key configuration."


def format_analyst_system_prompt(context: ChatContext) -> str:
    """Build the analyst system prompt from the decision context."""
    return ANALYST_SYSTEM_PROMPT_TEMPLATE.format(
        ticker=context.ticker,
        current_price=context.current_price,
        recommendation=context.recommendation,
        confidence=context.confidence,
        risk_level=context.risk_level,
    )


# =============================================================================
# MARKET MOOD IMAGE PROMPTS
# =============================================================================

MOOD_BY_RECOMMENDATION = {
    "BUY": "Bullish, optimistic, growing, green and gold colors, upward momentum",
    "SELL": "Bearish, cautious, stormy, red and grey colors, downward pressure",
}
NEUTRAL_MOOD = "Neutral, balanced, steady, blue and white colors, horizon"

MOOD_IMAGE_PROMPT_TEMPLATE = """An abstract, cinematic, 3D render representing the financial sentiment of {ticker} stock.
Mood: {mood}.
Style: High-tech financial data visualization merged with abstract art.
Professional, clean, high quality.
Composition: widescreen 16:9, {size} resolution."""


def format_mood_image_prompt(context: ChatContext, size: str = "1K") -> str:
    """Build the image prompt for the current verdict."""
    mood = MOOD_BY_RECOMMENDATION.get(context.recommendation, NEUTRAL_MOOD)
    return MOOD_IMAGE_PROMPT_TEMPLATE.format(ticker=context.ticker, mood=mood, size=size)
