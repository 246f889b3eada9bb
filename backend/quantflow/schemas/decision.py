"""
CONTRACT 3: Decision Engine

Input: list[AnalyzedBar]
Output: Recommendation

Deterministic scoring over the latest two analyzed bars.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class FactorImpact(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


class Factor(BaseModel):
    """One named contribution to a recommendation."""

    model_config = ConfigDict(frozen=True)

    name: str
    impact: FactorImpact
    description: str


class Recommendation(BaseModel):
    """Scored verdict with its explanation trail."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "direction": "BUY",
                "confidence": 75,
                "risk_level": "LOW",
                "factors": [
                    {
                        "name": "Long-term Trend",
                        "impact": "POSITIVE",
                        "description": "Price is above the 200-day Moving Average, indicating a bullish long-term trend.",
                    },
                    {
                        "name": "Golden Cross",
                        "impact": "POSITIVE",
                        "description": "50-day SMA is above 200-day SMA.",
                    },
                ],
                "summary": "Based on our quantitative model, we recommend a BUY. "
                "The primary drivers are Long-term Trend and Golden Cross. Risk is assessed as LOW.",
            }
        },
    )

    direction: Direction
    confidence: int = Field(..., ge=0, le=99)
    risk_level: RiskLevel
    factors: list[Factor] = Field(default_factory=list, description="In evaluation order")
    summary: str
