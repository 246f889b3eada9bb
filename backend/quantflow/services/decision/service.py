"""
Decision Engine Service Implementation
"""

import logging
from typing import Optional

from quantflow.schemas.indicators import AnalyzedBar
from quantflow.schemas.decision import Recommendation
from quantflow.services.decision.interface import DecisionServiceInterface
from quantflow.services.decision.engine import recommend

logger = logging.getLogger(__name__)


class DecisionService(DecisionServiceInterface):
    """Wraps the scoring rules as an async service."""

    @property
    def name(self) -> str:
        return "DecisionService"

    async def execute(self, input_data: list[AnalyzedBar]) -> Recommendation:
        result = recommend(input_data)
        logger.debug(
            f"Recommendation: {result.direction.value} "
            f"(confidence {result.confidence}, risk {result.risk_level.value})"
        )
        return result


# Singleton instance
_service_instance: Optional[DecisionService] = None


def get_decision_service() -> DecisionService:
    """Get or create decision service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DecisionService()
    return _service_instance
