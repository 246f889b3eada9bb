"""
Decision Engine Service Interface
"""

from abc import abstractmethod

from quantflow.services.base import BaseService
from quantflow.schemas.indicators import AnalyzedBar
from quantflow.schemas.decision import Recommendation


class DecisionServiceInterface(BaseService[list[AnalyzedBar], Recommendation]):
    """
    Decision Engine Contract.

    INPUT: list[AnalyzedBar]
        - Output of the Indicator Engine, oldest first

    OUTPUT: Recommendation
        - direction: BUY / SELL / HOLD
        - confidence: 0-99
        - risk_level: LOW / MEDIUM / HIGH
        - factors: Ordered explanation trail
        - summary: Plain-English verdict

    RULES:
        - Insufficient history is a HOLD with confidence 0, never an error
        - Same input always yields the same output
    """

    @property
    def name(self) -> str:
        return "DecisionService"

    @abstractmethod
    async def execute(self, input_data: list[AnalyzedBar]) -> Recommendation:
        """Score the latest bar."""
        pass
