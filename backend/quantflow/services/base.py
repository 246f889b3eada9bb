"""
Base Service Interface

All services inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all services.

    Each service:
    - Has a defined input type
    - Has a defined output type
    - Can validate its inputs
    - Can check its health

    Indicator and decision services are thin async wrappers around pure
    functions; only the LLM services await real I/O.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Run the service on a validated input.

        Raises:
            ServiceError: If execution fails
        """
        pass

    async def health_check(self) -> bool:
        """Pure-computation services are always healthy."""
        return True

    async def validate_input(self, input_data: InputT) -> InputT:
        """Return input as-is (Pydantic handles validation). Override for custom checks."""
        return input_data


class ServiceError(Exception):
    """Base exception for service errors."""

    status_code: int = 500

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Input rejected before any computation."""

    status_code = 400


class ExternalAPIError(ServiceError):
    """AI provider call failed."""

    status_code = 502
