"""
QuantFlow Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.

    market_data -> indicators -> decision -> llm (analyst, mood image)
"""

from quantflow.services.base import BaseService, ServiceError

__all__ = ["BaseService", "ServiceError"]
