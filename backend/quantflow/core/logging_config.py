"""
Logging Configuration

Configures the root logger once at startup. Modules log through
``logging.getLogger(__name__)``.
"""

import logging
from typing import Optional

from quantflow.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging format and level (idempotent)."""
    global _configured
    if _configured:
        return

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # Provider SDKs are chatty at INFO
    for noisy in ("httpx", "httpcore", "google", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _configured = True
