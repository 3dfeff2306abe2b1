# mcp_orchestrator/infra/logging.py
from __future__ import annotations
import logging
from typing import Optional

from mcp_orchestrator.config import settings

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> int:
    """
    Consistent log format for the orchestrator and whatever embeds it.
    Returns the effective level.
    """
    resolved = _LEVELS.get((level or settings.log_level).upper(), logging.INFO)
    svc = service_name or settings.service_name
    logging.basicConfig(
        level=resolved,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | "
            f"svc={svc} | %(message)s"
        ),
    )
    logging.getLogger("mcp_orchestrator").setLevel(resolved)
    # the SDK and its HTTP stack log every request at INFO
    for noisy in ("mcp", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return resolved
