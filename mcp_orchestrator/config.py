# mcp_orchestrator/config.py
from __future__ import annotations
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

from mcp_orchestrator import __version__


class Settings(BaseSettings):
    # Dispatch
    max_tool_timeout_ms: int = int(os.getenv("MAX_TOOL_TIMEOUT_MS", "10000"))

    # Handshake bound; 0 leaves connect/initialize unbounded
    init_timeout_sec: float = float(os.getenv("MCP_INIT_TIMEOUT_SEC", "0"))

    # Identity presented to servers during initialize()
    client_name: str = os.getenv("MCP_CLIENT_NAME", "mcp-orchestrator")
    client_version: str = os.getenv("MCP_CLIENT_VERSION", __version__)

    # Logging
    service_name: str = os.getenv("SERVICE_NAME", "mcp-orchestrator")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")


settings = Settings()
