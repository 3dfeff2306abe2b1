# mcp_orchestrator/errors.py
from __future__ import annotations

from typing import Optional


class MCPClientError(Exception):
    """Base class for every error raised by the orchestrator."""


class ConfigurationError(MCPClientError, ValueError):
    """Missing/ambiguous transport fields, empty server set, unreadable config."""


class NotFoundError(MCPClientError, LookupError):
    """Unknown server name, unknown tool name, or a session that is gone."""


class ToolTimeoutError(MCPClientError, TimeoutError):
    def __init__(self, *, tool: str, server: str, timeout_ms: int) -> None:
        super().__init__(
            f"Tool '{tool}' on server '{server}' did not complete within {timeout_ms} ms"
        )
        self.tool = tool
        self.server = server
        self.timeout_ms = timeout_ms


class RemoteToolError(MCPClientError):
    def __init__(self, *, tool: str, server: str, message: str, code: Optional[int] = None) -> None:
        super().__init__(f"Tool '{tool}' on server '{server}' failed: {message}")
        self.tool = tool
        self.server = server
        self.message = message
        self.code = code
