# mcp_orchestrator/mcp_host/__init__.py
from __future__ import annotations

from .types import (
    Session,
    SessionFactory,
    ToolInfo,
    TransportKind,
)
from .client_manager import SessionRegistry
from .tool_index import ToolIndex
from .factory import build_transport, open_session, resolve_transport_kind
from .session import McpSession
from .client import MCPClient

__all__ = [
    "Session",
    "SessionFactory",
    "ToolInfo",
    "TransportKind",
    "SessionRegistry",
    "ToolIndex",
    "build_transport",
    "open_session",
    "resolve_transport_kind",
    "McpSession",
    "MCPClient",
]
