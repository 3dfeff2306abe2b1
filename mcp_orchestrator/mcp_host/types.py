# mcp_orchestrator/mcp_host/types.py
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Protocol, TypedDict

from mcp import types as mcp_types

from mcp_orchestrator.models.server_config import ServerDescriptor

TransportKind = Literal["stdio", "sse", "streamable-http", "websocket"]


class ToolInfo(TypedDict):
    name: str
    description: str
    input_schema: Dict[str, Any]


class Session(Protocol):
    """What the orchestrator needs from a live, handshaken connection."""

    async def list_tools(self) -> List[mcp_types.Tool]: ...

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> mcp_types.CallToolResult: ...

    async def close(self) -> None: ...


SessionFactory = Callable[[str, ServerDescriptor], Awaitable[Session]]
