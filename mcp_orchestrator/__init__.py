# mcp_orchestrator/__init__.py
from __future__ import annotations

__version__ = "0.1.0"

from .errors import (  # noqa: E402
    ConfigurationError,
    MCPClientError,
    NotFoundError,
    RemoteToolError,
    ToolTimeoutError,
)
from .models import MCPConfig, ServerDescriptor  # noqa: E402
from .mcp_host import MCPClient, ToolIndex, ToolInfo, TransportKind  # noqa: E402

__all__ = [
    "__version__",
    "MCPClient",
    "MCPConfig",
    "ServerDescriptor",
    "ToolIndex",
    "ToolInfo",
    "TransportKind",
    "MCPClientError",
    "ConfigurationError",
    "NotFoundError",
    "ToolTimeoutError",
    "RemoteToolError",
]
