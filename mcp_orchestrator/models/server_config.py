# mcp_orchestrator/models/server_config.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────────────────────
# One remote tool server
# ─────────────────────────────────────────────────────────────

class ServerDescriptor(BaseModel):
    """
    How to reach one MCP server. Exactly one transport shape is expected:
      - stdio:            command + args (+ env)
      - sse / http:       url (+ type)
      - websocket:        ws_url
    The server's name is the key in MCPConfig.mcp_servers, not a field here.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    transport_type: Optional[Literal["stdio", "streamable-http", "sse", "websocket"]] = Field(
        default=None, alias="type"
    )
    command: Optional[str] = None
    args: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None
    url: Optional[str] = None
    ws_url: Optional[str] = None


# ─────────────────────────────────────────────────────────────
# Whole configuration document
# ─────────────────────────────────────────────────────────────

class MCPConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mcp_servers: Dict[str, ServerDescriptor] = Field(default_factory=dict, alias="mcpServers")

    def to_wire(self) -> Dict[str, Any]:
        """Dict in the on-disk shape (camelCase keys, unset fields omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)
