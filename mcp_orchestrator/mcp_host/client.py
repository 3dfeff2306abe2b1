# mcp_orchestrator/mcp_host/client.py
from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from mcp import types as mcp_types
from mcp.shared.exceptions import McpError
from pydantic import ValidationError

from mcp_orchestrator.config import Settings, settings as default_settings
from mcp_orchestrator.errors import (
    ConfigurationError,
    NotFoundError,
    RemoteToolError,
    ToolTimeoutError,
)
from mcp_orchestrator.mcp_host.client_manager import SessionRegistry
from mcp_orchestrator.mcp_host.config_loader import coerce_config, load_config, save_config
from mcp_orchestrator.mcp_host.factory import open_session
from mcp_orchestrator.mcp_host.tool_index import ToolIndex
from mcp_orchestrator.mcp_host.types import Session, SessionFactory, ToolInfo
from mcp_orchestrator.models.server_config import MCPConfig, ServerDescriptor

logger = logging.getLogger("mcp_orchestrator.client")

ConfigSource = Union[str, "os.PathLike[str]", MCPConfig, Mapping[str, Any], None]


def _preview(obj: Any, limit: int = 600) -> str:
    try:
        s = json.dumps(obj, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        s = str(obj)
    return s if len(s) <= limit else s[:limit] + f"...(+{len(s)-limit}B)"


class MCPClient:
    """
    One session per configured MCP server, with a unified tool surface.

    - configuration: add_server / remove_server / get_server_names / save_config
    - sessions:      create_session / create_all_sessions / get_session /
                     get_all_active_sessions / close_session / close_all_sessions
    - tools:         list_tools (live re-query) / call_tool (routed via the tool index)

    Each instance owns its own registry and index. Not safe for concurrent
    callers without external synchronization.
    """

    def __init__(
        self,
        config: ConfigSource = None,
        max_tool_timeout_ms: Optional[int] = None,
        *,
        session_factory: Optional[SessionFactory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or default_settings

        if isinstance(config, (str, os.PathLike)):
            self.config = load_config(config)
        else:
            self.config = coerce_config(config)

        timeout_ms = self.settings.max_tool_timeout_ms if max_tool_timeout_ms is None else max_tool_timeout_ms
        if int(timeout_ms) <= 0:
            raise ConfigurationError(f"max_tool_timeout_ms must be positive, got {timeout_ms!r}")
        self.max_tool_timeout_ms = int(timeout_ms)

        self._session_factory: SessionFactory = session_factory or self._open_sdk_session
        self._registry: SessionRegistry[Session] = SessionRegistry()
        self._tool_index = ToolIndex()

    # ------------------------------------------------------------------ #
    # Construction helpers
    # ------------------------------------------------------------------ #

    @classmethod
    def from_object(cls, config: Union[MCPConfig, Mapping[str, Any], None], **kwargs: Any) -> "MCPClient":
        return cls(coerce_config(config), **kwargs)

    @classmethod
    def from_config_file(cls, path: Union[str, "os.PathLike[str]"], **kwargs: Any) -> "MCPClient":
        return cls(load_config(path), **kwargs)

    async def __aenter__(self) -> "MCPClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_all_sessions()

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    def add_server(self, name: str, descriptor: Union[ServerDescriptor, Mapping[str, Any]]) -> None:
        """Add or replace a server descriptor. Open sessions are not touched."""
        if not isinstance(descriptor, ServerDescriptor):
            try:
                descriptor = ServerDescriptor.model_validate(dict(descriptor))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid descriptor for server '{name}': {e}") from e
        self.config.mcp_servers[name] = descriptor

    def remove_server(self, name: str) -> None:
        """
        Drop the descriptor and deactivate the name. A live session for `name`
        is NOT closed; it stays in the registry until close_session(name).
        """
        self.config.mcp_servers.pop(name, None)
        self._registry.deactivate(name)
        if name in self._registry:
            logger.info("Server '%s' removed from config; its session stays open until closed", name)

    def get_server_names(self) -> List[str]:
        return list(self.config.mcp_servers)

    def save_config(self, path: Union[str, "os.PathLike[str]"]) -> Path:
        return save_config(self.config, path)

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    async def _open_sdk_session(self, name: str, descriptor: ServerDescriptor) -> Session:
        return await open_session(
            name,
            descriptor,
            client_name=self.settings.client_name,
            client_version=self.settings.client_version,
            init_timeout_sec=self.settings.init_timeout_sec,
        )

    def _require_servers(self) -> Dict[str, ServerDescriptor]:
        servers = self.config.mcp_servers
        if not servers:
            raise NotFoundError("No MCP servers defined in config")
        return servers

    async def create_session(self, server_name: str) -> Session:
        """
        Connect and initialize a session for one configured server, register it
        and mark it active. An existing session under the same name is closed first.
        """
        servers = self._require_servers()
        descriptor = servers.get(server_name)
        if descriptor is None:
            raise NotFoundError(f"Server '{server_name}' not found in config")

        if server_name in self._registry:
            logger.info("Replacing existing session for server '%s'", server_name)
            await self.close_session(server_name)

        session = await self._session_factory(server_name, descriptor)
        self._registry.put(server_name, session)
        logger.info("MCP session created for server=%s", server_name)
        return session

    async def create_all_sessions(self) -> Dict[str, Session]:
        """
        Create sessions for every configured server, in config order, one at a
        time. The first failure propagates; sessions opened before it stay open
        and tracked. On success the tool index is rebuilt.
        """
        servers = self._require_servers()
        for name in list(servers):
            await self.create_session(name)
        await self.rebuild_tool_index()
        return {name: self._registry.sessions[name] for name in servers if name in self._registry}

    def get_session(self, server_name: str) -> Session:
        return self._registry.require(server_name)

    def get_all_active_sessions(self) -> Dict[str, Session]:
        return self._registry.active_items()

    async def close_session(self, server_name: str) -> bool:
        """
        Close and forget one session. Unknown names only log a warning. Close
        errors are logged; the session is removed from tracking either way.
        Returns False only when the close itself raised.
        """
        session = self._registry.get(server_name)
        if session is None:
            logger.warning("No session exists for server '%s', nothing to close", server_name)
            return True
        try:
            logger.debug("Closing session for server '%s'", server_name)
            await session.close()
        except Exception:
            logger.error("Error closing session for server '%s'", server_name, exc_info=True)
            return False
        finally:
            self._registry.pop(server_name)
        return True

    async def close_all_sessions(self) -> None:
        failed: List[str] = []
        for name in self._registry.names():
            if not await self.close_session(name):
                failed.append(name)
        if failed:
            logger.error("Encountered %d errors while closing sessions: %s", len(failed), failed)
        else:
            logger.debug("All sessions closed successfully")

    # ------------------------------------------------------------------ #
    # Tools
    # ------------------------------------------------------------------ #

    async def rebuild_tool_index(self) -> Dict[str, str]:
        """Re-scan every active session's catalog and replace the tool index."""
        return await self._tool_index.rebuild(self._registry.sessions, list(self._registry.active))

    def tool_server(self, tool_name: str) -> Optional[str]:
        return self._tool_index.lookup(tool_name)

    async def list_tools(self) -> List[ToolInfo]:
        """
        Live catalog of every active server, flattened in active-session order
        then per-server order. Does not consult or refresh the tool index.
        """
        all_tools: List[ToolInfo] = []
        for server_name in list(self._registry.active):
            session = self._registry.get(server_name)
            if session is None:
                raise NotFoundError(f"No session found for server '{server_name}'")
            for tool in await session.list_tools():
                all_tools.append(
                    ToolInfo(
                        name=tool.name,
                        description=tool.description or "",
                        input_schema=dict(tool.inputSchema or {}),
                    )
                )
        return all_tools

    async def call_tool(self, name: str, args: Optional[Dict[str, Any]] = None) -> mcp_types.CallToolResult:
        """
        Route a call to the server that owns `name` per the tool index and
        return the server's result unmodified. Bounded by max_tool_timeout_ms.
        """
        server_name = self._tool_index.lookup(name)
        if server_name is None:
            raise NotFoundError(f"No server found for tool '{name}'")
        session = self._registry.get(server_name)
        if session is None:
            raise NotFoundError(f"No session found for server '{server_name}' (tool '{name}')")

        logger.info("MCP call: server=%s tool=%s args=%s", server_name, name, _preview(args))
        try:
            return await asyncio.wait_for(
                session.call_tool(name, args or {}),
                timeout=self.max_tool_timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            raise ToolTimeoutError(tool=name, server=server_name, timeout_ms=self.max_tool_timeout_ms) from e
        except McpError as e:
            raise RemoteToolError(
                tool=name, server=server_name, message=e.error.message, code=e.error.code
            ) from e
