# mcp_orchestrator/mcp_host/factory.py
from __future__ import annotations

import logging
import os
from typing import Any, AsyncContextManager, Dict, Optional, Sequence

from mcp import StdioServerParameters
from mcp import types as mcp_types
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamablehttp_client
from mcp.client.websocket import websocket_client

from mcp_orchestrator.errors import ConfigurationError
from mcp_orchestrator.mcp_host.session import McpSession
from mcp_orchestrator.mcp_host.types import TransportKind
from mcp_orchestrator.models.server_config import ServerDescriptor

logger = logging.getLogger("mcp_orchestrator.factory")


# --------- Transport selection --------------------------------------------- #

def resolve_transport_kind(
    descriptor: ServerDescriptor, server_name: Optional[str] = None
) -> TransportKind:
    """
    Decide the transport for a descriptor. Precedence:
      1. command + args       -> stdio   (wins even if url/ws_url are also set)
      2. url + type 'sse'     -> sse
      3. url + type 'streamable-http' -> streamable-http
      4. ws_url               -> websocket
    Anything else is a ConfigurationError.
    """
    if descriptor.command and descriptor.args is not None:
        return "stdio"
    if descriptor.url and descriptor.transport_type == "sse":
        return "sse"
    if descriptor.url and descriptor.transport_type == "streamable-http":
        return "streamable-http"
    if descriptor.ws_url:
        return "websocket"

    where = f" for server '{server_name}'" if server_name else ""
    raise ConfigurationError(
        f"Cannot determine transport type from config{where}: "
        "missing command+args, url with type 'sse'/'streamable-http', or ws_url"
    )


def _env_keys_for_log(env: Optional[Dict[str, str]]) -> list[str]:
    # values may carry secrets; keys are enough to debug
    return sorted((env or {}).keys())


def describe_transport(descriptor: ServerDescriptor, server_name: Optional[str] = None) -> str:
    """
    Short human-readable transport summary for logs.

    - STDIO:     "stdio|<command> <args...>"
    - SSE/HTTP:  "sse|<url>" / "streamable-http|<url>"
    - WS:        "websocket|<ws_url>"
    """
    kind = resolve_transport_kind(descriptor, server_name)
    if kind == "stdio":
        return "stdio|" + " ".join([descriptor.command or "", *(descriptor.args or [])])
    if kind == "websocket":
        return f"websocket|{descriptor.ws_url}"
    return f"{kind}|{descriptor.url}"


def build_transport(
    descriptor: ServerDescriptor, server_name: Optional[str] = None
) -> AsyncContextManager[Sequence[Any]]:
    """
    Return the SDK transport for a descriptor, not yet entered. Entering it
    connects (spawns the process / opens the stream); the MCP handshake happens
    afterwards in McpSession.connect().
    """
    kind = resolve_transport_kind(descriptor, server_name)

    if kind == "stdio":
        # env is an overlay on the parent environment, not a replacement
        env = {**os.environ, **descriptor.env} if descriptor.env else None
        logger.debug(
            "stdio transport for %s: command=%s args=%s env_keys=%s",
            server_name, descriptor.command, descriptor.args, _env_keys_for_log(descriptor.env),
        )
        params = StdioServerParameters(
            command=descriptor.command or "",
            args=list(descriptor.args or []),
            env=env,
        )
        return stdio_client(params)
    elif kind == "sse":
        return sse_client(descriptor.url)
    elif kind == "streamable-http":
        return streamablehttp_client(descriptor.url)
    else:
        return websocket_client(descriptor.ws_url)


# --------- Session opener --------------------------------------------------- #

async def open_session(
    server_name: str,
    descriptor: ServerDescriptor,
    *,
    client_name: str,
    client_version: str,
    init_timeout_sec: float = 0,
) -> McpSession:
    """
    Select the transport, connect it and run the MCP initialize handshake.
    Returns a connected McpSession.
    """
    transport = build_transport(descriptor, server_name)
    session = McpSession(
        server_name=server_name,
        transport=transport,
        client_info=mcp_types.Implementation(name=client_name, version=client_version),
        init_timeout_sec=init_timeout_sec,
    )
    logger.info("Connecting MCP server %s via %s", server_name, describe_transport(descriptor, server_name))
    return await session.connect()
