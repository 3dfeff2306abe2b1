# mcp_orchestrator/mcp_host/session.py
from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack, suppress
from typing import Any, AsyncContextManager, Dict, List, Optional, Sequence

from mcp import ClientSession
from mcp import types as mcp_types

logger = logging.getLogger("mcp_orchestrator.session")


class McpSession:
    """
    A live, handshaken connection to one MCP server over the official SDK.

    The transport context manager (stdio / sse / streamable-http / websocket) and
    the ClientSession share one AsyncExitStack, so close() tears both down in
    reverse order. close() must run in the same task that ran connect(); anyio
    cancel scopes inside the SDK transports require it.
    """

    def __init__(
        self,
        *,
        server_name: str,
        transport: AsyncContextManager[Sequence[Any]],
        client_info: mcp_types.Implementation,
        init_timeout_sec: float = 0,
    ) -> None:
        self.server_name = server_name
        self.client_info = client_info
        self.init_timeout_sec = float(init_timeout_sec or 0)

        self._transport = transport
        self._session: ClientSession | None = None
        self._exit_stack: AsyncExitStack | None = None

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def connect(self) -> "McpSession":
        if self._session is not None:
            return self

        self._exit_stack = AsyncExitStack()
        try:
            # stdio/sse/websocket yield (read, write); streamable HTTP adds a session-id getter
            streams = await self._exit_stack.enter_async_context(self._transport)
            read_stream, write_stream = streams[0], streams[1]

            session = await self._exit_stack.enter_async_context(
                ClientSession(read_stream, write_stream, client_info=self.client_info)
            )
            if self.init_timeout_sec > 0:
                await asyncio.wait_for(session.initialize(), timeout=self.init_timeout_sec)
            else:
                await session.initialize()
            self._session = session

        except Exception:
            # unwind whatever was acquired before the failure
            with suppress(Exception):
                await self._exit_stack.aclose()
            self._exit_stack = None
            raise

        logger.info(
            "MCP session initialized: server=%s client=%s/%s",
            self.server_name,
            self.client_info.name,
            self.client_info.version,
        )
        return self

    def _require(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError(f"MCP session for server '{self.server_name}' is not connected")
        return self._session

    async def list_tools(self) -> List[mcp_types.Tool]:
        """Full tool catalog, following nextCursor until the server stops paging."""
        session = self._require()
        result = await session.list_tools()
        tools = list(result.tools)
        while result.nextCursor:
            result = await session.list_tools(cursor=result.nextCursor)
            tools.extend(result.tools)
        logger.debug("MCP tools from %s: %s", self.server_name, [t.name for t in tools])
        return tools

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> mcp_types.CallToolResult:
        session = self._require()
        return await session.call_tool(name, arguments=arguments)

    async def close(self) -> None:
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if stack is None:
            return
        await stack.aclose()
        logger.info("MCP session closed: server=%s", self.server_name)
