# mcp_orchestrator/mcp_host/tool_index.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Optional

from mcp_orchestrator.mcp_host.types import Session

logger = logging.getLogger("mcp_orchestrator.tool_index")


class ToolIndex:
    """
    tool name -> owning server name, built from a full re-scan of the active
    sessions' live catalogs. When two servers expose the same tool name the
    server scanned later wins; the collision is logged.

    The index is not invalidated when sessions come and go; call rebuild().
    """

    def __init__(self) -> None:
        self._map: Dict[str, str] = {}

    def __contains__(self, tool: object) -> bool:
        return tool in self._map

    def __len__(self) -> int:
        return len(self._map)

    def lookup(self, tool: str) -> Optional[str]:
        return self._map.get(tool)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._map)

    def clear(self) -> None:
        self._map.clear()

    async def rebuild(self, sessions: Mapping[str, Session], order: Iterable[str]) -> Dict[str, str]:
        fresh: Dict[str, str] = {}
        for server_name in order:
            session = sessions.get(server_name)
            if session is None:
                continue
            tools = await session.list_tools()
            for tool in tools:
                previous = fresh.get(tool.name)
                if previous is not None and previous != server_name:
                    logger.warning(
                        "Tool name collision: '%s' exposed by '%s' and '%s'; routing to '%s'",
                        tool.name, previous, server_name, server_name,
                    )
                fresh[tool.name] = server_name

        # swap only after every server answered
        self._map = fresh
        logger.info("Tool index rebuilt: %d tool(s) across %d server(s)", len(fresh), len(set(fresh.values())))
        return dict(fresh)
