# mcp_orchestrator/mcp_host/client_manager.py
from __future__ import annotations

import logging
from typing import Dict, Generic, List, Optional, TypeVar

from mcp_orchestrator.errors import NotFoundError

logger = logging.getLogger("mcp_orchestrator.registry")

T = TypeVar("T")


class SessionRegistry(Generic[T]):
    """
    Server name -> live session, plus the ordered list of names that are
    "active" (eligible for listing and dispatch).

    Every active name has an entry in `sessions`; the converse does not have to
    hold (remove_server deactivates a name but leaves its session closable).
    No locking: mutated only by the owning MCPClient.
    """

    def __init__(self) -> None:
        self.sessions: Dict[str, T] = {}
        self.active: List[str] = []

    def __contains__(self, name: object) -> bool:
        return name in self.sessions

    def __len__(self) -> int:
        return len(self.sessions)

    def put(self, name: str, session: T) -> None:
        self.sessions[name] = session
        if name not in self.active:
            self.active.append(name)

    def get(self, name: str) -> Optional[T]:
        return self.sessions.get(name)

    def require(self, name: str) -> T:
        session = self.sessions.get(name)
        if session is None:
            raise NotFoundError(f"No session exists for server '{name}'")
        return session

    def deactivate(self, name: str) -> None:
        if name in self.active:
            self.active.remove(name)

    def pop(self, name: str) -> Optional[T]:
        self.deactivate(name)
        return self.sessions.pop(name, None)

    def active_items(self) -> Dict[str, T]:
        return {name: self.sessions[name] for name in self.active if name in self.sessions}

    def names(self) -> List[str]:
        return list(self.sessions)
