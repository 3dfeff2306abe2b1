# mcp_orchestrator/mcp_host/config_loader.py
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from mcp_orchestrator.errors import ConfigurationError
from mcp_orchestrator.models.server_config import MCPConfig

logger = logging.getLogger("mcp_orchestrator.config")

PathLike = Union[str, "os.PathLike[str]"]


def load_config(path: PathLike) -> MCPConfig:
    """
    Read and validate an MCP configuration file ({"mcpServers": {...}}).
    A missing file raises FileNotFoundError; bad JSON or schema raises ConfigurationError.
    """
    full_path = Path(path).resolve()
    raw = full_path.read_text(encoding="utf-8")
    try:
        config = MCPConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid MCP config in {full_path}: {e}") from e
    logger.info("Loaded MCP config from %s (servers=%s)", full_path, list(config.mcp_servers))
    return config


def coerce_config(obj: Optional[Union[MCPConfig, Mapping[str, Any]]]) -> MCPConfig:
    if obj is None:
        return MCPConfig()
    if isinstance(obj, MCPConfig):
        return obj
    try:
        return MCPConfig.model_validate(dict(obj))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid MCP config object: {e}") from e


def save_config(config: MCPConfig, path: PathLike) -> Path:
    out = Path(path)
    data = json.dumps(config.to_wire(), indent=2, ensure_ascii=False)
    out.write_text(data, encoding="utf-8")
    logger.info("Saved MCP config to %s", out)
    return out
