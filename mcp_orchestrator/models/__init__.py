from .server_config import MCPConfig, ServerDescriptor

__all__ = ["MCPConfig", "ServerDescriptor"]
