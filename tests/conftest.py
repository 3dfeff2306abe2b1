import pytest

from mcp_orchestrator import MCPClient

from fakes import FakeSessionFactory, make_tool


@pytest.fixture
def two_server_config():
    return {
        "mcpServers": {
            "fetcher": {"command": "uvx", "args": ["mcp-server-fetch"]},
            "files": {"type": "streamable-http", "url": "http://localhost:8000/mcp"},
        }
    }


@pytest.fixture
def factory():
    return FakeSessionFactory(
        {
            "fetcher": [make_tool("fetch", "Fetch a URL")],
            "files": [make_tool("read_file", "Read a file"), make_tool("list_dir")],
        }
    )


@pytest.fixture
def client(two_server_config, factory):
    return MCPClient.from_object(two_server_config, session_factory=factory)
