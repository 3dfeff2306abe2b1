import pytest
from mcp import types as mcp_types
from mcp.shared.exceptions import McpError

from mcp_orchestrator import MCPClient, NotFoundError, RemoteToolError, ToolTimeoutError

from fakes import FakeSessionFactory, make_tool


@pytest.mark.asyncio
async def test_list_tools_flattens_in_server_then_catalog_order(client):
    await client.create_all_sessions()

    tools = await client.list_tools()

    assert [t["name"] for t in tools] == ["fetch", "read_file", "list_dir"]
    assert tools[0]["description"] == "Fetch a URL"
    assert tools[2]["description"] == ""
    assert tools[1]["input_schema"]["type"] == "object"


@pytest.mark.asyncio
async def test_list_tools_is_live_not_indexed(client, factory):
    await client.create_all_sessions()
    client.get_session("files").tools.append(make_tool("write_file"))

    names = [t["name"] for t in await client.list_tools()]

    assert "write_file" in names
    assert client.tool_server("write_file") is None


@pytest.mark.asyncio
async def test_call_tool_routes_to_owning_server(client):
    await client.create_all_sessions()

    fetched = await client.call_tool("fetch", {"url": "https://example.com"})
    read = await client.call_tool("read_file", {"path": "./test.py"})

    assert isinstance(fetched, mcp_types.CallToolResult)
    assert fetched.content[0].text == "fetcher:fetch"
    assert read.content[0].text == "files:read_file"
    assert client.get_session("fetcher").calls == [("fetch", {"url": "https://example.com"})]
    assert client.get_session("files").calls == [("read_file", {"path": "./test.py"})]


@pytest.mark.asyncio
async def test_unknown_tool_contacts_no_server(client):
    await client.create_all_sessions()

    with pytest.raises(NotFoundError, match="No server found for tool 'nope'"):
        await client.call_tool("nope", {})

    assert all(not s.calls for s in client.get_all_active_sessions().values())


@pytest.mark.asyncio
async def test_colliding_tool_name_routes_to_later_server(caplog):
    factory = FakeSessionFactory({"a": [make_tool("x")], "b": [make_tool("x"), make_tool("y")]})
    client = MCPClient.from_object(
        {"mcpServers": {"a": {"ws_url": "ws://a/ws"}, "b": {"ws_url": "ws://b/ws"}}},
        session_factory=factory,
    )

    await client.create_all_sessions()

    assert client.tool_server("x") == "b"
    assert client.tool_server("y") == "b"
    result = await client.call_tool("x")
    assert result.content[0].text == "b:x"
    assert client.get_session("a").calls == []
    assert "collision" in caplog.text


@pytest.mark.asyncio
async def test_closed_session_after_index_build_is_not_found(client):
    await client.create_all_sessions()
    await client.close_session("files")

    with pytest.raises(NotFoundError, match="'files'"):
        await client.call_tool("read_file", {"path": "x"})


@pytest.mark.asyncio
async def test_slow_tool_times_out(two_server_config):
    factory = FakeSessionFactory(
        {"fetcher": [make_tool("fetch")], "files": []},
        fetcher={"delay": 1.0},
    )
    client = MCPClient.from_object(two_server_config, max_tool_timeout_ms=20, session_factory=factory)
    await client.create_all_sessions()

    with pytest.raises(ToolTimeoutError) as err:
        await client.call_tool("fetch", {"url": "https://example.com"})

    assert err.value.server == "fetcher"
    assert err.value.timeout_ms == 20
    assert isinstance(err.value, TimeoutError)


@pytest.mark.asyncio
async def test_protocol_error_becomes_remote_tool_error(two_server_config):
    failure = McpError(mcp_types.ErrorData(code=-32602, message="Unknown tool: fetch"))
    factory = FakeSessionFactory(
        {"fetcher": [make_tool("fetch")], "files": []},
        fetcher={"call_error": failure},
    )
    client = MCPClient.from_object(two_server_config, session_factory=factory)
    await client.create_all_sessions()

    with pytest.raises(RemoteToolError) as err:
        await client.call_tool("fetch", {"url": "https://example.com"})

    assert err.value.message == "Unknown tool: fetch"
    assert err.value.code == -32602
    assert err.value.__cause__ is failure


@pytest.mark.asyncio
async def test_rebuild_after_individual_creation(client):
    await client.create_session("files")
    assert client.tool_server("read_file") is None

    await client.rebuild_tool_index()

    assert client.tool_server("read_file") == "files"
    assert client.tool_server("list_dir") == "files"
