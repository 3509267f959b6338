"""Tests for the FastMCP server assembly and the startup report.

These tests demonstrate:
1. The stderr startup report for each credential combination
2. tools/list advertising only available tools, in registry order
3. tools/call results over the MCP protocol, using an in-memory client
"""

import io
import json

import pytest
from fastmcp import Client

from movie_metadata_mcp.registry import TOOL_REGISTRY
from movie_metadata_mcp.server import SEPARATOR, create_server, report_startup


def render_report(config) -> list[str]:
    stream = io.StringIO()
    report_startup(config, stream=stream)
    return stream.getvalue().splitlines()


# =============================================================================
# STARTUP REPORT
# =============================================================================


class TestStartupReport:
    def test_both_providers(self, full_config):
        lines = render_report(full_config)

        assert lines[0] == "Movie Metadata MCP Server running on stdio"
        assert lines[1] == SEPARATOR == "─" * 50
        assert lines[2] == "Provider Status:"
        assert lines[3] == "  OMDB: ✓ Configured"
        assert lines[4] == "  TMDB: ✓ Configured"
        assert "Available Tools: 8" in lines
        assert lines[-1] == SEPARATOR
        assert not any("WARNING" in line for line in lines)

    def test_tool_lines_in_registry_order(self, tmdb_only_config):
        lines = render_report(tmdb_only_config)

        start = lines.index("Available Tools: 7") + 1
        assert lines[start] == "  - search_movies"
        assert lines[start + 6] == "  - get_tv_episode_details"
        assert "  OMDB: ✗ Not configured (set OMDB_API_KEY)" in lines

    def test_no_providers_warns(self, no_keys_config):
        lines = render_report(no_keys_config)

        assert lines[3] == "  OMDB: ✗ Not configured (set OMDB_API_KEY)"
        assert lines[4] == "  TMDB: ✗ Not configured (set TMDB_API_KEY)"
        assert lines[5:10] == [
            "",
            "⚠ WARNING: No API providers configured!",
            "  Please set at least one API key:",
            "  - OMDB_API_KEY: https://www.omdbapi.com/apikey.aspx",
            "  - TMDB_API_KEY: https://www.themoviedb.org/settings/api",
        ]
        assert lines[10:] == ["", "Available Tools: 0", SEPARATOR]


# =============================================================================
# MCP PROTOCOL
# =============================================================================


@pytest.mark.mcp_protocol
class TestMCPProtocol:
    async def test_list_tools_filters_by_availability(self, omdb_only_config, fake_api):
        server = create_server(omdb_only_config, transport=fake_api.transport)

        async with Client(server) as client:
            tools = await client.list_tools()

        assert [tool.name for tool in tools] == ["get_movie_by_imdb"]
        assert tools[0].inputSchema == TOOL_REGISTRY[0].input_schema

    async def test_list_tools_registry_order(self, full_config, fake_api):
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            tools = await client.list_tools()

        assert [tool.name for tool in tools][:3] == [
            "get_movie_by_imdb",
            "search_movies",
            "get_movie_details",
        ]
        assert len(tools) == 8

    async def test_list_tools_empty_without_keys(self, no_keys_config, fake_api):
        server = create_server(no_keys_config, transport=fake_api.transport)

        async with Client(server) as client:
            assert await client.list_tools() == []

    async def test_call_tool_success(self, full_config, fake_api, tmdb_movie):
        fake_api.add("/3/movie/550", json=tmdb_movie)
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("analyze_movie_performance", {"movie_id": 550})

        assert not result.isError
        assert len(result.content) == 1
        payload = json.loads(result.content[0].text)
        assert payload["financial_performance"]["status"] == "Profitable"

    async def test_call_tool_not_found(self, full_config, fake_api):
        fake_api.add("/", json={"Response": "False", "Error": "Movie not found!"})
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("get_movie_by_imdb", {"imdb_id": "tt0000000"})

        assert result.isError is True
        assert result.content[0].text == "Error: Movie not found!"

    async def test_unknown_tool(self, full_config, fake_api):
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("get_box_office", {})

        assert result.isError is True
        assert result.content[0].text == "Error: Unknown tool: get_box_office"

    async def test_hidden_tool_reports_missing_key(self, omdb_only_config, fake_api):
        server = create_server(omdb_only_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("search_movies", {"query": "Heat"})

        assert result.isError is True
        assert result.content[0].text == (
            "Error: TMDB API is not configured. Please set the TMDB_API_KEY environment "
            "variable. Get your free API key at https://www.themoviedb.org/settings/api"
        )
        assert fake_api.requests == []

    async def test_missing_argument_reaches_handler(self, full_config, fake_api):
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("get_movie_details", {})

        assert result.isError is True
        assert result.content[0].text == (
            "Error: Invalid arguments for get_movie_details: movie_id: Field required"
        )
        assert fake_api.requests == []

    async def test_wrong_argument_type_reaches_handler(self, full_config, fake_api):
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("search_movies", {"query": "x", "year": "abc"})

        assert result.isError is True
        text = result.content[0].text
        assert text.startswith("Error: Invalid arguments for search_movies: year:")
        assert fake_api.requests == []

    async def test_numeric_string_argument_accepted(self, full_config, fake_api, tmdb_movie):
        fake_api.add("/3/movie/550", json=tmdb_movie)
        server = create_server(full_config, transport=fake_api.transport)

        async with Client(server) as client:
            result = await client.call_tool_mcp("get_movie_details", {"movie_id": "550"})

        assert result.isError is False
        assert json.loads(result.content[0].text)["id"] == 550

    async def test_startup_report_written_to_stderr(self, tmdb_only_config, fake_api, capsys):
        server = create_server(tmdb_only_config, transport=fake_api.transport)

        async with Client(server) as client:
            await client.ping()

        captured = capsys.readouterr()
        assert "Available Tools: 7" in captured.err
        assert "Available Tools" not in captured.out
