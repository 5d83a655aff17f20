"""Shared fixtures for MCP tests."""
import json

import pytest
import pytest_asyncio

from gemedit.manifest import QuoteConfig
from gemedit.mcp import create_server
from gemedit.mcp import session
from gemedit.projects import ProjectManager


def unwrap_result(result):
    """
    Normalize FastMCP CallToolResult to plain Python data.

    Prefers structured_content (unwrapped if FastMCP wraps under 'result'),
    otherwise falls back to parsing text content when available.
    """
    structured = getattr(result, "structured_content", None)
    if structured is not None:
        if isinstance(structured, dict) and "result" in structured:
            return structured["result"]
        return structured

    content = getattr(result, "content", None) or []
    texts = [getattr(block, "text", None) for block in content if getattr(block, "text", None)]
    if len(texts) == 1:
        text = texts[0]
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text
    if texts:
        return texts

    return result


@pytest.fixture(scope="session")
def mcp_server():
    """Create an MCP server instance for testing."""
    return create_server()


@pytest.fixture
def shop_project(temp_dir):
    """Configure the tool session with a `shop` project rooted at temp_dir."""
    session.configure(
        ProjectManager({"shop": temp_dir}, default_path=temp_dir),
        QuoteConfig(),
    )
    yield temp_dir
    session.reset()


@pytest_asyncio.fixture
async def mcp_client(mcp_server):
    """Async FastMCP client connected to in-process server."""
    from fastmcp import Client

    client = Client(mcp_server)
    async with client:
        yield client
