"""FastMCP server setup and tool registration."""
from typing import Optional

from fastmcp import FastMCP

from gemedit.manifest import QuoteConfig
from gemedit.projects import ProjectManager

from . import session
from .tools import editing, manifest

mcp = FastMCP("gemedit")
_registered = False


def create_server(
    project_manager: Optional[ProjectManager] = None,
    quote_config: Optional[QuoteConfig] = None,
):
    """Create and configure the MCP server."""
    global _registered
    session.configure(project_manager, quote_config)

    if not _registered:
        # Read tools
        manifest.register(mcp)

        # Mutation tools
        editing.register(mcp)
        _registered = True

    return mcp


def run_server(
    project_manager: Optional[ProjectManager] = None,
    quote_config: Optional[QuoteConfig] = None,
):
    """Run the MCP server over stdio."""
    server = create_server(project_manager, quote_config)
    server.run(show_banner=False)
