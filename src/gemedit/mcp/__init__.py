"""MCP server exposing Gemfile and gemspec tools."""

from .server import create_server, run_server

__all__ = ["create_server", "run_server"]
