"""MCP tool registrations."""

__all__ = [
    "manifest",
    "editing",
]
