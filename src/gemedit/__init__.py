"""
gemedit - Gemfile and gemspec editing engine

Reads Ruby dependency manifests without evaluating them and applies
line-preserving edits (pin, unpin, add). Exposed as a library, a CLI and an
MCP server.
"""

__version__ = "0.1.0"

# Core exports
from gemedit.manifest import ManifestFacade, ManifestReader
from gemedit.projects import ProjectManager
from gemedit.schemas import EditResult, GemDeclaration, ManifestDocument, ManifestKind, QuoteStyle

# MCP server
from gemedit.mcp import create_server, run_server

__all__ = [
    "__version__",
    "ManifestFacade",
    "ManifestReader",
    "ProjectManager",
    "EditResult",
    "GemDeclaration",
    "ManifestDocument",
    "ManifestKind",
    "QuoteStyle",
    "create_server",
    "run_server",
]
