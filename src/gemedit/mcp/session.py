"""Shared ManifestFacade for MCP tool calls."""
from typing import Optional

from gemedit.manifest import ManifestFacade, QuoteConfig
from gemedit.projects import ProjectManager, get_project_manager, set_project_manager

_facade: Optional[ManifestFacade] = None


def get_facade() -> ManifestFacade:
    """Get the global ManifestFacade, built from config on first use."""
    global _facade
    if _facade is None:
        _facade = ManifestFacade(project_manager=get_project_manager())
    return _facade


def configure(
    project_manager: Optional[ProjectManager] = None,
    quote_config: Optional[QuoteConfig] = None,
) -> ManifestFacade:
    """Rebuild the global facade (server startup and tests)."""
    global _facade
    if project_manager is not None:
        set_project_manager(project_manager)
    _facade = ManifestFacade(quote_config=quote_config, project_manager=get_project_manager())
    return _facade


def reset() -> None:
    global _facade
    _facade = None
    set_project_manager(None)
