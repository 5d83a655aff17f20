"""Manifest reading tools."""
from typing import Optional

from gemedit.exceptions import GemeditError
from gemedit.logging_config import logger

from ..session import get_facade


def register(mcp):
    @mcp.tool()
    def gemfile_parse(file_path: str, project: Optional[str] = None) -> dict:
        """
        Parse a Gemfile or gemspec into structured dependency data.

        Args:
            file_path: Path to the manifest, relative to the project root or absolute
            project: Configured project name (defaults to the working directory)

        Returns:
            Manifest kind, ruby version, default source and every declaration
            with its requirement, groups, platforms, source and require option
        """
        try:
            document = get_facade().read(file_path, project)
        except GemeditError as e:
            logger.error(f"gemfile_parse failed: {e}")
            return {
                "status": "error",
                "error_type": e.code,
                "message": str(e),
            }

        return {
            "status": "ok",
            **document.model_dump(mode="json"),
            "gem_count": len(document.gems),
        }
