"""Manifest editing tools: pin, unpin and add declarations."""
from typing import List, Optional, Union

from gemedit.schemas import EditResult

from ..session import get_facade


def _to_response(result: EditResult) -> dict:
    if not result.success:
        return {
            "status": "error",
            "error_type": result.error_type,
            "message": result.message,
        }
    return {"status": "ok", **result.model_dump(mode="json", exclude_none=True)}


def register(mcp):
    @mcp.tool()
    def gem_pin(
        gem_name: str,
        version: str,
        pin_type: str = "~>",
        file_path: str = "Gemfile",
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> dict:
        """
        Pin a declared gem to a version constraint.

        Args:
            gem_name: Gem to pin
            version: Version number, e.g. "7.0.0"
            pin_type: One of ~>, >=, >, <, <=, =
            file_path: Gemfile or gemspec path
            project: Configured project name
            quote_style: "single" or "double" (defaults to the line's own style)
            dry_run: Return the diff without writing

        Returns:
            Edit result with message, line and unified diff
        """
        return _to_response(get_facade().pin(
            gem_name,
            version,
            pin_type=pin_type,
            file_path=file_path,
            project=project,
            quote_style=quote_style,
            dry_run=dry_run,
        ))

    @mcp.tool()
    def gem_unpin(
        gem_name: str,
        file_path: str = "Gemfile",
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> dict:
        """
        Remove version constraints from a declared gem.

        Options and comments on the line are kept.
        """
        return _to_response(get_facade().unpin(
            gem_name,
            file_path=file_path,
            project=project,
            quote_style=quote_style,
            dry_run=dry_run,
        ))

    @mcp.tool()
    def gem_add_to_gemfile(
        gem_name: str,
        version: Optional[str] = None,
        pin_type: str = "~>",
        group: Optional[List[str]] = None,
        platforms: Optional[List[str]] = None,
        source: Optional[str] = None,
        require: Optional[Union[bool, str]] = None,
        file_path: str = "Gemfile",
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> dict:
        """
        Add a gem to a Gemfile.

        Args:
            gem_name: Gem to add
            version: Optional version, combined with pin_type
            pin_type: One of ~>, >=, >, <, <=, =
            group: Groups, e.g. ["development", "test"]; goes into the matching
                `group ... do` block or a new one
            platforms: Platform restrictions
            source: git URL, http URL, local path or source name
            require: false to skip requiring, or a custom require path
            file_path: Gemfile path
            project: Configured project name
            quote_style: "single" or "double"
            dry_run: Return the diff without writing
        """
        return _to_response(get_facade().add_to_gemfile(
            gem_name,
            version=version,
            pin_type=pin_type,
            group=group,
            platforms=platforms,
            source=source,
            require=require,
            file_path=file_path,
            project=project,
            quote_style=quote_style,
            dry_run=dry_run,
        ))

    @mcp.tool()
    def gem_add_to_gemspec(
        gem_name: str,
        file_path: str,
        version: Optional[str] = None,
        pin_type: str = "~>",
        dependency_type: str = "runtime",
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> dict:
        """
        Add a runtime or development dependency to a gemspec.

        Fails with already_exists if any dependency on the gem is declared.
        """
        return _to_response(get_facade().add_to_gemspec(
            gem_name,
            file_path,
            version=version,
            pin_type=pin_type,
            dependency_type=dependency_type,
            project=project,
            quote_style=quote_style,
            dry_run=dry_run,
        ))
