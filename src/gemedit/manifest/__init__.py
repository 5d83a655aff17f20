"""
Manifest package: line-oriented reading and editing of Gemfiles and gemspecs.

Edits are textual. Only the declaration being pinned, unpinned or inserted
changes; every other line of the file is left byte-for-byte intact.
"""

from .facade import ManifestFacade
from .reader import ManifestReader, detect_kind
from .editor import ManifestEditor
from .locator import (
    find_block_end,
    find_declaration_line,
    find_group_block,
    find_spec_boundary,
)
from .formatter import (
    format_dependency_declaration,
    format_gem_declaration,
    format_version_requirement,
)
from .mutators import (
    LineEdit,
    add_gemfile_declaration,
    add_gemspec_dependency,
    pin_declaration,
    unpin_declaration,
)
from .quotes import (
    QuoteConfig,
    detect_quote_style,
    get_quote_config,
    resolve_quote_style,
)

__all__ = [
    # Main facade
    "ManifestFacade",

    # Components
    "ManifestReader",
    "ManifestEditor",
    "detect_kind",

    # Locator
    "find_block_end",
    "find_declaration_line",
    "find_group_block",
    "find_spec_boundary",

    # Formatting
    "format_dependency_declaration",
    "format_gem_declaration",
    "format_version_requirement",

    # Mutators
    "LineEdit",
    "add_gemfile_declaration",
    "add_gemspec_dependency",
    "pin_declaration",
    "unpin_declaration",

    # Quote styles
    "QuoteConfig",
    "detect_quote_style",
    "get_quote_config",
    "resolve_quote_style",
]
