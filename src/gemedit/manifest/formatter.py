"""
DeclarationFormatter: render gem declarations as Ruby source text.

Pure functions with no knowledge of file context. Indentation is added by
the mutators.
"""

import re
from typing import Iterable, Optional, Union

from gemedit.schemas import QuoteStyle

_BARE_SYMBOL = re.compile(r"^[A-Za-z_]\w*$")

# Source strings that map to `path:`
_PATH_PREFIXES = ("/", "./", "../")


def format_version_requirement(version: str, pin_type: str, quote_style: QuoteStyle) -> str:
    """Quoted version constraint, e.g. `'~> 7.0.0'`."""
    quote = quote_style.char
    return f"{quote}{pin_type} {version}{quote}"


def format_symbol(name: str) -> str:
    """`:test`, or `:"my-group"` when the name is not a bare identifier."""
    if _BARE_SYMBOL.match(name):
        return f":{name}"
    return f':"{name}"'


def format_group_list(groups: Iterable[str]) -> str:
    """`:test, :development` as used on a `group` line."""
    return ", ".join(format_symbol(group) for group in groups)


def format_source_clause(source: str, quote_style: QuoteStyle) -> str:
    """Pick `git:`, `path:` or `source:` from the shape of the source string."""
    quote = quote_style.char
    if source.startswith("http") or source.startswith("git"):
        key = "git"
    elif source.startswith(_PATH_PREFIXES):
        key = "path"
    else:
        key = "source"
    return f"{key}: {quote}{source}{quote}"


def _symbol_option(singular: str, values: list) -> str:
    if len(values) == 1:
        return f"{singular}: {format_symbol(values[0])}"
    return f"{singular}s: [{format_group_list(values)}]"


def format_gem_declaration(
    gem_name: str,
    *,
    version: Optional[str] = None,
    pin_type: Optional[str] = None,
    requirement: Optional[str] = None,
    source: Optional[str] = None,
    require: Optional[Union[bool, str]] = None,
    groups: Iterable[str] = (),
    platforms: Iterable[str] = (),
    quote_style: QuoteStyle = QuoteStyle.SINGLE,
) -> str:
    """
    Render a Gemfile `gem` line (without indentation).

    Tokens are comma-joined in a fixed order: name, version constraint,
    source, require, groups, platforms. Omitted options contribute nothing.

    Args:
        gem_name: Gem name
        version: Version number, combined with pin_type when both are given
        pin_type: Operator such as `~>` or `>=`
        requirement: Already-qualified constraint, used when version is None
        source: URL, git URL, filesystem path or named source
        require: False for `require: false`, or a custom require path
        groups: Inline groups (usually empty; blocks carry groups)
        platforms: Platform restrictions
        quote_style: Quote character to use

    Returns:
        Declaration text
    """
    quote = quote_style.char
    tokens = [f"gem {quote}{gem_name}{quote}"]

    if version and pin_type:
        tokens.append(format_version_requirement(version, pin_type, quote_style))
    elif version:
        tokens.append(f"{quote}{version}{quote}")
    elif requirement:
        # Multiple constraints read from a manifest are joined with ", "
        for part in requirement.split(","):
            tokens.append(f"{quote}{part.strip()}{quote}")

    if source:
        tokens.append(format_source_clause(source, quote_style))

    if require is False:
        tokens.append("require: false")
    elif isinstance(require, str):
        tokens.append(f"require: {quote}{require}{quote}")

    groups = list(groups)
    if groups:
        tokens.append(_symbol_option("group", groups))

    platforms = list(platforms)
    if platforms:
        tokens.append(_symbol_option("platform", platforms))

    return ", ".join(tokens)


def format_dependency_declaration(
    gem_name: str,
    *,
    version: Optional[str] = None,
    pin_type: Optional[str] = None,
    requirement: Optional[str] = None,
    dependency_type: str = "runtime",
    quote_style: QuoteStyle = QuoteStyle.DOUBLE,
    receiver: str = "spec",
) -> str:
    """Render a gemspec `add_dependency` line (without indentation)."""
    quote = quote_style.char
    method = "add_development_dependency" if dependency_type == "development" else "add_dependency"
    declaration = f"{receiver}.{method} {quote}{gem_name}{quote}"

    if version and pin_type:
        declaration += f", {format_version_requirement(version, pin_type, quote_style)}"
    elif version:
        declaration += f", {quote}{version}{quote}"
    elif requirement:
        for part in requirement.split(","):
            declaration += f", {quote}{part.strip()}{quote}"

    return declaration
