"""
Quote style handling for gem declarations.

Precedence when rewriting a declaration:
explicit override > style detected on the existing line > configured default
for the manifest kind. Inserted declarations have no existing line, so they
take the explicit override or the configured default.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from gemedit.config import get_section
from gemedit.exceptions import InputValidationError
from gemedit.schemas import ManifestKind, QuoteStyle

# First character after the declaration keyword and its whitespace / paren
_DECLARATION_QUOTE = re.compile(
    r"(?:\bgem|\badd_(?:runtime_|development_)?dependency)(?:\s+|\s*\(\s*)(\S)"
)


@dataclass(frozen=True)
class QuoteConfig:
    """Per-kind default quote styles."""
    gemfile: QuoteStyle = QuoteStyle.SINGLE
    gemspec: QuoteStyle = QuoteStyle.DOUBLE

    def for_kind(self, kind: ManifestKind) -> QuoteStyle:
        return self.gemspec if kind == ManifestKind.GEMSPEC else self.gemfile

    @classmethod
    def uniform(cls, style: QuoteStyle) -> "QuoteConfig":
        """Same style for both kinds (the CLI --quotes flag)."""
        return cls(gemfile=style, gemspec=style)


def get_quote_config() -> QuoteConfig:
    """Quote defaults from the [quotes] config section."""
    section = get_section("quotes")
    return QuoteConfig(
        gemfile=parse_quote_style(section["gemfile"]),
        gemspec=parse_quote_style(section["gemspec"]),
    )


def parse_quote_style(value: Union[str, QuoteStyle]) -> QuoteStyle:
    """Accept 'single'/'double' or the quote characters themselves."""
    if isinstance(value, QuoteStyle):
        return value
    normalized = str(value).lower().strip()
    if normalized in ("single", "'"):
        return QuoteStyle.SINGLE
    if normalized in ("double", '"'):
        return QuoteStyle.DOUBLE
    raise InputValidationError(
        "quote_style", f"Invalid quote style: {value}. Must be 'single' or 'double'"
    )


def detect_quote_style(line: str) -> Optional[QuoteStyle]:
    """Quote style of an existing declaration line, or None if not detectable."""
    match = _DECLARATION_QUOTE.search(line)
    if not match:
        return None
    char = match.group(1)
    if char == "'":
        return QuoteStyle.SINGLE
    if char == '"':
        return QuoteStyle.DOUBLE
    return None


def resolve_quote_style(
    explicit: Optional[Union[str, QuoteStyle]],
    line: Optional[str],
    default: QuoteStyle,
) -> QuoteStyle:
    if explicit is not None:
        return parse_quote_style(explicit)
    if line is not None:
        detected = detect_quote_style(line)
        if detected is not None:
            return detected
    return default
