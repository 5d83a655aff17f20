"""
Line mutators: pin, unpin and insert gem declarations.

All functions are pure. They take the manifest as a list of lines
(`text.split("\\n")`), never touch the filesystem, and return a new list in
which only the edited or inserted lines differ. A trailing "\\r" is treated
as the line's terminator and preserved.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from gemedit.exceptions import (
    AlreadyExistsError,
    DeclarationNotFoundError,
    StructureNotFoundError,
)
from gemedit.logging_config import logger
from gemedit.schemas import ManifestKind, QuoteStyle

from . import patterns
from .formatter import (
    format_dependency_declaration,
    format_gem_declaration,
    format_group_list,
    format_version_requirement,
)
from .locator import (
    find_declaration_line,
    find_declaration_lines,
    find_group_block,
    find_spec_boundary,
    indentation_of,
    match_declaration,
)
from .quotes import resolve_quote_style

DEFAULT_INDENT = "  "


@dataclass
class LineEdit:
    """Result of a mutator: new lines plus what was touched."""
    lines: List[str]
    changed: bool
    line: Optional[int] = None
    requirement: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def document_line_ending(lines: Sequence[str]) -> str:
    """'\\r' when most terminated lines are CRLF, else ''."""
    terminated = lines[:-1]
    if not terminated:
        return ""
    crlf = sum(1 for line in terminated if line.endswith("\r"))
    return "\r" if crlf * 2 > len(terminated) else ""


def content_end(lines: Sequence[str]) -> int:
    """Index just past the last non-blank line."""
    index = len(lines)
    while index > 0 and lines[index - 1].strip() == "":
        index -= 1
    return index


def insert_lines(lines: Sequence[str], index: int, new_lines: Iterable[str], eol: str = "") -> List[str]:
    """
    Insert `new_lines` before `index`, terminating each with `eol`.

    Appending after an unterminated final line keeps the file without a
    trailing newline.
    """
    result = list(lines)
    new_lines = list(new_lines)
    rendered = [line + eol for line in new_lines]

    if index >= len(result) and result:
        if eol and not result[-1].endswith(eol):
            result[-1] += eol
        rendered[-1] = new_lines[-1]
        index = len(result)

    result[index:index] = rendered
    return result


def _name_clause(match, quote_style: QuoteStyle) -> str:
    quote = quote_style.char
    return f"{match.group('indent')}{match.group('keyword')}{match.group('sep')}{quote}{match.group('name')}{quote}"


def _strip_version_tokens(rest: str, every: bool = False) -> tuple:
    """
    Remove the quoted version token right after the name.

    The first token may omit its comma. With `every`, following constraints
    such as `, '< 2'` are removed too.

    Returns:
        (remaining text stripped of surrounding whitespace, whether a token was found)
    """
    match = patterns.LEADING_VERSION_TOKEN.match(rest)
    if not match:
        return rest.strip(), False
    rest = rest[match.end():]
    while every:
        more = patterns.VERSION_TOKEN.match(rest)
        if not more:
            break
        rest = rest[more.end():]
    return rest.strip(), True


def _join_remainder(head: str, remainder: str) -> str:
    if not remainder:
        return head
    if remainder.startswith((",", ")")):
        return head + remainder
    if remainder.startswith("#"):
        return f"{head} {remainder}"
    return f"{head}, {remainder}"


def _locate(lines: Sequence[str], gem_name: str, kind: Optional[ManifestKind], file_path: Optional[str]):
    index = find_declaration_line(lines, gem_name, kind)
    if index is None:
        raise DeclarationNotFoundError(gem_name, file_path)
    body, eol = patterns.split_line_ending(lines[index])
    return index, match_declaration(body, kind), body, eol


# ---------------------------------------------------------------------------
# Pin / Unpin
# ---------------------------------------------------------------------------

def pin_declaration(
    lines: Sequence[str],
    gem_name: str,
    version: str,
    pin_type: str = "~>",
    *,
    kind: Optional[ManifestKind] = None,
    quote_style: Optional[Union[str, QuoteStyle]] = None,
    default_quote: QuoteStyle = QuoteStyle.SINGLE,
    file_path: Optional[str] = None,
) -> LineEdit:
    """
    Set the version constraint of an existing declaration.

    Trailing options and inline comments on the line are kept.

    Raises:
        DeclarationNotFoundError: if the gem is not declared
    """
    index, match, body, eol = _locate(lines, gem_name, kind, file_path)

    style = resolve_quote_style(quote_style, body, default_quote)
    requirement = format_version_requirement(version, pin_type, style)
    remainder, _ = _strip_version_tokens(match.group("rest"))

    new_body = _join_remainder(f"{_name_clause(match, style)}, {requirement}", remainder)

    result = list(lines)
    result[index] = new_body + eol
    logger.debug(f"Pin '{gem_name}' line {index + 1}: {body.strip()!r} -> {new_body.strip()!r}")
    return LineEdit(
        lines=result,
        changed=result[index] != lines[index],
        line=index,
        requirement=f"{pin_type} {version}",
    )


def unpin_declaration(
    lines: Sequence[str],
    gem_name: str,
    *,
    kind: Optional[ManifestKind] = None,
    quote_style: Optional[Union[str, QuoteStyle]] = None,
    default_quote: QuoteStyle = QuoteStyle.SINGLE,
    file_path: Optional[str] = None,
) -> LineEdit:
    """
    Drop the version constraint of an existing declaration.

    A declaration without a version token is left alone (changed=False).

    Raises:
        DeclarationNotFoundError: if the gem is not declared
    """
    index, match, body, eol = _locate(lines, gem_name, kind, file_path)

    remainder, had_version = _strip_version_tokens(match.group("rest"), every=True)
    if not had_version:
        return LineEdit(lines=list(lines), changed=False, line=index)

    if remainder.startswith(","):
        remainder = remainder[1:].strip()

    style = resolve_quote_style(quote_style, body, default_quote)
    new_body = _join_remainder(_name_clause(match, style), remainder)

    result = list(lines)
    result[index] = new_body + eol
    return LineEdit(lines=result, changed=result[index] != lines[index], line=index)


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------

def _block_indent_unit(lines: Sequence[str], start: int, end: int, block_indent: str) -> Optional[str]:
    """Indent unit used inside a block, from its first non-blank body line."""
    for index in range(start + 1, end):
        if lines[index].strip():
            indent = indentation_of(lines[index])
            if indent.startswith(block_indent) and len(indent) > len(block_indent):
                return indent[len(block_indent):]
            return None
    return None


def add_gemfile_declaration(
    lines: Sequence[str],
    gem_name: str,
    *,
    version: Optional[str] = None,
    pin_type: Optional[str] = "~>",
    groups: Optional[Sequence[str]] = None,
    platforms: Optional[Sequence[str]] = None,
    source: Optional[str] = None,
    require: Optional[Union[bool, str]] = None,
    quote_style: Optional[Union[str, QuoteStyle]] = None,
    default_quote: QuoteStyle = QuoteStyle.SINGLE,
    indent_unit: str = DEFAULT_INDENT,
    file_path: Optional[str] = None,
) -> LineEdit:
    """
    Add a `gem` line to a Gemfile.

    With groups, the line goes at the end of the matching `group ... do`
    block, or into a new block appended to the file. Without groups it is
    appended before any trailing blank lines.

    Raises:
        AlreadyExistsError: if the gem is already declared
    """
    if find_declaration_lines(lines, gem_name, ManifestKind.GEMFILE):
        raise AlreadyExistsError(gem_name, file_path)

    style = resolve_quote_style(quote_style, None, default_quote)
    declaration = format_gem_declaration(
        gem_name,
        version=version,
        pin_type=pin_type,
        source=source,
        require=require,
        platforms=platforms or (),
        quote_style=style,
    )
    eol = document_line_ending(lines)

    if groups:
        span = find_group_block(lines, groups)
        if span is not None:
            unit = _block_indent_unit(lines, span.start_line, span.end_line, span.indentation) or indent_unit
            result = insert_lines(lines, span.end_line, [f"{span.indentation}{unit}{declaration}"], eol)
            return LineEdit(lines=result, changed=True, line=span.end_line)

        at = content_end(lines)
        block = [f"group {format_group_list(groups)} do", f"{indent_unit}{declaration}", "end"]
        if at > 0:
            block.insert(0, "")
        result = insert_lines(lines, at, block, eol)
        return LineEdit(lines=result, changed=True, line=at + len(block) - 2)

    at = content_end(lines)
    result = insert_lines(lines, at, [declaration], eol)
    return LineEdit(lines=result, changed=True, line=at)


def add_gemspec_dependency(
    lines: Sequence[str],
    gem_name: str,
    *,
    version: Optional[str] = None,
    pin_type: Optional[str] = "~>",
    dependency_type: str = "runtime",
    quote_style: Optional[Union[str, QuoteStyle]] = None,
    default_quote: QuoteStyle = QuoteStyle.DOUBLE,
    indent_unit: str = DEFAULT_INDENT,
    file_path: Optional[str] = None,
) -> LineEdit:
    """
    Add an `add_dependency` / `add_development_dependency` line to a gemspec.

    Goes right after the last existing dependency, else just before the
    `end` of the Gem::Specification block (after a blank separator line).

    Raises:
        AlreadyExistsError: if any dependency on the gem exists
        StructureNotFoundError: if there is neither a dependency nor a spec block
    """
    if find_declaration_lines(lines, gem_name, ManifestKind.GEMSPEC):
        raise AlreadyExistsError(gem_name, file_path, kind="Dependency")

    boundary = find_spec_boundary(lines)
    eol = document_line_ending(lines)
    style = resolve_quote_style(quote_style, None, default_quote)

    if boundary.last_dependency_line is not None:
        anchor = lines[boundary.last_dependency_line]
        declaration = format_dependency_declaration(
            gem_name,
            version=version,
            pin_type=pin_type,
            dependency_type=dependency_type,
            quote_style=style,
            receiver=match_declaration(anchor, ManifestKind.GEMSPEC).group("receiver"),
        )
        at = boundary.last_dependency_line + 1
        result = insert_lines(lines, at, [indentation_of(anchor) + declaration], eol)
        return LineEdit(lines=result, changed=True, line=at)

    if boundary.block_end_line is not None:
        declaration = format_dependency_declaration(
            gem_name,
            version=version,
            pin_type=pin_type,
            dependency_type=dependency_type,
            quote_style=style,
            receiver=boundary.receiver,
        )
        at = boundary.block_end_line
        indent = indentation_of(lines[boundary.block_start_line]) + indent_unit
        new_lines = [indent + declaration]
        if lines[at - 1].strip() != "":
            new_lines.insert(0, "")
        result = insert_lines(lines, at, new_lines, eol)
        return LineEdit(lines=result, changed=True, line=at + len(new_lines) - 1)

    raise StructureNotFoundError(gem_name, file_path)
