"""
DeclarationLocator: Map gem names and group names to line ranges.

Block ends are found by depth counting: every construct closed by `end`
increments the counter, every `end` decrements it, so nested blocks do not
close their parent early.
"""

import re
from typing import List, Optional, Sequence

from gemedit.logging_config import logger
from gemedit.schemas import GroupBlockSpan, ManifestKind, SpecBoundary

from . import patterns


def declaration_pattern(kind: Optional[ManifestKind]) -> List[re.Pattern]:
    """Declaration patterns for a manifest kind (both dialects when None)."""
    if kind == ManifestKind.GEMFILE:
        return [patterns.GEM_DECLARATION]
    if kind == ManifestKind.GEMSPEC:
        return [patterns.SPEC_DEPENDENCY]
    return [patterns.GEM_DECLARATION, patterns.SPEC_DEPENDENCY]


def match_declaration(line: str, kind: Optional[ManifestKind] = None) -> Optional[re.Match]:
    """Match a declaration statement on a raw line (indentation captured)."""
    body, _ = patterns.split_line_ending(line)
    for pattern in declaration_pattern(kind):
        match = pattern.match(body)
        if match:
            return match
    return None


def find_declaration_lines(
    lines: Sequence[str],
    gem_name: str,
    kind: Optional[ManifestKind] = None,
) -> List[int]:
    """All line indices declaring `gem_name`, in file order."""
    found = []
    for index, line in enumerate(lines):
        if patterns.is_blank_or_comment(line):
            continue
        match = match_declaration(line, kind)
        if match and match.group("name") == gem_name:
            found.append(index)
    return found


def find_declaration_line(
    lines: Sequence[str],
    gem_name: str,
    kind: Optional[ManifestKind] = None,
) -> Optional[int]:
    """
    Index of the first line declaring `gem_name`, or None.

    Duplicates are not disambiguated: the first declaration wins.
    """
    found = find_declaration_lines(lines, gem_name, kind)
    if not found:
        return None
    if len(found) > 1:
        others = ", ".join(str(i + 1) for i in found[1:])
        logger.warning(
            f"Gem '{gem_name}' is declared {len(found)} times; using line {found[0] + 1} (also on {others})"
        )
    return found[0]


def find_block_end(lines: Sequence[str], start_line: int) -> Optional[int]:
    """
    Index of the `end` matching the block opened on `start_line`.

    Returns:
        Line index, or None if the block is never closed
    """
    depth = 1
    for index in range(start_line + 1, len(lines)):
        line = lines[index]
        if patterns.is_blank_or_comment(line):
            continue
        if patterns.closes_block(line):
            depth -= 1
            if depth == 0:
                return index
        elif patterns.opens_block(line):
            depth += 1
    return None


def find_group_block(lines: Sequence[str], groups: Sequence[str]) -> Optional[GroupBlockSpan]:
    """
    Locate the first `group ... do` block whose group list equals `groups`.

    Group order matters: `group :test, :development` does not match
    ["development", "test"].
    """
    wanted = list(groups)
    for index, line in enumerate(lines):
        if patterns.is_blank_or_comment(line):
            continue
        match = patterns.GROUP_OPEN.match(line.strip())
        if not match or patterns.parse_symbol_list(match.group(1)) != wanted:
            continue

        end_line = find_block_end(lines, index)
        if end_line is None:
            logger.warning(f"Group block {wanted} opened on line {index + 1} has no matching 'end'")
            return None

        return GroupBlockSpan(
            groups=wanted,
            start_line=index,
            end_line=end_line,
            indentation=indentation_of(line),
        )
    return None


def find_spec_boundary(lines: Sequence[str]) -> SpecBoundary:
    """
    Scan a gemspec for insertion anchors.

    Records the last dependency statement anywhere in the file and the
    start/end of the first `Gem::Specification.new ... do |x|` block.
    """
    boundary = SpecBoundary()
    depth = 0

    for index, line in enumerate(lines):
        if patterns.is_blank_or_comment(line):
            continue

        if patterns.SPEC_DEPENDENCY.match(patterns.split_line_ending(line)[0]):
            boundary.last_dependency_line = index

        if boundary.block_start_line is None:
            open_match = patterns.SPEC_BLOCK_OPEN.search(line)
            if open_match:
                boundary.block_start_line = index
                boundary.receiver = open_match.group(1) or "spec"
                depth = 1
            continue

        if boundary.block_end_line is not None:
            continue

        if patterns.closes_block(line):
            depth -= 1
            if depth == 0:
                boundary.block_end_line = index
        elif patterns.opens_block(line):
            depth += 1

    return boundary


def indentation_of(line: str) -> str:
    body, _ = patterns.split_line_ending(line)
    return body[:len(body) - len(body.lstrip())]
