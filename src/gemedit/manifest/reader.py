"""
ManifestReader: Extract structured dependency declarations from a Gemfile or gemspec.

Line-oriented and pattern-based; no Ruby is evaluated. Lines that do not
match a known statement are skipped, never fatal.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from gemedit.logging_config import logger
from gemedit.schemas import GemDeclaration, ManifestDocument, ManifestKind

from . import patterns


def detect_kind(file_path: Union[str, Path], content: str) -> ManifestKind:
    """
    Decide whether a manifest is a Gemfile or a gemspec.

    Name first (`Gemfile`, `*gemfile`, `gems.rb`, `*.gemspec`), then content
    sniffing. Defaults to Gemfile.
    """
    path = Path(file_path)
    name = path.name.lower()

    if name.endswith("gemfile") or name == "gems.rb":
        return ManifestKind.GEMFILE
    if path.suffix.lower() == ".gemspec":
        return ManifestKind.GEMSPEC

    if "Gem::Specification.new" in content or patterns.SPEC_DEPENDENCY_MARKER.search(content):
        return ManifestKind.GEMSPEC
    return ManifestKind.GEMFILE


@dataclass
class _BlockFrame:
    kind: str  # "group", "platforms", "source" or "other"
    values: List[str] = field(default_factory=list)
    previous_source: Optional[str] = None


@dataclass
class _GemfileContext:
    """Accumulator threaded through one forward pass over a Gemfile."""
    frames: List[_BlockFrame] = field(default_factory=list)
    current_source: Optional[str] = None

    def open(self, kind: str, values: Optional[List[str]] = None):
        self.frames.append(_BlockFrame(kind, values or [], self.current_source))

    def close(self):
        if self.frames:
            frame = self.frames.pop()
            if frame.kind == "source":
                self.current_source = frame.previous_source

    def _collect(self, kind: str) -> List[str]:
        collected: List[str] = []
        for frame in self.frames:
            if frame.kind == kind:
                for value in frame.values:
                    if value not in collected:
                        collected.append(value)
        return collected

    @property
    def groups(self) -> List[str]:
        return self._collect("group")

    @property
    def platforms(self) -> List[str]:
        return self._collect("platforms")


class ManifestReader:
    """Parse Gemfile and gemspec text into ManifestDocument."""

    def parse(
        self,
        content: str,
        file_path: Union[str, Path] = "Gemfile",
        kind: Optional[ManifestKind] = None,
    ) -> ManifestDocument:
        """
        Parse manifest text.

        Args:
            content: Full file text
            file_path: Path reported in the document (and used to infer kind)
            kind: Manifest kind, inferred when None

        Returns:
            ManifestDocument with declarations in file order
        """
        if kind is None:
            kind = detect_kind(file_path, content)

        if kind == ManifestKind.GEMSPEC:
            document = self.parse_gemspec(content, str(file_path))
        else:
            document = self.parse_gemfile(content, str(file_path))

        logger.debug(f"Parsed {len(document.gems)} declaration(s) from {file_path} ({kind.value})")
        return document

    def parse_gemfile(self, content: str, file_path: str) -> ManifestDocument:
        document = ManifestDocument(kind=ManifestKind.GEMFILE, path=file_path)
        context = _GemfileContext()

        for index, raw_line in enumerate(content.split("\n")):
            if patterns.is_blank_or_comment(raw_line):
                continue
            line = raw_line.strip()

            ruby_match = patterns.RUBY_VERSION.match(line)
            if ruby_match:
                document.ruby_version = ruby_match.group(1)
                continue

            source_match = patterns.SOURCE.match(line)
            if source_match:
                if patterns.opens_block(line):
                    context.open("source")
                elif document.source is None:
                    document.source = source_match.group(1)
                context.current_source = source_match.group(1)
                continue

            group_match = patterns.GROUP_OPEN.match(line)
            if group_match:
                context.open("group", patterns.parse_symbol_list(group_match.group(1)))
                continue

            platforms_match = patterns.PLATFORMS_OPEN.match(line)
            if platforms_match:
                context.open("platforms", patterns.parse_symbol_list(platforms_match.group(1)))
                continue

            if patterns.closes_block(line):
                context.close()
                continue

            gem_match = patterns.GEM_DECLARATION.match(line)
            if gem_match:
                gem = self._gemfile_declaration(gem_match, context, document.source)
                gem.line = index + 1
                document.gems.append(gem)
                continue

            if patterns.opens_block(line):
                # `if`, `git ... do`, `install_if -> { } do`, ...
                context.open("other")

        return document

    def parse_gemspec(self, content: str, file_path: str) -> ManifestDocument:
        document = ManifestDocument(kind=ManifestKind.GEMSPEC, path=file_path)

        for index, raw_line in enumerate(content.split("\n")):
            if patterns.is_blank_or_comment(raw_line):
                continue
            line = raw_line.strip()

            dep_match = patterns.SPEC_DEPENDENCY.match(line)
            if dep_match:
                requirement, _ = _read_version_tokens(dep_match.group("rest"))
                gem = GemDeclaration(name=dep_match.group("name"), requirement=requirement, line=index + 1)
                if dep_match.group("type") == "development_":
                    gem.groups = ["development"]
                document.gems.append(gem)
                continue

            ruby_match = patterns.REQUIRED_RUBY_VERSION.search(line)
            if ruby_match:
                document.ruby_version = ruby_match.group(1)

        return document

    def _gemfile_declaration(self, match, context: _GemfileContext, default_source: Optional[str]) -> GemDeclaration:
        requirement, options = _read_version_tokens(match.group("rest"))
        gem = GemDeclaration(name=match.group("name"), requirement=requirement)

        gem.groups = context.groups
        gem.platforms = context.platforms
        if context.current_source and context.current_source != default_source:
            gem.source = context.current_source

        parse_gem_options(patterns.strip_comment(options), gem)
        return gem


def _read_version_tokens(rest: str) -> Tuple[Optional[str], str]:
    """
    Consume consecutive quoted version tokens after the name.

    Returns:
        (requirement or None, remaining option text)
    """
    tokens = []
    while True:
        match = patterns.VERSION_TOKEN.match(rest)
        if not match:
            break
        tokens.append(match.group(2))
        rest = rest[match.end():]
    return (", ".join(tokens) if tokens else None), rest


def parse_gem_options(options: str, gem: GemDeclaration) -> None:
    """Apply inline `key: value` options to a declaration."""
    platform_match = patterns.PLATFORM_OPTION.search(options)
    if platform_match:
        for platform in patterns.parse_symbol_list(platform_match.group(1)):
            if platform not in gem.platforms:
                gem.platforms.append(platform)

    group_match = patterns.GROUP_OPTION.search(options)
    if group_match:
        for group in patterns.parse_symbol_list(group_match.group(1)):
            if group not in gem.groups:
                gem.groups.append(group)

    # Later keys win: source, then git, then path
    for pattern in (patterns.SOURCE_OPTION, patterns.GIT_OPTION, patterns.PATH_OPTION):
        source_match = pattern.search(options)
        if source_match:
            gem.source = source_match.group(1)

    require_match = patterns.REQUIRE_OPTION.search(options)
    if require_match:
        gem.require = False if require_match.group(1) else require_match.group(2)
