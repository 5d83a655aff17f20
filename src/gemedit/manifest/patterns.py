"""
Line patterns for Gemfile and gemspec statements.

Every pattern works on a single physical line. Statement patterns expect the
line stripped of leading whitespace unless they capture the indentation.
"""

import re
from typing import List, Optional

# Statements (Gemfile)
RUBY_VERSION = re.compile(r"^ruby\s*\(?\s*['\"]([^'\"]+)['\"]")
SOURCE = re.compile(r"^source\s*\(?\s*['\"]([^'\"]+)['\"]")
GROUP_OPEN = re.compile(r"^group\s*\(?\s*(.+?)\s*\)?\s+do\b")
PLATFORMS_OPEN = re.compile(r"^platforms?\s*\(?\s*(.+?)\s*\)?\s+do\b")

# Declarations. `rest` is everything after the closing quote of the name.
GEM_DECLARATION = re.compile(
    r"^(?P<indent>\s*)(?P<keyword>gem)(?P<sep>\s+|\s*\(\s*)"
    r"(?P<quote>['\"])(?P<name>[^'\"]+)(?P=quote)(?P<rest>.*)$"
)
SPEC_DEPENDENCY = re.compile(
    r"^(?P<indent>\s*)(?P<keyword>(?P<receiver>\w+)\.add_(?P<type>runtime_|development_)?dependency)"
    r"(?P<sep>\s+|\s*\(\s*)(?P<quote>['\"])(?P<name>[^'\"]+)(?P=quote)(?P<rest>.*)$"
)
SPEC_DEPENDENCY_MARKER = re.compile(r"\w+\.add_(?:runtime_|development_)?dependency\b")

# Gemspec structure
SPEC_BLOCK_OPEN = re.compile(r"Gem::Specification\.new\b.*?\bdo\b\s*(?:\|\s*(\w+)\s*\|)?")
REQUIRED_RUBY_VERSION = re.compile(
    r"required_ruby_version\s*=\s*(?:Gem::Requirement\.new\(\s*)?['\"]([^'\"]+)['\"]"
)

# Version tokens following the name: `, '~> 1.0'`
VERSION_TOKEN = re.compile(r"^\s*,\s*(['\"])([^'\"]*)\1")
# Leading version token as stripped by pin/unpin (comma optional)
LEADING_VERSION_TOKEN = re.compile(r"^\s*,?\s*(['\"])[^'\"]*\1")

# Inline options (`key: value` and `:key => value`)
PLATFORM_OPTION = re.compile(r"(?<![\w:]):?platforms?(?::|\s*=>)\s*(%[iw]\[.*?\]|\[.*?\]|[^,}\s)]+)")
GROUP_OPTION = re.compile(r"(?<![\w:]):?groups?(?::|\s*=>)\s*(%[iw]\[.*?\]|\[.*?\]|[^,}\s)]+)")
SOURCE_OPTION = re.compile(r"(?<![\w:]):?source(?::|\s*=>)\s*['\"]([^'\"]+)['\"]")
GIT_OPTION = re.compile(r"(?<![\w:]):?git(?::|\s*=>)\s*['\"]([^'\"]+)['\"]")
PATH_OPTION = re.compile(r"(?<![\w:]):?path(?::|\s*=>)\s*['\"]([^'\"]+)['\"]")
REQUIRE_OPTION = re.compile(r"(?<![\w:]):?require(?::|\s*=>)\s*(?:(false)|['\"]([^'\"]+)['\"])")

# Block structure
_BLOCK_KEYWORD_OPEN = re.compile(r"^(?:if|unless|case|while|until|for|begin|def|class|module)\b")
_DO_BLOCK_OPEN = re.compile(r"\bdo\s*(?:\|[^|]*\|)?\s*$")
_BLOCK_CLOSE = re.compile(r"^end\b")
_INLINE_END = re.compile(r"[\s;]end$")

_SYMBOL_ARRAY = re.compile(r"%[iw]\[(.*?)\]")
_ARRAY = re.compile(r"\[([^\]]*)\]")
_KEY_VALUE = re.compile(r"^\w+:\s|=>")


def is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def strip_comment(line: str) -> str:
    """Drop a trailing `# comment`, ignoring `#` inside quoted strings."""
    quote: Optional[str] = None
    for i, char in enumerate(line):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "#":
            return line[:i].rstrip()
    return line


def opens_block(line: str) -> bool:
    """True if the line opens a construct closed by `end`."""
    code = strip_comment(line).strip()
    if not code:
        return False
    if _BLOCK_KEYWORD_OPEN.match(code):
        # `if x then y end` closes on the same line
        return not _INLINE_END.search(code)
    return bool(_DO_BLOCK_OPEN.search(code))


def closes_block(line: str) -> bool:
    code = strip_comment(line).strip()
    return bool(_BLOCK_CLOSE.match(code))


def split_line_ending(line: str):
    """Split a line (from text.split('\\n')) into body and its '\\r', if any."""
    if line.endswith("\r"):
        return line[:-1], "\r"
    return line, ""


def parse_symbol_list(text: str) -> List[str]:
    """
    Parse group/platform names.

    Handles `:dev`, `"dev"`, `:dev, :test`, `[:dev, :test]`, `(:dev)`
    and `%i[dev test]`. Trailing `key: value` options are ignored.
    """
    text = text.strip()

    percent = _SYMBOL_ARRAY.search(text)
    if percent:
        return [item for item in percent.group(1).split() if item]

    text = text.replace("(", "").replace(")", "")
    array = _ARRAY.search(text)
    if array:
        parts = array.group(1).split(",")
    else:
        parts = text.split(",")

    names = []
    for part in parts:
        part = part.strip()
        if not part or _KEY_VALUE.search(part):
            continue
        clean = part.strip("'\":")
        if clean:
            names.append(clean)
    return names
