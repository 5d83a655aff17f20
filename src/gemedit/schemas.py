from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Shared input patterns
GEM_NAME_PATTERN = r"^[a-zA-Z0-9_.-]+$"
VERSION_PATTERN = r"^[0-9]+(?:\.[0-9]+)*(?:\.(?:pre|rc|alpha|beta)\d*)?$"

PinType = Literal["~>", ">=", ">", "<", "<=", "="]


class ManifestKind(str, Enum):
    GEMFILE = "gemfile"
    GEMSPEC = "gemspec"


class QuoteStyle(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"

    @property
    def char(self) -> str:
        return "'" if self is QuoteStyle.SINGLE else '"'


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------

class GemDeclaration(BaseModel):
    """
    One dependency mention in a manifest.

    Produced by a parse pass and never mutated; edits rewrite the file text.
    """
    name: str
    requirement: Optional[str] = None
    source: Optional[str] = None
    groups: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    require: Optional[Union[bool, str]] = None
    line: Optional[int] = None  # 1-indexed line of the declaration


class ManifestDocument(BaseModel):
    """Parsed Gemfile or gemspec. Declarations are in file order."""
    kind: ManifestKind
    path: str
    ruby_version: Optional[str] = None
    source: Optional[str] = None  # Default source (Gemfile only)
    gems: List[GemDeclaration] = Field(default_factory=list)

    def find(self, name: str) -> Optional[GemDeclaration]:
        """First declaration with this name."""
        for gem in self.gems:
            if gem.name == name:
                return gem
        return None


class GroupBlockSpan(BaseModel):
    """A `group ... do` block from its opening line to its matching `end`."""
    groups: List[str]
    start_line: int
    end_line: int
    indentation: str = ""


class SpecBoundary(BaseModel):
    """Anchors for inserting into a gemspec."""
    last_dependency_line: Optional[int] = None
    block_start_line: Optional[int] = None
    block_end_line: Optional[int] = None
    receiver: str = "spec"


# ---------------------------------------------------------------------------
# Edit results
# ---------------------------------------------------------------------------

class EditResult(BaseModel):
    """
    Outcome of a manifest mutation.

    `message` is a one-line human-readable summary naming the gem and the
    resolved path.
    """
    success: bool
    changed: bool = False
    operation: Literal["pin", "unpin", "add_to_gemfile", "add_to_gemspec"]
    gem_name: str
    file_path: str
    message: str
    line: Optional[int] = None  # 1-indexed line edited or inserted
    requirement: Optional[str] = None
    error_type: Optional[str] = None
    diff: Optional[str] = None


# ---------------------------------------------------------------------------
# Requests (validated before any file I/O)
# ---------------------------------------------------------------------------

GemName = Annotated[str, Field(min_length=1, max_length=50, pattern=GEM_NAME_PATTERN)]
Version = Annotated[str, Field(min_length=1, max_length=50, pattern=VERSION_PATTERN)]
FilePath = Annotated[str, Field(min_length=1, max_length=500)]
ProjectName = Annotated[str, Field(min_length=1, max_length=100)]
GroupName = Annotated[str, Field(min_length=1, max_length=50)]
RequirePath = Annotated[str, Field(min_length=1, max_length=100)]
Source = Annotated[str, Field(min_length=1, max_length=500)]


class ParseRequest(BaseModel):
    file_path: FilePath
    project: Optional[ProjectName] = None


class PinRequest(BaseModel):
    gem_name: GemName
    version: Version
    pin_type: PinType = "~>"
    quote_style: Optional[QuoteStyle] = None
    file_path: FilePath = "Gemfile"
    project: Optional[ProjectName] = None


class UnpinRequest(BaseModel):
    gem_name: GemName
    quote_style: Optional[QuoteStyle] = None
    file_path: FilePath = "Gemfile"
    project: Optional[ProjectName] = None


class AddToGemfileRequest(BaseModel):
    gem_name: GemName
    version: Optional[Version] = None
    pin_type: PinType = "~>"
    group: Optional[List[GroupName]] = None
    platforms: Optional[List[GroupName]] = None
    source: Optional[Source] = None
    require: Optional[Union[Literal[False], RequirePath]] = None
    quote_style: Optional[QuoteStyle] = None
    file_path: FilePath = "Gemfile"
    project: Optional[ProjectName] = None


class AddToGemspecRequest(BaseModel):
    gem_name: GemName
    version: Optional[Version] = None
    pin_type: PinType = "~>"
    dependency_type: Literal["runtime", "development"] = "runtime"
    quote_style: Optional[QuoteStyle] = None
    file_path: FilePath
    project: Optional[ProjectName] = None
