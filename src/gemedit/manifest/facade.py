"""
ManifestFacade: Orchestrate manifest reads and edits.

Pipeline for every mutation:
1. Validate arguments (before any file I/O)
2. Resolve the path against its project root
3. Read the manifest (typed errors for missing/unreadable files)
4. Check the file can be replaced
5. Apply a pure line mutator
6. Write atomically (skipped on dry run or when nothing changed)
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from gemedit.config import get_config_value
from gemedit.exceptions import GemeditError
from gemedit.logging_config import logger
from gemedit.projects import ProjectManager
from gemedit.schemas import (
    AddToGemfileRequest,
    AddToGemspecRequest,
    EditResult,
    ManifestDocument,
    ManifestKind,
    ParseRequest,
    PinRequest,
    UnpinRequest,
)
from gemedit.validation import validate_input

from .editor import ManifestEditor
from .formatter import format_group_list
from .mutators import (
    DEFAULT_INDENT,
    LineEdit,
    add_gemfile_declaration,
    add_gemspec_dependency,
    pin_declaration,
    unpin_declaration,
)
from .quotes import QuoteConfig, get_quote_config
from .reader import ManifestReader, detect_kind

# (lines, resolved path, manifest kind) -> LineEdit
Mutation = Callable[[List[str], str, ManifestKind], LineEdit]


class ManifestFacade:
    """
    Main entry point for manifest operations.

    Mutations never raise for expected failures: every GemeditError becomes
    an EditResult with success=False and error_type set to the error code.
    """

    def __init__(
        self,
        quote_config: Optional[QuoteConfig] = None,
        project_manager: Optional[ProjectManager] = None,
        editor: Optional[ManifestEditor] = None,
    ):
        """
        Args:
            quote_config: Default quote styles per manifest kind (config file when None)
            project_manager: Project roots (working directory only when None)
            editor: File access layer
        """
        self.quote_config = quote_config or get_quote_config()
        self.project_manager = project_manager or ProjectManager()
        self.editor = editor or ManifestEditor()
        self.reader = ManifestReader()
        self.default_gemfile = get_config_value("manifest.default_gemfile", "Gemfile")
        self.indent = get_config_value("manifest.indent", DEFAULT_INDENT)

    def resolve_path(self, file_path: str, project: Optional[str] = None) -> Path:
        return self.project_manager.resolve_file_path(file_path, project)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, file_path: str, project: Optional[str] = None) -> ManifestDocument:
        """
        Parse a manifest.

        Raises:
            GemeditError: validation, project or file access failures
        """
        request = validate_input(ParseRequest, file_path=file_path, project=project)
        path = self.resolve_path(request.file_path, request.project)
        content = self.editor.read_text(path)
        return self.reader.parse(content, str(path))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def pin(
        self,
        gem_name: str,
        version: str,
        pin_type: str = "~>",
        file_path: Optional[str] = None,
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> EditResult:
        """Set the version constraint of an existing gem declaration."""
        try:
            request = validate_input(
                PinRequest,
                gem_name=gem_name,
                version=version,
                pin_type=pin_type,
                quote_style=quote_style,
                file_path=file_path or self.default_gemfile,
                project=project,
            )
        except GemeditError as e:
            return self._failure("pin", gem_name, file_path or self.default_gemfile, e)

        def mutate(lines: List[str], path: str, kind: ManifestKind) -> LineEdit:
            return pin_declaration(
                lines,
                request.gem_name,
                request.version,
                request.pin_type,
                kind=kind,
                quote_style=request.quote_style,
                default_quote=self.quote_config.for_kind(kind),
                file_path=path,
            )

        def describe(edit: LineEdit, path: str) -> str:
            if not edit.changed:
                return f"No changes needed for '{request.gem_name}' in {path}"
            return f"Successfully pinned '{request.gem_name}' to '{edit.requirement}' in {path}"

        return self._apply("pin", request.gem_name, request.file_path, request.project, mutate, describe, dry_run)

    def unpin(
        self,
        gem_name: str,
        file_path: Optional[str] = None,
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> EditResult:
        """Remove version constraints from an existing gem declaration."""
        try:
            request = validate_input(
                UnpinRequest,
                gem_name=gem_name,
                quote_style=quote_style,
                file_path=file_path or self.default_gemfile,
                project=project,
            )
        except GemeditError as e:
            return self._failure("unpin", gem_name, file_path or self.default_gemfile, e)

        def mutate(lines: List[str], path: str, kind: ManifestKind) -> LineEdit:
            return unpin_declaration(
                lines,
                request.gem_name,
                kind=kind,
                quote_style=request.quote_style,
                default_quote=self.quote_config.for_kind(kind),
                file_path=path,
            )

        def describe(edit: LineEdit, path: str) -> str:
            if not edit.changed:
                return f"No version constraints found to remove for '{request.gem_name}' in {path}"
            return f"Successfully unpinned '{request.gem_name}' (removed version constraints) in {path}"

        return self._apply("unpin", request.gem_name, request.file_path, request.project, mutate, describe, dry_run)

    def add_to_gemfile(
        self,
        gem_name: str,
        version: Optional[str] = None,
        pin_type: str = "~>",
        group: Optional[Sequence[str]] = None,
        platforms: Optional[Sequence[str]] = None,
        source: Optional[str] = None,
        require: Optional[Union[bool, str]] = None,
        file_path: Optional[str] = None,
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> EditResult:
        """Add a gem to a Gemfile, optionally inside a group block."""
        try:
            request = validate_input(
                AddToGemfileRequest,
                gem_name=gem_name,
                version=version,
                pin_type=pin_type,
                group=list(group) if group else None,
                platforms=list(platforms) if platforms else None,
                source=source,
                require=require,
                quote_style=quote_style,
                file_path=file_path or self.default_gemfile,
                project=project,
            )
        except GemeditError as e:
            return self._failure("add_to_gemfile", gem_name, file_path or self.default_gemfile, e)

        def mutate(lines: List[str], path: str, kind: ManifestKind) -> LineEdit:
            return add_gemfile_declaration(
                lines,
                request.gem_name,
                version=request.version,
                pin_type=request.pin_type,
                groups=request.group,
                platforms=request.platforms,
                source=request.source,
                require=request.require,
                quote_style=request.quote_style,
                default_quote=self.quote_config.gemfile,
                indent_unit=self.indent,
                file_path=path,
            )

        def describe(edit: LineEdit, path: str) -> str:
            version_info = f" with version '{request.pin_type} {request.version}'" if request.version else ""
            group_info = f" in group [{format_group_list(request.group)}]" if request.group else ""
            return f"Successfully added '{request.gem_name}'{version_info}{group_info} to {path}"

        return self._apply(
            "add_to_gemfile", request.gem_name, request.file_path, request.project, mutate, describe, dry_run
        )

    def add_to_gemspec(
        self,
        gem_name: str,
        file_path: str,
        version: Optional[str] = None,
        pin_type: str = "~>",
        dependency_type: str = "runtime",
        project: Optional[str] = None,
        quote_style: Optional[str] = None,
        dry_run: bool = False,
    ) -> EditResult:
        """Add a runtime or development dependency to a gemspec."""
        try:
            request = validate_input(
                AddToGemspecRequest,
                gem_name=gem_name,
                version=version,
                pin_type=pin_type,
                dependency_type=dependency_type,
                quote_style=quote_style,
                file_path=file_path,
                project=project,
            )
        except GemeditError as e:
            return self._failure("add_to_gemspec", gem_name, file_path or "", e)

        def mutate(lines: List[str], path: str, kind: ManifestKind) -> LineEdit:
            return add_gemspec_dependency(
                lines,
                request.gem_name,
                version=request.version,
                pin_type=request.pin_type,
                dependency_type=request.dependency_type,
                quote_style=request.quote_style,
                default_quote=self.quote_config.gemspec,
                indent_unit=self.indent,
                file_path=path,
            )

        def describe(edit: LineEdit, path: str) -> str:
            type_info = "development " if request.dependency_type == "development" else ""
            version_info = f" with version '{request.pin_type} {request.version}'" if request.version else ""
            return f"Successfully added '{request.gem_name}' as {type_info}dependency{version_info} to {path}"

        return self._apply(
            "add_to_gemspec", request.gem_name, request.file_path, request.project, mutate, describe, dry_run
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _apply(
        self,
        operation: str,
        gem_name: str,
        file_path: str,
        project: Optional[str],
        mutate: Mutation,
        describe: Callable[[LineEdit, str], str],
        dry_run: bool,
    ) -> EditResult:
        resolved = file_path
        try:
            path = self.resolve_path(file_path, project)
            resolved = str(path)

            original_content = self.editor.read_text(path)
            if not dry_run:
                self.editor.check_writable(path)

            kind = detect_kind(path, original_content)
            edit = mutate(original_content.split("\n"), resolved, kind)
            modified_content = "\n".join(edit.lines)

            diff = None
            if edit.changed:
                diff = self.editor.generate_unified_diff(path.name, original_content, modified_content)
                if not dry_run:
                    self.editor.atomic_write(path, modified_content)

            message = describe(edit, resolved)
            if not edit.changed:
                logger.warning(message)
            elif dry_run:
                logger.info(f"[dry run] {message}")
            else:
                logger.info(message)

            return EditResult(
                success=True,
                changed=edit.changed,
                operation=operation,
                gem_name=gem_name,
                file_path=resolved,
                message=message,
                line=edit.line + 1 if edit.line is not None else None,
                requirement=edit.requirement,
                diff=diff,
            )
        except GemeditError as e:
            return self._failure(operation, gem_name, resolved, e)

    def _failure(self, operation: str, gem_name: str, file_path: str, error: GemeditError) -> EditResult:
        logger.error(f"{operation} '{gem_name}' failed: {error}")
        return EditResult(
            success=False,
            operation=operation,
            gem_name=gem_name or "",
            file_path=str(file_path),
            message=str(error),
            error_type=error.code,
        )
