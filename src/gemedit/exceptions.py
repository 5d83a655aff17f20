# Custom exceptions for gemedit

from typing import Optional


class GemeditError(Exception):
    """Base exception for all application-specific errors."""
    code = "gemedit_error"


class InputValidationError(GemeditError):
    """Raised when tool or CLI input fails validation, before any file I/O."""
    code = "invalid_input"

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Validation failed: {field}: {message}")


class ConfigError(GemeditError):
    """Raised for configuration-related problems."""
    code = "config_error"


class ProjectNotFoundError(GemeditError):
    """Raised when a tool names a project that is not configured."""
    code = "project_not_found"

    def __init__(self, name: str, available: list):
        self.name = name
        self.available = available
        super().__init__(
            f"Project not found: {name}. Available projects: {', '.join(available)}"
        )


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

class FileAccessError(GemeditError):
    """Base class for errors reaching the manifest on disk."""
    code = "file_access"

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(message)


class ManifestNotFoundError(FileAccessError):
    code = "file_not_found"

    def __init__(self, file_path: str):
        super().__init__(file_path, f"File not found: {file_path}")


class NotAFileError(FileAccessError):
    code = "not_a_file"

    def __init__(self, file_path: str):
        super().__init__(file_path, f"{file_path} is not a file")


class PermissionDeniedError(FileAccessError):
    code = "permission_denied"

    def __init__(self, file_path: str, action: str = "accessing"):
        super().__init__(file_path, f"Permission denied {action} file: {file_path}")


class InvalidEncodingError(FileAccessError):
    code = "invalid_encoding"

    def __init__(self, file_path: str, encoding: str = "utf-8"):
        super().__init__(file_path, f"File is not valid {encoding}: {file_path}")


# ---------------------------------------------------------------------------
# Structural conflicts inside a manifest
# ---------------------------------------------------------------------------

class StructuralConflictError(GemeditError):
    """Base class for manifest content that does not allow the edit."""
    code = "structural_conflict"

    def __init__(self, gem_name: str, file_path: Optional[str], message: str):
        self.gem_name = gem_name
        self.file_path = file_path
        super().__init__(message)


class DeclarationNotFoundError(StructuralConflictError):
    code = "gem_not_found"

    def __init__(self, gem_name: str, file_path: Optional[str] = None):
        where = f" in {file_path}" if file_path else ""
        super().__init__(gem_name, file_path, f"Gem '{gem_name}' not found{where}")


class AlreadyExistsError(StructuralConflictError):
    code = "already_exists"

    def __init__(self, gem_name: str, file_path: Optional[str] = None, kind: str = "Gem"):
        where = f" in {file_path}" if file_path else ""
        super().__init__(gem_name, file_path, f"{kind} '{gem_name}' already exists{where}")


class StructureNotFoundError(StructuralConflictError):
    code = "structure_not_found"

    def __init__(self, gem_name: str, file_path: Optional[str] = None):
        where = f" in {file_path}" if file_path else ""
        super().__init__(
            gem_name,
            file_path,
            f"Could not find Gem::Specification block{where} to add '{gem_name}'",
        )