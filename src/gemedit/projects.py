"""Named project roots used to resolve relative manifest paths."""
import os
import re
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from loguru import logger

from gemedit.config import get_section
from gemedit.exceptions import ConfigError, ProjectNotFoundError

DEFAULT_PROJECT = "default"

_WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:[\\/]")


def parse_project_spec(spec: str) -> Tuple[str, str]:
    """
    Split a `name:path` project argument.

    A bare path (including `C:\\...`) is named after its last component.
    """
    if ":" in spec and not _WINDOWS_DRIVE.match(spec):
        name, path = spec.split(":", 1)
        if name and path:
            return name, path
    path = spec
    name = Path(path).expanduser().resolve().name or DEFAULT_PROJECT
    return name, path


class ProjectManager:
    """
    Map project names to root directories.

    The `default` project is the working directory unless one is configured.
    """

    def __init__(
        self,
        projects: Optional[Dict[str, Union[str, Path]]] = None,
        default_path: Optional[Union[str, Path]] = None,
    ):
        self.projects: Dict[str, Path] = {}
        for name, path in (projects or {}).items():
            self.projects[name] = Path(path).expanduser().resolve()

        if DEFAULT_PROJECT not in self.projects:
            self.projects[DEFAULT_PROJECT] = Path(default_path or os.getcwd()).expanduser().resolve()

    @classmethod
    def from_specs(cls, specs: Iterable[str], default_path: Optional[Union[str, Path]] = None) -> "ProjectManager":
        """Build from CLI `--project` values merged over the [projects] config table."""
        projects: Dict[str, Union[str, Path]] = dict(get_section("projects"))
        for spec in specs:
            name, path = parse_project_spec(spec)
            projects[name] = path
        return cls(projects, default_path)

    def list_projects(self) -> Dict[str, str]:
        return {name: str(path) for name, path in self.projects.items()}

    def get_project_path(self, name: Optional[str] = None) -> Path:
        name = name or DEFAULT_PROJECT
        try:
            return self.projects[name]
        except KeyError:
            raise ProjectNotFoundError(name, sorted(self.projects)) from None

    def resolve_file_path(self, file_path: Union[str, Path], project: Optional[str] = None) -> Path:
        """
        Absolute paths are returned unchanged; relative ones are joined onto
        the project root.

        Raises:
            ProjectNotFoundError: unknown project name
        """
        path = Path(file_path).expanduser()
        if path.is_absolute():
            return path
        return self.get_project_path(project) / path

    def validate_projects(self) -> None:
        """
        Raises:
            ConfigError: listing every root that is missing or not a directory
        """
        problems = []
        for name, path in self.projects.items():
            if not path.exists():
                problems.append(f"{name}: {path} does not exist")
            elif not path.is_dir():
                problems.append(f"{name}: {path} is not a directory")

        if problems:
            raise ConfigError("Invalid project paths: " + "; ".join(problems))

        logger.debug(f"Projects: {self.list_projects()}")


# Global instance shared by MCP tools
_manager: Optional[ProjectManager] = None


def get_project_manager() -> ProjectManager:
    """Get the global ProjectManager instance."""
    global _manager
    if _manager is None:
        _manager = ProjectManager(get_section("projects"))
    return _manager


def set_project_manager(manager: Optional[ProjectManager]) -> None:
    """Replace the global instance (server startup and tests)."""
    global _manager
    _manager = manager
