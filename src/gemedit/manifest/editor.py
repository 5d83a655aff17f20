"""
ManifestEditor: Read manifests and write them back atomically.

Files are opened with newline="" so CRLF survives a round trip untouched.
"""

import difflib
import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

from gemedit.exceptions import (
    InvalidEncodingError,
    ManifestNotFoundError,
    NotAFileError,
    PermissionDeniedError,
)
from gemedit.logging_config import logger


class ManifestEditor:
    """
    Whole-file reads and atomic writes for manifest files.

    Features:
    - Typed errors for missing, non-file and unreadable paths
    - Atomic writes (temp file + rename), file mode preserved
    - Line ending preservation (LF/CRLF)
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_text(self, file_path: Union[str, Path]) -> str:
        """
        Read a manifest.

        Raises:
            ManifestNotFoundError: path does not exist
            NotAFileError: path is a directory or other non-regular file
            PermissionDeniedError: file cannot be read
            InvalidEncodingError: file is not valid in the configured encoding
        """
        path = Path(file_path)
        if not path.exists():
            raise ManifestNotFoundError(str(path))
        if not path.is_file():
            raise NotAFileError(str(path))

        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except PermissionError as e:
            raise PermissionDeniedError(str(path), "reading") from e
        except IsADirectoryError as e:
            raise NotAFileError(str(path)) from e
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(str(path), self.encoding) from e

    def check_writable(self, file_path: Union[str, Path]) -> None:
        """
        Fail before any mutation work if the manifest cannot be replaced.

        Raises:
            PermissionDeniedError: file or its directory is not writable
        """
        path = Path(file_path)
        if not os.access(path, os.W_OK) or not os.access(path.parent, os.W_OK):
            raise PermissionDeniedError(str(path), "writing")

    def atomic_write(self, file_path: Union[str, Path], content: str) -> None:
        """
        Write file atomically using temp file + rename.

        The temp file lives in the target's directory so the rename never
        crosses filesystems. On failure the original file is untouched.

        Raises:
            PermissionDeniedError: temp file cannot be created or renamed
        """
        path = Path(file_path)

        try:
            fd, temp_path = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp"
            )
        except PermissionError as e:
            raise PermissionDeniedError(str(path), "writing") from e

        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
            if path.exists():
                shutil.copymode(str(path), temp_path)
            os.replace(temp_path, str(path))
        except BaseException as e:
            try:
                os.unlink(temp_path)
            except OSError:
                logger.warning(f"Could not remove temp file {temp_path}")
            if isinstance(e, PermissionError):
                raise PermissionDeniedError(str(path), "writing") from e
            raise

        logger.debug(f"Atomic write completed: {path}")

    def generate_unified_diff(
        self,
        file_path: str,
        original_content: str,
        modified_content: str,
    ) -> str:
        """
        Unified diff between original and modified content.

        Line endings are ignored when comparing so a CRLF file diffs cleanly.
        """
        original_lines = [line.rstrip("\r") for line in original_content.split("\n")]
        modified_lines = [line.rstrip("\r") for line in modified_content.split("\n")]

        diff_lines = difflib.unified_diff(
            original_lines,
            modified_lines,
            fromfile=f"a/{file_path}",
            tofile=f"b/{file_path}",
            lineterm=""
        )
        return "\n".join(diff_lines)
