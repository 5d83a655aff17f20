"""Tests for ManifestEditor file access."""

import os
import stat

import pytest

from gemedit.exceptions import (
    InvalidEncodingError,
    ManifestNotFoundError,
    NotAFileError,
    PermissionDeniedError,
)
from gemedit.manifest.editor import ManifestEditor

from .conftest import requires_non_root


class TestReadText:

    def test_preserves_crlf(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_bytes(b"gem 'rails'\r\ngem 'pg'\r\n")
        assert ManifestEditor().read_text(path) == "gem 'rails'\r\ngem 'pg'\r\n"

    def test_missing_file(self, temp_dir):
        with pytest.raises(ManifestNotFoundError) as exc_info:
            ManifestEditor().read_text(temp_dir / "Gemfile")
        assert exc_info.value.code == "file_not_found"
        assert str(temp_dir / "Gemfile") in str(exc_info.value)

    def test_directory(self, temp_dir):
        with pytest.raises(NotAFileError):
            ManifestEditor().read_text(temp_dir)

    def test_invalid_utf8(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_bytes(b"gem 'rails'\n# caf\xe9\n")
        with pytest.raises(InvalidEncodingError) as exc_info:
            ManifestEditor().read_text(path)
        assert exc_info.value.code == "invalid_encoding"
        assert str(path) in str(exc_info.value)

    @requires_non_root
    def test_unreadable(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_text("gem 'rails'\n")
        path.chmod(0)
        try:
            with pytest.raises(PermissionDeniedError):
                ManifestEditor().read_text(path)
        finally:
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestAtomicWrite:

    def test_replaces_content(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_text("gem 'rails'\n")

        ManifestEditor().atomic_write(path, "gem 'rails', '~> 7.0'\n")

        assert path.read_text() == "gem 'rails', '~> 7.0'\n"
        assert [p.name for p in temp_dir.iterdir()] == ["Gemfile"]

    def test_writes_crlf_verbatim(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_bytes(b"")
        ManifestEditor().atomic_write(path, "gem 'rails'\r\n")
        assert path.read_bytes() == b"gem 'rails'\r\n"

    def test_keeps_file_mode(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_text("gem 'rails'\n")
        path.chmod(0o640)

        ManifestEditor().atomic_write(path, "gem 'puma'\n")

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o640

    @requires_non_root
    def test_check_writable(self, temp_dir):
        path = temp_dir / "Gemfile"
        path.write_text("gem 'rails'\n")
        path.chmod(stat.S_IRUSR)
        try:
            with pytest.raises(PermissionDeniedError) as exc_info:
                ManifestEditor().check_writable(path)
            assert exc_info.value.code == "permission_denied"
        finally:
            path.chmod(stat.S_IRUSR | stat.S_IWUSR)


class TestUnifiedDiff:

    def test_diff_shows_changed_line(self):
        diff = ManifestEditor().generate_unified_diff(
            "Gemfile",
            "source 'https://rubygems.org'\ngem 'rails'\n",
            "source 'https://rubygems.org'\ngem 'rails', '~> 7.0.0'\n",
        )
        assert "--- a/Gemfile" in diff
        assert "+++ b/Gemfile" in diff
        assert "-gem 'rails'" in diff
        assert "+gem 'rails', '~> 7.0.0'" in diff

    def test_identical_content(self):
        assert ManifestEditor().generate_unified_diff("Gemfile", "gem 'x'\n", "gem 'x'\n") == ""
