"""
Pytest configuration for the gemedit test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Temporary directory fixtures
- Sample Gemfile and gemspec manifests
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("GEMEDIT_MACHINE_MODE", "1")

from gemedit.logging_config import setup_logging  # noqa: E402


# ============================================================================
# SAMPLE MANIFESTS
# ============================================================================

SAMPLE_GEMFILE = """\
source 'https://rubygems.org'
ruby '3.2.2'

gem 'rails', '~> 7.0.0'
gem 'pg', '>= 0.18', '< 2.0'
gem 'bootsnap', require: false # boot faster

group :development, :test do
  gem 'rspec-rails'
  platforms :mri do
    gem 'byebug'
  end
end

group :test do
  gem 'capybara'
end

gem 'nokogiri', platforms: [:ruby, :mswin]
gem 'my_gem', git: 'https://github.com/me/my_gem.git'
"""

SAMPLE_GEMSPEC = """\
Gem::Specification.new do |spec|
  spec.name = "widget"
  spec.version = "1.0.0"
  spec.required_ruby_version = ">= 3.0"

  spec.add_dependency "activesupport", ">= 6.1"
  spec.add_development_dependency "rspec", "~> 3.12"
end
"""

EMPTY_GEMSPEC = """\
Gem::Specification.new do |s|
  s.name = "widget"
end
"""


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet, machine-friendly operation."""
    os.environ.setdefault("GEMEDIT_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, enable_file_logging=False, force=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Point config discovery at an empty location so user config never leaks in."""
    config_home = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("GEMEDIT_CONFIG", str(config_home / "missing.toml"))
    monkeypatch.setenv("HOME", str(config_home))


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="gemedit_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def gemfile(temp_dir):
    """A Gemfile with groups, nested platforms, options and comments."""
    path = temp_dir / "Gemfile"
    path.write_text(SAMPLE_GEMFILE)
    return path


@pytest.fixture
def gemspec(temp_dir):
    """A gemspec with one runtime and one development dependency."""
    path = temp_dir / "widget.gemspec"
    path.write_text(SAMPLE_GEMSPEC)
    return path


@pytest.fixture
def empty_gemspec(temp_dir):
    """A gemspec whose specification block has no dependencies."""
    path = temp_dir / "widget.gemspec"
    path.write_text(EMPTY_GEMSPEC)
    return path


# ============================================================================
# SKIP CONDITIONS
# ============================================================================

requires_non_root = pytest.mark.skipif(
    hasattr(os, "geteuid") and os.geteuid() == 0,
    reason="root bypasses file permission checks"
)
