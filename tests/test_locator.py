"""Tests for declaration lookup and block matching."""

from gemedit.manifest.locator import (
    find_block_end,
    find_declaration_line,
    find_declaration_lines,
    find_group_block,
    find_spec_boundary,
)
from gemedit.schemas import ManifestKind

from .conftest import EMPTY_GEMSPEC, SAMPLE_GEMFILE, SAMPLE_GEMSPEC


def lines_of(text):
    return text.split("\n")


class TestFindDeclaration:

    def test_finds_indented_declaration(self):
        lines = lines_of(SAMPLE_GEMFILE)
        assert find_declaration_line(lines, "byebug") == 10

    def test_exact_name_match(self):
        lines = ["gem 'rspec-rails'", "gem 'rspec'"]
        assert find_declaration_line(lines, "rspec") == 1

    def test_comment_is_not_a_declaration(self):
        lines = ["# gem 'rails'", "gem 'rails'"]
        assert find_declaration_line(lines, "rails") == 1

    def test_missing(self):
        assert find_declaration_line(lines_of(SAMPLE_GEMFILE), "sidekiq") is None

    def test_first_duplicate_wins(self):
        lines = ["gem 'pry'", "group :test do", "  gem 'pry'", "end"]
        assert find_declaration_lines(lines, "pry") == [0, 2]
        assert find_declaration_line(lines, "pry") == 0

    def test_gemspec_kind(self):
        lines = lines_of(SAMPLE_GEMSPEC)
        assert find_declaration_line(lines, "rspec", ManifestKind.GEMSPEC) == 6
        assert find_declaration_line(lines, "rspec", ManifestKind.GEMFILE) is None


class TestBlockMatching:

    def test_nested_block_ends_at_outer_end(self):
        lines = lines_of(SAMPLE_GEMFILE)
        # group :development, :test do ... platforms :mri do ... end ... end
        assert find_block_end(lines, 7) == 12

    def test_unclosed_block(self):
        assert find_block_end(["group :test do", "  gem 'x'"], 0) is None

    def test_find_group_block(self):
        span = find_group_block(lines_of(SAMPLE_GEMFILE), ["development", "test"])
        assert span.start_line == 7
        assert span.end_line == 12
        assert span.indentation == ""

    def test_group_order_matters(self):
        assert find_group_block(lines_of(SAMPLE_GEMFILE), ["test", "development"]) is None

    def test_single_group_does_not_match_group_list(self):
        span = find_group_block(lines_of(SAMPLE_GEMFILE), ["test"])
        assert span.start_line == 14
        assert span.end_line == 16

    def test_block_with_conditional(self):
        lines = [
            "group :test do",
            "  if ENV['CI']",
            "    gem 'simplecov'",
            "  end",
            "  gem 'webmock'",
            "end",
        ]
        assert find_group_block(lines, ["test"]).end_line == 5

    def test_single_line_conditional_inside_group(self):
        lines = [
            "group :test do",
            "  if ENV['CI'] then gem 'x' end",
            "  gem 'rspec'",
            "end",
            "",
            "gem 'rails'",
        ]
        assert find_block_end(lines, 0) == 3
        assert find_group_block(lines, ["test"]).end_line == 3


class TestSpecBoundary:

    def test_with_dependencies(self):
        boundary = find_spec_boundary(lines_of(SAMPLE_GEMSPEC))
        assert boundary.last_dependency_line == 6
        assert boundary.block_start_line == 0
        assert boundary.block_end_line == 7
        assert boundary.receiver == "spec"

    def test_empty_block(self):
        boundary = find_spec_boundary(lines_of(EMPTY_GEMSPEC))
        assert boundary.last_dependency_line is None
        assert boundary.block_end_line == 2
        assert boundary.receiver == "s"

    def test_nested_block_inside_spec(self):
        lines = [
            "Gem::Specification.new do |spec|",
            "  spec.files = Dir.chdir(__dir__) do",
            "    `git ls-files -z`.split(\"\\x0\")",
            "  end",
            "end",
        ]
        assert find_spec_boundary(lines).block_end_line == 4

    def test_no_block(self):
        boundary = find_spec_boundary(["# nothing here"])
        assert boundary.block_start_line is None
        assert boundary.block_end_line is None
