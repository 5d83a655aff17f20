"""Tests for ManifestReader."""

from gemedit.manifest.reader import ManifestReader, detect_kind
from gemedit.schemas import ManifestKind

from .conftest import EMPTY_GEMSPEC, SAMPLE_GEMFILE, SAMPLE_GEMSPEC


class TestDetectKind:

    def test_by_name(self):
        assert detect_kind("Gemfile", "") == ManifestKind.GEMFILE
        assert detect_kind("gems.rb", "") == ManifestKind.GEMFILE
        assert detect_kind("rails7.gemfile", "") == ManifestKind.GEMFILE
        assert detect_kind("pkg/widget.gemspec", "") == ManifestKind.GEMSPEC

    def test_by_content(self):
        assert detect_kind("deps.rb", EMPTY_GEMSPEC) == ManifestKind.GEMSPEC
        assert detect_kind("deps.rb", "gem 'rails'\n") == ManifestKind.GEMFILE


class TestParseGemfile:

    def setup_method(self):
        self.document = ManifestReader().parse(SAMPLE_GEMFILE, "Gemfile")

    def test_header(self):
        assert self.document.kind == ManifestKind.GEMFILE
        assert self.document.source == "https://rubygems.org"
        assert self.document.ruby_version == "3.2.2"

    def test_declarations_in_file_order(self):
        names = [gem.name for gem in self.document.gems]
        assert names == [
            "rails", "pg", "bootsnap", "rspec-rails", "byebug", "capybara", "nokogiri", "my_gem",
        ]

    def test_requirements(self):
        assert self.document.find("rails").requirement == "~> 7.0.0"
        assert self.document.find("pg").requirement == ">= 0.18, < 2.0"
        assert self.document.find("capybara").requirement is None

    def test_line_numbers(self):
        assert self.document.find("rails").line == 4
        assert self.document.find("rspec-rails").line == 9

    def test_group_blocks(self):
        assert self.document.find("rails").groups == []
        assert self.document.find("rspec-rails").groups == ["development", "test"]
        assert self.document.find("capybara").groups == ["test"]

    def test_nested_platforms_block(self):
        byebug = self.document.find("byebug")
        assert byebug.groups == ["development", "test"]
        assert byebug.platforms == ["mri"]

    def test_inline_options(self):
        assert self.document.find("bootsnap").require is False
        assert self.document.find("nokogiri").platforms == ["ruby", "mswin"]
        assert self.document.find("my_gem").source == "https://github.com/me/my_gem.git"

    def test_blocks_closed_after_end(self):
        assert self.document.find("nokogiri").groups == []

    def test_inline_group_option(self):
        document = ManifestReader().parse("gem 'pry', group: [:development, :test]\n", "Gemfile")
        assert document.gems[0].groups == ["development", "test"]

    def test_conditional_block_does_not_close_group(self):
        content = (
            "group :test do\n"
            "  if ENV['CI']\n"
            "    gem 'simplecov'\n"
            "  end\n"
            "  gem 'webmock'\n"
            "end\n"
            "gem 'puma'\n"
        )
        document = ManifestReader().parse(content, "Gemfile")
        assert document.find("simplecov").groups == ["test"]
        assert document.find("webmock").groups == ["test"]
        assert document.find("puma").groups == []

    def test_single_line_conditional_does_not_open_block(self):
        content = (
            "group :test do\n"
            "  if ENV['CI'] then gem 'ci_reporter' end\n"
            "  gem 'rspec'\n"
            "end\n"
            "gem 'rails'\n"
        )
        document = ManifestReader().parse(content, "Gemfile")
        assert document.find("rspec").groups == ["test"]
        assert document.find("rails").groups == []

    def test_source_block(self):
        content = (
            "source 'https://rubygems.org'\n"
            "source 'https://gems.example.com' do\n"
            "  gem 'private_gem'\n"
            "end\n"
            "gem 'rake'\n"
        )
        document = ManifestReader().parse(content, "Gemfile")
        assert document.source == "https://rubygems.org"
        assert document.find("private_gem").source == "https://gems.example.com"
        assert document.find("rake").source is None

    def test_comments_and_unknown_lines_skipped(self):
        content = "# gem 'commented'\nplugin 'bootboot'\ngemspec\ngem 'rake'\n"
        document = ManifestReader().parse(content, "Gemfile")
        assert [gem.name for gem in document.gems] == ["rake"]

    def test_crlf(self):
        document = ManifestReader().parse("gem 'rails', '~> 7.0'\r\ngem 'pg'\r\n", "Gemfile")
        assert document.find("rails").requirement == "~> 7.0"
        assert document.find("pg") is not None


class TestParseGemspec:

    def test_dependencies(self):
        document = ManifestReader().parse(SAMPLE_GEMSPEC, "widget.gemspec")
        assert document.kind == ManifestKind.GEMSPEC
        assert document.ruby_version == ">= 3.0"

        activesupport = document.find("activesupport")
        assert activesupport.requirement == ">= 6.1"
        assert activesupport.groups == []

        rspec = document.find("rspec")
        assert rspec.requirement == "~> 3.12"
        assert rspec.groups == ["development"]

    def test_runtime_dependency_alias(self):
        content = "Gem::Specification.new do |s|\n  s.add_runtime_dependency 'rack'\nend\n"
        document = ManifestReader().parse(content, "x.gemspec")
        assert document.find("rack").groups == []
        assert document.find("rack").line == 2
