"""Tests for include/exclude path eligibility."""

import re

import pytest

from todoissue.config.schema import FilterConfig
from todoissue.scanner.path_filter import PathFilter


class TestTruthTable:
    def test_no_lists_never_drops(self):
        pf = PathFilter()
        assert pf.is_eligible("vendor/lib.go")
        assert pf.is_eligible("src/main.go")

    def test_excluded_only(self):
        pf = PathFilter(excluded=["vendor/"])
        assert not pf.is_eligible("vendor/lib.go")
        assert pf.is_eligible("src/main.go")

    def test_included_only(self):
        pf = PathFilter(included=["src/"])
        assert pf.is_eligible("src/main.go")
        assert not pf.is_eligible("docs/readme.md")

    @pytest.mark.parametrize(
        "path, eligible",
        [
            ("vendor/ours/patch.go", True),   # excluded but allow-listed
            ("vendor/theirs/lib.go", False),  # excluded, not allow-listed
            ("src/main.go", True),            # neither
        ],
    )
    def test_included_is_exception_to_excluded(self, path, eligible):
        pf = PathFilter(included=["vendor/ours/"], excluded=["vendor/"])
        assert pf.is_eligible(path) is eligible


class TestMatching:
    def test_prefix_is_case_insensitive(self):
        pf = PathFilter(excluded=["Vendor/"])
        assert not pf.is_eligible("VENDOR/lib.go")

    def test_blank_entries_ignored(self):
        pf = PathFilter(excluded=["", "  "])
        assert pf.is_eligible("anything.go")

    def test_file_pattern_must_match(self):
        pf = PathFilter(file_pattern=re.compile(r"\.go$"))
        assert pf.is_eligible("src/main.go")
        assert not pf.is_eligible("src/main.py")

    def test_file_pattern_and_prefixes_both_apply(self):
        pf = PathFilter(excluded=["vendor/"], file_pattern=re.compile(r"\.go$"))
        assert not pf.is_eligible("vendor/lib.go")
        assert not pf.is_eligible("src/main.py")
        assert pf.is_eligible("src/main.go")

    def test_from_config(self):
        config = FilterConfig(excluded_paths=("vendor/",), file_pattern=r"\.go$")
        pf = PathFilter.from_config(config)
        assert not pf.is_eligible("vendor/a.go")
        assert pf.is_eligible("cmd/a.go")
