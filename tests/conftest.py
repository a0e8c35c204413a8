"""Shared test fixtures: sample diffs, configs, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from todoissue.config.schema import FilterConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep CI runner variables from leaking into config loading."""
    for name in (
        "GITHUB_REPOSITORY",
        "GITHUB_SHA",
        "GITHUB_TOKEN",
        "INPUT_REPOSITORY",
        "INPUT_SHA",
        "INPUT_BASE_SHA",
        "INPUT_TOKEN",
        "INPUT_TODO",
        "INPUT_COMMENT",
        "INPUT_TRIM",
        "INPUT_NOPUBLISH",
        "INPUT_TIMEOUT",
        "INPUT_LINES_BEFORE",
        "INPUT_LINES_AFTER",
        "INPUT_LABELS_PATTERN",
        "INPUT_LABELS_REPLACE_PATTERN",
        "INPUT_GITHUB_LABEL",
        "INPUT_INCLUDED_PATHS",
        "INPUT_EXCLUDED_PATHS",
        "INPUT_FILE_PATTERN",
        "INPUT_MAX_LINE_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def filter_config() -> FilterConfig:
    return FilterConfig(repository="octo/repo", sha="abc123")


@pytest.fixture
def sample_diff_clean() -> str:
    """A diff with no markers."""
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,3 @@
        +def greet(name):
        +    return f"Hello, {name}!"
        +
    """)


@pytest.fixture
def sample_diff_added_todo() -> str:
    """A Go file gaining one TODO after a context line."""
    return textwrap.dedent("""\
        diff --git a/src/foo.go b/src/foo.go
        index 1234567..abcdef0 100644
        --- a/src/foo.go
        +++ b/src/foo.go
        @@ -10,5 +12,7 @@
         context
        + // TODO fix bug
    """)


@pytest.fixture
def sample_diff_moved_todo() -> str:
    """One TODO removed from main.go and another added in util.go."""
    return textwrap.dedent("""\
        diff --git a/main.go b/main.go
        index 1111111..2222222 100644
        --- a/main.go
        +++ b/main.go
        @@ -5,4 +5,3 @@
         func main() {
        -\t// TODO old task
         \trun()
         }
        diff --git a/util.go b/util.go
        index 3333333..4444444 100644
        --- a/util.go
        +++ b/util.go
        @@ -1,3 +1,5 @@
         package util
        +
        +// TODO: add caching
         func helper() {}
    """)


@pytest.fixture
def sample_diff_vendor() -> str:
    """A marker in a vendored file followed by one in project code."""
    return textwrap.dedent("""\
        diff --git a/vendor/lib.go b/vendor/lib.go
        index 1111111..2222222 100644
        --- a/vendor/lib.go
        +++ b/vendor/lib.go
        @@ -1,2 +1,3 @@
         package lib
        +// TODO vendored task
         func x() {}
        diff --git a/app/main.go b/app/main.go
        index 3333333..4444444 100644
        --- a/app/main.go
        +++ b/app/main.go
        @@ -3,2 +3,3 @@
         package main
        +// TODO project task
         func y() {}
    """)


@pytest.fixture
def sample_diff_snippet() -> str:
    """Tab-indented code around a new TODO."""
    return (
        "diff --git a/svc/handler.go b/svc/handler.go\n"
        "index 1111111..2222222 100644\n"
        "--- a/svc/handler.go\n"
        "+++ b/svc/handler.go\n"
        "@@ -20,6 +20,7 @@ func Handle() {\n"
        " \t\tif err != nil {\n"
        " \t\t\treturn err\n"
        " \t\t}\n"
        "+\t\t// TODO: validate input\n"
        " \n"
        " \t\treturn nil\n"
        " \t}\n"
    )


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path
