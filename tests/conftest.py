"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from goxgettext.models.keywords import KeywordTable
from goxgettext.parser.base import SourceFile, parse_source


@pytest.fixture
def keywords() -> KeywordTable:
    """Default keyword table (gettext.Gettext / NGettext / NCGettext)."""
    return KeywordTable.from_names()


@pytest.fixture
def parse_go() -> Callable[..., SourceFile]:
    """Parse Go source text into a SourceFile."""

    def _parse(code: str, filename: str = "main.go") -> SourceFile:
        return parse_source(code.encode("utf-8"), filename)

    return _parse


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a Go source file into the temp directory."""

    def _write(name: str, code: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_go_file(write_go: Callable[[str, str], Path]) -> Path:
    """A small Go program using all three default keywords."""
    return write_go(
        "sample.go",
        '''package main

import (
	"fmt"

	"github.com/snapcore/go-gettext"
)

func main() {
	// TRANSLATORS: shown on startup
	fmt.Println(gettext.Gettext("Hello, World!"))

	n := 3
	fmt.Printf(gettext.NGettext("%d file", "%d files", n), n)

	fmt.Println(gettext.NCGettext("menu", "Open"))
}
''',
    )
