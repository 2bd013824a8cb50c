"""Tests for source discovery and path helpers."""

import re
from pathlib import Path

import pytest

from incgraph.utils.path_utils import (
    compile_exclude,
    filename_matches,
    name_matches,
    normalize_path_separators,
    path_ends_with,
)
from incgraph.utils.scanner import normalize_extensions, scan_sources


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    for rel in (
        "main.cpp",
        "README.md",
        "lib/util.H",
        "lib/util.cc",
        "lib/test_util.cpp",
        "third/zlib.c",
        "third/zlib.hxx",
        ".git/hooks/sample.c",
    ):
        _touch(tmp_path / rel)
    return tmp_path


def _rel(root: Path, paths) -> list:
    return [p.relative_to(root).as_posix() for p in paths]


def test_scan_sources_filters_extensions(source_tree: Path) -> None:
    found = _rel(source_tree, scan_sources(source_tree))

    assert sorted(found) == [
        "lib/test_util.cpp",
        "lib/util.H",
        "lib/util.cc",
        "main.cpp",
        "third/zlib.c",
        "third/zlib.hxx",
    ]


def test_scan_sources_custom_extensions(source_tree: Path) -> None:
    found = _rel(source_tree, scan_sources(source_tree, extensions=[".c"]))

    assert found == ["third/zlib.c"]


def test_scan_sources_exclude_pattern(source_tree: Path) -> None:
    found = _rel(source_tree, scan_sources(source_tree, exclude=re.compile("test_|zlib")))

    assert sorted(found) == ["lib/util.H", "lib/util.cc", "main.cpp"]


def test_scan_sources_empty_directory(tmp_path: Path) -> None:
    assert list(scan_sources(tmp_path)) == []


def test_normalize_extensions() -> None:
    assert normalize_extensions([".CPP", "h", " ", "hpp "]) == {"cpp", "h", "hpp"}


def test_normalize_path_separators() -> None:
    assert normalize_path_separators("a\\b\\c.h").as_posix() == "a/b/c.h"
    assert normalize_path_separators("a/b.h").as_posix() == "a/b.h"


def test_filename_matches_only_checks_base_name() -> None:
    pattern = re.compile("^test_")

    assert filename_matches(pattern, "/src/tests/test_a.cpp")
    assert not filename_matches(pattern, "/src/test_dir/a.cpp")
    assert not filename_matches(None, "/src/test_a.cpp")


def test_name_matches_raw_spelling() -> None:
    assert name_matches(re.compile("gtest"), "gtest/gtest.h")
    assert not name_matches(None, "gtest/gtest.h")
    assert not name_matches(re.compile(".*"), "")


@pytest.mark.parametrize(
    "path, suffix, expected",
    [
        ("/src/net/socket.h", "socket.h", True),
        ("/src/net/socket.h", "net/socket.h", True),
        ("/src/net/websocket.h", "socket.h", False),
        ("/src/net/socket.h", "/src/net/socket.h", True),
        ("socket.h", "net/socket.h", False),
        ("gen\\version.h", "gen/version.h", True),
    ],
)
def test_path_ends_with(path: str, suffix: str, expected: bool) -> None:
    assert path_ends_with(path, suffix) is expected


def test_compile_exclude() -> None:
    assert compile_exclude(None) is None
    assert compile_exclude("") is None
    assert compile_exclude("a|b").pattern == "a|b"
    with pytest.raises(re.error):
        compile_exclude("(")


def test_scan_sources_relative_root_yields_absolute_paths(
    monkeypatch: pytest.MonkeyPatch, source_tree: Path
) -> None:
    monkeypatch.chdir(source_tree)

    found = list(scan_sources(Path("."), extensions=["c"]))

    assert found == [Path.cwd() / "third" / "zlib.c"]
