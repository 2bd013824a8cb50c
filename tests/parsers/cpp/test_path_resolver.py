"""Tests for include path resolution."""

from pathlib import Path

import pytest

from incgraph.parsers.cpp.path_resolver import PathResolver, resolve_include


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")
    return path


def test_local_directory_wins_over_search_paths(tmp_path: Path) -> None:
    src = tmp_path / "src"
    inc = tmp_path / "include"
    local = _touch(src / "config.h")
    _touch(inc / "config.h")

    assert resolve_include("config.h", src, [inc]) == local


def test_search_paths_are_tried_in_order(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    first = tmp_path / "first"
    second = tmp_path / "second"
    _touch(second / "lib.h")
    expected = _touch(first / "lib.h")

    assert resolve_include("lib.h", src, [first, second]) == expected
    assert resolve_include("lib.h", src, [second, first]) == second / "lib.h"


def test_unresolvable_reference_returns_none(tmp_path: Path) -> None:
    assert resolve_include("missing.h", tmp_path, [tmp_path / "nope"]) is None


def test_backslash_separators_are_normalized(tmp_path: Path) -> None:
    target = _touch(tmp_path / "sub" / "dir" / "util.h")

    resolved = resolve_include("sub\\dir\\util.h", tmp_path)

    assert resolved == target


def test_dotdot_segments_are_not_collapsed(tmp_path: Path) -> None:
    _touch(tmp_path / "common.h")
    sub = tmp_path / "sub"
    sub.mkdir()

    resolved = resolve_include("../common.h", sub)

    assert resolved == sub / ".." / "common.h"
    assert resolved != tmp_path / "common.h"


def test_resolver_memoizes_results(tmp_path: Path) -> None:
    resolver = PathResolver([tmp_path / "inc"])
    assert resolver.resolve("late.h", tmp_path) is None

    # A cached miss stays a miss for the lifetime of the resolver.
    _touch(tmp_path / "late.h")
    assert resolver.resolve("late.h", tmp_path) is None
    assert resolver.cache_size() == 1

    assert PathResolver([tmp_path / "inc"]).resolve("late.h", tmp_path) == tmp_path / "late.h"


def test_empty_spelling_never_resolves(tmp_path: Path) -> None:
    assert resolve_include("", tmp_path, [tmp_path]) is None


def test_relative_search_paths_are_absolutized(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _touch(tmp_path / "inc" / "lib.h")
    (tmp_path / "src").mkdir()
    monkeypatch.chdir(tmp_path)
    cwd = Path.cwd()

    resolver = PathResolver(["inc"])

    assert resolver.search_paths == [cwd / "inc"]
    assert resolver.resolve("lib.h", cwd / "src") == cwd / "inc" / "lib.h"
