"""Tests for project packaging metadata."""

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_design_notes_are_not_the_long_description() -> None:
    project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]

    assert project.get("readme") != "DESIGN.md"
    assert project["scripts"]["incgraph"] == "incgraph.main:main"
