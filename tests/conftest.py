"""Shared fixtures and helpers for tests."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from luaproc.config import Settings
from luaproc.core.ast import TypeDefinition, parse_source

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: every test under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


def parse_one(source: str) -> TypeDefinition:
    """Parse a Rust snippet holding exactly one struct or enum."""
    definitions = parse_source(textwrap.dedent(source).encode("utf-8"))
    assert len(definitions) == 1, definitions
    return definitions[0]


@pytest.fixture
def parse_rust() -> Callable[[str], TypeDefinition]:
    return parse_one


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a Lua script under tmp_path and return its path."""

    def _write(name: str, code: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(code), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(script_root=tmp_path)
