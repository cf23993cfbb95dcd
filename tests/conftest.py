"""Make ``src`` packages and ``scripts`` importable during tests without installation."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def repo_root() -> Path:
    return ROOT


@pytest.fixture(autouse=True)
def _clear_config_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TRIP_EMISSIONS_CONFIG_PATH", raising=False)
