"""
Root conftest.py: shared fixtures and custom markers.

Markers:
  @pytest.mark.stress   long randomized runs; skipped unless --stress or CHAT_TUI_STRESS=1
"""
from __future__ import annotations

import os
import random

import pytest


# ---------------------------------------------------------------------------
# Custom markers
# ---------------------------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "stress: long randomized test (run with CHAT_TUI_STRESS=1 or --stress flag)",
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--stress",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.stress",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip @pytest.mark.stress tests unless --stress flag or CHAT_TUI_STRESS=1 is set."""
    run_stress = config.getoption("--stress") or os.environ.get("CHAT_TUI_STRESS", "").lower() in ("1", "true", "yes")
    skip_stress = pytest.mark.skip(reason="Stress test, run with --stress or CHAT_TUI_STRESS=1")
    for item in items:
        if "stress" in item.keywords and not run_stress:
            item.add_marker(skip_stress)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source for property tests."""
    return random.Random(int(os.environ.get("CHAT_TUI_SEED", "1234")))


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> dict[str, str]:
    """Isolate settings lookups from the user's environment and home directory."""
    for name in ("CHAT_TUI_CONFIG_DIR", "CHAT_TUI_GAP", "CHAT_TUI_WHEEL_LINES", "CHAT_TUI_FOLLOW"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    return {}
