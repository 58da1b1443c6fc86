"""Shared fixtures for parser tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# --- Text fixtures (generated by scripts/generate_festival.py, anonymized) ---

@pytest.fixture
def roster_text():
    path = FIXTURES_DIR / "startliste.txt"
    return path.read_text(encoding="utf-8")


@pytest.fixture
def standing_text():
    path = FIXTURES_DIR / "rangliste-gang4.txt"
    return path.read_text(encoding="utf-8")
