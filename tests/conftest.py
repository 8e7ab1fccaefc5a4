from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from life4_ranks.registry import GoalRegistry


def _pad(rows: list[list[str]]) -> list[list[str]]:
    width = max((len(row) for row in rows), default=0)
    return [list(row) + [""] * (width - len(row)) for row in rows]


@pytest.fixture
def registry() -> GoalRegistry:
    return GoalRegistry()


@pytest.fixture
def rank_grid() -> list[list[str]]:
    """
    3列構成（Gold, Gold, Silver）の小さなランク要件シート。

    - 1列目: 5行目に Mandatory、9行目に Substitutions
    - 4列目: 見出しなし（紐付け対象外）
    """
    return _pad(
        [
            ["Gold I", "Gold II", "Silver I", ""],
            ["Complete 2", "Complete 3", "", ""],
            ["Clear 3 12s", "Burn 500", "Clear 3 12s", "Clear 9 9s"],
            ["12s", "Earn Gold or above on 2 Trials", "14s", "Burn 900"],
            ["990k Average", "Clear 4 14s in a row", "990k+ on PARANOiA", ""],
            ["Mandatory", "Hello there", "Gold Lamp", ""],
            ["All 12s over 980k (5E)", "MA Points", "", ""],
            ["Clear 3 12s", "30", "", ""],
            ["Burn 500", "", "", ""],
            ["Substitutions", "", "", ""],
            ["987k+ a 14+", "", "", ""],
        ]
    )


@pytest.fixture
def pad_grid():
    return _pad
