"""
ランク要件シートからのゴール抽出処理。

処理の流れ:
1. マーカーセルの走査（1回目の走査）
2. 見出し行・必要達成数の行から要件を生成
3. 2行目以降を行優先（上から下、左から右）で走査し、
   パターンマッチ -> レジストリ登録 -> 要件への紐付け を行う

走査順はゴールIDの採番順・要件内の並び順を決めるため、変更しないこと。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from life4_ranks.errors import NoDataError
from life4_ranks.export import build_document
from life4_ranks.grid import CellContext, Grid, cell_text, is_empty_grid
from life4_ranks.linker import Linker
from life4_ranks.markers import scan_markers
from life4_ranks.models import Goal, Requirement
from life4_ranks.patterns import match_cell
from life4_ranks.registry import GoalRegistry
from life4_ranks.requirements import COUNT_ROW, build_requirements

logger = logging.getLogger(__name__)


@dataclass
class Extraction:
    """
    1グリッド分の抽出結果。

    Attributes:
        goals: レジストリに登録済みの全ゴール（共有レジストリの場合は他グリッド分も含む）。
        requirements: 見出し列順の Requirement。
        matched_cells: ゴールとして認識したセル数。
        skipped_cells: 認識できなかった、または見出しの無い列にあったセル数。
    """

    goals: List[Goal]
    requirements: List[Requirement]
    matched_cells: int = 0
    skipped_cells: int = 0


def extract_requirements(grid: Optional[Grid], registry: Optional[GoalRegistry] = None) -> Extraction:
    """
    グリッドからゴールと要件を抽出する。

    Args:
        grid: シートの2次元文字列配列。行の長さは不揃いでもよい。
        registry: 使用するゴールレジストリ。省略時はこの呼び出し専用に生成する。

    Returns:
        Extraction。

    Raises:
        NoDataError: グリッドが None または空の場合。
    """
    if is_empty_grid(grid):
        raise NoDataError("No data found in sheet grid")

    if registry is None:
        registry = GoalRegistry()

    markers = scan_markers(grid)
    table = build_requirements(grid)
    linker = Linker(table, markers)

    matched = 0
    skipped = 0
    for row in range(COUNT_ROW, len(grid)):
        for col in range(len(grid[row])):
            text = cell_text(grid, row, col)
            if not text:
                continue

            if table.for_column(col) is None:
                skipped += 1
                continue

            result = match_cell(text, CellContext(grid, row, col))
            if result is None:
                skipped += 1
                continue

            goal_id = registry.register(result.goal)
            linker.link(col, row, goal_id)
            matched += 1

    logger.info(
        "Extracted %d requirements (matched=%d, skipped=%d, goals=%d)",
        len(table.requirements),
        matched,
        skipped,
        len(registry),
    )
    return Extraction(
        goals=registry.goals,
        requirements=table.requirements,
        matched_cells=matched,
        skipped_cells=skipped,
    )


def build_ranks(grids: Mapping[str, Grid], registry: Optional[GoalRegistry] = None) -> dict:
    """
    バージョン別のグリッドから、ゴール一覧を共有したランク要件ドキュメントを生成する。

    Args:
        grids: バージョン名 -> グリッド。挿入順に処理する。
        registry: 共有するゴールレジストリ。省略時はこの呼び出し専用に生成する。

    Returns:
        JSON化可能な dict（goals / game_versions）。

    Raises:
        NoDataError: いずれかのグリッドが空の場合。
    """
    if registry is None:
        registry = GoalRegistry()

    requirements_by_version: Dict[str, List[Requirement]] = {}
    for version, grid in grids.items():
        logger.info("Extracting rank requirements for %s", version)
        try:
            extraction = extract_requirements(grid, registry)
        except NoDataError as e:
            raise NoDataError(f"No data found for version {version}") from e
        requirements_by_version[version] = extraction.requirements

    return build_document(registry.goals, requirements_by_version)
