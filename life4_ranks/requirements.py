"""
ランク見出し行からの要件（Requirement）生成。

- 1行目: ランク見出し。先頭の単語を小文字化し、同名ランクの出現順で連番を付与する
- 2行目: "Complete N" セルがあれば、その列の必要達成数とする
- 見出しの無い列は以降の処理対象外
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from life4_ranks.grid import Grid, cell_text
from life4_ranks.models import Requirement

HEADER_ROW = 0
COUNT_ROW = 1

_COMPLETE_RE = re.compile(r"^Complete ([0-9]+)")


@dataclass
class RequirementTable:
    """
    列順の要件一覧と、列番号からの索引。

    Attributes:
        requirements: 見出し列の出現順に並んだ Requirement。
        indices: 列番号 -> requirements のインデックス。
    """

    requirements: List[Requirement] = field(default_factory=list)
    indices: Dict[int, int] = field(default_factory=dict)

    def for_column(self, col: int) -> Optional[Requirement]:
        index = self.indices.get(col)
        if index is None:
            return None
        return self.requirements[index]


def rank_base_name(header: str) -> str:
    """見出し文字列の最初の空白までを小文字化して返す。"""
    return header.strip().split(" ")[0].lower()


def build_requirements(grid: Grid) -> RequirementTable:
    """
    見出し行と必要達成数の行から RequirementTable を生成する。

    Args:
        grid: 走査対象のグリッド。

    Returns:
        RequirementTable。
    """
    table = RequirementTable()
    rank_counts: Dict[str, int] = {}

    header_cells = grid[HEADER_ROW] if len(grid) > HEADER_ROW else []
    for col in range(len(header_cells)):
        name = rank_base_name(cell_text(grid, HEADER_ROW, col))
        if not name:
            continue
        rank_counts[name] = rank_counts.get(name, 0) + 1
        table.indices[col] = len(table.requirements)
        table.requirements.append(Requirement(rank=f"{name}{rank_counts[name]}"))

    count_cells = grid[COUNT_ROW] if len(grid) > COUNT_ROW else []
    for col in range(len(count_cells)):
        match = _COMPLETE_RE.match(cell_text(grid, COUNT_ROW, col))
        if not match:
            continue
        requirement = table.for_column(col)
        if requirement is not None:
            requirement.requirements = int(match.group(1))

    return table
