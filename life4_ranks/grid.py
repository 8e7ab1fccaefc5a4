"""
グリッド（シートの2次元文字列配列）への読み取り専用アクセス。

行の長さは揃っていなくてもよく、存在しないセルは空文字として扱う。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[str]]

_DIFFICULTY_CELL_RE = re.compile(r"^([0-9]{1,2})s$")
_NUMBER_CELL_RE = re.compile(r"^[0-9]+(?:,[0-9]{3})*$")


def cell_text(grid: Grid, row: int, col: int) -> str:
    """セルの文字列を前後空白除去して返す。範囲外は空文字。"""
    if row < 0 or row >= len(grid):
        return ""
    cells = grid[row]
    if col < 0 or col >= len(cells):
        return ""
    value = cells[col]
    if value is None:
        return ""
    return str(value).strip()


def is_empty_grid(grid: Optional[Grid]) -> bool:
    """グリッドが None、行なし、または全セル空の場合に True。"""
    if not grid:
        return True
    return not any(str(value or "").strip() for row in grid for value in row)


def parse_difficulty_cell(text: str) -> Optional[int]:
    """"12s" のような難易度見出しセルなら難易度を返す。"""
    match = _DIFFICULTY_CELL_RE.match(text)
    if not match:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class CellContext:
    """
    マッチ中のセル位置と、周辺セル参照のためのアクセサ。

    Attributes:
        grid: 走査対象のグリッド。
        row: セルの行番号。
        col: セルの列番号。
    """

    grid: Grid
    row: int
    col: int

    def difficulty_above(self) -> int:
        """
        同じ列を上方向へ走査し、最初に見つかった "<N>s" セルの難易度を返す。

        見つからない場合は警告を出して 0 を返す。
        """
        for row in range(self.row - 1, -1, -1):
            d = parse_difficulty_cell(cell_text(self.grid, row, self.col))
            if d is not None:
                return d

        logger.warning(
            "Difficulty header not found above cell (row=%d, col=%d)", self.row, self.col
        )
        return 0

    def value_below(self) -> int:
        """
        同じ列の1行下のセルを整数として返す。

        空または数値でない場合は警告を出して 0 を返す。
        """
        text = cell_text(self.grid, self.row + 1, self.col)
        if _NUMBER_CELL_RE.match(text):
            return int(text.replace(",", ""))

        logger.warning(
            "No numeric value below cell (row=%d, col=%d): %r", self.row, self.col, text
        )
        return 0
