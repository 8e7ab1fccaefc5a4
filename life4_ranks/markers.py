"""
"Mandatory" / "Substitutions" マーカーセルの走査。

列ごとに最初のマーカーセルの行番号を記録する。
マーカーより下の行にあるゴールが、必須枠・代替枠の対象となる。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from life4_ranks.grid import Grid

MANDATORY_MARKER = "Mandatory"
SUBSTITUTIONS_MARKER = "Substitutions"


@dataclass
class Markers:
    """
    列番号 -> マーカー行番号 の対応。

    列が存在しない場合は「マーカーなし」を表す（行0ではない）。
    """

    mandatory: Dict[int, int] = field(default_factory=dict)
    substitutions: Dict[int, int] = field(default_factory=dict)


def scan_markers(grid: Grid) -> Markers:
    """
    グリッド全体を1回走査し、列ごとの最初のマーカー位置を返す。

    Args:
        grid: 走査対象のグリッド。

    Returns:
        Markers。
    """
    markers = Markers()
    for i, row in enumerate(grid):
        for j, value in enumerate(row):
            text = str(value or "").strip()
            if text == MANDATORY_MARKER:
                markers.mandatory.setdefault(j, i)
            elif text == SUBSTITUTIONS_MARKER:
                markers.substitutions.setdefault(j, i)
    return markers
