"""
ゴールIDを、所属するランク列の要件へ紐付ける。

振り分け規則:
- 列に "Substitutions" マーカーがあり、その行より下 -> substitutions
- 列に "Mandatory" マーカーがあり、その行より下 -> mandatory_goal_ids
- それ以外（マーカーなしを含む） -> goal_ids

同じ要件に同じゴールが複数回現れた場合は、より強い枠に1回だけ残す。
"""

from __future__ import annotations

import logging
from typing import Optional

from life4_ranks.markers import Markers
from life4_ranks.models import Requirement
from life4_ranks.requirements import RequirementTable

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "goal_ids"
MANDATORY_BUCKET = "mandatory_goal_ids"
SUBSTITUTIONS_BUCKET = "substitutions"

BUCKET_PRIORITY = {DEFAULT_BUCKET: 0, MANDATORY_BUCKET: 1, SUBSTITUTIONS_BUCKET: 2}


class Linker:
    def __init__(self, table: RequirementTable, markers: Markers):
        self.table = table
        self.markers = markers

    def bucket_for(self, col: int, row: int) -> str:
        """セル位置から追加先の枠名を決定する。"""
        substitutions_row = self.markers.substitutions.get(col)
        if substitutions_row is not None and row > substitutions_row:
            return SUBSTITUTIONS_BUCKET

        mandatory_row = self.markers.mandatory.get(col)
        if mandatory_row is not None and row > mandatory_row:
            return MANDATORY_BUCKET

        return DEFAULT_BUCKET

    def link(self, col: int, row: int, goal_id: int) -> Optional[str]:
        """
        ゴールIDを列の要件へ追加する。

        同じ要件に登録済みのIDは、より強い枠（substitutions > mandatory_goal_ids > goal_ids）
        への紐付けであれば移動し、そうでなければ追加しない（枠同士を互いに素に保つ）。

        Args:
            col: セルの列番号。
            row: セルの行番号。
            goal_id: レジストリで採番済みのゴールID。

        Returns:
            追加・移動した枠名。見出しの無い列、または登録済みの場合は None。
        """
        requirement = self.table.for_column(col)
        if requirement is None:
            return None

        bucket = self.bucket_for(col, row)
        current = _linked_bucket(requirement, goal_id)
        if current is not None:
            if BUCKET_PRIORITY[bucket] <= BUCKET_PRIORITY[current]:
                logger.debug(
                    "Goal %d already linked to %s.%s, skipped (row=%d, col=%d)",
                    goal_id,
                    requirement.rank,
                    current,
                    row,
                    col,
                )
                return None
            requirement.bucket(current).remove(goal_id)
            logger.debug(
                "Goal %d moved from %s to %s in %s (row=%d, col=%d)",
                goal_id,
                current,
                bucket,
                requirement.rank,
                row,
                col,
            )

        requirement.bucket(bucket).append(goal_id)
        return bucket


def _linked_bucket(requirement: Requirement, goal_id: int) -> Optional[str]:
    for name in (DEFAULT_BUCKET, MANDATORY_BUCKET, SUBSTITUTIONS_BUCKET):
        if goal_id in requirement.bucket(name):
            return name
    return None
