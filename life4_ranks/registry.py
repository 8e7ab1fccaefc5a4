"""
ゴールレジストリ。

意味的に同一のゴールを1つのエンティティへ集約し、カテゴリごとに
予約したID帯域から連番でIDを採番する。

処理方針:
- 同一判定はゴール種別ごとのキー関数で行う（id は比較対象外）
- None は「省略」を表し、None 同士のみ等しい
- 登録順（グリッドの行優先走査順）がそのまま採番順になる
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Dict, Hashable, Iterator, List, Optional, Tuple

from life4_ranks.errors import GoalBandOverflowError
from life4_ranks.models import (
    CaloriesGoal,
    DIFFICULTY_BANDED_GOALS,
    Goal,
    MAPointsGoal,
    SetGoal,
    SongsAverageGoal,
    SongsCountGoal,
    SongsFolderGoal,
    SongsLampGoal,
    SongsSpecificGoal,
    TrialGoal,
)

logger = logging.getLogger(__name__)

BAND_WIDTH = 500

# カテゴリ -> 帯域の開始ID
BAND_STARTS = {
    "calories": 1000,
    "songs_diff_class": 2000,
    "set": 3000,
    "trial": 4000,
    "ma_points": 5000,
    "songs1_9": 6000,
    "songs10_11": 6500,
    "songs12_13": 7000,
    "songs14": 7500,
    "songs15": 8000,
    "songs16": 8500,
    "songs17": 9000,
    "songs18": 9500,
    "songs19": 10000,
}

_CATEGORY_BY_TYPE = {
    CaloriesGoal: "calories",
    SongsSpecificGoal: "songs_diff_class",
    SetGoal: "set",
    TrialGoal: "trial",
    MAPointsGoal: "ma_points",
}


def difficulty_band(d: int) -> str:
    """難易度から帯域名を返す。"""
    if d < 10:
        return "songs1_9"
    if d < 12:
        return "songs10_11"
    if d < 14:
        return "songs12_13"
    return f"songs{d}"


def band_start(band: str) -> int:
    """帯域の開始IDを返す。"songs20" 以上は500刻みで延長する。"""
    if band in BAND_STARTS:
        return BAND_STARTS[band]
    d = int(band[len("songs"):])
    return BAND_STARTS["songs19"] + BAND_WIDTH * (d - 19)


def band_for(goal: Goal) -> str:
    """ゴールが属する帯域名を返す。"""
    if isinstance(goal, DIFFICULTY_BANDED_GOALS):
        return difficulty_band(goal.d)
    return _CATEGORY_BY_TYPE[type(goal)]


def band_range(goal: Goal) -> range:
    """ゴールのIDが収まるべき範囲を返す。"""
    start = band_start(band_for(goal))
    return range(start, start + BAND_WIDTH)


def _calories_key(goal: CaloriesGoal) -> Tuple:
    return (goal.count,)


def _trial_key(goal: TrialGoal) -> Tuple:
    return (goal.rank, goal.count)


def _set_key(goal: SetGoal) -> Tuple:
    return (tuple(goal.diff_nums), goal.higher_diff)


def _ma_points_key(goal: MAPointsGoal) -> Tuple:
    return (goal.points,)


def _lamp_key(goal: SongsLampGoal) -> Tuple:
    return (goal.d, goal.clear_type)


def _count_key(goal: SongsCountGoal) -> Tuple:
    return (
        goal.d,
        goal.song_count,
        goal.clear_type,
        goal.score,
        goal.higher_diff,
        goal.exceptions,
        goal.exception_score,
    )


def _average_key(goal: SongsAverageGoal) -> Tuple:
    return (goal.d, goal.average_score)


def _folder_key(goal: SongsFolderGoal) -> Tuple:
    song_exceptions = tuple(goal.song_exceptions) if goal.song_exceptions is not None else None
    return (goal.d, goal.score, goal.exceptions, goal.exception_score, song_exceptions)


def _specific_key(goal: SongsSpecificGoal) -> Tuple:
    return (goal.d, goal.diff_class, goal.score, tuple(goal.songs))


_KEY_FUNCTIONS: Dict[type, Callable[..., Tuple]] = {
    CaloriesGoal: _calories_key,
    TrialGoal: _trial_key,
    SetGoal: _set_key,
    MAPointsGoal: _ma_points_key,
    SongsLampGoal: _lamp_key,
    SongsCountGoal: _count_key,
    SongsAverageGoal: _average_key,
    SongsFolderGoal: _folder_key,
    SongsSpecificGoal: _specific_key,
}


def goal_key(goal: Goal) -> Tuple[type, Hashable]:
    """
    ゴールの同一判定キーを返す。

    種別とその種別の意味的な項目のみから構成し、id は含めない。
    """
    return (type(goal), _KEY_FUNCTIONS[type(goal)](goal))


def same_goal(a: Goal, b: Goal) -> bool:
    """2つのゴールが id を除いて構造的に等しいか判定する。"""
    return goal_key(a) == goal_key(b)


class GoalRegistry:
    """
    ゴールの重複排除と採番を行う、追記専用のレジストリ。

    複数バージョンのシートで同じゴール一覧を共有したい場合は、
    同じインスタンスを各抽出処理へ渡す。
    """

    def __init__(self):
        self._goals: List[Goal] = []
        self._ids_by_key: Dict[Tuple[type, Hashable], int] = {}
        self._goals_by_id: Dict[int, Goal] = {}
        self._next_ids: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._goals)

    def __iter__(self) -> Iterator[Goal]:
        return iter(self._goals)

    @property
    def goals(self) -> List[Goal]:
        """登録順のゴール一覧（コピー）。"""
        return list(self._goals)

    def get(self, goal_id: int) -> Optional[Goal]:
        return self._goals_by_id.get(goal_id)

    def find(self, descriptor: Goal) -> Optional[int]:
        """同一のゴールが登録済みならそのIDを返す。"""
        return self._ids_by_key.get(goal_key(descriptor))

    def _allocate(self, band: str) -> int:
        start = band_start(band)
        next_id = self._next_ids.get(band, start)
        if next_id >= start + BAND_WIDTH:
            raise GoalBandOverflowError(f"Goal id band exhausted: {band} ({start}..)")
        self._next_ids[band] = next_id + 1
        return next_id

    def register(self, descriptor: Goal) -> int:
        """
        ゴール記述子を登録し、IDを返す。

        同一のゴールが登録済みであれば既存のIDを返し、新規登録は行わない。

        Args:
            descriptor: id 未採番のゴール記述子。

        Returns:
            ゴールID。

        Raises:
            GoalBandOverflowError: 帯域のIDを使い切った場合。
        """
        key = goal_key(descriptor)
        existing = self._ids_by_key.get(key)
        if existing is not None:
            return existing

        goal_id = self._allocate(band_for(descriptor))
        goal = dataclasses.replace(descriptor, id=goal_id)

        self._goals.append(goal)
        self._ids_by_key[key] = goal_id
        self._goals_by_id[goal_id] = goal

        logger.debug("Registered goal %d: %r", goal_id, goal)
        return goal_id
