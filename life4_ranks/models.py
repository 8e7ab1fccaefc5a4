"""
データモデル定義モジュール。

シートから抽出したゴール（達成条件）と、ランク列ごとの要件
（Requirement）を定義する。

- ゴールは種類ごとに frozen dataclass として表現する
- id はレジストリ登録時に採番される（登録前の記述子は id=None）
- 省略可能な項目は None を「未指定」として扱い、JSON出力では省略する
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Tuple, Union

PLAY_STYLE = "single"

# ランプ色 -> クリア種別
CLEAR_TYPES_BY_COLOR = {
    "Red": "life4",
    "Blue": "good",
    "Green": "great",
    "Gold": "perfect",
}


@dataclass(frozen=True)
class CaloriesGoal:
    """1日でNカロリー消費する。"""

    count: int
    id: Optional[int] = None

    t: ClassVar[str] = "calories"


@dataclass(frozen=True)
class TrialGoal:
    """Trialで指定ランク以上をN回獲得する。"""

    rank: str
    count: int
    id: Optional[int] = None

    t: ClassVar[str] = "trial"


@dataclass(frozen=True)
class SetGoal:
    """
    指定難易度の曲を連続でクリアする。

    diff_nums はプレイ順の難易度列。
    """

    diff_nums: Tuple[int, ...]
    higher_diff: Optional[bool] = None
    id: Optional[int] = None

    t: ClassVar[str] = "set"


@dataclass(frozen=True)
class MAPointsGoal:
    """大会ポイントをN点獲得する。"""

    points: int
    id: Optional[int] = None

    t: ClassVar[str] = "ma_points"


@dataclass(frozen=True)
class SongsLampGoal:
    """難易度dフォルダのランプ（クリア種別のみ、スコア・曲数なし）。"""

    d: int
    clear_type: Optional[str] = None
    id: Optional[int] = None

    t: ClassVar[str] = "songs"


@dataclass(frozen=True)
class SongsCountGoal:
    """
    難易度dの曲をN曲クリア、またはスコア達成する。

    exceptions/exception_score は、指定数までの曲を
    緩い基準(exception_score)で許容する例外条項。
    """

    d: int
    song_count: int
    clear_type: Optional[str] = None
    score: Optional[int] = None
    higher_diff: Optional[bool] = None
    exceptions: Optional[int] = None
    exception_score: Optional[int] = None
    id: Optional[int] = None

    t: ClassVar[str] = "songs"


@dataclass(frozen=True)
class SongsAverageGoal:
    """難易度dフォルダの平均スコア。"""

    d: int
    average_score: int
    id: Optional[int] = None

    t: ClassVar[str] = "songs"


@dataclass(frozen=True)
class SongsFolderGoal:
    """
    難易度dフォルダの全曲でスコア達成する。

    song_exceptions は対象外（または別基準）となる曲名の一覧。
    """

    d: int
    score: int
    exceptions: Optional[int] = None
    exception_score: Optional[int] = None
    song_exceptions: Optional[Tuple[str, ...]] = None
    id: Optional[int] = None

    t: ClassVar[str] = "songs"


@dataclass(frozen=True)
class SongsSpecificGoal:
    """指定した曲でスコア達成する。"""

    d: int
    diff_class: str
    score: int
    songs: Tuple[str, ...]
    id: Optional[int] = None

    t: ClassVar[str] = "songs"


Goal = Union[
    CaloriesGoal,
    TrialGoal,
    SetGoal,
    MAPointsGoal,
    SongsLampGoal,
    SongsCountGoal,
    SongsAverageGoal,
    SongsFolderGoal,
    SongsSpecificGoal,
]

# 難易度帯でID採番するゴール
DIFFICULTY_BANDED_GOALS = (
    SongsLampGoal,
    SongsCountGoal,
    SongsAverageGoal,
    SongsFolderGoal,
)


@dataclass
class Requirement:
    """
    1ランク列分の要件。

    goal_ids/mandatory_goal_ids/substitutions は互いに素で、
    グリッド走査での発見順に追加される。
    requirements は2行目の "Complete N" から読み取った必要達成数。
    """

    rank: str
    play_style: str = PLAY_STYLE
    requirements: Optional[int] = None
    goal_ids: List[int] = field(default_factory=list)
    mandatory_goal_ids: List[int] = field(default_factory=list)
    substitutions: List[int] = field(default_factory=list)

    def bucket(self, name: str) -> List[int]:
        return getattr(self, name)

    def all_goal_ids(self) -> List[int]:
        return self.goal_ids + self.mandatory_goal_ids + self.substitutions
