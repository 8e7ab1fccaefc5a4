"""
抽出結果のJSON出力用ヘルパー群。
"""

from __future__ import annotations

import dataclasses
import json
import os
from typing import Dict, List, Mapping

from life4_ranks.errors import ValidationError
from life4_ranks.models import Goal, Requirement

_REQUIREMENT_BUCKETS = ("goal_ids", "mandatory_goal_ids", "substitutions")


def goal_to_dict(goal: Goal) -> dict:
    """ゴールを出力用 dict に変換する。None の項目は省略する。"""
    data = {"id": goal.id, "t": goal.t}
    for f in dataclasses.fields(goal):
        if f.name == "id":
            continue
        value = getattr(goal, f.name)
        if value is None:
            continue
        data[f.name] = list(value) if isinstance(value, tuple) else value
    return data


def requirement_to_dict(requirement: Requirement) -> dict:
    """要件を出力用 dict に変換する。空の枠と未指定の必要達成数は省略する。"""
    data = {"rank": requirement.rank, "play_style": requirement.play_style}
    if requirement.requirements is not None:
        data["requirements"] = requirement.requirements
    for bucket in _REQUIREMENT_BUCKETS:
        ids = requirement.bucket(bucket)
        if ids:
            data[bucket] = list(ids)
    return data


def validate_document(document: dict):
    """
    出力ドキュメントの不変条件を検証する。

    - ゴールIDが重複していない
    - 要件が参照するIDはすべて goals に存在する
    - 要件内の3つの枠が互いに素

    Raises:
        ValidationError: いずれかの条件を満たさない場合。
    """
    goal_ids = [goal["id"] for goal in document.get("goals", [])]
    known = set(goal_ids)
    if len(known) != len(goal_ids):
        raise ValidationError("goals に重複したIDがあります")

    for version, entry in document.get("game_versions", {}).items():
        for requirement in entry.get("rank_requirements", []):
            seen: set[int] = set()
            for bucket in _REQUIREMENT_BUCKETS:
                ids = requirement.get(bucket, [])
                dangling = [i for i in ids if i not in known]
                if dangling:
                    raise ValidationError(
                        f"{version}/{requirement['rank']} が存在しないゴールを参照しています: {dangling}"
                    )
                overlap = seen.intersection(ids)
                if overlap:
                    raise ValidationError(
                        f"{version}/{requirement['rank']} の枠が重複しています: {sorted(overlap)}"
                    )
                seen.update(ids)


def build_document(
    goals: List[Goal],
    requirements_by_version: Mapping[str, List[Requirement]],
) -> dict:
    """ゴール一覧とバージョン別要件から出力ドキュメントを生成し、検証して返す。"""
    game_versions: Dict[str, dict] = {}
    for version, requirements in requirements_by_version.items():
        game_versions[version] = {
            "rank_requirements": [requirement_to_dict(r) for r in requirements],
        }

    document = {
        "goals": [goal_to_dict(goal) for goal in goals],
        "game_versions": game_versions,
    }
    validate_document(document)
    return document


def write_ranks_json(path: str, document: dict):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as file_obj:
        json.dump(document, file_obj, ensure_ascii=False, indent=2)
        file_obj.write("\n")
