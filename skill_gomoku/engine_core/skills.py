"""
Skill Catalog - The fixed, ordered list of skills both sides share.

The catalog is part of the client contract: ids, names, descriptions and
cooldown lengths are exposed verbatim. It is read-only process-wide data.

Per-color usage is tracked by SkillLedger. Skills are single-use per game:
once cast, a skill's cooldown is pinned to USED_SENTINEL.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

USED_SENTINEL = -1


class EffectType(str, Enum):
    """Closed set of skill effects."""
    REMOVE_OPPONENT = "remove-opponent"
    FREEZE_OPPONENT = "freeze-opponent"
    RANDOM_SELF = "random-self"
    UNDO = "undo"
    RESET_BOARD = "reset-board"
    RESTORE_HISTORY = "restore-history"
    REMOVE_ALL_OPPONENT = "remove-all-opponent"


@dataclass(frozen=True)
class SkillDefinition:
    """
    Immutable catalog entry.

    `params` carries effect parameters (count, turns, steps).
    """
    id: str
    name: str
    description: str
    cooldown: int
    effect: EffectType
    params: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def param(self, key: str, default: Any = None) -> Any:
        return self.params.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Catalog listing shape: id, name, description, cooldown, type, payload."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "cooldown": self.cooldown,
            "type": self.effect.value,
        }
        if self.params:
            data["payload"] = dict(self.params)
        return data


def _skill(id: str, name: str, description: str, cooldown: int,
           effect: EffectType, **params: Any) -> SkillDefinition:
    return SkillDefinition(
        id=id,
        name=name,
        description=description,
        cooldown=cooldown,
        effect=effect,
        params=MappingProxyType(params),
    )


# ============================================================================
# Catalog
# ============================================================================

SKILLS: tuple[SkillDefinition, ...] = (
    _skill("flying-sand", "飞沙走石", "移除敌方1颗棋子", 2,
           EffectType.REMOVE_OPPONENT, count=1),
    _skill("calm-water", "静如止水", "冻结敌方1回合，敌方无法下子", 4,
           EffectType.FREEZE_OPPONENT, turns=1),
    _skill("yale-ya", "呀嘞呀", "移除敌方2颗棋子", 5,
           EffectType.REMOVE_OPPONENT, count=2),
    _skill("capture", "擒拿擒拿", "随机生成己方棋子", 6,
           EffectType.RANDOM_SELF, count=1),
    _skill("rewind", "时光倒流", "悔棋一步，撤销上一步操作", 7,
           EffectType.UNDO, steps=1),
    _skill("reset-board", "力拔山兮", "清空整个棋盘，重置游戏", 15,
           EffectType.RESET_BOARD),
    _skill("restore", "东山再起", "恢复棋盘至某个历史状态", 10,
           EffectType.RESTORE_HISTORY),
    _skill("see-you-again", "See you again", "移除敌方所有棋子", 20,
           EffectType.REMOVE_ALL_OPPONENT),
)

SKILL_MAP: Mapping[str, SkillDefinition] = MappingProxyType(
    {skill.id: skill for skill in SKILLS}
)


def get_skill(skill_id: str) -> SkillDefinition | None:
    return SKILL_MAP.get(skill_id)


def catalog() -> list[dict[str, Any]]:
    """The catalog as plain data for clients."""
    return [skill.to_dict() for skill in SKILLS]


# ============================================================================
# Per-color ledger
# ============================================================================

@dataclass
class SkillLedger:
    """
    One side's skill usage.

    `cooldowns` is keyed by skill id in catalog order: 0 means ready,
    a positive value is turns remaining, USED_SENTINEL means spent.
    """
    used: set[str] = field(default_factory=set)
    cooldowns: dict[str, int] = field(
        default_factory=lambda: {skill.id: 0 for skill in SKILLS}
    )

    def is_used(self, skill_id: str) -> bool:
        return skill_id in self.used

    def remaining(self, skill_id: str) -> int:
        return self.cooldowns.get(skill_id, 0)

    def is_available(self, skill_id: str) -> bool:
        return not self.is_used(skill_id) and self.remaining(skill_id) <= 0

    def mark_used(self, skill_id: str) -> None:
        self.used.add(skill_id)
        self.cooldowns[skill_id] = USED_SENTINEL

    def tick(self) -> None:
        """Decrement every running cooldown by one turn."""
        for skill_id, value in self.cooldowns.items():
            if value > 0:
                self.cooldowns[skill_id] = value - 1

    def reset_cooldowns(self) -> None:
        """Zero the cooldowns of unused skills; spent skills stay spent."""
        self.cooldowns = {
            skill.id: USED_SENTINEL if skill.id in self.used else 0
            for skill in SKILLS
        }

    def copy(self) -> SkillLedger:
        return SkillLedger(used=set(self.used), cooldowns=dict(self.cooldowns))
