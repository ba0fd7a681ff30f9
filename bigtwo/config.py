"""
规则配置

定义可自定义的规则集、预设规则以及规则管理器
"""
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from .combinations import CombinationType

logger = logging.getLogger(__name__)


class RulesError(ValueError):
    """规则集无效或无法导入"""


def _filter_fields(klass, d: dict) -> dict:
    valid_keys = klass.__dataclass_fields__.keys()
    return {k: v for k, v in d.items() if k in valid_keys}


@dataclass
class PlayerCountRule:
    """玩家人数范围"""
    min: int = 2
    max: int = 4
    default: int = 4

    @classmethod
    def from_dict(cls, d: dict) -> 'PlayerCountRule':
        return cls(**_filter_fields(cls, d))


@dataclass
class AllowedCombinations:
    """
    允许的牌型

    four_of_a_kind 对应金刚 (四条带一张)
    """
    single: bool = True
    pair: bool = True
    three_of_a_kind: bool = True
    straight: bool = True
    flush: bool = True
    full_house: bool = True
    four_of_a_kind: bool = True
    straight_flush: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> 'AllowedCombinations':
        return cls(**_filter_fields(cls, d))

    def allows(self, combo_type: CombinationType) -> bool:
        attr = _COMBINATION_FIELDS.get(combo_type)
        return attr is not None and getattr(self, attr)

    def any_enabled(self) -> bool:
        return any(getattr(self, attr) for attr in _COMBINATION_FIELDS.values())


_COMBINATION_FIELDS: Dict[CombinationType, str] = {
    CombinationType.SINGLE: "single",
    CombinationType.PAIR: "pair",
    CombinationType.TRIPLE: "three_of_a_kind",
    CombinationType.STRAIGHT: "straight",
    CombinationType.FLUSH: "flush",
    CombinationType.FULL_HOUSE: "full_house",
    CombinationType.FOUR_PLUS_ONE: "four_of_a_kind",
    CombinationType.STRAIGHT_FLUSH: "straight_flush",
}


@dataclass
class SpecialRules:
    """
    特殊规则

    Attributes:
        must_start_with_diamond3: 首出必须带方块 3
        last_card_spade_rule: 出牌后不能只剩一张黑桃
    """
    must_start_with_diamond3: bool = True
    last_card_spade_rule: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> 'SpecialRules':
        return cls(**_filter_fields(cls, d))


@dataclass
class FinishBonuses:
    """名次奖励，second 只在 4 人局生效"""
    first: int = 0
    second: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> 'FinishBonuses':
        return cls(**_filter_fields(cls, d))


@dataclass
class Penalties:
    """
    惩罚 (直接累加，通常为负数)

    Attributes:
        last_place: 最后一名
        too_many_cards: 剩余 10 张及以上
    """
    last_place: int = 0
    too_many_cards: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> 'Penalties':
        return cls(**_filter_fields(cls, d))


@dataclass
class ScoringRules:
    """计分规则"""
    base_score: int = 0
    card_count_multiplier: int = 1
    finish_bonuses: FinishBonuses = field(default_factory=FinishBonuses)
    penalties: Penalties = field(default_factory=Penalties)

    @classmethod
    def from_dict(cls, d: dict) -> 'ScoringRules':
        filtered = _filter_fields(cls, d)
        if isinstance(filtered.get("finish_bonuses"), dict):
            filtered["finish_bonuses"] = FinishBonuses.from_dict(filtered["finish_bonuses"])
        if isinstance(filtered.get("penalties"), dict):
            filtered["penalties"] = Penalties.from_dict(filtered["penalties"])
        return cls(**filtered)


@dataclass
class GameRules:
    """
    一套完整的游戏规则

    Attributes:
        id: 规则标识
        name: 显示名称
        description: 说明
        player_count: 人数范围
        allowed_combinations: 允许的牌型
        special_rules: 特殊规则
        scoring: 计分规则
    """
    id: str
    name: str = ""
    description: str = ""
    player_count: PlayerCountRule = field(default_factory=PlayerCountRule)
    allowed_combinations: AllowedCombinations = field(default_factory=AllowedCombinations)
    special_rules: SpecialRules = field(default_factory=SpecialRules)
    scoring: ScoringRules = field(default_factory=ScoringRules)

    @classmethod
    def from_dict(cls, d: dict) -> 'GameRules':
        filtered = _filter_fields(cls, d)
        nested = {
            "player_count": PlayerCountRule,
            "allowed_combinations": AllowedCombinations,
            "special_rules": SpecialRules,
            "scoring": ScoringRules,
        }
        for key, klass in nested.items():
            if isinstance(filtered.get(key), dict):
                filtered[key] = klass.from_dict(filtered[key])
        return cls(**filtered)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RulesValidation:
    """规则校验结果"""
    valid: bool
    errors: List[str] = field(default_factory=list)


def validate_rules(rules: GameRules) -> RulesValidation:
    """
    校验规则集

    Args:
        rules: 规则集

    Returns:
        校验结果，errors 为中文错误信息
    """
    errors = []
    count = rules.player_count

    if count.min < 2:
        errors.append("最少玩家数量不能少于2人")
    if count.max > 4:
        errors.append("最多玩家数量不能超过4人（标准52张牌限制）")
    if count.default < count.min or count.default > count.max:
        errors.append("默认玩家数量必须在最小和最大值之间")

    if not rules.allowed_combinations.any_enabled():
        errors.append("至少需要启用一种牌型")

    if rules.scoring.base_score < 0:
        errors.append("基础分数不能为负数")
    if rules.scoring.card_count_multiplier < 0:
        errors.append("剩余手牌倍数不能为负数")

    return RulesValidation(valid=not errors, errors=errors)


# 预设规则
PRESET_RULES: Dict[str, GameRules] = {
    "classic": GameRules(
        id="classic",
        name="经典规则",
        description="标准大老二游戏规则",
        player_count=PlayerCountRule(min=2, max=4, default=4),
        special_rules=SpecialRules(must_start_with_diamond3=True, last_card_spade_rule=True),
    ),
    "fast": GameRules(
        id="fast",
        name="快速模式",
        description="节奏更快的游戏规则",
        player_count=PlayerCountRule(min=2, max=4, default=3),
        special_rules=SpecialRules(must_start_with_diamond3=False, last_card_spade_rule=False),
    ),
    "casual": GameRules(
        id="casual",
        name="休闲模式",
        description="更轻松的朋友聚会规则",
        player_count=PlayerCountRule(min=2, max=4, default=4),
        special_rules=SpecialRules(must_start_with_diamond3=False, last_card_spade_rule=False),
    ),
}


class RulesRegistry:
    """
    规则管理器

    预设规则只读，自定义规则保存在实例中
    """

    def __init__(self, presets: Optional[Dict[str, GameRules]] = None):
        self._presets = dict(PRESET_RULES if presets is None else presets)
        self._custom: Dict[str, GameRules] = {}

    def get_all_rules(self) -> List[GameRules]:
        return list(self._presets.values()) + list(self._custom.values())

    def get_rules(self, rules_id: str) -> Optional[GameRules]:
        return self._presets.get(rules_id) or self._custom.get(rules_id)

    def add_custom_rules(self, rules: GameRules) -> None:
        """
        添加自定义规则

        Raises:
            RulesError: 规则校验失败或与预设重名
        """
        if rules.id in self._presets:
            raise RulesError(f"Cannot override preset rules: {rules.id}")
        validation = validate_rules(rules)
        if not validation.valid:
            raise RulesError(", ".join(validation.errors))
        self._custom[rules.id] = rules
        logger.info(f"Added custom rules: {rules.id}")

    def remove_custom_rules(self, rules_id: str) -> bool:
        if self._custom.pop(rules_id, None) is None:
            return False
        logger.info(f"Removed custom rules: {rules_id}")
        return True

    def export_rules(self, rules_id: str) -> Optional[str]:
        """导出为 JSON 字符串，不存在返回 None"""
        rules = self.get_rules(rules_id)
        if rules is None:
            return None
        return json.dumps(rules.to_dict(), ensure_ascii=False, indent=2)

    def import_rules(self, text: str) -> GameRules:
        """
        从 JSON 字符串导入规则 (不会自动注册)

        Raises:
            RulesError: JSON 格式错误或规则无效
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Rejected rules import: {e}")
            raise RulesError("无效的JSON格式") from e

        if not isinstance(data, dict) or "id" not in data:
            logger.warning("Rejected rules import: missing id")
            raise RulesError("无效的JSON格式")

        try:
            rules = GameRules.from_dict(data)
        except TypeError as e:
            raise RulesError(f"无效的规则字段: {e}") from e

        validation = validate_rules(rules)
        if not validation.valid:
            logger.warning(f"Rejected rules import {rules.id}: {validation.errors}")
            raise RulesError(", ".join(validation.errors))
        return rules
