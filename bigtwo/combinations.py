"""
牌型定义

大老二合法牌型: 单张、对子、三条，以及五张牌型 (顺子、同花、葫芦、金刚、同花顺)
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .cards import Card, card_value


class CombinationType(IntEnum):
    """牌型类型 (五张牌型按大小排列)"""
    PASS = 0             # 不出 / 过
    SINGLE = 1           # 单张
    PAIR = 2             # 对子
    TRIPLE = 3           # 三条
    STRAIGHT = 4         # 顺子
    FLUSH = 5            # 同花
    FULL_HOUSE = 6       # 葫芦
    FOUR_PLUS_ONE = 7    # 金刚 (四条带一张)
    STRAIGHT_FLUSH = 8   # 同花顺
    QUAD = 9             # 四条 (仅用于显示，不能单独出)
    WRONG = 10           # 非法牌型

    @property
    def label(self) -> str:
        """界面显示用的中文名称"""
        return TYPE_LABELS[self]

    @property
    def is_five_card(self) -> bool:
        return self in FIVE_CARD_TYPES


TYPE_LABELS: Dict[CombinationType, str] = {
    CombinationType.PASS: "Pass",
    CombinationType.SINGLE: "单牌",
    CombinationType.PAIR: "对子",
    CombinationType.TRIPLE: "三条",
    CombinationType.STRAIGHT: "顺子",
    CombinationType.FLUSH: "同花",
    CombinationType.FULL_HOUSE: "葫芦",
    CombinationType.FOUR_PLUS_ONE: "金刚",
    CombinationType.STRAIGHT_FLUSH: "同花顺",
    CombinationType.QUAD: "四条",
    CombinationType.WRONG: "未知",
}

FIVE_CARD_TYPES = frozenset({
    CombinationType.STRAIGHT,
    CombinationType.FLUSH,
    CombinationType.FULL_HOUSE,
    CombinationType.FOUR_PLUS_ONE,
    CombinationType.STRAIGHT_FLUSH,
})

# 可以合法打出的牌型
PLAYABLE_TYPES = frozenset({
    CombinationType.SINGLE,
    CombinationType.PAIR,
    CombinationType.TRIPLE,
}) | FIVE_CARD_TYPES


@dataclass(frozen=True, slots=True)
class Combination:
    """
    不可变牌型表示

    分类只在 from_cards 中做一次，之后按 combo_type 分派

    Attributes:
        cards: 牌 (按比较序数升序)
        combo_type: 牌型
    """
    cards: Tuple[Card, ...]
    combo_type: CombinationType

    @classmethod
    def from_cards(cls, cards: Sequence[Card]) -> 'Combination':
        """从牌列表创建并分类"""
        from .rules import RuleEngine
        sorted_cards = tuple(sorted(cards, key=card_value))
        return cls(cards=sorted_cards, combo_type=RuleEngine.detect_combination_type(sorted_cards))

    @property
    def is_pass(self) -> bool:
        return self.combo_type == CombinationType.PASS

    @property
    def is_valid(self) -> bool:
        return self.combo_type in PLAYABLE_TYPES

    @property
    def strength(self) -> int:
        """
        用于大小比较的强度值

        五张牌型取分层分值，其余取最大牌序数，空牌为 0
        """
        if not self.cards:
            return 0
        if self.combo_type.is_five_card:
            from .rules import RuleEngine
            return RuleEngine.get_hand_value(self.cards)
        return max(card_value(c) for c in self.cards)

    def beats(self, other: 'Combination') -> bool:
        """张数相同且强度更大，任一方为空时不可比较"""
        if self.is_pass or other.is_pass or len(self) != len(other):
            return False
        return self.strength > other.strength

    def __len__(self) -> int:
        return len(self.cards)
