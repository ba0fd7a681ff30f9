"""
bigtwo - 大老二规则引擎 (纯函数，无状态)

Modules:
    cards: 牌定义、发牌与编码
    combinations: 牌型定义
    rules: 规则引擎
    hints: 出牌提示与自动出牌
    scoring: 计分
    config: 规则配置
"""
from .cards import (
    Suit,
    Rank,
    Card,
    FULL_DECK,
    card_value,
    rank_suit_value,
    create_deck,
    shuffle_deck,
    deal_cards,
    sort_cards,
    auto_arrange_cards,
    remove_cards,
    card_to_str,
    str_to_card,
    cards_to_str,
    str_to_cards,
)

from .combinations import (
    CombinationType,
    Combination,
)

from .rules import RuleEngine

from .hints import (
    Hint,
    HintGenerator,
    MAX_HINTS,
    get_card_hints,
    get_auto_play_suggestion,
    should_auto_pass,
)

from .scoring import GameScoring

from .config import (
    GameRules,
    PRESET_RULES,
    RulesError,
    RulesRegistry,
    RulesValidation,
    validate_rules,
)

__all__ = [
    # cards
    "Suit",
    "Rank",
    "Card",
    "FULL_DECK",
    "card_value",
    "rank_suit_value",
    "create_deck",
    "shuffle_deck",
    "deal_cards",
    "sort_cards",
    "auto_arrange_cards",
    "remove_cards",
    "card_to_str",
    "str_to_card",
    "cards_to_str",
    "str_to_cards",
    # combinations
    "CombinationType",
    "Combination",
    # rules
    "RuleEngine",
    # hints
    "Hint",
    "HintGenerator",
    "MAX_HINTS",
    "get_card_hints",
    "get_auto_play_suggestion",
    "should_auto_pass",
    # scoring
    "GameScoring",
    # config
    "GameRules",
    "PRESET_RULES",
    "RulesError",
    "RulesRegistry",
    "RulesValidation",
    "validate_rules",
]
