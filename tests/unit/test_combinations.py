"""牌型定义测试"""
import pytest

from bigtwo.cards import str_to_cards
from bigtwo.combinations import CombinationType, Combination, FIVE_CARD_TYPES, PLAYABLE_TYPES


class TestCombinationType:
    """CombinationType 枚举测试"""

    def test_pass_is_zero(self):
        assert CombinationType.PASS == 0

    def test_five_card_types_ordered_by_strength(self):
        assert (
            CombinationType.STRAIGHT
            < CombinationType.FLUSH
            < CombinationType.FULL_HOUSE
            < CombinationType.FOUR_PLUS_ONE
            < CombinationType.STRAIGHT_FLUSH
        )

    def test_labels(self):
        assert CombinationType.SINGLE.label == "单牌"
        assert CombinationType.PAIR.label == "对子"
        assert CombinationType.TRIPLE.label == "三条"
        assert CombinationType.STRAIGHT.label == "顺子"
        assert CombinationType.FLUSH.label == "同花"
        assert CombinationType.FULL_HOUSE.label == "葫芦"
        assert CombinationType.FOUR_PLUS_ONE.label == "金刚"
        assert CombinationType.STRAIGHT_FLUSH.label == "同花顺"
        assert CombinationType.QUAD.label == "四条"
        assert CombinationType.PASS.label == "Pass"
        assert CombinationType.WRONG.label == "未知"

    def test_quad_not_playable(self):
        assert CombinationType.QUAD not in PLAYABLE_TYPES
        assert CombinationType.WRONG not in PLAYABLE_TYPES
        assert len(FIVE_CARD_TYPES) == 5
        assert all(t.is_five_card for t in FIVE_CARD_TYPES)
        assert not CombinationType.PAIR.is_five_card


class TestCombination:
    """Combination 数据类测试"""

    def test_empty_is_pass(self):
        combo = Combination.from_cards([])
        assert combo.is_pass is True
        assert combo.is_valid is False
        assert combo.cards == ()
        assert combo.strength == 0

    def test_from_cards_sorts(self):
        combo = Combination.from_cards(str_to_cards("5S 5D"))
        assert combo.cards == tuple(str_to_cards("5D 5S"))
        assert combo.combo_type == CombinationType.PAIR

    def test_from_cards_five_card(self):
        combo = Combination.from_cards(str_to_cards("7H 3D 5H 4C 6S"))
        assert combo.combo_type == CombinationType.STRAIGHT
        assert combo.is_valid is True
        assert len(combo) == 5

    def test_from_cards_invalid(self):
        combo = Combination.from_cards(str_to_cards("3D 4C"))
        assert combo.combo_type == CombinationType.WRONG
        assert combo.is_valid is False

    def test_quad_is_not_valid(self):
        combo = Combination.from_cards(str_to_cards("9D 9C 9H 9S"))
        assert combo.combo_type == CombinationType.QUAD
        assert combo.is_valid is False

    def test_strength(self):
        assert Combination.from_cards(str_to_cards("3C")).strength == 1
        assert Combination.from_cards(str_to_cards("3C 3H")).strength == 2
        assert Combination.from_cards(str_to_cards("2S")).strength == 55

    def test_five_card_strength_uses_hand_value(self):
        combo = Combination.from_cards(str_to_cards("2D 2C 2H 2S AS"))
        assert combo.combo_type == CombinationType.FOUR_PLUS_ONE
        assert combo.strength == 8055

    def test_strength_follows_combo_type(self):
        cards = tuple(str_to_cards("3H 5H 7H 9H JH"))
        assert Combination(cards, CombinationType.FLUSH).strength == 6034

    def test_beats(self):
        low = Combination.from_cards(str_to_cards("7C 7H"))
        high = Combination.from_cards(str_to_cards("7D 7S"))
        assert high.beats(low) is True
        assert low.beats(high) is False
        assert high.beats(high) is False

    def test_beats_needs_same_length(self):
        single = Combination.from_cards(str_to_cards("2S"))
        pair = Combination.from_cards(str_to_cards("3D 3C"))
        assert single.beats(pair) is False
        assert single.beats(Combination.from_cards([])) is False

    def test_immutability(self):
        combo = Combination.from_cards(str_to_cards("3C"))
        with pytest.raises(Exception):
            combo.combo_type = CombinationType.PAIR
