"""
规则引擎 - 牌型检测、大小比较、合法性验证

所有方法都是纯函数，无状态
"""
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING
from collections import Counter

from .cards import Card, Rank, Suit, card_value, rank_suit_value, has_card
from .combinations import Combination, CombinationType, PLAYABLE_TYPES

if TYPE_CHECKING:
    from .config import GameRules


# 五张牌型的分层基数，保证跨牌型比较只需比较整数
STRAIGHT_FLUSH_BASE = 9000
FOUR_PLUS_ONE_BASE = 8000
FULL_HOUSE_BASE = 7000
FLUSH_BASE = 6000
STRAIGHT_BASE = 5000

# 明确支持的两端顺子
LOW_STRAIGHT: Tuple[int, ...] = (3, 4, 5, 6, 7)
HIGH_STRAIGHT: Tuple[int, ...] = (10, 11, 12, 13, 14)


class RuleEngine:
    """
    大老二规则引擎

    提供牌型检测、大小比较、合法性验证等功能
    所有方法都是静态方法，无状态
    """

    @staticmethod
    def is_consecutive(ranks: Sequence[int]) -> bool:
        """
        检查点数列表是否连续

        Args:
            ranks: 已排序的点数列表

        Returns:
            是否连续
        """
        for i in range(len(ranks) - 1):
            if ranks[i + 1] - ranks[i] != 1:
                return False
        return True

    @staticmethod
    def _sorted_ranks(cards: Sequence[Card]) -> Tuple[int, ...]:
        return tuple(sorted(int(c.rank) for c in cards))

    @staticmethod
    def _count_shape(cards: Sequence[Card]) -> List[int]:
        """点数分布，如葫芦为 [2, 3]"""
        return sorted(Counter(c.rank for c in cards).values())

    @staticmethod
    def is_pair(cards: Sequence[Card]) -> bool:
        return len(cards) == 2 and cards[0].rank == cards[1].rank

    @staticmethod
    def is_triple(cards: Sequence[Card]) -> bool:
        return len(cards) == 3 and len({c.rank for c in cards}) == 1

    @staticmethod
    def is_flush(cards: Sequence[Card]) -> bool:
        return len(cards) == 5 and len({c.suit for c in cards}) == 1

    @staticmethod
    def is_straight(cards: Sequence[Card]) -> bool:
        """
        检查是否为顺子

        2 不能参与顺子，3-4-5-6-7 与 10-J-Q-K-A 为两端
        """
        if len(cards) != 5:
            return False
        ranks = RuleEngine._sorted_ranks(cards)
        if ranks in (LOW_STRAIGHT, HIGH_STRAIGHT):
            return True
        if Rank.TWO in ranks:
            return False
        return RuleEngine.is_consecutive(ranks)

    @staticmethod
    def is_straight_flush(cards: Sequence[Card]) -> bool:
        return RuleEngine.is_straight(cards) and RuleEngine.is_flush(cards)

    @staticmethod
    def is_full_house(cards: Sequence[Card]) -> bool:
        return len(cards) == 5 and RuleEngine._count_shape(cards) == [2, 3]

    @staticmethod
    def is_four_plus_one(cards: Sequence[Card]) -> bool:
        return len(cards) == 5 and RuleEngine._count_shape(cards) == [1, 4]

    @staticmethod
    def is_five_card_hand(cards: Sequence[Card]) -> bool:
        """检查五张牌是否成型 (顺子、同花、葫芦、金刚、同花顺)"""
        if len(cards) != 5:
            return False
        return (
            RuleEngine.is_straight(cards)
            or RuleEngine.is_flush(cards)
            or RuleEngine.is_full_house(cards)
            or RuleEngine.is_four_plus_one(cards)
        )

    @staticmethod
    def is_valid_combination(cards: Sequence[Card]) -> bool:
        """
        检查牌是否构成合法牌型

        四张牌永远不能单独打出 (四条只能作为金刚的一部分)
        """
        return RuleEngine.detect_combination_type(cards) in PLAYABLE_TYPES

    @staticmethod
    def detect_combination_type(cards: Sequence[Card]) -> CombinationType:
        """
        检测牌型

        五张牌同时满足多种牌型时取最大的:
        同花顺 > 金刚 > 葫芦 > 同花 > 顺子

        Args:
            cards: 牌列表

        Returns:
            牌型枚举值
        """
        n = len(cards)
        if n == 0:
            return CombinationType.PASS
        if n == 1:
            return CombinationType.SINGLE
        if n == 2:
            return CombinationType.PAIR if RuleEngine.is_pair(cards) else CombinationType.WRONG
        if n == 3:
            return CombinationType.TRIPLE if RuleEngine.is_triple(cards) else CombinationType.WRONG
        if n == 4:
            if len({c.rank for c in cards}) == 1:
                return CombinationType.QUAD
            return CombinationType.WRONG
        if n == 5:
            if RuleEngine.is_straight_flush(cards):
                return CombinationType.STRAIGHT_FLUSH
            if RuleEngine.is_four_plus_one(cards):
                return CombinationType.FOUR_PLUS_ONE
            if RuleEngine.is_full_house(cards):
                return CombinationType.FULL_HOUSE
            if RuleEngine.is_flush(cards):
                return CombinationType.FLUSH
            if RuleEngine.is_straight(cards):
                return CombinationType.STRAIGHT
        return CombinationType.WRONG

    @staticmethod
    def get_play_type_name(cards: Sequence[Card]) -> CombinationType:
        """出牌记录用的牌型，显示名称见 CombinationType.label"""
        return RuleEngine.detect_combination_type(cards)

    @staticmethod
    def _straight_high_card(sorted_cards: Sequence[Card]) -> Card:
        # 3-4-5-6-7 以 5 作为比较牌
        if RuleEngine._sorted_ranks(sorted_cards) == LOW_STRAIGHT:
            return next(c for c in sorted_cards if c.rank == Rank.FIVE)
        return sorted_cards[-1]

    @staticmethod
    def _rank_with_count(cards: Sequence[Card], count: int) -> int:
        for rank, n in Counter(c.rank for c in cards).items():
            if n == count:
                return rank
        raise ValueError(f"No rank appears {count} times")

    @staticmethod
    def get_hand_value(cards: Sequence[Card]) -> int:
        """
        五张牌型的分层分值

        - 同花顺: 9000 + 比较牌序数
        - 金刚:   8000 + 四条点数 (按黑桃计)
        - 葫芦:   7000 + 三条点数 (按黑桃计)
        - 同花:   6000 + 最大牌序数
        - 顺子:   5000 + 比较牌序数
        - 其他:   最大牌序数

        Args:
            cards: 五张牌

        Returns:
            分值，越大越强
        """
        if not cards:
            return 0
        sorted_cards = sorted(cards, key=card_value)

        if RuleEngine.is_straight_flush(sorted_cards):
            return STRAIGHT_FLUSH_BASE + card_value(RuleEngine._straight_high_card(sorted_cards))
        if RuleEngine.is_four_plus_one(sorted_cards):
            return FOUR_PLUS_ONE_BASE + rank_suit_value(RuleEngine._rank_with_count(sorted_cards, 4))
        if RuleEngine.is_full_house(sorted_cards):
            return FULL_HOUSE_BASE + rank_suit_value(RuleEngine._rank_with_count(sorted_cards, 3))
        if RuleEngine.is_flush(sorted_cards):
            return FLUSH_BASE + card_value(sorted_cards[-1])
        if RuleEngine.is_straight(sorted_cards):
            return STRAIGHT_BASE + card_value(RuleEngine._straight_high_card(sorted_cards))
        return card_value(sorted_cards[-1])

    @staticmethod
    def get_play_strength(cards: Sequence[Card]) -> int:
        """
        出牌的强度值

        单张取序数，对子/三条取最大牌序数，五张取分层分值
        """
        return Combination.from_cards(cards).strength

    @staticmethod
    def is_higher_combination(a: Sequence[Card], b: Sequence[Card]) -> bool:
        """
        a 是否比 b 大

        两手牌张数不同时不可比较，返回 False
        """
        return Combination.from_cards(a).beats(Combination.from_cards(b))

    @staticmethod
    def compare(a: Sequence[Card], b: Sequence[Card]) -> int:
        """
        比较两手牌的大小

        Args:
            a: 牌 a
            b: 牌 b (通常是上家的牌)

        Returns:
            1 if a > b, -1 if a < b, 0 if 不可比较或相等
        """
        combo_a = Combination.from_cards(a)
        combo_b = Combination.from_cards(b)
        if combo_a.beats(combo_b):
            return 1
        if combo_b.beats(combo_a):
            return -1
        return 0

    @staticmethod
    def leaves_lone_spade(remaining_cards: Sequence[Card]) -> bool:
        """出牌后是否只剩一张黑桃"""
        return len(remaining_cards) == 1 and remaining_cards[0].suit == Suit.SPADES

    @staticmethod
    def is_valid_play(
        cards: Sequence[Card],
        last_play: Optional[Sequence[Card]],
        player_count: int = 4,
        remaining_cards: Sequence[Card] = (),
    ) -> bool:
        """
        验证出牌是否合法

        是否持有这些牌由调用方检查，这里只判断牌型与大小

        Args:
            cards: 要出的牌
            last_play: 桌面上最近一手牌 (空表示首出)
            player_count: 玩家人数，少于 4 人时首出必须带方块 3
            remaining_cards: 出牌后的剩余手牌

        Returns:
            是否合法
        """
        play = Combination.from_cards(cards)
        if not play.is_valid:
            return False

        last = Combination.from_cards(last_play or ())

        # 首出
        if last.is_pass:
            if player_count < 4:
                return has_card(play.cards, Rank.THREE, Suit.DIAMONDS)
            return True

        # 跟牌: 张数相同
        if len(play) != len(last):
            return False

        # 不能只剩一张黑桃
        if RuleEngine.leaves_lone_spade(remaining_cards):
            return False

        return play.beats(last)

    @staticmethod
    def is_valid_play_with_rules(
        cards: Sequence[Card],
        last_play: Optional[Sequence[Card]],
        rules: 'GameRules',
        remaining_cards: Sequence[Card] = (),
    ) -> bool:
        """
        按自定义规则验证出牌

        Args:
            cards: 要出的牌
            last_play: 桌面上最近一手牌
            rules: 规则集
            remaining_cards: 出牌后的剩余手牌

        Returns:
            是否合法
        """
        play = Combination.from_cards(cards)
        if not play.is_valid or not rules.allowed_combinations.allows(play.combo_type):
            return False

        special = rules.special_rules
        last = Combination.from_cards(last_play or ())

        if last.is_pass:
            if special.must_start_with_diamond3:
                return has_card(play.cards, Rank.THREE, Suit.DIAMONDS)
            return True

        if len(play) != len(last):
            return False

        if special.last_card_spade_rule and RuleEngine.leaves_lone_spade(remaining_cards):
            return False

        return play.beats(last)
