"""
出牌提示与自动出牌

根据手牌和桌面上的牌生成可以打出的候选组合，按强度从小到大排序。
倾向用刚好能压过的最小牌，避免浪费大牌。
"""
import itertools
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import Card, Suit, card_value, remove_cards
from .combinations import Combination, CombinationType
from .rules import RuleEngine

logger = logging.getLogger(__name__)

# 最多返回的提示数
MAX_HINTS = 5

# 首出提示数量
OPENING_SINGLES = 3
OPENING_PAIRS = 2
OPENING_TRIPLES = 1


@dataclass(frozen=True)
class Hint:
    """
    出牌提示

    Attributes:
        cards: 建议打出的牌 (按比较序数升序)
        combo_type: 牌型
        strength: 强度 (用于排序，越小越弱)
        description: 显示给玩家的说明
    """
    cards: Tuple[Card, ...]
    combo_type: CombinationType
    strength: int
    description: str


def _symbols(cards: Iterable[Card]) -> str:
    return ''.join(c.symbol for c in cards)


def describe(combo_type: CombinationType, cards: Sequence[Card]) -> str:
    """生成提示说明，如 "出对子 ♦7♠7" """
    if combo_type in (CombinationType.STRAIGHT, CombinationType.STRAIGHT_FLUSH):
        body = '-'.join(c.symbol for c in cards)
    elif combo_type in (CombinationType.FULL_HOUSE, CombinationType.FOUR_PLUS_ONE):
        counts = Counter(c.rank for c in cards)
        main_rank = max(counts, key=counts.get)
        main = [c for c in cards if c.rank == main_rank]
        rest = [c for c in cards if c.rank != main_rank]
        body = f"{_symbols(main)}+{_symbols(rest)}"
    else:
        body = _symbols(cards)
    return f"出{combo_type.label} {body}"


def make_hint(cards: Sequence[Card], combo_type: CombinationType) -> Hint:
    combo = Combination(tuple(sorted(cards, key=card_value)), combo_type)
    return Hint(
        cards=combo.cards,
        combo_type=combo_type,
        strength=combo.strength,
        description=describe(combo_type, combo.cards),
    )


def _unique_strength(hints: Iterable[Hint]) -> List[Hint]:
    """同牌型同强度只保留最先找到的"""
    seen = set()
    result = []
    for hint in hints:
        key = (hint.combo_type, hint.strength)
        if key not in seen:
            seen.add(key)
            result.append(hint)
    return result


class HintGenerator:
    """
    候选出牌生成器

    根据手牌生成各牌型的所有候选组合
    """

    def __init__(self, hand_cards: Sequence[Card]):
        """
        Args:
            hand_cards: 手牌列表
        """
        self.hand: List[Card] = sorted(hand_cards, key=card_value)

        # 按点数 / 花色分组，组内按比较序数升序
        self.rank_groups: Dict[int, List[Card]] = defaultdict(list)
        self.suit_groups: Dict[Suit, List[Card]] = defaultdict(list)
        for card in self.hand:
            self.rank_groups[int(card.rank)].append(card)
            self.suit_groups[card.suit].append(card)

        self._responders: Dict[CombinationType, Callable[[], List[Hint]]] = {
            CombinationType.SINGLE: self.gen_singles,
            CombinationType.PAIR: self.gen_pairs,
            CombinationType.TRIPLE: self.gen_triples,
            CombinationType.STRAIGHT: self.gen_straights,
            CombinationType.FLUSH: self.gen_flushes,
            CombinationType.FULL_HOUSE: self.gen_full_houses,
            CombinationType.FOUR_PLUS_ONE: self.gen_four_plus_one,
            CombinationType.STRAIGHT_FLUSH: self.gen_straight_flushes,
        }

    def _groups_of(self, size: int) -> List[List[Card]]:
        """各点数中最小的 size 张 (按点数升序)"""
        return [group[:size] for group in self.rank_groups.values() if len(group) >= size]

    def _same_rank_sets(self, size: int) -> List[List[Card]]:
        """各点数中任选 size 张的所有组合"""
        sets = []
        for group in self.rank_groups.values():
            sets.extend(list(combo) for combo in itertools.combinations(group, size))
        return sets

    def gen_singles(self) -> List[Hint]:
        """生成所有单张"""
        return [make_hint([card], CombinationType.SINGLE) for card in self.hand]

    def gen_pairs(self) -> List[Hint]:
        """生成所有对子"""
        return [make_hint(pair, CombinationType.PAIR) for pair in self._same_rank_sets(2)]

    def gen_triples(self) -> List[Hint]:
        """生成所有三条"""
        return [make_hint(triple, CombinationType.TRIPLE) for triple in self._same_rank_sets(3)]

    def gen_straights(self) -> List[Hint]:
        """生成所有顺子: 每个连续的 5 个点数，每个点数任选一张"""
        hints = []
        for start in range(3, 11):
            run = range(start, start + 5)
            if not all(r in self.rank_groups for r in run):
                continue
            for choice in itertools.product(*(self.rank_groups[r] for r in run)):
                if RuleEngine.detect_combination_type(choice) == CombinationType.STRAIGHT:
                    hints.append(make_hint(choice, CombinationType.STRAIGHT))
        return hints

    def _suited_fives(self, combo_type: CombinationType) -> List[Hint]:
        """每种花色中任选 5 张，保留指定牌型"""
        hints = []
        for suit in Suit:
            for combo in itertools.combinations(self.suit_groups.get(suit, []), 5):
                if RuleEngine.detect_combination_type(combo) == combo_type:
                    hints.append(make_hint(combo, combo_type))
        return hints

    def gen_flushes(self) -> List[Hint]:
        """生成同花 (不含同花顺)"""
        return self._suited_fives(CombinationType.FLUSH)

    def gen_straight_flushes(self) -> List[Hint]:
        """生成同花顺"""
        return self._suited_fives(CombinationType.STRAIGHT_FLUSH)

    def gen_full_houses(self) -> List[Hint]:
        """生成所有葫芦: 任一三条 + 其他点数的任一对子"""
        hints = []
        for triple in self._same_rank_sets(3):
            for pair in self._same_rank_sets(2):
                if pair[0].rank != triple[0].rank:
                    hints.append(make_hint(triple + pair, CombinationType.FULL_HOUSE))
        return hints

    def gen_four_plus_one(self) -> List[Hint]:
        """生成所有金刚: 四条 + 其他点数的任一张"""
        hints = []
        for quad in self._groups_of(4):
            for kicker in self.hand:
                if kicker.rank != quad[0].rank:
                    hints.append(make_hint(quad + [kicker], CombinationType.FOUR_PLUS_ONE))
        return hints

    def opening_hints(self) -> List[Hint]:
        """首出提示: 最小的几张单张、对子和一个三条"""
        hints = self.gen_singles()[:OPENING_SINGLES]
        hints += [make_hint(pair, CombinationType.PAIR) for pair in self._groups_of(2)[:OPENING_PAIRS]]
        hints += [make_hint(triple, CombinationType.TRIPLE) for triple in self._groups_of(3)[:OPENING_TRIPLES]]
        return hints

    def generate_responses(self, last_play: Sequence[Card]) -> List[Hint]:
        """
        生成能压过上家的同牌型候选

        Args:
            last_play: 上家的出牌

        Returns:
            强度严格大于上家的候选
        """
        last = Combination.from_cards(last_play)
        responder = self._responders.get(last.combo_type)
        if responder is None:
            return []

        last_strength = last.strength
        return [hint for hint in responder() if hint.strength > last_strength]

    def legal_candidates(
        self,
        last_play: Optional[Sequence[Card]],
        player_count: int = 4,
    ) -> List[Hint]:
        """
        所有合法候选，按强度升序 (同强度保持发现顺序)

        先用出牌后的剩余手牌做合法性验证，再对同牌型同强度的候选去重

        Args:
            last_play: 桌面上最近一手牌 (空表示首出)
            player_count: 玩家人数

        Returns:
            候选列表
        """
        if last_play:
            candidates = self.generate_responses(last_play)
        else:
            candidates = self.opening_hints()

        legal = [
            hint for hint in candidates
            if RuleEngine.is_valid_play(
                hint.cards, last_play, player_count, remove_cards(self.hand, hint.cards)
            )
        ]
        logger.debug(f"{len(legal)}/{len(candidates)} legal candidates for {len(self.hand)} cards")
        return sorted(_unique_strength(legal), key=lambda h: h.strength)


def get_card_hints(
    hand: Sequence[Card],
    last_play: Optional[Sequence[Card]],
    player_count: int = 4,
) -> List[Hint]:
    """
    出牌提示

    Args:
        hand: 手牌
        last_play: 桌面上最近一手牌
        player_count: 玩家人数

    Returns:
        最多 5 个提示，从弱到强
    """
    return HintGenerator(hand).legal_candidates(last_play, player_count)[:MAX_HINTS]


def get_auto_play_suggestion(
    hand: Sequence[Card],
    last_play: Optional[Sequence[Card]],
    player_count: int = 4,
) -> Optional[List[Card]]:
    """自动出牌建议: 最弱的合法候选，没有则返回 None"""
    candidates = HintGenerator(hand).legal_candidates(last_play, player_count)
    if not candidates:
        return None
    return list(candidates[0].cards)


def should_auto_pass(
    hand: Sequence[Card],
    last_play: Optional[Sequence[Card]],
    player_count: int = 4,
) -> bool:
    """没有任何可出的牌时自动过"""
    return get_auto_play_suggestion(hand, last_play, player_count) is None
