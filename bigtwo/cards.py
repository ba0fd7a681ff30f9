"""
牌的定义与编码

大老二使用一副 52 张牌 (无王)：
- 点数 3-10, J, Q, K, A, 2 (2 最大)
- 花色 方块 < 梅花 < 红心 < 黑桃
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np


class Suit(IntEnum):
    """花色 (数值即比较顺序)"""
    DIAMONDS = 0
    CLUBS = 1
    HEARTS = 2
    SPADES = 3


class Rank(IntEnum):
    """点数 (A=14, 2=15)"""
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    TWO = 15


# 点数到显示字符的映射
RANK_TO_STR: Dict[int, str] = {
    3: '3', 4: '4', 5: '5', 6: '6', 7: '7',
    8: '8', 9: '9', 10: '10', 11: 'J', 12: 'Q',
    13: 'K', 14: 'A', 15: '2'
}

# 显示字符到点数的映射
STR_TO_RANK: Dict[str, int] = {v: k for k, v in RANK_TO_STR.items()}

# 花色字母 / 符号
SUIT_TO_LETTER: Dict[Suit, str] = {
    Suit.DIAMONDS: 'D', Suit.CLUBS: 'C', Suit.HEARTS: 'H', Suit.SPADES: 'S'
}
LETTER_TO_SUIT: Dict[str, Suit] = {v: k for k, v in SUIT_TO_LETTER.items()}
SUIT_TO_SYMBOL: Dict[Suit, str] = {
    Suit.DIAMONDS: '♦', Suit.CLUBS: '♣', Suit.HEARTS: '♥', Suit.SPADES: '♠'
}

# 理牌时的花色显示顺序: 黑桃, 红心, 方块, 梅花
DISPLAY_SUIT_ORDER: Tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)

HAND_SIZE = 13
NUM_CARDS = 52


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变单张牌

    Attributes:
        suit: 花色
        rank: 点数 (3..15)
    """
    suit: Suit
    rank: Rank

    def __post_init__(self):
        object.__setattr__(self, 'suit', _coerce_suit(self.suit))
        object.__setattr__(self, 'rank', _coerce_rank(self.rank))

    @property
    def display(self) -> str:
        return RANK_TO_STR[self.rank]

    @property
    def symbol(self) -> str:
        """带花色符号的显示，如 "♠A" """
        return SUIT_TO_SYMBOL[self.suit] + self.display

    @classmethod
    def from_dict(cls, d: dict) -> 'Card':
        """从普通记录 {"suit": "hearts", "rank": 5, ...} 创建，忽略 display"""
        return cls(suit=d['suit'], rank=d['rank'])

    def to_dict(self) -> dict:
        return {'suit': self.suit.name.lower(), 'rank': int(self.rank), 'display': self.display}

    def __str__(self) -> str:
        return card_to_str(self)


def _coerce_suit(suit) -> Suit:
    if isinstance(suit, Suit):
        return suit
    if isinstance(suit, str):
        try:
            return Suit[suit.upper()]
        except KeyError:
            raise ValueError(f"Invalid suit: {suit!r}") from None
    if isinstance(suit, int) and not isinstance(suit, bool):
        try:
            return Suit(suit)
        except ValueError:
            raise ValueError(f"Invalid suit: {suit!r}") from None
    raise ValueError(f"Invalid suit: {suit!r}")


def _coerce_rank(rank) -> Rank:
    if isinstance(rank, Rank):
        return rank
    if isinstance(rank, int) and not isinstance(rank, bool):
        try:
            return Rank(rank)
        except ValueError:
            raise ValueError(f"Invalid rank: {rank!r}") from None
    raise ValueError(f"Invalid rank: {rank!r}")


# 完整牌组 (52 张)，按花色、点数排列
FULL_DECK: Tuple[Card, ...] = tuple(
    Card(suit, rank) for suit in Suit for rank in Rank
)


def rank_suit_value(rank: int, suit: int = Suit.SPADES) -> int:
    """
    由点数和花色直接计算比较序数

    序数 = 点数序号 * 4 + 花色序号，其中 3 -> 0, ..., A -> 11, 2 -> 13
    (点数序号 12 空缺，2 的序数为 52..55)

    Args:
        rank: 点数 (3..15)
        suit: 花色，默认黑桃 (同点数中最大)

    Returns:
        序数 (0..47 或 52..55)
    """
    rank_index = 13 if rank == Rank.TWO else rank - 3
    return rank_index * 4 + int(suit)


def card_value(card: Card) -> int:
    """单张牌的比较序数，全局唯一，2♠ 最大 (55)"""
    return rank_suit_value(card.rank, card.suit)


def create_deck(rng: Optional[np.random.Generator] = None) -> List[Card]:
    """
    创建一副洗好的 52 张牌

    Args:
        rng: 随机数生成器，None 表示使用新的默认生成器

    Returns:
        洗好的牌列表
    """
    return shuffle_deck(FULL_DECK, rng)


def shuffle_deck(deck: Sequence[Card], rng: Optional[np.random.Generator] = None) -> List[Card]:
    """
    均匀随机洗牌，返回新列表，不修改输入

    Args:
        deck: 牌组
        rng: 随机数生成器 (可注入以便复现)

    Returns:
        洗好的新列表
    """
    if rng is None:
        rng = np.random.default_rng()
    order = rng.permutation(len(deck))
    return [deck[i] for i in order]


def deal_cards(deck: List[Card], num_players: int) -> List[List[Card]]:
    """
    轮流发牌，每人最多 13 张

    从牌组末尾逐张取牌，牌组会被消耗。少于 4 人时剩余的牌不发出。

    Args:
        deck: 牌组 (会被修改)
        num_players: 玩家数 (1..4)

    Returns:
        各玩家手牌，按比较序数升序
    """
    if not 1 <= num_players <= 4:
        raise ValueError(f"num_players must be between 1 and 4, got {num_players}")

    hands: List[List[Card]] = [[] for _ in range(num_players)]
    for _ in range(HAND_SIZE):
        for player in range(num_players):
            if deck:
                hands[player].append(deck.pop())

    for hand in hands:
        hand.sort(key=card_value)
    return hands


def _display_suit_index(card: Card) -> int:
    return DISPLAY_SUIT_ORDER.index(card.suit)


def sort_cards(cards: Sequence[Card], by: str = "auto") -> List[Card]:
    """
    理牌

    Args:
        cards: 牌列表
        by: "suit" / "auto" 先按花色 (黑桃, 红心, 方块, 梅花) 再按点数;
            "rank" 先按点数再按花色

    Returns:
        排好序的新列表
    """
    if by in ("suit", "auto"):
        return sorted(cards, key=lambda c: (_display_suit_index(c), c.rank))
    if by == "rank":
        return sorted(cards, key=lambda c: (c.rank, _display_suit_index(c)))
    raise ValueError(f"Unknown sort key: {by!r}")


def auto_arrange_cards(cards: Sequence[Card]) -> List[Card]:
    """按花色分组 (黑桃, 红心, 方块, 梅花)，组内按点数升序"""
    groups: Dict[Suit, List[Card]] = {suit: [] for suit in DISPLAY_SUIT_ORDER}
    for card in cards:
        groups[card.suit].append(card)

    result = []
    for suit in DISPLAY_SUIT_ORDER:
        result.extend(sorted(groups[suit], key=lambda c: c.rank))
    return result


def has_card(cards: Sequence[Card], rank: int, suit: int) -> bool:
    return any(c.rank == rank and c.suit == suit for c in cards)


def remove_cards(hand: Sequence[Card], cards: Sequence[Card]) -> List[Card]:
    """从手牌中移除打出的牌，返回剩余手牌"""
    played = set(cards)
    return [c for c in hand if c not in played]


def card_to_str(card: Card) -> str:
    """如 "3D", "10S", "2H" """
    return card.display + SUIT_TO_LETTER[card.suit]


def str_to_card(s: str) -> Card:
    """
    将字符串转换为牌

    Args:
        s: 如 "3D", "10s", "AS"

    Returns:
        牌
    """
    s = s.strip().upper()
    if len(s) < 2 or s[:-1] not in STR_TO_RANK or s[-1] not in LETTER_TO_SUIT:
        raise ValueError(f"Invalid card string: {s!r}")
    return Card(LETTER_TO_SUIT[s[-1]], Rank(STR_TO_RANK[s[:-1]]))


def cards_to_str(cards: Sequence[Card]) -> str:
    """
    将牌列表转换为可读字符串

    Returns:
        如 "3D 4C 5H"，空列表返回 "Pass"
    """
    if not cards:
        return "Pass"
    return ' '.join(card_to_str(c) for c in cards)


def str_to_cards(s: str) -> List[Card]:
    """将空格分隔的字符串转换为牌列表，如 "3D 4C 5H" """
    return [str_to_card(token) for token in s.split()]
