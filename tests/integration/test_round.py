"""整局自动对局集成测试"""
import numpy as np
import pytest

from bigtwo.cards import NUM_CARDS, Card, Rank, Suit, card_value, create_deck, deal_cards, remove_cards
from bigtwo.config import PRESET_RULES
from bigtwo.hints import get_auto_play_suggestion, should_auto_pass
from bigtwo.rules import RuleEngine
from bigtwo.scoring import GameScoring

MAX_STEPS = 1000


def play_round(seed, num_players=4):
    """
    所有玩家都按自动出牌建议出牌，直到有人出完

    领出玩家没有合法出牌时 (三人局首出缺方块 3) 提前结束

    Returns:
        (初始手牌, 结束时手牌, 出牌记录, 赢家座位或 None)
    """
    rng = np.random.default_rng(seed)
    hands = deal_cards(create_deck(rng), num_players)
    initial = [list(h) for h in hands]
    history = []

    current = 0
    last_play = []
    last_player = None

    for _ in range(MAX_STEPS):
        # 一圈无人跟，回到最后出牌者，重新领出
        if current == last_player:
            last_play = []
            last_player = None

        hand = hands[current]
        suggestion = get_auto_play_suggestion(hand, last_play, num_players)

        if suggestion is None:
            if not last_play:
                return initial, hands, history, None
            history.append((current, [], last_play))
        else:
            remaining = remove_cards(hand, suggestion)
            history.append((current, suggestion, last_play))
            hands[current] = remaining
            last_play = suggestion
            last_player = current
            if not remaining:
                return initial, hands, history, current

        current = (current + 1) % num_players

    pytest.fail("round did not finish")


class TestAutoPlayRound:
    """自动对局测试"""

    @pytest.mark.parametrize("seed", [0, 7, 42, 2024])
    def test_every_play_is_valid(self, seed):
        initial, hands, history, _ = play_round(seed)
        assert len(history) > 0

        replay = [list(h) for h in initial]
        for seat, cards, last_play in history:
            if not cards:
                continue
            remaining = remove_cards(replay[seat], cards)
            assert RuleEngine.is_valid_play(cards, last_play, 4, remaining)
            if last_play:
                assert RuleEngine.is_higher_combination(cards, last_play)
            replay[seat] = remaining

        assert replay == hands

    @pytest.mark.parametrize("seed", [0, 7, 42, 2024])
    def test_cards_conserved(self, seed):
        initial, hands, history, _ = play_round(seed)
        played = [card for _, cards, _ in history for card in cards]
        held = [card for hand in hands for card in hand]
        assert len(played) + len(held) == NUM_CARDS
        dealt = [card for hand in initial for card in hand]
        assert sorted(played + held, key=card_value) == sorted(dealt, key=card_value)

    @pytest.mark.parametrize("seed", [0, 7, 42, 2024])
    def test_winner_and_scoring(self, seed):
        _, hands, _, winner = play_round(seed)
        remaining = [len(h) for h in hands]

        assert winner is not None
        assert remaining[winner] == 0

        simple = GameScoring.score_round(remaining)
        assert simple == remaining

        complex_scores = GameScoring.score_round(remaining, PRESET_RULES["classic"], complex_scoring=True)
        assert complex_scores == [-r for r in remaining]

    def test_passes_only_when_nothing_beats(self):
        initial, _, history, _ = play_round(3)
        replay = [list(h) for h in initial]
        for seat, cards, last_play in history:
            if cards:
                replay[seat] = remove_cards(replay[seat], cards)
            else:
                assert should_auto_pass(replay[seat], last_play, 4)


class TestThreePlayerOpening:
    """三人局首出测试"""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_diamond_three_holder_opens_with_it(self, seed):
        hands = deal_cards(create_deck(np.random.default_rng(seed)), 3)
        diamond_three = Card(Suit.DIAMONDS, Rank.THREE)

        for hand in hands:
            suggestion = get_auto_play_suggestion(hand, [], 3)
            if diamond_three in hand:
                assert diamond_three in suggestion
            else:
                assert suggestion is None
