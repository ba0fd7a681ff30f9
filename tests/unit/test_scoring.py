"""计分测试"""
import pytest

from bigtwo.config import FinishBonuses, GameRules, Penalties, PRESET_RULES, ScoringRules
from bigtwo.scoring import GameScoring


@pytest.fixture
def bonus_rules():
    return GameRules(
        id="bonus",
        scoring=ScoringRules(
            base_score=0,
            card_count_multiplier=1,
            finish_bonuses=FinishBonuses(first=5, second=3),
            penalties=Penalties(last_place=-4, too_many_cards=-10),
        ),
    )


class TestCalculateScore:
    """简单计分测试"""

    def test_winner_scores_zero(self):
        assert GameScoring.calculate_score(0, 1, 4, PRESET_RULES["classic"]) == 0

    def test_returns_remaining(self):
        assert GameScoring.calculate_score(7, 3, 4, PRESET_RULES["classic"]) == 7

    def test_rules_optional(self):
        assert GameScoring.calculate_score(4, 2, 3) == 4


class TestCalculateComplexScore:
    """复杂计分测试"""

    def test_degenerates_without_bonuses(self):
        rules = GameRules(id="plain", scoring=ScoringRules(base_score=10, card_count_multiplier=2))
        assert GameScoring.calculate_complex_score(5, 2, 4, rules) == 0
        assert GameScoring.calculate_complex_score(3, 1, 4, rules) == 4

    def test_first_place(self, bonus_rules):
        assert GameScoring.calculate_complex_score(0, 1, 4, bonus_rules) == 5

    def test_second_place_four_players(self, bonus_rules):
        assert GameScoring.calculate_complex_score(3, 2, 4, bonus_rules) == 0

    def test_second_place_bonus_only_in_four_player_game(self, bonus_rules):
        assert GameScoring.calculate_complex_score(3, 2, 3, bonus_rules) == -3

    def test_last_place_with_too_many_cards(self, bonus_rules):
        # -4 (最后一名) - 11 (剩余牌) - 10 (牌过多)
        assert GameScoring.calculate_complex_score(11, 4, 4, bonus_rules) == -25

    def test_too_many_cards_threshold(self, bonus_rules):
        assert GameScoring.calculate_complex_score(9, 3, 4, bonus_rules) == -9
        assert GameScoring.calculate_complex_score(10, 3, 4, bonus_rules) == -20

    def test_last_place_in_two_player_game(self, bonus_rules):
        assert GameScoring.calculate_complex_score(2, 2, 2, bonus_rules) == -6

    def test_no_clamping(self):
        rules = GameRules(id="harsh", scoring=ScoringRules(base_score=0, card_count_multiplier=5))
        assert GameScoring.calculate_complex_score(13, 4, 4, rules) == -65

    def test_classic_preset(self):
        assert GameScoring.calculate_complex_score(6, 3, 4, PRESET_RULES["classic"]) == -6


class TestScoreRound:
    """一局结算测试"""

    def test_finishing_positions(self):
        assert GameScoring.finishing_positions([5, 0, 5, 2]) == [3, 1, 4, 2]

    def test_simple_round(self):
        assert GameScoring.score_round([5, 0, 7, 2]) == [5, 0, 7, 2]

    def test_complex_round(self, bonus_rules):
        scores = GameScoring.score_round([4, 0, 11, 2], bonus_rules, complex_scoring=True)
        # 名次: 3, 1, 4, 2
        assert scores == [-4, 5, -25, 1]

    def test_complex_round_requires_rules(self):
        with pytest.raises(ValueError):
            GameScoring.score_round([0, 3], complex_scoring=True)
