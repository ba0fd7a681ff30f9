"""
计分

支持两种计分方式:
- 简单计分: 剩余手牌数 (越少越好)
- 复杂计分: 基础分 + 名次奖励 - 剩余牌惩罚 + 额外惩罚
"""
from typing import List, Optional, Sequence

from .config import GameRules

# 剩余牌数达到该值时触发额外惩罚
TOO_MANY_CARDS_THRESHOLD = 10


class GameScoring:
    """
    计分器

    所有方法都是静态方法，无状态
    """

    @staticmethod
    def calculate_score(
        remaining_cards: int,
        position: int,
        total_players: int,
        rules: Optional[GameRules] = None,
    ) -> int:
        """简单计分: 直接返回剩余手牌数"""
        return remaining_cards

    @staticmethod
    def calculate_complex_score(
        remaining_cards: int,
        position: int,
        total_players: int,
        rules: GameRules,
    ) -> int:
        """
        复杂计分

        不做下限截断，得分可以为负

        Args:
            remaining_cards: 剩余手牌数
            position: 名次 (1 开始)
            total_players: 玩家人数
            rules: 规则集

        Returns:
            得分
        """
        scoring = rules.scoring
        score = scoring.base_score

        # 名次奖励
        if position == 1:
            score += scoring.finish_bonuses.first
        elif position == 2 and total_players == 4:
            score += scoring.finish_bonuses.second

        # 最后一名惩罚
        if position == total_players:
            score += scoring.penalties.last_place

        # 剩余手牌惩罚
        score -= remaining_cards * scoring.card_count_multiplier

        # 剩余牌过多额外惩罚
        if remaining_cards >= TOO_MANY_CARDS_THRESHOLD:
            score += scoring.penalties.too_many_cards

        return score

    @staticmethod
    def finishing_positions(remaining_by_player: Sequence[int]) -> List[int]:
        """
        按剩余手牌数排名 (少者在前，相同时座位靠前者在前)

        Returns:
            各座位的名次 (1 开始)
        """
        order = sorted(range(len(remaining_by_player)), key=lambda i: (remaining_by_player[i], i))
        positions = [0] * len(remaining_by_player)
        for place, seat in enumerate(order, start=1):
            positions[seat] = place
        return positions

    @staticmethod
    def score_round(
        remaining_by_player: Sequence[int],
        rules: Optional[GameRules] = None,
        complex_scoring: bool = False,
    ) -> List[int]:
        """
        结算一局

        Args:
            remaining_by_player: 各座位剩余手牌数
            rules: 规则集 (复杂计分时必需)
            complex_scoring: 是否使用复杂计分

        Returns:
            各座位得分
        """
        if complex_scoring and rules is None:
            raise ValueError("complex scoring requires rules")

        total = len(remaining_by_player)
        positions = GameScoring.finishing_positions(remaining_by_player)
        scores = []
        for remaining, position in zip(remaining_by_player, positions):
            if complex_scoring:
                scores.append(GameScoring.calculate_complex_score(remaining, position, total, rules))
            else:
                scores.append(GameScoring.calculate_score(remaining, position, total, rules))
        return scores
