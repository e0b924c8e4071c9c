"""Rule-driven match scoring.

Turns a match result plus each side's recorded stats into a point award
for each side. The rules are data (see :class:`ScoringRule`); nothing here
knows about any particular game.

Rules are tested highest priority first and the first matching rule wins.
Each side is evaluated independently from its own perspective:

======================  ==============  ==============
Result                  Player one      Player two
======================  ==============  ==============
``player_one_win``      win             loss
``player_two_win``      loss            win
``draw``                draw            draw
``double_loss``         loss            loss
``bye``                 bye             loss
``not_played``          not_played      not_played
======================  ==============  ==============
"""

# Swisstour
# Copyright (C) 2025  Swisstour developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import operator
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from swisstour.constants import (
    OP_EQ,
    OP_GT,
    OP_GTE,
    OP_LT,
    OP_LTE,
    OUTCOME_BYE,
    OUTCOME_DRAW,
    OUTCOME_LOSS,
    OUTCOME_NOT_PLAYED,
    OUTCOME_WIN,
)
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.profile import ConditionType, ScoringCondition, ScoringRule
from swisstour.type_hints import PointAward, StatMap
from swisstour.utils import setup_logger, to_number

logger = setup_logger(__name__)

_COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    OP_GT: operator.gt,
    OP_GTE: operator.ge,
    OP_LT: operator.lt,
    OP_LTE: operator.le,
    OP_EQ: operator.eq,
}

# (player one, player two)
_PERSPECTIVES: Dict[MatchResult, tuple] = {
    MatchResult.PLAYER_ONE_WIN: (OUTCOME_WIN, OUTCOME_LOSS),
    MatchResult.PLAYER_TWO_WIN: (OUTCOME_LOSS, OUTCOME_WIN),
    MatchResult.DRAW: (OUTCOME_DRAW, OUTCOME_DRAW),
    MatchResult.DOUBLE_LOSS: (OUTCOME_LOSS, OUTCOME_LOSS),
    MatchResult.BYE: (OUTCOME_BYE, OUTCOME_LOSS),
    MatchResult.NOT_PLAYED: (OUTCOME_NOT_PLAYED, OUTCOME_NOT_PLAYED),
}


def perspective(result: MatchResult, is_player_one: bool) -> str:
    """Outcome label of ``result`` as seen by one side."""
    player1_view, player2_view = _PERSPECTIVES[result]
    return player1_view if is_player_one else player2_view


def _stat(stats: Mapping, key: Optional[str]) -> float:
    return to_number(stats.get(key))


def _compare(left: float, op: str, right: float) -> bool:
    return _COMPARATORS[op](left, right)


def _matches_result(
    condition: ScoringCondition, outcome: str, own: Mapping, opponent: Mapping
) -> bool:
    return condition.result_value == outcome


def _matches_stat_comparison(
    condition: ScoringCondition, outcome: str, own: Mapping, opponent: Mapping
) -> bool:
    return _compare(
        _stat(own, condition.stat), condition.operator, _stat(opponent, condition.stat)
    )


def _matches_stat_threshold(
    condition: ScoringCondition, outcome: str, own: Mapping, opponent: Mapping
) -> bool:
    return _compare(_stat(own, condition.stat), condition.operator, condition.value)


def _matches_margin_difference(
    condition: ScoringCondition, outcome: str, own: Mapping, opponent: Mapping
) -> bool:
    """Margin test with direction-dependent eligibility.

    ``<``/``<=`` only apply to a side that is behind and compare the
    absolute margin ("lost by less than N"). ``>``/``>=`` only apply to a
    side that is ahead and compare the signed margin ("won by N or more").
    ``==`` compares the signed margin with no eligibility filter.
    """
    margin = _stat(own, condition.stat) - _stat(opponent, condition.stat)
    op = condition.operator
    if op in (OP_LT, OP_LTE):
        if margin >= 0:
            return False
        margin = abs(margin)
    elif op in (OP_GT, OP_GTE) and margin <= 0:
        return False
    return _compare(margin, op, condition.value)


_CONDITION_MATCHERS = {
    ConditionType.RESULT: _matches_result,
    ConditionType.STAT_COMPARISON: _matches_stat_comparison,
    ConditionType.STAT_THRESHOLD: _matches_stat_threshold,
    ConditionType.MARGIN_DIFFERENCE: _matches_margin_difference,
}

_unhandled = set(ConditionType) - set(_CONDITION_MATCHERS)
if _unhandled:
    raise ImportError(
        "No matcher registered for condition types: "
        + ", ".join(sorted(t.value for t in _unhandled))
    )


def condition_matches(
    condition: ScoringCondition,
    outcome: str,
    own_stats: Optional[Mapping] = None,
    opponent_stats: Optional[Mapping] = None,
) -> bool:
    """Test one condition for one side."""
    return _CONDITION_MATCHERS[condition.type](
        condition, outcome, own_stats or {}, opponent_stats or {}
    )


class ScoringRuleEvaluator:
    """Applies an ordered rule list to a match result.

    Stateless; one instance can score any number of matches.
    """

    def evaluate(
        self,
        result: MatchResult,
        rules: Sequence[ScoringRule],
        player1_stats: Optional[StatMap] = None,
        player2_stats: Optional[StatMap] = None,
    ) -> PointAward:
        """Return ``(player1_points, player2_points)`` for ``result``.

        An empty rule list scores ``(0.0, 0.0)``. A side no rule matches
        scores 0.0. Missing stats count as 0.
        """
        if not rules:
            return 0.0, 0.0

        ordered = self.sort_rules(rules)
        player1_stats = player1_stats or {}
        player2_stats = player2_stats or {}

        player1_points = self._evaluate_side(
            ordered, perspective(result, True), player1_stats, player2_stats
        )
        player2_points = self._evaluate_side(
            ordered, perspective(result, False), player2_stats, player1_stats
        )
        logger.debug(
            "Scored %s: %.2f / %.2f", result.value, player1_points, player2_points
        )
        return player1_points, player2_points

    def evaluate_match(
        self, match: TournamentMatch, rules: Sequence[ScoringRule]
    ) -> PointAward:
        """Score a match using its own result and stat maps."""
        return self.evaluate(
            match.result, rules, match.player1_stats, match.player2_stats
        )

    @staticmethod
    def sort_rules(rules: Sequence[ScoringRule]) -> List[ScoringRule]:
        """Highest priority first; ``sorted`` is stable so ties keep order."""
        return sorted(rules, key=lambda rule: rule.priority, reverse=True)

    @staticmethod
    def _evaluate_side(
        rules: List[ScoringRule],
        outcome: str,
        own_stats: Mapping,
        opponent_stats: Mapping,
    ) -> float:
        for rule in rules:
            if condition_matches(rule.condition, outcome, own_stats, opponent_stats):
                return float(rule.points)
        return 0.0
