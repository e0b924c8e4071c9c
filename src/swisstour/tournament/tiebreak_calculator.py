"""Profile-driven tiebreak calculation.

Computes an arbitrary, ordered set of named tiebreak metrics for one
participant from match history and the current standings. Which metrics
are computed is decided by the game profile's :class:`TiebreakerDefinition`
list rather than by code.

Opponent-based metrics look only at completed, non-bye matches. Stat-based
metrics look at every completed match, byes included.
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

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from swisstour.constants import MEDIAN_BUCHHOLZ_MIN_OPPONENTS
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.profile import (
    ScoreWeight,
    TiebreakerDefinition,
    TiebreakerType,
    score_weight_map,
)
from swisstour.models.standing import Standing
from swisstour.tournament.match_points import (
    completed_matches_for,
    index_standings,
    matches_by_round,
    nominal_points,
    opponent_ids,
    stat_value,
    weighted_points,
)
from swisstour.type_hints import TiebreakValues
from swisstour.utils import setup_logger, to_number

logger = setup_logger(__name__)


@dataclass
class _TiebreakContext:
    """Inputs shared by every metric for one participant."""

    participant_id: str
    all_matches: Sequence[TournamentMatch]
    matches: List[TournamentMatch]
    standings: Dict[str, Standing]
    weights: Optional[Mapping[str, float]]

    @property
    def opponents(self) -> List[str]:
        return opponent_ids(self.participant_id, self.matches)

    def opponent_points(self) -> List[float]:
        return [
            self.standings[opponent].points
            for opponent in self.opponents
            if opponent in self.standings
        ]


class TiebreakCalculator:
    """Calculates the tiebreak values configured by a game profile.

    Supported metrics:

    - Buchholz: sum of opponents' points
    - Median Buchholz: Buchholz dropping highest and lowest (3+ opponents)
    - Progressive: sum of running totals after each round
    - Opponent Win %: mean of opponents' win ratios
    - Opponent's Opponent Win %: mean of opponents' Opponent Win %
    - Game Win %: own wins over own matches played
    - Sonneborn-Berger: beaten opponents' points plus half of drawn ones
    - Strength of Schedule: mean of opponents' points
    - Margin of Victory: sum of positive score margins
    - Stat Sum / Diff / Average / Max over a named match stat

    Head-to-head, opponent game win % and random cannot be derived from
    match data and always resolve to 0.0.
    """

    def calculate(
        self,
        participant_id: str,
        matches: Sequence[TournamentMatch],
        standings: Sequence[Standing],
        tiebreaker_defs: Sequence[TiebreakerDefinition],
        score_weights: Optional[Sequence[ScoreWeight]] = None,
    ) -> TiebreakValues:
        """Compute every configured tiebreaker for one participant.

        Args:
            participant_id: Participant to calculate for
            matches: Full match history of the tournament
            standings: Current standings (points, record) of all participants
            tiebreaker_defs: Ordered tiebreaker definitions
            score_weights: Weights for Progressive; nominal 3/1.5/0 when omitted

        Returns:
            Mapping of definition key to value. Empty for an empty config.
        """
        if not tiebreaker_defs:
            return {}

        context = _TiebreakContext(
            participant_id=participant_id,
            all_matches=matches,
            matches=completed_matches_for(participant_id, matches),
            standings=index_standings(standings),
            weights=score_weight_map(score_weights) if score_weights else None,
        )

        values: TiebreakValues = {}
        for definition in tiebreaker_defs:
            value = _METRICS[definition.type](self, context, definition)
            if definition.min_value is not None and value < definition.min_value:
                value = definition.min_value
            values[definition.key] = value
        return values

    def calculate_all(
        self,
        matches: Sequence[TournamentMatch],
        standings: Sequence[Standing],
        tiebreaker_defs: Sequence[TiebreakerDefinition],
        score_weights: Optional[Sequence[ScoreWeight]] = None,
    ) -> Dict[str, TiebreakValues]:
        """Compute the configured tiebreakers for every standing."""
        return {
            standing.participant_id: self.calculate(
                standing.participant_id,
                matches,
                standings,
                tiebreaker_defs,
                score_weights,
            )
            for standing in standings
        }

    # ========== Opponent based ==========

    def _calculate_buchholz(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        return float(sum(context.opponent_points()))

    def _calculate_median_buchholz(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        scores = sorted(context.opponent_points())
        if len(scores) < MEDIAN_BUCHHOLZ_MIN_OPPONENTS:
            return float(sum(scores))
        return float(sum(scores[1:-1]))

    def _calculate_strength_of_schedule(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        scores = context.opponent_points()
        if not scores:
            return 0.0
        return sum(scores) / len(scores)

    def _calculate_opponent_win_percentage(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        return _opponent_win_percentage(context.opponents, context.standings)

    def _calculate_opponent_opponent_win_percentage(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        percentages = [
            _opponent_win_percentage(
                opponent_ids(
                    opponent, completed_matches_for(opponent, context.all_matches)
                ),
                context.standings,
            )
            for opponent in context.opponents
        ]
        if not percentages:
            return 0.0
        return sum(percentages) / len(percentages)

    def _calculate_sonneborn_berger(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        total = 0.0
        for match in context.matches:
            opponent = match.opponent_of(context.participant_id)
            if opponent is None or opponent not in context.standings:
                continue
            opponent_points = context.standings[opponent].points
            if match.result is MatchResult.DRAW:
                total += 0.5 * opponent_points
            elif _won(context.participant_id, match):
                total += opponent_points
        return total

    # ========== Own record ==========

    def _calculate_progressive(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        running_total = 0.0
        progressive = 0.0
        for round_matches in matches_by_round(context.matches):
            for match in round_matches:
                if context.weights is not None:
                    running_total += weighted_points(
                        context.participant_id, match, context.weights
                    )
                else:
                    running_total += nominal_points(context.participant_id, match)
            progressive += running_total
        return progressive

    def _calculate_game_win_percentage(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        standing = context.standings.get(context.participant_id)
        if standing is None or standing.matches_played == 0:
            return 0.0
        return standing.wins / standing.matches_played

    def _calculate_margin_of_victory(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        total = 0.0
        for match in context.matches:
            if match.is_bye:
                continue
            if match.player1_score is None or match.player2_score is None:
                continue
            own = match.score_for(context.participant_id)
            opponent = match.score_for(match.opponent_of(context.participant_id))
            margin = own - opponent
            if margin > 0:
                total += margin
        return total

    # ========== Stat based ==========

    def _own_stat_values(
        self, context: _TiebreakContext, stat: str
    ) -> List[float]:
        values = []
        for match in context.matches:
            stats = match.stats_for(context.participant_id)
            if stats is not None and stats.get(stat) is not None:
                values.append(to_number(stats[stat]))
        return values

    def _calculate_stat_sum(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        return sum(self._own_stat_values(context, definition.stat))

    def _calculate_stat_diff(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        total = 0.0
        for match in context.matches:
            own = match.stats_for(context.participant_id) or {}
            opponent = match.opponent_stats_for(context.participant_id) or {}
            total += stat_value(own, definition.stat) - stat_value(
                opponent, definition.stat
            )
        return total

    def _calculate_stat_average(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        values = self._own_stat_values(context, definition.stat)
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _calculate_stat_max(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        # Floored at 0
        return max([0.0, *self._own_stat_values(context, definition.stat)])

    # ========== Not derivable from match data ==========

    def _calculate_unsupported(
        self, context: _TiebreakContext, definition: TiebreakerDefinition
    ) -> float:
        logger.debug(
            "Tiebreaker '%s' (%s) is not computed from match data; using 0.0",
            definition.key,
            definition.type.value,
        )
        return 0.0


def _won(participant_id: str, match: TournamentMatch) -> bool:
    if match.result is MatchResult.PLAYER_ONE_WIN:
        return match.player1_id == participant_id
    if match.result is MatchResult.PLAYER_TWO_WIN:
        return match.player2_id == participant_id
    return False


def _opponent_win_percentage(
    opponents: List[str], standings: Mapping[str, Standing]
) -> float:
    """Mean of win ratios, skipping opponents without a played match."""
    ratios = [
        standings[opponent].wins / standings[opponent].matches_played
        for opponent in opponents
        if opponent in standings and standings[opponent].matches_played > 0
    ]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


_METRICS: Dict[
    TiebreakerType,
    Callable[[TiebreakCalculator, _TiebreakContext, TiebreakerDefinition], float],
] = {
    TiebreakerType.BUCHHOLZ: TiebreakCalculator._calculate_buchholz,
    TiebreakerType.MEDIAN_BUCHHOLZ: TiebreakCalculator._calculate_median_buchholz,
    TiebreakerType.PROGRESSIVE: TiebreakCalculator._calculate_progressive,
    TiebreakerType.OPPONENT_WIN_PERCENTAGE: (
        TiebreakCalculator._calculate_opponent_win_percentage
    ),
    TiebreakerType.OPPONENT_OPPONENT_WIN_PERCENTAGE: (
        TiebreakCalculator._calculate_opponent_opponent_win_percentage
    ),
    TiebreakerType.GAME_WIN_PERCENTAGE: (
        TiebreakCalculator._calculate_game_win_percentage
    ),
    TiebreakerType.OPPONENT_GAME_WIN_PERCENTAGE: (
        TiebreakCalculator._calculate_unsupported
    ),
    TiebreakerType.HEAD_TO_HEAD: TiebreakCalculator._calculate_unsupported,
    TiebreakerType.SONNEBORN_BERGER: TiebreakCalculator._calculate_sonneborn_berger,
    TiebreakerType.STAT_SUM: TiebreakCalculator._calculate_stat_sum,
    TiebreakerType.STAT_DIFF: TiebreakCalculator._calculate_stat_diff,
    TiebreakerType.STAT_AVERAGE: TiebreakCalculator._calculate_stat_average,
    TiebreakerType.STAT_MAX: TiebreakCalculator._calculate_stat_max,
    TiebreakerType.STRENGTH_OF_SCHEDULE: (
        TiebreakCalculator._calculate_strength_of_schedule
    ),
    TiebreakerType.MARGIN_OF_VICTORY: TiebreakCalculator._calculate_margin_of_victory,
    TiebreakerType.RANDOM: TiebreakCalculator._calculate_unsupported,
}

_unhandled = set(TiebreakerType) - set(_METRICS)
if _unhandled:
    raise ImportError(
        "No metric registered for tiebreaker types: "
        + ", ".join(sorted(t.value for t in _unhandled))
    )
