"""Standings table calculation.

Rebuilds the whole standings table from the complete match history:
fold every decided match into fresh per-participant records, compute the
requested tiebreakers over those records, sort, and assign ranks.
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

from typing import Dict, List, Mapping, Optional, Sequence, Union

from swisstour.constants import (
    MEDIAN_BUCHHOLZ_MIN_OPPONENTS,
    WEIGHT_BYE,
    WEIGHT_DRAW,
    WEIGHT_LOSS,
    WEIGHT_WIN,
)
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.profile import (
    ScoreWeight,
    SortDirection,
    Tiebreaker,
    TiebreakerDefinition,
    score_weight_map,
)
from swisstour.models.standing import Standing
from swisstour.tournament.match_points import (
    completed_matches_for,
    index_standings,
    matches_by_round,
    opponent_ids,
    weighted_points,
)
from swisstour.tournament.tiebreak_calculator import TiebreakCalculator
from swisstour.utils import setup_logger

logger = setup_logger(__name__)


class StandingCalculator:
    """Builds ranked standings from participants and match history.

    Standings are created fresh on every call and never patched from a
    previous computation.
    """

    def __init__(self, tiebreak_calculator: Optional[TiebreakCalculator] = None):
        self.tiebreak_calculator = tiebreak_calculator or TiebreakCalculator()

    def calculate(
        self,
        participants: Sequence[Participant],
        matches: Sequence[TournamentMatch],
        score_weights: Sequence[ScoreWeight],
        tiebreakers: Sequence[Union[Tiebreaker, str]],
    ) -> List[Standing]:
        """Compute the ranked standings table.

        Args:
            participants: Everyone who gets a row, in registration order
            matches: Full match history; undecided matches are skipped
            score_weights: Points for win/draw/loss/bye (missing keys count 0)
            tiebreakers: Ordered tiebreakers applied after points

        Returns:
            One standing per participant, sorted, with ranks 1..N
        """
        if not participants:
            return []

        selected = _coerce_tiebreakers(tiebreakers)
        standings = self._aggregate(participants, matches, score_weights)

        needs_buchholz = (
            Tiebreaker.BUCHHOLZ in selected or Tiebreaker.MEDIAN_BUCHHOLZ in selected
        )
        for standing in standings:
            pid = standing.participant_id
            standing.update_tiebreakers(
                buchholz=(
                    self.calculate_buchholz(pid, matches, standings)
                    if needs_buchholz
                    else 0.0
                ),
                median_buchholz=(
                    self.calculate_median_buchholz(pid, matches, standings)
                    if Tiebreaker.MEDIAN_BUCHHOLZ in selected
                    else 0.0
                ),
                progressive=(
                    self.calculate_progressive(pid, matches, score_weights)
                    if Tiebreaker.PROGRESSIVE in selected
                    else 0.0
                ),
                opponent_win_percentage=(
                    self.calculate_opponent_win_percentage(pid, matches, standings)
                    if Tiebreaker.OPPONENT_WIN_PERCENTAGE in selected
                    else 0.0
                ),
            )

        # Stable sort: fully tied standings keep participant order
        standings.sort(
            key=lambda s: (-s.points, *(-s.tiebreak_value(tb) for tb in selected))
        )
        _assign_ranks(standings)
        logger.debug(
            "Calculated standings for %d participants from %d matches",
            len(standings),
            len(matches),
        )
        return standings

    def calculate_with_profile(
        self,
        participants: Sequence[Participant],
        matches: Sequence[TournamentMatch],
        score_weights: Sequence[ScoreWeight],
        tiebreaker_defs: Sequence[TiebreakerDefinition],
    ) -> List[Standing]:
        """Compute standings ranked by a game profile's tiebreakers.

        Aggregation is identical to :meth:`calculate`. Each standing's
        ``calculated_tiebreakers`` is filled from ``tiebreaker_defs`` and the
        sort honours each definition's direction.
        """
        if not participants:
            return []

        standings = self._aggregate(participants, matches, score_weights)
        all_values = self.tiebreak_calculator.calculate_all(
            matches, standings, tiebreaker_defs, score_weights
        )
        for standing in standings:
            for key, value in all_values[standing.participant_id].items():
                standing.set_calculated_tiebreaker(key, value)

        def sort_key(standing: Standing):
            key = [-standing.points]
            for definition in tiebreaker_defs:
                value = standing.get_tiebreaker(definition.key)
                if definition.direction is SortDirection.DESCENDING:
                    value = -value
                key.append(value)
            return key

        standings.sort(key=sort_key)
        _assign_ranks(standings)
        logger.debug(
            "Calculated profile standings for %d participants (%d tiebreakers)",
            len(standings),
            len(tiebreaker_defs),
        )
        return standings

    # ========== Tiebreak formulas ==========

    def calculate_buchholz(
        self,
        participant_id: str,
        matches: Sequence[TournamentMatch],
        all_standings: Sequence[Standing],
    ) -> float:
        """Sum of opponents' current points."""
        return float(sum(_opponent_points(participant_id, matches, all_standings)))

    def calculate_median_buchholz(
        self,
        participant_id: str,
        matches: Sequence[TournamentMatch],
        all_standings: Sequence[Standing],
    ) -> float:
        """Buchholz without the highest and lowest opponent.

        With fewer than three opponents nothing is dropped.
        """
        scores = sorted(_opponent_points(participant_id, matches, all_standings))
        if len(scores) < MEDIAN_BUCHHOLZ_MIN_OPPONENTS:
            return self.calculate_buchholz(participant_id, matches, all_standings)
        return float(sum(scores[1:-1]))

    def calculate_progressive(
        self,
        participant_id: str,
        matches: Sequence[TournamentMatch],
        score_weights: Sequence[ScoreWeight],
    ) -> float:
        """Sum of the running score after each round.

        Rounds are ordered by natural sort of ``round_id``, so an early
        strong round contributes more than a late one.
        """
        weights = score_weight_map(score_weights)
        running_total = 0.0
        progressive = 0.0
        for round_matches in matches_by_round(
            completed_matches_for(participant_id, matches)
        ):
            for match in round_matches:
                running_total += weighted_points(participant_id, match, weights)
            progressive += running_total
        return progressive

    def calculate_opponent_win_percentage(
        self,
        participant_id: str,
        matches: Sequence[TournamentMatch],
        all_standings: Sequence[Standing],
    ) -> float:
        """Mean win ratio of opponents that have played at least once."""
        standing_map = index_standings(all_standings)
        ratios = []
        for opponent in opponent_ids(participant_id, matches):
            standing = standing_map.get(opponent)
            if standing is not None and standing.matches_played > 0:
                ratios.append(standing.wins / standing.matches_played)
        if not ratios:
            return 0.0
        return sum(ratios) / len(ratios)

    # ========== Aggregation ==========

    def _aggregate(
        self,
        participants: Sequence[Participant],
        matches: Sequence[TournamentMatch],
        score_weights: Sequence[ScoreWeight],
    ) -> List[Standing]:
        weights = score_weight_map(score_weights)
        by_participant: Dict[str, Standing] = {}
        for participant in participants:
            if participant.id in by_participant:
                continue
            by_participant[participant.id] = Standing(
                participant_id=participant.id,
                tournament_id=participant.tournament_id,
            )

        for match in matches:
            self._process_match(match, by_participant, weights)
        return list(by_participant.values())

    def _process_match(
        self,
        match: TournamentMatch,
        standings: Dict[str, Standing],
        weights: Mapping[str, float],
    ) -> None:
        result = match.result
        if result is MatchResult.NOT_PLAYED:
            return

        player1 = standings.get(match.player1_id)
        player2 = standings.get(match.player2_id) if match.player2_id else None

        if result is MatchResult.BYE:
            if player1 is not None:
                player1.record_bye(weights.get(WEIGHT_BYE, 0.0))
        elif result is MatchResult.DOUBLE_LOSS:
            for standing in (player1, player2):
                if standing is not None:
                    standing.record_loss(weights.get(WEIGHT_LOSS, 0.0))
        elif result is MatchResult.DRAW:
            for standing in (player1, player2):
                if standing is not None:
                    standing.record_draw(weights.get(WEIGHT_DRAW, 0.0))
        else:
            if result is MatchResult.PLAYER_ONE_WIN:
                winner, loser = player1, player2
            else:
                winner, loser = player2, player1
            if winner is not None:
                winner.record_win(weights.get(WEIGHT_WIN, 0.0))
            if loser is not None:
                loser.record_loss(weights.get(WEIGHT_LOSS, 0.0))

        _accumulate_stats(match, player1, player2)


def _opponent_points(
    participant_id: str,
    matches: Sequence[TournamentMatch],
    all_standings: Sequence[Standing],
) -> List[float]:
    standing_map = index_standings(all_standings)
    return [
        standing_map[opponent].points
        for opponent in opponent_ids(participant_id, matches)
        if opponent in standing_map
    ]


def _accumulate_stats(
    match: TournamentMatch,
    player1: Optional[Standing],
    player2: Optional[Standing],
) -> None:
    for standing, stats in (
        (player1, match.player1_stats),
        (player2, match.player2_stats),
    ):
        if standing is None or not stats:
            continue
        for key, value in stats.items():
            if isinstance(value, (int, float)):
                standing.add_to_accumulated_stat(key, float(value))


def _assign_ranks(standings: List[Standing]) -> None:
    for index, standing in enumerate(standings, start=1):
        standing.update_rank(index)


def _coerce_tiebreakers(
    tiebreakers: Sequence[Union[Tiebreaker, str]],
) -> List[Tiebreaker]:
    """Accept enum members or stored keys; unknown keys are dropped."""
    selected = []
    for tiebreaker in tiebreakers:
        if isinstance(tiebreaker, Tiebreaker):
            selected.append(tiebreaker)
            continue
        try:
            selected.append(Tiebreaker(tiebreaker))
        except ValueError:
            logger.warning("Ignoring unknown tiebreaker '%s'", tiebreaker)
    return selected
