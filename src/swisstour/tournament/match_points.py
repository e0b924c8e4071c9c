"""Helpers shared by the standings and tiebreak calculators.

Both calculators read the same facts out of match history: which matches a
participant took part in, who the real opponents were, and how many points
each match was worth to them.
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

from typing import Dict, Iterable, List, Mapping

from swisstour.constants import (
    PROGRESSIVE_POINT_SCALE,
    WEIGHT_BYE,
    WEIGHT_DRAW,
    WEIGHT_LOSS,
    WEIGHT_WIN,
)
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.standing import Standing
from swisstour.utils import natural_sort_key, to_number


def completed_matches_for(
    participant_id: str, matches: Iterable[TournamentMatch]
) -> List[TournamentMatch]:
    """Decided matches (byes included) that involve ``participant_id``."""
    return [
        match
        for match in matches
        if match.involves(participant_id) and match.is_completed
    ]


def opponent_ids(participant_id: str, matches: Iterable[TournamentMatch]) -> List[str]:
    """Real opponents over completed, non-bye matches, one entry per game."""
    opponents = []
    for match in matches:
        if match.is_bye or not match.is_completed:
            continue
        opponent = match.opponent_of(participant_id)
        if opponent is not None:
            opponents.append(opponent)
    return opponents


def index_standings(standings: Iterable[Standing]) -> Dict[str, Standing]:
    return {standing.participant_id: standing for standing in standings}


def weighted_points(
    participant_id: str, match: TournamentMatch, weights: Mapping[str, float]
) -> float:
    """Points ``match`` was worth to ``participant_id`` under ``weights``.

    Missing weight keys count as 0.
    """
    result = match.result
    if result is MatchResult.BYE:
        if match.player1_id == participant_id:
            return weights.get(WEIGHT_BYE, 0.0)
        return 0.0
    if result is MatchResult.DRAW:
        return weights.get(WEIGHT_DRAW, 0.0)
    if result is MatchResult.DOUBLE_LOSS:
        return weights.get(WEIGHT_LOSS, 0.0)

    is_player_one = match.player1_id == participant_id
    if result is MatchResult.PLAYER_ONE_WIN:
        key = WEIGHT_WIN if is_player_one else WEIGHT_LOSS
        return weights.get(key, 0.0)
    if result is MatchResult.PLAYER_TWO_WIN:
        key = WEIGHT_LOSS if is_player_one else WEIGHT_WIN
        return weights.get(key, 0.0)
    return 0.0


def nominal_points(participant_id: str, match: TournamentMatch) -> float:
    """Result points scaled to a 3-point win (draw 1.5, bye 3)."""
    if match.player1_id == participant_id:
        return match.result.player1_points * PROGRESSIVE_POINT_SCALE
    if match.player2_id == participant_id:
        return match.result.player2_points * PROGRESSIVE_POINT_SCALE
    return 0.0


def matches_by_round(
    matches: Iterable[TournamentMatch],
) -> List[List[TournamentMatch]]:
    """Group matches by ``round_id``, rounds in natural order."""
    grouped: Dict[str, List[TournamentMatch]] = {}
    for match in matches:
        grouped.setdefault(match.round_id, []).append(match)
    return [grouped[round_id] for round_id in sorted(grouped, key=natural_sort_key)]


def stat_value(stats: Mapping, key: str) -> float:
    return to_number(stats.get(key))
