"""Module-level entry points for the four engine operations.

Each function delegates to a service instance, so callers that only need
one-off calls do not have to build and hold the services themselves.
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

import random
from typing import Dict, List, Optional, Sequence, Union

from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.profile import (
    GameProfile,
    PairingConfig,
    ScoreWeight,
    ScoringRule,
    Tiebreaker,
    TiebreakerDefinition,
)
from swisstour.models.standing import Standing
from swisstour.models.tournament import PairingHistory
from swisstour.pairing import SwissPairingService
from swisstour.scoring import ScoringRuleEvaluator
from swisstour.tournament import StandingCalculator, TiebreakCalculator
from swisstour.type_hints import Matchups, PointAward, StatMap

_evaluator = ScoringRuleEvaluator()
_standing_calculator = StandingCalculator()
_tiebreak_calculator = TiebreakCalculator()


def evaluate(
    result: MatchResult,
    rules: Sequence[ScoringRule],
    player1_stats: Optional[StatMap] = None,
    player2_stats: Optional[StatMap] = None,
) -> PointAward:
    """Points for each side of a match under ``rules``."""
    return _evaluator.evaluate(result, rules, player1_stats, player2_stats)


def calculate_standings(
    participants: Sequence[Participant],
    matches: Sequence[TournamentMatch],
    score_weights: Sequence[ScoreWeight],
    tiebreakers: Sequence[Union[Tiebreaker, str]],
) -> List[Standing]:
    return _standing_calculator.calculate(
        participants, matches, score_weights, tiebreakers
    )


def calculate_standings_for_profile(
    participants: Sequence[Participant],
    matches: Sequence[TournamentMatch],
    profile: GameProfile,
) -> List[Standing]:
    """Standings ranked by a game profile's weights and tiebreakers."""
    return _standing_calculator.calculate_with_profile(
        participants, matches, profile.score_weights, profile.tiebreakers
    )


def calculate_tiebreakers(
    participant_id: str,
    matches: Sequence[TournamentMatch],
    standings: Sequence[Standing],
    tiebreaker_defs: Sequence[TiebreakerDefinition],
    score_weights: Optional[Sequence[ScoreWeight]] = None,
) -> Dict[str, float]:
    return _tiebreak_calculator.calculate(
        participant_id, matches, standings, tiebreaker_defs, score_weights
    )


def generate_pairings(
    participants: Sequence[Participant],
    standings: Sequence[Standing],
    previous_matchups: Union[Matchups, PairingHistory],
    round_number: int,
    round_id: Optional[str] = None,
    rng: Optional[random.Random] = None,
    config: Optional[PairingConfig] = None,
) -> List[TournamentMatch]:
    """Pair one round.

    A fresh :class:`SwissPairingService` is built per call; pass ``rng`` to
    make round-one shuffles reproducible.
    """
    service = SwissPairingService(rng=rng, config=config)
    return service.generate_pairings(
        participants, standings, previous_matchups, round_number, round_id
    )
