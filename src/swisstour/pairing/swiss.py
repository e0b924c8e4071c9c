"""Swiss pairing.

Produces the next round's matches from the current standings:

1. Order participants: shuffled in round 1 (or with no standings yet),
   otherwise by points, highest first.
2. With an odd count, take out one participant for the bye, scanning from
   the bottom for someone who has not had one yet.
3. Pair the rest greedily in order, each participant taking the first
   later participant they have not met. When everyone left is a rematch,
   the first one left is accepted rather than leaving anyone unpaired.
4. Append the bye and number the regular tables 1..k.

The matcher is a single forward pass. It keeps score-adjacent pairings
over exhaustive rematch avoidance and can accept a rematch that a global
matching would have avoided.
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
from typing import Dict, Iterable, List, Optional, Sequence, Union

from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.profile import (
    ByeAssignment,
    PairingConfig,
    PairingMethod,
    PairingSortCriteria,
)
from swisstour.models.standing import Standing
from swisstour.models.tournament import PairingHistory
from swisstour.type_hints import Matchups
from swisstour.utils import setup_logger

logger = setup_logger(__name__)


def matchups_from_matches(matches: Iterable[TournamentMatch]) -> Matchups:
    """Previous matchups for :meth:`SwissPairingService.generate_pairings`.

    Byes are left out.
    """
    return [
        (match.player1_id, match.player2_id) for match in matches if not match.is_bye
    ]


class SwissPairingService:
    """Generates Swiss-system pairings for one round.

    Args:
        rng: Random source for shuffling and random bye choice. Pass a
            seeded ``random.Random`` for reproducible pairings.
        config: Optional pairing configuration. Without one the service
            sorts by points, avoids rematches and gives the bye to the
            lowest-ranked participant without one.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        config: Optional[PairingConfig] = None,
    ):
        self.rng = rng or random.Random()
        self.config = config
        if config is not None and config.method is PairingMethod.ACCELERATED:
            logger.info("Accelerated pairing is paired as plain Swiss")

    def generate_pairings(
        self,
        participants: Sequence[Participant],
        standings: Sequence[Standing],
        previous_matchups: Union[Matchups, PairingHistory],
        round_number: int,
        round_id: Optional[str] = None,
    ) -> List[TournamentMatch]:
        """Pair one round.

        Args:
            participants: Participants to pair; every one appears exactly once
            standings: Current standings, used only for ordering and bye counts
            previous_matchups: Pairs that already met (byes are ignored)
            round_number: 1-based round being paired
            round_id: Stamped on every generated match

        Returns:
            Regular matches in pairing order, then the bye match if any
        """
        if not participants:
            return []

        history = (
            previous_matchups
            if isinstance(previous_matchups, PairingHistory)
            else PairingHistory.from_matchups(previous_matchups)
        )
        standing_map = {s.participant_id: s for s in standings}
        ordered = self._order_participants(
            participants, standings, standing_map, round_number
        )

        bye_match = None
        if len(ordered) % 2 != 0:
            bye_participant = self._select_bye_participant(ordered, standing_map)
            bye_match = TournamentMatch(
                player1_id=bye_participant.id,
                player2_id=None,
                result=MatchResult.BYE,
                round_id=round_id or "",
            )
            ordered = [p for p in ordered if p.id != bye_participant.id]

        matches = self._pair(ordered, history, round_id or "")
        if bye_match is not None:
            matches.append(bye_match)

        table_number = 1
        for match in matches:
            if not match.is_bye:
                match.assign_table_number(table_number)
                table_number += 1

        logger.debug(
            "Round %d: %d matches for %d participants%s",
            round_number,
            len(matches),
            len(participants),
            f", bye to {bye_match.player1_id}" if bye_match else "",
        )
        return matches

    # ========== Ordering ==========

    def _order_participants(
        self,
        participants: Sequence[Participant],
        standings: Sequence[Standing],
        standing_map: Dict[str, Standing],
        round_number: int,
    ) -> List[Participant]:
        config = self.config
        if round_number == 1 or not standings or (
            config is not None and config.shuffles_every_round
        ):
            shuffled = list(participants)
            self.rng.shuffle(shuffled)
            return shuffled

        def points(participant: Participant) -> float:
            standing = standing_map.get(participant.id)
            return standing.points if standing is not None else 0.0

        if config is not None and config.sort_by is PairingSortCriteria.STAT:
            stat = config.sort_by_stat

            def stat_total(participant: Participant) -> float:
                standing = standing_map.get(participant.id)
                if standing is None:
                    return 0.0
                return standing.get_accumulated_stat(stat)

            return sorted(
                participants, key=lambda p: (-stat_total(p), -points(p))
            )

        return sorted(participants, key=lambda p: -points(p))

    # ========== Bye ==========

    def _byes_received(
        self, participant: Participant, standing_map: Dict[str, Standing]
    ) -> int:
        standing = standing_map.get(participant.id)
        from_standing = standing.byes if standing is not None else 0
        return max(from_standing, 1 if participant.has_received_bye else 0)

    def _is_bye_eligible(
        self, participant: Participant, standing_map: Dict[str, Standing]
    ) -> bool:
        if self.config is None:
            return not participant.has_received_bye
        return (
            self._byes_received(participant, standing_map)
            < self.config.max_byes_per_player
        )

    def _select_bye_participant(
        self, ordered: List[Participant], standing_map: Dict[str, Standing]
    ) -> Participant:
        eligible = [p for p in ordered if self._is_bye_eligible(p, standing_map)]
        if not eligible:
            logger.info(
                "Every participant has had a bye; giving it to the lowest ranked"
            )
            return ordered[-1]

        policy = (
            self.config.bye_assignment
            if self.config is not None
            else ByeAssignment.LOWEST_RANKED
        )
        if policy is ByeAssignment.RANDOM:
            return self.rng.choice(eligible)
        if policy is ByeAssignment.HIGHEST_RANKED:
            return eligible[0]
        return eligible[-1]

    # ========== Pairing ==========

    def _pair(
        self, ordered: List[Participant], history: PairingHistory, round_id: str
    ) -> List[TournamentMatch]:
        avoid_rematches = self.config is None or self.config.avoid_rematches
        matches = []
        paired = set()

        for i, player1 in enumerate(ordered):
            if player1.id in paired:
                continue

            unpaired = [p for p in ordered[i + 1 :] if p.id not in paired]
            if not unpaired:
                break

            opponent = None
            if avoid_rematches:
                opponent = next(
                    (p for p in unpaired if not history.have_played(player1.id, p.id)),
                    None,
                )
                if opponent is None:
                    logger.info(
                        "No fresh opponent left for %s; accepting rematch with %s",
                        player1.id,
                        unpaired[0].id,
                    )
            if opponent is None:
                opponent = unpaired[0]

            matches.append(
                TournamentMatch(
                    player1_id=player1.id,
                    player2_id=opponent.id,
                    result=MatchResult.NOT_PLAYED,
                    round_id=round_id,
                )
            )
            paired.update((player1.id, opponent.id))

        return matches
