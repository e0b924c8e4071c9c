"""Record of who has already played whom."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Set

from swisstour.models.match import TournamentMatch
from swisstour.type_hints import Matchup, Matchups


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Lookups are symmetric: ``have_played(a, b) == have_played(b, a)``.
    Byes never enter the history.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Pairs of participant ids that have already met.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)

    def add_pairing(self, player1_id: str, player2_id: Optional[str]) -> None:
        """Record that two participants have been paired."""
        if player2_id is None or player1_id == player2_id:
            return
        self.previous_matches.add(frozenset({player1_id, player2_id}))

    def have_played(self, player1_id: str, player2_id: str) -> bool:
        """Check if two participants have previously played each other."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def opponents_of(self, participant_id: str) -> Set[str]:
        return {
            other
            for pair in self.previous_matches
            if participant_id in pair
            for other in pair
            if other != participant_id
        }

    def __len__(self) -> int:
        return len(self.previous_matches)

    def as_matchups(self) -> Matchups:
        """Flatten to ``(id, id)`` tuples, sorted for stable output."""
        return sorted(tuple(sorted(pair)) for pair in self.previous_matches)

    @classmethod
    def from_matchups(cls, matchups: Iterable[Matchup]) -> "PairingHistory":
        history = cls()
        for player1_id, player2_id in matchups:
            history.add_pairing(player1_id, player2_id)
        return history

    @classmethod
    def from_matches(cls, matches: Iterable[TournamentMatch]) -> "PairingHistory":
        """Build the history from every non-bye match, played or not."""
        history = cls()
        for match in matches:
            if not match.is_bye:
                history.add_pairing(match.player1_id, match.player2_id)
        return history

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {"previous_matches": [list(pair) for pair in self.as_matchups()]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(str, pair)) for pair in data.get("previous_matches", [])
            )
        )
