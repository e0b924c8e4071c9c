"""A single match within a tournament round."""

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

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dateutil.parser import isoparse

from swisstour.constants import MATCH_ID_PREFIX
from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidMatchException,
    InvalidResultException,
)
from swisstour.models.match.match_result import MatchResult
from swisstour.type_hints import StatMap
from swisstour.utils import generate_id


@dataclass
class TournamentMatch:
    """A pairing of two participants (or one, for a bye) in a round.

    Attributes
    ----------
    player1_id : str
        First participant.
    player2_id : str or None
        Second participant; ``None`` marks a bye.
    result : MatchResult
        Defaults to ``BYE`` for a bye and ``NOT_PLAYED`` otherwise.
    round_id : str
        Identifier of the round the match belongs to.
    table_number : int or None
        Assigned after pairing, never on a bye.
    player1_score, player2_score : int or float or None
        Optional reported game scores.
    player1_stats, player2_stats : dict or None
        Optional per-side named stats used by stat-based rules.
    """

    player1_id: str
    player2_id: Optional[str] = None
    result: Optional[MatchResult] = None
    round_id: str = ""
    table_number: Optional[int] = None
    player1_score: Optional[float] = None
    player2_score: Optional[float] = None
    player1_stats: Optional[StatMap] = None
    player2_stats: Optional[StatMap] = None
    reported_by_id: Optional[str] = None
    reported_at: Optional[datetime] = None
    id: str = field(default_factory=lambda: generate_id(MATCH_ID_PREFIX))

    def __post_init__(self) -> None:
        if not self.player1_id:
            raise InvalidMatchException("A match requires a first participant")
        if self.player1_id == self.player2_id:
            raise InvalidMatchException(
                f"Participant {self.player1_id} cannot be paired against themselves"
            )
        if self.result is None:
            self.result = (
                MatchResult.BYE if self.player2_id is None else MatchResult.NOT_PLAYED
            )
        elif isinstance(self.result, str):
            try:
                self.result = MatchResult(self.result)
            except ValueError as e:
                raise InvalidMatchException(
                    f"Unknown match result '{self.result}'"
                ) from e

        if self.player2_id is None and self.result is not MatchResult.BYE:
            raise InvalidMatchException(
                "A match without a second participant must have result 'bye'"
            )
        if self.player2_id is not None and self.result is MatchResult.BYE:
            raise InvalidMatchException("A bye match cannot have a second participant")
        if self.player2_id is None and self.table_number is not None:
            raise InvalidMatchException("A bye match cannot have a table number")

    # ========== Queries ==========

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def is_completed(self) -> bool:
        return self.result.is_completed

    def involves(self, participant_id: str) -> bool:
        """Check whether ``participant_id`` plays in this match."""
        return participant_id in (self.player1_id, self.player2_id)

    def opponent_of(self, participant_id: str) -> Optional[str]:
        """Return the other side's id, or ``None`` for a bye or outsider."""
        if participant_id == self.player1_id:
            return self.player2_id
        if participant_id == self.player2_id:
            return self.player1_id
        return None

    def stats_for(self, participant_id: str) -> Optional[StatMap]:
        """Stats recorded for ``participant_id``'s own side."""
        if participant_id == self.player1_id:
            return self.player1_stats
        if participant_id == self.player2_id:
            return self.player2_stats
        return None

    def opponent_stats_for(self, participant_id: str) -> Optional[StatMap]:
        """Stats recorded for the side opposing ``participant_id``."""
        if participant_id == self.player1_id:
            return self.player2_stats
        if participant_id == self.player2_id:
            return self.player1_stats
        return None

    def score_for(self, participant_id: str) -> Optional[float]:
        if participant_id == self.player1_id:
            return self.player1_score
        if participant_id == self.player2_id:
            return self.player2_score
        return None

    # ========== Mutations ==========

    def assign_table_number(self, table_number: int) -> None:
        """Seat a regular match at ``table_number`` (1-based)."""
        if self.is_bye:
            raise InvalidMatchException("A bye match cannot have a table number")
        if table_number < 1:
            raise InvalidMatchException(
                f"Table numbers start at 1, got {table_number}"
            )
        self.table_number = table_number

    def report_result(
        self,
        result: MatchResult,
        player1_score: Optional[float] = None,
        player2_score: Optional[float] = None,
        player1_stats: Optional[StatMap] = None,
        player2_stats: Optional[StatMap] = None,
        reported_by_id: Optional[str] = None,
    ) -> None:
        """Record a decided result for a regular match.

        Raises
        ------
        InvalidResultException
            If the match is a bye or ``result`` is ``BYE``/``NOT_PLAYED``.
        """
        if self.is_bye:
            raise InvalidResultException("The result of a bye cannot be reported")
        if result in (MatchResult.BYE, MatchResult.NOT_PLAYED):
            raise InvalidResultException(
                f"'{result.value}' is not a reportable result for a regular match"
            )
        self.result = result
        self.player1_score = player1_score
        self.player2_score = player2_score
        if player1_stats is not None:
            self.player1_stats = dict(player1_stats)
        if player2_stats is not None:
            self.player2_stats = dict(player2_stats)
        self.reported_by_id = reported_by_id
        self.reported_at = datetime.now(timezone.utc)

    def reset_result(self) -> None:
        """Return a regular match to the not-played state."""
        if self.is_bye:
            raise InvalidResultException("A bye cannot be reset")
        self.result = MatchResult.NOT_PLAYED
        self.player1_score = None
        self.player2_score = None
        self.reported_by_id = None
        self.reported_at = None

    # ========== Serialisation ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_id": self.round_id,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "result": self.result.value,
            "table_number": self.table_number,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "player1_stats": self.player1_stats,
            "player2_stats": self.player2_stats,
            "reported_by_id": self.reported_by_id,
            "reported_at": self.reported_at.isoformat() if self.reported_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentMatch":
        """Deserialize match from dictionary."""
        kwargs: Dict[str, Any] = {}
        try:
            result = MatchResult(data["result"]) if data.get("result") else None
            reported_at = (
                isoparse(data["reported_at"]) if data.get("reported_at") else None
            )
        except ValueError as e:
            raise InvalidConfigurationException(f"Invalid match data: {e}") from e
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(
            player1_id=data["player1_id"],
            player2_id=data.get("player2_id"),
            result=result,
            round_id=data.get("round_id", ""),
            table_number=data.get("table_number"),
            player1_score=data.get("player1_score"),
            player2_score=data.get("player2_score"),
            player1_stats=data.get("player1_stats"),
            player2_stats=data.get("player2_stats"),
            reported_by_id=data.get("reported_by_id"),
            reported_at=reported_at,
            **kwargs,
        )
