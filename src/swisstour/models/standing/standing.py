"""Standing data class: one participant's row in the standings table."""

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

from typing import Any, Dict, Optional

from swisstour.constants import STANDING_ID_PREFIX
from swisstour.exceptions import InvalidStandingException
from swisstour.models.profile.tiebreaker import Tiebreaker
from swisstour.utils import generate_id


class Standing:
    """Aggregated record, points and tiebreakers for one participant.

    Counters are read-only; the ``record_*`` methods are the only way to
    change them and each one also increments ``matches_played``. ``rank``
    stays 0 until the calculator's final sort assigns it.

    Standings are rebuilt from the full match history on every
    recomputation, never patched incrementally.
    """

    def __init__(
        self,
        participant_id: str,
        tournament_id: str = "",
        rank: int = 0,
        matches_played: Optional[int] = None,
        wins: int = 0,
        draws: int = 0,
        losses: int = 0,
        byes: int = 0,
        points: float = 0.0,
        buchholz: float = 0.0,
        median_buchholz: float = 0.0,
        progressive: float = 0.0,
        opponent_win_percentage: float = 0.0,
        accumulated_stats: Optional[Dict[str, float]] = None,
        calculated_tiebreakers: Optional[Dict[str, float]] = None,
        id: Optional[str] = None,
    ) -> None:
        if min(wins, draws, losses, byes) < 0:
            raise InvalidStandingException("Record counters cannot be negative")
        if rank < 0:
            raise InvalidStandingException("Rank cannot be negative")

        self._id = id or generate_id(STANDING_ID_PREFIX)
        self._participant_id = participant_id
        self._tournament_id = tournament_id
        self._rank = rank
        self._wins = wins
        self._draws = draws
        self._losses = losses
        self._byes = byes
        self._matches_played = (
            matches_played
            if matches_played is not None
            else wins + draws + losses + byes
        )
        self._points = float(points)
        self._buchholz = float(buchholz)
        self._median_buchholz = float(median_buchholz)
        self._progressive = float(progressive)
        self._opponent_win_percentage = float(opponent_win_percentage)
        self._accumulated_stats: Dict[str, float] = dict(accumulated_stats or {})
        self._calculated_tiebreakers: Dict[str, float] = dict(
            calculated_tiebreakers or {}
        )

    def __repr__(self) -> str:
        return (
            f"Standing(participant_id={self._participant_id!r}, rank={self._rank}, "
            f"points={self._points}, record={self._wins}-{self._draws}-{self._losses})"
        )

    # ========== Properties ==========

    @property
    def id(self) -> str:
        return self._id

    @property
    def participant_id(self) -> str:
        return self._participant_id

    @property
    def tournament_id(self) -> str:
        return self._tournament_id

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def matches_played(self) -> int:
        return self._matches_played

    @property
    def wins(self) -> int:
        return self._wins

    @property
    def draws(self) -> int:
        return self._draws

    @property
    def losses(self) -> int:
        return self._losses

    @property
    def byes(self) -> int:
        return self._byes

    @property
    def points(self) -> float:
        return self._points

    @property
    def buchholz(self) -> float:
        return self._buchholz

    @property
    def median_buchholz(self) -> float:
        return self._median_buchholz

    @property
    def progressive(self) -> float:
        return self._progressive

    @property
    def opponent_win_percentage(self) -> float:
        return self._opponent_win_percentage

    @property
    def accumulated_stats(self) -> Dict[str, float]:
        return dict(self._accumulated_stats)

    @property
    def calculated_tiebreakers(self) -> Dict[str, float]:
        return dict(self._calculated_tiebreakers)

    def get_accumulated_stat(self, key: str) -> float:
        return self._accumulated_stats.get(key, 0.0)

    def get_tiebreaker(self, key: str) -> float:
        """Profile-driven tiebreaker value by definition key (0.0 if unset)."""
        return self._calculated_tiebreakers.get(key, 0.0)

    def tiebreak_value(self, tiebreaker: Tiebreaker) -> float:
        """Comparison value for one of the built-in tiebreakers."""
        if tiebreaker is Tiebreaker.BUCHHOLZ:
            return self._buchholz
        if tiebreaker is Tiebreaker.MEDIAN_BUCHHOLZ:
            return self._median_buchholz
        if tiebreaker is Tiebreaker.PROGRESSIVE:
            return self._progressive
        if tiebreaker is Tiebreaker.OPPONENT_WIN_PERCENTAGE:
            return self._opponent_win_percentage
        # Head-to-head never separates two standings
        return 0.0

    # ========== Recording ==========

    def record_win(self, points: float) -> None:
        self._matches_played += 1
        self._wins += 1
        self._points += points

    def record_draw(self, points: float) -> None:
        self._matches_played += 1
        self._draws += 1
        self._points += points

    def record_loss(self, points: float) -> None:
        self._matches_played += 1
        self._losses += 1
        self._points += points

    def record_bye(self, points: float) -> None:
        self._matches_played += 1
        self._byes += 1
        self._points += points

    def update_rank(self, rank: int) -> None:
        if rank < 1:
            raise InvalidStandingException(f"Rank must be 1 or greater, got {rank}")
        self._rank = rank

    def update_tiebreakers(
        self,
        buchholz: float = 0.0,
        median_buchholz: float = 0.0,
        progressive: float = 0.0,
        opponent_win_percentage: float = 0.0,
    ) -> None:
        self._buchholz = buchholz
        self._median_buchholz = median_buchholz
        self._progressive = progressive
        self._opponent_win_percentage = opponent_win_percentage

    def add_to_accumulated_stat(self, key: str, value: float) -> None:
        self._accumulated_stats[key] = self._accumulated_stats.get(key, 0.0) + value

    def set_calculated_tiebreaker(self, key: str, value: float) -> None:
        self._calculated_tiebreakers[key] = value

    # ========== Serialisation ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standing to dictionary."""
        return {
            "id": self._id,
            "participant_id": self._participant_id,
            "tournament_id": self._tournament_id,
            "rank": self._rank,
            "matches_played": self._matches_played,
            "wins": self._wins,
            "draws": self._draws,
            "losses": self._losses,
            "byes": self._byes,
            "points": self._points,
            "buchholz": self._buchholz,
            "median_buchholz": self._median_buchholz,
            "progressive": self._progressive,
            "opponent_win_percentage": self._opponent_win_percentage,
            "accumulated_stats": dict(self._accumulated_stats),
            "calculated_tiebreakers": dict(self._calculated_tiebreakers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Standing":
        """Deserialize standing from dictionary."""
        return cls(
            participant_id=str(data["participant_id"]),
            tournament_id=data.get("tournament_id", ""),
            rank=data.get("rank", 0),
            matches_played=data.get("matches_played"),
            wins=data.get("wins", 0),
            draws=data.get("draws", 0),
            losses=data.get("losses", 0),
            byes=data.get("byes", 0),
            points=data.get("points", 0.0),
            buchholz=data.get("buchholz", 0.0),
            median_buchholz=data.get("median_buchholz", 0.0),
            progressive=data.get("progressive", 0.0),
            opponent_win_percentage=data.get("opponent_win_percentage", 0.0),
            accumulated_stats=data.get("accumulated_stats"),
            calculated_tiebreakers=data.get("calculated_tiebreakers"),
            id=data.get("id"),
        )
