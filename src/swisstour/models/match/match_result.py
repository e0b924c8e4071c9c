"""Match result enumeration."""

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

from enum import Enum


class MatchResult(Enum):
    """Outcome of a match between player one and player two.

    ``BYE`` is only valid on a match without a second participant.
    """

    PLAYER_ONE_WIN = "player_one_win"
    PLAYER_TWO_WIN = "player_two_win"
    DRAW = "draw"
    DOUBLE_LOSS = "double_loss"
    BYE = "bye"
    NOT_PLAYED = "not_played"

    @property
    def is_completed(self) -> bool:
        """Every result except ``NOT_PLAYED`` is decided."""
        return self is not MatchResult.NOT_PLAYED

    @property
    def is_bye(self) -> bool:
        return self is MatchResult.BYE

    @property
    def player1_points(self) -> float:
        """Nominal result points for player one (1 / 0.5 / 0)."""
        if self in (MatchResult.PLAYER_ONE_WIN, MatchResult.BYE):
            return 1.0
        if self is MatchResult.DRAW:
            return 0.5
        return 0.0

    @property
    def player2_points(self) -> float:
        """Nominal result points for player two (1 / 0.5 / 0)."""
        if self is MatchResult.PLAYER_TWO_WIN:
            return 1.0
        if self is MatchResult.DRAW:
            return 0.5
        return 0.0

    @classmethod
    def reportable(cls) -> list:
        """Results a reporter may enter (everything but ``NOT_PLAYED``)."""
        return [result for result in cls if result is not cls.NOT_PLAYED]
