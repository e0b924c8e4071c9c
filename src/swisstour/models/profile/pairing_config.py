"""PairingConfig data class."""

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
from enum import Enum
from typing import Any, Dict, Optional

from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidPairingConfigException,
)


class PairingMethod(Enum):
    SWISS = "swiss"
    RANDOM = "random"
    ACCELERATED = "accelerated"


class PairingSortCriteria(Enum):
    POINTS = "points"
    STAT = "stat"
    RANDOM = "random"


class ByeAssignment(Enum):
    LOWEST_RANKED = "lowest_ranked"
    RANDOM = "random"
    HIGHEST_RANKED = "highest_ranked"


@dataclass(frozen=True)
class PairingConfig:
    """How a profile wants rounds paired.

    Attributes
    ----------
    method : PairingMethod
        Overall pairing method.
    sort_by : PairingSortCriteria
        Ordering applied before pairing.
    sort_by_stat : str or None
        Accumulated stat to order by; required when ``sort_by`` is ``stat``.
    avoid_rematches : bool
        Skip over previous opponents when a fresh one is available.
    max_byes_per_player : int
        Byes a participant may receive before being passed over.
    bye_assignment : ByeAssignment
        Which eligible participant receives the bye.
    """

    method: PairingMethod = PairingMethod.SWISS
    sort_by: PairingSortCriteria = PairingSortCriteria.POINTS
    sort_by_stat: Optional[str] = None
    avoid_rematches: bool = True
    max_byes_per_player: int = 1
    bye_assignment: ByeAssignment = ByeAssignment.LOWEST_RANKED

    def __post_init__(self) -> None:
        if self.sort_by is PairingSortCriteria.STAT and not self.sort_by_stat:
            raise InvalidPairingConfigException(
                "sort_by_stat is required when sorting by stat"
            )
        if self.max_byes_per_player < 0:
            raise InvalidPairingConfigException(
                "max_byes_per_player cannot be negative"
            )

    @property
    def shuffles_every_round(self) -> bool:
        return (
            self.method is PairingMethod.RANDOM
            or self.sort_by is PairingSortCriteria.RANDOM
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method.value,
            "sort_by": self.sort_by.value,
            "sort_by_stat": self.sort_by_stat,
            "avoid_rematches": self.avoid_rematches,
            "max_byes_per_player": self.max_byes_per_player,
            "bye_assignment": self.bye_assignment.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingConfig":
        try:
            return cls(
                method=PairingMethod(data.get("method", "swiss")),
                sort_by=PairingSortCriteria(data.get("sort_by", "points")),
                sort_by_stat=data.get("sort_by_stat"),
                avoid_rematches=data.get("avoid_rematches", True),
                max_byes_per_player=data.get("max_byes_per_player", 1),
                bye_assignment=ByeAssignment(
                    data.get("bye_assignment", "lowest_ranked")
                ),
            )
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Invalid pairing config: {e}"
            ) from e
