"""Tiebreaker kinds and profile tiebreaker definitions."""

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
from typing import Any, Dict, Iterable, List, Optional

from swisstour import constants as C
from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidTiebreakerDefinitionException,
)


class Tiebreaker(Enum):
    """Tiebreakers understood by the standings calculator."""

    BUCHHOLZ = C.TB_BUCHHOLZ
    MEDIAN_BUCHHOLZ = C.TB_MEDIAN_BUCHHOLZ
    PROGRESSIVE = C.TB_PROGRESSIVE
    HEAD_TO_HEAD = C.TB_HEAD_TO_HEAD
    OPPONENT_WIN_PERCENTAGE = C.TB_OPPONENT_WIN_PERCENTAGE

    @property
    def label(self) -> str:
        return C.TIEBREAK_NAMES[self.value]

    @classmethod
    def from_values(cls, values: Iterable[str]) -> List["Tiebreaker"]:
        """Parse a list of stored tiebreaker keys."""
        try:
            return [cls(value) for value in values]
        except ValueError as e:
            raise InvalidConfigurationException(str(e)) from e


class TiebreakerType(Enum):
    """Every metric a game profile may configure."""

    # Classic Swiss
    BUCHHOLZ = C.TB_BUCHHOLZ
    MEDIAN_BUCHHOLZ = C.TB_MEDIAN_BUCHHOLZ
    PROGRESSIVE = C.TB_PROGRESSIVE
    OPPONENT_WIN_PERCENTAGE = C.TB_OWP
    OPPONENT_OPPONENT_WIN_PERCENTAGE = C.TB_OOWP
    GAME_WIN_PERCENTAGE = C.TB_GWP
    OPPONENT_GAME_WIN_PERCENTAGE = C.TB_OGWP
    HEAD_TO_HEAD = C.TB_HEAD_TO_HEAD
    SONNEBORN_BERGER = C.TB_SONNEBORN_BERGER
    # Stat-based
    STAT_SUM = C.TB_STAT_SUM
    STAT_DIFF = C.TB_STAT_DIFF
    STAT_AVERAGE = C.TB_STAT_AVERAGE
    STAT_MAX = C.TB_STAT_MAX
    # Special
    STRENGTH_OF_SCHEDULE = C.TB_STRENGTH_OF_SCHEDULE
    MARGIN_OF_VICTORY = C.TB_MARGIN_OF_VICTORY
    RANDOM = C.TB_RANDOM

    @property
    def label(self) -> str:
        return C.TIEBREAK_NAMES[self.value]

    @property
    def requires_stat(self) -> bool:
        return self in (
            TiebreakerType.STAT_SUM,
            TiebreakerType.STAT_DIFF,
            TiebreakerType.STAT_AVERAGE,
            TiebreakerType.STAT_MAX,
        )


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class TiebreakerDefinition:
    """A named, typed tiebreaker in a game profile.

    Attributes
    ----------
    key : str
        Key the computed value is stored under.
    name : str
        Display name.
    type : TiebreakerType
        Metric to compute.
    stat : str or None
        Stat name; required for the ``stat_*`` types.
    direction : SortDirection
        Whether higher (``desc``) or lower (``asc``) values rank first.
    min_value : float or None
        Floor substituted when the computed value is lower.
    """

    key: str
    name: str
    type: TiebreakerType
    stat: Optional[str] = None
    direction: SortDirection = SortDirection.DESCENDING
    min_value: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidTiebreakerDefinitionException("Key cannot be empty")
        if not self.name:
            raise InvalidTiebreakerDefinitionException("Name cannot be empty")
        if self.type.requires_stat and not self.stat:
            raise InvalidTiebreakerDefinitionException(
                f"Tiebreaker '{self.key}' of type '{self.type.value}' requires a stat"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "type": self.type.value,
            "stat": self.stat,
            "direction": self.direction.value,
            "min_value": self.min_value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TiebreakerDefinition":
        try:
            tiebreaker_type = TiebreakerType(data["type"])
            direction = SortDirection(data.get("direction") or "desc")
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Invalid tiebreaker definition '{data.get('key')}': {e}"
            ) from e
        min_value = data.get("min_value")
        return cls(
            key=data["key"],
            name=data["name"],
            type=tiebreaker_type,
            stat=data.get("stat"),
            direction=direction,
            min_value=float(min_value) if min_value is not None else None,
        )
