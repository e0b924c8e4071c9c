"""Per-game stat definitions (victory points, game wins, ...)."""

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
    InvalidStatDefinitionException,
)


class StatType(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class StatDefinition:
    """A stat reporters record per side of a match.

    Attributes
    ----------
    key : str
        Stat name used in match stat maps, rules and tiebreakers.
    name : str
        Display name.
    type : StatType
        Value type.
    min_value, max_value : int or None
        Optional inclusive bounds.
    per_player : bool
        Recorded for each side rather than once per match.
    required : bool
        Reporters must supply it.
    description : str or None
        Free text shown to reporters.
    """

    key: str
    name: str
    type: StatType
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    per_player: bool = True
    required: bool = False
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise InvalidStatDefinitionException("Key cannot be empty")
        if not self.name:
            raise InvalidStatDefinitionException("Name cannot be empty")
        if (
            self.min_value is not None
            and self.max_value is not None
            and self.min_value > self.max_value
        ):
            raise InvalidStatDefinitionException(
                f"Stat '{self.key}': minimum {self.min_value} "
                f"is greater than maximum {self.max_value}"
            )

    def accepts(self, value: Any) -> bool:
        """Check a reported value against the type and bounds."""
        if self.type is StatType.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self.type is StatType.INTEGER and not isinstance(value, int):
            return False
        if self.type is StatType.FLOAT and not isinstance(value, (int, float)):
            return False
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "type": self.type.value,
            "min_value": self.min_value,
            "max_value": self.max_value,
            "per_player": self.per_player,
            "required": self.required,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatDefinition":
        try:
            stat_type = StatType(data["type"])
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Unknown stat type '{data['type']}'"
            ) from e
        return cls(
            key=data["key"],
            name=data["name"],
            type=stat_type,
            min_value=data.get("min_value"),
            max_value=data.get("max_value"),
            per_player=data.get("per_player", True),
            required=data.get("required", False),
            description=data.get("description"),
        )
