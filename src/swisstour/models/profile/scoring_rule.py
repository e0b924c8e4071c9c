"""Scoring conditions and rules.

A :class:`ScoringRule` pairs one :class:`ScoringCondition` with a point
award and a priority. Conditions are tagged by :class:`ConditionType`;
each kind needs a different subset of fields, checked at construction so
that evaluation never has to.
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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from swisstour.constants import COMPARISON_OPERATORS, VALID_RESULT_VALUES
from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidScoringConditionException,
    InvalidScoringRuleException,
)


class ConditionType(Enum):
    RESULT = "result"
    STAT_COMPARISON = "stat_comparison"
    STAT_THRESHOLD = "stat_threshold"
    MARGIN_DIFFERENCE = "margin_diff"

    @property
    def label(self) -> str:
        return {
            ConditionType.RESULT: "Match Result",
            ConditionType.STAT_COMPARISON: "Stat Comparison",
            ConditionType.STAT_THRESHOLD: "Stat Threshold",
            ConditionType.MARGIN_DIFFERENCE: "Margin Difference",
        }[self]


@dataclass(frozen=True)
class ScoringCondition:
    """Tagged condition tested against one side of a match.

    Attributes
    ----------
    type : ConditionType
        Which kind of test this is.
    result_value : str or None
        Outcome label for ``RESULT`` conditions (win/draw/loss/bye).
    stat : str or None
        Stat name for the three stat-based kinds.
    operator : str or None
        One of ``>``, ``>=``, ``<``, ``<=``, ``==``.
    value : float or None
        Threshold for ``STAT_THRESHOLD`` and ``MARGIN_DIFFERENCE``.
    """

    type: ConditionType
    result_value: Optional[str] = None
    stat: Optional[str] = None
    operator: Optional[str] = None
    value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.type is ConditionType.RESULT:
            if self.result_value is None:
                raise InvalidScoringConditionException(
                    "Result condition requires a result value"
                )
            if self.result_value not in VALID_RESULT_VALUES:
                raise InvalidScoringConditionException(
                    f"Invalid result value '{self.result_value}'. "
                    f"Must be one of: {', '.join(VALID_RESULT_VALUES)}"
                )
            return

        if self.stat is None or self.operator is None:
            raise InvalidScoringConditionException(
                f"{self.type.label} condition requires stat and operator"
            )
        if self.operator not in COMPARISON_OPERATORS:
            raise InvalidScoringConditionException(
                f"Unknown operator '{self.operator}'. "
                f"Must be one of: {', '.join(COMPARISON_OPERATORS)}"
            )
        if self.type is not ConditionType.STAT_COMPARISON and self.value is None:
            raise InvalidScoringConditionException(
                f"{self.type.label} condition requires stat, operator and value"
            )

    # ========== Factories ==========

    @classmethod
    def result(cls, outcome: str) -> "ScoringCondition":
        return cls(ConditionType.RESULT, result_value=outcome)

    @classmethod
    def stat_comparison(cls, stat: str, operator: str) -> "ScoringCondition":
        return cls(ConditionType.STAT_COMPARISON, stat=stat, operator=operator)

    @classmethod
    def stat_threshold(
        cls, stat: str, operator: str, value: float
    ) -> "ScoringCondition":
        return cls(
            ConditionType.STAT_THRESHOLD, stat=stat, operator=operator, value=value
        )

    @classmethod
    def margin_difference(
        cls, stat: str, operator: str, value: float
    ) -> "ScoringCondition":
        return cls(
            ConditionType.MARGIN_DIFFERENCE, stat=stat, operator=operator, value=value
        )

    # ========== Serialisation ==========

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "result_value": self.result_value,
            "stat": self.stat,
            "operator": self.operator,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringCondition":
        try:
            condition_type = ConditionType(data["type"])
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Unknown condition type '{data['type']}'"
            ) from e
        value = data.get("value")
        return cls(
            type=condition_type,
            result_value=data.get("result_value"),
            stat=data.get("stat"),
            operator=data.get("operator"),
            value=float(value) if value is not None else None,
        )


@dataclass(frozen=True)
class ScoringRule:
    """A condition with the points it awards.

    Higher ``priority`` is tested first; among equal priorities the
    configured order is kept.
    """

    name: str
    condition: ScoringCondition
    points: float
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidScoringRuleException("Name cannot be empty")
        if self.points < 0:
            raise InvalidScoringRuleException(
                f"Points cannot be negative (rule '{self.name}')"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "condition": self.condition.to_dict(),
            "points": self.points,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringRule":
        return cls(
            name=data["name"],
            condition=ScoringCondition.from_dict(data["condition"]),
            points=float(data["points"]),
            priority=int(data.get("priority", 0)),
        )
