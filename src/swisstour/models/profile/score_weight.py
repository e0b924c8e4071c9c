"""ScoreWeight data class."""

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
from typing import Any, Dict, Iterable, List

from swisstour.constants import DEFAULT_SCORE_NAMES, DEFAULT_SCORE_POINTS
from swisstour.exceptions import InvalidScoreWeightException


@dataclass(frozen=True)
class ScoreWeight:
    """Fixed points awarded for one kind of result.

    Attributes
    ----------
    name : str
        Display name, e.g. ``"Win"``.
    key : str
        Result key the standings calculator looks up: ``win``, ``draw``,
        ``loss`` or ``bye``.
    points : float
        Non-negative points for the result.
    """

    name: str
    key: str
    points: float

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidScoreWeightException("Name cannot be empty")
        if not self.key:
            raise InvalidScoreWeightException("Key cannot be empty")
        if self.points < 0:
            raise InvalidScoreWeightException(
                f"Points cannot be negative (got {self.points} for '{self.key}')"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "key": self.key, "points": self.points}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreWeight":
        return cls(
            name=data["name"],
            key=data["key"],
            points=float(data["points"]),
        )


def score_weight_map(score_weights: Iterable[ScoreWeight]) -> Dict[str, float]:
    """Index weights by key. Later duplicates override earlier ones."""
    return {weight.key: weight.points for weight in score_weights}


def default_score_weights() -> List[ScoreWeight]:
    """Win 3 / draw 1 / loss 0 / bye 3."""
    return [
        ScoreWeight(name=DEFAULT_SCORE_NAMES[key], key=key, points=points)
        for key, points in DEFAULT_SCORE_POINTS.items()
    ]
