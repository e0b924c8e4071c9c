"""GameProfile data class: everything the engine needs to know about a game."""

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
from typing import Any, Dict, List, Optional

from swisstour.exceptions import InvalidGameProfileException
from swisstour.models.profile.pairing_config import PairingConfig
from swisstour.models.profile.score_weight import ScoreWeight, default_score_weights
from swisstour.models.profile.scoring_rule import ScoringRule
from swisstour.models.profile.stat_definition import StatDefinition
from swisstour.models.profile.tiebreaker import TiebreakerDefinition
from swisstour.type_hints import StatMap


@dataclass
class GameProfile:
    """Stats, scoring, tiebreakers and pairing settings for one game.

    Attributes
    ----------
    name : str
        Display name.
    slug : str
        Stable identifier, e.g. ``"warhammer-40k"``.
    description : str or None
        Free text.
    stat_definitions : list of StatDefinition
        Stats reporters record per side.
    scoring_rules : list of ScoringRule
        Rules used to turn a result into points.
    score_weights : list of ScoreWeight
        Fixed win/draw/loss/bye points for the standings table.
    tiebreakers : list of TiebreakerDefinition
        Ordered tiebreakers applied after points.
    pairing_config : PairingConfig
        How rounds are paired.
    is_system : bool
        Built-in profiles cannot be modified or deleted.
    """

    name: str
    slug: str
    description: Optional[str] = None
    stat_definitions: List[StatDefinition] = field(default_factory=list)
    scoring_rules: List[ScoringRule] = field(default_factory=list)
    score_weights: List[ScoreWeight] = field(default_factory=default_score_weights)
    tiebreakers: List[TiebreakerDefinition] = field(default_factory=list)
    pairing_config: PairingConfig = field(default_factory=PairingConfig)
    is_system: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidGameProfileException("Profile name cannot be empty")
        if not self.slug:
            raise InvalidGameProfileException("Profile slug cannot be empty")
        keys = [definition.key for definition in self.tiebreakers]
        if len(keys) != len(set(keys)):
            raise InvalidGameProfileException(
                f"Profile '{self.slug}' has duplicate tiebreaker keys"
            )

    def get_stat_definition(self, key: str) -> Optional[StatDefinition]:
        for definition in self.stat_definitions:
            if definition.key == key:
                return definition
        return None

    def has_stat_definition(self, key: str) -> bool:
        return self.get_stat_definition(key) is not None

    def get_tiebreaker_definition(self, key: str) -> Optional[TiebreakerDefinition]:
        for definition in self.tiebreakers:
            if definition.key == key:
                return definition
        return None

    def invalid_stats(self, stats: StatMap) -> List[str]:
        """Keys in ``stats`` that are unknown, missing or out of range."""
        problems = [
            key
            for key, value in stats.items()
            if not self.has_stat_definition(key)
            or not self.get_stat_definition(key).accepts(value)
        ]
        problems.extend(
            definition.key
            for definition in self.stat_definitions
            if definition.required and definition.key not in stats
        )
        return problems

    def can_be_deleted(self) -> bool:
        return not self.is_system

    def can_be_modified(self) -> bool:
        return not self.is_system

    def to_dict(self) -> Dict[str, Any]:
        """Serialize profile to dictionary."""
        return {
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "stat_definitions": [d.to_dict() for d in self.stat_definitions],
            "scoring_rules": [r.to_dict() for r in self.scoring_rules],
            "score_weights": [w.to_dict() for w in self.score_weights],
            "tiebreakers": [t.to_dict() for t in self.tiebreakers],
            "pairing_config": self.pairing_config.to_dict(),
            "is_system": self.is_system,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameProfile":
        """Deserialize profile from dictionary."""
        try:
            weights = data.get("score_weights")
            return cls(
                name=data["name"],
                slug=data["slug"],
                description=data.get("description"),
                stat_definitions=[
                    StatDefinition.from_dict(d)
                    for d in data.get("stat_definitions", [])
                ],
                scoring_rules=[
                    ScoringRule.from_dict(r) for r in data.get("scoring_rules", [])
                ],
                score_weights=(
                    [ScoreWeight.from_dict(w) for w in weights]
                    if weights is not None
                    else default_score_weights()
                ),
                tiebreakers=[
                    TiebreakerDefinition.from_dict(t)
                    for t in data.get("tiebreakers", [])
                ],
                pairing_config=PairingConfig.from_dict(
                    data.get("pairing_config", {})
                ),
                is_system=data.get("is_system", False),
            )
        except KeyError as e:
            raise InvalidGameProfileException(
                f"Game profile data is missing field {e}"
            ) from e
