from swisstour.models.profile.game_profile import GameProfile
from swisstour.models.profile.pairing_config import (
    ByeAssignment,
    PairingConfig,
    PairingMethod,
    PairingSortCriteria,
)
from swisstour.models.profile.score_weight import (
    ScoreWeight,
    default_score_weights,
    score_weight_map,
)
from swisstour.models.profile.scoring_rule import (
    ConditionType,
    ScoringCondition,
    ScoringRule,
)
from swisstour.models.profile.stat_definition import StatDefinition, StatType
from swisstour.models.profile.tiebreaker import (
    SortDirection,
    Tiebreaker,
    TiebreakerDefinition,
    TiebreakerType,
)

__all__ = [
    "ByeAssignment",
    "ConditionType",
    "GameProfile",
    "PairingConfig",
    "PairingMethod",
    "PairingSortCriteria",
    "ScoreWeight",
    "ScoringCondition",
    "ScoringRule",
    "SortDirection",
    "StatDefinition",
    "StatType",
    "Tiebreaker",
    "TiebreakerDefinition",
    "TiebreakerType",
    "default_score_weights",
    "score_weight_map",
]
