"""Data models used by the Swisstour engine."""

from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant, ParticipantStatus
from swisstour.models.profile import (
    ByeAssignment,
    ConditionType,
    GameProfile,
    PairingConfig,
    PairingMethod,
    PairingSortCriteria,
    ScoreWeight,
    ScoringCondition,
    ScoringRule,
    SortDirection,
    StatDefinition,
    StatType,
    Tiebreaker,
    TiebreakerDefinition,
    TiebreakerType,
    default_score_weights,
    score_weight_map,
)
from swisstour.models.standing import Standing
from swisstour.models.tournament import PairingHistory

__all__ = [
    "ByeAssignment",
    "ConditionType",
    "GameProfile",
    "MatchResult",
    "PairingConfig",
    "PairingHistory",
    "PairingMethod",
    "PairingSortCriteria",
    "Participant",
    "ParticipantStatus",
    "ScoreWeight",
    "ScoringCondition",
    "ScoringRule",
    "SortDirection",
    "Standing",
    "StatDefinition",
    "StatType",
    "Tiebreaker",
    "TiebreakerDefinition",
    "TiebreakerType",
    "TournamentMatch",
    "default_score_weights",
    "score_weight_map",
]
