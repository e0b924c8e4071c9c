"""Exceptions for use in Swisstour.

Only configuration objects (raised at construction) and explicit state
transitions raise. The scoring, standings and pairing engines never raise
for missing data; they degrade to 0.0, empty maps or stable ordering.
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


# ========== Base Application Exception ==========


class SwissTourException(Exception):
    """Base exception for all Swisstour errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissTourException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class InvalidScoringConditionException(InvalidConfigurationException):
    """Raised when a scoring condition lacks the fields its type requires."""

    pass


class InvalidScoringRuleException(InvalidConfigurationException):
    """Raised when a scoring rule has an empty name or negative points."""

    pass


class InvalidScoreWeightException(InvalidConfigurationException):
    """Raised when a score weight has an empty name/key or negative points."""

    pass


class InvalidTiebreakerDefinitionException(InvalidConfigurationException):
    """Raised when a tiebreaker definition is malformed."""

    pass


class InvalidStatDefinitionException(InvalidConfigurationException):
    """Raised when a stat definition is malformed (e.g. min > max)."""

    pass


class InvalidPairingConfigException(InvalidConfigurationException):
    """Raised when a pairing configuration is inconsistent."""

    pass


class InvalidGameProfileException(InvalidConfigurationException):
    """Raised when a game profile cannot be built from its data."""

    pass


# ========== Match Exceptions ==========


class MatchException(SwissTourException):
    """Base exception for match-related errors."""

    pass


class InvalidMatchException(MatchException):
    """Raised when a match violates the bye / table number invariants."""

    pass


class InvalidResultException(MatchException):
    """Raised when a result cannot be recorded on a match."""

    pass


# ========== Participant Exceptions ==========


class ParticipantException(SwissTourException):
    """Base exception for participant-related errors."""

    pass


class InvalidStateTransitionException(ParticipantException):
    """Raised when a participant status transition is not allowed."""

    def __init__(self, participant_id: str, from_status: str, to_status: str):
        self.participant_id = participant_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Participant {participant_id} cannot transition "
            f"from '{from_status}' to '{to_status}'"
        )


# ========== Standing Exceptions ==========


class StandingException(SwissTourException):
    """Base exception for standing-related errors."""

    pass


class InvalidStandingException(StandingException):
    """Raised when a standing is given an impossible value (e.g. rank 0)."""

    pass
