"""A participant registered in a tournament."""

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

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from dateutil.parser import isoparse

from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidStateTransitionException,
)
from swisstour.utils import setup_logger

logger = setup_logger(__name__)


class ParticipantStatus(Enum):
    """Registration lifecycle of a participant."""

    REGISTERED = "registered"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    WITHDRAWN = "withdrawn"
    DISQUALIFIED = "disqualified"

    def can_transition_to(self, new_status: "ParticipantStatus") -> bool:
        return new_status in _ALLOWED_TRANSITIONS[self]

    @property
    def is_active(self) -> bool:
        return self in (
            ParticipantStatus.REGISTERED,
            ParticipantStatus.CONFIRMED,
            ParticipantStatus.CHECKED_IN,
        )

    @property
    def is_final(self) -> bool:
        return self in (ParticipantStatus.WITHDRAWN, ParticipantStatus.DISQUALIFIED)

    @property
    def can_play(self) -> bool:
        return self in (ParticipantStatus.CONFIRMED, ParticipantStatus.CHECKED_IN)


_ALLOWED_TRANSITIONS = {
    ParticipantStatus.REGISTERED: {
        ParticipantStatus.CONFIRMED,
        ParticipantStatus.WITHDRAWN,
    },
    ParticipantStatus.CONFIRMED: {
        ParticipantStatus.CHECKED_IN,
        ParticipantStatus.WITHDRAWN,
        ParticipantStatus.DISQUALIFIED,
    },
    ParticipantStatus.CHECKED_IN: {
        ParticipantStatus.WITHDRAWN,
        ParticipantStatus.DISQUALIFIED,
    },
    ParticipantStatus.WITHDRAWN: {ParticipantStatus.REGISTERED},
    ParticipantStatus.DISQUALIFIED: set(),
}


class Participant:
    """Represents a participant in the tournament.

    The engine only reads participants. Status changes go through the
    transition methods, which refuse moves the lifecycle does not allow.

    Attributes:
        id: Unique identifier for the participant
        tournament_id: Tournament the participant is registered in
        status: Current registration status
        user_id: Linked user account, ``None`` for guests
        guest_name: Display name for guest participants
        guest_email: Contact address for guest participants
        seed: Optional seeding number
        has_received_bye: Whether a bye has already been awarded
    """

    def __init__(
        self,
        id: str,
        tournament_id: str = "",
        status: ParticipantStatus = ParticipantStatus.CONFIRMED,
        user_id: Optional[str] = None,
        guest_name: Optional[str] = None,
        guest_email: Optional[str] = None,
        seed: Optional[int] = None,
        has_received_bye: bool = False,
        registered_at: Optional[datetime] = None,
        checked_in_at: Optional[datetime] = None,
    ) -> None:
        self._id = id
        self._tournament_id = tournament_id
        self._status = status
        self._user_id = user_id
        self._guest_name = guest_name
        self._guest_email = guest_email
        self._seed = seed
        self._has_received_bye = has_received_bye
        self._registered_at = registered_at
        self._checked_in_at = checked_in_at

    def __repr__(self) -> str:
        return (
            f"Participant(id={self._id!r}, status={self._status.value!r}, "
            f"has_received_bye={self._has_received_bye})"
        )

    # ========== Properties ==========

    @property
    def id(self) -> str:
        return self._id

    @property
    def tournament_id(self) -> str:
        return self._tournament_id

    @property
    def status(self) -> ParticipantStatus:
        return self._status

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def guest_name(self) -> Optional[str]:
        return self._guest_name

    @property
    def guest_email(self) -> Optional[str]:
        return self._guest_email

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def has_received_bye(self) -> bool:
        return self._has_received_bye

    @property
    def registered_at(self) -> Optional[datetime]:
        return self._registered_at

    @property
    def checked_in_at(self) -> Optional[datetime]:
        return self._checked_in_at

    @property
    def is_guest(self) -> bool:
        return self._user_id is None

    @property
    def display_name(self) -> Optional[str]:
        """Guest name for guests; registered users are named by the caller."""
        return self._guest_name if self.is_guest else None

    @property
    def is_active(self) -> bool:
        return self._status.is_active

    @property
    def can_play(self) -> bool:
        return self._status.can_play

    # ========== Transitions ==========

    def confirm(self) -> None:
        self._transition_to(ParticipantStatus.CONFIRMED)

    def check_in(self, at: Optional[datetime] = None) -> None:
        self._transition_to(ParticipantStatus.CHECKED_IN)
        self._checked_in_at = at or datetime.now(timezone.utc)

    def withdraw(self) -> None:
        self._transition_to(ParticipantStatus.WITHDRAWN)

    def disqualify(self) -> None:
        self._transition_to(ParticipantStatus.DISQUALIFIED)

    def reactivate(self) -> None:
        """Move a withdrawn participant back to registered."""
        self._transition_to(ParticipantStatus.REGISTERED)
        self._checked_in_at = None

    def mark_bye_received(self) -> None:
        self._has_received_bye = True

    def set_seed(self, seed: int) -> None:
        self._seed = seed

    def _transition_to(self, new_status: ParticipantStatus) -> None:
        if not self._status.can_transition_to(new_status):
            raise InvalidStateTransitionException(
                self._id, self._status.value, new_status.value
            )
        logger.debug(
            "Participant %s: %s -> %s", self._id, self._status.value, new_status.value
        )
        self._status = new_status

    # ========== Serialisation ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "id": self._id,
            "tournament_id": self._tournament_id,
            "status": self._status.value,
            "user_id": self._user_id,
            "guest_name": self._guest_name,
            "guest_email": self._guest_email,
            "seed": self._seed,
            "has_received_bye": self._has_received_bye,
            "registered_at": _isoformat(self._registered_at),
            "checked_in_at": _isoformat(self._checked_in_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        try:
            status = ParticipantStatus(data.get("status", "confirmed"))
            registered_at = _parse_datetime(data.get("registered_at"))
            checked_in_at = _parse_datetime(data.get("checked_in_at"))
        except ValueError as e:
            raise InvalidConfigurationException(
                f"Invalid participant data: {e}"
            ) from e
        return cls(
            id=str(data["id"]),
            tournament_id=data.get("tournament_id", ""),
            status=status,
            user_id=data.get("user_id"),
            guest_name=data.get("guest_name"),
            guest_email=data.get("guest_email"),
            seed=data.get("seed"),
            has_received_bye=bool(data.get("has_received_bye", False)),
            registered_at=registered_at,
            checked_in_at=checked_in_at,
        )


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return isoparse(value)
