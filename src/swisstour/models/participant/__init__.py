from swisstour.models.participant.participant import Participant, ParticipantStatus

__all__ = ["Participant", "ParticipantStatus"]
