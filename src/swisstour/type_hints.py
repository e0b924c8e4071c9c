"""Type hints used in Swisstour."""

from typing import Dict, List, Literal, Optional, Tuple, Union

# Participant identifiers are opaque strings
ParticipantID = str

# Per-side stat map recorded on a match (e.g. {"vp": 85, "kp": 12})
StatValue = Union[int, float, bool]
StatMap = Dict[str, StatValue]

# A single previous pairing; second id is None for a bye
Matchup = Tuple[ParticipantID, Optional[ParticipantID]]
Matchups = List[Matchup]

# (player1_points, player2_points) returned by the rule evaluator
PointAward = Tuple[float, float]

# Tiebreaker key -> computed value
TiebreakValues = Dict[str, float]

# A match result seen from one side
Outcome = Literal["win", "draw", "loss", "bye", "not_played"]

# Stat comparison operators
Operator = Literal[">", ">=", "<", "<=", "=="]

#  LocalWords:  Matchup StatMap
