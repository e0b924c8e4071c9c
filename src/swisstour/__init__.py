from swisstour.engine import (
    calculate_standings,
    calculate_standings_for_profile,
    calculate_tiebreakers,
    evaluate,
    generate_pairings,
)

__version__ = "0.1.0"

__all__ = [
    "calculate_standings",
    "calculate_standings_for_profile",
    "calculate_tiebreakers",
    "evaluate",
    "generate_pairings",
]
