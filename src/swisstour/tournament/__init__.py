from swisstour.tournament.standing_calculator import StandingCalculator
from swisstour.tournament.tiebreak_calculator import TiebreakCalculator

__all__ = ["StandingCalculator", "TiebreakCalculator"]
