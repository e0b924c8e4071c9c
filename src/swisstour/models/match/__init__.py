from swisstour.models.match.match_result import MatchResult
from swisstour.models.match.tournament_match import TournamentMatch

__all__ = ["MatchResult", "TournamentMatch"]
