from padelpairing.models.tournament.match import Match
from padelpairing.models.tournament.match_result import MatchResult
from padelpairing.models.tournament.tournament_config import TournamentConfig
from padelpairing.models.tournament.tournament_summary import TournamentSummary

__all__ = [
    "Match",
    "MatchResult",
    "TournamentConfig",
    "TournamentSummary",
]
