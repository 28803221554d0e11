from padelpairing.models.enums import MatchOutcome, TournamentStatus, TournamentType
from padelpairing.models.player import Player
from padelpairing.models.tournament import (
    Match,
    MatchResult,
    TournamentConfig,
    TournamentSummary,
)

__all__ = [
    "Match",
    "MatchOutcome",
    "MatchResult",
    "Player",
    "TournamentConfig",
    "TournamentStatus",
    "TournamentSummary",
    "TournamentType",
]
