"""Builders shared by the test modules."""

from padelpairing.models import Match, Player, TournamentConfig
from padelpairing.tournament import Tournament


def build_players(count):
    return [Player(name=f"Player {i}", id=f"P{i}") for i in range(1, count + 1)]


def played_match(round_number, court_number, players, score_team1=8, score_team2=8):
    """Match of players[0]+players[1] vs players[2]+players[3], marked played."""
    return Match(
        round_number=round_number,
        court_number=court_number,
        team1=(players[0], players[1]),
        team2=(players[2], players[3]),
        score_team1=score_team1,
        score_team2=score_team2,
        is_played=True,
    )


def build_tournament(tournament_type, players, matches=None, courts=1, **config):
    return Tournament(
        TournamentConfig(
            name="Test",
            tournament_type=tournament_type,
            number_of_courts=courts,
            **config,
        ),
        players,
        matches,
    )
