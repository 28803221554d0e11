import pytest

from padelpairing.controllers.tournament import (
    RoundManager,
    RoundOutcomeKind,
)
from padelpairing.controllers.tournament.round_manager import consume_extension_round
from padelpairing.exceptions import TournamentStateException
from padelpairing.models import TournamentConfig, TournamentStatus, TournamentType

from helpers import build_players, build_tournament, played_match

# Six single-court rounds in which each of eight players plays three times.
EIGHT_PLAYER_GROUPS = [
    (0, 1, 2, 3),
    (4, 5, 6, 7),
    (0, 1, 4, 5),
    (2, 3, 6, 7),
    (0, 2, 4, 6),
    (1, 3, 5, 7),
]


def _three_rounds_each(players):
    return [
        played_match(round_number, 1, [players[i] for i in group])
        for round_number, group in enumerate(EIGHT_PLAYER_GROUPS, start=1)
    ]


def _play_all(tournament):
    for match in tournament.unplayed_matches:
        match.score_team1, match.score_team2 = 9, 7
        match.is_played = True
        for player in match.players:
            player.games_played += 1


@pytest.fixture
def manager(rng):
    return RoundManager(rng)


@pytest.mark.parametrize(
    "remaining, may_complete, left",
    [(0, True, 0), (1, True, 0), (2, False, 1)],
)
def test_consume_extension_round(remaining, may_complete, left):
    config = TournamentConfig("T", TournamentType.MEXICANO)
    config.extension_rounds_remaining = remaining

    assert consume_extension_round(config) is may_complete
    assert config.extension_rounds_remaining == left


def test_pending_matches_only_save(manager):
    players = build_players(8)
    tournament = build_tournament(TournamentType.AMERICANO, players, courts=2)
    tournament.generate_initial_matches()
    tournament.matches[0].is_played = True

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.MATCH_SAVED
    assert not tournament.is_completed


def test_americano_completes_when_all_played(manager):
    players = build_players(8)
    tournament = build_tournament(TournamentType.AMERICANO, players, courts=2)
    tournament.generate_initial_matches()
    _play_all(tournament)
    assert tournament.status is TournamentStatus.ROUND_PENDING_COMPLETION

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.TOURNAMENT_COMPLETED
    assert tournament.is_completed
    assert tournament.status is TournamentStatus.COMPLETED


def test_mexicano_completes_with_equal_counts(manager):
    players = build_players(8)
    tournament = build_tournament(
        TournamentType.MEXICANO, players, _three_rounds_each(players)
    )

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.TOURNAMENT_COMPLETED
    assert tournament.is_completed
    assert len(tournament.matches) == 6


def test_mexicano_generates_next_round_while_counts_unequal(manager):
    players = build_players(8)
    matches = _three_rounds_each(players)[:5]
    tournament = build_tournament(TournamentType.MEXICANO, players, matches)

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.NEW_ROUND_GENERATED
    assert [m.round_number for m in outcome.new_matches] == [6]
    assert outcome.new_matches[0] in tournament.matches
    assert not tournament.is_completed


def test_mexicano_needs_three_matches_each(manager):
    players = build_players(8)
    tournament = build_tournament(
        TournamentType.MEXICANO, players, _three_rounds_each(players)[:2]
    )

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.NEW_ROUND_GENERATED


def test_owed_rounds_delay_completion(manager):
    players = build_players(8)
    tournament = build_tournament(
        TournamentType.MEXICANO,
        players,
        _three_rounds_each(players),
        extension_rounds_remaining=2,
    )

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.NEW_ROUND_GENERATED
    assert tournament.config.extension_rounds_remaining == 1


def test_correction_after_completion_keeps_tournament_closed(manager):
    players = build_players(8)
    tournament = build_tournament(
        TournamentType.MEXICANO,
        players,
        _three_rounds_each(players),
        is_completed=True,
    )

    outcome = manager.on_result_recorded(tournament)

    assert outcome.kind is RoundOutcomeKind.MATCH_SAVED
    assert tournament.is_completed
    assert len(tournament.matches) == 6


def test_continue_requires_completed_tournament(manager):
    players = build_players(8)
    tournament = build_tournament(TournamentType.MEXICANO, players, courts=2)
    tournament.generate_initial_matches()

    with pytest.raises(TournamentStateException):
        manager.continue_tournament(tournament)


def test_continue_mexicano_owes_two_rounds(manager):
    players = build_players(8)
    tournament = build_tournament(
        TournamentType.MEXICANO,
        players,
        _three_rounds_each(players),
        is_completed=True,
    )

    new_matches = manager.continue_tournament(tournament)

    assert not tournament.is_completed
    assert tournament.config.extension_rounds_remaining == 2
    assert [m.round_number for m in new_matches] == [7]

    # First owed round: another round is generated even with equal counts.
    _play_all(tournament)
    first = manager.on_result_recorded(tournament)
    assert first.kind is RoundOutcomeKind.NEW_ROUND_GENERATED
    assert tournament.config.extension_rounds_remaining == 1


def test_continue_americano_adds_rounds(manager):
    players = build_players(8)
    tournament = build_tournament(TournamentType.AMERICANO, players, courts=2)
    tournament.generate_initial_matches()
    _play_all(tournament)
    manager.on_result_recorded(tournament)

    new_matches = manager.continue_tournament(tournament)

    assert [m.round_number for m in new_matches] == [8, 9]
    assert not tournament.is_completed
    assert tournament.config.extension_rounds_remaining == 0

    _play_all(tournament)
    outcome = manager.on_result_recorded(tournament)
    assert outcome.kind is RoundOutcomeKind.TOURNAMENT_COMPLETED
