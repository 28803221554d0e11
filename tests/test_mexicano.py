import random

from padelpairing.models import TournamentType
from padelpairing.pairing import MexicanoScheduler, get_scheduler
from padelpairing.pairing.mexicano import matches_from_ordering, select_active_players
from padelpairing.pairing.tracking import TrackingState, build_tracking

from helpers import build_players, played_match


def test_get_scheduler_by_type():
    assert isinstance(get_scheduler(TournamentType.MEXICANO), MexicanoScheduler)
    assert isinstance(get_scheduler("mexicano"), MexicanoScheduler)


def test_first_round_uses_every_court(rng):
    players = build_players(8)
    matches = MexicanoScheduler().generate_initial_matches(players, 2, rng)

    assert len(matches) == 2
    assert {m.round_number for m in matches} == {1}
    assert [m.court_number for m in matches] == [1, 2]
    ids = [pid for m in matches for pid in m.player_ids]
    assert len(set(ids)) == 8


def test_first_round_with_sitters(rng):
    players = build_players(6)
    matches = MexicanoScheduler().generate_initial_matches(players, 1, rng)
    assert len(matches) == 1


def test_seeded_first_round_is_reproducible():
    players = build_players(12)
    first = MexicanoScheduler().generate_initial_matches(
        players, 3, random.Random(7)
    )
    second = MexicanoScheduler().generate_initial_matches(
        players, 3, random.Random(7)
    )
    assert [m.player_ids for m in first] == [m.player_ids for m in second]


def test_matches_from_ordering_pairs_first_with_third():
    players = build_players(8)
    matches = matches_from_ordering(players, round_number=5)

    assert matches[0].team1_ids == ("P1", "P3")
    assert matches[0].team2_ids == ("P2", "P4")
    assert matches[1].team1_ids == ("P5", "P7")
    assert matches[1].team2_ids == ("P6", "P8")
    assert all(m.round_number == 5 for m in matches)


def test_matches_from_ordering_drops_incomplete_group():
    assert len(matches_from_ordering(build_players(7), round_number=1)) == 1


def test_select_active_players_prefers_fewest_matches(rng):
    players = build_players(5)
    tracking = build_tracking(players, [played_match(1, 1, players[:4])])

    active = select_active_players(players, tracking, 1, rng)

    assert len(active) == 4
    assert active[0].id == "P5"


def test_select_active_players_then_longest_rest(rng):
    players = build_players(5)
    tracking = TrackingState.for_players(players)
    tracking.match_count.update({p.id: 2 for p in players})
    tracking.last_played_round.update({"P1": 3, "P2": 2, "P3": 2, "P4": 2, "P5": 2})

    active = select_active_players(players, tracking, 1, rng)

    assert "P1" not in {p.id for p in active}


def test_extension_ranks_by_points(rng):
    players = build_players(8)
    for points, player in zip(range(80, 0, -10), players):
        player.total_points = points
    existing = [
        played_match(1, 1, [players[0], players[7], players[2], players[5]]),
        played_match(1, 2, [players[1], players[6], players[3], players[4]]),
    ]

    new_matches = MexicanoScheduler().generate_extension_matches(
        players, existing, 2, rng
    )

    assert [m.round_number for m in new_matches] == [2, 2]
    assert new_matches[0].team1_ids == ("P1", "P3")
    assert new_matches[0].team2_ids == ("P2", "P4")
    assert new_matches[1].team1_ids == ("P5", "P7")
    assert new_matches[1].team2_ids == ("P6", "P8")


def test_extension_brings_in_sitting_player(rng):
    players = build_players(5)
    existing = [played_match(1, 1, players[:4], 10, 6)]

    new_matches = MexicanoScheduler().generate_extension_matches(
        players, existing, 1, rng
    )

    assert len(new_matches) == 1
    assert new_matches[0].round_number == 2
    assert new_matches[0].involves("P5")


def test_extension_without_history_behaves_like_first_round(rng):
    players = build_players(8)
    matches = MexicanoScheduler().generate_extension_matches(players, [], 2, rng)
    assert len(matches) == 2
    assert {m.round_number for m in matches} == {1}
