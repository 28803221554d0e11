from collections import Counter, defaultdict

import pytest

from padelpairing.exceptions import (
    InvalidPlayerCountException,
    InvalidPlayerDataException,
)
from padelpairing.models import Player
from padelpairing.pairing import AmericanoScheduler
from padelpairing.pairing.americano import target_matches_per_player
from padelpairing.pairing.tracking import all_pairs, build_tracking, pair_key

from helpers import build_players, played_match


def _match_counts(matches):
    return Counter(pid for m in matches for pid in m.player_ids)


def _assert_no_double_booking(matches):
    by_round = defaultdict(list)
    for match in matches:
        by_round[match.round_number].extend(match.player_ids)
    for ids in by_round.values():
        assert len(ids) == len(set(ids))


def _mark_played(matches):
    for match in matches:
        match.is_played = True
    return matches


@pytest.mark.parametrize(
    "players, target", [(4, 3), (5, 4), (8, 7), (9, 8), (12, 8), (32, 8)]
)
def test_target_matches_per_player(players, target):
    assert target_matches_per_player(players) == target


def test_eight_players_two_courts_full_partner_coverage():
    players = build_players(8)
    matches = AmericanoScheduler().generate_initial_matches(players, 2)

    assert len(matches) == 14
    assert sorted({m.round_number for m in matches}) == list(range(1, 8))
    for round_number in range(1, 8):
        courts = [m.court_number for m in matches if m.round_number == round_number]
        assert sorted(courts) == [1, 2]

    tracking = build_tracking(players, matches)
    assert tracking.used_partner_pairs == all_pairs(players)
    assert set(_match_counts(matches).values()) == {7}
    _assert_no_double_booking(matches)


def test_four_players_one_court_every_split_once():
    players = build_players(4)
    matches = AmericanoScheduler().generate_initial_matches(players, 1)

    assert len(matches) == 3
    partnerships = {pair_key(*m.team1_ids) for m in matches} | {
        pair_key(*m.team2_ids) for m in matches
    }
    assert partnerships == all_pairs(players)
    assert set(_match_counts(matches).values()) == {3}


def test_twelve_players_three_courts_equal_counts():
    players = build_players(12)
    matches = AmericanoScheduler().generate_initial_matches(players, 3)

    assert set(_match_counts(matches).values()) == {8}
    assert len(matches) == 24
    _assert_no_double_booking(matches)


def test_requested_courts_are_clamped():
    players = build_players(8)
    matches = AmericanoScheduler().generate_initial_matches(players, 5)

    per_round = Counter(m.round_number for m in matches)
    assert max(per_round.values()) <= 2


def test_generation_is_deterministic():
    players = build_players(10)
    first = AmericanoScheduler().generate_initial_matches(players, 2)
    second = AmericanoScheduler().generate_initial_matches(players, 2)

    def layout(matches):
        return [
            (m.round_number, m.court_number, m.team1_ids, m.team2_ids)
            for m in matches
        ]

    assert layout(first) == layout(second)


@pytest.mark.parametrize("count", [3, 33])
def test_invalid_player_count(count):
    with pytest.raises(InvalidPlayerCountException) as exc_info:
        AmericanoScheduler().generate_initial_matches(build_players(count), 1)
    assert exc_info.value.player_count == count


def test_duplicate_player_ids_rejected():
    players = build_players(4) + [Player(name="Copy", id="P1")]
    with pytest.raises(InvalidPlayerDataException):
        AmericanoScheduler().generate_initial_matches(players, 1)


def test_extension_of_balanced_eight_player_schedule():
    players = build_players(8)
    scheduler = AmericanoScheduler()
    existing = _mark_played(scheduler.generate_initial_matches(players, 2))

    new_matches = scheduler.generate_extension_matches(players, existing, 2)

    assert [m.round_number for m in new_matches] == [8, 9]
    assert all(m.court_number == 1 for m in new_matches)
    assert set(_match_counts(existing + new_matches).values()) == {8}


def test_extension_five_players_rebalances():
    players = build_players(5)
    # Five rounds, each player sitting out once: everybody has four matches.
    existing = []
    for round_number, sitter in enumerate(reversed(players), start=1):
        group = [p for p in players if p is not sitter]
        existing.append(played_match(round_number, 1, group))

    new_matches = AmericanoScheduler().generate_extension_matches(
        players, existing, 1
    )

    assert [m.round_number for m in new_matches] == [6, 7, 8, 9, 10]
    assert set(_match_counts(existing + new_matches).values()) == {8}


def test_extension_ignores_unplayed_matches_in_counts():
    players = build_players(5)
    existing = [played_match(1, 1, players[:4])]
    # An unplayed match of the same four must not count for them.
    unplayed = played_match(2, 1, players[:4])
    unplayed.is_played = False

    new_matches = AmericanoScheduler().generate_extension_matches(
        players, existing + [unplayed], 1
    )

    assert new_matches[0].round_number == 3
    assert new_matches[0].involves("P5")


def test_extension_without_history_generates_initial_schedule():
    players = build_players(8)
    scheduler = AmericanoScheduler()

    extension = scheduler.generate_extension_matches(players, [], 2)

    assert len(extension) == 14
    assert extension[0].round_number == 1


# ========== Schedules across player and court counts ==========


def _assert_structurally_sound(players, matches, courts):
    known = {p.id for p in players}
    usable = min(courts, len(players) // 4)
    rounds = sorted({m.round_number for m in matches})
    assert rounds == list(range(1, len(rounds) + 1))
    for round_number in rounds:
        in_round = [m for m in matches if m.round_number == round_number]
        assert len(in_round) <= usable
        assert sorted(m.court_number for m in in_round) == list(
            range(1, len(in_round) + 1)
        )
    for match in matches:
        assert len(set(match.player_ids)) == 4
        assert set(match.player_ids) <= known
    _assert_no_double_booking(matches)


def _partners_covered(players, matches):
    return build_tracking(players, matches).used_partner_pairs == all_pairs(players)


@pytest.mark.parametrize("courts", range(1, 9))
@pytest.mark.parametrize("count", range(4, 33))
def test_initial_schedule_is_structurally_sound(count, courts):
    players = build_players(count)
    matches = AmericanoScheduler().generate_initial_matches(players, courts)

    assert matches
    _assert_structurally_sound(players, matches, courts)
    assert set(_match_counts(matches)) == {p.id for p in players}


@pytest.mark.parametrize(
    "count, courts",
    [(n, c) for n in range(4, 33, 4) for c in range(n // 4, 9)],
)
def test_everyone_plays_every_round_when_courts_suffice(count, courts):
    players = build_players(count)
    matches = AmericanoScheduler().generate_initial_matches(players, courts)

    assert len(set(_match_counts(matches).values())) == 1
    rounds = {m.round_number for m in matches}
    assert len(matches) == len(rounds) * (count // 4)


@pytest.mark.parametrize(
    "count, courts, expected_matches",
    [(4, c, 3) for c in range(1, 9)] + [(8, c, 14) for c in range(2, 9)],
)
def test_full_partner_coverage(count, courts, expected_matches):
    players = build_players(count)
    matches = AmericanoScheduler().generate_initial_matches(players, courts)

    assert len(matches) == expected_matches
    assert _partners_covered(players, matches)
    assert len(set(_match_counts(matches).values())) == 1


# Single-court schedules stopped by the round caps before counts or
# partnerships even out; extension rounds are what rebalances them.
@pytest.mark.parametrize(
    "count, fewest, most",
    [(6, 4, 5), (7, 5, 6), (8, 6, 6), (9, 5, 6), (18, 2, 3)],
)
def test_single_court_schedule_stops_at_round_caps(count, fewest, most):
    players = build_players(count)
    matches = AmericanoScheduler().generate_initial_matches(players, 1)

    counts = _match_counts(matches)
    assert min(counts.values()) == fewest
    assert max(counts.values()) == most
    assert not _partners_covered(players, matches)


@pytest.mark.parametrize("courts", range(1, 4))
@pytest.mark.parametrize("count", range(4, 33))
def test_extension_evens_out_any_schedule(count, courts):
    players = build_players(count)
    scheduler = AmericanoScheduler()
    existing = _mark_played(scheduler.generate_initial_matches(players, courts))
    last_round = max(m.round_number for m in existing)

    new_matches = scheduler.generate_extension_matches(players, existing, courts)

    rounds = [m.round_number for m in new_matches]
    assert rounds == list(range(last_round + 1, last_round + 1 + len(rounds)))
    assert len(rounds) >= 2
    assert all(m.court_number == 1 for m in new_matches)
    assert len(set(_match_counts(existing + new_matches).values())) == 1
    _assert_no_double_booking(existing + new_matches)
