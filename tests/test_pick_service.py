"""Tests for the pick service against the database models."""

from datetime import timedelta

import pytest

from pickem.core.records import PickEdit, Selection
from pickem.models import Pick
from pickem.services.pick_service import PickService, WeekNotFoundError


def pick_for(user, game):
    return Pick.query.filter_by(user_id=user.id, game_id=game.id).one()


def service_at(moment):
    return PickService(clock=lambda: moment)


@pytest.fixture
def alice(seeded):
    return seeded["users"][0]


@pytest.fixture
def bob(seeded):
    return seeded["users"][1]


@pytest.fixture
def games(seeded):
    return seeded["games"]


class TestCreateSeasonPicks:
    def test_every_user_gets_an_empty_pick_per_game(self, seeded, alice, games):
        picks = Pick.query.filter_by(user_id=alice.id).all()

        assert len(picks) == len(games)
        assert all(p.selection == Selection.NONE and p.points == 0 for p in picks)

    def test_is_idempotent(self, seeded):
        assert PickService().create_season_picks(2024) == 0


class TestSubmitPicks:
    def test_valid_submission_is_stored(self, alice, games, week_start):
        service = service_at(week_start)
        edits = [
            PickEdit(pick_for(alice, games[0]).id, Selection.HOME, 3),
            PickEdit(pick_for(alice, games[1]).id, Selection.AWAY, 3),
            PickEdit(pick_for(alice, games[2]).id, Selection.HOME, 5),
        ]

        result = service.submit_picks(alice, 2024, 1, edits)

        assert result.ok
        assert len(result.applied) == 3
        stored = pick_for(alice, games[1])
        assert (stored.selection, stored.points) == (Selection.AWAY, 3)

    def test_invalid_submission_writes_nothing(self, alice, games, week_start):
        service = service_at(week_start)
        edits = [PickEdit(pick_for(alice, g).id, Selection.HOME, 3) for g in games[:3]]

        result = service.submit_picks(alice, 2024, 1, edits)

        assert not result.ok
        assert result.message == "Invalid Picks: Too many three point games."
        assert all(pick_for(alice, g).points == 0 for g in games)

    def test_edits_to_started_games_are_ignored(self, alice, games, week_start):
        first = pick_for(alice, games[0])
        service_at(week_start).submit_picks(
            alice, 2024, 1, [PickEdit(first.id, Selection.HOME, 7)]
        )

        # First game has kicked off, second has not
        later = service_at(week_start + timedelta(minutes=90))
        result = later.submit_picks(
            alice, 2024, 1, [PickEdit(first.id, Selection.AWAY, 1)]
        )

        assert result.ok
        assert result.applied == []
        stored = pick_for(alice, games[0])
        assert (stored.selection, stored.points) == (Selection.HOME, 7)

    def test_locked_pick_still_counts_toward_limits(self, alice, games, week_start):
        first = pick_for(alice, games[0])
        second = pick_for(alice, games[1])
        service_at(week_start).submit_picks(
            alice, 2024, 1, [PickEdit(first.id, Selection.HOME, 7)]
        )

        later = service_at(week_start + timedelta(minutes=90))
        result = later.submit_picks(
            alice,
            2024,
            1,
            [PickEdit(first.id, Selection.HOME, 1), PickEdit(second.id, Selection.HOME, 7)],
        )

        assert tuple(result.validation) == (True, True, False)
        assert pick_for(alice, games[1]).points == 0

    def test_unknown_week(self, alice, week_start):
        with pytest.raises(WeekNotFoundError):
            service_at(week_start).submit_picks(alice, 2024, 9, [])


class TestGrading:
    def test_grade_game_marks_correct_picks(self, alice, bob, games, week_start):
        service = service_at(week_start)
        service.submit_picks(alice, 2024, 1, [PickEdit(pick_for(alice, games[0]).id, Selection.HOME, 5)])
        service.submit_picks(bob, 2024, 1, [PickEdit(pick_for(bob, games[0]).id, Selection.AWAY, 5)])

        service.grade_game(games[0], home_score=21, away_score=14)

        assert pick_for(alice, games[0]).correct is True
        assert pick_for(bob, games[0]).correct is False

    def test_tie_marks_everyone_incorrect(self, alice, games, week_start):
        service = service_at(week_start)
        service.submit_picks(alice, 2024, 1, [PickEdit(pick_for(alice, games[0]).id, Selection.HOME, 5)])

        service.grade_game(games[0], home_score=20, away_score=20)

        assert pick_for(alice, games[0]).correct is False


class TestStandingsAndResults:
    def test_week_standings(self, alice, bob, games, week_start):
        service = service_at(week_start)
        service.submit_picks(alice, 2024, 1, [
            PickEdit(pick_for(alice, games[0]).id, Selection.HOME, 3),
            PickEdit(pick_for(alice, games[1]).id, Selection.HOME, 5),
            PickEdit(pick_for(alice, games[2]).id, Selection.HOME, 7),
        ])
        service.submit_picks(bob, 2024, 1, [PickEdit(pick_for(bob, games[1]).id, Selection.AWAY, 5)])
        service.grade_game(games[0], 21, 14)
        service.grade_game(games[1], 10, 17)

        rows = service.standings(2024, 1)

        assert [(r.name, r.total, r.rank) for r in rows] == [("Bob", 5, 1), ("Alice", 3, 2)]

    def test_season_to_date_standings(self, seed, alice, games, week_start):
        week_two = seed(week_start + timedelta(days=7), week_number=2)
        service = service_at(week_start)
        service.submit_picks(alice, 2024, 1, [PickEdit(pick_for(alice, games[0]).id, Selection.HOME, 3)])
        service.submit_picks(alice, 2024, 2, [PickEdit(pick_for(alice, week_two["games"][0]).id, Selection.HOME, 7)])
        service.grade_game(games[0], 21, 14)
        service.grade_game(week_two["games"][0], 28, 3)

        week_rows = {r.name: r.total for r in service.standings(2024, 2)}
        season_rows = {r.name: r.total for r in service.standings(2024, 2, cumulative=True)}

        assert week_rows == {"Alice": 7, "Bob": 0}
        assert season_rows == {"Alice": 10, "Bob": 0}

    def test_results_table(self, alice, games, week_start):
        service = service_at(week_start)
        service.submit_picks(alice, 2024, 1, [PickEdit(pick_for(alice, games[0]).id, Selection.AWAY, 5)])
        service.grade_game(games[0], 21, 14)

        table = service.results(2024, 1)

        assert [u.name for u in table.users] == ["Alice", "Bob"]
        assert table.rows[0].matchup == "BAL/KC"
        assert table.rows[0].picks[0].pick == "BAL"
        assert table.rows[0].picks[0].status == "incorrect"
        assert table.rows[1].picks[0].status == "pending"
        assert table.totals == [0, 0]


class TestCurrentWeek:
    def test_before_first_week(self, seeded, week_start):
        assert service_at(week_start - timedelta(days=1)).current_week() is None

    def test_after_week_start(self, seeded, week_start):
        assert service_at(week_start + timedelta(hours=1)).current_week() == (2024, 1)

    def test_latest_started_week_wins(self, seed, seeded, week_start):
        seed(week_start + timedelta(days=7), week_number=2)

        assert service_at(week_start + timedelta(days=8)).current_week() == (2024, 2)
        assert service_at(week_start + timedelta(days=3)).current_week() == (2024, 1)
