"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from pickem import create_app, db
from pickem.core.records import PointLimits
from pickem.models import Game, PointValueSet, Season, Team, User, Week
from pickem.services.pick_service import PickService


@pytest.fixture
def app():
    """Application with an in-memory database and an active app context."""
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def pvs():
    """Limits used throughout the tests: two 3s, two 5s, one 7."""
    return PointLimits(three=2, five=2, seven=1)


def seed_week(start, year=None, week_number=1, limits=(2, 2, 1), users=("Alice", "Bob")):
    """Create a season week with four games and empty picks for each user.

    Games kick off 1h, 2h, 3h and 4h after ``start``.

    Returns:
        dict with the season, week, games (kickoff order), and users
    """
    year = year or start.year
    season = Season.get_by_year(year) or Season.create_season(year)
    pvs = PointValueSet.get_or_create(*limits)

    week = Week(
        season=season,
        pvs=pvs,
        week=week_number,
        week_start=start.astimezone(timezone.utc).replace(tzinfo=None),
    )
    db.session.add(week)

    teams = {}
    for abbr, city, nickname in [
        ("KC", "Kansas City", "Chiefs"),
        ("BAL", "Baltimore", "Ravens"),
        ("PHI", "Philadelphia", "Eagles"),
        ("GB", "Green Bay", "Packers"),
        ("PIT", "Pittsburgh", "Steelers"),
        ("ATL", "Atlanta", "Falcons"),
        ("BUF", "Buffalo", "Bills"),
        ("ARI", "Arizona", "Cardinals"),
    ]:
        team = Team.get_by_abbreviation(abbr)
        if team is None:
            team = Team(city=city, nickname=nickname, abbreviation=abbr)
            db.session.add(team)
        teams[abbr] = team

    games = []
    for hours, (away, home) in enumerate(
        [("BAL", "KC"), ("GB", "PHI"), ("PIT", "ATL"), ("ARI", "BUF")], start=1
    ):
        kickoff = start + timedelta(hours=hours)
        game = Game(
            week=week,
            away_team=teams[away],
            home_team=teams[home],
            game_time=kickoff.astimezone(timezone.utc).replace(tzinfo=None),
        )
        db.session.add(game)
        games.append(game)

    created_users = []
    for name in users:
        user = User.get_by_email(f"{name.lower()}@example.com")
        if user is None:
            user = User(email=f"{name.lower()}@example.com", first_name=name)
            db.session.add(user)
        created_users.append(user)

    db.session.commit()
    PickService().create_season_picks(year)

    return {"season": season, "week": week, "games": games, "users": created_users}


@pytest.fixture
def week_start():
    return datetime(2024, 9, 8, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded(app, week_start):
    return seed_week(week_start)


@pytest.fixture
def seed(app):
    """Factory for additional weeks: ``seed(start, week_number=2)``."""
    return seed_week
