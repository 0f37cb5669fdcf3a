#!/usr/bin/env python3
"""
Pick'em Pool Management CLI

This script provides command-line management functionality for the pick'em pool.
"""

import logging
import os
from datetime import datetime

import click
from flask import current_app, render_template
from flask.cli import FlaskGroup, with_appcontext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from pickem import create_app, db
from pickem.core.errors import PickIntegrityError
from pickem.models import Game, PointValueSet, Season, Team, User, Week
from pickem.services.pick_service import PickService, WeekNotFoundError
from pickem.utils.timezone_utils import to_storage

logger = logging.getLogger(__name__)

DATETIME_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d"]


@click.group(cls=FlaskGroup, create_app=lambda: create_app())
def cli():
    """Pick'em Pool Management CLI"""
    pass


def _resolve_week(service, year, week):
    """Fill in a missing year/week from the current week"""
    if year is not None and week is not None:
        return year, week
    if year is not None or week is not None:
        raise click.UsageError("Pass --year and --week together, or neither")
    current = service.current_week()
    if current is None:
        raise click.ClickException("No week has started yet; pass --year and --week")
    return current


# Database Commands
@cli.group(name="db-cmd")
def db_cmd():
    """Database management commands"""
    pass


@db_cmd.command()
@with_appcontext
def init():
    """Create all database tables"""
    db.create_all()
    click.echo("✅ Database tables created")


# Season Management Commands
@cli.group()
def season():
    """Season management commands"""
    pass


@season.command()
@click.argument("year", type=int)
@with_appcontext
def create(year):
    """Create a new season"""
    if Season.get_by_year(year):
        click.echo(f"Season {year} already exists!")
        return

    try:
        Season.create_season(year)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Season creation failed - SQL error: {e}")
        raise click.ClickException(f"Database error creating season: {e}")

    click.echo(f"✅ Created season {year}")


# Week Commands
@cli.group()
def week():
    """Week and point value management commands"""
    pass


@week.command(name="add")
@click.argument("year", type=int)
@click.argument("number", type=int)
@click.option(
    "--start",
    type=click.DateTime(formats=DATETIME_FORMATS),
    required=True,
    help="Week start in the application timezone",
)
@click.option("--three", type=click.IntRange(min=0), required=True)
@click.option("--five", type=click.IntRange(min=0), required=True)
@click.option("--seven", type=click.IntRange(min=0), required=True)
@with_appcontext
def add_week(year, number, start, three, five, seven):
    """Add a week with its point value limits"""
    season_obj = Season.get_by_year(year)
    if not season_obj:
        raise click.ClickException(f"Season {year} not found! Create it first.")

    try:
        pvs = PointValueSet.get_or_create(three, five, seven)
        db.session.add(
            Week(season=season_obj, pvs=pvs, week=number, week_start=to_storage(start))
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise click.ClickException(f"Week {number} of {year} already exists!")

    click.echo(f"✅ Added {year} week {number} (3x{three}, 5x{five}, 7x{seven})")


# Team Commands
@cli.group()
def team():
    """Team management commands"""
    pass


@team.command(name="add")
@click.argument("city")
@click.argument("nickname")
@click.argument("abbreviation")
@click.option("--stadium", default=None)
@with_appcontext
def add_team(city, nickname, abbreviation, stadium):
    """Add a team"""
    try:
        db.session.add(
            Team(
                city=city,
                nickname=nickname,
                abbreviation=abbreviation.upper(),
                stadium=stadium,
            )
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise click.ClickException(f"Team {abbreviation.upper()} already exists!")

    click.echo(f"✅ Added {city} {nickname} ({abbreviation.upper()})")


# Game Commands
@cli.group()
def game():
    """Game management commands"""
    pass


@game.command(name="add")
@click.argument("year", type=int)
@click.argument("number", type=int)
@click.argument("away")
@click.argument("home")
@click.option(
    "--kickoff",
    type=click.DateTime(formats=DATETIME_FORMATS),
    required=True,
    help="Kickoff in the application timezone",
)
@with_appcontext
def add_game(year, number, away, home, kickoff):
    """Add a game AWAY @ HOME to a week"""
    week_obj = Week.get(year, number)
    if not week_obj:
        raise click.ClickException(f"Week {number} of {year} not found!")

    away_team = Team.get_by_abbreviation(away)
    home_team = Team.get_by_abbreviation(home)
    if not away_team or not home_team:
        raise click.ClickException(f"Unknown team in {away}@{home}")

    new_game = Game(
        week=week_obj,
        away_team=away_team,
        home_team=home_team,
        game_time=to_storage(kickoff),
    )
    db.session.add(new_game)
    db.session.commit()
    click.echo(f"✅ Added game {new_game.id}: {new_game.matchup}")


@game.command()
@click.argument("game_id", type=int)
@click.argument("home_score", type=click.IntRange(min=0))
@click.argument("away_score", type=click.IntRange(min=0))
@with_appcontext
def score(game_id, home_score, away_score):
    """Record a final score and grade the game's picks"""
    game_obj = Game.query.get(game_id)
    if not game_obj:
        raise click.ClickException(f"Game {game_id} not found!")

    PickService().grade_game(game_obj, home_score, away_score)
    click.echo(f"✅ {game_obj.matchup}: {away_score}-{home_score} (final)")


# User Commands
@cli.group()
def user():
    """User management commands"""
    pass


@user.command(name="create")
@click.argument("email")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@with_appcontext
def create_user(email, first_name, last_name):
    """Create a pool participant"""
    try:
        db.session.add(
            User(email=email.lower(), first_name=first_name, last_name=last_name)
        )
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise click.ClickException(f"User {email} already exists!")

    click.echo(f"✅ Created user {email.lower()}")


# Generate Commands
@cli.group()
def generate():
    """Generate season picks or static results pages"""
    pass


@generate.command()
@click.option("--year", type=int, required=True)
@with_appcontext
def picks(year):
    """Generate empty pick rows for every user and game of a season"""
    if not Season.get_by_year(year):
        raise click.ClickException(f"Season {year} not found!")

    created = PickService().create_season_picks(year)
    click.echo(f"✅ Created {created} empty picks for {year}")


@generate.command()
@click.option("--year", type=int, default=None)
@click.option("--week", "week_number", type=int, default=None)
@click.option("--output-dir", type=click.Path(file_okay=False), default=None)
@with_appcontext
def results(year, week_number, output_dir):
    """Write a static HTML results page for a week"""
    service = PickService()
    year, week_number = _resolve_week(service, year, week_number)

    try:
        table = service.results(year, week_number)
    except WeekNotFoundError as e:
        raise click.ClickException(str(e))
    except PickIntegrityError as e:
        logger.error(f"Results export failed: {e}")
        raise click.ClickException(f"Pick data is inconsistent: {e}")

    html = render_template(
        "results.html",
        title=f"{year} - Week {week_number} Results",
        table=table,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )

    output_dir = output_dir or current_app.config.get("RESULTS_EXPORT_DIR", "results")
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{year}-Week{week_number}-Results.html")
    with open(path, "w", encoding="utf-8") as f:
        f.write(html)

    click.echo(f"✅ Wrote {path}")


@cli.command()
@click.option("--year", type=int, default=None)
@click.option("--week", "week_number", type=int, default=None)
@click.option("--season", "season_to_date", is_flag=True, help="Season-to-date totals")
@with_appcontext
def standings(year, week_number, season_to_date):
    """Print standings for a week"""
    service = PickService()
    year, week_number = _resolve_week(service, year, week_number)

    try:
        rows = service.standings(year, week_number, cumulative=season_to_date)
    except WeekNotFoundError as e:
        raise click.ClickException(str(e))
    except PickIntegrityError as e:
        logger.error(f"Standings failed: {e}")
        raise click.ClickException(f"Pick data is inconsistent: {e}")

    scope = "season-to-date" if season_to_date else "week"
    click.echo(f"Standings {year} week {week_number} ({scope}):")
    for row in rows:
        click.echo(f"  {row.rank:>3}. {row.name:<30} {row.total:>4}")


if __name__ == "__main__":
    cli()
