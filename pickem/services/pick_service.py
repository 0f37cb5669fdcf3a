"""
Pick service: feeds the pick'em core from the database and applies its decisions

The core works on plain records. This service loads those records for a
(year, week), hands them to the validator, grader and aggregators, and writes
accepted edits back in a single transaction.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from pickem import db
from pickem.core.errors import PickemError
from pickem.core.results import build_results_table
from pickem.core.scoring import grade_week
from pickem.core.standings import aggregate_standings
from pickem.core.validation import accepted_edits, validate_picks
from pickem.models import Game, Pick, Team, User, Week
from pickem.utils.logging_config import ContextualLogger
from pickem.utils.timezone_utils import get_utc_time

logger = logging.getLogger(__name__)


class WeekNotFoundError(PickemError, LookupError):
    """No week exists for the requested (year, week)"""


@dataclass
class SubmissionResult:
    validation: object
    applied: List[int] = field(default_factory=list)

    @property
    def ok(self):
        return self.validation.ok

    @property
    def message(self):
        if not self.ok:
            return self.validation.message()
        return "Picks submitted successfully!"


class PickService:
    """Data provider and write path for weekly picks.

    Args:
        session: SQLAlchemy session used for reads and writes
        clock: callable returning the current aware UTC datetime
    """

    def __init__(self, session=None, clock=None):
        self.session = session or db.session
        self.clock = clock or get_utc_time

    def get_week(self, year, week):
        week_obj = Week.get(year, week)
        if week_obj is None:
            raise WeekNotFoundError(f"No week {week} in {year}")
        return week_obj

    def current_week(self):
        return Week.current(self.clock())

    def week_games(self, year, week):
        self.get_week(year, week)
        return Game.get_games_for_week(year, week)

    def user_week_picks(self, user_id, year, week):
        return Pick.get_user_picks_for_week(user_id, year, week)

    def submit_picks(self, user, year, week, edits):
        """Validate a user's edits for a week and store the accepted ones.

        Either every accepted edit is written or none is. Edits to picks whose
        game has kicked off are dropped before validation.
        """
        log = ContextualLogger(__name__, {"user": user.id, "year": year, "week": week})
        now = self.clock()
        week_obj = self.get_week(year, week)

        picks = self.user_week_picks(user.id, year, week)
        records = [pick.to_record(now) for pick in picks]

        validation = validate_picks(week_obj.pvs.to_limits(), records, edits)
        if not validation.ok:
            log.warning(f"Rejected picks: {validation.message()}")
            return SubmissionResult(validation)

        by_id = {pick.id: pick for pick in picks}
        applied = []
        try:
            for edit in accepted_edits(records, edits):
                by_id[edit.pick_id].make_pick(edit.selection, edit.points)
                applied.append(edit.pick_id)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            log.error(f"Error saving picks: {e}")
            raise

        log.info(f"Saved {len(applied)} picks ({len(edits) - len(applied)} skipped)")

        if current_app.config.get("PICKS_EMAIL_NOTIFICATIONS"):
            from pickem.utils.email_service import EmailService

            selected = [p for p in picks if p.selected_team is not None]
            EmailService().send_picks_email(
                user, f"Current Week {week} Picks", week, selected
            )

        return SubmissionResult(validation, applied)

    def results(self, year, week):
        """Results table for a week, one column per user holding picks that week"""
        games = self.week_games(year, week)
        game_records = [game.to_record() for game in games]

        users = []
        picks_by_user = {}
        for user in User.all_active():
            picks = self.user_week_picks(user.id, year, week)
            if not picks:
                continue
            users.append(user.to_record())
            picks_by_user[user.id] = [pick.to_record() for pick in picks]

        return build_results_table(
            game_records, users, picks_by_user, Team.abbreviation_map()
        )

    def standings(self, year, week, cumulative=False):
        """Ranked totals for one week, or season-to-date through ``week``"""
        self.get_week(year, week)
        weeks = range(1, week + 1) if cumulative else [week]

        games_by_week = {}
        for w in weeks:
            if Week.get(year, w) is not None:
                games_by_week[w] = [g.to_record() for g in Game.get_games_for_week(year, w)]

        users = User.all_active()
        grades_by_user = {}
        for user in users:
            grades = []
            for w, games in games_by_week.items():
                picks = [p.to_record() for p in self.user_week_picks(user.id, year, w)]
                # Users without picks for a week have nothing to grade there
                if picks:
                    grades.extend(grade_week(games, picks))
            grades_by_user[user.id] = grades

        rows = aggregate_standings([u.to_record() for u in users], grades_by_user)
        logger.debug(f"Standings for {year} week {week} (cumulative={cumulative}): {len(rows)} rows")
        return rows

    def grade_game(self, game, home_score, away_score):
        """Record a final score and store correctness for the game's picks"""
        try:
            game.update_score(home_score, away_score)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.info(f"Graded {game.picks.count()} picks for {game.matchup} ({away_score}-{home_score})")

    def create_season_picks(self, year):
        """Create empty picks for every active user and every game of a season.

        Existing picks are left untouched. Returns the number created.
        """
        games = Game.get_games_for_season(year)
        game_ids = [game.id for game in games]
        existing = set()
        if game_ids:
            picks = Pick.query.filter(Pick.game_id.in_(game_ids)).all()
            existing = {(pick.user_id, pick.game_id) for pick in picks}

        created = 0
        for user in User.all_active():
            for game in games:
                if (user.id, game.id) in existing:
                    continue
                self.session.add(Pick(user_id=user.id, game_id=game.id))
                created += 1

        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        logger.info(f"Created {created} empty picks for {year}")
        return created
