from datetime import datetime, timezone

from pickem import db
from pickem.core.records import PickRecord, Selection
from pickem.core.scoring import grade_pick


class Pick(db.Model):
    __tablename__ = "picks"

    id = db.Column(db.Integer, primary_key=True)

    # Pick identification
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    game_id = db.Column(db.Integer, db.ForeignKey("games.id"), nullable=False)

    # Pick details: 0 = none, 1 = away, 2 = home
    selection = db.Column(db.Integer, nullable=False, default=int(Selection.NONE))
    points = db.Column(db.Integer, nullable=False, default=0)

    # Results (calculated after game completion)
    correct = db.Column(db.Boolean, nullable=False, default=False)

    # Timestamps
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Constraints and indexes
    __table_args__ = (
        db.UniqueConstraint("user_id", "game_id", name="unique_user_game_pick"),
        db.Index("idx_pick_game", "game_id"),
        db.Index("idx_pick_user", "user_id"),
        db.CheckConstraint("selection IN (0, 1, 2)", name="valid_selection"),
    )

    def __repr__(self):
        return f"<Pick user_id={self.user_id} game_id={self.game_id} selection={self.selection} points={self.points}>"

    @property
    def selected_team(self):
        if self.selection == Selection.AWAY:
            return self.game.away_team
        if self.selection == Selection.HOME:
            return self.game.home_team
        return None

    def is_locked(self, now=None):
        return self.game.has_started(now)

    def make_pick(self, selection, points):
        """Apply an accepted edit"""
        self.selection = int(selection)
        self.points = int(points)

    def update_result(self):
        """Update pick correctness from the game's outcome"""
        if self.game is None:
            return
        grade = grade_pick(self.game.outcome, self.to_record())
        self.correct = grade.correct

    def to_record(self, now=None):
        return PickRecord(
            id=self.id,
            user_id=self.user_id,
            game_id=self.game_id,
            selection=Selection(self.selection),
            points=self.points,
            locked=self.is_locked(now),
        )

    @staticmethod
    def get_user_picks_for_week(user_id, year, week):
        from .game import Game
        from .season import Season
        from .week import Week

        return (
            Pick.query.join(Game)
            .join(Week)
            .join(Season)
            .filter(Pick.user_id == user_id, Season.year == year, Week.week == week)
            .all()
        )

    def to_dict(self, now=None):
        """Convert pick to dictionary for API responses"""
        team = self.selected_team
        return {
            "id": self.id,
            "user_id": self.user_id,
            "game_id": self.game_id,
            "matchup": self.game.matchup,
            "selection": Selection(self.selection).name.lower(),
            "team": team.abbreviation if team else None,
            "points": self.points,
            "correct": self.correct,
            "locked": self.is_locked(now),
        }
