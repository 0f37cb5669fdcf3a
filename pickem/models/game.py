from datetime import datetime, timezone

from pickem import db
from pickem.core.records import GameRecord, outcome_from_scores
from pickem.utils.timezone_utils import ensure_utc, format_kickoff


class Game(db.Model):
    __tablename__ = "games"

    id = db.Column(db.Integer, primary_key=True)

    # Game identification
    week_id = db.Column(db.Integer, db.ForeignKey("weeks.id"), nullable=False)

    # Teams
    home_team_id = db.Column(db.Integer, db.ForeignKey("teams.id"), nullable=False)
    away_team_id = db.Column(db.Integer, db.ForeignKey("teams.id"), nullable=False)

    # Kickoff, stored as naive UTC
    game_time = db.Column(db.DateTime, nullable=False)

    # Scores stay NULL until the game has a result
    home_score = db.Column(db.Integer)
    away_score = db.Column(db.Integer)

    # Relationships
    home_team = db.relationship("Team", foreign_keys=[home_team_id], lazy="joined")
    away_team = db.relationship("Team", foreign_keys=[away_team_id], lazy="joined")
    picks = db.relationship(
        "Pick", backref="game", lazy="dynamic", cascade="all, delete-orphan"
    )

    # Indexes
    __table_args__ = (
        db.Index("idx_game_week", "week_id"),
        db.Index("idx_game_time", "game_time"),
        db.CheckConstraint("home_team_id != away_team_id", name="different_teams"),
        db.CheckConstraint(
            "(home_score IS NULL) = (away_score IS NULL)", name="complete_score"
        ),
    )

    def __repr__(self):
        return f'<Game {self.away_team.abbreviation if self.away_team else "TBD"} @ {self.home_team.abbreviation if self.home_team else "TBD"}>'

    @property
    def outcome(self):
        """Pending or Final outcome of the game"""
        return outcome_from_scores(self.home_score, self.away_score)

    @property
    def matchup(self):
        return f"{self.away_team.abbreviation}/{self.home_team.abbreviation}"

    def has_started(self, now=None):
        """Check if game has started"""
        now = now or datetime.now(timezone.utc)
        return now >= ensure_utc(self.game_time)

    def update_score(self, home_score, away_score):
        """Record the final score and regrade every pick on this game"""
        outcome_from_scores(home_score, away_score)  # reject half-filled scores
        self.home_score = home_score
        self.away_score = away_score

        for pick in self.picks.all():
            pick.update_result()

    @staticmethod
    def get_games_for_week(year, week):
        """Get all games for a week ordered by kickoff"""
        from .season import Season
        from .week import Week

        return (
            Game.query.join(Week)
            .join(Season)
            .filter(Season.year == year, Week.week == week)
            .order_by(Game.game_time, Game.id)
            .all()
        )

    @staticmethod
    def get_games_for_season(year):
        from .season import Season
        from .week import Week

        return (
            Game.query.join(Week)
            .join(Season)
            .filter(Season.year == year)
            .order_by(Week.week, Game.game_time, Game.id)
            .all()
        )

    def to_record(self):
        return GameRecord(
            id=self.id,
            home_team_id=self.home_team_id,
            away_team_id=self.away_team_id,
            kickoff=ensure_utc(self.game_time),
            outcome=self.outcome,
        )

    def to_dict(self, now=None):
        """Convert game to dictionary for API responses"""
        outcome = self.outcome
        winner = outcome.winner if outcome.is_final else None
        return {
            "id": self.id,
            "week": self.week.week,
            "game_time": self.game_time.isoformat(),
            "kickoff_local": format_kickoff(self.game_time),
            "home_team": self.home_team.to_dict(),
            "away_team": self.away_team.to_dict(),
            "home_score": self.home_score,
            "away_score": self.away_score,
            "is_final": outcome.is_final,
            "is_tie": outcome.is_final and outcome.is_tie,
            "winner": winner.name.lower() if winner is not None else None,
            "has_started": self.has_started(now),
        }
