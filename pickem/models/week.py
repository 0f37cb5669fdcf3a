from datetime import datetime, timezone

from pickem import db
from pickem.core.records import PointLimits


class PointValueSet(db.Model):
    """How many picks a user may assign each constrained point value in a week"""

    __tablename__ = "point_value_sets"

    id = db.Column(db.Integer, primary_key=True)
    three = db.Column(db.Integer, nullable=False)
    five = db.Column(db.Integer, nullable=False)
    seven = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        db.CheckConstraint(
            "three >= 0 AND five >= 0 AND seven >= 0", name="non_negative_limits"
        ),
    )

    def __repr__(self):
        return f"<PointValueSet 3x{self.three} 5x{self.five} 7x{self.seven}>"

    @staticmethod
    def get_or_create(three, five, seven):
        """Reuse an identical limit set if one exists"""
        pvs = PointValueSet.query.filter_by(three=three, five=five, seven=seven).first()
        if pvs is None:
            PointLimits(three, five, seven)  # raises on negative limits
            pvs = PointValueSet(three=three, five=five, seven=seven)
            db.session.add(pvs)
        return pvs

    def to_limits(self):
        return PointLimits(three=self.three, five=self.five, seven=self.seven)

    def to_dict(self):
        return {"three": self.three, "five": self.five, "seven": self.seven}


class Week(db.Model):
    __tablename__ = "weeks"

    id = db.Column(db.Integer, primary_key=True)
    season_id = db.Column(db.Integer, db.ForeignKey("seasons.id"), nullable=False)
    pvs_id = db.Column(
        db.Integer, db.ForeignKey("point_value_sets.id"), nullable=False
    )
    week = db.Column(db.Integer, nullable=False)

    # Stored as naive UTC
    week_start = db.Column(db.DateTime, nullable=False)

    # Relationships
    pvs = db.relationship("PointValueSet")
    games = db.relationship(
        "Game", backref="week", lazy="dynamic", cascade="all, delete-orphan"
    )

    __table_args__ = (
        db.UniqueConstraint("season_id", "week", name="unique_season_week"),
        db.Index("idx_week_start", "week_start"),
    )

    def __repr__(self):
        return f"<Week {self.week} of season_id={self.season_id}>"

    @staticmethod
    def get(year, week):
        """Get a week by season year and week number"""
        from .season import Season

        return (
            Week.query.join(Season)
            .filter(Season.year == year, Week.week == week)
            .first()
        )

    @staticmethod
    def current(now=None):
        """Resolve the current (year, week).

        The current week is the latest week of the current calendar year whose
        start has passed. Returns None before the first week starts.
        """
        from .season import Season

        now = now or datetime.now(timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)

        week = (
            Week.query.join(Season)
            .filter(Season.year == now.year, Week.week_start < now)
            .order_by(Week.week.desc())
            .first()
        )
        if week is None:
            return None
        return week.season.year, week.week

    def to_dict(self):
        return {
            "year": self.season.year,
            "week": self.week,
            "week_start": self.week_start.isoformat(),
            "point_values": self.pvs.to_dict(),
        }
