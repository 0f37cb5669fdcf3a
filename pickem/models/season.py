from datetime import datetime, timezone

from pickem import db


class Season(db.Model):
    __tablename__ = "seasons"

    id = db.Column(db.Integer, primary_key=True)
    year = db.Column(db.Integer, nullable=False, unique=True, index=True)
    name = db.Column(db.String(50), nullable=False)  # e.g., "2025 NFL Season"

    # Timestamps
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    weeks = db.relationship(
        "Week", backref="season", lazy="dynamic", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Season {self.year}>"

    @staticmethod
    def get_by_year(year):
        return Season.query.filter_by(year=year).first()

    @staticmethod
    def create_season(year):
        """Create a new season"""
        season = Season(year=year, name=f"{year} NFL Season")
        db.session.add(season)
        return season

