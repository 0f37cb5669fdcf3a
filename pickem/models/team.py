from pickem import db


class Team(db.Model):
    __tablename__ = "teams"

    id = db.Column(db.Integer, primary_key=True)

    # Team identification
    city = db.Column(db.String(100), nullable=False)
    nickname = db.Column(db.String(100), nullable=False)
    stadium = db.Column(db.String(100))
    abbreviation = db.Column(db.String(10), nullable=False, unique=True, index=True)

    def __repr__(self):
        return f"<Team {self.city} {self.nickname}>"

    @property
    def full_name(self):
        """Return full team name"""
        return f"{self.city} {self.nickname}"

    @staticmethod
    def get_by_abbreviation(abbreviation):
        return Team.query.filter_by(abbreviation=abbreviation.upper()).first()

    @staticmethod
    def abbreviation_map():
        """Map of team id to abbreviation"""
        return {team.id: team.abbreviation for team in Team.query.all()}

    def to_dict(self):
        """Convert team to dictionary for API responses"""
        return {
            "id": self.id,
            "city": self.city,
            "nickname": self.nickname,
            "full_name": self.full_name,
            "abbreviation": self.abbreviation,
            "stadium": self.stadium,
        }
