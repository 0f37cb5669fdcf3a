from pickem import db  # noqa: F401 - imported for model imports

from .game import Game
from .pick import Pick
from .season import Season
from .team import Team
from .user import User
from .week import PointValueSet, Week

__all__ = [
    "User",
    "Season",
    "Week",
    "PointValueSet",
    "Team",
    "Game",
    "Pick",
]
