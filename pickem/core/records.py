"""
Plain records exchanged between the pick'em core and its data provider

The core never touches the database. The service layer converts ORM rows into
these records, and the core hands derived records back.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional, Union

from .errors import InvalidPickError


class Selection(IntEnum):
    """Which side of a game a pick is on (stored codes)"""

    NONE = 0
    AWAY = 1
    HOME = 2


class PointValue(IntEnum):
    """Point values a pick may carry"""

    ONE = 1
    THREE = 3
    FIVE = 5
    SEVEN = 7


# Constrained point values and the PointValueSet field holding each limit.
# PointValue.ONE is absent: it may be used on any number of games.
CONSTRAINED_LIMIT_FIELDS = {
    PointValue.THREE: "three",
    PointValue.FIVE: "five",
    PointValue.SEVEN: "seven",
}


class PickStatus(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    PENDING = "pending"


@dataclass(frozen=True)
class Pending:
    """Game without a recorded result"""

    is_final = False


@dataclass(frozen=True)
class Final:
    """Recorded final score of a game"""

    home_score: int
    away_score: int

    is_final = True

    @property
    def is_tie(self):
        return self.home_score == self.away_score

    @property
    def winner(self):
        """Winning side, or None for a tie"""
        if self.is_tie:
            return None
        if self.home_score > self.away_score:
            return Selection.HOME
        return Selection.AWAY


Outcome = Union[Pending, Final]

PENDING = Pending()


def outcome_from_scores(home_score, away_score):
    """Build an outcome from nullable stored scores.

    Both scores missing means the game has not been played. A single missing
    score is not a valid stored state.
    """
    if home_score is None and away_score is None:
        return PENDING
    if home_score is None or away_score is None:
        raise ValueError(
            f"Incomplete score: home={home_score!r} away={away_score!r}"
        )
    return Final(int(home_score), int(away_score))


@dataclass(frozen=True)
class PointLimits:
    """Per-week caps on how many picks may carry each constrained value"""

    three: int
    five: int
    seven: int

    def __post_init__(self):
        for name in CONSTRAINED_LIMIT_FIELDS.values():
            value = getattr(self, name)
            if value is None or int(value) < 0:
                raise ValueError(f"Point value limit '{name}' must be >= 0")

    def limit_for(self, value):
        return getattr(self, CONSTRAINED_LIMIT_FIELDS[PointValue(value)])

    def as_dict(self):
        return {int(v): self.limit_for(v) for v in CONSTRAINED_LIMIT_FIELDS}


@dataclass(frozen=True)
class GameRecord:
    id: int
    home_team_id: int
    away_team_id: int
    kickoff: Optional[datetime] = None
    outcome: Outcome = PENDING


@dataclass(frozen=True)
class PickRecord:
    id: int
    user_id: int
    game_id: int
    selection: Selection = Selection.NONE
    points: int = 0
    locked: bool = False


def _whole_number(value):
    """Return value as an int if it is one, or a string of digits; else None"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


@dataclass(frozen=True)
class PickEdit:
    """Proposed new state for one pick"""

    pick_id: int
    selection: Selection
    points: int = 0

    def __post_init__(self):
        try:
            selection = Selection(_whole_number(self.selection))
        except ValueError:
            raise InvalidPickError(f"Unknown selection: {self.selection!r}") from None
        object.__setattr__(self, "selection", selection)

        if selection == Selection.NONE:
            # "none" never carries points
            object.__setattr__(self, "points", 0)
            return

        try:
            points = PointValue(_whole_number(self.points))
        except ValueError:
            raise InvalidPickError(f"Invalid point value: {self.points!r}") from None
        object.__setattr__(self, "points", int(points))


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str


@dataclass(frozen=True)
class PickGrade:
    pick: PickRecord
    status: PickStatus
    correct: bool
    points: int


@dataclass
class StandingsRow:
    user_id: int
    name: str
    total: int = 0
    rank: int = 0

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "name": self.name,
            "total": self.total,
            "rank": self.rank,
        }
