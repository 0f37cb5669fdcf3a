"""
Weekly results table: one row per game, one column per user
"""

from dataclasses import dataclass, field
from typing import List

from .alignment import align_picks
from .records import Selection
from .scoring import grade_pick
from .standings import user_total


@dataclass
class ResultCell:
    pick: str
    points: int
    status: str

    def to_dict(self):
        return {"pick": self.pick, "points": self.points, "status": self.status}


@dataclass
class ResultsRow:
    game_id: int
    matchup: str
    picks: List[ResultCell] = field(default_factory=list)

    def to_dict(self):
        return {
            "game_id": self.game_id,
            "matchup": self.matchup,
            "picks": [cell.to_dict() for cell in self.picks],
        }


@dataclass
class ResultsTable:
    users: list
    rows: List[ResultsRow]
    totals: List[int]

    def to_dict(self):
        return {
            "users": [{"id": u.id, "name": u.name} for u in self.users],
            "rows": [row.to_dict() for row in self.rows],
            "totals": list(self.totals),
        }


def pick_label(game, selection, abbreviations):
    if selection == Selection.AWAY:
        return abbreviations.get(game.away_team_id, "")
    if selection == Selection.HOME:
        return abbreviations.get(game.home_team_id, "")
    return ""


def build_results_table(games, users, picks_by_user, abbreviations):
    """Build the results table for a week.

    Args:
        games: GameRecords in display order
        users: UserRecords in column order
        picks_by_user: dict of user id -> that user's PickRecords for the week
        abbreviations: dict of team id -> abbreviation

    Raises:
        PickIntegrityError: if a user's picks do not cover the week's games
    """
    columns = []
    for user in users:
        aligned = align_picks(games, picks_by_user.get(user.id, []))
        columns.append(
            [grade_pick(game.outcome, pick) for game, pick in zip(games, aligned)]
        )

    rows = []
    for i, game in enumerate(games):
        away = abbreviations.get(game.away_team_id, "")
        home = abbreviations.get(game.home_team_id, "")
        row = ResultsRow(game.id, f"{away}/{home}")
        for grades in columns:
            grade = grades[i]
            row.picks.append(
                ResultCell(
                    pick=pick_label(game, grade.pick.selection, abbreviations),
                    points=grade.pick.points,
                    status=grade.status.value,
                )
            )
        rows.append(row)

    totals = [user_total(grades) for grades in columns]
    return ResultsTable(list(users), rows, totals)
