"""
Scoring for individual picks

A pick earns its points only when its side won. Games without a result are
pending; a tied final score has no winner, so every pick on it is incorrect.
For week and season totals see pickem/core/standings.py.
"""

from .alignment import align_picks
from .records import PickGrade, PickStatus, Selection


def grade_pick(outcome, pick):
    """
    Grade a single pick against its game's outcome.

    Returns:
        PickGrade with status PENDING and 0 points while the game is pending,
        CORRECT and the pick's points when its side won, INCORRECT and 0
        points otherwise (including ties and picks with no selection)

    Args:
        outcome: Pending or Final outcome of the pick's game
        pick: PickRecord on that game
    """
    if not outcome.is_final:
        return PickGrade(pick, PickStatus.PENDING, False, 0)

    if pick.selection == Selection.NONE:
        return PickGrade(pick, PickStatus.INCORRECT, False, 0)

    # Tie game: nobody picked the winner
    if outcome.is_tie:
        return PickGrade(pick, PickStatus.INCORRECT, False, 0)

    if pick.selection == outcome.winner:
        return PickGrade(pick, PickStatus.CORRECT, True, pick.points)

    return PickGrade(pick, PickStatus.INCORRECT, False, 0)


def grade_week(games, picks):
    """Grade one user's picks for a week, returned in game order"""
    aligned = align_picks(games, picks)
    return [grade_pick(game.outcome, pick) for game, pick in zip(games, aligned)]
