"""
Standings aggregation

Totals only count graded picks that were correct. Ties on total are ordered
by user name (case-insensitive), then user id, and share the same rank.
"""

from .records import StandingsRow


def user_total(grades):
    """Sum the points credited for correct picks"""
    return sum(grade.points for grade in grades if grade.correct)


def aggregate_standings(users, grades_by_user):
    """Build a ranked standings table.

    Args:
        users: iterable of UserRecord; every user gets a row
        grades_by_user: dict of user id -> iterable of PickGrade in scope

    Returns:
        list: StandingsRow sorted by total descending
    """
    rows = []
    for user in users:
        grades = grades_by_user.get(user.id, ())
        rows.append(StandingsRow(user.id, user.name, user_total(grades)))

    rows.sort(key=lambda r: (-r.total, r.name.casefold(), r.user_id))

    previous_total = None
    for position, row in enumerate(rows, start=1):
        if row.total != previous_total:
            rank = position
            previous_total = row.total
        row.rank = rank

    return rows
