"""
Exceptions raised by the pick'em core
"""


class PickemError(Exception):
    """Base class for pick'em errors"""


class PickIntegrityError(PickemError):
    """Picks and games for a week do not line up.

    Raised when a pick references a game missing from the week, when a game
    has no pick for a user, or when an edit targets a pick the user does not
    own. Upstream data is inconsistent and the operation must stop.
    """


class InvalidPickError(PickemError, ValueError):
    """A submitted pick edit is malformed (unknown selection or point value)"""
