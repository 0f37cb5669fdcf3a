"""
Point distribution validation for a user's weekly picks

Picks lock one game at a time as kickoffs pass, so a submission mixes
irrevocable picks with new choices. The effective week is rebuilt from the
stored picks plus the acceptable edits before the per-value caps are checked.
Users may "under-point" a week and submit the rest later.
"""

import logging
from collections import Counter

from .errors import PickIntegrityError
from .records import CONSTRAINED_LIMIT_FIELDS, PointValue, Selection

logger = logging.getLogger(__name__)


class ValidationResult:
    """Outcome of checking a week's picks against its point value limits.

    Unpacks to one boolean per constrained value in ascending value order,
    e.g. ``three, five, seven = validate_picks(...)``.
    """

    def __init__(self, checks, counts):
        self.checks = dict(checks)
        self.counts = dict(counts)

    def __iter__(self):
        return iter(self.checks[value] for value in sorted(self.checks))

    def __eq__(self, other):
        if isinstance(other, ValidationResult):
            return self.checks == other.checks
        if isinstance(other, tuple):
            return tuple(self) == other
        return NotImplemented

    def __repr__(self):
        return f"<ValidationResult {tuple(self)}>"

    @property
    def ok(self):
        return all(self.checks.values())

    @property
    def failed_values(self):
        return [value for value in sorted(self.checks) if not self.checks[value]]

    def message(self):
        """Human readable summary of the failed constraints"""
        if self.ok:
            return ""
        parts = ["Invalid Picks:"]
        for value in self.failed_values:
            name = CONSTRAINED_LIMIT_FIELDS[PointValue(value)]
            parts.append(f"Too many {name} point games.")
        return " ".join(parts)


def _index_edits(picks, edits):
    owned = {pick.id for pick in picks}
    by_pick = {}
    for edit in edits:
        if edit.pick_id not in owned:
            raise PickIntegrityError(
                f"Edit references pick {edit.pick_id} outside the user's week"
            )
        # Last edit for a pick wins
        by_pick[edit.pick_id] = edit
    return by_pick


def accepted_edits(picks, edits):
    """Edits that would be written if the submission is valid.

    Edits to locked picks and edits with no selection are dropped. The pick
    keeps whatever is stored for it.
    """
    by_pick = _index_edits(picks, edits)
    accepted = []
    for pick in picks:
        edit = by_pick.get(pick.id)
        if edit is None or pick.locked or edit.selection == Selection.NONE:
            continue
        accepted.append(edit)
    return accepted


def effective_picks(picks, edits):
    """Yield ``(selection, points)`` for every pick of the week after edits"""
    by_pick = {edit.pick_id: edit for edit in accepted_edits(picks, edits)}
    for pick in picks:
        edit = by_pick.get(pick.id)
        if edit is not None:
            yield edit.selection, edit.points
        else:
            yield pick.selection, pick.points


def validate_picks(pvs, picks, edits):
    """Check that a week's picks respect the point value limits.

    Args:
        pvs: PointLimits for the week
        picks: every PickRecord the user holds for the week, with lock state
        edits: proposed PickEdit objects

    Returns:
        ValidationResult: one check per constrained point value
    """
    counts = Counter()
    for selection, points in effective_picks(picks, edits):
        if selection == Selection.NONE or not points:
            continue
        counts[int(points)] += 1

    checks = {}
    for value in CONSTRAINED_LIMIT_FIELDS:
        checks[int(value)] = counts[int(value)] <= pvs.limit_for(value)

    logger.debug(f"Point tallies {dict(counts)} against limits {pvs.as_dict()}")
    return ValidationResult(checks, counts)
