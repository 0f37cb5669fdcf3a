from .alignment import align_picks, align_to
from .errors import InvalidPickError, PickemError, PickIntegrityError
from .records import (
    CONSTRAINED_LIMIT_FIELDS,
    PENDING,
    Final,
    GameRecord,
    Pending,
    PickEdit,
    PickGrade,
    PickRecord,
    PickStatus,
    PointLimits,
    PointValue,
    Selection,
    StandingsRow,
    UserRecord,
    outcome_from_scores,
)
from .results import build_results_table
from .scoring import grade_pick, grade_week
from .standings import aggregate_standings, user_total
from .validation import ValidationResult, accepted_edits, validate_picks

__all__ = [
    "align_picks",
    "align_to",
    "accepted_edits",
    "aggregate_standings",
    "build_results_table",
    "grade_pick",
    "grade_week",
    "outcome_from_scores",
    "user_total",
    "validate_picks",
    "CONSTRAINED_LIMIT_FIELDS",
    "PENDING",
    "Final",
    "GameRecord",
    "InvalidPickError",
    "Pending",
    "PickEdit",
    "PickGrade",
    "PickIntegrityError",
    "PickRecord",
    "PickStatus",
    "PickemError",
    "PointLimits",
    "PointValue",
    "Selection",
    "StandingsRow",
    "UserRecord",
    "ValidationResult",
]
