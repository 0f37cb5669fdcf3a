"""Tests for point value validation of weekly picks."""

import pytest

from pickem.core.errors import InvalidPickError, PickIntegrityError
from pickem.core.records import PickEdit, PickRecord, PointLimits, Selection
from pickem.core.validation import accepted_edits, effective_picks, validate_picks


def make_pick(pick_id, points=0, locked=False, selection=Selection.HOME):
    if not points:
        selection = Selection.NONE
    return PickRecord(
        id=pick_id,
        user_id=1,
        game_id=100 + pick_id,
        selection=selection,
        points=points,
        locked=locked,
    )


def empty_week(n=8):
    return [make_pick(i) for i in range(1, n + 1)]


class TestValidatePicks:
    def test_one_too_many_threes(self, pvs):
        picks = empty_week()
        edits = [PickEdit(i, Selection.HOME, 3) for i in range(1, pvs.three + 2)]

        assert validate_picks(pvs, picks, edits) == (False, True, True)

    def test_one_too_many_fives(self, pvs):
        picks = empty_week()
        edits = [PickEdit(i, Selection.AWAY, 5) for i in range(1, pvs.five + 2)]

        assert tuple(validate_picks(pvs, picks, edits)) == (True, False, True)

    def test_one_too_many_sevens(self, pvs):
        picks = empty_week()
        edits = [PickEdit(1, Selection.HOME, 7), PickEdit(2, Selection.HOME, 7)]

        three, five, seven = validate_picks(pvs, picks, edits)

        assert (three, five, seven) == (True, True, False)

    def test_exactly_at_limits_is_valid(self, pvs):
        picks = empty_week()
        edits = [
            PickEdit(1, Selection.HOME, 3),
            PickEdit(2, Selection.HOME, 3),
            PickEdit(3, Selection.AWAY, 5),
            PickEdit(4, Selection.AWAY, 5),
            PickEdit(5, Selection.HOME, 7),
        ]

        assert validate_picks(pvs, picks, edits).ok

    def test_one_point_picks_are_unlimited(self, pvs):
        picks = empty_week(16)
        edits = [PickEdit(i, Selection.HOME, 1) for i in range(1, 17)]

        result = validate_picks(pvs, picks, edits)

        assert result.ok
        assert result.counts[1] == 16

    def test_zero_limit(self):
        limits = PointLimits(three=0, five=0, seven=0)
        picks = empty_week()

        assert validate_picks(limits, picks, [PickEdit(1, Selection.HOME, 7)]) == (
            True,
            True,
            False,
        )

    def test_locked_picks_count_toward_limits(self, pvs):
        picks = [make_pick(1, 7, locked=True)] + empty_week()[1:]
        edits = [PickEdit(2, Selection.HOME, 7)]

        assert validate_picks(pvs, picks, edits) == (True, True, False)

    def test_unedited_stored_picks_count_toward_limits(self, pvs):
        picks = [make_pick(1, 3), make_pick(2, 3)] + empty_week()[2:]
        edits = [PickEdit(3, Selection.HOME, 3)]

        assert validate_picks(pvs, picks, edits) == (False, True, True)

    def test_unlocked_pick_can_be_moved_to_another_value(self, pvs):
        picks = [make_pick(1, 7), make_pick(2)] + empty_week()[2:]
        edits = [PickEdit(1, Selection.HOME, 1), PickEdit(2, Selection.AWAY, 7)]

        assert validate_picks(pvs, picks, edits).ok

    def test_edit_to_locked_pick_same_as_omitting_it(self, pvs):
        picks = [make_pick(1, 7, locked=True)] + empty_week()[1:]
        with_locked_edit = [PickEdit(1, Selection.AWAY, 1), PickEdit(2, Selection.HOME, 5)]
        without_locked_edit = [PickEdit(2, Selection.HOME, 5)]

        assert list(effective_picks(picks, with_locked_edit)) == list(
            effective_picks(picks, without_locked_edit)
        )
        assert validate_picks(pvs, picks, with_locked_edit) == validate_picks(
            pvs, picks, without_locked_edit
        )

    def test_locked_pick_cannot_free_its_value(self, pvs):
        # Moving a locked 7 away would make room for a second 7; it must not
        picks = [make_pick(1, 7, locked=True)] + empty_week()[1:]
        edits = [PickEdit(1, Selection.HOME, 1), PickEdit(2, Selection.HOME, 7)]

        assert validate_picks(pvs, picks, edits) == (True, True, False)

    def test_none_edit_keeps_stored_assignment(self, pvs):
        picks = [make_pick(1, 7)] + empty_week()[1:]
        edits = [PickEdit(1, Selection.NONE), PickEdit(2, Selection.HOME, 7)]

        assert validate_picks(pvs, picks, edits) == (True, True, False)
        assert accepted_edits(picks, edits) == [PickEdit(2, Selection.HOME, 7)]

    def test_validation_is_idempotent(self, pvs):
        picks = [make_pick(1, 3, locked=True)] + empty_week()[1:]
        edits = [PickEdit(2, Selection.HOME, 3), PickEdit(3, Selection.HOME, 3)]

        first = validate_picks(pvs, picks, edits)
        second = validate_picks(pvs, picks, edits)

        assert tuple(first) == tuple(second) == (False, True, True)

    def test_locked_threes_plus_new_five(self, pvs):
        picks = [make_pick(1, 3, locked=True), make_pick(2, 3, locked=True)] + empty_week()[2:]
        edits = [PickEdit(3, Selection.AWAY, 5)]

        result = validate_picks(pvs, picks, edits)

        assert tuple(result) == (True, True, True)
        assert result.counts[3] == 2
        assert result.counts[5] == 1

    def test_edit_for_foreign_pick_is_integrity_error(self, pvs):
        with pytest.raises(PickIntegrityError):
            validate_picks(pvs, empty_week(), [PickEdit(99, Selection.HOME, 3)])

    def test_last_edit_for_a_pick_wins(self, pvs):
        picks = empty_week()
        edits = [PickEdit(1, Selection.HOME, 7), PickEdit(1, Selection.HOME, 1)]

        assert accepted_edits(picks, edits) == [PickEdit(1, Selection.HOME, 1)]


class TestValidationResult:
    def test_message_lists_each_failure(self, pvs):
        picks = [make_pick(1, 7, locked=True)] + empty_week()[1:]
        edits = [PickEdit(i, Selection.HOME, 3) for i in range(2, 5)] + [
            PickEdit(5, Selection.HOME, 7)
        ]

        result = validate_picks(pvs, picks, edits)

        assert result.failed_values == [3, 7]
        assert result.message() == (
            "Invalid Picks: Too many three point games. Too many seven point games."
        )

    def test_message_empty_when_valid(self, pvs):
        assert validate_picks(pvs, empty_week(), []).message() == ""


class TestPickEdit:
    def test_none_selection_drops_points(self):
        assert PickEdit(1, 0, 5).points == 0

    def test_selection_code_is_coerced(self):
        assert PickEdit(1, 2, 3).selection is Selection.HOME

    def test_digit_strings_accepted(self):
        edit = PickEdit(1, "1", "5")
        assert (edit.selection, edit.points) == (Selection.AWAY, 5)

    @pytest.mark.parametrize("points", [0, 2, 4, 9, None, "x", 3.9, 7.0, True, "3.0"])
    def test_points_outside_domain_rejected(self, points):
        with pytest.raises(InvalidPickError):
            PickEdit(1, Selection.HOME, points)

    @pytest.mark.parametrize("selection", [3, -1, 1.5, 1.9, True, None, "away"])
    def test_unknown_selection_rejected(self, selection):
        with pytest.raises(InvalidPickError):
            PickEdit(1, selection, 5)


class TestPointLimits:
    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            PointLimits(three=-1, five=2, seven=1)

    def test_limit_lookup_by_value(self, pvs):
        assert pvs.as_dict() == {3: 2, 5: 2, 7: 1}
