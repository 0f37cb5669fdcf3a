from flask import abort, jsonify, request

from pickem.core.errors import InvalidPickError
from pickem.core.records import PickEdit, Selection
from pickem.models import User
from pickem.routes.api import bp
from pickem.services.pick_service import PickService, WeekNotFoundError


def _parse_selection(value):
    if isinstance(value, str) and not value.isdigit():
        try:
            return Selection[value.upper()]
        except KeyError:
            raise InvalidPickError(f"Unknown selection: {value!r}") from None
    return value


def _parse_edits(data):
    """Turn a JSON body into PickEdit objects"""
    if not isinstance(data, dict) or not isinstance(data.get("picks"), list):
        raise InvalidPickError("Expected a JSON object with a 'picks' list")

    edits = []
    for entry in data["picks"]:
        if not isinstance(entry, dict) or "id" not in entry:
            raise InvalidPickError("Each pick needs an 'id'")
        try:
            pick_id = int(entry["id"])
        except (TypeError, ValueError):
            raise InvalidPickError(f"Invalid pick id: {entry['id']!r}") from None
        edits.append(
            PickEdit(
                pick_id=pick_id,
                selection=_parse_selection(entry.get("selection", 0)),
                points=entry.get("points", 0),
            )
        )
    return edits


@bp.errorhandler(WeekNotFoundError)
def week_not_found(error):
    return jsonify({"error": str(error)}), 404


@bp.route("/current-week")
def current_week():
    """Get the (year, week) currently open for picks"""
    current = PickService().current_week()
    if current is None:
        return jsonify({"error": "No week has started yet"}), 404
    year, week = current
    return jsonify({"year": year, "week": week})


@bp.route("/games/<int:year>/<int:week>")
def week_games(year, week):
    """Get games for a specific week"""
    service = PickService()
    now = service.clock()
    games = service.week_games(year, week)
    return jsonify([game.to_dict(now) for game in games])


@bp.route("/picks/<int:user_id>/<int:year>/<int:week>", methods=["GET"])
def user_picks(user_id, year, week):
    """Get a user's picks and the week's point value limits"""
    user = User.query.get(user_id)
    if user is None:
        abort(404)

    service = PickService()
    week_obj = service.get_week(year, week)
    now = service.clock()
    picks = sorted(
        service.user_week_picks(user.id, year, week),
        key=lambda p: (p.game.game_time, p.game_id),
    )
    return jsonify(
        {
            "user": user.to_dict(),
            **week_obj.to_dict(),
            "picks": [pick.to_dict(now) for pick in picks],
        }
    )


@bp.route("/picks/<int:user_id>/<int:year>/<int:week>", methods=["POST"])
def submit_picks(user_id, year, week):
    """Validate and store a user's pick edits for a week"""
    user = User.query.get(user_id)
    if user is None:
        abort(404)

    edits = _parse_edits(request.get_json(silent=True))
    result = PickService().submit_picks(user, year, week, edits)

    if not result.ok:
        return (
            jsonify(
                {
                    "success": False,
                    "error": result.message,
                    "failed_point_values": result.validation.failed_values,
                }
            ),
            400,
        )

    return jsonify(
        {
            "success": True,
            "message": result.message,
            "picks_saved": len(result.applied),
            "applied": result.applied,
        }
    )


@bp.route("/results/<int:year>/<int:week>")
def results(year, week):
    """Get the results table for a week"""
    table = PickService().results(year, week)
    return jsonify({"year": year, "week": week, **table.to_dict()})


@bp.route("/standings/<int:year>/<int:week>")
def standings(year, week):
    """Get standings for a week, or season-to-date with ?scope=season"""
    scope = request.args.get("scope", "week")
    if scope not in ("week", "season"):
        return jsonify({"error": "scope must be 'week' or 'season'"}), 400

    rows = PickService().standings(year, week, cumulative=scope == "season")
    return jsonify(
        {
            "year": year,
            "week": week,
            "scope": scope,
            "standings": [row.to_dict() for row in rows],
        }
    )
