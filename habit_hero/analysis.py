import logging

from flask import request, jsonify

from . import app
from . import store
from .authentication import session_user, resolve_user_id
from .errors import ForbiddenError, ValidationError
from .streak import current_streak, habit_stats, parse_day, today

logger = logging.getLogger(__name__)


def _reference_day():
    value = request.args.get("date")
    if not value:
        return today()
    try:
        return parse_day(value)
    except ValueError as e:
        raise ValidationError(str(e))


@app.route("/habits/<int:id>/stats", methods=["GET"])
@session_user
def get_habit_stats(user, id):
    reference = _reference_day()
    habit = store.get_habit(id)
    if user is not None and habit.user_id != user.id:
        logger.error(f"Unauthorized access to habit {id} by user {user.id}")
        raise ForbiddenError("Unauthorized")
    stats = habit_stats(store.completed_days(habit), reference)
    logger.debug(f"Stats for habit {id} as of {reference}: streak {stats['current']}")
    return jsonify({"habitId": habit.id, "date": reference.isoformat(), **stats}), 200


@app.route("/users/<int:id>/summary", methods=["GET"])
@session_user
def get_user_summary(user, id):
    reference = _reference_day()
    owner = store.get_user_with_habits(resolve_user_id(user, id))
    habit_data = []
    completed_on_day = 0
    for habit in owner.habits:
        days = store.completed_days(habit)
        if reference in days:
            completed_on_day += 1
        habit_data.append({
            "id": habit.id,
            "title": habit.title,
            "completed": reference in days,
            "streak": current_streak(days, reference),
        })
    logger.debug(f"Summary fetched for user {owner.id}: {len(habit_data)} habits")
    return jsonify({
        "userId": owner.id,
        "date": reference.isoformat(),
        "totalHabits": len(habit_data),
        "completedCount": completed_on_day,
        "habits": habit_data,
    }), 200
