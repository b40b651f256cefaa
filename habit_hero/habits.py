import logging

from flask import request, jsonify

from . import app
from . import store
from .authentication import session_user, resolve_user_id
from .errors import ForbiddenError, ValidationError, json_body

logger = logging.getLogger(__name__)


def _owned_habit(user, id):
    habit = store.get_habit(id)
    if user is not None and habit.user_id != user.id:
        logger.error(f"Unauthorized access to habit {id} by user {user.id}")
        raise ForbiddenError("Unauthorized")
    return habit


@app.route("/habits", methods=["GET"])
@session_user
def list_habits(user):
    user_id = resolve_user_id(user, request.args.get("userId"))
    if not user_id:
        raise ValidationError("User ID is required")
    habits = store.list_habits(user_id)
    return jsonify([habit.to_dict() for habit in habits]), 200


@app.route("/habits", methods=["POST"])
@session_user
def create_habit(user):
    data = json_body()
    logger.debug(f"Create habit payload: {data}")
    user_id = resolve_user_id(user, data.get("userId"))
    if not data.get("title") or not user_id:
        raise ValidationError("Title and User ID are required")
    habit = store.create_habit(user_id, data.get("title"), data.get("description"))
    return jsonify(habit.to_dict()), 201


@app.route("/habits/<int:id>", methods=["GET"])
@session_user
def get_habit(user, id):
    return jsonify(_owned_habit(user, id).to_dict()), 200


@app.route("/habits/<int:id>", methods=["PATCH"])
@session_user
def update_habit(user, id):
    _owned_habit(user, id)
    data = json_body()
    logger.debug(f"Update habit {id} payload: {data}")
    habit = store.update_habit(
        id, title=data.get("title"), description=data.get("description", store.UNSET)
    )
    return jsonify(habit.to_dict()), 200


@app.route("/habits/<int:id>", methods=["DELETE"])
@session_user
def delete_habit(user, id):
    _owned_habit(user, id)
    store.delete_habit(id)
    return jsonify({"message": "Habit deleted"}), 200


@app.route("/habits/<int:id>/completions", methods=["POST"])
@session_user
def mark_complete(user, id):
    data = json_body()
    logger.debug(f"Mark complete habit {id} payload: {data}")
    user_id = resolve_user_id(user, data.get("userId"))
    if not user_id or not data.get("date"):
        raise ValidationError("User ID and date are required")
    completion = store.mark_complete(id, user_id, data.get("date"))
    return jsonify(completion.to_dict()), 201


@app.route("/habits/<int:id>/completions", methods=["DELETE"])
@session_user
def unmark_complete(user, id):
    user_id = resolve_user_id(user, request.args.get("userId"))
    date = request.args.get("date")
    if not user_id or not date:
        raise ValidationError("User ID and date are required")
    store.unmark_complete(id, user_id, date)
    return jsonify({"message": "Habit completion removed"}), 200
