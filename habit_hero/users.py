import logging

from flask import request, jsonify

from . import app
from . import store
from .errors import json_body
from .authentication import session_user, resolve_user_id

logger = logging.getLogger(__name__)


@app.route("/users", methods=["POST"])
def create_user():
    data = json_body()
    logger.debug(f"Create user payload: {data}")
    user = store.create_user(data.get("name"), data.get("email"))
    return jsonify(user.to_dict(include_habits=True)), 201


@app.route("/users/<int:id>", methods=["GET"])
@session_user
def get_user(user, id):
    user_id = resolve_user_id(user, id)
    return jsonify(store.get_user_with_habits(user_id).to_dict(include_habits=True)), 200


@app.route("/users/<int:id>", methods=["PATCH"])
@session_user
def update_user(user, id):
    user_id = resolve_user_id(user, id)
    data = json_body()
    logger.debug(f"Update user {user_id} payload: {data}")
    updated = store.update_user(user_id, name=data.get("name"), email=data.get("email"))
    return jsonify(updated.to_dict()), 200


@app.route("/users/<int:id>", methods=["DELETE"])
@session_user
def delete_user(user, id):
    user_id = resolve_user_id(user, id)
    store.delete_user(user_id)
    return jsonify({"message": "User deleted"}), 200
