import logging

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from . import app
from .models import db

logger = logging.getLogger(__name__)


class HabitHeroError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class ValidationError(HabitHeroError):
    status_code = 400


class NotFoundError(HabitHeroError):
    status_code = 404


class ConflictError(HabitHeroError):
    status_code = 409


class AuthError(HabitHeroError):
    status_code = 401


class ForbiddenError(HabitHeroError):
    status_code = 403


# Handle/serialize errors like a JSON object
@app.errorhandler(HabitHeroError)
def handle_habit_hero_error(error):
    logger.error(f"{type(error).__name__}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


@app.errorhandler(SQLAlchemyError)
def handle_database_error(error):
    logger.error(f"Database error: {str(error)}")
    db.session.rollback()
    return jsonify({"message": "Internal server error"}), 500


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
