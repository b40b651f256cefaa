import logging

from sqlalchemy.exc import IntegrityError

from .errors import ConflictError, NotFoundError, ValidationError
from .models import db, User, Habit, HabitCompletion
from .streak import parse_day

logger = logging.getLogger(__name__)

# Marks a field the caller left out, as opposed to one set to None
UNSET = object()


def _require_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required and must be a non-empty string")
    return value.strip()


def _optional_text(value, field):
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def _require_id(value, field):
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")


def _require_day(value):
    if value is None or value == "":
        raise ValidationError("date is required")
    try:
        return parse_day(value)
    except ValueError as e:
        raise ValidationError(str(e))


def _commit_or_conflict(message):
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.debug(f"Integrity error: {str(e)}")
        raise ConflictError(message)


# Users

def create_user(name, email, password_hash=None):
    user = User(
        name=_require_text(name, "name"),
        email=_require_text(email, "email"),
        password_hash=password_hash,
    )
    db.session.add(user)
    _commit_or_conflict("Email already exists")
    logger.info(f"User created: {user.id} <{user.email}>")
    return user


def get_user(user_id):
    user = db.session.get(User, _require_id(user_id, "userId"))
    if user is None:
        raise NotFoundError("User not found")
    return user


def find_user_by_email(email):
    return User.query.filter_by(email=_require_text(email, "email")).first()


def get_user_with_habits(user_id):
    # habits and completions load through the ordered relationships
    return get_user(user_id)


def update_user(user_id, name=None, email=None):
    # nothing is assigned until every field has passed validation
    changes = {}
    if name is not None:
        changes["name"] = _require_text(name, "name")
    if email is not None:
        changes["email"] = _require_text(email, "email")
    user = get_user(user_id)
    for field, value in changes.items():
        setattr(user, field, value)
    _commit_or_conflict("Email already exists")
    logger.info(f"User {user.id} updated")
    return user


def delete_user(user_id):
    user = get_user(user_id)
    db.session.delete(user)
    db.session.commit()
    logger.info(f"User {user_id} deleted with all habits and completions")


# Habits

def create_habit(user_id, title, description=None):
    title = _require_text(title, "title")
    description = _optional_text(description, "description")
    user = get_user(user_id)
    habit = Habit(title=title, description=description, user_id=user.id)
    db.session.add(habit)
    db.session.commit()
    logger.info(f"Habit created: {habit.title} for user {user.id}")
    return habit


def list_habits(user_id):
    user_id = _require_id(user_id, "userId")
    habits = (
        Habit.query.filter_by(user_id=user_id)
        .order_by(Habit.created_at.desc(), Habit.id.desc())
        .all()
    )
    logger.debug(f"Fetched {len(habits)} habits for user {user_id}")
    return habits


def get_habit(habit_id):
    habit = db.session.get(Habit, _require_id(habit_id, "habitId"))
    if habit is None:
        raise NotFoundError("Habit not found")
    return habit


def update_habit(habit_id, title=None, description=UNSET):
    changes = {}
    if title is not None:
        changes["title"] = _require_text(title, "title")
    if description is not UNSET:
        changes["description"] = _optional_text(description, "description")
    habit = get_habit(habit_id)
    for field, value in changes.items():
        setattr(habit, field, value)
    db.session.commit()
    logger.info(f"Habit {habit.id} updated")
    return habit


def delete_habit(habit_id):
    habit = get_habit(habit_id)
    db.session.delete(habit)
    db.session.commit()
    logger.info(f"Habit {habit_id} deleted with its completions")


# Completions

def mark_complete(habit_id, user_id, date):
    habit_id = _require_id(habit_id, "habitId")
    user_id = _require_id(user_id, "userId")
    day = _require_day(date)
    habit = get_habit(habit_id)
    if habit.user_id != user_id:
        raise ValidationError("Habit does not belong to this user")
    completion = HabitCompletion(habit_id=habit.id, user_id=user_id, date=day)
    db.session.add(completion)
    _commit_or_conflict("Habit already completed for this date")
    logger.info(f"Habit {habit_id} completed on {day.isoformat()} by user {user_id}")
    return completion


def unmark_complete(habit_id, user_id, date):
    habit_id = _require_id(habit_id, "habitId")
    user_id = _require_id(user_id, "userId")
    day = _require_day(date)
    completion = HabitCompletion.query.filter_by(
        habit_id=habit_id, user_id=user_id, date=day
    ).first()
    if completion is None:
        raise NotFoundError("Habit completion not found")
    db.session.delete(completion)
    db.session.commit()
    logger.info(f"Habit {habit_id} completion on {day.isoformat()} removed for user {user_id}")


def completed_days(habit):
    return [completion.date for completion in habit.completions]
