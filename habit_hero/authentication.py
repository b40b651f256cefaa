import logging
from datetime import datetime, timedelta, timezone
from functools import wraps

import bcrypt
import jwt
from flask import request, jsonify

from . import app
from . import store
from .errors import AuthError, ForbiddenError, ValidationError, json_body
from .models import db, User

logger = logging.getLogger(__name__)


def hash_password(password):
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password, password_hash):
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


# Generate JWT
def generate_token(user_id, email):
    now = datetime.now(timezone.utc)
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": now + timedelta(hours=app.config["JWT_EXPIRES_HOURS"]),
        "iat": now,
    }
    return jwt.encode(payload, app.config["JWT_SECRET_KEY"], algorithm="HS256")


def _token_user():
    token = request.headers.get("Authorization")
    if not token:
        return None
    if token.startswith("Bearer "):
        token = token[7:]
    try:
        payload = jwt.decode(token, app.config["JWT_SECRET_KEY"], algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")
    user = db.session.get(User, payload.get("user_id"))
    if not user:
        raise AuthError("Invalid token")
    return user


def session_user(f):
    # Passes the token user (or None) as the view's first argument
    @wraps(f)
    def decorated(*args, **kwargs):
        user = _token_user()
        if user is None and app.config["REQUIRE_AUTH"]:
            raise AuthError("Token required")
        return f(user, *args, **kwargs)
    return decorated


def resolve_user_id(user, requested):
    # a token, when present, decides the userId
    if user is None:
        return requested
    if requested in (None, ""):
        return user.id
    if str(requested) != str(user.id):
        logger.error(f"User {user.id} attempted to act as user {requested}")
        raise ForbiddenError("Unauthorized")
    return user.id


@app.route("/auth/login", methods=["POST"])
def login():
    data = json_body()
    email = data.get("email")
    name = data.get("name")
    password = data.get("password")
    if not email or not name:
        raise ValidationError("Email and name are required")
    if password is not None and not isinstance(password, str):
        raise ValidationError("password must be a string")
    user = store.find_user_by_email(email)
    if user is None:
        user = store.create_user(
            name, email, password_hash=hash_password(password) if password else None
        )
        logger.info(f"Created user {user.id} on first sign-in")
    elif user.password_hash and not (password and check_password(password, user.password_hash)):
        raise AuthError("Invalid credentials")
    token = generate_token(user.id, user.email)
    return jsonify({"token": token, "user": user.to_dict()}), 200
