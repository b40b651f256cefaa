import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///habit_hero.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me-habit-hero")
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", 1))
    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")
    REQUIRE_AUTH = _flag("REQUIRE_AUTH")
    AUTO_CREATE_TABLES = _flag("AUTO_CREATE_TABLES", "true")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
