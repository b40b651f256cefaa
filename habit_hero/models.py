from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _isoformat(value):
    return value.isoformat() + "Z" if value else None


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(128))
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    habits = db.relationship(
        "Habit", backref="user", lazy=True, cascade="all, delete-orphan",
        order_by="[Habit.created_at.desc(), Habit.id.desc()]",
    )
    completions = db.relationship(
        "HabitCompletion", backref="user", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self, include_habits=False):
        data = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "createdAt": _isoformat(self.created_at),
        }
        if include_habits:
            data["habits"] = [habit.to_dict() for habit in self.habits]
        return data


class Habit(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    user_id = db.Column(
        db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    completions = db.relationship(
        "HabitCompletion", backref="habit", lazy=True, cascade="all, delete-orphan",
        order_by="HabitCompletion.date.desc()",
    )

    def to_dict(self, include_completions=True):
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": _isoformat(self.created_at),
        }
        if include_completions:
            data["completions"] = [completion.to_dict() for completion in self.completions]
        return data


class HabitCompletion(db.Model):
    __tablename__ = "habit_completion"
    id = db.Column(db.Integer, primary_key=True)
    habit_id = db.Column(
        db.Integer, db.ForeignKey("habit.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    date = db.Column(db.Date, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("habit_id", "user_id", "date", name="habit_user_date_unique"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "habitId": self.habit_id,
            "userId": self.user_id,
            "date": self.date.isoformat(),
        }
