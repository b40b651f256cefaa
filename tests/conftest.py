import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest  # noqa: E402

from habit_hero import app as flask_app  # noqa: E402
from habit_hero.models import db  # noqa: E402


@pytest.fixture
def app():
    flask_app.config["TESTING"] = True
    flask_app.config["REQUIRE_AUTH"] = False
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(app):
    from habit_hero import store
    return store.create_user("Demo User", "demo@habithero.com")
