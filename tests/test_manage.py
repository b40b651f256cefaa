from habit_hero.models import db, User


def test_init_db_creates_tables(app):
    db.drop_all()
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Database initialized." in result.output
    assert User.query.count() == 0


def test_drop_db(app):
    result = app.test_cli_runner().invoke(args=["drop-db", "--yes"])
    assert result.exit_code == 0
    db.create_all()
