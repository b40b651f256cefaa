import logging

import click
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from . import app
from .models import db

logger = logging.getLogger(__name__)


@app.cli.command("init-db")
def init_db():
    """Check the database connection and create any missing tables."""
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
    except OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        raise click.ClickException("Database connection failed")
    db.create_all()
    logger.info("Database tables created")
    click.echo("Database initialized.")


@app.cli.command("drop-db")
@click.confirmation_option(prompt="Drop all Habit Hero tables?")
def drop_db():
    db.drop_all()
    logger.info("Database tables dropped")
    click.echo("Database dropped.")
