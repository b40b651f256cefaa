import logging

from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate

from .config import Config
from .models import db

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_object(Config)
CORS(app, resources={r"/*": {
    "origins": app.config["FRONTEND_URL"],
    "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    "allow_headers": ["Content-Type", "Authorization"]
}})
db.init_app(app)
migrate = Migrate(app, db)

# Views register themselves on the app
from . import errors, authentication, users, habits, analysis, manage  # noqa: E402,F401

if app.config["AUTO_CREATE_TABLES"]:
    with app.app_context():
        db.create_all()
