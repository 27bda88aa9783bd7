from flask import Flask

from bookmarkdb.api import api_bp
from bookmarkdb.bootstrap import ensure_default_user
from bookmarkdb.config import Config
from bookmarkdb.extensions import db, login_manager
from bookmarkdb.web import web_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    login_manager.init_app(app)

    app.register_blueprint(web_bp)
    app.register_blueprint(api_bp)

    @app.cli.command("init-db")
    def init_db_command():
        db.create_all()
        ensure_default_user()
        print("Initialized bookmark database.")

    with app.app_context():
        db.create_all()
        ensure_default_user()

    return app
