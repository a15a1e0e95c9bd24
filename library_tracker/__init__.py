from flask import Flask, jsonify

from library_tracker.config import Config, build_engine_options
from library_tracker.extensions import db, migrate
from library_tracker.db_objects import ensure_db_objects, ping
from library_tracker.utils.errors import register_error_handlers


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        build_engine_options(app.config["SQLALCHEMY_DATABASE_URI"], app.config["LEDGER_TX_TIMEOUT_SECONDS"]),
    )

    app.logger.setLevel(app.config["LOG_LEVEL"])
    app.json.sort_keys = False

    # 1) db first, schema needs the engine
    db.init_app(app)
    ensure_db_objects(app)

    # 2) `flask db ...` migrations
    migrate.init_app(app, db)

    register_error_handlers(app)

    from library_tracker.controllers.book_controller import book_bp
    from library_tracker.controllers.borrow_controller import borrow_bp
    from library_tracker.controllers.category_controller import category_bp
    from library_tracker.controllers.user_controller import user_bp
    from library_tracker.controllers.web_controller import web_bp
    app.register_blueprint(web_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(category_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(borrow_bp)

    @app.get("/health")
    def health():
        ping(db.session)
        return jsonify({"ok": True})

    from library_tracker.cli import register_cli
    register_cli(app)

    return app
