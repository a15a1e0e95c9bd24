import sqlite3

from sqlalchemy import event, text
from sqlalchemy.engine import Engine

from library_tracker.extensions import db

# imported for their side effect of registering tables on db.metadata
from library_tracker.models import book, borrow_record, category, current_borrow, user  # noqa: F401


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, _connection_record):
    # SQLite ships with FK enforcement off
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def ensure_db_objects(app):
    """Create missing tables (checks included) when AUTO_CREATE_TABLES is set."""
    if not app.config.get("AUTO_CREATE_TABLES"):
        app.logger.debug("[db_objects] AUTO_CREATE_TABLES off, schema left to migrations.")
        return

    with app.app_context():
        try:
            db.create_all()
            app.logger.info("[db_objects] Schema ensured on %s", db.engine.url.render_as_string(hide_password=True))
        except Exception as e:
            app.logger.error(f"[db_objects] ERROR: {e}")
            raise


def ping(session) -> bool:
    session.execute(text("SELECT 1"))
    return True
