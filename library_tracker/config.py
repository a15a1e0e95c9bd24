import os

from dotenv import load_dotenv

load_dotenv()


def build_engine_options(database_uri: str, tx_timeout: float) -> dict:
    """Engine options that bound how long a transaction may wait on locks.

    SQLite waits on its file lock for ``timeout`` seconds; PostgreSQL gets
    ``lock_timeout`` and ``statement_timeout`` on every connection.
    """
    options = {"pool_pre_ping": True}
    if database_uri.startswith("sqlite"):
        options["connect_args"] = {"timeout": tx_timeout}
    elif database_uri.startswith("postgresql"):
        ms = int(tx_timeout * 1000)
        options["connect_args"] = {
            "options": f"-c lock_timeout={ms} -c statement_timeout={ms}"
        }
    return options


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "library-tracker-dev-key")

    # relative sqlite paths end up in the Flask instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///library.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # upper bound for a borrow/return transaction waiting on row locks
    LEDGER_TX_TIMEOUT_SECONDS = float(os.getenv("LEDGER_TX_TIMEOUT_SECONDS", "5"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    AUTO_CREATE_TABLES = os.getenv("AUTO_CREATE_TABLES", "1") == "1"


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    AUTO_CREATE_TABLES = True
    LOG_LEVEL = "DEBUG"
