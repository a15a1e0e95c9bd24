import click

from library_tracker.extensions import db
from library_tracker.models.category import Category
from library_tracker.models.user import User
from library_tracker.repositories.category_repo import CategoryRepo
from library_tracker.repositories.user_repo import UserRepo
from library_tracker.utils.db import transaction

DEFAULT_CATEGORIES = ["Fiction", "Science", "History", "Programming", "Children"]
DEFAULT_USERS = [
    ("John Doe", "john@example.com"),
    ("Jane Smith", "jane@example.com"),
]


def seed_defaults(session) -> dict:
    """Insert the starter categories and users that are not there yet."""
    categories = CategoryRepo(session)
    users = UserRepo(session)
    created = {"categories": 0, "users": 0}

    with transaction(session):
        for name in DEFAULT_CATEGORIES:
            if not categories.get_by_name(name):
                categories.add(Category(name=name))
                created["categories"] += 1

        for name, email in DEFAULT_USERS:
            if not users.get_by_email(email):
                users.add(User(name=name, email=email))
                created["users"] += 1

    return created


def register_cli(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables."""
        db.create_all()
        click.echo("Tables created.")

    @app.cli.command("seed")
    def seed_command():
        """Seed default categories and users (idempotent)."""
        created = seed_defaults(db.session)
        click.echo(f"Seeded {created['categories']} categories and {created['users']} users.")
