from decimal import Decimal

import pytest

from library_tracker import create_app
from library_tracker.config import TestConfig
from library_tracker.extensions import db
from library_tracker.models.book import Book
from library_tracker.models.category import Category
from library_tracker.models.user import User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def category(session):
    fiction = Category(name="Fiction")
    session.add(fiction)
    session.commit()
    return fiction


@pytest.fixture
def reader(session):
    user = User(name="Ada Reader", email="ada@example.com")
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def other_reader(session):
    user = User(name="Bob Borrower", email="bob@example.com")
    session.add(user)
    session.commit()
    return user


@pytest.fixture
def make_book(session, category):
    def _make(title="Dune", author="Frank Herbert", stock=5, price="9.99", category_id=None):
        book = Book(
            title=title,
            author=author,
            stock=stock,
            price=Decimal(price),
            book_category_id=category_id or category.id,
        )
        session.add(book)
        session.commit()
        return book

    return _make
