from flask import current_app
from sqlalchemy.orm import Session

from library_tracker.models.book import Book
from library_tracker.repositories.book_repo import BookRepo
from library_tracker.repositories.borrow_repo import BorrowRepo
from library_tracker.repositories.category_repo import CategoryRepo
from library_tracker.utils.db import transaction
from library_tracker.utils.errors import ConflictError, NotFoundError, ValidationError
from library_tracker.utils.validators import (
    non_negative_int,
    non_negative_price,
    optional_int,
    require_text,
    to_int,
)


class BookService:
    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepo(session)
        self.categories = CategoryRepo(session)
        self.borrows = BorrowRepo(session)

    def list_books(self, category_id=None, search=None):
        category_id = optional_int(category_id, "categoryId")
        search = (search or "").strip() or None
        return self.books.list_all(category_id=category_id, search=search)

    def get_book(self, book_id: int) -> Book:
        book = self.books.get(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    def _clean_fields(self, data: dict) -> dict:
        """Validate a full book payload; the category must already exist."""
        fields = {
            "title": require_text(data.get("title"), "title"),
            "author": require_text(data.get("author"), "author"),
            "price": non_negative_price(data.get("price")),
            "stock": non_negative_int(data.get("stock"), "stock"),
            "book_category_id": to_int(data.get("bookCategoryId"), "bookCategoryId"),
        }
        if not self.categories.get(fields["book_category_id"]):
            raise ValidationError("Category not found")
        return fields

    def create_book(self, data: dict) -> Book:
        fields = self._clean_fields(data)
        with transaction(self.session):
            book = self.books.add(Book(**fields))
        current_app.logger.info("[books] created id=%s title=%r", book.id, book.title)
        return book

    def update_book(self, book_id: int, data: dict) -> Book:
        book = self.get_book(book_id)
        fields = self._clean_fields(data)
        with transaction(self.session):
            for key, value in fields.items():
                setattr(book, key, value)
        return book

    def delete_book(self, book_id: int):
        with transaction(self.session):
            book = self.books.get(book_id, for_update=True)
            if not book:
                raise NotFoundError("Book not found")

            if self.borrows.count_current_for_book(book_id) > 0:
                raise ConflictError("Book is currently borrowed and cannot be deleted")

            removed = self.borrows.delete_records_for_book(book_id)
            self.books.delete(book)
        current_app.logger.info("[books] deleted id=%s (%s history rows)", book_id, removed)
