from dataclasses import dataclass

from flask import current_app
from sqlalchemy.orm import Session

from library_tracker.models.borrow_record import ACTION_BORROW, ACTION_RETURN, ACTIONS, BorrowRecord
from library_tracker.repositories.book_repo import BookRepo
from library_tracker.repositories.borrow_repo import BorrowRepo
from library_tracker.repositories.user_repo import UserRepo
from library_tracker.utils.db import transaction
from library_tracker.utils.errors import (
    InsufficientStockError,
    NotBorrowedError,
    NotFoundError,
    OverReturnError,
    ServiceError,
    ValidationError,
)
from library_tracker.utils.validators import optional_int, positive_quantity, to_int


@dataclass
class LedgerResult:
    record: BorrowRecord
    stock: int
    current_quantity: int  # 0 once the user holds no copies


class BorrowService:
    """Borrow/return ledger.

    Each call appends one BorrowRecord, adjusts the (user, book) CurrentBorrow
    row and moves book stock, all inside a single transaction on the session
    handed to the constructor. The book row and the CurrentBorrow row are
    locked for update so concurrent calls on the same book serialize in the
    database.
    """

    def __init__(self, session: Session):
        self.session = session
        self.books = BookRepo(session)
        self.users = UserRepo(session)
        self.borrows = BorrowRepo(session)

    def _load_parties(self, user_id: int, book_id: int):
        book = self.books.get(book_id, for_update=True)
        if not book:
            raise NotFoundError("Book not found")
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user, book

    def borrow_book(self, user_id, book_id, quantity=1) -> LedgerResult:
        user_id = to_int(user_id, "userId")
        book_id = to_int(book_id, "bookId")
        try:
            with transaction(self.session):
                user, book = self._load_parties(user_id, book_id)
                quantity = positive_quantity(quantity)

                if book.stock < quantity:
                    raise InsufficientStockError(
                        f"Not enough stock available (requested {quantity}, in stock {book.stock})"
                    )

                record = self.borrows.add_record(user.id, book.id, ACTION_BORROW, quantity)

                current = self.borrows.get_current(user.id, book.id, for_update=True)
                if current is None:
                    current = self.borrows.add_current(user.id, book.id, quantity)
                else:
                    current.quantity += quantity

                book.stock -= quantity
                self.session.flush()
                result = LedgerResult(record=record, stock=book.stock, current_quantity=current.quantity)
        except ServiceError as e:
            current_app.logger.warning(
                "[ledger] borrow rejected user=%s book=%s quantity=%r: %s", user_id, book_id, quantity, e
            )
            raise

        current_app.logger.info(
            "[ledger] borrow user=%s book=%s quantity=%s stock=%s outstanding=%s",
            user_id, book_id, quantity, result.stock, result.current_quantity,
        )
        return result

    def return_book(self, user_id, book_id, quantity=1) -> LedgerResult:
        user_id = to_int(user_id, "userId")
        book_id = to_int(book_id, "bookId")
        try:
            with transaction(self.session):
                user, book = self._load_parties(user_id, book_id)
                quantity = positive_quantity(quantity)

                current = self.borrows.get_current(user.id, book.id, for_update=True)
                if current is None:
                    raise NotBorrowedError("Book is not borrowed by this user")
                if current.quantity < quantity:
                    raise OverReturnError(
                        f"Cannot return {quantity} copies; user currently holds {current.quantity}"
                    )

                record = self.borrows.add_record(user.id, book.id, ACTION_RETURN, quantity)

                if current.quantity == quantity:
                    self.borrows.remove_current(current)
                    remaining = 0
                else:
                    current.quantity -= quantity
                    remaining = current.quantity

                book.stock += quantity
                self.session.flush()
                result = LedgerResult(record=record, stock=book.stock, current_quantity=remaining)
        except ServiceError as e:
            current_app.logger.warning(
                "[ledger] return rejected user=%s book=%s quantity=%r: %s", user_id, book_id, quantity, e
            )
            raise

        current_app.logger.info(
            "[ledger] return user=%s book=%s quantity=%s stock=%s outstanding=%s",
            user_id, book_id, quantity, result.stock, result.current_quantity,
        )
        return result

    def list_records(self, user_id=None, book_id=None, action=None):
        user_id = optional_int(user_id, "userId")
        book_id = optional_int(book_id, "bookId")
        action = (action or "").strip().lower() or None
        if action is not None and action not in ACTIONS:
            raise ValidationError("action must be 'borrow' or 'return'")
        return self.borrows.list_records(user_id=user_id, book_id=book_id, action=action)
