from sqlalchemy.orm import Session, joinedload

from library_tracker.models.book import Book
from library_tracker.models.borrow_record import BorrowRecord
from library_tracker.models.current_borrow import CurrentBorrow


class BorrowRepo:
    """History rows and the outstanding-loan index, kept side by side."""

    def __init__(self, session: Session):
        self.session = session

    # -----------------------------
    # History (append-only)
    # -----------------------------
    def add_record(self, user_id: int, book_id: int, action: str, quantity: int) -> BorrowRecord:
        record = BorrowRecord(user_id=user_id, book_id=book_id, action=action, quantity=quantity)
        self.session.add(record)
        self.session.flush()
        return record

    def list_records(self, user_id: int | None = None, book_id: int | None = None, action: str | None = None):
        query = self.session.query(BorrowRecord).options(
            joinedload(BorrowRecord.user),
            joinedload(BorrowRecord.book).joinedload(Book.category),
        )
        if user_id is not None:
            query = query.filter(BorrowRecord.user_id == user_id)
        if book_id is not None:
            query = query.filter(BorrowRecord.book_id == book_id)
        if action is not None:
            query = query.filter(BorrowRecord.action == action)
        return query.order_by(BorrowRecord.created_at.desc(), BorrowRecord.id.desc()).all()

    def delete_records_for_book(self, book_id: int) -> int:
        return self.session.query(BorrowRecord).filter(BorrowRecord.book_id == book_id).delete(
            synchronize_session="fetch"
        )

    def delete_records_for_user(self, user_id: int) -> int:
        return self.session.query(BorrowRecord).filter(BorrowRecord.user_id == user_id).delete(
            synchronize_session="fetch"
        )

    # -----------------------------
    # Outstanding loans
    # -----------------------------
    def get_current(self, user_id: int, book_id: int, for_update: bool = False):
        query = self.session.query(CurrentBorrow).filter_by(user_id=user_id, book_id=book_id)
        if for_update:
            query = query.with_for_update()
        return query.one_or_none()

    def add_current(self, user_id: int, book_id: int, quantity: int) -> CurrentBorrow:
        current = CurrentBorrow(user_id=user_id, book_id=book_id, quantity=quantity)
        self.session.add(current)
        self.session.flush()
        return current

    def remove_current(self, current: CurrentBorrow):
        self.session.delete(current)
        self.session.flush()

    def list_current_for_user(self, user_id: int):
        return (
            self.session.query(CurrentBorrow)
            .join(Book, CurrentBorrow.book_id == Book.id)
            .options(joinedload(CurrentBorrow.book).joinedload(Book.category))
            .filter(CurrentBorrow.user_id == user_id)
            .order_by(Book.title.asc(), CurrentBorrow.id.asc())
            .all()
        )

    def count_current_for_book(self, book_id: int) -> int:
        return self.session.query(CurrentBorrow).filter(CurrentBorrow.book_id == book_id).count()

    def count_current_for_user(self, user_id: int) -> int:
        return self.session.query(CurrentBorrow).filter(CurrentBorrow.user_id == user_id).count()
