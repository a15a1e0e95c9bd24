from datetime import datetime
from library_tracker.extensions import db


class CurrentBorrow(db.Model):
    """How many copies of a book a user holds right now.

    Written only by the borrow/return ledger; the row disappears once the
    user has returned every copy.
    """

    __tablename__ = "current_borrows"
    __table_args__ = (
        db.UniqueConstraint("user_id", "book_id", name="uq_current_borrows_user_book"),
        db.CheckConstraint("quantity > 0", name="ck_current_borrows_quantity_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User")
    book = db.relationship("Book")

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "quantity": self.quantity,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
            "book": self.book.as_dict() if self.book else None,
        }
