from datetime import datetime
from library_tracker.extensions import db

ACTION_BORROW = "borrow"
ACTION_RETURN = "return"
ACTIONS = (ACTION_BORROW, ACTION_RETURN)


class BorrowRecord(db.Model):
    """Audit trail entry for one borrow or return. Rows are never updated."""

    __tablename__ = "borrow_records"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_borrow_records_quantity_positive"),
        db.CheckConstraint("action IN ('borrow', 'return')", name="ck_borrow_records_action"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    action = db.Column(db.String(10), nullable=False)  # borrow/return
    quantity = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    user = db.relationship("User")
    book = db.relationship("Book")

    def as_dict(self, expand: bool = False) -> dict:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "bookId": self.book_id,
            "action": self.action,
            "quantity": self.quantity,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if expand:
            data["user"] = self.user.as_dict() if self.user else None
            data["book"] = self.book.as_dict() if self.book else None
        return data
