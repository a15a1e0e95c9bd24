from datetime import datetime
from library_tracker.extensions import db


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("stock >= 0", name="ck_books_stock_non_negative"),
        db.CheckConstraint("price >= 0", name="ck_books_price_non_negative"),
    )

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False, index=True)
    author = db.Column(db.String(200), nullable=False, index=True)

    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    stock = db.Column(db.Integer, nullable=False, default=0)  # copies on the shelf

    book_category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    category = db.relationship("Category", backref="books")

    def as_dict(self, with_category: bool = True) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "price": float(self.price) if self.price is not None else None,
            "stock": self.stock,
            "bookCategoryId": self.book_category_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if with_category:
            data["category"] = self.category.as_dict() if self.category else None
        return data
