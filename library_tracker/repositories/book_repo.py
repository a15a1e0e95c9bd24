from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from library_tracker.models.book import Book


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BookRepo:
    def __init__(self, session: Session):
        self.session = session

    def list_all(self, category_id: int | None = None, search: str | None = None):
        query = self.session.query(Book).options(joinedload(Book.category))
        if category_id is not None:
            query = query.filter(Book.book_category_id == category_id)
        if search:
            pattern = _like_pattern(search)
            query = query.filter(or_(
                Book.title.ilike(pattern, escape="\\"),
                Book.author.ilike(pattern, escape="\\"),
            ))
        return query.order_by(Book.created_at.desc(), Book.id.desc()).all()

    def get(self, book_id: int, for_update: bool = False):
        return self.session.get(Book, book_id, with_for_update=True if for_update else None)

    def add(self, book: Book):
        self.session.add(book)
        self.session.flush()
        return book

    def delete(self, book: Book):
        self.session.delete(book)
        self.session.flush()
