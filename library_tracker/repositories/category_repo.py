from sqlalchemy import func
from sqlalchemy.orm import Session

from library_tracker.models.category import Category


class CategoryRepo:
    def __init__(self, session: Session):
        self.session = session

    def list_all(self):
        return self.session.query(Category).order_by(Category.name.asc()).all()

    def get(self, category_id: int):
        return self.session.get(Category, category_id)

    def get_by_name(self, name: str):
        return self.session.query(Category).filter(func.lower(Category.name) == name.lower()).first()

    def add(self, category: Category):
        self.session.add(category)
        self.session.flush()
        return category
