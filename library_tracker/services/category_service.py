from sqlalchemy.orm import Session

from library_tracker.models.category import Category
from library_tracker.repositories.category_repo import CategoryRepo
from library_tracker.utils.db import transaction
from library_tracker.utils.errors import NotFoundError, ValidationError
from library_tracker.utils.validators import require_text


class CategoryService:
    def __init__(self, session: Session):
        self.session = session
        self.categories = CategoryRepo(session)

    def list_categories(self):
        return self.categories.list_all()

    def get_category(self, category_id: int) -> Category:
        category = self.categories.get(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def _unique_name(self, data: dict, current_id: int | None = None) -> str:
        name = require_text(data.get("name"), "name")
        existing = self.categories.get_by_name(name)
        if existing and existing.id != current_id:
            raise ValidationError("Category name already exists")
        return name

    def create_category(self, data: dict) -> Category:
        name = self._unique_name(data)
        with transaction(self.session):
            category = self.categories.add(Category(name=name))
        return category

    def update_category(self, category_id: int, data: dict) -> Category:
        category = self.get_category(category_id)
        name = self._unique_name(data, current_id=category.id)
        with transaction(self.session):
            category.name = name
        return category
