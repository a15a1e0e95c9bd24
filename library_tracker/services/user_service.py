from flask import current_app
from sqlalchemy.orm import Session

from library_tracker.models.user import User
from library_tracker.repositories.borrow_repo import BorrowRepo
from library_tracker.repositories.user_repo import UserRepo
from library_tracker.utils.db import transaction
from library_tracker.utils.errors import ConflictError, NotFoundError, ValidationError
from library_tracker.utils.validators import normalize_email, require_text


class UserService:
    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepo(session)
        self.borrows = BorrowRepo(session)

    def list_users(self):
        return self.users.list_all()

    def get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _clean_fields(self, data: dict, current_id: int | None = None) -> dict:
        name = require_text(data.get("name"), "name")
        email = normalize_email(data.get("email"))
        existing = self.users.get_by_email(email)
        if existing and existing.id != current_id:
            raise ValidationError("Email is already registered")
        return {"name": name, "email": email}

    def create_user(self, data: dict) -> User:
        fields = self._clean_fields(data)
        with transaction(self.session):
            user = self.users.add(User(**fields))
        return user

    def update_user(self, user_id: int, data: dict) -> User:
        user = self.get_user(user_id)
        fields = self._clean_fields(data, current_id=user.id)
        with transaction(self.session):
            user.name = fields["name"]
            user.email = fields["email"]
        return user

    def delete_user(self, user_id: int):
        with transaction(self.session):
            user = self.users.get(user_id)
            if not user:
                raise NotFoundError("User not found")

            if self.borrows.count_current_for_user(user_id) > 0:
                raise ConflictError("User still has borrowed books and cannot be deleted")

            removed = self.borrows.delete_records_for_user(user_id)
            self.users.delete(user)
        current_app.logger.info("[users] deleted id=%s (%s history rows)", user_id, removed)

    def current_borrows(self, user_id: int):
        self.get_user(user_id)
        return self.borrows.list_current_for_user(user_id)
