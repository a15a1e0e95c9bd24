from sqlalchemy.orm import Session

from library_tracker.models.user import User


class UserRepo:
    def __init__(self, session: Session):
        self.session = session

    def list_all(self):
        return self.session.query(User).order_by(User.name.asc(), User.id.asc()).all()

    def get(self, user_id: int):
        return self.session.get(User, user_id)

    def get_by_email(self, email: str):
        return self.session.query(User).filter_by(email=email).first()

    def add(self, user: User):
        self.session.add(user)
        self.session.flush()
        return user

    def delete(self, user: User):
        self.session.delete(user)
        self.session.flush()
