from tomenest.extensions import db
from tomenest.models.user import User


class UserRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get_by_email(self, email: str):
        return self.session.query(User).filter_by(email=email.strip().lower()).first()

    def get_by_id(self, user_id: int):
        return self.session.get(User, user_id)

    def count(self) -> int:
        return self.session.query(User).count()

    def list_all(self):
        return self.session.query(User).order_by(User.id.asc()).all()

    def create(self, user: User):
        self.session.add(user)
        self.session.flush()
        return user

    def set_role(self, user_id: int, role: str) -> int:
        return (
            self.session.query(User)
            .filter(User.id == user_id)
            .update({User.role: role}, synchronize_session=False)
        )
