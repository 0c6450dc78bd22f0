from fabtrack.extensions import db
from fabtrack.models.user import User, Role


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def list_admins():
        return User.query.filter_by(role=Role.ADMIN).order_by(User.id).all()

    @staticmethod
    def add(user: User):
        db.session.add(user)
        db.session.flush()
        return user
