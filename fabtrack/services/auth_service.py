from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token

from fabtrack.errors import AuthenticationError, NotFoundError, ValidationError
from fabtrack.models.user import User, Role
from fabtrack.repositories.user_repo import UserRepo
from fabtrack.utils.transaction import atomic


class AuthService:
    @staticmethod
    def sign_up(email: str, password: str, name: str, role: str, major=None, year_group=None):
        if role not in Role.ALL:
            raise ValidationError("role must be one of Student, Admin")
        if UserRepo.get_by_email(email):
            raise ValidationError("Email already taken")

        with atomic():
            user = UserRepo.add(User(
                name=name,
                email=email,
                role=role,
                password_hash=generate_password_hash(password),
                major=major,
                year_group=year_group,
            ))
        return user

    @staticmethod
    def login(email: str, password: str):
        user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise AuthenticationError("Invalid credentials")

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email},
        )
        return token, user

    @staticmethod
    def get_user(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def edit_user(user_id: int, name=None, major=None, year_group=None):
        with atomic():
            user = AuthService.get_user(user_id)
            if name is not None:
                user.name = name
            if major is not None:
                user.major = major
            if year_group is not None:
                user.year_group = year_group
        return user
