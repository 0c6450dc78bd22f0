import unittest

from flask_jwt_extended import create_access_token

from fabtrack import create_app
from fabtrack.config import TestConfig
from fabtrack.extensions import db
from fabtrack.models.equipment import Equipment
from fabtrack.models.user import User, Role
from fabtrack.utils.policy import Caller
from werkzeug.security import generate_password_hash


class FabTrackTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app(TestConfig)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    # -- fixtures --------------------------------------------------------

    def make_user(self, name="Student One", email=None, role=Role.STUDENT, password="secret1"):
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@fab.test",
            role=role,
            password_hash=generate_password_hash(password),
            major="CS",
            year_group=2026,
        )
        db.session.add(user)
        db.session.commit()
        return user

    def make_admin(self, name="Lab Admin", email=None):
        return self.make_user(name=name, email=email, role=Role.ADMIN)

    def make_equipment(self, name="3D Printer"):
        equipment = Equipment(name=name)
        db.session.add(equipment)
        db.session.commit()
        return equipment

    def caller(self, user) -> Caller:
        return Caller(id=user.id, role=user.role, email=user.email)

    def auth_headers(self, user):
        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email},
        )
        return {"Authorization": f"Bearer {token}"}
