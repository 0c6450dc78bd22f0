from fabtrack.extensions import db


class Role:
    STUDENT = "Student"
    ADMIN = "Admin"

    ALL = (STUDENT, ADMIN)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False)  # Student / Admin
    password_hash = db.Column(db.String(255), nullable=False)

    major = db.Column(db.String(200), nullable=True)
    year_group = db.Column(db.Integer, nullable=True)

    borrow_requests = db.relationship("BorrowRequest", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def label(self) -> str:
        # audit log wording
        return "the admin" if self.is_admin else self.name
