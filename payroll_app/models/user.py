from payroll_app.extensions import db
from flask_login import UserMixin
from datetime import datetime

# ==========================
# USER MODEL
# ==========================
class User(UserMixin, db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(50), nullable=False, default="employee")
    active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    employee_profile = db.relationship(
        "Employee",
        back_populates="user",
        uselist=False
    )

    def __repr__(self):
        return f'<User {self.email}>'

    @property
    def is_active(self):
        return bool(self.active)

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}"

    # ---------------------------
    # ROLE CHECK HELPERS
    # ---------------------------
    def is_admin(self):
        return self.role == "admin"

    def is_employee(self):
        return self.role == "employee"
