from itam import db, login_manager
from werkzeug.security import generate_password_hash, check_password_hash
from flask_login import UserMixin
from itam.buisness.core.data_insertion_mixin import DataInsertionMixin
from itam.data.core.enums import UserRole, enum_column_values
from itam.utils.time import utcnow


class User(UserMixin, DataInsertionMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(80), nullable=True)
    last_name = db.Column(db.String(80), nullable=True)
    role = db.Column(
        db.Enum(UserRole, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.VIEWER
    )
    is_active = db.Column(db.Boolean, default=True)
    is_system = db.Column(db.Boolean, default=False)
    last_login_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def display_name(self):
        full = ' '.join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username

    def __repr__(self):
        return f'<User {self.username} ({self.role.value if self.role else None})>'


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))
