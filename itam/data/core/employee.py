from itam.data.core.user_created_base import UserCreatedBase
from itam import db


class Employee(UserCreatedBase):
    __tablename__ = 'employees'

    employee_number = db.Column(db.String(50), unique=True, nullable=False)
    first_name = db.Column(db.String(80), nullable=False)
    last_name = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False)
    department = db.Column(db.String(100), nullable=True)
    job_title = db.Column(db.String(100), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    work_location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)

    work_location = db.relationship('Location', foreign_keys=[work_location_id])

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def __repr__(self):
        return f'<Employee {self.employee_number} {self.full_name}>'
