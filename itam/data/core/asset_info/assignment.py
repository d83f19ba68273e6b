from datetime import datetime
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import validates
from itam.data.core.user_created_base import UserCreatedBase
from itam.data.core.enums import AssetStatus, enum_column_values
from itam.utils.time import utcnow
from itam import db


class Assignment(UserCreatedBase):
    """
    A loan of one asset to one employee.

    assigned_date is fixed at creation and actual_return_date is written once,
    on return. Both are guarded by validators below.
    """
    __tablename__ = 'assignments'
    __table_args__ = (
        # Backstop for the one-active-assignment rule the engine enforces
        db.Index(
            'uq_assignments_one_active_per_asset',
            'asset_id',
            unique=True,
            sqlite_where=db.text('actual_return_date IS NULL'),
            postgresql_where=db.text('actual_return_date IS NULL'),
        ),
    )

    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey('employees.id'), nullable=False, index=True)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)
    assigned_date = db.Column(db.DateTime, nullable=False)
    expected_return_date = db.Column(db.DateTime, nullable=True)
    actual_return_date = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    return_notes = db.Column(db.Text, nullable=True)
    # Set when an administrative status change closed the assignment
    closed_by_status = db.Column(
        db.Enum(AssetStatus, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=True
    )

    asset = db.relationship('Asset', back_populates='assignments')
    employee = db.relationship('Employee', foreign_keys=[employee_id])
    location = db.relationship('Location', foreign_keys=[location_id])

    @validates('assigned_date')
    def _validate_assigned_date(self, key, value):
        if self.assigned_date is not None and value != self.assigned_date:
            raise ValueError("assigned_date is immutable once set")
        return value

    @validates('actual_return_date')
    def _validate_actual_return_date(self, key, value):
        if self.actual_return_date is not None and value != self.actual_return_date:
            raise ValueError("actual_return_date is immutable once set")
        return value

    @hybrid_property
    def is_active(self):
        return self.actual_return_date is None

    @is_active.expression
    def is_active(cls):
        return cls.actual_return_date.is_(None)

    def is_overdue(self, now: datetime = None) -> bool:
        """Active, has an expected return date, and that date has passed"""
        if not self.is_active or self.expected_return_date is None:
            return False
        return (now or utcnow()) > self.expected_return_date

    def days_assigned(self, now: datetime = None) -> int:
        end = self.actual_return_date or now or utcnow()
        return (end - self.assigned_date).days

    def __repr__(self):
        state = 'active' if self.is_active else 'returned'
        return f'<Assignment {self.id} asset={self.asset_id} employee={self.employee_id} {state}>'
