from itam.data.core.user_created_base import UserCreatedBase
from itam import db


class Location(UserCreatedBase):
    __tablename__ = 'locations'

    building = db.Column(db.String(100), nullable=False)
    floor = db.Column(db.Integer, nullable=True)
    room = db.Column(db.String(50), nullable=True)
    description = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships (no backrefs)
    assets = db.relationship('Asset', foreign_keys='Asset.location_id', viewonly=True)
    employees = db.relationship('Employee', foreign_keys='Employee.work_location_id', viewonly=True)

    @property
    def full_location(self):
        parts = [self.building]
        if self.floor is not None:
            parts.append(f'Floor {self.floor}')
        if self.room:
            parts.append(f'Room {self.room}')
        return ' - '.join(parts)

    def __repr__(self):
        return f'<Location {self.full_location}>'
