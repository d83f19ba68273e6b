from itam import db
from itam.buisness.core.data_insertion_mixin import DataInsertionMixin
from itam.data.core.enums import TimelineType, AssetStatus, enum_column_values


class LifecycleEvent(DataInsertionMixin, db.Model):
    """
    Append-only lifecycle log entry for one asset.

    sequence is monotonic per asset and unique together with asset_id.
    Events written by the same command share a group_key.
    """
    __tablename__ = 'lifecycle_events'
    __table_args__ = (
        db.UniqueConstraint('asset_id', 'sequence', name='uq_lifecycle_events_asset_sequence'),
    )

    id = db.Column(db.Integer, primary_key=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False, index=True)
    sequence = db.Column(db.Integer, nullable=False)
    group_key = db.Column(db.String(32), nullable=False, index=True)
    event_type = db.Column(
        db.Enum(TimelineType, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=False
    )
    timestamp = db.Column(db.DateTime, nullable=False, index=True)
    actor = db.Column(db.String(120), nullable=False)
    actor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    description = db.Column(db.Text, nullable=False)
    employee_id = db.Column(db.Integer, db.ForeignKey('employees.id'), nullable=True)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)
    assignment_id = db.Column(db.Integer, db.ForeignKey('assignments.id'), nullable=True)
    from_status = db.Column(
        db.Enum(AssetStatus, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=True
    )
    to_status = db.Column(
        db.Enum(AssetStatus, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=True
    )
    changes = db.Column(db.JSON, nullable=True)

    asset = db.relationship('Asset', back_populates='events')
    employee = db.relationship('Employee', foreign_keys=[employee_id])
    location = db.relationship('Location', foreign_keys=[location_id])
    assignment = db.relationship('Assignment', foreign_keys=[assignment_id])

    def __repr__(self):
        return f'<LifecycleEvent asset={self.asset_id} #{self.sequence} {self.event_type.value}>'
