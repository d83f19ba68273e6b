from itam.data.core.user_created_base import UserCreatedBase
from itam.data.core.enums import AssetStatus, AssetCategory, AssetCondition, enum_column_values
from itam import db


class Asset(UserCreatedBase):
    __tablename__ = 'assets'

    asset_tag = db.Column(db.String(50), unique=True, nullable=False)
    barcode = db.Column(db.String(100), nullable=True)
    category = db.Column(
        db.Enum(AssetCategory, values_callable=enum_column_values, native_enum=False, length=30),
        nullable=False
    )
    brand = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    serial_number = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)
    condition = db.Column(
        db.Enum(AssetCondition, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=False,
        default=AssetCondition.NEW
    )
    purchase_date = db.Column(db.Date, nullable=True)
    purchase_price = db.Column(db.Numeric(12, 2), nullable=True)
    warranty_expiry = db.Column(db.Date, nullable=True)
    status = db.Column(
        db.Enum(AssetStatus, values_callable=enum_column_values, native_enum=False, length=20),
        nullable=False,
        default=AssetStatus.AVAILABLE,
        index=True
    )
    notes = db.Column(db.Text, nullable=True)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)

    # Soft delete: the row and its event log stay, every lookup skips it
    is_deleted = db.Column(db.Boolean, default=False, nullable=False)
    deleted_at = db.Column(db.DateTime, nullable=True)

    # Per-asset event log bookkeeping; every command bumps event_sequence,
    # which also bumps version_id
    event_sequence = db.Column(db.Integer, default=0, nullable=False)
    last_event_at = db.Column(db.DateTime, nullable=True)
    version_id = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version_id}

    # Relationships
    location = db.relationship('Location', foreign_keys=[location_id])
    assignments = db.relationship(
        'Assignment',
        back_populates='asset',
        order_by='Assignment.assigned_date',
        lazy='dynamic'
    )
    events = db.relationship('LifecycleEvent', back_populates='asset', lazy='dynamic')

    @property
    def active_assignment(self):
        from itam.data.core.asset_info.assignment import Assignment
        return self.assignments.filter(Assignment.actual_return_date.is_(None)).first()

    @property
    def is_available(self):
        return self.status == AssetStatus.AVAILABLE

    def __repr__(self):
        return f'<Asset {self.asset_tag} ({self.status.value if self.status else None})>'
