"""
Asset Service
Read-side queries over assets.

Handles:
- Single asset lookup
- Query building and filtering for asset list views
- Available asset search
"""

from datetime import timedelta
from typing import List, Optional
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import or_
from itam import db
from itam.data.core.asset_info.asset import Asset
from itam.data.core.asset_info.assignment import Assignment
from itam.data.core.enums import AssetStatus, AssetCategory
from itam.buisness.lifecycle.errors import NotFoundError
from itam.services.core.paging import paginate
from itam.utils.time import utcnow


class AssetService:
    """
    Service for asset queries. Never mutates.

    Deleted assets are invisible here.
    """

    @staticmethod
    def get_asset(asset_id) -> Asset:
        """
        Raises:
            NotFoundError: If the asset does not exist or was deleted
        """
        asset = db.session.get(Asset, asset_id) if asset_id is not None else None
        if asset is None or asset.is_deleted:
            raise NotFoundError(f"Asset {asset_id} not found", asset_id=asset_id)
        return asset

    @staticmethod
    def get_by_tag(asset_tag: str) -> Asset:
        asset = Asset.query.filter(Asset.asset_tag == asset_tag, Asset.is_deleted.is_(False)).first()
        if asset is None:
            raise NotFoundError(f"Asset {asset_tag} not found", asset_tag=asset_tag)
        return asset

    @staticmethod
    def is_available(asset: Asset) -> bool:
        return asset.status == AssetStatus.AVAILABLE

    @staticmethod
    def build_filtered_query(
        search: Optional[str] = None,
        category: Optional[AssetCategory] = None,
        status: Optional[AssetStatus] = None,
        brand: Optional[str] = None,
        location_id: Optional[int] = None,
        employee_id: Optional[int] = None,
        warranty_expiring_days: Optional[int] = None
    ):
        """
        Build a filtered asset query.

        Args:
            search: Partial match on tag, brand, model, serial number or barcode
            category: Filter by category
            status: Filter by status
            brand: Filter by brand (partial match)
            location_id: Filter by current location
            employee_id: Filter by current holder
            warranty_expiring_days: Only assets whose warranty ends within this many days

        Returns:
            SQLAlchemy query object, ordered by id for stable paging
        """
        query = Asset.query.filter(Asset.is_deleted.is_(False))

        if search:
            like = f'%{search.strip()}%'
            query = query.filter(or_(
                Asset.asset_tag.ilike(like),
                Asset.brand.ilike(like),
                Asset.model.ilike(like),
                Asset.serial_number.ilike(like),
                Asset.barcode.ilike(like),
            ))

        if category:
            query = query.filter(Asset.category == category)

        if status:
            query = query.filter(Asset.status == status)

        if brand:
            query = query.filter(Asset.brand.ilike(f'%{brand.strip()}%'))

        if location_id:
            query = query.filter(Asset.location_id == location_id)

        if employee_id:
            query = query.join(Assignment, Assignment.asset_id == Asset.id).filter(
                Assignment.employee_id == employee_id,
                Assignment.actual_return_date.is_(None)
            )

        if warranty_expiring_days is not None:
            today = utcnow().date()
            query = query.filter(
                Asset.warranty_expiry.isnot(None),
                Asset.warranty_expiry >= today,
                Asset.warranty_expiry <= today + timedelta(days=warranty_expiring_days)
            )

        return query.order_by(Asset.id)

    @staticmethod
    def list_assets(page: Optional[int] = None, page_size: Optional[int] = None, **filters) -> Pagination:
        """Paginated asset list; filters as in build_filtered_query"""
        return paginate(AssetService.build_filtered_query(**filters), page, page_size)

    @staticmethod
    def find_available_assets(
        category: Optional[AssetCategory] = None,
        location_id: Optional[int] = None
    ) -> List[Asset]:
        """Available assets, optionally narrowed by category and location, in id order"""
        return AssetService.build_filtered_query(
            category=category,
            status=AssetStatus.AVAILABLE,
            location_id=location_id
        ).all()
