"""
Asset Field Policy

Turns loose command input into typed values. This is the one place where
enumeration names, legacy numeric codes and ISO date strings are decoded;
everything past it works with typed members, dates and Decimals.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
from itam.data.core.enums import AssetCategory, AssetCondition, AssetStatus
from itam.buisness.lifecycle.errors import InvalidInputError


class AssetFieldPolicy:
    """
    Field rules for CreateAsset and UpdateAsset.
    """

    REQUIRED_FIELDS = ('category', 'brand', 'model')

    FIELDS = (
        'asset_tag', 'barcode', 'category', 'brand', 'model', 'serial_number',
        'description', 'condition', 'purchase_date', 'purchase_price',
        'warranty_expiry', 'status', 'notes', 'location_id',
    )

    # Fields a patch may not clear
    NON_NULLABLE = ('asset_tag', 'category', 'brand', 'model', 'condition', 'status')

    # camelCase names used by older API clients
    ALIASES = {
        'assetTag': 'asset_tag',
        'serialNumber': 'serial_number',
        'purchaseDate': 'purchase_date',
        'purchasePrice': 'purchase_price',
        'warrantyExpiry': 'warranty_expiry',
        'locationId': 'location_id',
    }

    STRING_LIMITS = {
        'asset_tag': 50,
        'barcode': 100,
        'brand': 100,
        'model': 100,
        'serial_number': 100,
    }

    @classmethod
    def canonical_keys(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Rename aliases and reject unknown fields.

        Raises:
            InvalidInputError: On unknown or duplicated fields
        """
        if not isinstance(data, dict):
            raise InvalidInputError("Asset data must be an object")

        result = {}
        for key, value in data.items():
            name = cls.ALIASES.get(key, key)
            if name not in cls.FIELDS:
                raise InvalidInputError(f"Unknown asset field: {key}", field=key)
            if name in result:
                raise InvalidInputError(f"Field given twice: {name}", field=name)
            result[name] = value
        return result

    @classmethod
    def normalize_create(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and decode the fields of a new asset.

        Raises:
            InvalidInputError: If a required field is missing or a value is malformed
        """
        fields = cls.canonical_keys(data)

        missing = [name for name in cls.REQUIRED_FIELDS if fields.get(name) in (None, '')]
        if missing:
            raise InvalidInputError(
                f"Missing required field(s): {', '.join(missing)}",
                fields=missing
            )

        values = {name: cls.parse_field(name, value) for name, value in fields.items()}
        if values.get('condition') is None:
            values['condition'] = AssetCondition.NEW
        if values.get('status') is None:
            values['status'] = AssetStatus.AVAILABLE

        cls.check_warranty_after_purchase(values.get('purchase_date'), values.get('warranty_expiry'))
        return values

    @classmethod
    def normalize_patch(cls, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and decode a field-level patch. Only supplied fields are returned.

        Raises:
            InvalidInputError: If the patch is empty or a value is malformed
        """
        fields = cls.canonical_keys(patch)
        if not fields:
            raise InvalidInputError("Patch contains no fields")

        values = {}
        for name, value in fields.items():
            parsed = cls.parse_field(name, value)
            if parsed is None and name in cls.NON_NULLABLE:
                raise InvalidInputError(f"{name} cannot be empty", field=name)
            values[name] = parsed
        return values

    @classmethod
    def parse_field(cls, name: str, value: Any) -> Any:
        if value is None:
            return None
        if name == 'category':
            return cls.parse_enum(AssetCategory, value, name)
        if name == 'condition':
            return cls.parse_enum(AssetCondition, value, name)
        if name == 'status':
            return cls.parse_enum(AssetStatus, value, name)
        if name in ('purchase_date', 'warranty_expiry'):
            return cls.parse_date(value, name)
        if name == 'purchase_price':
            return cls.parse_price(value)
        if name == 'location_id':
            return cls.parse_id(value, name)
        return cls.parse_text(value, name)

    @classmethod
    def parse_text(cls, value: Any, name: str) -> Optional[str]:
        if not isinstance(value, str):
            raise InvalidInputError(f"{name} must be a string", field=name)
        text = value.strip()
        if not text:
            return None
        limit = cls.STRING_LIMITS.get(name)
        if limit and len(text) > limit:
            raise InvalidInputError(f"{name} must be at most {limit} characters", field=name)
        return text

    @staticmethod
    def parse_enum(enum_cls, value: Any, name: str):
        try:
            return enum_cls.decode(value)
        except ValueError:
            raise InvalidInputError(
                f"Invalid {name}: {value!r}. Expected one of {', '.join(enum_cls.values())}",
                field=name
            )

    @staticmethod
    def parse_id(value: Any, name: str) -> int:
        if isinstance(value, bool):
            raise InvalidInputError(f"{name} must be an integer id", field=name)
        try:
            parsed = int(value)
        except (TypeError, ValueError):
            raise InvalidInputError(f"{name} must be an integer id", field=name)
        if parsed < 1:
            raise InvalidInputError(f"{name} must be a positive id", field=name)
        return parsed

    @staticmethod
    def parse_price(value: Any) -> Decimal:
        if isinstance(value, bool):
            raise InvalidInputError("purchase_price must be a number", field='purchase_price')
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            raise InvalidInputError("purchase_price must be a number", field='purchase_price')
        if not price.is_finite() or price < 0:
            raise InvalidInputError("purchase_price must be zero or more", field='purchase_price')
        return price.quantize(Decimal('0.01'))

    @staticmethod
    def parse_date(value: Any, name: str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip().replace('Z', '+00:00')).date()
            except ValueError:
                pass
        raise InvalidInputError(f"{name} must be an ISO date (YYYY-MM-DD)", field=name)

    @staticmethod
    def parse_datetime(value: Any, name: str) -> Optional[datetime]:
        """
        Parse a point in time. A bare date means the end of that day.

        Aware datetimes are converted to naive UTC.
        """
        if value is None:
            return None
        if isinstance(value, str):
            text = value.strip().replace('Z', '+00:00')
            try:
                value = datetime.fromisoformat(text) if 'T' in text or ' ' in text else date.fromisoformat(text)
            except ValueError:
                raise InvalidInputError(f"{name} must be an ISO date or datetime", field=name)
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = (value - value.utcoffset()).replace(tzinfo=None)
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.max)
        raise InvalidInputError(f"{name} must be an ISO date or datetime", field=name)

    @staticmethod
    def check_warranty_after_purchase(purchase_date: Optional[date], warranty_expiry: Optional[date]) -> None:
        if purchase_date and warranty_expiry and warranty_expiry < purchase_date:
            raise InvalidInputError(
                "warranty_expiry cannot be earlier than purchase_date",
                field='warranty_expiry'
            )
