"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods used by the reference data contexts and the
JSON serializers.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from sqlalchemy import inspect


def plain_value(value):
    """Convert column values into JSON friendly primitives"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    """

    @classmethod
    def from_dict(cls, data_dict, user_id=None, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in ['created_at', 'updated_at'] and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if user_id is not None:
            if hasattr(instance, 'created_by_id') and not instance.created_by_id:
                instance.created_by_id = user_id
            if hasattr(instance, 'updated_by_id'):
                instance.updated_by_id = user_id

        return instance

    def to_dict(self, include_audit_fields=True, exclude=None):
        """
        Convert model instance to dictionary

        Args:
            include_audit_fields (bool): Whether to include audit fields
            exclude (iterable, optional): Column keys to leave out

        Returns:
            dict: Dictionary representation of the model
        """
        exclude = set(exclude or ())
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if column.key in exclude:
                continue
            if not include_audit_fields and column.key in ['created_at', 'updated_at', 'created_by_id', 'updated_by_id']:
                continue
            result[column.key] = plain_value(getattr(self, column.key))

        return result
