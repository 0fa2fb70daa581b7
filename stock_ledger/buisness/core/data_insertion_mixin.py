"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods used by the seed data and the API views
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import inspect
from stock_ledger.logger import get_logger

logger = get_logger("stock_ledger.buisness.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to a JSON-friendly dictionary
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.column_attrs}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            # Let column defaults fill missing timestamps
            if key.endswith('_at') and value is None:
                continue
            filtered_data[key] = value

        ignored = set(data_dict) - set(filtered_data) - set(skip_fields)
        if ignored:
            logger.debug(f"{cls.__name__}.from_dict ignored fields: {sorted(ignored)}")

        return cls(**filtered_data)

    def to_dict(self, include_fields=None):
        """
        Convert model instance to dictionary

        Decimals become floats and datetimes ISO strings so the result can be
        passed straight to jsonify().

        Args:
            include_fields (list, optional): Restrict output to these columns
        """
        mapper = inspect(self.__class__)
        result = {}
        for attr in mapper.column_attrs:
            key = attr.key
            if include_fields is not None and key not in include_fields:
                continue
            result[key] = self._serialize_value(getattr(self, key))
        return result

    @staticmethod
    def _serialize_value(value):
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, datetime):
            return value.isoformat()
        return value
