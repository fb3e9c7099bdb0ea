"""
Generic serialization mixin for SQLAlchemy models.

Adds ``from_dict``/``to_dict`` plus ``create_from_dict`` to every model that
inherits it. Money and quantity columns are ``Numeric`` and come back from the
database as ``Decimal``; ``to_dict`` renders them as strings so JSON never
sees a float.
"""

from datetime import date, datetime
from decimal import Decimal
import enum

from sqlalchemy import inspect

from retail import db
from retail.logger import get_logger

logger = get_logger("retail_manager.business.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at', 'created_by_id', 'updated_by_id')


def serialize_value(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, enum.Enum):
        return value.value
    return value


class DataInsertionMixin:
    """
    Mixin that provides dict (de)serialization for SQLAlchemy models

    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - create_from_dict(): Create and add a model instance from dictionary
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
        skip_fields = set(skip_fields or ())

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields or key == 'id':
                continue
            if key in ('created_at', 'updated_at') and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if user_id is not None:
            if hasattr(instance, 'created_by_id') and not instance.created_by_id:
                instance.created_by_id = user_id
            if hasattr(instance, 'updated_by_id'):
                instance.updated_by_id = user_id

        return instance

    def update_from_dict(self, data_dict, user_id=None, skip_fields=None):
        """Apply column values from ``data_dict``; unknown keys are ignored."""
        skip_fields = set(skip_fields or ()) | {'id', *AUDIT_FIELDS}
        columns = {c.key for c in inspect(self.__class__).columns}
        for key, value in data_dict.items():
            if key in columns and key not in skip_fields:
                setattr(self, key, value)
        if user_id is not None and hasattr(self, 'updated_by_id'):
            self.updated_by_id = user_id
        return self

    def to_dict(self, include_relationships=False, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Args:
            include_relationships (bool): Whether to include many-to-one relationship data
            include_audit_fields (bool): Whether to include audit fields

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}
        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue
            result[column.key] = serialize_value(getattr(self, column.key))

        if include_relationships:
            for relationship in mapper.relationships:
                if relationship.uselist or relationship.key in result:
                    continue
                if relationship.key in ('created_by', 'updated_by'):
                    continue
                related_obj = getattr(self, relationship.key)
                if related_obj is None:
                    result[relationship.key] = None
                elif hasattr(related_obj, 'to_dict'):
                    result[relationship.key] = related_obj.to_dict(include_audit_fields=False)
                else:
                    result[relationship.key] = str(related_obj)

        return result

    @classmethod
    def create_from_dict(cls, data_dict, user_id=None, skip_fields=None, commit=False):
        """
        Create a model instance from dictionary and add it to the session.

        The caller owns the transaction unless ``commit`` is True.
        """
        instance = cls.from_dict(data_dict, user_id, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise
