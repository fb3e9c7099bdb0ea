"""
Customer and Vendor services.

Both are plain contact records with the same access pattern: list active
records by name, fetch one, create, partially update.
"""

from typing import Any, Dict, List, Optional

from retail import db
from retail.business.errors import RecordNotFoundError
from retail.data.parties.customer import Customer
from retail.data.parties.vendor import Vendor
from retail.logger import get_logger

logger = get_logger("retail_manager.services.parties")


class PartyService:
    model = None
    label = None

    @classmethod
    def list_active(cls, q: Optional[str] = None) -> List[Any]:
        query = cls.model.query.filter_by(is_active=True)
        if q:
            query = query.filter(cls.model.name.ilike(f"%{q.strip()}%"))
        return query.order_by(cls.model.name, cls.model.id).all()

    @classmethod
    def get(cls, record_id: int):
        record = db.session.get(cls.model, record_id)
        if record is None:
            raise RecordNotFoundError(cls.label, record_id)
        return record

    @classmethod
    def create(cls, data: Dict[str, Any], user_id: Optional[int]):
        record = cls.model.create_from_dict(data, user_id=user_id)
        db.session.flush()
        logger.info(f"{cls.label} created: {record.name} (id={record.id})")
        return record

    @classmethod
    def update(cls, record_id: int, data: Dict[str, Any], user_id: Optional[int]):
        record = cls.get(record_id)
        record.update_from_dict(data, user_id=user_id)
        logger.info(f"{cls.label} updated: {record.name} (id={record.id})")
        return record


class CustomerService(PartyService):
    model = Customer
    label = "Customer"


class VendorService(PartyService):
    model = Vendor
    label = "Vendor"
