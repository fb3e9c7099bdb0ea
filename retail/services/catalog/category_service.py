from typing import Any, Dict, List, Optional

from retail import db
from retail.business.errors import DomainValidationError
from retail.data.catalog.category import Category


class CategoryService:

    @staticmethod
    def list_active() -> List[Category]:
        return Category.query.filter_by(is_active=True).order_by(Category.name).all()

    @staticmethod
    def create(data: Dict[str, Any], user_id: Optional[int]) -> Category:
        parent_id = data.get('parent_id')
        if parent_id is not None and db.session.get(Category, parent_id) is None:
            raise DomainValidationError(f"Parent category {parent_id} not found")
        category = Category.create_from_dict(data, user_id=user_id)
        db.session.flush()
        return category
