"""
Product Service
Repository-style access to the product catalogue. Every call queries the
database and returns fresh objects; nothing is cached between calls.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import or_

from retail import db
from retail.business.errors import DomainValidationError, RecordNotFoundError
from retail.data.catalog.category import Category
from retail.data.catalog.product import Product
from retail.logger import get_logger

logger = get_logger("retail_manager.services.catalog.product")


class ProductService:

    @staticmethod
    def list_active(q: Optional[str] = None) -> List[Product]:
        """Active products ordered by name, optionally filtered by name/SKU/barcode."""
        query = Product.query.filter_by(is_active=True)
        if q:
            like = f"%{q.strip()}%"
            query = query.filter(or_(
                Product.name.ilike(like),
                Product.sku.ilike(like),
                Product.barcode.ilike(like),
            ))
        return query.order_by(Product.name, Product.id).all()

    @staticmethod
    def get(product_id: int) -> Product:
        product = db.session.get(Product, product_id)
        if product is None:
            raise RecordNotFoundError("Product", product_id)
        return product

    @staticmethod
    def _check_unique(data: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        errors = []
        for field in ('sku', 'barcode'):
            value = data.get(field)
            if not value:
                continue
            query = Product.query.filter(getattr(Product, field) == value)
            if exclude_id is not None:
                query = query.filter(Product.id != exclude_id)
            if query.first() is not None:
                errors.append(f"{field.upper()} '{value}' already exists")
        category_id = data.get('category_id')
        if category_id is not None and db.session.get(Category, category_id) is None:
            errors.append(f"Category {category_id} not found")
        if errors:
            raise DomainValidationError(errors)

    @staticmethod
    def create(data: Dict[str, Any], user_id: Optional[int]) -> Product:
        ProductService._check_unique(data)
        product = Product.create_from_dict(data, user_id=user_id)
        db.session.flush()
        logger.info(f"Product created: {product.name} (id={product.id})")
        return product

    @staticmethod
    def update(product_id: int, data: Dict[str, Any], user_id: Optional[int]) -> Product:
        product = ProductService.get(product_id)
        ProductService._check_unique(data, exclude_id=product_id)
        product.update_from_dict(data, user_id=user_id)
        if (product.min_stock_level is not None and product.max_stock_level is not None
                and product.max_stock_level < product.min_stock_level):
            raise DomainValidationError("max_stock_level cannot be below min_stock_level")
        logger.info(f"Product updated: {product.name} (id={product.id})")
        return product

    @staticmethod
    def deactivate(product_id: int, user_id: Optional[int]) -> Product:
        """Products are never deleted: batches and invoice lines keep referencing them."""
        product = ProductService.get(product_id)
        product.is_active = False
        product.touch(user_id)
        logger.info(f"Product deactivated: {product.name} (id={product.id})")
        return product
