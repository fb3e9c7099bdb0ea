from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping

from retail import db
from retail.business.core.money import to_decimal
from retail.business.errors import PurchaseValidationError
from retail.data.catalog.product import Product
from retail.data.inventory.inventory_batch import InventoryBatch
from retail.data.inventory.stock_movement import StockMovement
from retail.data.parties.vendor import Vendor
from retail.logger import get_logger

logger = get_logger("retail_manager.business.inventory.purchase_factory")

DEFAULT_LOCATION = "Warehouse"


@dataclass(frozen=True)
class PurchaseLineInput:
    product_id: int | None
    quantity: Decimal
    unit_price: Decimal

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PurchaseLineInput":
        return cls(
            product_id=data.get("product_id"),
            quantity=to_decimal(data.get("quantity")),
            unit_price=to_decimal(data.get("unit_price")),
        )


class PurchaseFactory:
    """
    Business factory for receiving stock.

    Every received line becomes one InventoryBatch (remaining = received) plus
    one ``purchase`` StockMovement. The caller commits.
    """

    @staticmethod
    def _clean_optional_str(value: object) -> str | None:
        if value is None:
            return None
        s = str(value).strip()
        return s or None

    @staticmethod
    def _get_product(product_id: int | None) -> Product | None:
        if product_id is None:
            return None
        product = db.session.get(Product, product_id)
        if product is None or not product.is_active:
            return None
        return product

    @staticmethod
    def create_batch(
        *,
        product_id: int,
        quantity: Any,
        purchase_price: Any,
        created_by_id: int | None,
        vendor_id: int | None = None,
        purchased_at: datetime | None = None,
        expiry_date: date | None = None,
        location: str | None = None,
        batch_number: str | None = None,
        reference_type: str | None = None,
        reference_id: int | None = None,
    ) -> InventoryBatch:
        quantity = to_decimal(quantity)
        purchase_price = to_decimal(purchase_price)

        errors = []
        if PurchaseFactory._get_product(product_id) is None:
            errors.append(f"Product {product_id} not found")
        if quantity <= 0:
            errors.append("Quantity must be greater than 0")
        if purchase_price < 0:
            errors.append("Purchase price cannot be negative")
        if vendor_id is not None and db.session.get(Vendor, vendor_id) is None:
            errors.append(f"Vendor {vendor_id} not found")
        if errors:
            raise PurchaseValidationError(errors)

        batch = InventoryBatch(
            product_id=product_id,
            vendor_id=vendor_id,
            quantity=quantity,
            remaining_quantity=quantity,
            purchase_price=purchase_price,
            purchased_at=purchased_at or datetime.utcnow(),
            expiry_date=expiry_date,
            location=PurchaseFactory._clean_optional_str(location),
            batch_number=PurchaseFactory._clean_optional_str(batch_number),
            created_by_id=created_by_id,
            updated_by_id=created_by_id,
        )
        db.session.add(batch)
        db.session.flush()

        db.session.add(StockMovement(
            product_id=product_id,
            batch_id=batch.id,
            movement_type="purchase",
            quantity=quantity,
            reference_type=reference_type,
            reference_id=reference_id,
            created_by_id=created_by_id,
            updated_by_id=created_by_id,
        ))
        return batch

    @staticmethod
    def record_purchase(
        *,
        vendor_id: int | None,
        items: Iterable[PurchaseLineInput | Mapping[str, Any]],
        created_by_id: int | None,
        purchase_date: datetime | None = None,
        location: str | None = None,
    ) -> list[InventoryBatch]:
        """
        Receive a vendor purchase as one batch per line.

        Raises:
            PurchaseValidationError: listing every failing rule; nothing is staged
        """
        lines = [i if isinstance(i, PurchaseLineInput) else PurchaseLineInput.from_mapping(i) for i in items]

        errors = []
        if vendor_id is None:
            errors.append("Vendor is required")
        else:
            vendor = db.session.get(Vendor, vendor_id)
            if vendor is None or not vendor.is_active:
                errors.append(f"Vendor {vendor_id} not found")
        if not lines:
            errors.append("Purchase must contain at least one item")
        for index, line in enumerate(lines, start=1):
            if line.product_id is None:
                errors.append(f"Item {index}: product is required")
            elif PurchaseFactory._get_product(line.product_id) is None:
                errors.append(f"Item {index}: product {line.product_id} not found")
            if line.quantity <= 0:
                errors.append(f"Item {index}: quantity must be greater than 0")
            if line.unit_price < 0:
                errors.append(f"Item {index}: unit price cannot be negative")
        if errors:
            raise PurchaseValidationError(errors)

        purchased_at = purchase_date or datetime.utcnow()
        location = PurchaseFactory._clean_optional_str(location) or DEFAULT_LOCATION

        batches = [
            PurchaseFactory.create_batch(
                product_id=line.product_id,
                quantity=line.quantity,
                purchase_price=line.unit_price,
                created_by_id=created_by_id,
                vendor_id=vendor_id,
                purchased_at=purchased_at,
                location=location,
                reference_type="vendor",
                reference_id=vendor_id,
            )
            for line in lines
        ]
        logger.info(f"Recorded purchase from vendor {vendor_id}: {len(batches)} batches")
        return batches
