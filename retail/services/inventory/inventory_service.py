"""
Inventory Service

Read side of stock: batch listings and the per-product stock summary built
by the stock aggregator. Writes go through PurchaseFactory.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import joinedload

from retail.business.core.money import ZERO, quantize_money, to_decimal
from retail.business.inventory.purchase_factory import PurchaseFactory
from retail.business.inventory.stock_aggregator import (
    LOW_STOCK,
    OUT_OF_STOCK,
    BatchRecord,
    StockSummary,
    aggregate_stock,
)
from retail.data.inventory.inventory_batch import InventoryBatch


class InventoryService:

    @staticmethod
    def list_batches(product_id: Optional[int] = None) -> List[InventoryBatch]:
        """Batches with their product loaded, newest purchase first."""
        query = InventoryBatch.query.options(
            joinedload(InventoryBatch.product),
            joinedload(InventoryBatch.vendor),
        )
        if product_id is not None:
            query = query.filter(InventoryBatch.product_id == product_id)
        return query.order_by(InventoryBatch.purchased_at.desc(), InventoryBatch.id.desc()).all()

    @staticmethod
    def stock_summary() -> List[StockSummary]:
        """
        Aggregated stock per product, sorted by product name.

        Only products that have at least one batch appear.
        """
        batches = InventoryBatch.query.options(joinedload(InventoryBatch.product)).order_by(InventoryBatch.id).all()
        summaries = aggregate_stock(BatchRecord.from_object(batch) for batch in batches)
        return sorted(summaries, key=lambda s: ((s.product_name or '').lower(), s.product_id))

    @staticmethod
    def stock_for_product(product_id: int) -> Decimal:
        for summary in aggregate_stock(BatchRecord.from_object(b) for b in InventoryService.list_batches(product_id)):
            if summary.product_id == product_id:
                return summary.total_stock
        return ZERO

    @staticmethod
    def low_stock_alerts() -> List[StockSummary]:
        return [s for s in InventoryService.stock_summary() if s.status in (LOW_STOCK, OUT_OF_STOCK)]

    @staticmethod
    def inventory_value() -> Decimal:
        """Remaining stock valued at each batch's purchase price."""
        total = ZERO
        for batch in InventoryBatch.query.filter(InventoryBatch.remaining_quantity > 0).all():
            total += to_decimal(batch.remaining_quantity) * to_decimal(batch.purchase_price)
        return quantize_money(total)

    @staticmethod
    def add_batch(data: Dict[str, Any], user_id: Optional[int]) -> InventoryBatch:
        return PurchaseFactory.create_batch(
            product_id=data.get('product_id'),
            quantity=data.get('quantity'),
            purchase_price=data.get('purchase_price'),
            created_by_id=user_id,
            vendor_id=data.get('vendor_id'),
            purchased_at=data.get('purchased_at'),
            expiry_date=data.get('expiry_date'),
            location=data.get('location'),
            batch_number=data.get('batch_number'),
        )
