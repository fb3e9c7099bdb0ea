"""
Stock aggregation over inventory batches.

Stock is never stored per product. It is the sum of ``remaining_quantity``
over the product's batches, classified against the product's minimum stock
level:

- ``out_of_stock``: total is exactly zero
- ``low_stock``: a minimum is set and 0 < total <= minimum
- ``in_stock``: anything else
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from retail.business.core.money import ZERO, to_decimal

IN_STOCK = "in_stock"
LOW_STOCK = "low_stock"
OUT_OF_STOCK = "out_of_stock"

REQUIRED_PRODUCT_FIELDS = ("name", "unit", "selling_price")


@dataclass(frozen=True)
class ProductSnapshot:
    name: str
    unit: str
    selling_price: Decimal
    min_stock_level: Optional[Decimal] = None


@dataclass(frozen=True)
class BatchRecord:
    product_id: Any
    remaining_quantity: Decimal
    product: Optional[ProductSnapshot] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BatchRecord":
        """
        Build from ``{product_id, remaining_quantity, product: {...}}``.

        A missing or null ``product`` gives a record without a snapshot. A
        product lacking name, unit or selling_price raises ValueError.
        """
        product = data.get("product")
        snapshot = None
        if product is not None:
            missing = [key for key in REQUIRED_PRODUCT_FIELDS if product.get(key) is None]
            if missing:
                raise ValueError(
                    f"Batch for product {data.get('product_id')} has an incomplete product: "
                    f"missing {', '.join(missing)}"
                )
            snapshot = ProductSnapshot(
                name=product.get("name"),
                unit=product.get("unit"),
                selling_price=to_decimal(product.get("selling_price")),
                min_stock_level=to_decimal(product.get("min_stock_level"), default=None),
            )
        return cls(
            product_id=data.get("product_id"),
            remaining_quantity=to_decimal(data.get("remaining_quantity")),
            product=snapshot,
        )

    @classmethod
    def from_object(cls, batch: Any) -> "BatchRecord":
        """Build from anything exposing batch attributes (e.g. an InventoryBatch row)."""
        product = getattr(batch, "product", None)
        snapshot = None
        if product is not None:
            snapshot = ProductSnapshot(
                name=product.name,
                unit=product.unit,
                selling_price=to_decimal(product.selling_price),
                min_stock_level=to_decimal(product.min_stock_level, default=None),
            )
        return cls(
            product_id=batch.product_id,
            remaining_quantity=to_decimal(batch.remaining_quantity),
            product=snapshot,
        )


@dataclass(frozen=True)
class StockSummary:
    product_id: Any
    product_name: str
    unit: str
    total_stock: Decimal
    selling_price: Decimal
    min_stock_level: Optional[Decimal] = None
    status: str = IN_STOCK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "unit": self.unit,
            "total_stock": str(self.total_stock),
            "min_stock_level": None if self.min_stock_level is None else str(self.min_stock_level),
            "selling_price": str(self.selling_price),
            "status": self.status,
        }


def classify_stock(total_stock: Decimal, min_stock_level: Optional[Decimal]) -> str:
    if total_stock == 0:
        return OUT_OF_STOCK
    if min_stock_level is not None and ZERO < total_stock <= min_stock_level:
        return LOW_STOCK
    return IN_STOCK


def aggregate_stock(batches: Iterable[BatchRecord | Mapping[str, Any]]) -> List[StockSummary]:
    """
    Reduce batches to one StockSummary per product, in first-seen order.

    Product attributes come from the first batch seen for each product.
    Batches without a product are skipped.
    """
    totals: Dict[Any, StockSummary] = {}

    for batch in batches:
        if not isinstance(batch, BatchRecord):
            batch = BatchRecord.from_mapping(batch)
        if batch.product is None:
            continue

        existing = totals.get(batch.product_id)
        if existing is None:
            totals[batch.product_id] = StockSummary(
                product_id=batch.product_id,
                product_name=batch.product.name,
                unit=batch.product.unit,
                total_stock=batch.remaining_quantity,
                selling_price=batch.product.selling_price,
                min_stock_level=batch.product.min_stock_level,
            )
        else:
            totals[batch.product_id] = replace(
                existing, total_stock=existing.total_stock + batch.remaining_quantity
            )

    return [
        replace(summary, status=classify_stock(summary.total_stock, summary.min_stock_level))
        for summary in totals.values()
    ]
