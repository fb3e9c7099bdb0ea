"""
Invoice totals.

Two separate reductions over the same line items produce the stored header
fields:

    subtotal   = sum(quantity * unit_price)
    tax_amount = sum(quantity * unit_price * tax_rate / 100)
    total      = subtotal + tax_amount - discount_amount

Each line additionally stores ``quantity * unit_price * (1 + tax_rate / 100)``.

All arithmetic is Decimal. Sums are exact and each reported amount is rounded
half-up to cents once; the total is derived from the rounded parts so the
header invariant holds on the stored values.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from retail.business.core.money import HUNDRED, MAX_AMOUNT, MAX_QUANTITY, ZERO, quantize_money, to_decimal
from retail.business.errors import InvoiceValidationError


@dataclass(frozen=True)
class LineItemDraft:
    product_id: Any
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal = ZERO

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LineItemDraft":
        return cls(
            product_id=data.get("product_id"),
            quantity=to_decimal(data.get("quantity")),
            unit_price=to_decimal(data.get("unit_price")),
            tax_rate=to_decimal(data.get("tax_rate")),
        )

    @property
    def net_amount(self) -> Decimal:
        return self.quantity * self.unit_price

    @property
    def tax_amount(self) -> Decimal:
        return self.net_amount * self.tax_rate / HUNDRED


@dataclass(frozen=True)
class PricedLineItem:
    product_id: Any
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "quantity": str(self.quantity),
            "unit_price": str(self.unit_price),
            "tax_rate": str(self.tax_rate),
            "line_total": str(self.line_total),
        }


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    line_items: List[PricedLineItem]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subtotal": str(self.subtotal),
            "tax_amount": str(self.tax_amount),
            "discount_amount": str(self.discount_amount),
            "total_amount": str(self.total_amount),
            "line_items": [item.to_dict() for item in self.line_items],
        }


def _as_drafts(items: Iterable[LineItemDraft | Mapping[str, Any]]) -> List[LineItemDraft]:
    return [item if isinstance(item, LineItemDraft) else LineItemDraft.from_mapping(item) for item in items]


def validate_line_items(
    items: Sequence[LineItemDraft],
    *,
    require_positive_price: bool = False,
) -> List[str]:
    """Return every rule the items break, numbered from 1 in invoice order."""
    errors: List[str] = []
    for index, item in enumerate(items, start=1):
        if item.product_id is None or str(item.product_id).strip() == "":
            errors.append(f"Item {index}: product is required")
        if item.quantity <= 0:
            errors.append(f"Item {index}: quantity must be greater than 0")
        if require_positive_price and item.unit_price <= 0:
            errors.append(f"Item {index}: unit price must be greater than 0")
        elif item.unit_price < 0:
            errors.append(f"Item {index}: unit price cannot be negative")
        if item.tax_rate < 0:
            errors.append(f"Item {index}: tax rate cannot be negative")
        elif item.tax_rate > HUNDRED:
            errors.append(f"Item {index}: tax rate cannot exceed 100")
        if item.quantity > MAX_QUANTITY:
            errors.append(f"Item {index}: quantity cannot exceed {MAX_QUANTITY}")
        if item.unit_price > MAX_AMOUNT:
            errors.append(f"Item {index}: unit price cannot exceed {MAX_AMOUNT}")
    return errors


def line_total(item: LineItemDraft) -> Decimal:
    return quantize_money(item.net_amount * (1 + item.tax_rate / HUNDRED))


def calculate_invoice(
    items: Iterable[LineItemDraft | Mapping[str, Any]],
    discount_amount: Optional[Any] = None,
    *,
    require_positive_price: bool = False,
) -> InvoiceTotals:
    """
    Validate line items and compute invoice totals.

    Raises:
        InvoiceValidationError: listing every failing rule; nothing is computed.
            Amounts that are not numbers, or whose totals do not fit the
            stored money columns, are reported the same way.
    """
    try:
        drafts = _as_drafts(items)
        discount = to_decimal(discount_amount)
    except (TypeError, ValueError) as e:
        raise InvoiceValidationError(str(e)) from e

    errors = validate_line_items(drafts, require_positive_price=require_positive_price)
    if discount < 0:
        errors.append("Discount cannot be negative")
    elif discount > MAX_AMOUNT:
        errors.append(f"Discount cannot exceed {MAX_AMOUNT}")
    if errors:
        raise InvoiceValidationError(errors)

    try:
        subtotal = quantize_money(sum((item.net_amount for item in drafts), ZERO))
        tax_amount = quantize_money(sum((item.tax_amount for item in drafts), ZERO))
        discount = quantize_money(discount)
        priced = [
            PricedLineItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                tax_rate=item.tax_rate,
                line_total=line_total(item),
            )
            for item in drafts
        ]
    except ValueError as e:
        raise InvoiceValidationError(str(e)) from e

    total = subtotal + tax_amount - discount
    amounts = [subtotal, tax_amount, abs(total)] + [item.line_total for item in priced]
    if any(amount > MAX_AMOUNT for amount in amounts):
        raise InvoiceValidationError(f"Invoice amounts cannot exceed {MAX_AMOUNT}")

    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount,
        total_amount=total,
        line_items=priced,
    )
