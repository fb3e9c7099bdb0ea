from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Mapping

from retail import db
from retail.business.errors import InvoiceValidationError
from retail.business.sales.invoice_calculator import LineItemDraft, calculate_invoice
from retail.data.catalog.product import Product
from retail.data.parties.customer import Customer
from retail.data.sales.invoice import Invoice
from retail.data.sales.invoice_item import InvoiceItem
from retail.logger import get_logger

logger = get_logger("retail_manager.business.sales.invoice_factory")


class InvoiceFactory:
    """
    Business factory for creating invoices (header + line items).

    - Validation and totals come from InvoiceCalculator
    - Session commit/rollback stays with the caller (routes/services)
    - Creating an invoice does not consume inventory batches
    """

    @staticmethod
    def generate_invoice_number(on: date | None = None) -> str:
        """INV-YYYYMMDD-NNNN, numbered per day."""
        on = on or datetime.utcnow().date()
        prefix = f"INV-{on.strftime('%Y%m%d')}-"
        seq = Invoice.query.filter(Invoice.invoice_number.like(f"{prefix}%")).count() + 1
        return f"{prefix}{seq:04d}"

    @staticmethod
    def _check_references(drafts: list[LineItemDraft], customer_id: int | None) -> list[str]:
        errors: list[str] = []

        if customer_id is not None:
            customer = db.session.get(Customer, customer_id)
            if customer is None or not customer.is_active:
                errors.append(f"Customer {customer_id} not found")

        product_ids = {d.product_id for d in drafts if d.product_id is not None}
        products = {}
        if product_ids:
            products = {p.id: p for p in Product.query.filter(Product.id.in_(product_ids)).all()}

        for index, draft in enumerate(drafts, start=1):
            product = products.get(draft.product_id)
            if product is None:
                errors.append(f"Item {index}: product {draft.product_id} not found")
            elif not product.is_active:
                errors.append(f"Item {index}: product {product.name} is inactive")
        return errors

    @staticmethod
    def create_invoice(
        *,
        items: Iterable[LineItemDraft | Mapping[str, Any]],
        created_by_id: int | None,
        customer_id: int | None = None,
        discount_amount: Any = None,
        notes: str | None = None,
        due_date: date | None = None,
        delivery_date: date | None = None,
        require_positive_price: bool = False,
    ) -> Invoice:
        """
        Validate, price and stage a new invoice with its items.

        Raises:
            InvoiceValidationError: for empty invoices, rule violations on any
                line, unknown products/customers or a discount above the
                invoice value
        """
        drafts = [i if isinstance(i, LineItemDraft) else LineItemDraft.from_mapping(i) for i in items]
        if not drafts:
            raise InvoiceValidationError("Invoice must contain at least one item")

        totals = calculate_invoice(drafts, discount_amount, require_positive_price=require_positive_price)

        errors = InvoiceFactory._check_references(drafts, customer_id)
        if totals.discount_amount > totals.subtotal + totals.tax_amount:
            errors.append("Discount cannot exceed the invoice value")
        if errors:
            raise InvoiceValidationError(errors)

        invoice = Invoice(
            invoice_number=InvoiceFactory.generate_invoice_number(),
            customer_id=customer_id,
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            discount_amount=totals.discount_amount,
            total_amount=totals.total_amount,
            status='draft',
            payment_status='pending',
            notes=(notes or '').strip() or None,
            due_date=due_date,
            delivery_date=delivery_date,
            created_by_id=created_by_id,
            updated_by_id=created_by_id,
        )
        for position, line in enumerate(totals.line_items):
            invoice.items.append(InvoiceItem(
                product_id=line.product_id,
                position=position,
                quantity=line.quantity,
                unit_price=line.unit_price,
                tax_rate=line.tax_rate,
                line_total=line.line_total,
                created_by_id=created_by_id,
                updated_by_id=created_by_id,
            ))

        db.session.add(invoice)
        db.session.flush()

        logger.info(
            f"Staged invoice {invoice.invoice_number} with {len(invoice.items)} items, "
            f"total {invoice.total_amount}"
        )
        return invoice
