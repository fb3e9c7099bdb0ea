"""
Sales Service

Invoice queries for listings, the invoice detail view and the day's figures.
Invoice creation, status changes and payments live in the business layer.
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import joinedload, selectinload

from retail.business.core.money import ZERO, to_decimal
from retail.business.errors import RecordNotFoundError
from retail.business.sales.status_manager import InvoiceStatusManager, StatusChange
from retail.data.sales.invoice import Invoice
from retail.data.sales.invoice_item import InvoiceItem


def day_bounds(day: date):
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class SalesService:

    @staticmethod
    def list_invoices(status: Optional[str] = None,
                      payment_status: Optional[str] = None,
                      customer_id: Optional[int] = None) -> List[Invoice]:
        query = Invoice.query.options(joinedload(Invoice.customer))
        if status:
            query = query.filter(Invoice.status == status)
        if payment_status:
            query = query.filter(Invoice.payment_status == payment_status)
        if customer_id is not None:
            query = query.filter(Invoice.customer_id == customer_id)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    @staticmethod
    def get_invoice(invoice_id: int) -> Invoice:
        invoice = Invoice.query.options(
            joinedload(Invoice.customer),
            selectinload(Invoice.items).joinedload(InvoiceItem.product),
            selectinload(Invoice.payments),
        ).filter(Invoice.id == invoice_id).first()
        if invoice is None:
            raise RecordNotFoundError("Invoice", invoice_id)
        return invoice

    @staticmethod
    def todays_invoices(today: Optional[date] = None) -> List[Invoice]:
        start, end = day_bounds(today or datetime.utcnow().date())
        return Invoice.query.filter(
            Invoice.created_at >= start,
            Invoice.created_at < end,
        ).order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    @staticmethod
    def todays_revenue(today: Optional[date] = None) -> Decimal:
        """Sum of today's invoice totals, cancelled invoices excluded."""
        return sum(
            (to_decimal(inv.total_amount) for inv in SalesService.todays_invoices(today) if inv.status != 'cancelled'),
            ZERO,
        )

    @staticmethod
    def mark_overdue(today: Optional[date] = None) -> List[StatusChange]:
        return InvoiceStatusManager().mark_overdue(today or datetime.utcnow().date())
