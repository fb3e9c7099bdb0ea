"""
Report Service

Sales figures over a half-open period [start, end). Cancelled invoices never
count towards sales. Aggregation runs in Python over Decimal values so the
figures match the stored invoice amounts to the cent on every backend.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import joinedload

from retail.business.core.money import ZERO, quantize_money, to_decimal
from retail.data.catalog.product import Product
from retail.data.parties.customer import Customer
from retail.data.sales.invoice import Invoice
from retail.data.sales.invoice_item import InvoiceItem
from retail.services.inventory.inventory_service import InventoryService
from retail.services.sales.sales_service import SalesService, day_bounds


@dataclass
class SalesSummary:
    start: datetime
    end: datetime
    invoice_count: int = 0
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total_sales: Decimal = ZERO
    by_payment_status: Dict[str, int] = field(default_factory=dict)

    @property
    def average_invoice_value(self) -> Decimal:
        if not self.invoice_count:
            return ZERO
        return quantize_money(self.total_sales / self.invoice_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'invoice_count': self.invoice_count,
            'subtotal': str(self.subtotal),
            'tax_amount': str(self.tax_amount),
            'discount_amount': str(self.discount_amount),
            'total_sales': str(self.total_sales),
            'average_invoice_value': str(self.average_invoice_value),
            'by_payment_status': dict(self.by_payment_status),
        }


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


class ReportService:

    @staticmethod
    def _invoices_between(start: datetime, end: datetime) -> List[Invoice]:
        return Invoice.query.filter(
            Invoice.created_at >= start,
            Invoice.created_at < end,
            Invoice.status != 'cancelled',
        ).all()

    @staticmethod
    def sales_summary(start, end) -> SalesSummary:
        start, end = _as_datetime(start), _as_datetime(end)
        summary = SalesSummary(start=start, end=end)
        for invoice in ReportService._invoices_between(start, end):
            summary.invoice_count += 1
            summary.subtotal += to_decimal(invoice.subtotal)
            summary.tax_amount += to_decimal(invoice.tax_amount)
            summary.discount_amount += to_decimal(invoice.discount_amount)
            summary.total_sales += to_decimal(invoice.total_amount)
            summary.by_payment_status[invoice.payment_status] = (
                summary.by_payment_status.get(invoice.payment_status, 0) + 1
            )
        return summary

    @staticmethod
    def daily_report(day: date) -> SalesSummary:
        return ReportService.sales_summary(*day_bounds(day))

    @staticmethod
    def monthly_report(year: int, month: int) -> SalesSummary:
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {month}")
        start = date(year, month, 1)
        end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        return ReportService.sales_summary(start, end)

    @staticmethod
    def top_products(start, end, limit: int = 5) -> List[Dict[str, Any]]:
        """Best sellers by quantity sold in the period, revenue as a tie-break."""
        start, end = _as_datetime(start), _as_datetime(end)
        items = InvoiceItem.query.join(Invoice).options(joinedload(InvoiceItem.product)).filter(
            Invoice.created_at >= start,
            Invoice.created_at < end,
            Invoice.status != 'cancelled',
        ).all()

        totals = OrderedDict()
        for item in items:
            entry = totals.setdefault(item.product_id, {
                'product_id': item.product_id,
                'product_name': item.product.name if item.product else None,
                'quantity_sold': ZERO,
                'revenue': ZERO,
            })
            entry['quantity_sold'] += to_decimal(item.quantity)
            entry['revenue'] += to_decimal(item.line_total)

        ranked = sorted(totals.values(), key=lambda e: (-e['quantity_sold'], -e['revenue'], e['product_id']))
        return [
            dict(entry, quantity_sold=str(entry['quantity_sold']), revenue=str(entry['revenue']))
            for entry in ranked[:max(limit, 0)]
        ]

    @staticmethod
    def dashboard(today: Optional[date] = None) -> Dict[str, Any]:
        today = today or datetime.utcnow().date()
        total_sales = sum(
            (to_decimal(inv.total_amount) for inv in Invoice.query.filter(Invoice.status != 'cancelled').all()),
            ZERO,
        )
        return {
            'total_sales': str(total_sales),
            'todays_revenue': str(SalesService.todays_revenue(today)),
            'todays_invoice_count': len(SalesService.todays_invoices(today)),
            'active_products': Product.query.filter_by(is_active=True).count(),
            'active_customers': Customer.query.filter_by(is_active=True).count(),
            'low_stock_count': len(InventoryService.low_stock_alerts()),
            'inventory_value': str(InventoryService.inventory_value()),
        }
