from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from retail.business.core.money import ZERO, quantize_money, to_decimal
from retail.business.errors import PaymentError
from retail.business.sales.status_manager import InvoiceStatusManager
from retail.data.sales.invoice import Invoice
from retail.data.sales.payment import Payment
from retail.logger import get_logger

logger = get_logger("retail_manager.business.sales.payment_manager")


class PaymentManager:
    """
    Records payments against invoices and keeps payment status in step:
    partial while the amount paid is below the total, paid (invoice and
    payment status) once it reaches it.
    """

    def __init__(self, status_manager: InvoiceStatusManager | None = None):
        self.status_manager = status_manager or InvoiceStatusManager()

    @staticmethod
    def amount_paid(invoice: Invoice) -> Decimal:
        return sum((to_decimal(p.amount) for p in invoice.payments), ZERO)

    @staticmethod
    def balance_due(invoice: Invoice) -> Decimal:
        return to_decimal(invoice.total_amount) - PaymentManager.amount_paid(invoice)

    def record_payment(
        self,
        invoice_id: int,
        amount: Any,
        *,
        payment_method: str = "cash",
        reference_number: str | None = None,
        payment_date: datetime | None = None,
        notes: str | None = None,
        created_by_id: int | None = None,
    ) -> Payment:
        invoice = self.status_manager.get_invoice(invoice_id)
        amount = quantize_money(to_decimal(amount))

        if amount <= 0:
            raise PaymentError("Payment amount must be greater than 0")
        if invoice.status == "cancelled":
            raise PaymentError(f"Invoice {invoice.invoice_number} is cancelled")
        if invoice.payment_status == "paid":
            raise PaymentError(f"Invoice {invoice.invoice_number} is already paid")

        balance = self.balance_due(invoice)
        if amount > balance:
            raise PaymentError(f"Payment of {amount} exceeds the balance due of {balance}")

        payment = Payment(
            amount=amount,
            payment_method=payment_method,
            reference_number=reference_number,
            payment_date=payment_date or datetime.utcnow(),
            notes=notes,
            created_by_id=created_by_id,
            updated_by_id=created_by_id,
        )
        invoice.payments.append(payment)

        if amount == balance:
            self.status_manager.update_status(invoice.id, "paid", "paid", updated_by_id=created_by_id)
        else:
            self.status_manager.apply(invoice, "payment_status", "partial")

        logger.info(
            f"Recorded {payment_method} payment of {amount} on invoice {invoice.invoice_number} "
            f"({invoice.payment_status})"
        )
        return payment
