from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from retail import db
from retail.business.errors import InvalidStatusTransitionError, RecordNotFoundError
from retail.data.sales.invoice import INVOICE_STATUSES, PAYMENT_STATUSES, Invoice
from retail.logger import get_logger

logger = get_logger("retail_manager.business.sales.status_manager")


class InvoiceStatusValidator:
    """
    Centralized transition rules for invoice ``status`` and ``payment_status``.

    ``paid`` and ``cancelled`` are terminal for the invoice status. A paid
    payment status is terminal too.
    """

    _NEXT = {
        ("status", "draft"): {"pending", "paid", "cancelled"},
        ("status", "pending"): {"paid", "cancelled"},
        ("status", "paid"): set(),
        ("status", "cancelled"): set(),
        ("payment_status", "pending"): {"partial", "paid", "overdue"},
        ("payment_status", "partial"): {"paid", "overdue"},
        ("payment_status", "overdue"): {"partial", "paid"},
        ("payment_status", "paid"): set(),
    }

    _KNOWN = {"status": set(INVOICE_STATUSES), "payment_status": set(PAYMENT_STATUSES)}

    @classmethod
    def can_transition(cls, field: str, current_status: str, new_status: str) -> bool:
        if new_status not in cls._KNOWN[field]:
            return False
        if current_status == new_status:
            return True
        return new_status in cls._NEXT.get((field, current_status), set())


@dataclass(frozen=True)
class StatusChange:
    invoice_id: int
    field: str
    from_status: str | None
    to_status: str


class InvoiceStatusManager:
    """Applies validated status changes to invoices. The caller commits."""

    @staticmethod
    def get_invoice(invoice_id: int) -> Invoice:
        invoice = db.session.get(Invoice, invoice_id)
        if invoice is None:
            raise RecordNotFoundError("Invoice", invoice_id)
        return invoice

    @staticmethod
    def apply(invoice: Invoice, field: str, new_status: str) -> StatusChange:
        old = getattr(invoice, field)
        if not InvoiceStatusValidator.can_transition(field, old, new_status):
            raise InvalidStatusTransitionError(
                f"Invalid {field} transition for invoice {invoice.invoice_number}: {old} -> {new_status}"
            )
        setattr(invoice, field, new_status)
        return StatusChange(invoice.id, field, old, new_status)

    def update_status(
        self,
        invoice_id: int,
        status: str,
        payment_status: str | None = None,
        *,
        updated_by_id: int | None = None,
    ) -> list[StatusChange]:
        """
        Set the invoice status and optionally its payment status.

        Marking an invoice paid without naming a payment status also marks the
        payment status paid. The two must agree: a paid invoice has a paid
        payment status and the other way round. Marking an invoice paid here
        settles it manually, whatever the recorded payments add up to.
        """
        invoice = self.get_invoice(invoice_id)
        if status == "paid" and payment_status is None:
            payment_status = "paid"

        resulting_payment_status = payment_status or invoice.payment_status
        if (status == "paid") != (resulting_payment_status == "paid"):
            raise InvalidStatusTransitionError(
                f"Invoice {invoice.invoice_number} cannot be {status} with payment status "
                f"{resulting_payment_status}: an invoice is paid exactly when its payment is"
            )

        changes = [self.apply(invoice, "status", status)]
        if payment_status is not None:
            changes.append(self.apply(invoice, "payment_status", payment_status))

        invoice.touch(updated_by_id)
        logger.info(f"Invoice {invoice.invoice_number} status -> {invoice.status}/{invoice.payment_status}")
        return changes

    def mark_overdue(self, today: date) -> list[StatusChange]:
        """Flag open invoices whose due date has passed and that are not fully paid."""
        candidates = Invoice.query.filter(
            Invoice.due_date.isnot(None),
            Invoice.due_date < today,
            Invoice.status.in_(("draft", "pending")),
            Invoice.payment_status.in_(("pending", "partial")),
        ).all()

        changes = [self.apply(invoice, "payment_status", "overdue") for invoice in candidates]
        if changes:
            logger.info(f"Marked {len(changes)} invoices overdue as of {today.isoformat()}")
        return changes
