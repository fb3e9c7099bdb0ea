"""
Tests for invoice creation, status transitions and payments.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from retail.business.errors import (
    InvalidStatusTransitionError,
    InvoiceValidationError,
    PaymentError,
    RecordNotFoundError,
)
from retail.business.sales.invoice_factory import InvoiceFactory
from retail.business.sales.payment_manager import PaymentManager
from retail.business.sales.status_manager import InvoiceStatusManager, InvoiceStatusValidator
from retail.data.inventory.inventory_batch import InventoryBatch
from retail.data.sales.invoice import Invoice
from retail.services.inventory.inventory_service import InventoryService


@pytest.fixture
def invoice(db, admin_user, make_product):
    product = make_product('Rice')
    inv = InvoiceFactory.create_invoice(
        items=[{'product_id': product.id, 'quantity': 2, 'unit_price': 100, 'tax_rate': 18}],
        discount_amount=50,
        created_by_id=admin_user.id,
    )
    db.session.commit()
    return inv


def test_create_invoice_stores_totals_and_items(db, admin_user, make_product, make_customer):
    rice = make_product('Rice')
    dal = make_product('Dal')
    customer = make_customer()

    invoice = InvoiceFactory.create_invoice(
        items=[
            {'product_id': rice.id, 'quantity': 2, 'unit_price': 85},
            {'product_id': dal.id, 'quantity': 1, 'unit_price': 120},
        ],
        customer_id=customer.id,
        notes='  deliver after 5pm ',
        created_by_id=admin_user.id,
    )
    db.session.commit()

    stored = db.session.get(Invoice, invoice.id)
    assert stored.subtotal == Decimal('290.00')
    assert stored.total_amount == Decimal('290.00')
    assert (stored.status, stored.payment_status) == ('draft', 'pending')
    assert stored.notes == 'deliver after 5pm'
    assert stored.customer_id == customer.id
    assert [(i.product_id, i.position, i.line_total) for i in stored.items] == [
        (rice.id, 0, Decimal('170.00')),
        (dal.id, 1, Decimal('120.00')),
    ]
    assert stored.invoice_number.startswith(f"INV-{datetime.utcnow():%Y%m%d}-")


def test_invoice_numbers_increase_per_day(invoice, db, admin_user):
    second = InvoiceFactory.create_invoice(
        items=[{'product_id': invoice.items[0].product_id, 'quantity': 1, 'unit_price': 10}],
        created_by_id=admin_user.id,
    )
    db.session.commit()
    assert invoice.invoice_number.endswith('-0001')
    assert second.invoice_number.endswith('-0002')
    assert InvoiceFactory.generate_invoice_number(date(2020, 1, 2)) == 'INV-20200102-0001'


def test_walk_in_invoice_with_tax_and_discount(invoice):
    assert invoice.is_walk_in
    assert invoice.subtotal == Decimal('200.00')
    assert invoice.tax_amount == Decimal('36.00')
    assert invoice.discount_amount == Decimal('50.00')
    assert invoice.total_amount == Decimal('186.00')


def test_sale_does_not_consume_stock(db, admin_user, make_product):
    rice = make_product('Rice')
    InventoryService.add_batch({'product_id': rice.id, 'quantity': '5', 'purchase_price': '60'}, admin_user.id)
    InvoiceFactory.create_invoice(
        items=[{'product_id': rice.id, 'quantity': 2, 'unit_price': 85}],
        created_by_id=admin_user.id,
    )
    db.session.commit()
    assert InventoryBatch.query.one().remaining_quantity == Decimal('5')


def test_empty_invoice_rejected(db, admin_user):
    with pytest.raises(InvoiceValidationError) as exc_info:
        InvoiceFactory.create_invoice(items=[], created_by_id=admin_user.id)
    assert exc_info.value.errors == ["Invoice must contain at least one item"]


def test_unknown_references_and_oversized_discount_rejected(db, admin_user, make_product):
    inactive = make_product('Old Stock', is_active=False)
    with pytest.raises(InvoiceValidationError) as exc_info:
        InvoiceFactory.create_invoice(
            items=[
                {'product_id': 999, 'quantity': 1, 'unit_price': 10},
                {'product_id': inactive.id, 'quantity': 1, 'unit_price': 10},
            ],
            customer_id=555,
            discount_amount=100,
            created_by_id=admin_user.id,
        )
    assert exc_info.value.errors == [
        "Customer 555 not found",
        "Item 1: product 999 not found",
        "Item 2: product Old Stock is inactive",
        "Discount cannot exceed the invoice value",
    ]
    assert Invoice.query.count() == 0


def test_status_transition_rules():
    assert InvoiceStatusValidator.can_transition('status', 'draft', 'pending')
    assert InvoiceStatusValidator.can_transition('status', 'pending', 'cancelled')
    assert InvoiceStatusValidator.can_transition('status', 'paid', 'paid')
    assert not InvoiceStatusValidator.can_transition('status', 'paid', 'draft')
    assert not InvoiceStatusValidator.can_transition('status', 'cancelled', 'pending')
    assert not InvoiceStatusValidator.can_transition('status', 'draft', 'shipped')
    assert InvoiceStatusValidator.can_transition('payment_status', 'overdue', 'partial')
    assert not InvoiceStatusValidator.can_transition('payment_status', 'paid', 'pending')


def test_update_status_paid_implies_payment_paid(invoice, db, admin_user):
    changes = InvoiceStatusManager().update_status(invoice.id, 'paid', updated_by_id=admin_user.id)
    db.session.commit()
    assert [(c.field, c.from_status, c.to_status) for c in changes] == [
        ('status', 'draft', 'paid'),
        ('payment_status', 'pending', 'paid'),
    ]
    with pytest.raises(InvalidStatusTransitionError):
        InvoiceStatusManager().update_status(invoice.id, 'pending')


def test_update_status_rejects_mismatched_payment_status(invoice, db):
    manager = InvoiceStatusManager()
    with pytest.raises(InvalidStatusTransitionError):
        manager.update_status(invoice.id, 'pending', 'paid')
    with pytest.raises(InvalidStatusTransitionError):
        manager.update_status(invoice.id, 'paid', 'partial')
    db.session.rollback()

    stored = db.session.get(Invoice, invoice.id)
    assert (stored.status, stored.payment_status) == ('draft', 'pending')

    manager.update_status(invoice.id, 'pending', 'partial')
    assert (stored.status, stored.payment_status) == ('pending', 'partial')


def test_update_status_unknown_invoice(db):
    with pytest.raises(RecordNotFoundError):
        InvoiceStatusManager.get_invoice(12345)


def test_mark_overdue(invoice, db):
    invoice.due_date = date(2024, 1, 31)
    db.session.commit()

    assert InvoiceStatusManager().mark_overdue(date(2024, 1, 31)) == []
    changes = InvoiceStatusManager().mark_overdue(date(2024, 2, 1))
    db.session.commit()
    assert [(c.invoice_id, c.to_status) for c in changes] == [(invoice.id, 'overdue')]
    assert db.session.get(Invoice, invoice.id).payment_status == 'overdue'


def test_partial_then_full_payment(invoice, db, admin_user):
    manager = PaymentManager()
    manager.record_payment(invoice.id, '86', created_by_id=admin_user.id)
    db.session.commit()
    assert invoice.payment_status == 'partial'
    assert invoice.status == 'draft'
    assert PaymentManager.balance_due(invoice) == Decimal('100.00')

    manager.record_payment(invoice.id, 100, payment_method='upi', created_by_id=admin_user.id)
    db.session.commit()
    assert (invoice.status, invoice.payment_status) == ('paid', 'paid')
    assert PaymentManager.amount_paid(invoice) == Decimal('186.00')
    assert len(invoice.payments) == 2


def test_payment_rejections(invoice, db):
    manager = PaymentManager()
    with pytest.raises(PaymentError):
        manager.record_payment(invoice.id, 0)
    with pytest.raises(PaymentError):
        manager.record_payment(invoice.id, '186.01')

    InvoiceStatusManager().update_status(invoice.id, 'cancelled')
    db.session.commit()
    with pytest.raises(PaymentError):
        manager.record_payment(invoice.id, 10)
