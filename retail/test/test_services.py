"""
Tests for the catalogue, party, sales and report services.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from retail.business.errors import DomainValidationError, RecordNotFoundError
from retail.business.sales.invoice_factory import InvoiceFactory
from retail.business.sales.status_manager import InvoiceStatusManager
from retail.services.catalog.category_service import CategoryService
from retail.services.catalog.product_service import ProductService
from retail.services.inventory.inventory_service import InventoryService
from retail.services.parties.party_service import CustomerService, VendorService
from retail.services.reports.report_service import ReportService
from retail.services.sales.sales_service import SalesService


def sell(admin_user, product, quantity, unit_price, **kwargs):
    return InvoiceFactory.create_invoice(
        items=[{'product_id': product.id, 'quantity': quantity, 'unit_price': unit_price}],
        created_by_id=admin_user.id,
        **kwargs,
    )


def test_product_search_and_deactivate(db, admin_user, make_product):
    make_product('Basmati Rice', sku='RICE-01')
    dal = make_product('Toor Dal', barcode='8901234567890')

    assert [p.name for p in ProductService.list_active()] == ['Basmati Rice', 'Toor Dal']
    assert [p.name for p in ProductService.list_active('rice-0')] == ['Basmati Rice']
    assert [p.name for p in ProductService.list_active('8901')] == ['Toor Dal']

    ProductService.deactivate(dal.id, admin_user.id)
    db.session.commit()
    assert [p.name for p in ProductService.list_active()] == ['Basmati Rice']
    assert ProductService.get(dal.id).is_active is False


def test_product_uniqueness_and_category_checks(db, admin_user, make_product):
    make_product('Rice', sku='RICE-01')
    with pytest.raises(DomainValidationError) as exc_info:
        ProductService.create({'name': 'Rice 2', 'sku': 'RICE-01', 'category_id': 42}, admin_user.id)
    assert exc_info.value.errors == ["SKU 'RICE-01' already exists", "Category 42 not found"]


def test_product_update_keeps_stock_levels_consistent(db, admin_user, make_product):
    rice = make_product('Rice', min_stock_level=Decimal('10'))
    updated = ProductService.update(rice.id, {'selling_price': Decimal('90')}, admin_user.id)
    assert updated.selling_price == Decimal('90')
    with pytest.raises(DomainValidationError):
        ProductService.update(rice.id, {'max_stock_level': Decimal('5')}, admin_user.id)


def test_missing_records_raise_not_found(db):
    with pytest.raises(RecordNotFoundError):
        ProductService.get(404)
    with pytest.raises(RecordNotFoundError):
        CustomerService.get(404)
    with pytest.raises(RecordNotFoundError):
        SalesService.get_invoice(404)


def test_categories(db, admin_user):
    grains = CategoryService.create({'name': 'Grains'}, admin_user.id)
    CategoryService.create({'name': 'Basmati', 'parent_id': grains.id}, admin_user.id)
    db.session.commit()
    assert [c.name for c in CategoryService.list_active()] == ['Basmati', 'Grains']
    with pytest.raises(DomainValidationError):
        CategoryService.create({'name': 'Orphan', 'parent_id': 999}, admin_user.id)


def test_party_services(db, admin_user):
    CustomerService.create({'name': 'Zoya'}, admin_user.id)
    asha = CustomerService.create({'name': 'Asha', 'phone': '98450 00000'}, admin_user.id)
    VendorService.create({'name': 'Agro Traders'}, admin_user.id)
    db.session.commit()

    assert [c.name for c in CustomerService.list_active()] == ['Asha', 'Zoya']
    assert [c.name for c in CustomerService.list_active('zo')] == ['Zoya']
    assert [v.name for v in VendorService.list_active()] == ['Agro Traders']

    CustomerService.update(asha.id, {'is_active': False}, admin_user.id)
    db.session.commit()
    assert [c.name for c in CustomerService.list_active()] == ['Zoya']


def test_todays_invoices_and_revenue(db, admin_user, make_product):
    rice = make_product('Rice')
    sell(admin_user, rice, 2, 85)
    cancelled = sell(admin_user, rice, 1, 500)
    old = sell(admin_user, rice, 1, 40)
    old.created_at = datetime.utcnow() - timedelta(days=3)
    db.session.commit()
    InvoiceStatusManager().update_status(cancelled.id, 'cancelled')
    db.session.commit()

    today = datetime.utcnow().date()
    assert len(SalesService.todays_invoices(today)) == 2
    assert SalesService.todays_revenue(today) == Decimal('170.00')
    assert len(SalesService.list_invoices()) == 3
    assert [i.id for i in SalesService.list_invoices(status='cancelled')] == [cancelled.id]


def test_sales_service_mark_overdue(db, admin_user, make_product):
    rice = make_product('Rice')
    sell(admin_user, rice, 1, 10, due_date=date(2024, 3, 1))
    db.session.commit()
    assert len(SalesService.mark_overdue(date(2024, 3, 2))) == 1


def test_reports(db, admin_user, make_product, make_customer):
    rice = make_product('Rice', min_stock_level=Decimal('10'))
    dal = make_product('Dal')
    make_customer()
    InventoryService.add_batch({'product_id': rice.id, 'quantity': '4', 'purchase_price': '50'}, admin_user.id)

    march = sell(admin_user, rice, 3, 100)
    march_two = InvoiceFactory.create_invoice(
        items=[{'product_id': dal.id, 'quantity': 5, 'unit_price': 20},
               {'product_id': rice.id, 'quantity': 1, 'unit_price': 100}],
        discount_amount=10,
        created_by_id=admin_user.id,
    )
    april = sell(admin_user, dal, 1, 20)
    march.created_at = datetime(2024, 3, 5, 10, 0)
    march_two.created_at = datetime(2024, 3, 31, 23, 59)
    april.created_at = datetime(2024, 4, 1, 0, 0)
    db.session.commit()

    summary = ReportService.monthly_report(2024, 3)
    assert summary.invoice_count == 2
    assert summary.subtotal == Decimal('500.00')
    assert summary.discount_amount == Decimal('10.00')
    assert summary.total_sales == Decimal('490.00')
    assert summary.average_invoice_value == Decimal('245.00')
    assert summary.to_dict()['by_payment_status'] == {'pending': 2}

    assert ReportService.daily_report(date(2024, 4, 1)).total_sales == Decimal('20.00')
    assert ReportService.daily_report(date(2024, 4, 2)).invoice_count == 0

    top = ReportService.top_products(date(2024, 3, 1), date(2024, 4, 1), limit=5)
    assert [(p['product_name'], Decimal(p['quantity_sold']), Decimal(p['revenue'])) for p in top] == [
        ('Dal', Decimal('5'), Decimal('100')),
        ('Rice', Decimal('4'), Decimal('400')),
    ]
    assert len(ReportService.top_products(date(2024, 3, 1), date(2024, 4, 1), limit=1)) == 1

    dashboard = ReportService.dashboard(date(2024, 4, 1))
    assert dashboard['total_sales'] == '510.00'
    assert dashboard['active_products'] == 2
    assert dashboard['active_customers'] == 1
    assert dashboard['low_stock_count'] == 1
    assert dashboard['inventory_value'] == '200.00'


def test_monthly_report_rejects_bad_month():
    with pytest.raises(ValueError):
        ReportService.monthly_report(2024, 13)
