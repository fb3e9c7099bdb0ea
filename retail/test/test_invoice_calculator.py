"""
Tests for invoice totals and line validation. Pure functions: no application needed.
"""
from decimal import Decimal

import pytest

from retail.business.errors import InvoiceValidationError
from retail.business.sales.invoice_calculator import LineItemDraft, calculate_invoice, line_total


def test_untaxed_items():
    totals = calculate_invoice(
        [{'product_id': 1, 'quantity': 2, 'unit_price': 85, 'tax_rate': 0},
         {'product_id': 2, 'quantity': 1, 'unit_price': 120, 'tax_rate': 0}],
        discount_amount=0,
    )
    assert totals.subtotal == Decimal('290.00')
    assert totals.tax_amount == Decimal('0.00')
    assert totals.total_amount == Decimal('290.00')
    assert [item.line_total for item in totals.line_items] == [Decimal('170.00'), Decimal('120.00')]


def test_tax_and_discount():
    totals = calculate_invoice([{'product_id': 1, 'quantity': 2, 'unit_price': 100, 'tax_rate': 18}], 50)
    assert totals.subtotal == Decimal('200.00')
    assert totals.tax_amount == Decimal('36.00')
    assert totals.discount_amount == Decimal('50.00')
    assert totals.total_amount == Decimal('186.00')
    assert totals.line_items[0].line_total == Decimal('236.00')


def test_empty_items_total_is_negative_discount():
    totals = calculate_invoice([], '25')
    assert totals.subtotal == Decimal('0.00')
    assert totals.tax_amount == Decimal('0.00')
    assert totals.total_amount == Decimal('-25.00')
    assert totals.line_items == []


def test_missing_tax_rate_means_untaxed():
    totals = calculate_invoice([{'product_id': 1, 'quantity': '1.5', 'unit_price': '40'}])
    assert totals.tax_amount == Decimal('0.00')
    assert totals.total_amount == Decimal('60.00')


def test_rounding_is_half_up_and_total_matches_parts():
    totals = calculate_invoice([{'product_id': 1, 'quantity': '3', 'unit_price': '0.335', 'tax_rate': '5'}])
    assert totals.subtotal == Decimal('1.01')
    assert totals.tax_amount == Decimal('0.05')
    assert totals.total_amount == totals.subtotal + totals.tax_amount - totals.discount_amount


def test_float_inputs_do_not_leak_binary_error():
    totals = calculate_invoice([{'product_id': 1, 'quantity': 3, 'unit_price': 0.1}])
    assert totals.subtotal == Decimal('0.30')


def test_every_failing_rule_is_reported():
    with pytest.raises(InvoiceValidationError) as exc_info:
        calculate_invoice(
            [{'product_id': None, 'quantity': 0, 'unit_price': 10},
             {'product_id': 2, 'quantity': 1, 'unit_price': -5, 'tax_rate': -1}],
            discount_amount=-3,
        )
    assert exc_info.value.errors == [
        "Item 1: product is required",
        "Item 1: quantity must be greater than 0",
        "Item 2: unit price cannot be negative",
        "Item 2: tax rate cannot be negative",
        "Discount cannot be negative",
    ]


def test_zero_price_allowed_unless_strict():
    items = [{'product_id': 1, 'quantity': 1, 'unit_price': 0}]
    assert calculate_invoice(items).total_amount == Decimal('0.00')
    with pytest.raises(InvoiceValidationError) as exc_info:
        calculate_invoice(items, require_positive_price=True)
    assert exc_info.value.errors == ["Item 1: unit price must be greater than 0"]


def test_line_total():
    draft = LineItemDraft(product_id=1, quantity=Decimal('2'), unit_price=Decimal('100'), tax_rate=Decimal('18'))
    assert line_total(draft) == Decimal('236.00')


def test_to_dict_uses_strings():
    data = calculate_invoice([{'product_id': 1, 'quantity': 2, 'unit_price': 100, 'tax_rate': 18}], 50).to_dict()
    assert data['total_amount'] == '186.00'
    assert data['line_items'][0]['line_total'] == '236.00'
    assert data['line_items'][0]['product_id'] == 1


def test_amounts_beyond_column_range_are_validation_errors():
    with pytest.raises(InvoiceValidationError) as exc_info:
        calculate_invoice([{'product_id': 1, 'quantity': Decimal('1e30'), 'unit_price': 1, 'tax_rate': 101}],
                          discount_amount='1e30')
    assert exc_info.value.errors == [
        "Item 1: tax rate cannot exceed 100",
        "Item 1: quantity cannot exceed 999999999.999",
        "Discount cannot exceed 9999999999.99",
    ]

    with pytest.raises(InvoiceValidationError) as exc_info:
        calculate_invoice([{'product_id': 1, 'quantity': '999999999', 'unit_price': '9999999999'}])
    assert exc_info.value.errors == ["Invoice amounts cannot exceed 9999999999.99"]


def test_non_numeric_input_is_a_validation_error():
    with pytest.raises(InvoiceValidationError):
        calculate_invoice([{'product_id': 1, 'quantity': 'NaN', 'unit_price': 1}])
    with pytest.raises(InvoiceValidationError):
        calculate_invoice([{'product_id': 1, 'quantity': 1, 'unit_price': 1}], discount_amount='ten')
