"""
Tests for the batch-to-stock aggregation. Pure functions: no application needed.
"""
from decimal import Decimal

import pytest

from retail.business.inventory.stock_aggregator import (
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    BatchRecord,
    ProductSnapshot,
    aggregate_stock,
    classify_stock,
)


def batch(product_id, remaining, name='Rice', unit='kg', price='85', min_level=None):
    product = {'name': name, 'unit': unit, 'selling_price': price}
    if min_level is not None:
        product['min_stock_level'] = min_level
    return {'product_id': product_id, 'remaining_quantity': remaining, 'product': product}


def test_one_summary_per_product_in_first_seen_order():
    summaries = aggregate_stock([
        batch(2, '3', name='Sugar'),
        batch(1, '10', name='Rice'),
        batch(2, '4', name='Sugar'),
    ])
    assert [s.product_id for s in summaries] == [2, 1]
    assert summaries[0].total_stock == Decimal('7')
    assert summaries[1].total_stock == Decimal('10')


def test_total_stock_is_conserved():
    batches = [batch(1, '2.5'), batch(2, '7', name='Dal'), batch(1, '0.5'), batch(3, '0', name='Oil')]
    summaries = aggregate_stock(batches)
    assert sum(s.total_stock for s in summaries) == Decimal('10.0')


def test_status_thresholds_with_minimum_ten():
    cases = {'0': OUT_OF_STOCK, '5': LOW_STOCK, '15': IN_STOCK, '10': LOW_STOCK}
    for remaining, expected in cases.items():
        [summary] = aggregate_stock([batch(1, remaining, min_level='10')])
        assert summary.status == expected, f"{remaining} units should be {expected}"


def test_without_minimum_only_zero_is_flagged():
    assert classify_stock(Decimal('0'), None) == OUT_OF_STOCK
    assert classify_stock(Decimal('1'), None) == IN_STOCK
    assert classify_stock(Decimal('-2'), Decimal('10')) == IN_STOCK


def test_first_batch_supplies_product_attributes():
    [summary] = aggregate_stock([
        batch(1, '1', name='Rice', price='85', min_level='5'),
        batch(1, '1', name='Rice (renamed)', price='90'),
    ])
    assert summary.product_name == 'Rice'
    assert summary.selling_price == Decimal('85')
    assert summary.min_stock_level == Decimal('5')
    assert summary.status == LOW_STOCK


def test_batches_without_product_are_skipped():
    summaries = aggregate_stock([
        {'product_id': 9, 'remaining_quantity': '4', 'product': None},
        batch(1, '2'),
    ])
    assert [s.product_id for s in summaries] == [1]


def test_incomplete_product_is_an_error_not_skipped():
    with pytest.raises(ValueError, match="missing name, unit, selling_price"):
        aggregate_stock([{'product_id': 9, 'remaining_quantity': '4', 'product': {}}])

    with pytest.raises(ValueError, match="missing selling_price"):
        BatchRecord.from_mapping({'product_id': 9, 'product': {'name': 'Rice', 'unit': 'kg'}})


def test_empty_input():
    assert aggregate_stock([]) == []


def test_recomputing_yields_identical_output():
    batches = [batch(1, '3', min_level='5'), batch(2, '20', name='Dal', min_level='5')]
    assert aggregate_stock(batches) == aggregate_stock(batches)


def test_accepts_batch_records_and_serializes():
    record = BatchRecord(1, Decimal('4'), ProductSnapshot('Rice', 'kg', Decimal('85.00'), Decimal('5')))
    [summary] = aggregate_stock([record])
    assert summary.to_dict() == {
        'product_id': 1,
        'product_name': 'Rice',
        'unit': 'kg',
        'total_stock': '4',
        'min_stock_level': '5',
        'selling_price': '85.00',
        'status': LOW_STOCK,
    }
