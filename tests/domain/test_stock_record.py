"""Unit tests for the StockRecord aggregate."""

import pytest

from storeops.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    NegativeQuantityError,
)
from storeops.domain.model.stock import DEFAULT_MINIMUM_THRESHOLD, StockRecord


class TestStockRecordReserve:

    def test_reserve_reduces_on_hand(self):
        rec = StockRecord(product_id="1", quantity_on_hand=100)
        rec.reserve(30)
        assert rec.quantity_on_hand == 70

    def test_reserve_everything(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        rec.reserve(10)
        assert rec.quantity_on_hand == 0
        assert rec.is_out_of_stock

    def test_reserve_more_than_on_hand_rejected(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        with pytest.raises(InsufficientStockError) as info:
            rec.reserve(11)
        assert (info.value.product_id, info.value.requested, info.value.available) == ("1", 11, 10)
        assert rec.quantity_on_hand == 10

    def test_reserve_zero_rejected(self):
        rec = StockRecord(product_id="1", quantity_on_hand=100)
        with pytest.raises(InvalidQuantityError, match="positive"):
            rec.reserve(0)

    def test_reserve_updates_timestamp(self):
        rec = StockRecord(product_id="1", quantity_on_hand=5)
        before = rec.last_updated
        rec.reserve(1)
        assert rec.last_updated >= before


class TestStockRecordRelease:

    def test_release_increases_on_hand(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        rec.release(5)
        assert rec.quantity_on_hand == 15

    def test_release_has_no_upper_bound(self):
        rec = StockRecord(product_id="1", quantity_on_hand=0)
        rec.release(1_000)
        assert rec.quantity_on_hand == 1_000

    def test_release_negative_rejected(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        with pytest.raises(InvalidQuantityError):
            rec.release(-2)
        assert rec.quantity_on_hand == 10


class TestStockRecordSet:

    def test_set_quantity(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        rec.set_quantity(3)
        assert rec.quantity_on_hand == 3

    def test_set_negative_rejected(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        with pytest.raises(NegativeQuantityError):
            rec.set_quantity(-1)
        assert rec.quantity_on_hand == 10

    @pytest.mark.parametrize("value", [True, 2.5, "3"])
    def test_set_non_integer_rejected(self, value):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        with pytest.raises(InvalidQuantityError, match="must be an integer"):
            rec.set_quantity(value)
        with pytest.raises(InvalidQuantityError):
            rec.set_minimum_threshold(value)
        assert (rec.quantity_on_hand, rec.minimum_threshold) == (10, DEFAULT_MINIMUM_THRESHOLD)

    def test_negative_threshold_rejected(self):
        rec = StockRecord(product_id="1", quantity_on_hand=10)
        with pytest.raises(NegativeQuantityError):
            rec.set_minimum_threshold(-1)

    def test_cannot_construct_negative_record(self):
        with pytest.raises(NegativeQuantityError):
            StockRecord(product_id="1", quantity_on_hand=-1)

    def test_cannot_construct_fractional_record(self):
        with pytest.raises(InvalidQuantityError):
            StockRecord(product_id="1", quantity_on_hand=1.5)


class TestStockRecordStatus:

    def test_default_threshold(self):
        assert StockRecord(product_id="1", quantity_on_hand=1).minimum_threshold == DEFAULT_MINIMUM_THRESHOLD

    def test_low_stock_and_units_needed(self):
        rec = StockRecord(product_id="A", quantity_on_hand=5, minimum_threshold=10)
        assert rec.is_low_stock
        assert rec.units_needed == 5

    def test_at_threshold_is_not_low(self):
        rec = StockRecord(product_id="A", quantity_on_hand=10, minimum_threshold=10)
        assert not rec.is_low_stock
        assert rec.units_needed == 0

    @pytest.mark.parametrize(
        "on_hand, expected",
        [(0, "Out of Stock"), (3, "Low Stock (3)"), (50, "In Stock (50)")],
    )
    def test_status_label(self, on_hand, expected):
        rec = StockRecord(product_id="1", quantity_on_hand=on_hand, minimum_threshold=5)
        assert rec.status_label == expected
