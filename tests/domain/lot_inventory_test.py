from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from domain.inventory import CursorMode, Lot, LotInventory
from domain.transactions import TransactionId
from tests.helpers.transactions import make_buy, make_sell


def _assert_conservation(inventory: LotInventory) -> None:
    for lot in inventory.lots:
        assert lot.remaining + lot.attributed == lot.amount


def test_add_lot_computes_unit_price(inventory: LotInventory) -> None:
    lot = inventory.add_lot(make_buy("2.0", "10.0", tx="t1"))

    assert lot.tx == "t1"
    assert lot.amount == Decimal("2.0")
    assert lot.remaining == Decimal("2.0")
    assert lot.unit_price == Decimal(5)
    assert lot.attributions == []
    assert inventory.lots == (lot,)
    assert inventory.total_remaining() == Decimal(2)


def test_zero_amount_lot_has_zero_unit_price() -> None:
    lot = Lot.from_buy(make_buy("0", "10.0"))

    assert lot.unit_price == Decimal(0)
    assert lot.remaining == Decimal(0)


def test_fifo_attribution_order(inventory: LotInventory) -> None:
    inventory.add_lot(make_buy("1.0", "4.0", tx="t1"))
    inventory.add_lot(make_buy("1.0", "4.5", tx="t2"))
    inventory.add_lot(make_buy("2.0", "10.0", tx="t3"))

    assert inventory.match(make_sell("2.5", "20.0", tx="s1")) is True

    lot_1, lot_2, lot_3 = inventory.lots
    assert [(a.source_tx, a.amount, a.unit_price) for a in lot_1.attributions] == [("t1", Decimal(1), Decimal(4))]
    assert [(a.source_tx, a.amount, a.unit_price) for a in lot_2.attributions] == [
        ("t2", Decimal(1), Decimal("4.5"))
    ]
    assert [(a.source_tx, a.amount, a.unit_price) for a in lot_3.attributions] == [
        ("t3", Decimal("0.5"), Decimal(5))
    ]
    assert all(a.tx == "s1" for lot in inventory.lots for a in lot.attributions)
    assert lot_3.remaining == Decimal("1.5")
    assert inventory.total_remaining() == Decimal("1.5")
    _assert_conservation(inventory)


def test_match_without_enough_inventory_changes_nothing(inventory: LotInventory) -> None:
    inventory.add_lot(make_buy("1.0", "4.0", tx="t1"))

    assert inventory.match(make_sell("2.0", "10.0")) is False

    (lot,) = inventory.lots
    assert lot.remaining == Decimal("1.0")
    assert lot.attributions == []
    assert inventory.cursor == 0


def test_match_on_empty_inventory(inventory: LotInventory) -> None:
    assert inventory.match(make_sell("0.1", "1.0")) is False
    assert inventory.lots == ()


def test_exact_fill_exhausts_lot(inventory: LotInventory) -> None:
    inventory.add_lot(make_buy("1.0", "4.0", tx="t1"))

    assert inventory.match(make_sell("1.0", "4.5")) is True

    assert inventory.lots[0].remaining == Decimal(0)
    assert inventory.cursor == 1
    _assert_conservation(inventory)


def test_exhaust_mode_keeps_partially_consumed_lot_reachable(inventory: LotInventory) -> None:
    inventory.add_lot(make_buy("2.0", "8.0", tx="t1"))
    inventory.add_lot(make_buy("1.0", "5.0", tx="t2"))

    assert inventory.match(make_sell("1.0", "6.0", tx="s1")) is True
    assert inventory.cursor == 0

    assert inventory.match(make_sell("2.0", "12.0", tx="s2")) is True

    lot_1, lot_2 = inventory.lots
    assert [(a.tx, a.amount) for a in lot_1.attributions] == [("s1", Decimal(1)), ("s2", Decimal(1))]
    assert [(a.tx, a.amount) for a in lot_2.attributions] == [("s2", Decimal(1))]
    assert inventory.total_remaining() == Decimal(0)
    assert inventory.cursor == 2
    _assert_conservation(inventory)


def test_literal_mode_skips_partially_consumed_lot(
    literal_inventory: LotInventory, caplog: pytest.LogCaptureFixture
) -> None:
    literal_inventory.add_lot(make_buy("2.0", "8.0", tx="t1"))
    literal_inventory.add_lot(make_buy("1.0", "5.0", tx="t2"))

    assert literal_inventory.match(make_sell("1.0", "6.0", tx="s1")) is True
    # The cursor moved on although t1 still holds one unit.
    assert literal_inventory.cursor == 1

    with caplog.at_level(logging.WARNING, logger="domain.inventory"):
        assert literal_inventory.match(make_sell("2.0", "12.0", tx="s2")) is True

    lot_1, lot_2 = literal_inventory.lots
    assert [(a.tx, a.amount) for a in lot_1.attributions] == [("s1", Decimal(1))]
    assert [(a.tx, a.amount) for a in lot_2.attributions] == [("s2", Decimal(1))]
    assert lot_1.remaining == Decimal(1)
    assert literal_inventory.total_remaining() == Decimal(1)
    assert literal_inventory.cursor == 2
    assert "s2" in caplog.text
    assert "left unattributed" in caplog.text
    _assert_conservation(literal_inventory)


def test_literal_mode_records_zero_attribution_for_empty_lot(literal_inventory: LotInventory) -> None:
    literal_inventory.add_lot(make_buy("0", "0", tx="t1"))
    literal_inventory.add_lot(make_buy("1.0", "4.0", tx="t2"))

    assert literal_inventory.match(make_sell("1.0", "5.0", tx="s1")) is True

    lot_1, lot_2 = literal_inventory.lots
    assert [(a.tx, a.amount) for a in lot_1.attributions] == [("s1", Decimal(0))]
    assert [(a.tx, a.amount) for a in lot_2.attributions] == [("s1", Decimal(1))]


def test_exhaust_mode_skips_empty_lot_without_attribution(inventory: LotInventory) -> None:
    inventory.add_lot(make_buy("0", "0", tx="t1"))
    inventory.add_lot(make_buy("1.0", "4.0", tx="t2"))

    assert inventory.match(make_sell("1.0", "5.0", tx="s1")) is True

    lot_1, lot_2 = inventory.lots
    assert lot_1.attributions == []
    assert [(a.tx, a.amount) for a in lot_2.attributions] == [("s1", Decimal(1))]


@pytest.mark.parametrize("cursor_mode", list(CursorMode))
def test_cursor_never_moves_back(cursor_mode: CursorMode) -> None:
    inventory = LotInventory(cursor_mode=cursor_mode)
    positions = [inventory.cursor]
    for amount, price in [("1.0", "4.0"), ("0.5", "2.0"), ("3.0", "9.0"), ("2.0", "10.0")]:
        inventory.add_lot(make_buy(amount, price))
    for amount in ["0.3", "0.7", "1.5", "0.2", "5.0", "1.0"]:
        inventory.match(make_sell(amount, "1.0"))
        positions.append(inventory.cursor)
        _assert_conservation(inventory)

    assert positions == sorted(positions)
    assert inventory.cursor_mode == cursor_mode


def test_consume_records_attribution_at_unit_price() -> None:
    lot = Lot.from_buy(make_buy("4.0", "10.0", tx="t1"))

    lot.consume(TransactionId("s1"), Decimal("1.5"))
    lot.consume(TransactionId("s2"), Decimal("0.5"))

    assert [(a.tx, a.source_tx, a.amount, a.unit_price) for a in lot.attributions] == [
        ("s1", "t1", Decimal("1.5"), Decimal("2.5")),
        ("s2", "t1", Decimal("0.5"), Decimal("2.5")),
    ]
    assert lot.remaining == Decimal(2)
    assert lot.attributed == Decimal(2)
    assert lot.cost_of(lot.remaining) == Decimal(5)
