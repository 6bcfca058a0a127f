from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from .transactions import BuyTransaction, Currency, SellTransaction, TransactionId, WireDecimal

logger = logging.getLogger(__name__)


class CursorMode(StrEnum):
    """How the matching cursor moves past a lot.

    EXHAUST: the cursor leaves a lot only once nothing remains in it, so every
    lot with positive remaining quantity is still reachable.
    LITERAL: the cursor leaves every visited lot, even a partially consumed one.
    Leftovers of such lots still count as available inventory but are never
    matched again.
    """

    EXHAUST = "exhaust"
    LITERAL = "literal"


class Attribution(BaseModel):
    """Part of a sale filled from one lot, at that lot's unit price."""

    model_config = ConfigDict(frozen=True)

    tx: TransactionId
    source_tx: TransactionId
    amount: WireDecimal
    unit_price: WireDecimal


@dataclass
class Lot:
    tx: TransactionId
    amount: Decimal
    currency: Currency
    price: Decimal
    unit_price: Decimal
    remaining: Decimal
    attributions: list[Attribution] = field(default_factory=list)

    @classmethod
    def from_buy(cls, buy: BuyTransaction) -> Lot:
        # A zero-amount buy has no meaningful unit price; it can never be consumed either.
        unit_price = buy.price / buy.amount if buy.amount != 0 else Decimal(0)
        return cls(
            tx=buy.tx,
            amount=buy.amount,
            currency=buy.currency,
            price=buy.price,
            unit_price=unit_price,
            remaining=buy.amount,
        )

    @property
    def attributed(self) -> Decimal:
        return sum((attribution.amount for attribution in self.attributions), start=Decimal(0))

    def cost_of(self, quantity: Decimal) -> Decimal:
        """Purchase cost of `quantity` units, multiplied before dividing to keep exact totals."""
        if self.amount == 0:
            return Decimal(0)
        return quantity * self.price / self.amount

    def consume(self, sell_tx: TransactionId, quantity: Decimal) -> None:
        attribution = Attribution(
            tx=sell_tx,
            source_tx=self.tx,
            amount=quantity,
            unit_price=self.unit_price,
        )
        self.attributions.append(attribution)
        self.remaining -= quantity


class LotInventory:
    """Purchase lots in arrival order, consumed first-in-first-out."""

    def __init__(self, *, cursor_mode: CursorMode = CursorMode.EXHAUST) -> None:
        self._lots: list[Lot] = []
        self._cursor = 0
        self._cursor_mode = cursor_mode

    @property
    def lots(self) -> tuple[Lot, ...]:
        return tuple(self._lots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cursor_mode(self) -> CursorMode:
        return self._cursor_mode

    def add_lot(self, buy: BuyTransaction) -> Lot:
        lot = Lot.from_buy(buy)
        self._lots.append(lot)
        return lot

    def total_remaining(self) -> Decimal:
        """Remaining quantity over all lots, including those behind the cursor."""
        return sum((lot.remaining for lot in self._lots), start=Decimal(0))

    def match(self, sell: SellTransaction) -> bool:
        """Attribute the whole sale to lots, oldest first.

        Returns False without touching any lot when total remaining inventory is
        smaller than the sale; the caller decides what to do with it.
        """
        if sell.amount > self.total_remaining():
            return False

        amount_left = sell.amount
        while amount_left > 0 and self._cursor < len(self._lots):
            lot = self._lots[self._cursor]
            take_quantity = min(lot.remaining, amount_left)

            if self._cursor_mode == CursorMode.LITERAL:
                lot.consume(sell.tx, take_quantity)
                amount_left -= take_quantity
                self._cursor += 1
                continue

            if take_quantity > 0:
                lot.consume(sell.tx, take_quantity)
                amount_left -= take_quantity
            if lot.remaining <= 0:
                self._cursor += 1

        if amount_left > 0:
            logger.warning(
                "Sale %s admitted but %s of %s left unattributed: remaining inventory is behind cursor=%d",
                sell.tx,
                amount_left,
                sell.amount,
                self._cursor,
            )
        return True
