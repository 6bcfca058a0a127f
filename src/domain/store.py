from __future__ import annotations

import logging
import threading

from .inventory import CursorMode, LotInventory
from .ledger import TransactionLedger
from .pending import PendingQueue
from .summary import StoreSummary, SummaryCalculator
from .transactions import BuyTransaction, SellTransaction

logger = logging.getLogger(__name__)


class FifoStore:
    """In-memory FIFO cost-basis store.

    Owns the ledger, the lot inventory and the pending queue. Every public
    operation runs under one lock, so a store can be shared between threads.
    A rejected duplicate leaves the store untouched.
    """

    def __init__(self, *, cursor_mode: CursorMode = CursorMode.EXHAUST) -> None:
        self._lock = threading.RLock()
        self._ledger = TransactionLedger()
        self._inventory = LotInventory(cursor_mode=cursor_mode)
        self._pending = PendingQueue()
        self._calculator = SummaryCalculator(self._ledger)

    @property
    def ledger(self) -> TransactionLedger:
        return self._ledger

    @property
    def inventory(self) -> LotInventory:
        return self._inventory

    @property
    def pending(self) -> PendingQueue:
        return self._pending

    def submit_buy(self, buy: BuyTransaction) -> None:
        with self._lock:
            self._ledger.add(buy)
            lot = self._inventory.add_lot(buy)
            logger.info("Added lot %s: %s %s for %s", buy.tx, lot.amount, lot.currency, buy.price)
            self._pending.try_clear(self._inventory)

    def submit_sell(self, sell: SellTransaction) -> None:
        with self._lock:
            self._ledger.add(sell)
            if self._inventory.match(sell):
                logger.info("Matched sale %s: %s %s for %s", sell.tx, sell.amount, sell.currency, sell.price)
                return
            self._pending.enqueue(sell)
            logger.info(
                "Not enough inventory for sale %s (%s > %s), %d pending",
                sell.tx,
                sell.amount,
                self._inventory.total_remaining(),
                len(self._pending),
            )

    def get_summary(self) -> StoreSummary:
        with self._lock:
            return self._calculator.summarize(self._inventory.lots, self._pending.sales)
