from __future__ import annotations

import logging

from .inventory import LotInventory
from .transactions import SellTransaction

logger = logging.getLogger(__name__)


class PendingQueue:
    """Sales waiting for inventory, oldest first."""

    def __init__(self) -> None:
        self._sales: list[SellTransaction] = []

    @property
    def sales(self) -> tuple[SellTransaction, ...]:
        return tuple(self._sales)

    def enqueue(self, sell: SellTransaction) -> None:
        self._sales.append(sell)

    def try_clear(self, inventory: LotInventory) -> list[SellTransaction]:
        """Fill whatever pending sales the inventory can now cover.

        Sales are tried in queue order and always as a whole. After every
        filled sale the scan starts again from the front, because an older sale
        skipped earlier may fit now. Stops after a pass that fills nothing.
        """
        cleared: list[SellTransaction] = []
        progressed = True
        while progressed:
            progressed = False
            for index, sale in enumerate(self._sales):
                if not inventory.match(sale):
                    continue
                del self._sales[index]
                cleared.append(sale)
                progressed = True
                break

        if cleared:
            logger.info(
                "Cleared %d pending sales (%s), %d still pending",
                len(cleared),
                ", ".join(sale.tx for sale in cleared),
                len(self._sales),
            )
        return cleared

    def __len__(self) -> int:
        return len(self._sales)
