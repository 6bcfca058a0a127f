from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence

from pydantic import BaseModel

from .inventory import Lot
from .ledger import StoreError, TransactionLedger
from .transactions import Currency, SellTransaction, TransactionId, WireDecimal


class MissingTransactionError(StoreError):
    """A sale has attributions but the ledger holds no such sale."""

    def __init__(self, tx: TransactionId) -> None:
        self.tx = tx
        super().__init__(f"Missing sell transaction {tx} in ledger")


class RealizedSale(BaseModel):
    tx: TransactionId
    currency: Currency
    result: WireDecimal


class StorageSummary(BaseModel):
    currency: Currency
    amount: WireDecimal
    equivalent: WireDecimal


class StoreSummary(BaseModel):
    transactions: list[RealizedSale]
    storage: list[StorageSummary]
    pending: list[SellTransaction]


class SummaryCalculator:
    """Derive realized results and remaining inventory from lots and the ledger."""

    def __init__(self, ledger: TransactionLedger) -> None:
        self._ledger = ledger

    def realized(self, lots: Iterable[Lot]) -> list[RealizedSale]:
        cost_basis: dict[TransactionId, Decimal] = {}
        for lot in lots:
            # Costs come from the lot total price, never from the rounded unit price.
            attributed: dict[TransactionId, Decimal] = {}
            for attribution in lot.attributions:
                attributed[attribution.tx] = attributed.get(attribution.tx, Decimal(0)) + attribution.amount
            for tx, quantity in attributed.items():
                cost_basis[tx] = cost_basis.get(tx, Decimal(0)) + lot.cost_of(quantity)

        results: list[RealizedSale] = []
        for tx, paid in cost_basis.items():
            sale = self._ledger.get(tx)
            if not isinstance(sale, SellTransaction):
                raise MissingTransactionError(tx)
            results.append(RealizedSale(tx=tx, currency=sale.currency, result=sale.price - paid))
        return results

    @staticmethod
    def storage(lots: Sequence[Lot]) -> list[StorageSummary]:
        if not lots:
            return []
        # All lots of one store share a currency; multi-currency storage is not supported.
        return [
            StorageSummary(
                currency=lots[-1].currency,
                amount=sum((lot.remaining for lot in lots), start=Decimal(0)),
                equivalent=sum((lot.cost_of(lot.remaining) for lot in lots), start=Decimal(0)),
            )
        ]

    def summarize(self, lots: Sequence[Lot], pending: Iterable[SellTransaction]) -> StoreSummary:
        return StoreSummary(
            transactions=self.realized(lots),
            storage=self.storage(lots),
            pending=list(pending),
        )
