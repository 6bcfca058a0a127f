from __future__ import annotations

from .transactions import Transaction, TransactionId


class StoreError(Exception):
    """Base class for errors raised by the FIFO store."""


class DuplicateTransactionIdError(StoreError):
    def __init__(self, tx: TransactionId) -> None:
        self.tx = tx
        super().__init__(f"Duplicated transaction id {tx}")


class TransactionLedger:
    """Append-only record of accepted transactions.

    Buy and sell ids share one namespace.
    """

    def __init__(self) -> None:
        self._transactions: dict[TransactionId, Transaction] = {}

    def add(self, transaction: Transaction) -> None:
        if transaction.tx in self._transactions:
            raise DuplicateTransactionIdError(transaction.tx)
        self._transactions[transaction.tx] = transaction

    def get(self, tx: TransactionId) -> Transaction | None:
        return self._transactions.get(tx)

    def list(self) -> list[Transaction]:
        return list(self._transactions.values())

    def __contains__(self, tx: object) -> bool:
        return tx in self._transactions

    def __len__(self) -> int:
        return len(self._transactions)
