from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from domain.transactions import Transaction, TransactionAdapter

logger = logging.getLogger(__name__)


class TransactionFileError(ValueError):
    def __init__(self, path: Path, line_number: int, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: {reason}")


def load_transactions(path: Path) -> list[Transaction]:
    """Load wire transactions from a JSON lines file.

    Each line holds one object: `{"tx", "we_buy", "currency", "price"}` for a buy
    or `{"tx", "we_sell", "currency", "price"}` for a sale. Blank lines are skipped.
    Order of lines is the submission order.
    """
    transactions: list[Transaction] = []
    with path.open(encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                transactions.append(TransactionAdapter.validate_json(line))
            except ValidationError as err:
                raise TransactionFileError(path, line_number, str(err)) from err

    logger.info("Loaded %d transactions from %s", len(transactions), path)
    return transactions
