from __future__ import annotations

import argparse
import logging
from pathlib import Path
from time import perf_counter
from typing import Sequence

from config import config
from domain.inventory import CursorMode
from domain.ledger import DuplicateTransactionIdError
from domain.store import FifoStore
from domain.summary import StoreSummary
from domain.transactions import BuyTransaction
from importers.transactions_file import load_transactions
from utils.store_summary import render_store_summary

logger = logging.getLogger(__name__)


def run(transactions_path: Path, *, cursor_mode: CursorMode) -> StoreSummary:
    store = FifoStore(cursor_mode=cursor_mode)

    logger.info("Loading transactions from %s", transactions_path)
    transactions = load_transactions(transactions_path)

    started = perf_counter()
    rejected = 0
    for transaction in transactions:
        try:
            if isinstance(transaction, BuyTransaction):
                store.submit_buy(transaction)
            else:
                store.submit_sell(transaction)
        except DuplicateTransactionIdError as err:
            rejected += 1
            logger.warning("Skipping transaction: %s", err)
    logger.info(
        "Replayed %d transactions (%d rejected) in %.2fs",
        len(transactions),
        rejected,
        perf_counter() - started,
    )

    return store.get_summary()


def main(argv: Sequence[str] | None = None) -> None:
    settings = config()
    parser = argparse.ArgumentParser(description="Replay buy/sell transactions through a FIFO store.")
    parser.add_argument("--transactions", type=Path, required=True, help="JSON lines file of wire transactions")
    parser.add_argument(
        "--cursor-mode",
        type=CursorMode,
        choices=list(CursorMode),
        default=settings.cursor_mode,
    )
    args = parser.parse_args(argv)
    summary = run(args.transactions, cursor_mode=args.cursor_mode)
    print(render_store_summary(summary))


if __name__ == "__main__":
    logging.basicConfig(level=config().log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    main()
