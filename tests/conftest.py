from typing import Generator

import pytest

from config import config
from domain.inventory import CursorMode, LotInventory
from domain.ledger import TransactionLedger
from domain.store import FifoStore
from tests.helpers.transactions import DEFAULT_TX_GEN


@pytest.fixture(autouse=True)
def _reset_default_tx_gen() -> None:
    DEFAULT_TX_GEN.reset()


@pytest.fixture(autouse=True)
def _reset_config_cache() -> Generator[None, None, None]:
    config.cache_clear()
    yield
    config.cache_clear()


@pytest.fixture(scope="function")
def ledger() -> TransactionLedger:
    return TransactionLedger()


@pytest.fixture(scope="function")
def inventory() -> LotInventory:
    return LotInventory()


@pytest.fixture(scope="function")
def literal_inventory() -> LotInventory:
    return LotInventory(cursor_mode=CursorMode.LITERAL)


@pytest.fixture(scope="function")
def store() -> FifoStore:
    return FifoStore()
