import logging
from contextlib import asynccontextmanager
from time import perf_counter
from typing import Annotated, AsyncGenerator, Awaitable, Callable

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status

from api.dependencies import get_store
from config import config
from domain.ledger import DuplicateTransactionIdError
from domain.store import FifoStore
from domain.summary import StoreSummary
from domain.transactions import BuyTransaction, SellTransaction, Transaction

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncGenerator[None, None]:
    settings = config()
    fastapi_app.state.store = FifoStore(cursor_mode=settings.cursor_mode)
    logger.info("Started FIFO store with cursor_mode=%s", settings.cursor_mode)
    yield


app = FastAPI(lifespan=lifespan)


@app.middleware("http")
async def log_process_time(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start_time = perf_counter()
    response = await call_next(request)
    process_time = perf_counter() - start_time
    logger.info("Request time: %s %s: %.4fs", request.method, request.url, process_time)
    return response


def _submit(store: FifoStore, transaction: Transaction) -> None:
    try:
        if isinstance(transaction, BuyTransaction):
            store.submit_buy(transaction)
        else:
            store.submit_sell(transaction)
    except DuplicateTransactionIdError as err:
        logger.warning("Rejected transaction: %s", err)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@app.post("/transactions/buy", status_code=status.HTTP_204_NO_CONTENT)
def submit_buy(buy: BuyTransaction, store: Annotated[FifoStore, Depends(get_store)]) -> None:
    _submit(store, buy)


@app.post("/transactions/sell", status_code=status.HTTP_204_NO_CONTENT)
def submit_sell(sell: SellTransaction, store: Annotated[FifoStore, Depends(get_store)]) -> None:
    _submit(store, sell)


@app.post("/transactions", status_code=status.HTTP_204_NO_CONTENT)
def submit_transaction(transaction: Transaction, store: Annotated[FifoStore, Depends(get_store)]) -> None:
    _submit(store, transaction)


@app.get("/summary")
def get_summary(store: Annotated[FifoStore, Depends(get_store)]) -> StoreSummary:
    return store.get_summary()
