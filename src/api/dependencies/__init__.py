from fastapi import Request

from domain.store import FifoStore


def get_store(request: Request) -> FifoStore:
    store: FifoStore = request.app.state.store
    return store
