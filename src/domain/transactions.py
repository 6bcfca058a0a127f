from __future__ import annotations

from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Any, Literal, NewType, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, PlainSerializer, Tag, TypeAdapter

TransactionId = NewType("TransactionId", str)
Currency = NewType("Currency", str)

# Quantities stay Decimal in memory but go out as plain JSON numbers.
WireDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class TransactionKind(StrEnum):
    BUY = "BUY"
    SELL = "SELL"


class BuyTransaction(BaseModel):
    """We bought `amount` units for `price` in total (not per unit)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal[TransactionKind.BUY] = Field(default=TransactionKind.BUY, exclude=True)
    tx: TransactionId
    amount: WireDecimal = Field(alias="we_buy")
    currency: Currency
    price: WireDecimal


class SellTransaction(BaseModel):
    """We sold `amount` units for `price` in total (not per unit)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: Literal[TransactionKind.SELL] = Field(default=TransactionKind.SELL, exclude=True)
    tx: TransactionId
    amount: WireDecimal = Field(alias="we_sell")
    currency: Currency
    price: WireDecimal


def _transaction_kind(value: Any) -> str | None:
    """Pick the variant from an explicit `kind` or from the wire amount field."""
    if isinstance(value, dict):
        if "kind" in value:
            return str(value["kind"])
        if "we_buy" in value:
            return TransactionKind.BUY.value
        if "we_sell" in value:
            return TransactionKind.SELL.value
        return None
    kind = getattr(value, "kind", None)
    return kind.value if isinstance(kind, TransactionKind) else None


Transaction = Annotated[
    Union[
        Annotated[BuyTransaction, Tag(TransactionKind.BUY.value)],
        Annotated[SellTransaction, Tag(TransactionKind.SELL.value)],
    ],
    Discriminator(_transaction_kind),
]

TransactionAdapter: TypeAdapter[Transaction] = TypeAdapter(Transaction)
