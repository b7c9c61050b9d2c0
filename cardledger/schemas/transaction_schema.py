from pydantic import BaseModel, Field
from decimal import Decimal
from datetime import datetime
from typing import Optional

from cardledger.core.exceptions import TransferErrorCode


class TransferIn(BaseModel):
    # raw form values; normalized and validated by TransferValidator
    source: str | int | float | None = None
    destination: str | int | float | None = None
    amount: str | int | float | None = None


class TransactionOut(BaseModel):
    id: int
    source_card_id: int
    dest_card_id: int
    amount: Decimal
    created_at: datetime
    source_card_number: Optional[str] = None
    dest_card_number: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class TransferResult(BaseModel):
    ok: bool
    error: Optional[TransferErrorCode] = None
    message: Optional[str] = None
    errors: dict[str, list[str]] = Field(default_factory=dict)
    transaction_id: Optional[int] = None

    @classmethod
    def success(cls, transaction_id: int | None = None) -> "TransferResult":
        return cls(ok=True, transaction_id=transaction_id)

    @classmethod
    def failure(cls, exc) -> "TransferResult":
        return cls(ok=False, error=exc.code, message=exc.message, errors=exc.errors)
