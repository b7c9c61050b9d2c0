from pydantic import BaseModel
from typing import Optional

from cardledger.schemas.transaction_schema import TransactionOut


class UserOut(BaseModel):
    id: int
    full_name: str
    phone_number: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class TopUserOut(BaseModel):
    """A leaderboard row: the user and their transactions in the trailing window."""
    user: UserOut
    transaction_count: int
    transactions: list[TransactionOut]
