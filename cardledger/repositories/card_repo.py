from decimal import Decimal
from asyncpg import Connection
from typing import Optional


class CardRepository:
    """Repository for card lookups and balance changes with asyncpg."""

    def __init__(self, conn: Connection):
        self.conn = conn

    # ------------------ Retrieval Methods ------------------ #

    async def get_by_number(self, card_number: str) -> dict | None:
        sql = "SELECT * FROM cards WHERE card_number = $1;"
        record = await self.conn.fetchrow(sql, card_number)
        return dict(record) if record else None

    # ------------------ Update / Lock Methods ------------------ #

    async def lock_by_id(self, card_id: int) -> dict:
        sql = "SELECT * FROM cards WHERE id = $1 FOR UPDATE;"
        record = await self.conn.fetchrow(sql, card_id)
        if not record:
            raise ValueError(f"Card with id {card_id} not found for update")
        return dict(record)

    async def change_balance(self, card_id: int, amount) -> Optional[Decimal]:
        sql = "UPDATE cards SET balance = balance + $1 WHERE id = $2 RETURNING balance;"
        new_balance = await self.conn.fetchval(sql, amount, card_id)
        return Decimal(new_balance) if new_balance is not None else None
