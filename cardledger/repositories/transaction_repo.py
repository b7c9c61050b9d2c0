from datetime import datetime, timezone
from typing import Optional, List
from asyncpg import Connection


class TransactionRepository:
    """Repository for the append-only transactions log with asyncpg."""

    def __init__(self, conn: Connection):
        self.conn = conn

    # ------------------ Writes ------------------ #
    async def create_transaction(
        self,
        source_id: int,
        dest_id: int,
        amount,
        created_at: Optional[datetime] = None,
    ) -> dict:
        sql = """
            INSERT INTO transactions
            (source_card_id, dest_card_id, amount, created_at)
            VALUES ($1, $2, $3, $4)
            RETURNING *;
        """
        created_at = created_at or datetime.now(timezone.utc)
        rec = await self.conn.fetchrow(sql, source_id, dest_id, amount, created_at)
        if not rec:
            raise RuntimeError("Failed to insert transaction.")
        return dict(rec)

    # ------------------ Activity Queries ------------------ #
    async def top_user_counts(self, since: datetime, limit: int = 3) -> List[dict]:
        """Users ranked by transactions on their cards since ``since``; ties by user id."""
        sql = """
            SELECT
                u.id AS user_id,
                COUNT(t.id) AS transaction_count
            FROM users u
            LEFT JOIN accounts a ON a.user_id = u.id
            LEFT JOIN cards c ON c.account_id = a.id
            LEFT JOIN transactions t
                ON t.source_card_id = c.id
               AND t.created_at >= $1
            GROUP BY u.id
            ORDER BY transaction_count DESC, u.id ASC
            LIMIT $2;
        """
        rows = await self.conn.fetch(sql, since, limit)
        return [dict(r) for r in rows]

    async def transactions_for_user(self, user_id: int, since: datetime, limit: int = 10) -> List[dict]:
        sql = """
            SELECT
                t.*,
                sc.card_number AS source_card_number,
                dc.card_number AS dest_card_number
            FROM transactions t
            JOIN cards sc ON t.source_card_id = sc.id
            JOIN accounts a ON sc.account_id = a.id
            LEFT JOIN cards dc ON t.dest_card_id = dc.id
            WHERE a.user_id = $1
              AND t.created_at >= $2
            ORDER BY t.created_at DESC, t.id DESC
            LIMIT $3;
        """
        rows = await self.conn.fetch(sql, user_id, since, limit)
        return [dict(r) for r in rows]
