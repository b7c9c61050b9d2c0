# cardledger/services/activity_service.py

from datetime import datetime, timedelta, timezone
from typing import Optional

from cardledger.core.config import settings
from cardledger.repositories.transaction_repo import TransactionRepository
from cardledger.repositories.user_repo import UserRepository
from cardledger.schemas.transaction_schema import TransactionOut
from cardledger.schemas.user_schema import TopUserOut, UserOut


class ActivityReporter:
    """Leaderboard of users by transaction count in a trailing time window."""

    def __init__(
            self,
            user_repo: UserRepository,
            tx_repo: TransactionRepository,
            limit: int = settings.TOP_USERS_LIMIT,
            per_user: int = settings.TOP_USERS_TRANSACTIONS,
            window: timedelta = timedelta(minutes=settings.TOP_USERS_WINDOW_MINUTES),
    ):
        self.user_repo = user_repo
        self.tx_repo = tx_repo
        self.limit = limit
        self.per_user = per_user
        self.window = window

    async def top_users(self, now: Optional[datetime] = None) -> list[TopUserOut]:
        now = now or datetime.now(timezone.utc)
        since = now - self.window

        ranking = await self.tx_repo.top_user_counts(since, limit=self.limit)
        users = await self.user_repo.get_by_ids([row["user_id"] for row in ranking])

        result = []
        for row in ranking:
            user = users.get(row["user_id"])
            if user is None:
                continue
            txs = await self.tx_repo.transactions_for_user(user["id"], since, limit=self.per_user)
            result.append(TopUserOut(
                user=UserOut(**user),
                transaction_count=row["transaction_count"],
                transactions=[TransactionOut(**tx) for tx in txs],
            ))
        return result
