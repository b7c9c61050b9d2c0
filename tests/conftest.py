import copy
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import pytest

from cardledger.services.transfer_service import TransferService

SOURCE = "4111111111111111"
DEST = "5555555555554444"
OTHER = "4242424242424242"


class Ledger:
    """In-memory stand-in for the users/accounts/cards/transactions tables."""

    def __init__(self):
        self.users: dict[int, dict] = {}
        self.accounts: dict[int, dict] = {}
        self.cards: dict[int, dict] = {}
        self.transactions: list[dict] = []

    def add_user(self, user_id: int, full_name: str = "Test User") -> dict:
        self.users[user_id] = {"id": user_id, "full_name": full_name, "phone_number": None}
        return self.users[user_id]

    def add_account(self, account_id: int, user_id: int) -> dict:
        self.accounts[account_id] = {"id": account_id, "user_id": user_id}
        return self.accounts[account_id]

    def add_card(self, card_id: int, card_number: str, balance: int, account_id: int = 1) -> dict:
        self.cards[card_id] = {
            "id": card_id,
            "card_number": card_number,
            "balance": balance,
            "account_id": account_id,
        }
        return self.cards[card_id]

    def add_transaction(self, source_id: int, dest_id: int, amount: int, created_at: datetime) -> dict:
        tx = {
            "id": len(self.transactions) + 1,
            "source_card_id": source_id,
            "dest_card_id": dest_id,
            "amount": amount,
            "created_at": created_at,
        }
        self.transactions.append(tx)
        return tx

    def owner_of(self, card_id: int) -> int:
        return self.accounts[self.cards[card_id]["account_id"]]["user_id"]


class FakeConnection:
    """Rolls the ledger back when the transaction block raises."""

    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.transactions_opened = 0

    @asynccontextmanager
    async def transaction(self):
        self.transactions_opened += 1
        cards = copy.deepcopy(self.ledger.cards)
        txs = copy.deepcopy(self.ledger.transactions)
        try:
            yield
        except BaseException:
            self.ledger.cards = cards
            self.ledger.transactions = txs
            raise


class InMemoryCardRepository:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger
        self.lookups: list[str] = []
        self.locked: list[int] = []

    async def get_by_number(self, card_number):
        self.lookups.append(card_number)
        for card in self.ledger.cards.values():
            if card["card_number"] == card_number:
                return dict(card)
        return None

    async def lock_by_id(self, card_id):
        self.locked.append(card_id)
        return dict(self.ledger.cards[card_id])

    async def change_balance(self, card_id, amount):
        self.ledger.cards[card_id]["balance"] += amount
        return self.ledger.cards[card_id]["balance"]


class InMemoryTransactionRepository:
    def __init__(self, ledger: Ledger, fail_on_create: bool = False):
        self.ledger = ledger
        self.fail_on_create = fail_on_create

    async def create_transaction(self, source_id, dest_id, amount, created_at=None):
        if self.fail_on_create:
            raise RuntimeError("connection lost")
        return dict(self.ledger.add_transaction(
            source_id, dest_id, amount, created_at or datetime.now(timezone.utc)
        ))

    async def top_user_counts(self, since, limit=3):
        counts = {user_id: 0 for user_id in self.ledger.users}
        for tx in self.ledger.transactions:
            if tx["created_at"] >= since:
                counts[self.ledger.owner_of(tx["source_card_id"])] += 1
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [{"user_id": uid, "transaction_count": n} for uid, n in ranked[:limit]]

    async def transactions_for_user(self, user_id, since, limit=10):
        txs = [
            dict(tx) for tx in self.ledger.transactions
            if tx["created_at"] >= since and self.ledger.owner_of(tx["source_card_id"]) == user_id
        ]
        txs.sort(key=lambda tx: (tx["created_at"], tx["id"]), reverse=True)
        return txs[:limit]


class InMemoryUserRepository:
    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    async def get_by_ids(self, user_ids):
        return {uid: dict(self.ledger.users[uid]) for uid in user_ids if uid in self.ledger.users}


@pytest.fixture
def ledger() -> Ledger:
    ledger = Ledger()
    ledger.add_user(1)
    ledger.add_account(1, user_id=1)
    ledger.add_card(1, SOURCE, balance=10_000)
    ledger.add_card(2, DEST, balance=0)
    return ledger


@pytest.fixture
def card_repo(ledger) -> InMemoryCardRepository:
    return InMemoryCardRepository(ledger)


@pytest.fixture
def tx_repo(ledger) -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository(ledger)


@pytest.fixture
def conn(ledger) -> FakeConnection:
    return FakeConnection(ledger)


@pytest.fixture
def transfer_service(conn, card_repo, tx_repo) -> TransferService:
    return TransferService(conn, card_repo, tx_repo)
