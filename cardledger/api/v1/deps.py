from fastapi import Depends
from asyncpg import Connection

from cardledger.db.session import get_db_connection
from cardledger.repositories.card_repo import CardRepository
from cardledger.repositories.transaction_repo import TransactionRepository
from cardledger.repositories.user_repo import UserRepository
from cardledger.services.activity_service import ActivityReporter
from cardledger.services.transfer_service import TransferService


def get_card_repo(conn: Connection = Depends(get_db_connection)) -> CardRepository:
    return CardRepository(conn)

def get_transaction_repo(conn: Connection = Depends(get_db_connection)) -> TransactionRepository:
    return TransactionRepository(conn)

def get_user_repo(conn: Connection = Depends(get_db_connection)) -> UserRepository:
    return UserRepository(conn)


def get_transfer_service(
        conn: Connection = Depends(get_db_connection),
        card_repo: CardRepository = Depends(get_card_repo),
        tx_repo: TransactionRepository = Depends(get_transaction_repo),
) -> TransferService:
    return TransferService(conn, card_repo, tx_repo)


def get_activity_reporter(
        user_repo: UserRepository = Depends(get_user_repo),
        tx_repo: TransactionRepository = Depends(get_transaction_repo),
) -> ActivityReporter:
    return ActivityReporter(user_repo, tx_repo)
