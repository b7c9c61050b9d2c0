# cardledger/db/seed.py
import asyncio
import logging
import random
from datetime import datetime, timezone, timedelta
from faker import Faker
from tqdm import tqdm

from cardledger.core.config import settings
from cardledger.core.logging_config import setup_logging
from cardledger.db.session import connect_db_pool, get_pool, close_db_pool
from cardledger.utils.luhn import luhn_check_digit

logger = logging.getLogger(__name__)

fake = Faker("fa_IR")

NUM_USERS = 50
MIN_ACCOUNTS_PER_USER = 1
MAX_ACCOUNTS_PER_USER = 2
MIN_CARDS_PER_ACCOUNT = 1
MAX_CARDS_PER_ACCOUNT = 2
NUM_TRANSACTIONS = 5_000
BATCH_TX = 1000

CARD_PREFIXES = ["6037", "6274", "5892", "6104"]


async def insert_user(conn, full_name: str, phone: str):
    sql = """
    INSERT INTO users (full_name, phone_number)
    VALUES ($1, $2)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, full_name, phone)
    return rec["id"]


async def insert_account(conn, user_id: int):
    sql = "INSERT INTO accounts (user_id) VALUES ($1) RETURNING id;"
    rec = await conn.fetchrow(sql, user_id)
    return rec["id"]


async def insert_card(conn, account_id: int, card_number: str, balance: int):
    sql = """
    INSERT INTO cards (account_id, card_number, balance)
    VALUES ($1, $2, $3)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, account_id, card_number, balance)
    return rec["id"]


def generate_card_number() -> str:
    partial = random.choice(CARD_PREFIXES) + "".join(
        str(random.randint(0, 9)) for _ in range(settings.CARD_NUMBER_LENGTH - 5)
    )
    return partial + luhn_check_digit(partial)


def random_datetime_within_last_minutes(minutes: int) -> datetime:
    now = datetime.now(tz=timezone.utc)
    return now - timedelta(seconds=random.randint(0, minutes * 60))


async def seed():
    await connect_db_pool()
    pool = await get_pool()
    if pool is None:
        raise RuntimeError("Database pool could not be initialized")

    async with pool.acquire() as conn:
        logger.info("Creating users and accounts...")
        card_ids = []
        used_numbers = set()

        for _ in range(NUM_USERS):
            phone = f"09{random.randint(100000000, 999999999)}"
            uid = await insert_user(conn, fake.name(), phone)

            for _ in range(random.randint(MIN_ACCOUNTS_PER_USER, MAX_ACCOUNTS_PER_USER)):
                account_id = await insert_account(conn, uid)

                for _ in range(random.randint(MIN_CARDS_PER_ACCOUNT, MAX_CARDS_PER_ACCOUNT)):
                    card_number = generate_card_number()
                    while card_number in used_numbers:
                        card_number = generate_card_number()
                    used_numbers.add(card_number)

                    balance = random.randint(1_000_000, 50_000_000)
                    card_ids.append(await insert_card(conn, account_id, card_number, balance))

        if len(card_ids) < 2:
            raise RuntimeError("Not enough cards created; aborting seed")

        logger.info("Creating transactions...")
        tx_sql = """
        INSERT INTO transactions
        (source_card_id, dest_card_id, amount, created_at)
        VALUES ($1, $2, $3, $4)
        """
        tx_batch = []

        # spread over twice the leaderboard window so some rows fall outside it
        spread = settings.TOP_USERS_WINDOW_MINUTES * 2

        for _ in tqdm(range(NUM_TRANSACTIONS), desc="Generating transactions"):
            src, dst = random.sample(card_ids, 2)
            amount = random.randint(settings.MIN_TRANSFER_AMOUNT, 500_000) + settings.TRANSFER_FEE
            tx_batch.append((src, dst, amount, random_datetime_within_last_minutes(spread)))

            if len(tx_batch) >= BATCH_TX:
                await conn.executemany(tx_sql, tx_batch)
                tx_batch.clear()

        if tx_batch:
            await conn.executemany(tx_sql, tx_batch)

        logger.info("Seed finished.")

    await close_db_pool()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
