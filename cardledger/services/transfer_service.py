# cardledger/services/transfer_service.py

import logging
from decimal import Decimal

from asyncpg import Connection

from cardledger.core.config import settings
from cardledger.core.exceptions import CardNotFound, InsufficientFunds, TransferError
from cardledger.repositories.card_repo import CardRepository
from cardledger.repositories.transaction_repo import TransactionRepository
from cardledger.schemas.transaction_schema import TransferResult
from cardledger.services.validators import TransferValidator, ValidatedTransfer

logger = logging.getLogger(__name__)


class TransferService:
    def __init__(
            self,
            conn: Connection,
            card_repo: CardRepository,
            tx_repo: TransactionRepository,
            validator: TransferValidator | None = None,
            fee: int = settings.TRANSFER_FEE,
    ):
        self.conn = conn
        self.card_repo = card_repo
        self.tx_repo = tx_repo
        self.validator = validator or TransferValidator()
        self.fee = fee

    def effective_amount(self, amount: int) -> int:
        return amount + self.fee

    async def transfer(self, source: str, destination: str, amount: str) -> TransferResult:
        """
        Debit ``amount`` plus the flat fee from the source card and log the transaction.

        Refusals (invalid input, unknown card, insufficient funds) come back as a
        failed result. Database errors propagate after the transaction rolls back.
        """
        try:
            data = self.validator.validate(source, destination, amount)
            tx_record = await self._execute(data)
        except InsufficientFunds as e:
            logger.warning("Transfer refused (%s): balance %s, required %s", e.code.value, e.balance, e.required)
            return TransferResult.failure(e)
        except CardNotFound as e:
            logger.warning("Transfer refused (%s): %s card %s", e.code.value, e.field, e.card_number)
            return TransferResult.failure(e)
        except TransferError as e:
            logger.warning("Transfer refused (%s): %s", e.code.value, e.message)
            return TransferResult.failure(e)

        logger.info(
            "Transfer %s accepted: card %s -> card %s, amount %s",
            tx_record["id"], tx_record["source_card_id"], tx_record["dest_card_id"], tx_record["amount"],
        )
        return TransferResult.success(tx_record["id"])

    async def _execute(self, data: ValidatedTransfer) -> dict:
        src = await self.card_repo.get_by_number(data.source)
        if src is None:
            raise CardNotFound("source", data.source)

        dst = await self.card_repo.get_by_number(data.destination)
        if dst is None:
            raise CardNotFound("destination", data.destination)

        total_debit = Decimal(self.effective_amount(data.amount))

        async with self.conn.transaction():
            locked_src = await self.card_repo.lock_by_id(src["id"])

            balance = Decimal(locked_src["balance"] or 0)
            if balance < total_debit:
                raise InsufficientFunds(balance, total_debit)

            await self.card_repo.change_balance(locked_src["id"], -total_debit)
            return await self.tx_repo.create_transaction(
                source_id=locked_src["id"],
                dest_id=dst["id"],
                amount=total_debit,
            )
