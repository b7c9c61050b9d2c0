import enum


class TransferErrorCode(str, enum.Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


class TransferError(Exception):
    """Expected, user-facing reason a transfer was refused."""

    code: TransferErrorCode

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class TransferValidationError(TransferError):
    code = TransferErrorCode.VALIDATION_ERROR

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("The given data was invalid.", errors)


class CardNotFound(TransferError):
    code = TransferErrorCode.CARD_NOT_FOUND

    def __init__(self, field: str, card_number: str):
        super().__init__(
            f"Card {card_number} was not found.",
            {field: [f"No card is registered with number {card_number}."]},
        )
        self.field = field
        self.card_number = card_number


class InsufficientFunds(TransferError):
    code = TransferErrorCode.INSUFFICIENT_FUNDS

    def __init__(self, balance, required):
        super().__init__("Not enough balance to cover amount and fee.")
        self.balance = balance
        self.required = required
