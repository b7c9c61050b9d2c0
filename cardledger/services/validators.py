# cardledger/services/validators.py

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping

from cardledger.core.config import settings
from cardledger.core.exceptions import TransferValidationError
from cardledger.utils.digits import to_english_digits
from cardledger.utils.luhn import luhn_checksum_ok


def _as_decimal(value: str) -> Decimal | None:
    try:
        number = Decimal(value)
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


class ValidationRule:
    """A single check on one field; returns the list of error messages."""

    # when True and the rule fails, the remaining rules of the field are skipped
    bail = False

    def check(self, value: str, fields: Mapping[str, str]) -> list[str]:
        raise NotImplementedError


class Required(ValidationRule):
    bail = True

    def __init__(self, label: str):
        self.label = label

    def check(self, value, fields):
        if not value:
            return [f"The {self.label} field is required."]
        return []


class ExactDigits(ValidationRule):
    def __init__(self, length: int, label: str):
        self.length = length
        self.label = label

    def check(self, value, fields):
        if len(value) != self.length or not (value.isascii() and value.isdigit()):
            return [f"The {self.label} must be exactly {self.length} digits."]
        return []


class Luhn(ValidationRule):
    def __init__(self, label: str):
        self.label = label

    def check(self, value, fields):
        if not luhn_checksum_ok(value):
            return [f"The {self.label} is not a valid card number."]
        return []


class DifferentFrom(ValidationRule):
    def __init__(self, other: str, label: str):
        self.other = other
        self.label = label

    def check(self, value, fields):
        if value and value == fields.get(self.other):
            return [f"The {self.label} must be different from the {self.other} card."]
        return []


class Numeric(ValidationRule):
    bail = True

    def check(self, value, fields):
        if _as_decimal(value) is None:
            return ["The amount entered is not valid."]
        return []


class WholeNumber(ValidationRule):
    def check(self, value, fields):
        number = _as_decimal(value)
        if number is not None and number != number.to_integral_value():
            return ["The amount must be a whole number."]
        return []


class MinValue(ValidationRule):
    def __init__(self, minimum: int):
        self.minimum = minimum

    def check(self, value, fields):
        number = _as_decimal(value)
        if number is not None and number < self.minimum:
            return [f"Amounts below {self.minimum:,} are not allowed."]
        return []


class MaxValue(ValidationRule):
    def __init__(self, maximum: int):
        self.maximum = maximum

    def check(self, value, fields):
        number = _as_decimal(value)
        if number is not None and number > self.maximum:
            return [f"Amounts above {self.maximum:,} are not allowed."]
        return []


@dataclass(frozen=True)
class ValidatedTransfer:
    source: str
    destination: str
    amount: int


class TransferValidator:
    def __init__(
            self,
            min_amount: int = settings.MIN_TRANSFER_AMOUNT,
            max_amount: int = settings.MAX_TRANSFER_AMOUNT,
            card_length: int = settings.CARD_NUMBER_LENGTH,
    ):
        self.rules: dict[str, list[ValidationRule]] = {
            "source": [
                Required("source card"),
                ExactDigits(card_length, "source card"),
                Luhn("source card"),
            ],
            "destination": [
                Required("destination card"),
                ExactDigits(card_length, "destination card"),
                Luhn("destination card"),
                DifferentFrom("source", "destination card"),
            ],
            "amount": [
                Required("amount"),
                Numeric(),
                WholeNumber(),
                MinValue(min_amount),
                MaxValue(max_amount),
            ],
        }

    def errors_for(self, fields: Mapping[str, str]) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}
        for field, rules in self.rules.items():
            value = fields.get(field, "")
            for rule in rules:
                messages = rule.check(value, fields)
                if messages:
                    errors.setdefault(field, []).extend(messages)
                    if rule.bail:
                        break
        return errors

    def validate(self, source: str, destination: str, amount: str) -> ValidatedTransfer:
        fields = {
            "source": to_english_digits(source),
            "destination": to_english_digits(destination),
            "amount": to_english_digits(amount),
        }
        errors = self.errors_for(fields)
        if errors:
            raise TransferValidationError(errors)

        return ValidatedTransfer(
            source=fields["source"],
            destination=fields["destination"],
            amount=int(Decimal(fields["amount"])),
        )
