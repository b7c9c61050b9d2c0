import unicodedata


def to_english_digits(value: str | None) -> str:
    """Replace localized decimal digits (Persian, Arabic-Indic, ...) with ASCII ones."""
    if value is None:
        return ""
    chars = []
    for ch in str(value).strip():
        digit = unicodedata.decimal(ch, None)
        chars.append(str(digit) if digit is not None else ch)
    return "".join(chars)
