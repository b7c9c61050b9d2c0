def _luhn_sum(digits: str, double_first: bool) -> int:
    total = 0
    double = double_first
    for ch in reversed(digits):
        d = int(ch)
        if double:
            d *= 2
            if d > 9:
                d -= 9
        total += d
        double = not double
    return total


def luhn_checksum_ok(number: str) -> bool:
    if not number or not number.isascii() or not number.isdigit():
        return False
    return _luhn_sum(number, double_first=False) % 10 == 0


def luhn_check_digit(partial: str) -> str:
    """Digit that makes ``partial + digit`` pass the Luhn check."""
    if not partial.isascii() or not partial.isdigit():
        raise ValueError("Luhn check digit needs a numeric prefix")
    return str((10 - _luhn_sum(partial, double_first=True) % 10) % 10)
