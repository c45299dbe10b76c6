"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Any

ZERO = Decimal("0")


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Coerce a loosely typed numeric value to Decimal.

    Missing, non-numeric and non-finite values become ``default``. Signs are
    preserved; callers decide whether a negative amount is acceptable.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    if not amount.is_finite():
        return default
    return amount


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$123.45", "1,234.56" and "(123.45)" (negative).

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_journal_line(spec: str) -> dict[str, Any]:
    """Parse a ``CODE:DEBIT[:CREDIT]`` line specification.

    Empty debit or credit parts mean zero, so ``1110::50`` is a 50 credit.

    Raises:
        ValueError: If the specification is malformed
    """
    parts = [part.strip() for part in spec.split(":")]
    if len(parts) not in (2, 3) or not parts[0]:
        raise ValueError(
            f"Invalid line '{spec}'. Expected CODE:DEBIT or CODE:DEBIT:CREDIT"
        )
    debit = parse_amount(parts[1]) if parts[1] else ZERO
    credit = parse_amount(parts[2]) if len(parts) == 3 and parts[2] else ZERO
    return {"account_code": parts[0], "debit": debit, "credit": credit}
