"""Console formatting helpers."""

from decimal import Decimal


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_row(label: str, amount: Decimal, indent: int = 0) -> str:
    """Label padded to the statement column with a right-aligned amount."""
    indent_str = " " * (4 * indent)
    label_width = 50 - len(indent_str)
    return f"{indent_str}{label:<{label_width}} {format_amount(amount):>20}"
