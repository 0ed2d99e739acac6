"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(
    amount_str: str, decimal_separator: str = ".", thousands_separator: str = ","
) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats, given the statement's separators:
    - "123.45" / "123,45"
    - "$123.45", "12,50 €"
    - "-123.45"
    - "1,234.56" / "1 234,56" / "1.234,56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string
        decimal_separator: Character separating the integer and fractional parts
        thousands_separator: Character grouping thousands (may be empty)

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove thousands grouping, including the non-breaking spaces some banks export
    if thousands_separator:
        amount_str = amount_str.replace(thousands_separator, "")
    amount_str = re.sub(r"\s", "", amount_str)

    if decimal_separator != ".":
        if "." in amount_str:
            raise ValueError(
                f"Could not parse amount '{amount_str}': unexpected '.' "
                f"with decimal separator '{decimal_separator}'"
            )
        amount_str = amount_str.replace(decimal_separator, ".")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    if is_negative:
        amount = -amount
    return amount


def parse_optional_amount(
    amount_str: str, decimal_separator: str = ".", thousands_separator: str = ","
) -> Decimal:
    """Parse an amount that may be left blank; a blank cell means zero."""
    if amount_str is None or not amount_str.strip():
        return Decimal("0")
    return parse_amount(amount_str, decimal_separator, thousands_separator)
