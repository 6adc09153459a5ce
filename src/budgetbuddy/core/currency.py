#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amounts inside Budget Buddy are integer cents. Floating-point dollars only
appear at the edges: in persisted records and in user input.

Currency Systems:
- Internal calculations use cents: 100 cents = $1.00
- Persisted records use float dollars: 12.34
- Display uses dollar strings: "$12.34"

Key Principles:
- Never use floating-point arithmetic for allocation math
- Convert float dollars through Decimal with half-up rounding
- Split totals so that the parts always sum back to the whole
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse dollar string to cents using integer arithmetic only.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Raises:
        ValueError: If the string is not a dollar amount

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$1,234.56") -> 123456
        parse_dollars_to_cents("12,5") -> 1250
    """
    clean = dollars_str.replace("$", "").strip()

    # A single comma with no dot is a decimal separator ("12,50")
    if "," in clean and "." not in clean and clean.count(",") == 1 and len(clean.split(",")[1]) <= 2:
        clean = clean.replace(",", ".")
    else:
        clean = clean.replace(",", "")

    if not clean:
        return 0

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        whole, _, fraction = clean.partition(".")
        if not (whole or fraction) or (whole and not whole.isdigit()) or (fraction and not fraction.isdigit()):
            raise ValueError(f"Invalid dollar amount: {dollars_str!r}")
        dollars = int(whole) if whole else 0
        # Pad to 2 digits, truncate beyond 2
        cents = int(fraction.ljust(2, "0")[:2])
        total = dollars * 100 + cents
    else:
        if not clean.isdigit():
            raise ValueError(f"Invalid dollar amount: {dollars_str!r}")
        total = int(clean) * 100

    return -total if is_negative else total


def dollars_to_cents(dollars: float | int | str) -> int:
    """
    Convert a float dollar value (as stored in records) to cents.

    Goes through Decimal(str(value)) so that 0.1 + 0.2 style noise never
    leaks into the cent value. Rounds half-up.

    Raises:
        ValueError: If the value is not numeric
    """
    try:
        decimal_amount = Decimal(str(dollars))
    except InvalidOperation as e:
        raise ValueError(f"Invalid dollar amount: {dollars!r}") from e
    return int((decimal_amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> float:
    """Convert cents to the float dollar value used in persisted records."""
    return float(Decimal(cents) * _CENT)


def percent_of_cents(cents: int, percentage: float) -> int:
    """
    Calculate a percentage of an amount in cents, rounded half-up.

    Args:
        cents: Base amount in cents
        percentage: Percentage (50.0 = half)

    Returns:
        Amount in cents
    """
    share = Decimal(cents) * Decimal(str(percentage)) / Decimal(100)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def split_evenly(total: int, count: int) -> list[int]:
    """
    Split an amount in cents into `count` near-equal parts.

    Parts differ by at most one cent and always sum exactly to `total`.
    Leftover cents go to the first parts.

    Examples:
        split_evenly(1000, 3) -> [334, 333, 333]
        split_evenly(-100, 3) -> [-33, -33, -34]
    """
    if count <= 0:
        return []

    base, remainder = divmod(total, count)
    return [base + 1 if i < remainder else base for i in range(count)]


def validate_sum_equals_total(amounts: list[int], total: int, tolerance: int = 0) -> bool:
    """
    Validate that amounts in cents sum to a total.

    Args:
        amounts: Amounts in cents
        total: Expected total in cents
        tolerance: Allowed difference in cents (default: 0 for exact match)

    Returns:
        True if sum matches within tolerance
    """
    return abs(sum(amounts) - total) <= tolerance


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix."""
    return f"${cents_to_dollars_str(cents)}"
