#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point drift across repeated allocation math.
"""

from dataclasses import dataclass

from .currency import (
    cents_to_dollars,
    cents_to_dollars_str,
    dollars_to_cents,
    parse_dollars_to_cents,
    percent_of_cents,
    split_evenly,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Examples:
        >>> budget = Money.from_dollars("2,000.00")
        >>> str(budget)
        '$2000.00'

        >>> # Records store float dollars
        >>> Money.from_float(45.99).to_cents()
        4599
        >>> Money.from_cents(4599).to_float()
        45.99

        >>> # Splitting never loses a cent
        >>> [str(m) for m in Money.from_cents(1000).split(3)]
        ['$3.34', '$3.33', '$3.33']
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from dollar string like '$123.45' or integer dollars.

        Args:
            dollars: String like "$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_dollars_to_cents(dollars))

    @classmethod
    def from_float(cls, dollars: float | int) -> "Money":
        """
        Create Money from a float dollar value as found in persisted records.

        Rounds half-up to the nearest cent.
        """
        return cls(cents=dollars_to_cents(dollars))

    @classmethod
    def zero(cls) -> "Money":
        """Zero amount."""
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_float(self) -> float:
        """Get value as float dollars for persisted records."""
        return cents_to_dollars(self.cents)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def percent(self, percentage: float) -> "Money":
        """
        Get a percentage of this amount.

        Args:
            percentage: Percentage value (30.0 = 30%)

        Returns:
            New Money rounded half-up to the cent
        """
        return Money(cents=percent_of_cents(self.cents, percentage))

    def split(self, parts: int) -> list["Money"]:
        """
        Split into `parts` near-equal amounts that sum exactly to this amount.

        Returns an empty list when parts is zero.
        """
        return [Money(cents=c) for c in split_evenly(self.cents, parts)]

    def ratio_to(self, other: "Money") -> float:
        """
        Get this amount as a fraction of another.

        Raises:
            ZeroDivisionError: If other is zero
        """
        return self.cents / other.cents

    def is_positive(self) -> bool:
        """Check if amount is strictly greater than zero."""
        return self.cents > 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __radd__(self, other: object) -> "Money":
        """Support sum() over Money values."""
        if other == 0:
            return self
        if isinstance(other, Money):
            return Money(cents=other.cents + self.cents)
        return NotImplemented

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return f"${cents_to_dollars_str(self.cents)}"

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
