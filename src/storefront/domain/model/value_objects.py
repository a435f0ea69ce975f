"""Value Objects shared across the domain.

Value Objects are immutable and compared by value.  Construction
validates, so an invalid price or quantity can never reach an order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import InvalidRequestError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Always held as a Decimal; ``Money.of`` quantizes input to cents so
    catalog prices carry currency precision.
    """

    amount: Decimal
    currency: str = "BRL"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidRequestError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}",
                field="amount",
            )
        if not self.amount.is_finite():
            raise InvalidRequestError(f"Invalid money amount: {self.amount}", field="amount")
        if self.amount < 0:
            raise InvalidRequestError(
                f"Money amount cannot be negative, got {self.amount}", field="amount"
            )

    @staticmethod
    def zero(currency: str = "BRL") -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = "BRL", field: str = "amount") -> Money:
        """Coerce *amount* to a cent-precision Decimal.

        Input that is not a finite number, or too large to hold cents,
        raises InvalidRequestError naming *field*.
        """
        try:
            value = Decimal(str(amount).strip())
            if value.is_finite():
                return Money(value.quantize(CENT, rounding=ROUND_HALF_UP), currency)
        except (InvalidOperation, ValueError) as exc:
            raise InvalidRequestError(
                f"Invalid money amount: {amount!r}", field=field
            ) from exc
        raise InvalidRequestError(f"Invalid money amount: {amount!r}", field=field)

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise InvalidRequestError(
                f"Cannot combine {self.currency} with {other.currency}", field="currency"
            )


@dataclass(frozen=True)
class Quantity:
    """A strictly positive integer count of units."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidRequestError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                field="quantity",
            )
        if self.value <= 0:
            raise InvalidRequestError("Quantity must be positive", field="quantity")

    def __str__(self) -> str:
        return str(self.value)
