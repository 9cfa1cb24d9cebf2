"""Decimal context, refined numeric/string types, Money and CurrencyPair.

All leg and trade arithmetic runs under DECIMAL_CONTEXT: prec=28,
ROUND_HALF_EVEN, traps on InvalidOperation/DivisionByZero/Overflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import final

from fxbarrier.core.result import Err, Ok

DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


@final
@dataclass(frozen=True, slots=True)
class PositiveDecimal:
    """Decimal constrained to be > 0."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal) or not (self.value > 0):
            raise TypeError(f"PositiveDecimal requires Decimal > 0, got {self.value!r}")

    @staticmethod
    def parse(raw: Decimal) -> Ok[PositiveDecimal] | Err[str]:
        if not isinstance(raw, Decimal):
            return Err(f"PositiveDecimal requires Decimal, got {type(raw).__name__}")
        if not raw.is_finite() or raw <= 0:
            return Err(f"PositiveDecimal requires > 0, got {raw}")
        return Ok(PositiveDecimal(value=raw))


@final
@dataclass(frozen=True, slots=True)
class NonNegativeDecimal:
    """Decimal constrained to be >= 0."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal) or self.value < 0:
            raise TypeError(f"NonNegativeDecimal requires Decimal >= 0, got {self.value!r}")

    @staticmethod
    def parse(raw: Decimal) -> Ok[NonNegativeDecimal] | Err[str]:
        if not isinstance(raw, Decimal):
            return Err(f"NonNegativeDecimal requires Decimal, got {type(raw).__name__}")
        if not raw.is_finite() or raw < 0:
            return Err(f"NonNegativeDecimal requires >= 0, got {raw}")
        return Ok(NonNegativeDecimal(value=raw))


@final
@dataclass(frozen=True, slots=True)
class NonEmptyStr:
    """String constrained to be non-empty."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise TypeError("NonEmptyStr requires non-empty string")

    @staticmethod
    def parse(raw: str) -> Ok[NonEmptyStr] | Err[str]:
        if not raw:
            return Err("NonEmptyStr requires non-empty string")
        return Ok(NonEmptyStr(value=raw))


# ISO 4217 minor units for NPV rounding
_ISO4217_MINOR_UNITS: dict[str, int] = {
    "USD": 2, "EUR": 2, "GBP": 2, "CHF": 2, "CAD": 2, "AUD": 2, "SEK": 2,
    "NOK": 2, "DKK": 2, "NZD": 2, "HKD": 2, "SGD": 2, "ZAR": 2, "MXN": 2,
    "PLN": 2, "CZK": 2, "TRY": 2, "CNY": 2, "INR": 2, "BRL": 2,
    "HUF": 2, "JPY": 0, "KRW": 0,
    "BHD": 3, "KWD": 3, "OMR": 3,
}

VALID_CURRENCIES: frozenset[str] = frozenset(_ISO4217_MINOR_UNITS)


def validate_currency(code: str) -> bool:
    return code in VALID_CURRENCIES


@final
@dataclass(frozen=True, slots=True)
class Money:
    """Immutable amount with currency."""

    amount: Decimal
    currency: NonEmptyStr

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise TypeError(f"Money.amount must be finite Decimal, got {self.amount!r}")

    @staticmethod
    def create(amount: Decimal, currency: str) -> Ok[Money] | Err[str]:
        if not isinstance(amount, Decimal):
            return Err(f"Money.amount must be Decimal, got {type(amount).__name__}")
        if not amount.is_finite():
            return Err(f"Money.amount must be finite, got {amount}")
        match NonEmptyStr.parse(currency):
            case Err(e):
                return Err(f"Money.currency: {e}")
            case Ok(c):
                return Ok(Money(amount=amount, currency=c))

    def mul(self, factor: Decimal) -> Money:
        with localcontext(DECIMAL_CONTEXT):
            return Money(amount=self.amount * factor, currency=self.currency)

    def round_to_minor_unit(self) -> Money:
        """Quantize to the ISO 4217 minor unit. Unknown currencies get 2 places."""
        minor_units = _ISO4217_MINOR_UNITS.get(self.currency.value, 2)
        quantizer = Decimal(10) ** -minor_units
        with localcontext(DECIMAL_CONTEXT):
            rounded = self.amount.quantize(quantizer)
        return Money(amount=rounded, currency=self.currency)


@final
@dataclass(frozen=True, slots=True)
class CurrencyPair:
    """FX pair BASE/QUOTE. For an FX option: bought/sold, quoted in sold per bought."""

    base: NonEmptyStr
    quote: NonEmptyStr

    def __post_init__(self) -> None:
        if self.base.value == self.quote.value:
            raise TypeError(
                f"CurrencyPair base and quote must differ, both are '{self.base.value}'"
            )

    @staticmethod
    def of(base: str, quote: str) -> Ok[CurrencyPair] | Err[str]:
        if not validate_currency(base):
            return Err(f"Invalid base currency: {base!r}")
        if not validate_currency(quote):
            return Err(f"Invalid quote currency: {quote!r}")
        if base == quote:
            return Err(f"Base and quote must differ: {base}")
        return Ok(CurrencyPair(base=NonEmptyStr(base), quote=NonEmptyStr(quote)))

    @staticmethod
    def parse(raw: str) -> Ok[CurrencyPair] | Err[str]:
        """Parse 'BASE/QUOTE'."""
        parts = raw.split("/")
        if len(parts) != 2:
            return Err(f"CurrencyPair must be BASE/QUOTE, got '{raw}'")
        return CurrencyPair.of(parts[0].strip(), parts[1].strip())

    @property
    def value(self) -> str:
        return f"{self.base.value}/{self.quote.value}"
