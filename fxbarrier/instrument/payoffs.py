"""Payoff primitives — vanilla and cash-or-nothing.

Pure value objects. The only behaviour is evaluation at a terminal price.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import TypeAlias, final

from fxbarrier.core.money import DECIMAL_CONTEXT

_ZERO = Decimal("0")


class OptionType(Enum):
    CALL = "Call"
    PUT = "Put"


@final
@dataclass(frozen=True, slots=True)
class VanillaPayoff:
    """max(S - K, 0) for a call, max(K - S, 0) for a put."""

    option_type: OptionType
    strike: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.strike, Decimal) or not self.strike.is_finite():
            raise TypeError(f"VanillaPayoff.strike must be finite Decimal, got {self.strike!r}")

    def evaluate(self, spot: Decimal) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            if self.option_type is OptionType.CALL:
                return max(spot - self.strike, _ZERO)
            return max(self.strike - spot, _ZERO)


@final
@dataclass(frozen=True, slots=True)
class CashOrNothingPayoff:
    """Pays cash if S > trigger (call) or S < trigger (put). Nothing at S == trigger."""

    option_type: OptionType
    trigger: Decimal
    cash: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.trigger, Decimal) or not self.trigger.is_finite():
            raise TypeError(
                f"CashOrNothingPayoff.trigger must be finite Decimal, got {self.trigger!r}"
            )
        if not isinstance(self.cash, Decimal) or not self.cash.is_finite():
            raise TypeError(f"CashOrNothingPayoff.cash must be finite Decimal, got {self.cash!r}")

    def evaluate(self, spot: Decimal) -> Decimal:
        if self.option_type is OptionType.CALL:
            return self.cash if spot > self.trigger else _ZERO
        return self.cash if spot < self.trigger else _ZERO


Payoff: TypeAlias = VanillaPayoff | CashOrNothingPayoff
