"""Leg pricer protocol — the engine's only outbound dependency.

A leg pricer turns one vanilla, digital or cash payment into a present value
in the quote (sold) currency of the pair. The engine never models prices
itself; hosts register pricers in a LegPricerRegistry.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Protocol, final, runtime_checkable

from fxbarrier.core.money import CurrencyPair, Money
from fxbarrier.instrument.payoffs import OptionType


class InstrumentKind(Enum):
    """Registry key for the kind of leg a pricer handles."""

    FX_OPTION = "FxOption"
    FX_DIGITAL_OPTION = "FxDigitalOption"
    CASH_PAYMENT = "CashPayment"


@runtime_checkable
class LegPricer(Protocol):
    """Deterministic pricer for the legs of a replicating portfolio.

    Implementations must be safe for concurrent use if trades are priced
    from several threads.
    """

    def price_vanilla(
        self, currency_pair: CurrencyPair, expiry: date,
        strike: Decimal, option_type: OptionType,
    ) -> Decimal: ...

    def price_digital(
        self, currency_pair: CurrencyPair, expiry: date,
        trigger: Decimal, cash: Decimal, option_type: OptionType,
    ) -> Decimal: ...

    def price_payment(
        self, currency_pair: CurrencyPair, payment: Money,
        pay_date: date, configuration: str,
    ) -> Decimal: ...


@final
class StubLegPricer:
    """Test double. Returns fixed values per leg shape.

    vanilla(strike, type) -> vanilla_values[(strike, type)] or default_vanilla
    digital(...) -> cash * digital_unit_value[type]
    payment(...) -> payment amount (undiscounted)
    """

    def __init__(
        self,
        vanilla_values: dict[tuple[Decimal, OptionType], Decimal] | None = None,
        default_vanilla: Decimal = Decimal("0"),
        digital_unit_value: dict[OptionType, Decimal] | None = None,
    ) -> None:
        self._vanilla_values = dict(vanilla_values or {})
        self._default_vanilla = default_vanilla
        self._digital_unit_value = dict(digital_unit_value or {})

    def price_vanilla(
        self, currency_pair: CurrencyPair, expiry: date,
        strike: Decimal, option_type: OptionType,
    ) -> Decimal:
        return self._vanilla_values.get((strike, option_type), self._default_vanilla)

    def price_digital(
        self, currency_pair: CurrencyPair, expiry: date,
        trigger: Decimal, cash: Decimal, option_type: OptionType,
    ) -> Decimal:
        return cash * self._digital_unit_value.get(option_type, Decimal("0"))

    def price_payment(
        self, currency_pair: CurrencyPair, payment: Money,
        pay_date: date, configuration: str,
    ) -> Decimal:
        return payment.amount
