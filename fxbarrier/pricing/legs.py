"""Priceable legs — a payoff or payment bound to a caller-supplied pricer.

Adapters only: present_value() delegates to the LegPricer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import final

from fxbarrier.core.money import CurrencyPair
from fxbarrier.instrument.barrier import PremiumPayment
from fxbarrier.instrument.payoffs import CashOrNothingPayoff, Payoff
from fxbarrier.pricing.protocols import LegPricer
from fxbarrier.pricing.replication import LegKind


@final
@dataclass(frozen=True, slots=True)
class PriceableLeg:
    """A vanilla or cash-or-nothing leg with a single European exercise date."""

    kind: LegKind
    payoff: Payoff
    exercise_date: date
    currency_pair: CurrencyPair
    pricer: LegPricer

    def present_value(self) -> Decimal:
        p = self.payoff
        if isinstance(p, CashOrNothingPayoff):
            return self.pricer.price_digital(
                self.currency_pair, self.exercise_date, p.trigger, p.cash, p.option_type,
            )
        return self.pricer.price_vanilla(
            self.currency_pair, self.exercise_date, p.strike, p.option_type,
        )

    def payoff_at(self, spot: Decimal) -> Decimal:
        return self.payoff.evaluate(spot)


@final
@dataclass(frozen=True, slots=True)
class PremiumLeg:
    """A cash premium valued in the quote currency of the pair."""

    premium: PremiumPayment
    currency_pair: CurrencyPair
    pricer: LegPricer
    configuration: str

    @property
    def pay_date(self) -> date:
        return self.premium.pay_date

    def present_value(self) -> Decimal:
        return self.pricer.price_payment(
            self.currency_pair, self.premium.amount, self.premium.pay_date, self.configuration,
        )
