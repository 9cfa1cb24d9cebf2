"""Composite assembly — signed legs, trade multiplier, premium legs.

CompositeInstrument is the unscaled replicating portfolio. BarrierOptionInstrument
scales it by bought_amount * bsInd and carries the premium legs with their
own multipliers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, localcontext
from typing import final

from fxbarrier.core.errors import ConfigurationError
from fxbarrier.core.money import DECIMAL_CONTEXT, CurrencyPair
from fxbarrier.core.result import Err, Ok
from fxbarrier.instrument.barrier import LongShort
from fxbarrier.pricing.legs import PremiumLeg, PriceableLeg
from fxbarrier.pricing.protocols import InstrumentKind
from fxbarrier.pricing.registry import LegPricerRegistry
from fxbarrier.pricing.replication import Replication

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


@final
@dataclass(frozen=True, slots=True)
class CompositeInstrument:
    """Ordered (leg, sign) pairs. PV = sum of sign * leg PV."""

    components: tuple[tuple[PriceableLeg, int], ...] = ()

    def __post_init__(self) -> None:
        for _, sign in self.components:
            if sign not in (1, -1):
                raise TypeError(f"CompositeInstrument: sign must be +1 or -1, got {sign!r}")

    def add(self, leg: PriceableLeg, sign: int = 1) -> CompositeInstrument:
        return CompositeInstrument(components=(*self.components, (leg, sign)))

    def leg_values(self) -> tuple[Decimal, ...]:
        """Signed present value of each component, in order."""
        with localcontext(DECIMAL_CONTEXT):
            return tuple(sign * leg.present_value() for leg, sign in self.components)

    def present_value(self) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return sum(self.leg_values(), _ZERO)

    def payoff_at(self, spot: Decimal) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return sum((sign * leg.payoff_at(spot) for leg, sign in self.components), _ZERO)


@final
@dataclass(frozen=True, slots=True)
class BarrierOptionInstrument:
    """multiplier * composite + sum of premium multiplier * premium PV."""

    composite: CompositeInstrument
    multiplier: Decimal
    premium_legs: tuple[tuple[PremiumLeg, Decimal], ...] = ()

    def with_premium(self, leg: PremiumLeg, multiplier: Decimal) -> BarrierOptionInstrument:
        return replace(self, premium_legs=(*self.premium_legs, (leg, multiplier)))

    def premium_values(self) -> tuple[Decimal, ...]:
        with localcontext(DECIMAL_CONTEXT):
            return tuple(m * leg.present_value() for leg, m in self.premium_legs)

    def option_value(self) -> Decimal:
        """Scaled composite value, premiums excluded."""
        with localcontext(DECIMAL_CONTEXT):
            return self.multiplier * self.composite.present_value()

    def present_value(self) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return self.option_value() + sum(self.premium_values(), _ZERO)


def assemble_composite(
    replication: Replication,
    long_short: LongShort,
    bought_amount: Decimal,
    exercise_date: date,
    currency_pair: CurrencyPair,
    registry: LegPricerRegistry,
) -> Ok[BarrierOptionInstrument] | Err[ConfigurationError]:
    """Bind every replication leg to its pricer and scale by bought_amount * bsInd.

    Both the vanilla and the digital pricer must be registered for the pair,
    whichever legs the replication happens to contain.
    """
    match registry.resolve(InstrumentKind.FX_OPTION, currency_pair):
        case Err(e):
            return Err(e)
        case Ok(vanilla_pricer):
            pass
    match registry.resolve(InstrumentKind.FX_DIGITAL_OPTION, currency_pair):
        case Err(e):
            return Err(e)
        case Ok(digital_pricer):
            pass

    composite = CompositeInstrument()
    for rleg in replication.legs:
        leg = PriceableLeg(
            kind=rleg.kind,
            payoff=rleg.payoff,
            exercise_date=exercise_date,
            currency_pair=currency_pair,
            pricer=digital_pricer if rleg.kind.is_digital else vanilla_pricer,
        )
        composite = composite.add(leg, rleg.sign)
        logger.debug("Added %s leg with sign %+d: %s", rleg.kind.value, rleg.sign, rleg.payoff)

    with localcontext(DECIMAL_CONTEXT):
        multiplier = bought_amount * long_short.sign
    return Ok(BarrierOptionInstrument(composite=composite, multiplier=multiplier))
