"""Premium attachment — cash premium legs and the latest premium date."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from fxbarrier.core.errors import ConfigurationError
from fxbarrier.core.money import CurrencyPair
from fxbarrier.core.result import Err, Ok
from fxbarrier.instrument.barrier import PremiumPayment
from fxbarrier.pricing.composite import BarrierOptionInstrument
from fxbarrier.pricing.legs import PremiumLeg
from fxbarrier.pricing.protocols import InstrumentKind
from fxbarrier.pricing.registry import LegPricerRegistry

logger = logging.getLogger(__name__)


def attach_premiums(
    instrument: BarrierOptionInstrument,
    premiums: tuple[PremiumPayment, ...],
    premium_sign: Decimal,
    currency_pair: CurrencyPair,
    registry: LegPricerRegistry,
    configuration: str,
) -> Ok[tuple[BarrierOptionInstrument, date | None]] | Err[ConfigurationError]:
    """Append one premium leg per payment, in input order, with multiplier premium_sign.

    premium_sign is -bsInd: a Long holder pays the premium. Returns the
    augmented instrument and the latest premium date (None without premiums).
    """
    if not premiums:
        return Ok((instrument, None))

    match registry.resolve(InstrumentKind.CASH_PAYMENT, currency_pair):
        case Err(e):
            return Err(e)
        case Ok(pricer):
            pass

    latest: date | None = None
    for premium in premiums:
        leg = PremiumLeg(
            premium=premium, currency_pair=currency_pair,
            pricer=pricer, configuration=configuration,
        )
        instrument = instrument.with_premium(leg, premium_sign)
        if latest is None or premium.pay_date > latest:
            latest = premium.pay_date
        logger.debug(
            "Attached premium %s %s on %s with sign %s",
            premium.amount.amount, premium.amount.currency.value, premium.pay_date, premium_sign,
        )
    return Ok((instrument, latest))
