"""FX European barrier option builder and pricer.

build_trade runs the whole flow for one trade:

    validate_trade -> select_replication -> assemble_composite
                   -> attach_premiums -> project_outputs

Each call owns its instrument; nothing is cached or shared between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from typing import TypeAlias, final

from fxbarrier.core.errors import (
    ConfigurationError,
    UnsupportedBarrierTypeError,
    ValidationError,
)
from fxbarrier.core.money import DECIMAL_CONTEXT, Money
from fxbarrier.core.result import Err, Ok, unwrap
from fxbarrier.core.types import FrozenMap, UtcDatetime
from fxbarrier.infra.config import EngineConfig
from fxbarrier.instrument.barrier import FxEuropeanBarrierOption, FxLegAmounts, validate_trade
from fxbarrier.pricing.composite import BarrierOptionInstrument, assemble_composite
from fxbarrier.pricing.premiums import attach_premiums
from fxbarrier.pricing.registry import LegPricerRegistry
from fxbarrier.pricing.replication import Replication, select_replication
from fxbarrier.pricing.types import TradeOutputs, ValuationResult

logger = logging.getLogger(__name__)

BuildError: TypeAlias = ValidationError | ConfigurationError | UnsupportedBarrierTypeError


@final
@dataclass(frozen=True, slots=True)
class BuiltTrade:
    trade_id: str
    replication: Replication
    instrument: BarrierOptionInstrument
    outputs: TradeOutputs


def project_outputs(
    amounts: FxLegAmounts, expiry_date: date, last_premium_date: date | None,
) -> TradeOutputs:
    """Reporting fields. The sold currency is the domestic (NPV) currency."""
    maturity = expiry_date if last_premium_date is None else max(expiry_date, last_premium_date)
    annotations = unwrap(FrozenMap.create({
        "boughtCurrency": amounts.bought_currency,
        "boughtAmount": amounts.bought_amount.value,
        "soldCurrency": amounts.sold_currency,
        "soldAmount": amounts.sold_amount.value,
    }))
    return TradeOutputs(
        npv_currency=amounts.sold_currency,
        notional=amounts.sold_amount.value,
        notional_currency=amounts.sold_currency,
        maturity=maturity,
        annotations=annotations,
    )


def build_trade(
    trade: FxEuropeanBarrierOption,
    registry: LegPricerRegistry,
    config: EngineConfig | None = None,
) -> Ok[BuiltTrade] | Err[BuildError]:
    """Validate, replicate, assemble and annotate one barrier option trade."""
    cfg = config if config is not None else EngineConfig()
    match validate_trade(trade):
        case Err(e):
            return Err(e)
        case Ok(_):
            pass

    option, barrier, amounts = trade.option, trade.barrier, trade.amounts
    pair = amounts.currency_pair

    match select_replication(
        option.option_type, barrier.barrier_type, trade.strike, trade.level, barrier.rebate,
    ):
        case Err(e):
            return Err(e.with_context(f"trade {trade.trade_id}"))
        case Ok(replication):
            pass

    match assemble_composite(
        replication, option.long_short, amounts.bought_amount.value,
        trade.expiry_date, pair, registry,
    ):
        case Err(e):
            return Err(e.with_context(f"trade {trade.trade_id}"))
        case Ok(instrument):
            pass

    premium_sign = Decimal(-option.long_short.sign)
    match attach_premiums(
        instrument, option.premiums, premium_sign, pair, registry, cfg.market_configuration,
    ):
        case Err(e):
            return Err(e.with_context(f"trade {trade.trade_id}"))
        case Ok((instrument, last_premium_date)):
            pass

    outputs = project_outputs(amounts, trade.expiry_date, last_premium_date)
    logger.info(
        "Built %s %s %s %s barrier option %s: K=%s B=%s, %d main leg(s), %d premium leg(s)",
        option.long_short.value, option.option_type.value, barrier.barrier_type.value,
        pair.value, trade.trade_id, trade.strike, trade.level,
        len(replication.main_legs), len(instrument.premium_legs),
    )
    return Ok(BuiltTrade(
        trade_id=trade.trade_id, replication=replication,
        instrument=instrument, outputs=outputs,
    ))


def _components(built: BuiltTrade) -> FrozenMap[str, Decimal]:
    instrument = built.instrument
    entries: dict[str, Decimal] = {}
    with localcontext(DECIMAL_CONTEXT):
        for i, ((leg, _), value) in enumerate(
            zip(instrument.composite.components, instrument.composite.leg_values(), strict=True)
        ):
            entries[f"{i}.{leg.kind.value}"] = instrument.multiplier * value
    for i, value in enumerate(instrument.premium_values()):
        entries[f"premium.{i}"] = value
    return unwrap(FrozenMap.create(entries))


def price_trade(
    trade: FxEuropeanBarrierOption,
    registry: LegPricerRegistry,
    config: EngineConfig | None = None,
) -> Ok[ValuationResult] | Err[BuildError]:
    """Build the trade and return its NPV in the NPV currency."""
    cfg = config if config is not None else EngineConfig()
    match build_trade(trade, registry, cfg):
        case Err(e):
            return Err(e)
        case Ok(built):
            pass

    npv = built.instrument.present_value()
    currency = built.outputs.npv_currency
    if cfg.round_npv_to_minor_unit:
        npv = unwrap(Money.create(npv, currency)).round_to_minor_unit().amount
    logger.debug("Priced %s: NPV %s %s", trade.trade_id, npv, currency)
    return Ok(ValuationResult(
        trade_id=trade.trade_id,
        npv=npv,
        currency=currency,
        valuation_date=UtcDatetime.now(),
        components=_components(built) if cfg.report_components else FrozenMap.EMPTY,
        market_configuration=cfg.market_configuration,
    ))
