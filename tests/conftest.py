"""Hypothesis strategies and shared builders for fxbarrier tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from fxbarrier.core.money import CurrencyPair, Money
from fxbarrier.core.result import unwrap
from fxbarrier.instrument.barrier import (
    BarrierSpec,
    BarrierType,
    FxEuropeanBarrierOption,
    FxLegAmounts,
    LongShort,
    OptionSpec,
    PremiumPayment,
)
from fxbarrier.instrument.payoffs import OptionType
from fxbarrier.pricing.garman_kohlhagen import GarmanKohlhagenLegPricer
from fxbarrier.pricing.registry import LegPricerRegistry

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# STRATEGIES
# ===================================================================


def fx_levels(
    min_value: str = "0.50",
    max_value: str = "2.00",
    places: int = 4,
) -> SearchStrategy[Decimal]:
    """Strictly positive FX rates."""
    return st.decimals(
        min_value=Decimal(min_value),
        max_value=Decimal(max_value),
        places=places,
        allow_nan=False,
        allow_infinity=False,
    )


def rebates() -> SearchStrategy[Decimal]:
    return st.decimals(
        min_value=Decimal("0"), max_value=Decimal("10"), places=2,
        allow_nan=False, allow_infinity=False,
    )


def option_types() -> SearchStrategy[OptionType]:
    return st.sampled_from(list(OptionType))


def barrier_types() -> SearchStrategy[BarrierType]:
    return st.sampled_from(list(BarrierType))


# ===================================================================
# BUILDERS
# ===================================================================

EURUSD = unwrap(CurrencyPair.parse("EUR/USD"))
VALUATION_DATE = date(2024, 1, 2)
EXPIRY = date(2025, 1, 1)


def make_trade(
    option_type: OptionType = OptionType.CALL,
    barrier_type: BarrierType = BarrierType.UP_OUT,
    bought_amount: Decimal = Decimal("1000000"),
    sold_amount: Decimal = Decimal("1100000"),
    level: Decimal = Decimal("1.20"),
    rebate: Decimal = Decimal("0"),
    long_short: LongShort = LongShort.LONG,
    premiums: tuple[PremiumPayment, ...] = (),
    expiry: date = EXPIRY,
    trade_id: str = "FXB-1",
) -> FxEuropeanBarrierOption:
    """EUR/USD barrier option. Strike = sold_amount / bought_amount."""
    amounts = unwrap(FxLegAmounts.create("EUR", bought_amount, "USD", sold_amount))
    return unwrap(FxEuropeanBarrierOption.create(
        trade_id=trade_id,
        option=OptionSpec(
            option_type=option_type, style="European", exercise_dates=(expiry,),
            long_short=long_short, premiums=premiums,
        ),
        barrier=BarrierSpec(levels=(level,), barrier_type=barrier_type, rebate=rebate),
        amounts=amounts,
    ))


def premium(amount: str, currency: str, pay_date: date) -> PremiumPayment:
    return PremiumPayment(amount=unwrap(Money.create(Decimal(amount), currency)), pay_date=pay_date)


def gk_pricer() -> GarmanKohlhagenLegPricer:
    return GarmanKohlhagenLegPricer(
        valuation_date=VALUATION_DATE,
        spot=Decimal("1.10"),
        volatility=Decimal("0.10"),
        domestic_rate=Decimal("0.05"),
        foreign_rate=Decimal("0.03"),
    )


def gk_registry() -> LegPricerRegistry:
    registry = LegPricerRegistry()
    registry.register_all(currency_pair=EURUSD, pricer=gk_pricer())
    return registry
