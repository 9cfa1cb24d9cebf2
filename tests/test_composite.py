"""Tests for fxbarrier.pricing.composite and legs — assembly and present values."""

from __future__ import annotations

from decimal import Decimal

import pytest
from conftest import EURUSD, EXPIRY, gk_registry
from hypothesis import given
from hypothesis import strategies as st

from fxbarrier.core.errors import ConfigurationError
from fxbarrier.core.money import CurrencyPair
from fxbarrier.core.result import Err, Ok, unwrap
from fxbarrier.instrument.barrier import BarrierType, LongShort
from fxbarrier.instrument.payoffs import CashOrNothingPayoff, OptionType, VanillaPayoff
from fxbarrier.pricing.composite import (
    BarrierOptionInstrument,
    CompositeInstrument,
    assemble_composite,
)
from fxbarrier.pricing.legs import PriceableLeg
from fxbarrier.pricing.protocols import InstrumentKind, StubLegPricer
from fxbarrier.pricing.registry import LegPricerRegistry
from fxbarrier.pricing.replication import LegKind, select_replication

_K = Decimal("1.10")
_ONE = Decimal("1")

_STUB = StubLegPricer(
    vanilla_values={
        (Decimal("1.10"), OptionType.CALL): Decimal("0.050"),
        (Decimal("1.20"), OptionType.CALL): Decimal("0.020"),
        (Decimal("1.00"), OptionType.CALL): Decimal("0.110"),
        (Decimal("1.10"), OptionType.PUT): Decimal("0.030"),
        (Decimal("1.20"), OptionType.PUT): Decimal("0.090"),
        (Decimal("1.00"), OptionType.PUT): Decimal("0.008"),
    },
    digital_unit_value={OptionType.CALL: Decimal("0.25"), OptionType.PUT: Decimal("0.70")},
)


def _stub_registry() -> LegPricerRegistry:
    registry = LegPricerRegistry()
    registry.register_all(currency_pair=EURUSD, pricer=_STUB)
    return registry


def _assemble(
    option_type: OptionType,
    barrier_type: BarrierType,
    level: Decimal,
    rebate: Decimal = Decimal("0"),
    long_short: LongShort = LongShort.LONG,
    bought_amount: Decimal = _ONE,
    registry: LegPricerRegistry | None = None,
) -> BarrierOptionInstrument:
    rep = unwrap(select_replication(option_type, barrier_type, _K, level, rebate))
    return unwrap(assemble_composite(
        rep, long_short, bought_amount, EXPIRY, EURUSD,
        registry if registry is not None else _stub_registry(),
    ))


# ---------------------------------------------------------------------------
# PriceableLeg
# ---------------------------------------------------------------------------


class TestPriceableLeg:
    def test_vanilla_delegates_to_pricer(self) -> None:
        leg = PriceableLeg(
            kind=LegKind.VANILLA_AT_STRIKE, payoff=VanillaPayoff(OptionType.CALL, _K),
            exercise_date=EXPIRY, currency_pair=EURUSD, pricer=_STUB,
        )
        assert leg.present_value() == Decimal("0.050")

    def test_digital_delegates_to_pricer(self) -> None:
        leg = PriceableLeg(
            kind=LegKind.DIGITAL_AT_BARRIER,
            payoff=CashOrNothingPayoff(OptionType.PUT, Decimal("1.00"), Decimal("2")),
            exercise_date=EXPIRY, currency_pair=EURUSD, pricer=_STUB,
        )
        assert leg.present_value() == Decimal("1.40")

    def test_payoff_at(self) -> None:
        leg = PriceableLeg(
            kind=LegKind.VANILLA_AT_STRIKE, payoff=VanillaPayoff(OptionType.PUT, _K),
            exercise_date=EXPIRY, currency_pair=EURUSD, pricer=_STUB,
        )
        assert leg.payoff_at(Decimal("1.00")) == Decimal("0.10")


# ---------------------------------------------------------------------------
# CompositeInstrument
# ---------------------------------------------------------------------------


class TestCompositeInstrument:
    def test_empty_composite_is_zero(self) -> None:
        assert CompositeInstrument().present_value() == Decimal("0")

    def test_signed_sum(self) -> None:
        inst = _assemble(OptionType.CALL, BarrierType.UP_OUT, Decimal("1.20"))
        # 0 rebate + 0.050 - 0.020 - 0.10 * 0.25
        assert inst.composite.present_value() == Decimal("0.005")
        assert inst.composite.leg_values() == (
            Decimal("0"), Decimal("0.050"), Decimal("-0.020"), Decimal("-0.0250"),
        )

    def test_add_returns_new_instance(self) -> None:
        leg = PriceableLeg(
            kind=LegKind.VANILLA_AT_STRIKE, payoff=VanillaPayoff(OptionType.CALL, _K),
            exercise_date=EXPIRY, currency_pair=EURUSD, pricer=_STUB,
        )
        empty = CompositeInstrument()
        one = empty.add(leg, -1)
        assert empty.components == ()
        assert one.present_value() == Decimal("-0.050")

    def test_zero_sign_rejected(self) -> None:
        leg = PriceableLeg(
            kind=LegKind.VANILLA_AT_STRIKE, payoff=VanillaPayoff(OptionType.CALL, _K),
            exercise_date=EXPIRY, currency_pair=EURUSD, pricer=_STUB,
        )
        with pytest.raises(TypeError):
            CompositeInstrument(components=((leg, 0),))

    def test_digital_legs_use_digital_pricer(self) -> None:
        vanilla_only = StubLegPricer(default_vanilla=Decimal("1"))
        digital_only = StubLegPricer(digital_unit_value={OptionType.CALL: Decimal("1")})
        registry = LegPricerRegistry()
        registry.register(kind=InstrumentKind.FX_OPTION, currency_pair=EURUSD, pricer=vanilla_only)
        registry.register(
            kind=InstrumentKind.FX_DIGITAL_OPTION, currency_pair=EURUSD, pricer=digital_only,
        )
        inst = _assemble(
            OptionType.CALL, BarrierType.UP_IN, Decimal("1.20"), registry=registry,
        )
        pricers = {leg.kind: leg.pricer for leg, _ in inst.composite.components}
        assert pricers[LegKind.VANILLA_AT_BARRIER] is vanilla_only
        assert pricers[LegKind.DIGITAL_AT_BARRIER] is digital_only
        assert pricers[LegKind.REBATE_DIGITAL] is digital_only


# ---------------------------------------------------------------------------
# Multiplier and sign symmetry
# ---------------------------------------------------------------------------


class TestMultiplier:
    def test_long_multiplier_is_bought_amount(self) -> None:
        inst = _assemble(
            OptionType.CALL, BarrierType.UP_OUT, Decimal("1.20"), bought_amount=Decimal("1000000"),
        )
        assert inst.multiplier == Decimal("1000000")
        assert inst.present_value() == Decimal("5000.000")

    def test_short_multiplier_is_negative(self) -> None:
        inst = _assemble(
            OptionType.CALL, BarrierType.UP_OUT, Decimal("1.20"),
            long_short=LongShort.SHORT, bought_amount=Decimal("1000000"),
        )
        assert inst.multiplier == Decimal("-1000000")

    @given(
        option_type=st.sampled_from(list(OptionType)),
        barrier_type=st.sampled_from(list(BarrierType)),
        level=st.sampled_from([Decimal("1.00"), Decimal("1.10"), Decimal("1.20")]),
        rebate=st.sampled_from([Decimal("0"), Decimal("2.5")]),
    )
    def test_short_negates_long(
        self, option_type: OptionType, barrier_type: BarrierType,
        level: Decimal, rebate: Decimal,
    ) -> None:
        long_ = _assemble(option_type, barrier_type, level, rebate, LongShort.LONG, Decimal("5"))
        short = _assemble(option_type, barrier_type, level, rebate, LongShort.SHORT, Decimal("5"))
        assert short.present_value() == -long_.present_value()


# ---------------------------------------------------------------------------
# Knock-in + knock-out parity under any deterministic pricer
# ---------------------------------------------------------------------------


class TestKnockInKnockOutParity:
    @pytest.mark.parametrize("option_type", list(OptionType))
    @pytest.mark.parametrize("level", [Decimal("1.00"), Decimal("1.10"), Decimal("1.20")])
    @pytest.mark.parametrize(("knock_in", "knock_out"), [
        (BarrierType.UP_IN, BarrierType.UP_OUT),
        (BarrierType.DOWN_IN, BarrierType.DOWN_OUT),
    ])
    def test_stub_parity_exact(
        self, option_type: OptionType, level: Decimal,
        knock_in: BarrierType, knock_out: BarrierType,
    ) -> None:
        total = (
            _assemble(option_type, knock_in, level).present_value()
            + _assemble(option_type, knock_out, level).present_value()
        )
        vanilla = _STUB.price_vanilla(EURUSD, EXPIRY, _K, option_type)
        assert total == vanilla

    @pytest.mark.parametrize("option_type", list(OptionType))
    @pytest.mark.parametrize("level", [Decimal("0.95"), Decimal("1.10"), Decimal("1.30")])
    @pytest.mark.parametrize(("knock_in", "knock_out"), [
        (BarrierType.UP_IN, BarrierType.UP_OUT),
        (BarrierType.DOWN_IN, BarrierType.DOWN_OUT),
    ])
    def test_garman_kohlhagen_parity(
        self, option_type: OptionType, level: Decimal,
        knock_in: BarrierType, knock_out: BarrierType,
    ) -> None:
        registry = gk_registry()
        total = (
            _assemble(option_type, knock_in, level, registry=registry).present_value()
            + _assemble(option_type, knock_out, level, registry=registry).present_value()
        )
        pricer = unwrap(registry.resolve(InstrumentKind.FX_OPTION, EURUSD))
        vanilla = pricer.price_vanilla(EURUSD, EXPIRY, _K, option_type)
        assert abs(total - vanilla) < Decimal("1e-20")


# ---------------------------------------------------------------------------
# Rebate isolation
# ---------------------------------------------------------------------------


class TestRebateIsolation:
    @pytest.mark.parametrize("barrier_type", list(BarrierType))
    def test_zero_rebate_leg_is_worthless(self, barrier_type: BarrierType) -> None:
        inst = _assemble(OptionType.CALL, barrier_type, Decimal("1.20"), registry=gk_registry())
        rebate_leg, sign = inst.composite.components[0]
        assert rebate_leg.kind is LegKind.REBATE_DIGITAL
        assert sign * rebate_leg.present_value() == Decimal("0")

    def test_rebate_adds_digital_value(self) -> None:
        without = _assemble(OptionType.PUT, BarrierType.UP_IN, Decimal("1.20"))
        with_rebate = _assemble(OptionType.PUT, BarrierType.UP_IN, Decimal("1.20"), Decimal("4"))
        # UpIn rebate is a put digital: 4 * 0.70
        assert with_rebate.present_value() - without.present_value() == Decimal("2.80")


# ---------------------------------------------------------------------------
# Missing pricers
# ---------------------------------------------------------------------------


class TestMissingPricer:
    def test_missing_vanilla_pricer(self) -> None:
        registry = LegPricerRegistry()
        registry.register(kind=InstrumentKind.FX_DIGITAL_OPTION, currency_pair=EURUSD, pricer=_STUB)
        rep = unwrap(select_replication(
            OptionType.CALL, BarrierType.UP_OUT, _K, Decimal("1.00"), Decimal("0"),
        ))
        result = assemble_composite(rep, LongShort.LONG, _ONE, EXPIRY, EURUSD, registry)
        assert isinstance(result, Err)
        assert isinstance(result.error, ConfigurationError)
        assert result.error.instrument_kind == "FxOption"
        assert result.error.currency_pair == "EUR/USD"

    def test_missing_digital_pricer(self) -> None:
        registry = LegPricerRegistry()
        registry.register(kind=InstrumentKind.FX_OPTION, currency_pair=EURUSD, pricer=_STUB)
        rep = unwrap(select_replication(
            OptionType.CALL, BarrierType.UP_OUT, _K, Decimal("1.20"), Decimal("0"),
        ))
        result = assemble_composite(rep, LongShort.LONG, _ONE, EXPIRY, EURUSD, registry)
        assert isinstance(result, Err)
        assert result.error.instrument_kind == "FxDigitalOption"

    def test_other_pair_not_used(self) -> None:
        registry = LegPricerRegistry()
        registry.register_all(currency_pair=unwrap(CurrencyPair.parse("GBP/USD")), pricer=_STUB)
        rep = unwrap(select_replication(
            OptionType.CALL, BarrierType.UP_OUT, _K, Decimal("1.20"), Decimal("0"),
        ))
        result = assemble_composite(rep, LongShort.LONG, _ONE, EXPIRY, EURUSD, registry)
        assert isinstance(result, Err)

    def test_ok_when_registered(self) -> None:
        rep = unwrap(select_replication(
            OptionType.CALL, BarrierType.UP_OUT, _K, Decimal("1.20"), Decimal("0"),
        ))
        result = assemble_composite(rep, LongShort.LONG, _ONE, EXPIRY, EURUSD, _stub_registry())
        assert isinstance(result, Ok)
        assert len(result.value.composite.components) == 4
