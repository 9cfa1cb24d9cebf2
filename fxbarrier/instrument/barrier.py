"""FX European barrier option — trade data model and entry validation.

OptionSpec, BarrierSpec, FxLegAmounts and PremiumPayment are plain frozen
values. FxEuropeanBarrierOption.create checks the single-barrier invariants
and returns Err(ValidationError) listing every violated field.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum
from typing import final

from fxbarrier.core.errors import FieldViolation, ValidationError, validation_error
from fxbarrier.core.money import DECIMAL_CONTEXT, CurrencyPair, Money, PositiveDecimal
from fxbarrier.core.result import Err, Ok
from fxbarrier.instrument.payoffs import OptionType

EUROPEAN = "European"

_ZERO = Decimal("0")


class BarrierType(Enum):
    UP_IN = "UpIn"
    UP_OUT = "UpOut"
    DOWN_IN = "DownIn"
    DOWN_OUT = "DownOut"

    @property
    def is_up(self) -> bool:
        return self in (BarrierType.UP_IN, BarrierType.UP_OUT)

    @property
    def is_knock_in(self) -> bool:
        return self in (BarrierType.UP_IN, BarrierType.DOWN_IN)


class LongShort(Enum):
    LONG = "Long"
    SHORT = "Short"

    @property
    def sign(self) -> int:
        """bsInd: +1 for Long, -1 for Short."""
        return 1 if self is LongShort.LONG else -1


@final
@dataclass(frozen=True, slots=True)
class PremiumPayment:
    """A cash premium: amount in currency, paid on pay_date."""

    amount: Money
    pay_date: date


@final
@dataclass(frozen=True, slots=True)
class OptionSpec:
    option_type: OptionType
    style: str
    exercise_dates: tuple[date, ...]
    long_short: LongShort
    premiums: tuple[PremiumPayment, ...] = ()


@final
@dataclass(frozen=True, slots=True)
class BarrierSpec:
    levels: tuple[Decimal, ...]
    barrier_type: BarrierType
    rebate: Decimal = _ZERO
    style: str = ""


@final
@dataclass(frozen=True, slots=True)
class FxLegAmounts:
    """Bought and sold legs of the FX option. Strike is sold per bought."""

    bought_currency: str
    bought_amount: PositiveDecimal
    sold_currency: str
    sold_amount: PositiveDecimal

    @staticmethod
    def create(
        bought_currency: str,
        bought_amount: Decimal,
        sold_currency: str,
        sold_amount: Decimal,
    ) -> Ok[FxLegAmounts] | Err[ValidationError]:
        violations: list[FieldViolation] = []
        match CurrencyPair.of(bought_currency, sold_currency):
            case Err(e):
                violations.append(FieldViolation(
                    path="bought_currency/sold_currency", constraint=e,
                    actual_value=f"{bought_currency}/{sold_currency}",
                ))
            case Ok(_):
                pass
        match PositiveDecimal.parse(bought_amount):
            case Err(e):
                violations.append(FieldViolation(
                    path="bought_amount", constraint=e, actual_value=repr(bought_amount),
                ))
                ba = None
            case Ok(ba):
                pass
        match PositiveDecimal.parse(sold_amount):
            case Err(e):
                violations.append(FieldViolation(
                    path="sold_amount", constraint=e, actual_value=repr(sold_amount),
                ))
                sa = None
            case Ok(sa):
                pass
        if violations or ba is None or sa is None:
            return Err(validation_error(
                "instrument.barrier.FxLegAmounts.create",
                f"FxLegAmounts: {len(violations)} field error(s)",
                tuple(violations),
            ))
        return Ok(FxLegAmounts(
            bought_currency=bought_currency, bought_amount=ba,
            sold_currency=sold_currency, sold_amount=sa,
        ))

    @property
    def strike(self) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return self.sold_amount.value / self.bought_amount.value

    @property
    def currency_pair(self) -> CurrencyPair:
        return CurrencyPair.of(self.bought_currency, self.sold_currency).unwrap()


def _check_invariants(
    option: OptionSpec, barrier: BarrierSpec, trade_actions: tuple[str, ...],
) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    if not isinstance(option.option_type, OptionType):
        violations.append(FieldViolation(
            path="option.option_type", constraint="must be Call or Put",
            actual_value=repr(option.option_type),
        ))
    if option.style != EUROPEAN:
        violations.append(FieldViolation(
            path="option.style", constraint="Option Style unknown, must be European",
            actual_value=repr(option.style),
        ))
    if len(option.exercise_dates) != 1:
        violations.append(FieldViolation(
            path="option.exercise_dates", constraint="must contain exactly one date",
            actual_value=str(len(option.exercise_dates)),
        ))
    if len(barrier.levels) != 1:
        violations.append(FieldViolation(
            path="barrier.levels", constraint="must contain exactly one level",
            actual_value=str(len(barrier.levels)),
        ))
    elif not barrier.levels[0].is_finite() or barrier.levels[0] <= 0:
        violations.append(FieldViolation(
            path="barrier.levels", constraint="level must be > 0",
            actual_value=str(barrier.levels[0]),
        ))
    if barrier.style not in ("", EUROPEAN):
        violations.append(FieldViolation(
            path="barrier.style", constraint="only European barrier style supported",
            actual_value=repr(barrier.style),
        ))
    if not barrier.rebate.is_finite() or barrier.rebate < 0:
        violations.append(FieldViolation(
            path="barrier.rebate", constraint="Rebate must be non-negative",
            actual_value=str(barrier.rebate),
        ))
    if trade_actions:
        violations.append(FieldViolation(
            path="trade_actions", constraint="TradeActions not supported",
            actual_value=repr(trade_actions),
        ))
    return violations


def _trade_violations(
    trade_id: str,
    option: OptionSpec,
    barrier: BarrierSpec,
    amounts: FxLegAmounts,
    trade_actions: tuple[str, ...],
) -> list[FieldViolation]:
    violations = _check_invariants(option, barrier, trade_actions)
    pair_currencies = (amounts.bought_currency, amounts.sold_currency)
    match CurrencyPair.of(*pair_currencies):
        case Err(e):
            violations.append(FieldViolation(
                path="amounts.currency_pair", constraint=e,
                actual_value=f"{amounts.bought_currency}/{amounts.sold_currency}",
            ))
        case Ok(_):
            pass
    for i, premium in enumerate(option.premiums):
        if premium.amount.currency.value not in pair_currencies:
            violations.append(FieldViolation(
                path=f"option.premiums[{i}].currency",
                constraint=f"must be one of {pair_currencies}",
                actual_value=premium.amount.currency.value,
            ))
    if not trade_id:
        violations.insert(0, FieldViolation(
            path="trade_id", constraint="must be non-empty", actual_value=repr(trade_id),
        ))
    return violations


@final
@dataclass(frozen=True, slots=True)
class FxEuropeanBarrierOption:
    """Single-barrier, European-exercise FX option.

    Invariants (enforced by create and re-checked by validate_trade):
    - option style is European, exactly one exercise date
    - exactly one barrier level, barrier style empty or European
    - rebate >= 0
    - no trade actions
    - premiums paid in the bought or sold currency
    """

    trade_id: str
    option: OptionSpec
    barrier: BarrierSpec
    amounts: FxLegAmounts
    trade_actions: tuple[str, ...] = ()

    @staticmethod
    def create(
        trade_id: str,
        option: OptionSpec,
        barrier: BarrierSpec,
        amounts: FxLegAmounts,
        trade_actions: tuple[str, ...] = (),
    ) -> Ok[FxEuropeanBarrierOption] | Err[ValidationError]:
        violations = _trade_violations(trade_id, option, barrier, amounts, trade_actions)
        if violations:
            return Err(validation_error(
                "instrument.barrier.FxEuropeanBarrierOption.create",
                f"FxEuropeanBarrierOption {trade_id!r}: {len(violations)} field error(s)",
                tuple(violations),
            ))
        return Ok(FxEuropeanBarrierOption(
            trade_id=trade_id, option=option, barrier=barrier,
            amounts=amounts, trade_actions=trade_actions,
        ))

    @property
    def expiry_date(self) -> date:
        return self.option.exercise_dates[0]

    @property
    def level(self) -> Decimal:
        return self.barrier.levels[0]

    @property
    def strike(self) -> Decimal:
        return self.amounts.strike


def validate_trade(
    trade: FxEuropeanBarrierOption,
) -> Ok[FxEuropeanBarrierOption] | Err[ValidationError]:
    """Re-check the trade invariants, for trades not built through create."""
    violations = _trade_violations(
        trade.trade_id, trade.option, trade.barrier, trade.amounts, trade.trade_actions,
    )
    if violations:
        return Err(validation_error(
            "instrument.barrier.validate_trade",
            f"FxEuropeanBarrierOption {trade.trade_id!r}: {len(violations)} field error(s)",
            tuple(violations),
        ))
    return Ok(trade)


def barrier_payoff(
    option_type: OptionType,
    barrier_type: BarrierType,
    strike: Decimal,
    level: Decimal,
    rebate: Decimal,
    spot: Decimal,
) -> Decimal:
    """Terminal payoff per unit of bought amount, barrier observed at expiry only.

    Up barriers are hit when spot > level, down barriers when spot < level.
    The rebate is paid when the option is inactive (knocked out, or never
    knocked in). At spot == level neither side is hit.
    """
    if barrier_type.is_up:
        hit = spot > level
        not_hit = spot < level
    else:
        hit = spot < level
        not_hit = spot > level
    active = hit if barrier_type.is_knock_in else not_hit
    inactive = not_hit if barrier_type.is_knock_in else hit
    with localcontext(DECIMAL_CONTEXT):
        if active:
            if option_type is OptionType.CALL:
                return max(spot - strike, _ZERO)
            return max(strike - spot, _ZERO)
        return rebate if inactive else _ZERO
