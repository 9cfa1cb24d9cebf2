"""Static replication of a single European barrier as vanillas and digitals.

select_replication is a pure decision table over (option type, barrier type,
B > K or B <= K). It names the legs and their signs; it never prices them.

With strike K, barrier B and option type T:

    VanillaK  = vanilla T option struck at K
    VanillaB  = vanilla T option struck at B
    DigitalB  = cash-or-nothing T option triggered at B paying |B - K|

    Call  UpIn,  DownOut   B > K : +VanillaB +DigitalB          B <= K : +VanillaK
    Call  UpOut, DownIn    B > K : +VanillaK -VanillaB -DigitalB B <= K : none
    Put   UpIn,  DownOut   B > K : none                         B <= K : +VanillaK -VanillaB -DigitalB
    Put   UpOut, DownIn    B > K : +VanillaK                    B <= K : +VanillaB +DigitalB

The rebate is a separate cash-or-nothing at B: Put-triggered for UpIn and
DownOut, Call-triggered for UpOut and DownIn.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import TypeAlias, final

from fxbarrier.core.errors import UnsupportedBarrierTypeError
from fxbarrier.core.money import DECIMAL_CONTEXT
from fxbarrier.core.result import Err, Ok
from fxbarrier.core.types import UtcDatetime
from fxbarrier.instrument.barrier import BarrierType
from fxbarrier.instrument.payoffs import CashOrNothingPayoff, OptionType, Payoff, VanillaPayoff


class LegKind(Enum):
    VANILLA_AT_STRIKE = "VanillaAtStrikeK"
    VANILLA_AT_BARRIER = "VanillaAtLevelB"
    DIGITAL_AT_BARRIER = "DigitalAtLevelB"
    REBATE_DIGITAL = "RebateDigitalAtLevelB"

    @property
    def is_digital(self) -> bool:
        return self in (LegKind.DIGITAL_AT_BARRIER, LegKind.REBATE_DIGITAL)


@final
@dataclass(frozen=True, slots=True)
class ReplicationLeg:
    """One tagged leg of the replicating portfolio."""

    kind: LegKind
    sign: int
    payoff: Payoff

    def __post_init__(self) -> None:
        if self.sign not in (1, -1):
            raise TypeError(f"ReplicationLeg.sign must be +1 or -1, got {self.sign!r}")


@final
@dataclass(frozen=True, slots=True)
class Replication:
    rebate_leg: ReplicationLeg
    main_legs: tuple[ReplicationLeg, ...]

    @property
    def legs(self) -> tuple[ReplicationLeg, ...]:
        """Rebate leg first, then main legs in table order."""
        return (self.rebate_leg, *self.main_legs)


_VK = LegKind.VANILLA_AT_STRIKE
_VB = LegKind.VANILLA_AT_BARRIER
_DB = LegKind.DIGITAL_AT_BARRIER

_Row: TypeAlias = tuple[tuple[LegKind, int], ...]

_ABOVE_B: _Row = ((_VB, 1), (_DB, 1))
_BELOW_B: _Row = ((_VK, 1), (_VB, -1), (_DB, -1))
_VANILLA_K: _Row = ((_VK, 1),)
_NONE: _Row = ()

# (option type, barrier type) -> (legs when B > K, legs when B <= K)
_MAIN_LEGS: dict[tuple[OptionType, BarrierType], tuple[_Row, _Row]] = {
    (OptionType.CALL, BarrierType.UP_IN): (_ABOVE_B, _VANILLA_K),
    (OptionType.CALL, BarrierType.DOWN_OUT): (_ABOVE_B, _VANILLA_K),
    (OptionType.CALL, BarrierType.UP_OUT): (_BELOW_B, _NONE),
    (OptionType.CALL, BarrierType.DOWN_IN): (_BELOW_B, _NONE),
    (OptionType.PUT, BarrierType.UP_IN): (_NONE, _BELOW_B),
    (OptionType.PUT, BarrierType.DOWN_OUT): (_NONE, _BELOW_B),
    (OptionType.PUT, BarrierType.UP_OUT): (_VANILLA_K, _ABOVE_B),
    (OptionType.PUT, BarrierType.DOWN_IN): (_VANILLA_K, _ABOVE_B),
}

_REBATE_TRIGGER: dict[BarrierType, OptionType] = {
    BarrierType.UP_IN: OptionType.PUT,
    BarrierType.DOWN_OUT: OptionType.PUT,
    BarrierType.UP_OUT: OptionType.CALL,
    BarrierType.DOWN_IN: OptionType.CALL,
}


def _payoff(
    kind: LegKind, option_type: OptionType, strike: Decimal, level: Decimal,
) -> Payoff:
    match kind:
        case LegKind.VANILLA_AT_STRIKE:
            return VanillaPayoff(option_type=option_type, strike=strike)
        case LegKind.VANILLA_AT_BARRIER:
            return VanillaPayoff(option_type=option_type, strike=level)
        case _:
            with localcontext(DECIMAL_CONTEXT):
                cash = abs(level - strike)
            return CashOrNothingPayoff(option_type=option_type, trigger=level, cash=cash)


def select_replication(
    option_type: OptionType,
    barrier_type: BarrierType,
    strike: Decimal,
    level: Decimal,
    rebate: Decimal,
) -> Ok[Replication] | Err[UnsupportedBarrierTypeError]:
    """Return the rebate leg and the signed main legs for one barrier option.

    B == K takes the B <= K branch. An empty branch yields no main legs.
    An option_type outside OptionType is a TypeError.
    """
    rebate_type = None
    if isinstance(barrier_type, BarrierType):
        rebate_type = _REBATE_TRIGGER.get(barrier_type)
    if rebate_type is None:
        return Err(UnsupportedBarrierTypeError(
            message=f"Unknown Barrier Type: {barrier_type!r}",
            code="UNSUPPORTED_BARRIER_TYPE",
            timestamp=UtcDatetime.now(),
            source="pricing.replication.select_replication",
            barrier_type=str(getattr(barrier_type, "value", barrier_type)),
        ))

    if not isinstance(option_type, OptionType):
        raise TypeError(
            f"select_replication: option_type must be OptionType, got {option_type!r}"
        )

    rebate_leg = ReplicationLeg(
        kind=LegKind.REBATE_DIGITAL,
        sign=1,
        payoff=CashOrNothingPayoff(option_type=rebate_type, trigger=level, cash=rebate),
    )

    above, at_or_below = _MAIN_LEGS[(option_type, barrier_type)]
    row = above if level > strike else at_or_below
    main_legs = tuple(
        ReplicationLeg(kind=kind, sign=sign, payoff=_payoff(kind, option_type, strike, level))
        for kind, sign in row
    )
    return Ok(Replication(rebate_leg=rebate_leg, main_legs=main_legs))
