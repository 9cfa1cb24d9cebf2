"""Gateway parser — raw trade dict to FxEuropeanBarrierOption and back.

Raw trade shape::

    {
        "trade_id": "FXB-1",
        "option_data": {
            "long_short": "Long", "option_type": "Call", "style": "European",
            "exercise_dates": ["2025-01-01"],
            "premiums": [{"amount": "1000", "currency": "USD", "pay_date": "2024-01-03"}],
        },
        "barrier_data": {"type": "UpOut", "levels": ["1.20"], "rebate": "0", "style": ""},
        "bought_currency": "EUR", "bought_amount": "1000000",
        "sold_currency": "USD", "sold_amount": "1100000",
        "trade_actions": [],
    }

parse_fx_barrier_option never raises: every problem becomes a FieldViolation.
parse(trade_to_dict(parse(raw))) == parse(raw).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil.parser import isoparse

from fxbarrier.core.errors import (
    FieldViolation,
    UnsupportedBarrierTypeError,
    ValidationError,
    validation_error,
)
from fxbarrier.core.money import Money
from fxbarrier.core.result import Err, Ok
from fxbarrier.core.types import UtcDatetime
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

_SOURCE = "gateway.parser.parse_fx_barrier_option"


def _extract_str(raw: dict[str, Any], key: str) -> str | None:
    val = raw.get(key)
    if isinstance(val, str):
        return val
    return None


def _to_decimal(val: object) -> Decimal | None:
    if isinstance(val, Decimal):
        return val
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, str)):
        try:
            return Decimal(str(val).strip())
        except InvalidOperation:
            return None
    return None


def _to_date(val: object) -> date | None:
    """Accept date objects, ISO dates (2025-06-01) and compact dates (20250601)."""
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    if isinstance(val, str):
        try:
            return isoparse(val.strip()).date()
        except ValueError:
            return None
    return None


def _sub_dict(raw: dict[str, Any], key: str, violations: list[FieldViolation]) -> dict[str, Any]:
    val = raw.get(key)
    if isinstance(val, dict):
        return val
    violations.append(FieldViolation(
        path=key, constraint="required mapping", actual_value=repr(val),
    ))
    return {}


def _list(raw: dict[str, Any], key: str, path: str, violations: list[FieldViolation]) -> list[Any]:
    val = raw.get(key, [])
    if isinstance(val, (list, tuple)):
        return list(val)
    violations.append(FieldViolation(path=path, constraint="must be a list", actual_value=repr(val)))
    return []


def _parse_premiums(
    option_raw: dict[str, Any], violations: list[FieldViolation],
) -> tuple[PremiumPayment, ...]:
    premiums: list[PremiumPayment] = []
    for i, p in enumerate(_list(option_raw, "premiums", "option_data.premiums", violations)):
        path = f"option_data.premiums[{i}]"
        if not isinstance(p, dict):
            violations.append(FieldViolation(path=path, constraint="must be a mapping",
                                             actual_value=repr(p)))
            continue
        amount = _to_decimal(p.get("amount"))
        pay_date = _to_date(p.get("pay_date"))
        currency = _extract_str(p, "currency") or ""
        if amount is None:
            violations.append(FieldViolation(path=f"{path}.amount", constraint="required numeric",
                                             actual_value=repr(p.get("amount"))))
        if pay_date is None:
            violations.append(FieldViolation(path=f"{path}.pay_date", constraint="required date",
                                             actual_value=repr(p.get("pay_date"))))
        if amount is None or pay_date is None:
            continue
        match Money.create(amount, currency):
            case Err(e):
                violations.append(FieldViolation(path=path, constraint=e,
                                                 actual_value=f"{amount} {currency!r}"))
            case Ok(money):
                premiums.append(PremiumPayment(amount=money, pay_date=pay_date))
    return tuple(premiums)


def _parse_option(
    option_raw: dict[str, Any], violations: list[FieldViolation],
) -> OptionSpec | None:
    option_type: OptionType | None = None
    try:
        option_type = OptionType(_extract_str(option_raw, "option_type"))
    except ValueError:
        violations.append(FieldViolation(
            path="option_data.option_type", constraint="must be Call or Put",
            actual_value=repr(option_raw.get("option_type")),
        ))

    long_short: LongShort | None = None
    try:
        long_short = LongShort(_extract_str(option_raw, "long_short"))
    except ValueError:
        violations.append(FieldViolation(
            path="option_data.long_short", constraint="must be Long or Short",
            actual_value=repr(option_raw.get("long_short")),
        ))

    style = _extract_str(option_raw, "style") or ""

    exercise_dates: list[date] = []
    for i, d in enumerate(
        _list(option_raw, "exercise_dates", "option_data.exercise_dates", violations)
    ):
        parsed = _to_date(d)
        if parsed is None:
            violations.append(FieldViolation(
                path=f"option_data.exercise_dates[{i}]", constraint="must be a date",
                actual_value=repr(d),
            ))
        else:
            exercise_dates.append(parsed)

    premiums = _parse_premiums(option_raw, violations)

    if option_type is None or long_short is None:
        return None
    return OptionSpec(
        option_type=option_type, style=style, exercise_dates=tuple(exercise_dates),
        long_short=long_short, premiums=premiums,
    )


def _parse_barrier(
    barrier_raw: dict[str, Any], violations: list[FieldViolation],
) -> BarrierSpec | UnsupportedBarrierTypeError | None:
    type_raw = _extract_str(barrier_raw, "type")
    try:
        barrier_type = BarrierType(type_raw)
    except ValueError:
        return UnsupportedBarrierTypeError(
            message=f"Unknown Barrier Type: {type_raw!r}",
            code="UNSUPPORTED_BARRIER_TYPE",
            timestamp=UtcDatetime.now(),
            source=_SOURCE,
            barrier_type=str(barrier_raw.get("type")),
        )

    levels: list[Decimal] = []
    for i, lv in enumerate(_list(barrier_raw, "levels", "barrier_data.levels", violations)):
        parsed = _to_decimal(lv)
        if parsed is None:
            violations.append(FieldViolation(
                path=f"barrier_data.levels[{i}]", constraint="must be numeric",
                actual_value=repr(lv),
            ))
        else:
            levels.append(parsed)

    rebate = _to_decimal(barrier_raw.get("rebate", "0"))
    if rebate is None:
        violations.append(FieldViolation(
            path="barrier_data.rebate", constraint="must be numeric",
            actual_value=repr(barrier_raw.get("rebate")),
        ))
        return None

    return BarrierSpec(
        levels=tuple(levels), barrier_type=barrier_type,
        rebate=rebate, style=_extract_str(barrier_raw, "style") or "",
    )


def parse_fx_barrier_option(
    raw: dict[str, Any],
) -> Ok[FxEuropeanBarrierOption] | Err[ValidationError | UnsupportedBarrierTypeError]:
    """Parse and validate a raw trade. Unknown barrier types are reported on their own."""
    violations: list[FieldViolation] = []

    trade_id = _extract_str(raw, "trade_id") or ""
    option = _parse_option(_sub_dict(raw, "option_data", violations), violations)
    barrier = _parse_barrier(_sub_dict(raw, "barrier_data", violations), violations)
    if isinstance(barrier, UnsupportedBarrierTypeError):
        return Err(barrier)

    trade_actions = tuple(
        str(a) for a in _list(raw, "trade_actions", "trade_actions", violations)
    )

    bought_amount = _to_decimal(raw.get("bought_amount"))
    sold_amount = _to_decimal(raw.get("sold_amount"))
    for key, val in (("bought_amount", bought_amount), ("sold_amount", sold_amount)):
        if val is None:
            violations.append(FieldViolation(
                path=key, constraint="required numeric", actual_value=repr(raw.get(key)),
            ))

    if violations or option is None or barrier is None:
        return Err(validation_error(
            _SOURCE, f"parse_fx_barrier_option failed: {len(violations)} field error(s)",
            tuple(violations),
        ))
    assert bought_amount is not None
    assert sold_amount is not None

    match FxLegAmounts.create(
        _extract_str(raw, "bought_currency") or "", bought_amount,
        _extract_str(raw, "sold_currency") or "", sold_amount,
    ):
        case Err(e):
            return Err(e)
        case Ok(amounts):
            pass

    return FxEuropeanBarrierOption.create(
        trade_id=trade_id, option=option, barrier=barrier,
        amounts=amounts, trade_actions=trade_actions,
    )


def trade_to_dict(trade: FxEuropeanBarrierOption) -> dict[str, Any]:
    """Serialize a trade to the raw shape accepted by parse_fx_barrier_option."""
    option, barrier, amounts = trade.option, trade.barrier, trade.amounts
    return {
        "trade_id": trade.trade_id,
        "option_data": {
            "long_short": option.long_short.value,
            "option_type": option.option_type.value,
            "style": option.style,
            "exercise_dates": [d.isoformat() for d in option.exercise_dates],
            "premiums": [
                {
                    "amount": str(p.amount.amount),
                    "currency": p.amount.currency.value,
                    "pay_date": p.pay_date.isoformat(),
                }
                for p in option.premiums
            ],
        },
        "barrier_data": {
            "type": barrier.barrier_type.value,
            "levels": [str(lv) for lv in barrier.levels],
            "rebate": str(barrier.rebate),
            "style": barrier.style,
        },
        "bought_currency": amounts.bought_currency,
        "bought_amount": str(amounts.bought_amount.value),
        "sold_currency": amounts.sold_currency,
        "sold_amount": str(amounts.sold_amount.value),
        "trade_actions": list(trade.trade_actions),
    }
