"""Pricing output contracts. Numerics are Decimal, mappings are FrozenMap."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import final

from fxbarrier.core.types import FrozenMap, UtcDatetime


@final
@dataclass(frozen=True, slots=True)
class TradeOutputs:
    """Trade-level reporting fields.

    maturity = max(expiry date, all premium dates).
    annotations: boughtCurrency, boughtAmount, soldCurrency, soldAmount.
    """

    npv_currency: str
    notional: Decimal
    notional_currency: str
    maturity: date
    annotations: FrozenMap[str, str | Decimal]


@final
@dataclass(frozen=True, slots=True)
class ValuationResult:
    """NPV of one trade in its NPV currency.

    components holds the signed, scaled value of each leg, keyed
    "<position>.<leg kind>" for option legs and "premium.<n>" for premiums.
    """

    trade_id: str
    npv: Decimal
    currency: str
    valuation_date: UtcDatetime
    components: FrozenMap[str, Decimal] = FrozenMap.EMPTY
    market_configuration: str = ""
