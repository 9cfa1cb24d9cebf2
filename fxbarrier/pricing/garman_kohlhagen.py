"""Garman-Kohlhagen closed-form leg pricer, all in Decimal.

Flat spot, volatility and continuously compounded domestic (quote) and
foreign (base) rates. Year fractions are ACT/365 from valuation_date.

    F  = S * exp((rd - rf) * t)
    d1 = (ln(F / K) + sigma^2 t / 2) / (sigma sqrt t),  d2 = d1 - sigma sqrt t
    call    = DFd * (F N(d1) - K N(d2))       put    = DFd * (K N(-d2) - F N(-d1))
    digital = cash * DFd * N(d2)  (call)      cash * DFd * N(-d2)  (put)

Values are in the quote currency per one unit of base currency.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from typing import final

from fxbarrier.core.decimal_math import exp_d, ln_d, norm_cdf_d, sqrt_d
from fxbarrier.core.money import DECIMAL_CONTEXT, CurrencyPair, Money
from fxbarrier.instrument.payoffs import OptionType

_ZERO = Decimal("0")
_ONE = Decimal("1")
_TWO = Decimal("2")
_DAYS_PER_YEAR = Decimal("365")


@final
@dataclass(frozen=True, slots=True)
class GarmanKohlhagenLegPricer:
    """Deterministic LegPricer for one currency pair under flat market data."""

    valuation_date: date
    spot: Decimal
    volatility: Decimal
    domestic_rate: Decimal
    foreign_rate: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.spot, Decimal) or not self.spot.is_finite() or self.spot <= 0:
            raise TypeError(f"GarmanKohlhagenLegPricer.spot must be Decimal > 0, got {self.spot!r}")
        if (
            not isinstance(self.volatility, Decimal)
            or not self.volatility.is_finite()
            or self.volatility < 0
        ):
            raise TypeError(
                "GarmanKohlhagenLegPricer.volatility must be Decimal >= 0, "
                f"got {self.volatility!r}"
            )
        for name in ("domestic_rate", "foreign_rate"):
            rate = getattr(self, name)
            if not isinstance(rate, Decimal) or not rate.is_finite():
                raise TypeError(f"GarmanKohlhagenLegPricer.{name} must be finite Decimal")

    def year_fraction(self, d: date) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return Decimal((d - self.valuation_date).days) / _DAYS_PER_YEAR

    def _discount(self, rate: Decimal, t: Decimal) -> Decimal:
        return exp_d(-(rate * t))

    def _forward(self, t: Decimal) -> Decimal:
        with localcontext(DECIMAL_CONTEXT):
            return self.spot * exp_d((self.domestic_rate - self.foreign_rate) * t)

    def _d1_d2(self, forward: Decimal, strike: Decimal, t: Decimal) -> tuple[Decimal, Decimal]:
        with localcontext(DECIMAL_CONTEXT):
            std_dev = self.volatility * sqrt_d(t)
            d1 = (ln_d(forward / strike) + std_dev * std_dev / _TWO) / std_dev
            return d1, d1 - std_dev

    def _degenerate(self, t: Decimal) -> bool:
        return t <= _ZERO or self.volatility == _ZERO

    def price_vanilla(
        self, currency_pair: CurrencyPair, expiry: date,
        strike: Decimal, option_type: OptionType,
    ) -> Decimal:
        t = self.year_fraction(expiry)
        if t <= _ZERO:
            forward, df = self.spot, _ONE
        else:
            forward, df = self._forward(t), self._discount(self.domestic_rate, t)
        with localcontext(DECIMAL_CONTEXT):
            if strike <= _ZERO:
                # worthless put, call is a forward
                return df * forward if option_type is OptionType.CALL else _ZERO
            if self._degenerate(t):
                intrinsic = forward - strike if option_type is OptionType.CALL else strike - forward
                return df * max(intrinsic, _ZERO)
            d1, d2 = self._d1_d2(forward, strike, t)
            if option_type is OptionType.CALL:
                return df * (forward * norm_cdf_d(d1) - strike * norm_cdf_d(d2))
            return df * (strike * norm_cdf_d(-d2) - forward * norm_cdf_d(-d1))

    def price_digital(
        self, currency_pair: CurrencyPair, expiry: date,
        trigger: Decimal, cash: Decimal, option_type: OptionType,
    ) -> Decimal:
        if cash == _ZERO:
            return _ZERO
        t = self.year_fraction(expiry)
        if t <= _ZERO:
            forward, df = self.spot, _ONE
        else:
            forward, df = self._forward(t), self._discount(self.domestic_rate, t)
        with localcontext(DECIMAL_CONTEXT):
            if self._degenerate(t) or trigger <= _ZERO:
                if option_type is OptionType.CALL:
                    paid = forward > trigger
                else:
                    paid = forward < trigger
                return df * cash if paid else _ZERO
            _, d2 = self._d1_d2(forward, trigger, t)
            probability = norm_cdf_d(d2) if option_type is OptionType.CALL else norm_cdf_d(-d2)
            return cash * df * probability

    def price_payment(
        self, currency_pair: CurrencyPair, payment: Money,
        pay_date: date, configuration: str,
    ) -> Decimal:
        """Discounted payment in the quote currency. Payments before valuation are worth 0.

        Raises
        ------
        ValueError
            If the payment currency is neither side of the pair.
        """
        t = self.year_fraction(pay_date)
        if t < _ZERO:
            return _ZERO
        ccy = payment.currency.value
        with localcontext(DECIMAL_CONTEXT):
            if ccy == currency_pair.quote.value:
                return payment.amount * self._discount(self.domestic_rate, t)
            if ccy == currency_pair.base.value:
                return payment.amount * self.spot * self._discount(self.foreign_rate, t)
        raise ValueError(
            f"Payment currency {ccy} is not part of {currency_pair.value}"
        )
