"""Pure-Decimal mathematical functions.

Every intermediate runs in DECIMAL_CONTEXT with 10 guard digits, then is
rounded back to prec=28. No float, no math module.

Functions
---------
exp_d       : Decimal -> Decimal   (Taylor series with ln2 range reduction)
ln_d        : Decimal -> Decimal   (atanh series; ValueError on non-positive)
sqrt_d      : Decimal -> Decimal   (Decimal.sqrt in DECIMAL_CONTEXT)
norm_cdf_d  : Decimal -> Decimal   (standard normal CDF via erf series)
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from fxbarrier.core.money import DECIMAL_CONTEXT

_GUARD_DIGITS = 10
_INTERNAL_PREC = DECIMAL_CONTEXT.prec + _GUARD_DIGITS

_ZERO = Decimal("0")
_ONE = Decimal("1")
_TWO = Decimal("2")
_HALF = Decimal("0.5")

_PI = Decimal("3.14159265358979323846264338327950288419716939937510")

# Beyond this N(x) is within 1e-32 of 0 or 1 in absolute terms.
_CDF_CUTOFF = Decimal("12")


def _to_output(value: Decimal) -> Decimal:
    with localcontext(DECIMAL_CONTEXT):
        return value + _ZERO


def _epsilon(prec: int) -> Decimal:
    return Decimal(10) ** (-(prec + 2))


def _ln2(prec: int) -> Decimal:
    """ln(2) = 2 * atanh(1/3)."""
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = prec + 5
        third = _ONE / Decimal(3)
        third_sq = third * third
        term = third
        result = third
        for k in range(1, 300):
            term = term * third_sq
            contrib = term / Decimal(2 * k + 1)
            result = result + contrib
            if abs(contrib) < _epsilon(ctx.prec):
                break
        return result * _TWO


def exp_d(x: Decimal) -> Decimal:
    """exp(x) with x = k*ln2 + r, |r| <= ln2/2, exp(x) = 2^k * exp(r)."""
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC
        if x == _ZERO:
            return _ONE

        ln2 = _ln2(ctx.prec)
        k = int((x / ln2).to_integral_value())
        r = x - Decimal(k) * ln2

        exp_r = _ONE
        term = _ONE
        for n in range(1, 200):
            term = term * r / Decimal(n)
            exp_r = exp_r + term
            if abs(term) < _epsilon(ctx.prec):
                break

        result = exp_r * (_TWO ** k) if k >= 0 else exp_r / (_TWO ** (-k))
        return _to_output(result)


def ln_d(x: Decimal) -> Decimal:
    """ln(x) for x > 0.

    Raises
    ------
    ValueError
        If x <= 0.
    """
    if x <= _ZERO:
        raise ValueError(f"ln_d requires x > 0, got {x}")
    if x == _ONE:
        return _ZERO

    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC

        # bring val into [0.5, 2): ln(x) = ln(val) + e*ln(2)
        val = x + _ZERO
        e = 0
        while val >= _TWO:
            val = val / _TWO
            e += 1
        while val < _HALF:
            val = val * _TWO
            e -= 1

        u = (val - _ONE) / (val + _ONE)
        u_sq = u * u
        term = u
        ln_val = u
        for k in range(1, 300):
            term = term * u_sq
            contrib = term / Decimal(2 * k + 1)
            ln_val = ln_val + contrib
            if abs(contrib) < _epsilon(ctx.prec):
                break

        return _to_output(ln_val * _TWO + Decimal(e) * _ln2(ctx.prec))


def sqrt_d(x: Decimal) -> Decimal:
    """sqrt(x) for x >= 0. ValueError on negative input."""
    if x < _ZERO:
        raise ValueError(f"sqrt_d requires x >= 0, got {x}")
    with localcontext(DECIMAL_CONTEXT):
        return x.sqrt()


def _erf_positive(x: Decimal) -> Decimal:
    """erf(x) for x >= 0 at internal precision.

    erf(x) = 2/sqrt(pi) * exp(-x^2) * sum_{n>=0} 2^n x^(2n+1) / (1*3*...*(2n+1))

    Every term is positive, so there is no cancellation at large x.
    """
    if x == _ZERO:
        return _ZERO
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC
        two_x_sq = _TWO * x * x
        term = x
        total = x
        for n in range(1, 2000):
            term = term * two_x_sq / Decimal(2 * n + 1)
            total = total + term
            if term < total * _epsilon(ctx.prec):
                break
        return _TWO / _PI.sqrt() * exp_d(-(x * x)) * total


def norm_cdf_d(x: Decimal) -> Decimal:
    """Standard normal CDF N(x) = (1 + erf(x / sqrt 2)) / 2."""
    if x >= _CDF_CUTOFF:
        return _ONE
    if x <= -_CDF_CUTOFF:
        return _ZERO
    with localcontext(DECIMAL_CONTEXT) as ctx:
        ctx.prec = _INTERNAL_PREC
        z = abs(x) / _TWO.sqrt()
        half_erf = _erf_positive(z) / _TWO
        result = _HALF + half_erf if x >= _ZERO else _HALF - half_erf
        return _to_output(result)
