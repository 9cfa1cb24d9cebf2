"""Tests for fxbarrier.core.decimal_math — pure-Decimal exp, ln, sqrt, N(x)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fxbarrier.core.decimal_math import exp_d, ln_d, norm_cdf_d, sqrt_d

_TOL = Decimal("1e-24")


def _close(a: Decimal, b: Decimal, tol: Decimal = _TOL) -> bool:
    return abs(a - b) <= tol


class TestExp:
    def test_zero(self) -> None:
        assert exp_d(Decimal("0")) == Decimal("1")

    def test_one(self) -> None:
        assert _close(exp_d(Decimal("1")), Decimal("2.718281828459045235360287471"))

    def test_negative(self) -> None:
        assert _close(exp_d(Decimal("-1")) * exp_d(Decimal("1")), Decimal("1"))

    def test_large_argument(self) -> None:
        assert _close(exp_d(Decimal("10")) / Decimal("22026.46579480671651695790065"),
                      Decimal("1"))


class TestLn:
    def test_one(self) -> None:
        assert ln_d(Decimal("1")) == Decimal("0")

    def test_two(self) -> None:
        assert _close(ln_d(Decimal("2")), Decimal("0.6931471805599453094172321215"))

    def test_small_argument(self) -> None:
        assert _close(ln_d(Decimal("0.001")), Decimal("-6.907755278982137052053974365"))

    @pytest.mark.parametrize("x", ["0", "-1"])
    def test_non_positive_raises(self, x: str) -> None:
        with pytest.raises(ValueError, match="x > 0"):
            ln_d(Decimal(x))

    @given(st.decimals(min_value=Decimal("-5"), max_value=Decimal("5"), places=6))
    def test_inverse_of_exp(self, x: Decimal) -> None:
        assert _close(ln_d(exp_d(x)), x, Decimal("1e-22"))


class TestSqrt:
    def test_exact(self) -> None:
        assert sqrt_d(Decimal("4")) == Decimal("2")

    def test_zero(self) -> None:
        assert sqrt_d(Decimal("0")) == Decimal("0")

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            sqrt_d(Decimal("-1"))


class TestNormCdf:
    def test_zero_is_half(self) -> None:
        assert norm_cdf_d(Decimal("0")) == Decimal("0.5")

    def test_known_quantile(self) -> None:
        assert _close(norm_cdf_d(Decimal("1.96")), Decimal("0.9750021048517795"), Decimal("1e-15"))

    def test_tails_saturate(self) -> None:
        assert norm_cdf_d(Decimal("12")) == Decimal("1")
        assert norm_cdf_d(Decimal("-40")) == Decimal("0")

    def test_continuous_across_cutoff(self) -> None:
        # both sides of the cutoff agree to the 28-digit working precision
        assert abs(norm_cdf_d(Decimal("-11.99")) - norm_cdf_d(Decimal("-12"))) < Decimal("1e-27")
        assert abs(norm_cdf_d(Decimal("11.99")) - norm_cdf_d(Decimal("12"))) < Decimal("1e-27")

    def test_deep_tail_is_small_but_positive(self) -> None:
        value = norm_cdf_d(Decimal("-8"))
        assert Decimal("0") < value < Decimal("1e-14")

    @given(st.decimals(min_value=Decimal("-6"), max_value=Decimal("6"), places=4))
    def test_symmetry(self, x: Decimal) -> None:
        assert _close(norm_cdf_d(x) + norm_cdf_d(-x), Decimal("1"))

    @given(
        st.decimals(min_value=Decimal("-6"), max_value=Decimal("6"), places=3),
        st.decimals(min_value=Decimal("0.001"), max_value=Decimal("1"), places=3),
    )
    def test_monotone(self, x: Decimal, step: Decimal) -> None:
        assert norm_cdf_d(x) <= norm_cdf_d(x + step)
