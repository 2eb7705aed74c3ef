r"""@package taylorseries.numutils

Miscellaneous numerical utilities and helpers.


@b Examples

```
    >>> falling_factorial(5, 3)
    60
    >>> factorial(5)
    120
```
"""

from fractions import Fraction
import numbers
import math

from scipy.special import gammaln
from mpmath import mp, mpf
import sympy as sp


__all__ = [
    "factorial",
    "falling_factorial",
    "parity_sign",
    "log_factorial",
    "to_number",
    "log_abs",
    "isclose",
]


def factorial(n):
    r"""Exact factorial \f$ n! = \Gamma(n+1) \f$ as a `sympy` integer.

    Going through the gamma function keeps the result a `sympy` number for
    integer and non-integer arguments alike, so coefficients built from it
    stay exact until they are converted to a numeric type.
    """
    return sp.gamma(sp.Integer(n) + 1)


def falling_factorial(p, k):
    r"""Compute the falling product \f$ p (p-1) \cdots (p-k+1) \f$.

    The result is a plain Python integer. For `k <= 0` the empty product `1`
    is returned. Negative `p` is allowed, e.g. ``falling_factorial(-1, 2)``
    is `2`.
    """
    result = 1
    for i in range(k):
        result *= p - i
    return result


def parity_sign(n):
    r"""Return \f$ (-1)^n \f$ as an integer."""
    return -1 if n % 2 else 1


def log_factorial(n, use_mp=False):
    r"""Natural logarithm of \f$ n! \f$.

    Uses `mpmath.loggamma` in case of `use_mp==True` and
    `scipy.special.gammaln` otherwise. Neither overflows for large `n`.
    """
    if use_mp:
        return mp.loggamma(n + 1)
    return float(gammaln(n + 1))


def to_number(value, use_mp=False):
    r"""Convert a coefficient to a `float` or an `mpmath.mpf`.

    Exact `sympy` numbers are evaluated to the current `mp.dps` (plus a few
    guard digits) before conversion in case of `use_mp==True`, which keeps
    catalog coefficients accurate beyond double precision.
    """
    if not use_mp:
        return float(value)
    if isinstance(value, sp.Basic):
        value = value.evalf(mp.dps + 5)
    elif isinstance(value, Fraction):
        return mp.mpf(value.numerator) / value.denominator
    return mp.mpf(value)


def log_abs(value, use_mp=False):
    r"""Natural logarithm of \f$ |v| \f$ for a nonzero real number \f$ v \f$.

    In contrast to ``math.log(abs(to_number(value)))``, this does not go
    through a `float` for integers, fractions, exact `sympy` rationals and
    `mpmath.mpf` numbers. Values far beyond the double precision range, like
    ``math.factorial(1000)``, hence have a finite logarithm.

    Infinite values have an infinite logarithm.
    """
    if use_mp:
        return mp.log(abs(to_number(value, use_mp=True)))
    if isinstance(value, mpf):
        return float(mp.log(abs(value)))
    if isinstance(value, sp.Basic) and value.is_Rational:
        value = Fraction(int(value.p), int(value.q))
    if isinstance(value, Fraction):
        return math.log(abs(value.numerator)) - math.log(value.denominator)
    if isinstance(value, numbers.Integral):
        return math.log(abs(int(value)))
    return math.log(abs(float(value)))


def isclose(a, b, rel_tol=None, abs_tol=None, use_mp=False):
    r"""Test if two numbers agree within an absolute/relative tolerance.

    For floating point comparison (i.e. if `use_mp==False`), the default
    relative tolerance is `1e-9` and the absolute one `0.0`.
    """
    if use_mp:
        return mp.almosteq(a, b, rel_eps=rel_tol, abs_eps=abs_tol)
    if rel_tol is None:
        rel_tol = 1e-9
    if abs_tol is None:
        abs_tol = 0.0
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)
