r"""@package taylorseries.series.catalog

Predefined summands of common Maclaurin series and remainder bounds.

Each summand maps the index `n` to an exact ``(coefficient, exponent)`` pair.
The coefficients are `sympy` numbers (factorials being computed as
\f$ \Gamma(n+1) \f$), which means they are converted to the numeric type of an
evaluator only when used. The same summand therefore yields full precision in
floating point as well as in `mpmath` evaluators.

All series are expansions around zero.

@b Examples

```
    sin = TaylorSeries(catalog.sin)
    j2 = TaylorSeries(catalog.bessel_j(2))
    ev = sin.bounded(1e-10, catalog.sin_bound)
```
"""

import functools

import sympy as sp
from mpmath import mp

from ..numutils import factorial, parity_sign
from .taylor import TaylorSeries


__all__ = [
    "geometric",
    "exp",
    "sin",
    "cos",
    "sinh",
    "cosh",
    "arcsin",
    "arcsinh",
    "arctan",
    "arctanh",
    "log1p",
    "bessel_j",
    "erf",
    "sin_bound",
    "cos_bound",
    "exp_bound",
    "series",
]


def geometric(n):
    r"""\f$ 1/(1-x) = \sum_n x^n \f$ for \f$ |x| < 1 \f$."""
    return sp.Integer(1), n


def exp(n):
    r"""\f$ e^x = \sum_n x^n / n! \f$."""
    return 1 / factorial(n), n


def sin(n):
    return sp.Rational(parity_sign(n), factorial(2*n+1)), 2*n+1


def cos(n):
    return sp.Rational(parity_sign(n), factorial(2*n)), 2*n


def sinh(n):
    return 1 / factorial(2*n+1), 2*n+1


def cosh(n):
    return 1 / factorial(2*n), 2*n


def _arcsin_coeff(n):
    r"""Coefficient \f$ (2n)! / (4^n (n!)^2 (2n+1)) \f$ shared by arcsin/arsinh."""
    return factorial(2*n) / (sp.Integer(4)**n * factorial(n)**2 * (2*n+1))


def arcsin(n):
    r"""\f$ \arcsin(x) \f$ for \f$ |x| \le 1 \f$."""
    return _arcsin_coeff(n), 2*n+1


def arcsinh(n):
    r"""\f$ \mathrm{arsinh}(x) \f$ for \f$ |x| \le 1 \f$."""
    return parity_sign(n) * _arcsin_coeff(n), 2*n+1


def arctan(n):
    r"""\f$ \arctan(x) \f$ for \f$ |x| \le 1 \f$."""
    return sp.Rational(parity_sign(n), 2*n+1), 2*n+1


def arctanh(n):
    r"""\f$ \mathrm{artanh}(x) \f$ for \f$ |x| < 1 \f$."""
    return sp.Rational(1, 2*n+1), 2*n+1


def log1p(n):
    r"""\f$ \log(1+x) \f$ for \f$ -1 < x \le 1 \f$.

    The term for `n=0` is zero, so that the index coincides with the power.
    """
    if n == 0:
        return sp.Integer(0), 0
    return sp.Rational(parity_sign(n+1), n), n


def _bessel_j(nu, m):
    coeff = parity_sign(m) / (factorial(m) * factorial(m+nu)
                              * sp.Integer(2)**(2*m+nu))
    return coeff, 2*m+nu


def bessel_j(nu):
    r"""Return the summand of the Bessel function \f$ J_\nu(x) \f$.

    The series is
    \f[
        J_\nu(x) = \sum_{m=0}^\infty \frac{(-1)^m}{m!\,(m+\nu)!}
            \left(\frac{x}{2}\right)^{2m+\nu},
    \f]
    which has integer powers only for integer `nu`. Negative or non-integer
    orders raise a `ValueError`.
    """
    if isinstance(nu, bool) or not isinstance(nu, int) or nu < 0:
        raise ValueError("Bessel order must be a non-negative integer, got %r."
                         % (nu,))
    summand = functools.partial(_bessel_j, nu)
    summand.__name__ = "bessel_j(%s)" % nu
    return summand


def erf(n):
    r"""Error function \f$ \frac{2}{\sqrt\pi} \sum_n \frac{(-1)^n x^{2n+1}}{n!(2n+1)} \f$."""
    coeff = 2 * parity_sign(n) / (sp.sqrt(sp.pi) * factorial(n) * (2*n+1))
    return coeff, 2*n+1


def sin_bound(n, x, center):
    r"""All derivatives of \f$ \sin \f$ are bounded by one."""
    # pylint: disable=unused-argument
    return 1


def cos_bound(n, x, center):
    r"""All derivatives of \f$ \cos \f$ are bounded by one."""
    # pylint: disable=unused-argument
    return 1


def exp_bound(n, x, center):
    r"""Bound \f$ e^t \le 3^t \f$ of all derivatives of \f$ \exp \f$.

    The maximum is attained at the right end of the interval between `center`
    and `x`. No evaluation of the exponential function is needed.

    The bound is returned as `mpmath.mpf`, which cannot overflow even where
    \f$ 3^x \f$ exceeds the `float` range while \f$ e^x \f$ does not.
    """
    # pylint: disable=unused-argument
    return mp.mpf(3) ** max(x, center, 0)


_SUMMANDS = {
    "geometric": geometric,
    "exp": exp,
    "sin": sin,
    "cos": cos,
    "sinh": sinh,
    "cosh": cosh,
    "arcsin": arcsin,
    "arcsinh": arcsinh,
    "arctan": arctan,
    "arctanh": arctanh,
    "log1p": log1p,
    "erf": erf,
}


def series(name, **kw):
    r"""Create a TaylorSeries from the name of a catalog summand.

    Bessel functions are available as e.g. ``"bessel_j(2)"``. Further keyword
    arguments are passed to taylor.TaylorSeries. Unknown names raise a
    `KeyError`.
    """
    if name.startswith("bessel_j(") and name.endswith(")"):
        try:
            nu = int(name[len("bessel_j("):-1])
        except ValueError:
            raise KeyError("Unknown series: %r" % name)
        return TaylorSeries(bessel_j(nu), **kw)
    try:
        summand = _SUMMANDS[name]
    except KeyError:
        raise KeyError("Unknown series: %r" % name)
    return TaylorSeries(summand, **kw)
