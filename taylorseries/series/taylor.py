r"""@package taylorseries.series.taylor

Representation of power series expansions.

A TaylorSeries describes the series
\f[
    f(x) = \sum_{n=n_0}^\infty a_n (x - x_0)^{p_n}
\f]
via a *summand* callable returning the pair \f$ (a_n, p_n) \f$ for each
index \f$ n \f$. Allowing arbitrary exponents \f$ p_n \f$ makes it easy to
define series like that of \f$ \sin(x) \f$, which only contain odd powers,
without having to deal with vanishing terms.

NOTE: TaylorSeries objects cannot be evaluated by themselves. Instead, you
      create an *evaluator* (see taylorseries.series.evaluators) for one of
      the supported truncation policies and call that.

@b Examples

~~~.py
series = TaylorSeries(lambda n: (Fraction(1, math.factorial(n)), n))
exp = series.truncated(20)
print(exp(1.0))
~~~
"""

from ..numutils import falling_factorial
from .common import DEFAULT_MAX_ITERATIONS
from .evaluators import FixedOrderEvaluator, ConvergenceEvaluator
from .evaluators import RemainderBoundEvaluator


__all__ = [
    "TaylorSeries",
]


class _DerivativeSummand(object):
    r"""Summand of the term-wise derivative of another summand.

    Stores the original summand and the derivative order instead of a
    closure, so that repeated differentiation adds up orders instead of
    nesting wrappers.
    """
    # pylint: disable=too-few-public-methods
    def __init__(self, summand, order, base_name):
        self.summand = summand
        self.order = order
        self.base_name = base_name
        self.__name__ = "d^%s/dx^%s %s" % (order, order, base_name)

    def __call__(self, n):
        coeff, exponent = self.summand(n)
        factor = falling_factorial(exponent, self.order)
        return coeff * factor, exponent - self.order


class TaylorSeries(object):
    r"""Immutable description of a power series expansion.

    The series is fully specified by the `summand`, the first index `start`
    and the expansion point `center`. None of these can be changed after
    construction. Derived series (e.g. derivatives) are new objects.

    The summand must be a pure function. Evaluators may call it with any
    index, possibly multiple times and from multiple threads.
    """

    def __init__(self, summand, start=0, center=0, name=None):
        r"""Create a series representation.

        Args:
            summand: Callable taking a non-negative integer index `n` and
                returning a pair ``(coefficient, exponent)`` with integer
                `exponent`. The coefficient may be any real number type that
                can be converted to a `float` (or `mpmath.mpf`), e.g. `int`,
                `float`, `fractions.Fraction` or exact `sympy` numbers.
            start: (int, optional)
                First index to include. Default is `0`.
            center: (optional)
                Expansion point \f$ x_0 \f$. Default is `0`.
            name: (string, optional)
                Name for the series. By default, the `__name__` of the summand
                is used if it has one.
        """
        if not callable(summand):
            raise TypeError("`summand` argument must be callable.")
        if isinstance(start, bool) or not isinstance(start, int) or start < 0:
            raise ValueError("Start index must be a non-negative integer, "
                             "got %r." % (start,))
        self.__summand = summand
        self.__start = start
        self.__center = center
        if name is None:
            name = getattr(summand, '__name__', None)
            if name is None or name == '<lambda>':
                name = self.__class__.__name__
        self.__name = name

    @property
    def summand(self):
        r"""Callable producing the ``(coefficient, exponent)`` pairs."""
        return self.__summand

    @property
    def start(self):
        r"""First index included in the sum."""
        return self.__start

    @property
    def center(self):
        r"""Expansion point \f$ x_0 \f$."""
        return self.__center

    @property
    def name(self):
        r"""Name given to this series."""
        return self.__name

    def term(self, n):
        r"""Return the ``(coefficient, exponent)`` pair of the n'th term."""
        return self.__summand(n)

    def differentiate(self, order=1):
        r"""Return the term-wise derivative of the given order.

        The derivative of \f$ a (x - x_0)^p \f$ is computed algebraically as
        \f$ a\, p (p-1) \cdots (p-k+1) (x - x_0)^{p-k} \f$. Terms of low
        order polynomial powers correctly vanish in the process.

        No numerical evaluation takes place and the original series is left
        untouched. An `order` of zero (or, as a no-op, a negative `order`)
        returns this series itself.

        Note that the derivative series need not converge wherever the
        original series does.
        """
        if order <= 0:
            return self
        summand = self.__summand
        base_name = self.__name
        if isinstance(summand, _DerivativeSummand):
            order += summand.order
            base_name = summand.base_name
            summand = summand.summand
        derivative = _DerivativeSummand(summand, order, base_name)
        return TaylorSeries(derivative, start=self.__start,
                            center=self.__center, name=derivative.__name__)

    def truncated(self, to, use_mp=False):
        r"""Create an evaluator summing all terms up to index `to`.

        See evaluators.FixedOrderEvaluator.
        """
        return FixedOrderEvaluator(self, to, use_mp=use_mp)

    def converging(self, precision, max_iterations=DEFAULT_MAX_ITERATIONS,
                   use_mp=False):
        r"""Create an evaluator summing until partial sums agree to `precision`.

        See evaluators.ConvergenceEvaluator.
        """
        return ConvergenceEvaluator(self, precision,
                                    max_iterations=max_iterations,
                                    use_mp=use_mp)

    def bounded(self, precision, bound, max_iterations=None, use_mp=False,
                **kw):
        r"""Create an evaluator guaranteeing `precision` via a remainder bound.

        See evaluators.RemainderBoundEvaluator.
        """
        return RemainderBoundEvaluator(self, precision, bound,
                                       max_iterations=max_iterations,
                                       use_mp=use_mp, **kw)

    def evaluator(self, to=None, precision=None, bound=None,
                  max_iterations=None, use_mp=False):
        r"""Create an evaluator with the truncation policy implied by the args.

        Args:
            to: Fixed order to truncate at. Mutually exclusive with
                `precision`.
            precision: Target precision. Without a `bound`, a heuristic
                convergence check is used, otherwise the order is determined
                from Taylor's remainder theorem.
            bound: Remainder bound callable ``bound(n, x, center)``.
            max_iterations: Cap on the iterations/order. Defaults to
                common.DEFAULT_MAX_ITERATIONS for the heuristic evaluator and
                no cap for the remainder bound evaluator.
            use_mp: Whether the evaluator should use `mpmath` arithmetics.
        """
        if (to is None) == (precision is None):
            raise TypeError("Exactly one of `to` and `precision` must be given.")
        if to is not None:
            return self.truncated(to, use_mp=use_mp)
        if bound is None:
            if max_iterations is None:
                max_iterations = DEFAULT_MAX_ITERATIONS
            return self.converging(precision, max_iterations=max_iterations,
                                   use_mp=use_mp)
        return self.bounded(precision, bound, max_iterations=max_iterations,
                            use_mp=use_mp)

    def str(self):
        """Return the series and its parameters as a string."""
        return "(%s)" % self._expr_str()

    def _expr_str(self):
        return "%s, where start=%r, center=%r" % (
            self.__name, self.__start, self.__center
        )

    def __repr__(self):
        cls = self.__class__.__name__
        return "<%s%s>" % (cls, self.str())
