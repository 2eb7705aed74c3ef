r"""@package taylorseries.series.evaluators

Evaluators summing taylor.TaylorSeries objects under different truncation
policies.

Users of the series module usually create these through the convenience
methods of taylor.TaylorSeries, e.g.

~~~.py
ev = series.converging(1e-12)
res = ev(0.5)
print(res.value, res.diagnostics)
~~~

Three policies are implemented:

    * FixedOrderEvaluator sums all terms up to a given index. It is the
      trusted primitive and does no checks whatsoever.
    * ConvergenceEvaluator sums until two consecutive partial sums agree to
      a given precision, watching for non-finite terms and growing
      differences along the way.
    * RemainderBoundEvaluator uses a caller supplied bound on the derivatives
      of the represented function to find the minimal order guaranteeing the
      requested precision via Taylor's theorem, and then delegates to a
      FixedOrderEvaluator.

Evaluators are snapshots: they copy everything they need from the series at
creation time and keep no state between calls, so a single evaluator may be
called from multiple threads.

Like the `fp`/`mp` contexts of `mpmath`, each evaluator either works with
Python floats (`use_mp=False`, the default) or with `mpmath.mpf` numbers at
the current `mp.dps` precision (`use_mp=True`).
"""

from abc import ABCMeta, abstractmethod
import logging
import math
import warnings

import numpy as np
from mpmath import mp

from ..numutils import to_number, log_factorial, log_abs
from ..utils import isiterable
from .common import mpmath_context, SeriesWarning
from .common import DEFAULT_MAX_ITERATIONS, DEFAULT_MAX_PROBE_ORDER
from .common import _check_precision, _check_max_iterations
from .results import Diagnostic, ExpansionResult


__all__ = [
    "FixedOrderEvaluator",
    "ConvergenceEvaluator",
    "RemainderBoundEvaluator",
]


logger = logging.getLogger(__name__)


class _Evaluator(metaclass=ABCMeta):
    r"""Base class for all series evaluator classes.

    Evaluators are callable with a single point `x` or an iterable of points.
    In the latter case, a list of results is returned.

    Sub classes only need to implement _eval().
    """
    def __init__(self, series, use_mp=False):
        r"""Base class init for evaluators.

        @param series
            The taylor.TaylorSeries object for which this evaluator is
            created.
        @param use_mp
            Whether computation should use `mpmath` (if `True`) or floating
            point operations.
        """
        ## The (immutable) series this evaluator is created for.
        self.series = series
        ## Callable producing `(coefficient, exponent)` pairs.
        self._summand = series.summand
        ## First index to include.
        self.start = series.start
        ## Boolean indicating if computation should use `mpmath` (if `True`)
        ## or floating point operations.
        self.use_mp = use_mp
        ## Either `mpmath.mp` or `mpmath.fp`, depending on `use_mp`.
        self.ctx = mpmath_context(use_mp)
        ## Expansion point converted to the numeric type in use.
        self.center = self.convert(series.center)
        if use_mp:
            self._isnan, self._isinf = mp.isnan, mp.isinf
        else:
            self._isnan, self._isinf = math.isnan, math.isinf

    def convert(self, value):
        r"""Convert a scalar to the numeric type used by this evaluator."""
        return to_number(value, self.use_mp)

    def __call__(self, x):
        r"""Evaluate the series at a point `x` or each point in an iterable."""
        if isiterable(x):
            return [self._eval(self.convert(xi)) for xi in x]
        return self._eval(self.convert(x))

    @abstractmethod
    def _eval(self, x):
        r"""Evaluate the series at the already converted point `x`."""
        pass

    def function(self):
        r"""Return a plain callable evaluating at a single point."""
        return lambda x: self._eval(self.convert(x))

    def _term(self, n, dx):
        r"""Compute the n'th term \f$ a_n dx^{p_n} \f$.

        Terms with a vanishing coefficient are exactly zero, the power is not
        even computed. Division by zero and overflow inside the summand or the
        power result in an infinite term, mimicking IEEE arithmetics which
        Python floats raise on instead. The sign of this infinity is that of
        the term, as far as it is known.
        """
        coeff = exponent = None
        try:
            with np.errstate(all='ignore'):
                coeff, exponent = self._summand(n)
                coeff = self.convert(coeff)
                if not coeff:
                    return coeff
                return coeff * dx**exponent
        except (ZeroDivisionError, OverflowError):
            return self._infinite_term(coeff, exponent, dx)

    def _infinite_term(self, coeff, exponent, dx):
        r"""Signed infinity replacing a term that could not be computed.

        If the summand itself failed, the sign is unknown and positive
        infinity is returned.
        """
        inf = self.convert('inf')
        if coeff is None:
            return inf
        negative = bool(coeff < 0)
        if dx < 0 and exponent % 2:
            negative = not negative
        return -inf if negative else inf

    def _sum(self, dx, to):
        r"""Sum all terms from `start` to index `to` in ascending order."""
        result = self.convert(0)
        for n in range(self.start, to+1):
            result += self._term(n, dx)
        return result


class FixedOrderEvaluator(_Evaluator):
    r"""Evaluator summing all terms up to a fixed index.

    This is the low-level primitive used when the correct order is known
    beforehand. No checks are performed, non-finite terms propagate to the
    result according to the usual floating point rules.

    Calling the evaluator returns the value directly (not an ExpansionResult).
    """
    def __init__(self, series, to, use_mp=False):
        r"""Create a fixed order evaluator.

        @param series
            The taylor.TaylorSeries to evaluate.
        @param to
            Last index to include. If ``to < series.start``, the empty sum
            (zero) results.
        @param use_mp
            Whether to use `mpmath` arithmetics.
        """
        super(FixedOrderEvaluator, self).__init__(series, use_mp=use_mp)
        ## Last index included in the sum.
        self.to = to

    def _eval(self, x):
        return self._sum(x - self.center, self.to)


class ConvergenceEvaluator(_Evaluator):
    r"""Evaluator summing terms until consecutive partial sums agree.

    Summation stops once the sum has been nonzero at least once and the
    difference between the last two partial sums is smaller than the desired
    precision. The nonzero condition prevents series starting with vanishing
    terms (e.g. pure odd/even series with index-aligned exponents) to be
    considered converged right away.

    Non-finite terms stop the summation immediately and the last finite
    partial sum is returned with a corresponding diagnostic. If the index
    exceeds the iteration cap, the summation stops too.

    NOTE: Python floats raise `ZeroDivisionError` where IEEE arithmetics
          would produce NaN or infinity, and the raised error does not tell
          which one it would have been. Any such error is reported as
          `infinity-encountered`, even for e.g. ``math.nan / 0``. Summands
          using NumPy scalars (e.g. `numpy.float64`) are not affected since
          they follow IEEE rules.

    Finally, if the first difference of partial sums was smaller than the last
    one, divergence is suspected. This is a cheap heuristic only. It misses
    e.g. the harmonic series and may fire for convergent series with growing
    initial terms. Use RemainderBoundEvaluator if you need guarantees.
    """
    def __init__(self, series, precision, max_iterations=DEFAULT_MAX_ITERATIONS,
                 use_mp=False):
        r"""Create a convergence based evaluator.

        @param series
            The taylor.TaylorSeries to evaluate.
        @param precision
            Positive target difference of consecutive partial sums.
        @param max_iterations
            Largest index to include in the sum. Default is
            common.DEFAULT_MAX_ITERATIONS.
        @param use_mp
            Whether to use `mpmath` arithmetics.
        """
        super(ConvergenceEvaluator, self).__init__(series, use_mp=use_mp)
        _check_precision(precision)
        _check_max_iterations(max_iterations)
        ## Target difference of consecutive partial sums.
        self.precision = self.convert(precision)
        ## Largest index to include.
        self.max_iterations = max_iterations

    def _eval(self, x):
        dx = x - self.center
        value = self.convert(0)
        diagnostics = []
        deltas = []
        nonzero = False
        n = self.start
        while True:
            if n > self.max_iterations:
                diagnostics.append(Diagnostic.max_iterations_reached(
                    deltas[-1] if deltas else None
                ))
                break
            term = self._term(n, dx)
            if self._isinf(term):
                diagnostics.append(Diagnostic.infinity_encountered())
                break
            if self._isnan(term):
                diagnostics.append(Diagnostic.not_a_number_encountered())
                break
            prev = value
            value = value + term
            if value:
                nonzero = True
            delta = abs(value - prev)
            deltas.append(delta)
            n += 1
            if nonzero and delta < self.precision:
                break
        if deltas and deltas[0] < deltas[-1]:
            diagnostics.append(Diagnostic.divergence_suspected())
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Summed terms %s to %s at x=%s: %s", self.start, n-1,
                         x, [d.kind for d in diagnostics] or "converged")
        return ExpansionResult(value, diagnostics)


class RemainderBoundEvaluator(_Evaluator):
    r"""Evaluator with guaranteed precision based on Taylor's theorem.

    Given a bound \f$ M_{n+1} \f$ on the \f$ (n+1) \f$'th derivative of the
    represented function between the center and `x`, the error of the series
    truncated after order \f$ n \f$ is at most
    \f[
        R_n(x) = M_{n+1} \frac{|x - x_0|^{n+1}}{(n+1)!}.
    \f]
    For each point, the minimal order with \f$ R_n(x) \le \epsilon \f$ is
    found by doubling the order until the bound holds, followed by a binary
    search between the last failing and first succeeding order. The series is
    then summed up to that order using a FixedOrderEvaluator.

    The precision guarantee is only as good as the supplied bound. The order
    search assumes \f$ R_n \f$ eventually drops below the precision. To avoid
    endless probing for bounds that don't, the order is capped at
    `max_iterations` or, if that is not given, at `max_probe_order`.

    NaN and infinite values can only be detected after summation. They are
    reported via the corresponding diagnostics.
    """
    def __init__(self, series, precision, bound, max_iterations=None,
                 use_mp=False, max_probe_order=DEFAULT_MAX_PROBE_ORDER):
        r"""Create a remainder bound based evaluator.

        @param series
            The taylor.TaylorSeries to evaluate.
        @param precision
            Positive maximum error of the result.
        @param bound
            Callable ``bound(n, x, center)`` returning a bound on the
            magnitude of the n'th derivative of the represented function on
            the interval between `center` and `x`.
        @param max_iterations
            Optional cap on the order. If the order needed to guarantee the
            precision is larger, the capped order is used and a
            `max-iterations-reached` diagnostic is added.
        @param use_mp
            Whether to use `mpmath` arithmetics.
        @param max_probe_order
            Order at which the search gives up in case no `max_iterations`
            is given. Default is common.DEFAULT_MAX_PROBE_ORDER.
        """
        super(RemainderBoundEvaluator, self).__init__(series, use_mp=use_mp)
        if not callable(bound):
            raise TypeError("`bound` argument must be callable.")
        _check_precision(precision)
        _check_max_iterations(max_iterations, allow_none=True)
        _check_max_iterations(max_probe_order)
        ## Guaranteed maximum error.
        self.precision = self.convert(precision)
        ## Bound on the derivatives of the represented function.
        self.bound = bound
        ## Optional cap on the order.
        self.max_iterations = max_iterations
        ## Order at which to stop probing without a cap.
        self.max_probe_order = max_probe_order
        self._log_precision = self._log(self.precision)

    def _log(self, value):
        return self.ctx.ln(value) if self.use_mp else math.log(value)

    def _log_remainder(self, n, x):
        r"""Logarithm of the remainder bound after order `n` at `x`.

        The bound is never converted to the numeric type before taking the
        logarithm, so that e.g. exact integer bounds beyond the `float` range
        are handled correctly. A bound overflowing while being computed is
        treated as infinite.
        """
        dx = abs(x - self.center)
        try:
            M = self.bound(n+1, x, self.center)
        except OverflowError:
            return self.convert('inf')
        if not M or not dx:
            return -self.convert('inf')
        return (log_abs(M, self.use_mp) + (n+1) * self._log(dx)
                - log_factorial(n+1, self.use_mp))

    def _satisfied(self, n, x):
        return self._log_remainder(n, x) <= self._log_precision

    def remainder(self, n, x):
        r"""Return the bound on the error when truncating after order `n`.

        Remainders too large for a `float` are returned as infinity.
        """
        x = self.convert(x)
        log_rem = self._log_remainder(n, x)
        if self.use_mp:
            return mp.exp(log_rem)
        try:
            return math.exp(log_rem)
        except OverflowError:
            return math.inf

    def find_order(self, x):
        r"""Find the minimal order guaranteeing the precision at `x`.

        Returns `None` if the order would exceed `max_iterations` (or
        `max_probe_order` in case no `max_iterations` is set).
        """
        return self._find_order(self.convert(x))

    def _find_order(self, x):
        if self.max_iterations is None:
            ceiling = self.max_probe_order
        else:
            ceiling = self.max_iterations
        lower, upper = 0, 1
        probes = 1
        while not self._satisfied(upper, x):
            if upper >= ceiling:
                return None
            lower, upper = upper, 2*upper
            probes += 1
        while upper - lower > 1:
            mid = (upper + lower + 1) // 2
            if self._satisfied(mid, x):
                upper = mid
            else:
                lower = mid
        logger.debug("Found order %s at x=%s after %s probes.", upper, x, probes)
        return upper

    def _eval(self, x):
        diagnostics = []
        order = self._find_order(x)
        if order is None:
            if self.max_iterations is None:
                order = self.max_probe_order
                warnings.warn(
                    "Remainder bound did not drop below %s up to order %s. "
                    "Is the bound correct?" % (self.precision, order),
                    SeriesWarning,
                )
            else:
                order = self.max_iterations
            diagnostics.append(Diagnostic.max_iterations_reached())
        elif self.max_iterations is not None and order > self.max_iterations:
            order = self.max_iterations
            diagnostics.append(Diagnostic.max_iterations_reached())
        fixed = FixedOrderEvaluator(self.series, max(order, self.start),
                                    use_mp=self.use_mp)
        value = fixed._eval(x)
        if self._isnan(value):
            diagnostics.append(Diagnostic.not_a_number_encountered())
            value = self.convert('nan')
        elif self._isinf(value):
            diagnostics.append(Diagnostic.infinity_encountered())
        return ExpansionResult(value, diagnostics)
