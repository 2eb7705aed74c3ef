#!/usr/bin/env python3
r"""@package taylorseries.series.test_evaluators

Test suite for the three truncation policies.
"""

import unittest
import warnings
import sys
import math

import numpy as np
from mpmath import mp

from testutils import SeriesTestCase, slowtest
from ..utils import lmap
from ..numutils import isclose
from . import catalog
from .common import SeriesWarning
from .results import Diagnostic, ExpansionResult
from .taylor import TaylorSeries


def _reciprocal(n):
    return 1.0/n, n


def _nan_over_index(n):
    return np.float64('nan')/n, n


def _even_sin(n):
    r"""Sine series indexed by the power, i.e. with vanishing even terms."""
    if n % 2 == 0:
        return 0, n
    return catalog.sin((n-1)//2)[0], n


def _harmonic(n):
    r"""Harmonic series at ``x=1`` (diverges, though the terms decrease)."""
    return 1.0/n, n


class TestFixedOrder(SeriesTestCase):
    def test_exp(self):
        exp = TaylorSeries(catalog.exp).truncated(20)
        self.assertWithin(exp(1.0), math.e, 1e-6)

    def test_ascending_sum(self):
        s = TaylorSeries(catalog.geometric)
        self.assertEqual(s.truncated(3)(2.0), 1.0 + 2.0 + 4.0 + 8.0)
        self.assertEqual(s.truncated(0)(2.0), 1.0)

    def test_start_and_center(self):
        s = TaylorSeries(catalog.geometric, start=2, center=1.0)
        # (x-1)^2 + (x-1)^3 at x = 3
        self.assertEqual(s.truncated(3)(3.0), 4.0 + 8.0)
        # empty sum
        self.assertEqual(s.truncated(1)(3.0), 0.0)

    def test_multiple_points(self):
        ev = TaylorSeries(catalog.exp).truncated(25)
        space = np.linspace(-1, 1, 5)
        self.assertListAlmostEqual(ev(space), lmap(math.exp, space), delta=1e-14)
        f = ev.function()
        self.assertWithin(f(0.5), math.exp(0.5), 1e-14)

    def test_non_finite_terms_propagate(self):
        s = TaylorSeries(_reciprocal)
        self.assertTrue(math.isinf(s.truncated(3)(1.0)))
        s = TaylorSeries(_nan_over_index)
        self.assertTrue(math.isnan(s.truncated(3)(1.0)))

    def test_overflow_sign(self):
        # -1 * 10.0**400 and (-10.0)**401 are both -inf in IEEE arithmetics
        s = TaylorSeries(lambda n: (-1, 400*n), start=1)
        self.assertEqual(s.truncated(1)(10.0), -math.inf)
        s = TaylorSeries(lambda n: (1, 401*n), start=1)
        self.assertEqual(s.truncated(1)(-10.0), -math.inf)
        self.assertEqual(s.truncated(1)(10.0), math.inf)
        s = TaylorSeries(lambda n: (-1, 400*n), start=1)
        self.assertEqual(s.truncated(1)(-10.0), -math.inf)
        # inf - inf
        s = TaylorSeries(lambda n: ((-1)**n, 400*n), start=1)
        self.assertTrue(math.isnan(s.truncated(2)(10.0)))

    def test_pole_sign(self):
        # division by zero in the power takes the sign of the coefficient
        s = TaylorSeries(lambda n: (-2, -1), start=0)
        self.assertEqual(s.truncated(0)(0.0), -math.inf)

    def test_mpmath(self):
        with mp.workdps(40):
            ev = TaylorSeries(catalog.exp).truncated(60, use_mp=True)
            value = ev(1)
            self.assertIsType(value, mp.mpf)
            self.assertTrue(isclose(value, mp.e, rel_tol=mp.mpf(10)**-38,
                                    abs_tol=0, use_mp=True))


class TestConvergence(SeriesTestCase):
    def test_sin(self):
        sin = TaylorSeries(catalog.sin).converging(1e-16)
        res = sin(1.0)
        self.assertIsType(res, ExpansionResult)
        self.assertNoDiagnostics(res)
        self.assertWithin(res.value, math.sin(1.0), 1e-16)

    def test_divergence_suspected(self):
        geom = TaylorSeries(catalog.geometric).converging(1e-3)
        res = geom(2.0)
        self.assertDiagnostic(res, Diagnostic.DIVERGENCE_SUSPECTED)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        # last delta is the last term 2^1000
        self.assertEqual(res.reached_precision, 2.0**1000)

    def test_convergent_geometric(self):
        geom = TaylorSeries(catalog.geometric).converging(1e-12)
        res = geom(0.5)
        self.assertNoDiagnostics(res)
        self.assertWithin(res.value, 2.0, 1e-11)

    def test_infinity(self):
        res = TaylorSeries(_reciprocal).converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertEqual(res.value, 0.0)
        s = TaylorSeries(lambda n: (np.float64(1)/n, n))
        res = s.converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)

    def test_nan(self):
        res = TaylorSeries(_nan_over_index).converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.NOT_A_NUMBER_ENCOUNTERED)
        self.assertNotDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertEqual(res.value, 0.0)

    def test_plain_float_nan(self):
        # Python raises on nan/0, which is indistinguishable from 1/0.
        s = TaylorSeries(lambda n: (math.nan/n, n))
        res = s.converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertNotDiagnostic(res, Diagnostic.NOT_A_NUMBER_ENCOUNTERED)
        s = TaylorSeries(lambda n: (math.nan/n, n), start=1)
        res = s.converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.NOT_A_NUMBER_ENCOUNTERED)
        self.assertEqual(res.value, 0.0)

    def test_negative_overflow(self):
        s = TaylorSeries(lambda n: (1, 101*n))
        res = s.converging(1e-3)(-10.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertEqual(res.value, 1.0 - 10.0**101 + 10.0**202 - 10.0**303)

    def test_last_valid_sum(self):
        def summand(n):
            if n == 3:
                return float('nan'), n
            return 1, n
        res = TaylorSeries(summand).converging(1e-3)(1.0)
        self.assertDiagnostic(res, Diagnostic.NOT_A_NUMBER_ENCOUNTERED)
        self.assertEqual(res.value, 3.0)
        self.assertIsType(res.value, float)

    def test_overflow(self):
        # 10.0**400 overflows, the term is treated as infinite
        s = TaylorSeries(lambda n: (1, 100*n))
        res = s.converging(1e-3)(10.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertEqual(res.value, 1.0 + 10.0**100 + 10.0**200 + 10.0**300)

    def test_nonzero_guard(self):
        # The first term vanishes. Without the guard, the delta of zero would
        # be taken as convergence.
        s = TaylorSeries(_even_sin)
        res = s.converging(10.0)(1.0)
        self.assertEqual(res.value, 1.0)
        res = TaylorSeries(catalog.log1p).converging(1.0)(0.5)
        self.assertEqual(res.value, 0.5)

    def test_all_zero(self):
        res = TaylorSeries(lambda n: (0, n)).converging(1e-3, max_iterations=50)(1.0)
        self.assertEqual(res.value, 0.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertEqual(res.reached_precision, 0.0)
        self.assertNotDiagnostic(res, Diagnostic.DIVERGENCE_SUSPECTED)

    def test_max_iterations(self):
        s = TaylorSeries(catalog.exp)
        res = s.converging(1e-16, max_iterations=5)(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertNotDiagnostic(res, Diagnostic.DIVERGENCE_SUSPECTED)
        # terms 0 to 5 are summed
        self.assertWithin(res.value, 1 + 1 + 1/2. + 1/6. + 1/24. + 1/120., 1e-14)
        self.assertWithin(res.reached_precision, 1/120., 1e-15)

    def test_harmonic_not_detected(self):
        # Known limitation: shrinking deltas hide the divergence.
        res = TaylorSeries(_harmonic, start=1).converging(1e-6, max_iterations=200)(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertNotDiagnostic(res, Diagnostic.DIVERGENCE_SUSPECTED)

    def test_divergence_checked_on_convergence(self):
        # A vanishing first term records a zero delta, so the converged sum is
        # still flagged.
        def summand(n):
            return (0, 1e-9)[n] if n < 2 else 0, n
        res = TaylorSeries(summand).converging(1e-6)(1.0)
        self.assertNotDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertDiagnostic(res, Diagnostic.DIVERGENCE_SUSPECTED)

    def test_invalid_args(self):
        s = TaylorSeries(catalog.exp)
        with self.assertRaises(ValueError):
            s.converging(0)
        with self.assertRaises(ValueError):
            s.converging(-1e-3)
        with self.assertRaises(ValueError):
            s.converging(1e-3, max_iterations=0)
        with self.assertRaises(ValueError):
            s.converging(1e-3, max_iterations=2.5)

    def test_mpmath(self):
        with mp.workdps(50):
            ev = TaylorSeries(catalog.sin).converging(mp.mpf(10)**-45, use_mp=True)
            res = ev(mp.mpf(1))
            self.assertNoDiagnostics(res)
            self.assertIsType(res.value, mp.mpf)
            self.assertTrue(isclose(res.value, mp.sin(1), rel_tol=0,
                                    abs_tol=mp.mpf(10)**-44, use_mp=True))

    def test_summand_errors_propagate(self):
        def summand(n):
            raise KeyError(n)
        with self.assertRaises(KeyError):
            TaylorSeries(summand).converging(1e-3)(1.0)


class TestRemainderBound(SeriesTestCase):
    def test_find_order(self):
        ev = TaylorSeries(catalog.sin).bounded(1e-10, catalog.sin_bound)
        # 1/13! > 1e-10 >= 1/14!
        self.assertEqual(ev.find_order(1.0), 13)
        ev = TaylorSeries(catalog.sin).bounded(1e-6, catalog.sin_bound)
        # 2^13/13! > 1e-6 >= 2^14/14!
        self.assertEqual(ev.find_order(2.0), 13)
        self.assertEqual(ev.find_order(-2.0), 13)

    def test_minimal_order(self):
        ev = TaylorSeries(catalog.exp).bounded(1e-8, catalog.exp_bound)
        for x in (0.1, 0.5, 1.0, 3.0):
            m = ev.find_order(x)
            self.assertLessEqual(ev.remainder(m, x), 1e-8)
            self.assertGreater(ev.remainder(m-1, x), 1e-8)

    def test_remainder(self):
        ev = TaylorSeries(catalog.cos).bounded(1e-10, catalog.cos_bound)
        self.assertAlmostEqual(ev.remainder(3, 2.0) / (16/24.), 1.0, places=12)
        self.assertEqual(ev.remainder(3, 0.0), 0.0)
        # no overflow for huge orders
        self.assertEqual(ev.remainder(10**5, 2.0), 0.0)

    def test_sin_cos(self):
        for prec in (1e-4, 1e-8, 1e-12):
            sin = TaylorSeries(catalog.sin).bounded(prec, catalog.sin_bound)
            cos = TaylorSeries(catalog.cos).bounded(prec, catalog.cos_bound)
            for x in np.linspace(-3, 3, 13):
                res = sin(x)
                self.assertNoDiagnostics(res)
                self.assertWithin(res.value, math.sin(x), prec)
                res = cos(x)
                self.assertNoDiagnostics(res)
                self.assertWithin(res.value, math.cos(x), prec)

    def test_exp(self):
        ev = TaylorSeries(catalog.exp).bounded(1e-10, catalog.exp_bound)
        for x in (-2.0, -0.5, 0.0, 0.5, 2.0):
            res = ev(x)
            self.assertNoDiagnostics(res)
            self.assertWithin(res.value, math.exp(x), 1e-10)

    def test_integer_bound_beyond_float_range(self):
        # (n-1)! bounds the n'th derivative of log(1+x) on [0, 1)
        bound = lambda n, x, center: math.factorial(n-1)
        ev = TaylorSeries(catalog.log1p).bounded(1e-12, bound)
        order = ev.find_order(0.99)
        self.assertGreater(order, 170)
        self.assertLessEqual(ev.remainder(order, 0.99), 1e-12)
        self.assertGreater(ev.remainder(order-1, 0.99), 1e-12)
        res = ev(0.99)
        self.assertNoDiagnostics(res)
        self.assertWithin(res.value, math.log1p(0.99), 1e-11)

    def test_exp_large_argument(self):
        ev = TaylorSeries(catalog.exp).bounded(1e-6, catalog.exp_bound)
        self.assertIsNotNone(ev.find_order(700.0))
        # Single terms like 700.0**120 overflow although e^700 does not.
        res = ev(700.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertEqual(res.value, math.inf)
        ev = TaylorSeries(catalog.exp).bounded(1e-2, catalog.exp_bound)
        res = ev(30.0)
        self.assertNoDiagnostics(res)
        self.assertTrue(isclose(res.value, math.exp(30.0), rel_tol=1e-13))

    def test_overflowing_bound(self):
        growing = lambda n, x, center: 10.0**(400*n)
        ev = TaylorSeries(catalog.sin).bounded(1e-10, growing, max_iterations=8)
        self.assertIsNone(ev.find_order(1.0))
        self.assertEqual(ev.remainder(1, 1.0), math.inf)
        res = ev(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)

    def test_huge_remainder(self):
        ev = TaylorSeries(catalog.exp).bounded(1e-6, catalog.exp_bound)
        self.assertEqual(ev.remainder(0, 1e5), math.inf)
        ev = TaylorSeries(catalog.sin).bounded(1e-6, catalog.sin_bound)
        self.assertTrue(isclose(ev.remainder(0, 1e300), 1e300, rel_tol=1e-12))
        self.assertEqual(ev.remainder(1, 1e300), math.inf)

    @slowtest
    def test_exp_large_argument_mpmath(self):
        with mp.workdps(20):
            ev = TaylorSeries(catalog.exp).bounded(1e-6, catalog.exp_bound,
                                                   use_mp=True)
            res = ev(700)
            self.assertNoDiagnostics(res)
            self.assertTrue(isclose(res.value, mp.exp(700),
                                    rel_tol=mp.mpf(10)**-15, abs_tol=0,
                                    use_mp=True))

    def test_center(self):
        def shifted_sin(n):
            # Taylor series of sin around pi/2 equals the cos series
            return catalog.cos(n)
        s = TaylorSeries(shifted_sin, center=math.pi/2)
        ev = s.bounded(1e-10, catalog.sin_bound)
        self.assertWithin(ev(2.0).value, math.sin(2.0), 1e-10)

    def test_max_iterations(self):
        ev = TaylorSeries(catalog.sin).bounded(1e-10, catalog.sin_bound,
                                               max_iterations=5)
        res = ev(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertIsNone(res.reached_precision)
        self.assertEqual(res.value, TaylorSeries(catalog.sin).truncated(5)(1.0))
        ev = TaylorSeries(catalog.sin).bounded(1e-10, catalog.sin_bound,
                                               max_iterations=20)
        self.assertNoDiagnostics(ev(1.0))

    def test_malformed_bound(self):
        growing = lambda n, x, center: 10.0**n
        ev = TaylorSeries(catalog.sin).bounded(1e-10, growing, max_iterations=8)
        res = ev(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertIsNone(ev.find_order(1.0))
        ev = TaylorSeries(catalog.sin).bounded(1e-10, growing, max_probe_order=16)
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter("always")
            res = ev(1.0)
        self.assertDiagnostic(res, Diagnostic.MAX_ITERATIONS_REACHED)
        self.assertTrue(any(issubclass(i.category, SeriesWarning) for i in w))

    def test_nan(self):
        s = TaylorSeries(_nan_over_index)
        res = s.bounded(1e-3, catalog.exp_bound)(1.0)
        self.assertDiagnostic(res, Diagnostic.NOT_A_NUMBER_ENCOUNTERED)
        self.assertTrue(math.isnan(res.value))

    def test_infinity(self):
        s = TaylorSeries(_reciprocal)
        res = s.bounded(1e-3, catalog.exp_bound)(1.0)
        self.assertDiagnostic(res, Diagnostic.INFINITY_ENCOUNTERED)
        self.assertTrue(math.isinf(res.value))

    def test_invalid_args(self):
        s = TaylorSeries(catalog.sin)
        with self.assertRaises(TypeError):
            s.bounded(1e-3, 1.0)
        with self.assertRaises(ValueError):
            s.bounded(0, catalog.sin_bound)
        with self.assertRaises(ValueError):
            s.bounded(1e-3, catalog.sin_bound, max_iterations=-1)

    def test_mpmath(self):
        with mp.workdps(40):
            prec = mp.mpf(10)**-35
            ev = TaylorSeries(catalog.cos).bounded(prec, catalog.cos_bound,
                                                   use_mp=True)
            res = ev(mp.mpf(2))
            self.assertNoDiagnostics(res)
            self.assertIsType(res.value, mp.mpf)
            self.assertLess(abs(res.value - mp.cos(2)), prec)

    @slowtest
    def test_many_points(self):
        ev = TaylorSeries(catalog.sin).bounded(1e-14, catalog.sin_bound)
        space = np.linspace(-5, 5, 101)
        values = [r.value for r in ev(space)]
        self.assertListAlmostEqual(values, lmap(math.sin, space), delta=1e-12)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
