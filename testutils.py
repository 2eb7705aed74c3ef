r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
SeriesTestCase, which obeys the global configuration settings in
TestSettings. The latter can be configured by the script invoking the test
run.

This module also introduces a new decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import sys
import functools
import unittest
import time


__all__ = [
    "SeriesTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class SeriesTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Can use assertions for lists of numbers and for the diagnostics of
          series evaluation results.

    Subclasses overriding setUp() or tearDown() should call the parent
    implementation.
    """
    def setUp(self):
        self.startTime = time.time()

    def tearDown(self):
        if TestSettings.timing:
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertWithin(self, a, b, tol):
        r"""Assert that ``|a - b| < tol`` (strictly)."""
        if not abs(a - b) < tol:
            raise self.failureException(
                "%r and %r differ by %r (tolerance: %r)" % (a, b, abs(a-b), tol)
            )

    def assertDiagnostic(self, result, kind):
        r"""Assert that an expansion result carries a diagnostic of some kind."""
        if not result.has(kind):
            raise self.failureException(
                "Diagnostic %r missing in %r" % (kind, result)
            )

    def assertNotDiagnostic(self, result, kind):
        r"""Assert that an expansion result has no diagnostic of some kind."""
        if result.has(kind):
            raise self.failureException(
                "Unexpected diagnostic %r in %r" % (kind, result)
            )

    def assertNoDiagnostics(self, result):
        r"""Assert that an expansion result is clean."""
        if not result.is_ok():
            raise self.failureException("Unexpected diagnostics: %r" % (result,))

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i]:
                continue
            if delta is not None:
                if abs(a[i]-b[i]) > delta:
                    fails.append(i)
            else:
                if round(abs(a[i]-b[i]), places) != 0:
                    fails.append(i)
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}    (difference: {d})".format(i=i, a=a[i], b=b[i], d=(b[i]-a[i]))
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
