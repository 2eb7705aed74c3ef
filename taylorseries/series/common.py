r"""@package taylorseries.series.common

Utils used by multiple modules in taylorseries.series.
"""

from contextlib import contextmanager

from mpmath import mp, fp


__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_MAX_PROBE_ORDER",
    "SeriesWarning",
    "mpmath_context",
    "context",
]


## Default iteration cap of the convergence based evaluator.
DEFAULT_MAX_ITERATIONS = 1000

## Largest order the remainder bound based order search probes if the caller
## does not impose a cap.
DEFAULT_MAX_PROBE_ORDER = 2**14


class SeriesWarning(UserWarning):
    """Warning issued when series might not evaluate as expected."""
    pass


@contextmanager
def _noop_context(*_args, **_kwargs):
    r"""Empty context manager used as placeholder."""
    yield


def mpmath_context(use_mp):
    r"""Return the `mpmath.mp` or `mpmath.fp` contexts.

    Some of the features of the `mp` context are missing on the `fp` context.
    To make these two drop-in replacements in the code, the `fp` context is
    endowed with a no-op `workdps()` context handler.
    """
    if use_mp:
        return mp
    if not hasattr(fp, 'workdps'):
        setattr(fp, 'workdps', _noop_context)
    return fp


@contextmanager
def context(use_mp, dps=None):
    r"""Convenience function to be used as context manager.

    This will automatically choose the correct context (`mp` or `fp`) based on
    the choice of `use_mp` and configure the desired decimal places.

    Args:
        use_mp: Whether to use `mp` (if `True`) or `fp`.
        dps:    Decimal places to use in `mp` computations. Default is to
                keep the current setting.
    """
    ctx = mpmath_context(use_mp)
    if not use_mp or dps is None:
        dps = mp.dps
    with ctx.workdps(dps):
        yield ctx


def _check_precision(precision):
    r"""Raise a `ValueError` unless `precision` is a positive number."""
    if not precision > 0:
        raise ValueError("Precision must be positive, got %r." % (precision,))


def _check_max_iterations(max_iterations, allow_none=False):
    r"""Raise a `ValueError` unless `max_iterations` is a positive integer."""
    if max_iterations is None and allow_none:
        return
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) \
            or max_iterations < 1:
        raise ValueError("Maximum number of iterations must be a positive "
                         "integer, got %r." % (max_iterations,))
