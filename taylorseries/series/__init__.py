r"""@package taylorseries.series

Power series representations and their evaluators.

The idea is to separate the *description* of a series from the numerical
work of summing it. A taylor.TaylorSeries only knows how to generate the
coefficient and exponent of each term and how to derive new series from it
(e.g. term-wise derivatives). To get numbers out of it, you take a *snapshot*
of the series and turn it into a callable object, here called an *evaluator*
(see the evaluators module).

Upon creation of an evaluator, the truncation policy is fixed and the
evaluator is configured to either evaluate using fast floating point
operations or slower `mpmath` arbitrary precision operations.

A catalog of common series (exponential, trigonometric, Bessel, ...) is
available in the catalog module.
"""

from .common import SeriesWarning, context
from .results import Diagnostic, ExpansionResult
from .evaluators import FixedOrderEvaluator, ConvergenceEvaluator
from .evaluators import RemainderBoundEvaluator
from .taylor import TaylorSeries
from . import catalog
