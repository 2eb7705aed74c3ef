r"""@package taylorseries

Evaluation of power series (Taylor/Maclaurin) expansions.

A series is described by a taylorseries.series.taylor.TaylorSeries object,
which knows how to generate the \f$ n \f$'th term
\f$ a_n (x - x_0)^{p_n} \f$ but never sums anything. Summation happens in
evaluators created from such a series. Three truncation policies are
available:

    * a fixed order chosen by the caller,
    * a heuristic stop once consecutive partial sums agree to a precision,
    * the minimal order guaranteed by Taylor's remainder theorem, given a
      bound on the derivatives of the represented function.

The latter two return taylorseries.series.results.ExpansionResult objects
which carry diagnostics about divergence and floating point problems
encountered during summation.

~~~.py
from taylorseries.series import TaylorSeries, catalog
sin = TaylorSeries(catalog.sin)
ev = sin.bounded(1e-12, catalog.sin_bound)
print(ev(0.5).value)
~~~
"""
