r"""@package taylorseries.series.results

Result objects returned by the diagnosing series evaluators.

An ExpansionResult is a value plus a (possibly empty) set of Diagnostic
flags. Evaluators never raise for numerical problems; instead, they report
what went wrong via these flags and return the best value they have.

@b Examples

```
    res = ev(2.0)
    if res.has(Diagnostic.DIVERGENCE_SUSPECTED):
        print("outside radius of convergence?")
    value, diagnostics = res
```
"""


__all__ = [
    "Diagnostic",
    "ExpansionResult",
]


class Diagnostic(object):
    r"""A single diagnostic flag attached to an ExpansionResult.

    Diagnostics are immutable, hashable and compare equal if both their kind
    and the optional reached precision agree.
    """

    ## Iteration or order cap was hit before the precision criterion was met.
    MAX_ITERATIONS_REACHED = "max-iterations-reached"
    ## Partial sums seem to move apart rather than converge.
    DIVERGENCE_SUSPECTED = "divergence-suspected"
    ## A term or the final value was NaN.
    NOT_A_NUMBER_ENCOUNTERED = "not-a-number-encountered"
    ## A term or the final value was infinite.
    INFINITY_ENCOUNTERED = "infinity-encountered"

    KINDS = (
        MAX_ITERATIONS_REACHED,
        DIVERGENCE_SUSPECTED,
        NOT_A_NUMBER_ENCOUNTERED,
        INFINITY_ENCOUNTERED,
    )

    __slots__ = ("_kind", "_reached_precision")

    def __init__(self, kind, reached_precision=None):
        r"""Create a diagnostic flag.

        @param kind
            One of the strings in Diagnostic.KINDS.
        @param reached_precision
            Precision actually achieved. Only meaningful (and only allowed)
            for `max-iterations-reached`.
        """
        if kind not in self.KINDS:
            raise ValueError("Unknown diagnostic kind: %r" % (kind,))
        if reached_precision is not None and kind != self.MAX_ITERATIONS_REACHED:
            raise ValueError("Only %r carries a reached precision."
                             % self.MAX_ITERATIONS_REACHED)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_reached_precision", reached_precision)

    def __setattr__(self, name, value):
        raise AttributeError("Diagnostic objects are immutable.")

    @classmethod
    def max_iterations_reached(cls, reached_precision=None):
        return cls(cls.MAX_ITERATIONS_REACHED, reached_precision)

    @classmethod
    def divergence_suspected(cls):
        return cls(cls.DIVERGENCE_SUSPECTED)

    @classmethod
    def not_a_number_encountered(cls):
        return cls(cls.NOT_A_NUMBER_ENCOUNTERED)

    @classmethod
    def infinity_encountered(cls):
        return cls(cls.INFINITY_ENCOUNTERED)

    @property
    def kind(self):
        r"""Kind of diagnostic, one of Diagnostic.KINDS."""
        return self._kind

    @property
    def reached_precision(self):
        r"""Precision achieved when the iteration cap hit (or `None`)."""
        return self._reached_precision

    def _key(self):
        return (self._kind, self._reached_precision)

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        if self._reached_precision is None:
            return "<Diagnostic(%s)>" % self._kind
        return "<Diagnostic(%s, reached_precision=%s)>" % (
            self._kind, self._reached_precision
        )


class ExpansionResult(object):
    r"""Value of a series evaluation together with its diagnostics.

    Can be unpacked into ``(value, diagnostics)``.
    """

    __slots__ = ("_value", "_diagnostics")

    def __init__(self, value, diagnostics=()):
        r"""Create a result object.

        @param value
            The computed approximation.
        @param diagnostics
            Iterable of Diagnostic objects. Default is to have none.
        """
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_diagnostics", frozenset(diagnostics))

    def __setattr__(self, name, value):
        raise AttributeError("ExpansionResult objects are immutable.")

    @property
    def value(self):
        r"""The computed approximation."""
        return self._value

    @property
    def diagnostics(self):
        r"""Frozen set of Diagnostic objects (empty for a clean result)."""
        return self._diagnostics

    @property
    def kinds(self):
        r"""Frozen set of the diagnostic kinds present."""
        return frozenset(d.kind for d in self._diagnostics)

    @property
    def reached_precision(self):
        r"""Precision reached when the iteration cap hit, if known."""
        for d in self._diagnostics:
            if d.reached_precision is not None:
                return d.reached_precision
        return None

    def has(self, kind):
        r"""Return whether a diagnostic of the given kind is present."""
        return kind in self.kinds

    def is_ok(self):
        r"""Return whether the evaluation produced no diagnostics at all."""
        return not self._diagnostics

    def __iter__(self):
        return iter((self._value, self._diagnostics))

    def __float__(self):
        return float(self._value)

    def __repr__(self):
        if not self._diagnostics:
            return "<ExpansionResult(%s)>" % (self._value,)
        kinds = ", ".join(sorted(repr(d) for d in self._diagnostics))
        return "<ExpansionResult(%s, diagnostics=[%s])>" % (self._value, kinds)
