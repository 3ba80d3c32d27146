"""Outcome algebra: accumulating success/failure results.

An :class:`Outcome` is exactly one of :class:`Valid` (the checked value passed)
or :class:`Invalid` (a non-empty, ordered sequence of error descriptors).

Outcomes combine applicatively. A ``Valid`` holding a function applied to a
``Valid`` holding a value yields ``Valid(f(value))``; as soon as either side is
``Invalid`` the result is ``Invalid``, and two ``Invalid`` outcomes concatenate
their errors, left before right. Nothing short-circuits, so folding a list of
outcomes collects every error in order.

Example:
    ```python
    from dataknobs_validation.outcome import Valid, curried, invalid, reduce_outcomes, valid

    checks = [valid("Password"), invalid(["Password must contain special characters"])]
    sentinel = Valid(curried(len(checks), lambda *_: "Password"))

    reduce_outcomes([sentinel, *checks])
    # Invalid(errors=('Password must contain special characters',))
    ```
"""

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import OutcomeError


class Outcome(ABC):
    """Base class of the two outcome variants."""

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        """True for a ``Valid`` outcome."""

    @property
    def is_invalid(self) -> bool:
        """True for an ``Invalid`` outcome."""
        return not self.is_valid

    def __bool__(self) -> bool:
        """Allow 'if outcome:' usage to check validity."""
        return self.is_valid

    @staticmethod
    def of(value: Any) -> Valid:
        """Lift a plain value into a ``Valid`` outcome."""
        return Valid(value)

    @abstractmethod
    def ap(self, other: Outcome) -> Outcome:
        """Apply the function held by this outcome to the value held by ``other``.

        Args:
            other: Outcome holding the argument

        Returns:
            ``Valid(f(v))`` when both are valid, otherwise an ``Invalid``
            holding every error from both sides, this side's errors first
        """

    @abstractmethod
    def bimap(
        self,
        on_invalid: Callable[[tuple[Any, ...]], Iterable[Any]],
        on_valid: Callable[[Any], Any],
    ) -> Outcome:
        """Transform the payload of whichever branch is present.

        Args:
            on_invalid: Maps the error sequence to a new error sequence
            on_valid: Maps the success value

        Returns:
            Outcome of the same branch with the transformed payload
        """

    def map(self, fn: Callable[[Any], Any]) -> Outcome:
        """Transform the success value, leaving failures untouched."""
        return self.bimap(_identity, fn)

    def failure_map(self, fn: Callable[[tuple[Any, ...]], Iterable[Any]]) -> Outcome:
        """Transform the error sequence, leaving successes untouched."""
        return self.bimap(fn, _identity)

    @abstractmethod
    def fold(
        self,
        on_invalid: Callable[[tuple[Any, ...]], Any],
        on_valid: Callable[[Any], Any],
    ) -> Any:
        """Collapse the outcome into a plain value."""

    @abstractmethod
    def merge(self) -> Any:
        """Return the payload of whichever branch is present."""

    @abstractmethod
    def get(self) -> Any:
        """Return the success value.

        Raises:
            OutcomeError: If the outcome is ``Invalid``
        """

    @abstractmethod
    def get_or_else(self, default: Any) -> Any:
        """Return the success value, or ``default`` for an ``Invalid`` outcome."""

    @abstractmethod
    def or_else(self, fn: Callable[[tuple[Any, ...]], Outcome]) -> Outcome:
        """Recover from a failure by building a new outcome from its errors."""

    @abstractmethod
    def swap(self) -> Outcome:
        """Exchange the branches."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Plain dictionary form for serializers."""


@dataclass(frozen=True)
class Valid(Outcome):
    """The checked value passed."""

    value: Any

    @property
    def is_valid(self) -> bool:
        return True

    def ap(self, other: Outcome) -> Outcome:
        if not callable(self.value):
            raise OutcomeError(
                f"Cannot apply a Valid outcome holding a non-callable: {self.value!r}",
                context={"value": self.value},
            )
        if isinstance(other, Valid):
            return Valid(self.value(other.value))
        return other

    def bimap(self, on_invalid, on_valid) -> Outcome:
        return Valid(on_valid(self.value))

    def fold(self, on_invalid, on_valid) -> Any:
        return on_valid(self.value)

    def merge(self) -> Any:
        return self.value

    def get(self) -> Any:
        return self.value

    def get_or_else(self, default: Any) -> Any:
        return self.value

    def or_else(self, fn) -> Outcome:
        return self

    def swap(self) -> Outcome:
        return Invalid([self.value])

    def to_dict(self) -> dict[str, Any]:
        return {"valid": True, "value": self.value}


@dataclass(frozen=True)
class Invalid(Outcome):
    """The checked value failed; ``errors`` is never empty.

    A single descriptor (a string or a mapping) is wrapped in a singleton
    sequence. Any other iterable is copied, in order, into a tuple.
    """

    errors: tuple[Any, ...]

    def __post_init__(self) -> None:
        errors = self.errors
        if isinstance(errors, (str, bytes, Mapping)):
            errors = (errors,)
        else:
            errors = tuple(errors)
        if not errors:
            raise OutcomeError("An Invalid outcome requires at least one error")
        object.__setattr__(self, "errors", errors)

    @property
    def is_valid(self) -> bool:
        return False

    def ap(self, other: Outcome) -> Outcome:
        if isinstance(other, Invalid):
            return Invalid(self.errors + other.errors)
        return self

    def bimap(self, on_invalid, on_valid) -> Outcome:
        return Invalid(on_invalid(self.errors))

    def fold(self, on_invalid, on_valid) -> Any:
        return on_invalid(self.errors)

    def merge(self) -> Any:
        return self.errors

    def get(self) -> Any:
        raise OutcomeError(
            "Cannot extract a value from an Invalid outcome",
            context={"errors": list(self.errors)},
        )

    def get_or_else(self, default: Any) -> Any:
        return default

    def or_else(self, fn) -> Outcome:
        return fn(self.errors)

    def swap(self) -> Outcome:
        return Valid(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": False, "errors": list(self.errors)}


def valid(value: Any) -> Valid:
    """Construct a success outcome wrapping ``value``."""
    return Valid(value)


def invalid(errors: Any) -> Invalid:
    """Construct a failure outcome.

    Args:
        errors: A non-empty sequence of error descriptors, or one descriptor

    Returns:
        Invalid outcome holding the errors in order
    """
    return Invalid(errors)


def combine(outcome_f: Outcome, outcome_v: Outcome) -> Outcome:
    """Combine an outcome holding a function with an outcome holding its argument.

    ======================  ==========================
    ``outcome_f``           result
    ======================  ==========================
    Valid(f), Valid(v)      Valid(f(v))
    Valid(f), Invalid(e)    Invalid(e)
    Invalid(e), Valid(v)    Invalid(e)
    Invalid(a), Invalid(b)  Invalid(a + b)
    ======================  ==========================
    """
    return outcome_f.ap(outcome_v)


def reduce_outcomes(outcomes: Iterable[Outcome]) -> Outcome:
    """Fold outcomes left to right with :func:`combine`.

    The first outcome is the accumulator and must carry a curried function
    taking one argument per remaining outcome (see :func:`curried`). Callers
    prepend such a sentinel, so the sequence is never empty.

    Args:
        outcomes: Sentinel followed by zero or more outcomes

    Returns:
        The combined outcome

    Raises:
        OutcomeError: If ``outcomes`` is empty
    """
    iterator = iter(outcomes)
    first = next(iterator, None)
    if first is None:
        raise OutcomeError("Cannot reduce an empty sequence of outcomes")
    return functools.reduce(combine, iterator, first)


def curried(arity: int, fn: Callable[..., Any]) -> Any:
    """Build a function taking ``arity`` arguments one call at a time.

    ``curried(2, f)(a)(b)`` is ``f(a, b)``. With an arity of zero there is
    nothing to collect and ``fn()`` is returned directly.

    Args:
        arity: Number of arguments to collect
        fn: Called with all collected arguments

    Returns:
        A one-argument function, or the result of ``fn()`` when ``arity`` is 0
    """
    if arity < 0:
        raise ValueError(f"arity cannot be negative: {arity}")

    def collect(args: tuple[Any, ...]) -> Any:
        if len(args) == arity:
            return fn(*args)
        return lambda arg: collect(args + (arg,))

    return collect(())


def _identity(value: Any) -> Any:
    return value
