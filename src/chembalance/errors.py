"""Exceptions raised while validating or solving an equation."""

from __future__ import annotations

from typing import Iterable


class EquationError(ValueError):
    """Base class for every user-facing balancing failure."""

    default_message = "Equation could not be balanced"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class YieldError(EquationError):
    pass


class MissingYield(YieldError):
    default_message = 'Equation must have one yield "⇒"'


class DuplicateYield(YieldError):
    default_message = 'Equation must have only one yield "⇒"'


class ElementMismatch(EquationError):
    """Reactants and products do not contain the same set of elements."""

    default_message = "Elements on both sides must be the same"

    def __init__(
        self,
        left_only: Iterable[str] = (),
        right_only: Iterable[str] = (),
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.left_only = frozenset(left_only)
        self.right_only = frozenset(right_only)


class TooManyPinnedCoefficients(EquationError):
    default_message = "Equation must have zero or one formula with default coefficient."


class SingularSystem(EquationError):
    """Gaussian elimination met a zero pivot; no coefficient set exists."""

    default_message = "No solution were found."
