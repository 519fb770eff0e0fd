"""Data structures for equation tokens and simplified compounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class Sum:
    """The ``+`` separator between compounds on one side."""


@dataclass(frozen=True)
class Yield:
    """The ``⇒`` separator between reactants and products."""


@dataclass(frozen=True)
class Element:
    """A bare element symbol.

    Attributes:
        name: Element symbol, e.g. ``"Na"``.
        count: Atom multiplier written on the symbol.
        charge: Charge written with ``^``.
        coefficient: Stoichiometric coefficient, only meaningful when the
            element is itself a top-level compound.
    """

    name: str
    count: float = 1
    charge: float = 0
    coefficient: float = 1


@dataclass(frozen=True)
class Formula:
    """A bracketed group of tokens.

    For a top-level formula ``count`` is the stoichiometric coefficient and
    ``pinned`` marks that the user declared it explicitly. For a nested
    formula ``count`` multiplies every atom of ``body``.
    """

    body: tuple[Token, ...] = ()
    count: float = 1
    charge: float = 0
    pinned: bool = False


@dataclass(frozen=True)
class FreeCharge:
    value: float


Token = Sum | Yield | Element | Formula | FreeCharge

# Tokens that stand for one compound (one column of the linear system).
COMPOUND_TOKENS = (Element, Formula, FreeCharge)


@dataclass(frozen=True)
class AbstractCompound:
    """A compound flattened to atom counts and net charge."""

    atoms: Mapping[str, float] = field(default_factory=dict)
    charge: float = 0
    pinned: float | None = None

    @property
    def elements(self) -> frozenset[str]:
        return frozenset(self.atoms)
