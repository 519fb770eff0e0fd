"""Reduce tokens to flat atom counts."""

from __future__ import annotations

from typing import Iterable

from chembalance.models import AbstractCompound, Element, Formula, FreeCharge, Token


def simplify(token: Token, nested: bool = False) -> AbstractCompound | None:
    """Flatten a token into an :class:`AbstractCompound`.

    Nested formulas multiply their atoms by their own count. A top-level
    formula's count is its stoichiometric coefficient, so its atoms are taken
    as written and an explicit count is carried over as ``pinned``. Only a
    formula's own ``^`` charge counts; charges on its members are ignored.

    Returns None for separators.
    """
    if isinstance(token, Element):
        return AbstractCompound(atoms={token.name: token.count}, charge=token.charge)

    if isinstance(token, Formula):
        multiplier = token.count if nested else 1
        atoms: dict[str, float] = {}
        for member in token.body:
            part = simplify(member, nested=True)
            if part is None:
                continue
            for name, count in part.atoms.items():
                atoms[name] = atoms.get(name, 0) + multiplier * count
        pinned = token.count if token.pinned and not nested else None
        return AbstractCompound(atoms=atoms, charge=token.charge, pinned=pinned)

    if isinstance(token, FreeCharge):
        return AbstractCompound(charge=token.value)

    return None


def simplify_side(tokens: Iterable[Token]) -> list[AbstractCompound]:
    """Simplify every compound on one side of the equation, dropping separators."""
    compounds = []
    for token in tokens:
        compound = simplify(token)
        if compound is not None:
            compounds.append(compound)
    return compounds
