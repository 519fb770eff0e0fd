"""Structural checks run before an equation is solved."""

from __future__ import annotations

import logging
from typing import Sequence

from chembalance.errors import (
    DuplicateYield,
    ElementMismatch,
    MissingYield,
    TooManyPinnedCoefficients,
)
from chembalance.models import AbstractCompound, Token, Yield
from chembalance.simplify import simplify_side

logger = logging.getLogger(__name__)


def ensure_single_yield(ast: Sequence[Token]) -> int:
    """Return the position of the only ``⇒`` token."""
    positions = [index for index, token in enumerate(ast) if isinstance(token, Yield)]
    if not positions:
        raise MissingYield()
    if len(positions) > 1:
        raise DuplicateYield()
    return positions[0]


def ensure_same_elements(
    left: Sequence[AbstractCompound], right: Sequence[AbstractCompound]
) -> None:
    """Both sides must name the same elements; counts are left to the solver."""
    left_elements: set[str] = set()
    right_elements: set[str] = set()
    for compound in left:
        left_elements |= compound.elements
    for compound in right:
        right_elements |= compound.elements
    if left_elements != right_elements:
        left_only = left_elements - right_elements
        right_only = right_elements - left_elements
        logger.debug(
            "Element mismatch: reactants only %s, products only %s",
            sorted(left_only),
            sorted(right_only),
        )
        raise ElementMismatch(left_only, right_only)


def ensure_single_pin(
    left: Sequence[AbstractCompound], right: Sequence[AbstractCompound]
) -> None:
    pinned = [compound for compound in [*left, *right] if compound.pinned is not None]
    if len(pinned) > 1:
        raise TooManyPinnedCoefficients()


def validate(
    ast: Sequence[Token],
) -> tuple[list[AbstractCompound], list[AbstractCompound]]:
    """Run every check and return the simplified reactants and products."""
    index = ensure_single_yield(ast)
    reactants = simplify_side(ast[:index])
    products = simplify_side(ast[index + 1:])
    ensure_same_elements(reactants, products)
    ensure_single_pin(reactants, products)
    return reactants, products
