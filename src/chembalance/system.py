"""Linear system construction for equation balancing.

Every distinct symbol (element names plus the charge accumulator) gives one
conservation equation:

    sum_j A[s, j] * x_j = 0

where column ``j`` holds compound ``j``'s count of symbol ``s``, positive for
reactants and negated for products. That homogeneous system only fixes the
coefficients up to scale, so one extra row pins a single compound:

    x_p = c

with ``p`` the pinned compound (the first one if none is declared) and ``c``
its declared coefficient (1 by default).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from chembalance.constants import CHARGE_SYMBOL
from chembalance.errors import SingularSystem
from chembalance.models import AbstractCompound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinearSystem:
    """Conservation equations for one chemical equation.

    Attributes:
        matrix: ``A`` with one row per symbol plus the pinning row, one column
            per compound.
        rhs: ``B``, zero except for the pinning row.
        symbols: Row labels for every row except the last.
        pinned_column: Column selected by the pinning row.
    """

    matrix: np.ndarray
    rhs: np.ndarray
    symbols: tuple[str, ...]
    pinned_column: int

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape


def collect_symbols(compounds: Sequence[AbstractCompound]) -> tuple[str, ...]:
    """Union of symbols in first-seen order, the charge row included."""
    seen: dict[str, None] = {}
    for compound in compounds:
        seen.setdefault(CHARGE_SYMBOL, None)
        for name in compound.atoms:
            seen.setdefault(name, None)
    return tuple(seen)


def build_system(
    left: Sequence[AbstractCompound], right: Sequence[AbstractCompound]
) -> LinearSystem:
    """Build ``A`` and ``B`` from simplified reactants and products.

    Args:
        left: Reactant compounds, one column each.
        right: Product compounds, one column each, entered with negated counts.

    Returns:
        The :class:`LinearSystem` with ``len(symbols) + 1`` rows.
    """
    compounds = [*left, *right]
    if not compounds:
        raise SingularSystem("Equation has no compounds to balance")

    symbols = collect_symbols(compounds)
    signs = [1.0] * len(left) + [-1.0] * len(right)

    matrix = np.zeros((len(symbols) + 1, len(compounds)))
    rhs = np.zeros(len(symbols) + 1)
    for column, (compound, sign) in enumerate(zip(compounds, signs, strict=True)):
        for row, symbol in enumerate(symbols):
            if symbol == CHARGE_SYMBOL:
                value = compound.charge
            else:
                value = compound.atoms.get(symbol, 0.0)
            matrix[row, column] = sign * value

    pinned_column, pinned_value = 0, 1.0
    for column, compound in enumerate(compounds):
        if compound.pinned is not None:
            pinned_column, pinned_value = column, float(compound.pinned)

    matrix[-1, pinned_column] = 1.0
    rhs[-1] = pinned_value
    logger.debug(
        "Built %dx%d system, column %d pinned to %g",
        matrix.shape[0],
        matrix.shape[1],
        pinned_column,
        pinned_value,
    )
    return LinearSystem(
        matrix=matrix, rhs=rhs, symbols=symbols, pinned_column=pinned_column
    )
