"""End-to-end balancing: scan, validate, build, solve and annotate.

The pipeline is a pure function of its input. Coefficients solved for the
linear system are written back into a copy of the token tuple so the result
can be rendered in display notation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from math import gcd
from typing import Sequence

from chembalance.constants import (
    CHARGE_SYMBOL,
    DEFAULT_MAX_DENOMINATOR,
    DEFAULT_PIVOT_TOLERANCE,
    DEFAULT_PRECISION,
)
from chembalance.models import (
    COMPOUND_TOKENS,
    AbstractCompound,
    Element,
    Formula,
    FreeCharge,
    Token,
)
from chembalance.render import render
from chembalance.scanner import scan
from chembalance.solver import solve
from chembalance.system import build_system, collect_symbols
from chembalance.validation import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceConfiguration:
    """Numeric settings for a balancing run.

    Attributes:
        precision: Decimal places kept from the least-squares solution.
        pivot_tolerance: Pivot magnitude treated as zero during elimination.
        max_denominator: Largest common denominator tried when scaling
            rounded coefficients to whole numbers.
        normalize: Scale unpinned solutions to the smallest whole numbers.
            When False the first compound keeps the coefficient 1.
    """

    precision: int = DEFAULT_PRECISION
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE
    max_denominator: int = DEFAULT_MAX_DENOMINATOR
    normalize: bool = True


@dataclass(frozen=True)
class BalancedEquation:
    """Result of :func:`compute`.

    Attributes:
        ast: Tokens with the coefficients written back.
        reactants: Simplified reactant compounds.
        products: Simplified product compounds.
        coefficients: One coefficient per compound, reactants first.
    """

    ast: tuple[Token, ...]
    reactants: tuple[AbstractCompound, ...]
    products: tuple[AbstractCompound, ...]
    coefficients: tuple[float, ...]

    @property
    def text(self) -> str:
        return render(self.ast)

    @property
    def reactant_coefficients(self) -> tuple[float, ...]:
        return self.coefficients[: len(self.reactants)]

    @property
    def product_coefficients(self) -> tuple[float, ...]:
        return self.coefficients[len(self.reactants):]

    def residuals(self) -> dict[str, float]:
        return residuals(self.reactants, self.products, self.coefficients)


def normalize_coefficients(
    coefficients: Sequence[float],
    precision: int = DEFAULT_PRECISION,
    max_denominator: int = DEFAULT_MAX_DENOMINATOR,
) -> tuple[float, ...]:
    """Scale coefficients to the smallest whole numbers with the same ratios.

    ``(1, 0.5, 1)`` becomes ``(2, 1, 2)``. The coefficients were rounded to
    ``precision`` decimals, so the first denominator ``d`` for which every
    ``value * d`` lies within the rounding error ``d * 0.5 * 10**-precision``
    of an integer is used.
    The values are returned unchanged when no ``d`` up to
    ``max_denominator`` fits.
    """
    values = [float(value) for value in coefficients]
    # Rounding moves each value by at most half a unit in the last place.
    tolerance = 0.5 * 10.0**-precision
    for denominator in range(1, max_denominator + 1):
        scaled = [value * denominator for value in values]
        if all(abs(s - round(s)) <= tolerance * denominator + 1e-9 for s in scaled):
            numerators = [int(round(s)) for s in scaled]
            divisor = gcd(*numerators)
            if divisor == 0:
                break
            return tuple(float(numerator // divisor) for numerator in numerators)
    logger.debug("No common denominator up to %d for %s", max_denominator, values)
    return tuple(values)


def residuals(
    reactants: Sequence[AbstractCompound],
    products: Sequence[AbstractCompound],
    coefficients: Sequence[float],
) -> dict[str, float]:
    """Reactant total minus product total for every symbol, charge included.

    All values are zero for a balanced equation.
    """
    compounds = [*reactants, *products]
    signs = [1.0] * len(reactants) + [-1.0] * len(products)
    totals = {symbol: 0.0 for symbol in collect_symbols(compounds)}
    for compound, sign, coefficient in zip(compounds, signs, coefficients, strict=True):
        totals[CHARGE_SYMBOL] += sign * coefficient * compound.charge
        for name, count in compound.atoms.items():
            totals[name] += sign * coefficient * count
    return totals


def annotate(ast: Sequence[Token], coefficients: Sequence[float]) -> tuple[Token, ...]:
    """Write coefficients back into the compound tokens of ``ast``."""
    annotated = list(ast)
    positions = [
        index for index, token in enumerate(ast) if isinstance(token, COMPOUND_TOKENS)
    ]
    for index, coefficient in zip(positions, coefficients, strict=True):
        token = annotated[index]
        if isinstance(token, Formula):
            annotated[index] = replace(token, count=coefficient)
        elif isinstance(token, Element):
            annotated[index] = replace(token, coefficient=coefficient)
        elif isinstance(token, FreeCharge):
            annotated[index] = replace(token, value=token.value * coefficient)
    return tuple(annotated)


def compute(
    ast: Sequence[Token], configuration: BalanceConfiguration | None = None
) -> BalancedEquation:
    """Balance a scanned equation.

    Args:
        ast: Tokens produced by :func:`chembalance.scanner.scan`.
        configuration: Numeric settings; defaults to :class:`BalanceConfiguration`.

    Returns:
        The :class:`BalancedEquation` with coefficients in compound order.

    Raises:
        EquationError: One of its subclasses when validation or solving fails.
    """
    configuration = configuration or BalanceConfiguration()
    reactants, products = validate(ast)
    logger.debug(
        "Balancing %d reactant(s) against %d product(s)", len(reactants), len(products)
    )

    system = build_system(reactants, products)
    solution = solve(
        system.matrix,
        system.rhs,
        precision=configuration.precision,
        pivot_tolerance=configuration.pivot_tolerance,
    )
    coefficients = tuple(float(value) for value in solution)

    pinned = any(compound.pinned is not None for compound in [*reactants, *products])
    if configuration.normalize and not pinned:
        coefficients = normalize_coefficients(
            coefficients,
            precision=configuration.precision,
            max_denominator=configuration.max_denominator,
        )
    logger.debug("Coefficients: %s", coefficients)

    return BalancedEquation(
        ast=annotate(ast, coefficients),
        reactants=tuple(reactants),
        products=tuple(products),
        coefficients=coefficients,
    )


def balance(
    text: str, configuration: BalanceConfiguration | None = None
) -> BalancedEquation:
    """Scan and balance an equation string."""
    return compute(scan(text), configuration)
