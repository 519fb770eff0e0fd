"""chembalance core package."""

from chembalance.balance import (
    BalanceConfiguration,
    BalancedEquation,
    balance,
    compute,
    normalize_coefficients,
    residuals,
)
from chembalance.errors import (
    DuplicateYield,
    ElementMismatch,
    EquationError,
    MissingYield,
    SingularSystem,
    TooManyPinnedCoefficients,
)
from chembalance.models import AbstractCompound, Element, Formula, FreeCharge, Sum, Token, Yield
from chembalance.render import render
from chembalance.scanner import scan
from chembalance.simplify import simplify
from chembalance.solver import solve
from chembalance.system import LinearSystem, build_system
from chembalance.validation import validate

__all__ = [
    "AbstractCompound",
    "BalanceConfiguration",
    "BalancedEquation",
    "DuplicateYield",
    "Element",
    "ElementMismatch",
    "EquationError",
    "Formula",
    "FreeCharge",
    "LinearSystem",
    "MissingYield",
    "SingularSystem",
    "Sum",
    "Token",
    "TooManyPinnedCoefficients",
    "Yield",
    "balance",
    "build_system",
    "compute",
    "normalize_coefficients",
    "render",
    "residuals",
    "scan",
    "simplify",
    "solve",
    "validate",
]
