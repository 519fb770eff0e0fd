"""Render tokens in display notation (``2H₂ + O₂ ⇒ 2H₂O``)."""

from __future__ import annotations

from typing import Sequence

from chembalance.constants import (
    FREE_CHARGE_PREFIX,
    NEGATIVE_SIGN,
    POSITIVE_SIGN,
    SUM_GLYPH,
    TO_SUBSCRIPT,
    TO_SUPERSCRIPT,
    YIELD_GLYPH,
)
from chembalance.models import Element, Formula, FreeCharge, Sum, Token, Yield


def format_number(value: float) -> str:
    """Plain text for a count or coefficient, dropping a trailing ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def to_subscript(value: float) -> str:
    return format_number(abs(value)).translate(TO_SUBSCRIPT)


def to_superscript(value: float) -> str:
    """Superscript digits prefixed with ``⁺`` or ``⁻``; ``⁺²`` for 2."""
    sign = ""
    if value > 0:
        sign = POSITIVE_SIGN
    elif value < 0:
        sign = NEGATIVE_SIGN
    return sign + format_number(abs(value)).translate(TO_SUPERSCRIPT)


def render_element(element: Element, top_level: bool = True) -> str:
    text = ""
    if top_level and element.coefficient != 1:
        text += format_number(element.coefficient)
    text += element.name
    if element.count != 1:
        text += to_subscript(element.count)
    if element.charge:
        text += to_superscript(element.charge)
    return text


def render_formula(formula: Formula, top_level: bool = True) -> str:
    """Render a formula body; nested formulas are wrapped in parentheses."""
    body = ""
    for member in formula.body:
        if isinstance(member, Element):
            body += render_element(member, top_level=False)
        elif isinstance(member, Formula):
            body += f"({render_formula(member, top_level=False)})"
            if member.count != 1:
                body += to_subscript(member.count)
    prefix = format_number(formula.count) if top_level and formula.count != 1 else ""
    charge = to_superscript(formula.charge) if formula.charge else ""
    return f"{prefix}{body}{charge}"


def render_free_charge(free_charge: FreeCharge) -> str:
    if not free_charge.value:
        return ""
    return FREE_CHARGE_PREFIX + to_superscript(free_charge.value)


def render_token(token: Token) -> str:
    if isinstance(token, Formula):
        return render_formula(token)
    if isinstance(token, Element):
        return render_element(token)
    if isinstance(token, FreeCharge):
        return render_free_charge(token)
    if isinstance(token, Sum):
        return SUM_GLYPH
    if isinstance(token, Yield):
        return YIELD_GLYPH
    raise TypeError(f"Unknown token: {token!r}")


def render(ast: Sequence[Token]) -> str:
    """Render an equation; every token is followed by a single space."""
    return "".join(f"{render_token(token)} " for token in ast)
