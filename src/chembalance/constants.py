"""Glyphs and numeric defaults shared across the balancer."""

from __future__ import annotations

SUM_GLYPH = "+"
YIELD_GLYPH = "⇒"
FREE_CHARGE_PREFIX = "+e"

# Row label for the charge-conservation equation.
CHARGE_SYMBOL = "CHARGE"

DEFAULT_PRECISION = 4
# Relative to the largest entry of the augmented matrix.
DEFAULT_PIVOT_TOLERANCE = 1e-10
DEFAULT_MAX_DENOMINATOR = 1000

POSITIVE_SIGN = "⁺"
NEGATIVE_SIGN = "⁻"

_PLAIN_DIGITS = "0123456789."
SUBSCRIPT_GLYPHS = "₀₁₂₃₄₅₆₇₈₉."
SUPERSCRIPT_GLYPHS = "⁰¹²³⁴⁵⁶⁷⁸⁹·"

TO_SUBSCRIPT = str.maketrans(_PLAIN_DIGITS, SUBSCRIPT_GLYPHS)
TO_SUPERSCRIPT = str.maketrans(_PLAIN_DIGITS, SUPERSCRIPT_GLYPHS)
FROM_SUBSCRIPT = str.maketrans(SUBSCRIPT_GLYPHS, _PLAIN_DIGITS)
FROM_SUPERSCRIPT = str.maketrans(SUPERSCRIPT_GLYPHS, _PLAIN_DIGITS)
