"""Scanner for the bracket notation and for rendered display text.

The bracket notation is what the keyboard layer produces::

    [2*Al [S O*3]*3]+[Na O H]⇒[Na*2 S O*3]+[Al [O H]*3]

Compounds are enclosed in ``[]``, multipliers are written with ``*``, charges
with ``^`` and bare signed numbers stand for free electrons. At every position
the alternatives are tried in a fixed priority order: ``+``, ``⇒``, bracketed
formula, element, free charge. Input that matches nothing is skipped, so
scanning never fails; structural problems are reported by the validator.

Text without any of ``[]*^`` is read as display notation, the output of
:func:`chembalance.render.render` (``2H₂ + O₂ ⇒ 2H₂O``).
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from string import ascii_lowercase, ascii_uppercase
from typing import Callable

from chembalance.constants import (
    FREE_CHARGE_PREFIX,
    FROM_SUBSCRIPT,
    FROM_SUPERSCRIPT,
    NEGATIVE_SIGN,
    POSITIVE_SIGN,
    SUBSCRIPT_GLYPHS,
    SUM_GLYPH,
    SUPERSCRIPT_GLYPHS,
    YIELD_GLYPH,
)
from chembalance.models import Element, Formula, FreeCharge, Sum, Token, Yield

logger = logging.getLogger(__name__)

_BRACKET_MARKERS = frozenset("[]*^")


class _Cursor(ABC):
    def __init__(self, src: str) -> None:
        self._src = src
        self._cursor = 0
        self._n = len(src)

    def inc(self) -> None:
        self._cursor += 1

    def eof(self) -> bool:
        return self._cursor >= self._n

    def curr(self) -> str:
        if self.eof():
            return "\0"
        return self._src[self._cursor]

    def skip_ws(self) -> None:
        while self.curr().isspace():
            self.inc()

    def attempt(self, alternative: Callable[[], Token | None]) -> Token | None:
        """Run one grammar alternative, rewinding if it does not match."""
        start = self._cursor
        token = alternative()
        if token is None:
            self._cursor = start
        return token

    def scan(self) -> tuple[Token, ...]:
        tokens: list[Token] = []
        while True:
            self.skip_ws()
            if self.eof():
                break
            start = self._cursor
            token = self.scan_token()
            if token is None:
                logger.warning(
                    "Ignoring unrecognised character %r at offset %d", self._src[start], start
                )
                self._cursor = start + 1
                continue
            tokens.append(token)
        return tuple(tokens)

    @abstractmethod
    def scan_token(self) -> Token | None:
        """Scan one token at the cursor, or return None if nothing matches."""
        pass

    def scan_digits(self) -> str:
        """Read ASCII digits, ignoring whitespace between them."""
        digits = ""
        while True:
            while self.curr().isdigit() and self.curr().isascii():
                digits += self.curr()
                self.inc()
            mark = self._cursor
            self.skip_ws()
            if not (digits and self.curr().isdigit() and self.curr().isascii()):
                self._cursor = mark
                return digits

    def scan_number(self, signed: bool = True) -> float | None:
        """Read ``[+-] digits [. digits]``; return None and rewind on failure."""
        start = self._cursor
        sign = 1.0
        if signed and self.curr() in "+-":
            if self.curr() == "-":
                sign = -1.0
            self.inc()
            self.skip_ws()
        whole = self.scan_digits()
        fraction = ""
        mark = self._cursor
        self.skip_ws()
        if self.curr() == ".":
            self.inc()
            self.skip_ws()
            fraction = self.scan_digits()
        if not fraction:
            self._cursor = mark
            if not whole:
                self._cursor = start
                return None
        return sign * float(f"{whole or '0'}.{fraction or '0'}")

    def scan_symbol(self) -> str | None:
        if self.curr() not in ascii_uppercase:
            return None
        symbol = self.curr()
        self.inc()
        if self.curr() in ascii_lowercase:
            symbol += self.curr()
            self.inc()
        return symbol


class NotationScanner(_Cursor):
    """Recursive-descent scanner for the bracket notation."""

    def scan_token(self) -> Token | None:
        if self.curr() == SUM_GLYPH:
            self.inc()
            return Sum()
        if self.curr() == YIELD_GLYPH:
            self.inc()
            return Yield()
        for alternative in (self.scan_formula, self.scan_element, self.scan_free_charge):
            token = self.attempt(alternative)
            if token is not None:
                return token
        return None

    def scan_formula(self) -> Formula | None:
        leading = self.scan_leading_multiplier()
        self.skip_ws()
        if self.curr() != "[":
            return None
        inner = self.scan_bracket_body()
        trailing = self.scan_trailing_multiplier()
        charge = self.scan_charge()
        count = _merge_multipliers(leading, trailing)
        explicit = leading is not None or trailing is not None
        return Formula(
            body=NotationScanner(inner).scan(),
            count=count,
            charge=charge or 0,
            pinned=explicit and count != 0,
        )

    def scan_element(self) -> Element | None:
        leading = self.scan_leading_multiplier()
        self.skip_ws()
        name = self.scan_symbol()
        if name is None:
            return None
        trailing = self.scan_trailing_multiplier()
        charge = self.scan_charge()
        return Element(name, count=_merge_multipliers(leading, trailing), charge=charge or 0)

    def scan_free_charge(self) -> FreeCharge | None:
        value = self.scan_number()
        if value is None:
            return None
        return FreeCharge(value)

    def scan_leading_multiplier(self) -> float | None:
        start = self._cursor
        value = self.scan_number()
        if value is None:
            return None
        self.skip_ws()
        if self.curr() != "*":
            self._cursor = start
            return None
        self.inc()
        return value

    def scan_trailing_multiplier(self) -> float | None:
        start = self._cursor
        self.skip_ws()
        if self.curr() != "*":
            self._cursor = start
            return None
        self.inc()
        self.skip_ws()
        if self.curr() == "+":
            self.inc()
            self.skip_ws()
        value = self.scan_number()
        if value is None:
            self._cursor = start
        return value

    def scan_charge(self) -> float | None:
        start = self._cursor
        self.skip_ws()
        if self.curr() != "^":
            self._cursor = start
            return None
        self.inc()
        self.skip_ws()
        value = self.scan_number()
        if value is None:
            self._cursor = start
        return value

    def scan_bracket_body(self) -> str:
        """Consume ``[ ... ]`` and return the inner text; nesting is tracked."""
        self.inc()
        start = self._cursor
        depth = 1
        while not self.eof():
            if self.curr() == "[":
                depth += 1
            elif self.curr() == "]":
                depth -= 1
                if depth == 0:
                    inner = self._src[start:self._cursor]
                    self.inc()
                    return inner
            self.inc()
        logger.debug("Unterminated bracket at offset %d", start - 1)
        return self._src[start:]


class DisplayScanner(_Cursor):
    """Scanner for rendered text using sub- and superscript glyphs."""

    def scan_token(self) -> Token | None:
        if self._src.startswith(FREE_CHARGE_PREFIX, self._cursor):
            start = self._cursor
            self._cursor += len(FREE_CHARGE_PREFIX)
            value = self.scan_superscript()
            if value is not None:
                return FreeCharge(value)
            self._cursor = start
        if self.curr() == SUM_GLYPH:
            self.inc()
            return Sum()
        if self.curr() == YIELD_GLYPH:
            self.inc()
            return Yield()
        return self.attempt(self.scan_compound)

    def scan_compound(self) -> Formula | FreeCharge | None:
        coefficient = self.scan_number()
        after_number = self._cursor
        self.skip_ws()
        units, charge = self.scan_units()
        if not units:
            if coefficient is None:
                return None
            self._cursor = after_number
            return FreeCharge(coefficient)
        return Formula(
            body=units,
            count=1 if coefficient is None else coefficient,
            charge=charge,
        )

    def scan_units(self) -> tuple[tuple[Token, ...], float]:
        units: list[Token] = []
        while True:
            if self.curr() in ascii_uppercase:
                units.append(self.scan_display_element())
            elif self.curr() == "(":
                units.append(self.scan_group())
            else:
                break
        charge = self.scan_superscript()
        if charge is None:
            charge = 0
            # A trailing superscript belongs to the whole group, not the last atom.
            last = units[-1] if units else None
            if isinstance(last, Element) and last.charge:
                charge = last.charge
                units[-1] = replace(last, charge=0)
        return tuple(units), charge

    def scan_display_element(self) -> Element:
        name = self.scan_symbol()
        count = self.scan_subscript()
        charge = self.scan_superscript()
        return Element(
            name,
            count=1 if count is None else count,
            charge=charge or 0,
        )

    def scan_group(self) -> Formula:
        self.inc()
        body, charge = self.scan_units()
        if self.curr() == ")":
            self.inc()
        count = self.scan_subscript()
        return Formula(body=body, count=1 if count is None else count, charge=charge)

    def scan_subscript(self) -> float | None:
        text = self._scan_run(SUBSCRIPT_GLYPHS)
        if not text:
            return None
        return _parse_glyphs(text.translate(FROM_SUBSCRIPT))

    def scan_superscript(self) -> float | None:
        start = self._cursor
        sign = 1.0
        if self.curr() in (POSITIVE_SIGN, NEGATIVE_SIGN):
            if self.curr() == NEGATIVE_SIGN:
                sign = -1.0
            self.inc()
        text = self._scan_run(SUPERSCRIPT_GLYPHS)
        value = _parse_glyphs(text.translate(FROM_SUPERSCRIPT)) if text else None
        if value is None:
            self._cursor = start
            return None
        return sign * value

    def _scan_run(self, glyphs: str) -> str:
        start = self._cursor
        while not self.eof() and self.curr() in glyphs:
            self.inc()
        return self._src[start:self._cursor]


def _parse_glyphs(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _merge_multipliers(leading: float | None, trailing: float | None) -> float:
    count = 1.0
    for value in (leading, trailing):
        if value is not None:
            count *= value
    return count


def scan(text: str) -> tuple[Token, ...]:
    """Scan an equation into a tuple of tokens.

    Bracket notation is assumed whenever the text contains one of ``[]*^``;
    anything else is read as display notation.
    """
    if _BRACKET_MARKERS.isdisjoint(text):
        return DisplayScanner(text).scan()
    return NotationScanner(text).scan()
