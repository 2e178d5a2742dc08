"""Currency amounts as written in policies and page attributes.

A :class:`Currency` is a symbol (``$``, ``€``, ``USD`` ...) and a
:class:`~decimal.Decimal` amount.  :meth:`Currency.parse` understands the
usual locale spellings::

    $1.25     1,25 €     USD 10     -$3     $1,000.50     1.000,50 €
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

_LITERAL = re.compile(
    r"""
    ^\s*
    (?P<sign>-)?\s*
    (?P<prefix>[^\d\s.,+-]+)?\s*
    (?P<number>\d[\d.,]*)
    \s*(?P<suffix>[^\d\s.,+-]+)?
    \s*$
    """,
    re.VERBOSE,
)
_SEPARATORS = re.compile(r"[.,]")


class CurrencyParseError(ValueError):
    """Raised when a string is not a recognisable currency literal."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse currency {text!r}: {reason}")


def _decimal_separator(number: str) -> str | None:
    dots, commas = number.count("."), number.count(",")
    if dots and commas:
        return "." if number.rfind(".") > number.rfind(",") else ","
    # A lone separator followed by exactly three digits is a thousands group
    # ("1,000", "1.000") unless the integer part is zero ("0.005"); otherwise
    # it is the decimal mark ("1,25", "1.5").
    sep = "." if dots else ","
    if dots + commas == 1:
        integer, _, fraction = number.rpartition(sep)
        if len(fraction) != 3 or integer.startswith("0"):
            return sep
    return None


def _normalise_number(number: str) -> str:
    """Rewrite ``1.000,50`` / ``1,000.50`` / ``1,25`` as ``1000.50`` style."""
    decimal_sep = _decimal_separator(number)
    if decimal_sep is None:
        integer, fraction = number, ""
    else:
        integer, _, fraction = number.rpartition(decimal_sep)
        if not fraction.isdigit():
            raise ValueError("missing digits after the decimal separator")

    thousands = set(_SEPARATORS.findall(integer))
    if len(thousands) > 1:
        raise ValueError("mixed thousands separators")
    if thousands:
        groups = _SEPARATORS.split(integer)
        if not 1 <= len(groups[0]) <= 3 or any(len(g) != 3 for g in groups[1:]):
            raise ValueError("misplaced thousands separator")

    digits = _SEPARATORS.sub("", integer)
    return f"{digits}.{fraction}" if fraction else digits


@dataclass(frozen=True)
class Currency:
    """An amount of money in one currency.

    Two amounts are equal when their symbols match and their amounts are
    numerically equal (``$1.2 == $1.20``).  Where the symbol was written
    only affects formatting.
    """

    symbol: str
    amount: Decimal
    symbol_after: bool = field(default=False, compare=False)

    @classmethod
    def parse(cls, text: str) -> Currency:
        """Parse a currency literal such as ``$1.25`` or ``1,25 €``.

        Raises:
            CurrencyParseError: If *text* has no digits, has a symbol on both
                sides, or has malformed separators.
        """
        match = _LITERAL.match(text)
        if match is None:
            raise CurrencyParseError(text, "not a currency literal")

        prefix, suffix = match.group("prefix"), match.group("suffix")
        if prefix and suffix:
            raise CurrencyParseError(text, "currency symbol on both sides")

        try:
            amount = Decimal(_normalise_number(match.group("number")))
        except (ValueError, InvalidOperation) as exc:
            raise CurrencyParseError(text, str(exc)) from exc

        if match.group("sign"):
            amount = -amount

        return cls(symbol=prefix or suffix or "", amount=amount, symbol_after=bool(suffix))

    def __str__(self) -> str:
        sign = "-" if self.amount < 0 else ""
        exponent = self.amount.as_tuple().exponent
        places = max(2, -exponent) if isinstance(exponent, int) else 2
        amount = f"{abs(self.amount):,.{places}f}"
        if self.symbol_after:
            return f"{sign}{amount} {self.symbol}"
        spacer = " " if len(self.symbol) > 1 else ""
        return f"{sign}{self.symbol}{spacer}{amount}"
