"""Runtime values for Douro.

Douro has exactly two kinds of first-class value: numbers and functions.
Numbers are base-10 decimals (never binary floats) so that literals such as
`0.1` are represented exactly; all arithmetic goes through
`DECIMAL_CONTEXT`, which keeps 28 significant digits. Functions carry their
parameter names and body statements and capture nothing from the scope they
were written in.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_HALF_EVEN
from typing import Any, Tuple


DECIMAL_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


@dataclass(frozen=True)
class Number:
    value: Decimal

    @staticmethod
    def parse(text: str) -> 'Number':
        return Number(Decimal(text))

    @staticmethod
    def zero() -> 'Number':
        return Number(Decimal(0))

    def __repr__(self) -> str:
        return f"Number({to_string(self)})"


@dataclass(frozen=True)
class Function:
    """A user-defined function value.

    `body` holds the statements (`Assign`/`ExprStmt` nodes) executed, in
    order, on every call.
    """
    params: Tuple[str, ...]
    body: Tuple[Any, ...]

    def __repr__(self) -> str:
        return to_string(self)


def to_string(value: Any) -> str:
    """Textual form written by `print`."""
    if isinstance(value, Number):
        # 'f' keeps the scale of the decimal but never switches to exponent notation
        return format(value.value, 'f')
    if isinstance(value, Function):
        return f"<function({', '.join(value.params)})>"
    return str(value)


def type_name(value: Any) -> str:
    if isinstance(value, Number):
        return 'Number'
    if isinstance(value, Function):
        return 'Function'
    return type(value).__name__
