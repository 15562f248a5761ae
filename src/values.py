from __future__ import annotations
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


class EvalError(Exception):
    """Raised when evaluating a Code tree fails."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def format_number(n: float) -> str:
    n = float(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    # shortest round-trip digits, written out without an exponent
    return format(Decimal(repr(n)).normalize(), "f")


@dataclass(frozen=True)
class Number:
    value: float = 0.0

    def is_num(self) -> bool:
        return True

    def is_bool(self) -> bool:
        return False

    def to_num(self) -> float:
        return self.value

    def to_bool(self) -> bool:
        raise EvalError(f"{self} not a boolean")

    def as_num(self) -> float:
        return self.value

    def as_bool(self) -> bool:
        return self.value != 0.0

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class Boolean:
    value: bool = False

    def is_num(self) -> bool:
        return False

    def is_bool(self) -> bool:
        return True

    def to_num(self) -> float:
        raise EvalError(f"{self} not a number")

    def to_bool(self) -> bool:
        return self.value

    def as_num(self) -> float:
        return 1.0 if self.value else 0.0

    def as_bool(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


Value = Union[Number, Boolean]


def same_kind(lhs: Value, rhs: Value) -> bool:
    return type(lhs) is type(rhs)


def require_same_kind(lhs: Value, rhs: Value):
    if not same_kind(lhs, rhs):
        raise EvalError(f"Mismatched comparison - '{lhs}' and '{rhs}'")
