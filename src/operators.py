from __future__ import annotations
import math
from typing import Callable, Dict, Optional

from values import Value, Number, Boolean, require_same_kind

BinaryFtn = Callable[[Value, Value], Value]
UnaryFtn = Callable[[Value], Value]

INF = float("inf")
NAN = float("nan")


def _ieee(fn: Callable[[float], float]) -> Callable[[float], float]:
    # math raises where IEEE-754 produces NaN/inf
    def wrapped(x: float) -> float:
        try:
            return fn(x)
        except ValueError:
            return NAN
        except OverflowError:
            return INF
    return wrapped


def _divide(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0.0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)


def _remainder(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return NAN


def _power(a: float, b: float) -> float:
    if a == 0.0 and b < 0.0:
        return INF
    try:
        return math.pow(a, b)
    except ValueError:
        return NAN
    except OverflowError:
        if a < 0.0 and b.is_integer() and int(b) % 2 == 1:
            return -INF
        return INF


def _log(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if x == 0.0:
            return -INF
        return _ieee(fn)(x)
    return wrapped


def _atanh(x: float) -> float:
    if abs(x) == 1.0:
        return math.copysign(INF, x)
    return _ieee(math.atanh)(x)


def _integral(fn: Callable[[float], int]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        if not math.isfinite(x):
            return x
        return float(fn(x))
    return wrapped


def _round_half_away(x: float) -> float:
    a = abs(x)
    whole = math.floor(a)
    if a - whole >= 0.5:
        whole += 1
    return math.copysign(whole, x)


def _sign(x: float) -> float:
    if math.isnan(x):
        return x
    return math.copysign(1.0, x)


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(INF, x)


# --------------------------------------------------------------------------------
# Binary ops

def _numeric(fn: Callable[[float, float], float]) -> BinaryFtn:
    def op(lhs: Value, rhs: Value) -> Value:
        return Number(fn(lhs.to_num(), rhs.to_num()))
    return op


def _compare(fn: Callable[[object, object], bool]) -> BinaryFtn:
    def op(lhs: Value, rhs: Value) -> Value:
        require_same_kind(lhs, rhs)
        return Boolean(fn(lhs.value, rhs.value))
    return op


def _logical(fn: Callable[[bool, bool], bool]) -> BinaryFtn:
    def op(lhs: Value, rhs: Value) -> Value:
        return Boolean(fn(lhs.to_bool(), rhs.to_bool()))
    return op


BINARY_OPS: Dict[str, BinaryFtn] = {
    "+": _numeric(lambda a, b: a + b),
    "-": _numeric(lambda a, b: a - b),
    "*": _numeric(lambda a, b: a * b),
    "/": _numeric(_divide),
    "%": _numeric(_remainder),
    "^": _numeric(_power),
    "max": _numeric(lambda a, b: b if math.isnan(a) else (a if math.isnan(b) else max(a, b))),
    "min": _numeric(lambda a, b: b if math.isnan(a) else (a if math.isnan(b) else min(a, b))),
    "==": _compare(lambda a, b: a == b),
    "!=": _compare(lambda a, b: a != b),
    "<": _compare(lambda a, b: a < b),
    "<=": _compare(lambda a, b: a <= b),
    ">": _compare(lambda a, b: a > b),
    ">=": _compare(lambda a, b: a >= b),
    "and": _logical(lambda a, b: a and b),
    "or": _logical(lambda a, b: a or b),
}


# --------------------------------------------------------------------------------
# Unary ops

def _math(fn: Callable[[float], float]) -> UnaryFtn:
    def op(val: Value) -> Value:
        return Number(fn(val.to_num()))
    return op


def _not(val: Value) -> Value:
    return Boolean(not val.to_bool())


def _asnum(val: Value) -> Value:
    return Number(val.as_num())


def _asbool(val: Value) -> Value:
    return Boolean(val.as_bool())


UNARY_OPS: Dict[str, UnaryFtn] = {
    "sqrt": _math(_ieee(math.sqrt)),
    "exp": _math(_ieee(math.exp)),
    "exp2": _math(_ieee(lambda x: math.pow(2.0, x))),
    "ln": _math(_log(math.log)),
    "log2": _math(_log(math.log2)),
    "log10": _math(_log(math.log10)),
    "sin": _math(_ieee(math.sin)),
    "cos": _math(_ieee(math.cos)),
    "tan": _math(_ieee(math.tan)),
    "sinh": _math(_sinh),
    "cosh": _math(_ieee(math.cosh)),
    "tanh": _math(math.tanh),
    "asin": _math(_ieee(math.asin)),
    "acos": _math(_ieee(math.acos)),
    "atan": _math(math.atan),
    "asinh": _math(math.asinh),
    "acosh": _math(_ieee(math.acosh)),
    "atanh": _math(_atanh),
    "sign": _math(_sign),
    "abs": _math(abs),
    "recip": _math(lambda x: _divide(1.0, x)),
    "fract": _math(lambda x: math.modf(x)[0] if math.isfinite(x) else NAN),
    "trunc": _math(_integral(math.trunc)),
    "ceil": _math(_integral(math.ceil)),
    "floor": _math(_integral(math.floor)),
    "round": _math(_integral(_round_half_away)),
    "neg": _math(lambda x: -x),
    "not": _not,
    "asnum": _asnum,
    "asbool": _asbool,
}


def binary_op(name: str) -> Optional[BinaryFtn]:
    return BINARY_OPS.get(name)


def unary_op(name: str) -> Optional[UnaryFtn]:
    return UNARY_OPS.get(name)
