from __future__ import annotations
from typing import Dict, List

# Variables
DEFVAR = "var"
SETVAR = "="

# Literals / constants
TRUE = "true"
FALSE = "false"
PI = "pi"
TAU = "tau"
E = "e"
PHI = "phi"

# Functions
DEFUN = "def"
FUNCALL = "call"
BEGIN = "begin"
END = "end"
CEND = "cend"

# Conditionals
IF = "if"
THEN = "?"
ELSE = ":"
FI = "fi"

# Special functions
XPRINT = "xprint"

BINARY_OPS: List[str] = [
    "+", "-", "*", "/", "%", "^",
    "max", "min",
    "==", "!=", "<", "<=", ">", ">=",
    "and", "or",
]

UNARY_OPS: List[str] = [
    "sqrt", "exp", "exp2", "ln", "log2", "log10",
    "sin", "cos", "tan", "sinh", "cosh", "tanh",
    "asin", "acos", "atan", "asinh", "acosh", "atanh",
    "sign", "abs", "recip", "fract", "trunc",
    "ceil", "floor", "round",
    "neg", "not",
    "asnum", "asbool",
]

CONSTANTS: List[str] = [PI, TAU, E, PHI]

SPECIAL_FTNS: List[str] = [XPRINT]


def reserved_words() -> Dict[str, str]:
    """Map every reserved lexeme to its token kind."""
    table: Dict[str, str] = {}
    for sym in BINARY_OPS:
        table[sym] = "BINARY_OP"
    for sym in UNARY_OPS:
        table[sym] = "UNARY_OP"
    for sym in CONSTANTS:
        table[sym] = "CONST"
    for sym in SPECIAL_FTNS:
        table[sym] = "SPECIAL"
    table.update({
        TRUE: "LITERAL",
        FALSE: "LITERAL",
        DEFVAR: "DEFINE",
        SETVAR: "ASSIGN",
        DEFUN: "DEFUN",
        FUNCALL: "FUNCALL",
        BEGIN: "BEGIN",
        END: "END",
        CEND: "CEND",
        IF: "IF",
        THEN: "THEN",
        ELSE: "ELSE",
        FI: "FI",
    })
    return table
