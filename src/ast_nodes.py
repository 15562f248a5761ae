from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from values import Boolean, Value
from operators import BinaryFtn, UnaryFtn

if TYPE_CHECKING:
    from symbols import Environment


@dataclass
class Code:
    """Base of every evaluable node."""

    def eval(self, env: "Environment") -> Value:
        from evaluator import Evaluator
        return Evaluator().evaluate(self, env)

    def is_evaluable(self) -> bool:
        return True

    def is_funcall(self) -> bool:
        return False

    def bound_name(self) -> Optional[str]:
        return None

# ---------- Placeholder ----------
@dataclass
class NoOp(Code):
    def is_evaluable(self) -> bool:
        return False

# ---------- Values / Variables ----------
@dataclass
class Literal(Code):
    value: Value = field(default_factory=Boolean)

@dataclass
class GetVariable(Code):
    name: str = ""

    def bound_name(self) -> Optional[str]:
        return self.name

@dataclass
class DefineVariable(Code):
    name: str = ""
    code: Code = None

    def bound_name(self) -> Optional[str]:
        return self.name

@dataclass
class SetVariable(Code):
    name: str = ""
    code: Code = None

    def bound_name(self) -> Optional[str]:
        return self.name

# ---------- Operators ----------
@dataclass
class BinaryOp(Code):
    op: str = ""
    ftn: BinaryFtn = None
    lhs: Code = None
    rhs: Code = None

@dataclass
class UnaryOp(Code):
    op: str = ""
    ftn: UnaryFtn = None
    arg: Code = None

# ---------- Control flow ----------
@dataclass
class Conditional(Code):
    cond: Code = None
    true_code: Code = None
    # one-armed form: `if c ? x fi`
    false_code: Code = field(default_factory=lambda: Literal(Boolean(False)))

@dataclass
class PrintAndReturn(Code):
    code: Code = None

# ---------- Functions ----------
@dataclass
class FunctionDefinition(Code):
    name: str = ""
    params: List[str] = field(default_factory=list)
    body: List[Code] = field(default_factory=list)

    def bound_name(self) -> Optional[str]:
        return self.name

@dataclass
class FunctionCall(Code):
    name: str = ""
    args: List[Code] = field(default_factory=list)

    def is_funcall(self) -> bool:
        return True

    def bound_name(self) -> Optional[str]:
        return self.name
