from __future__ import annotations
import logging
from typing import Dict, List

from ast_nodes import (
    Code, BinaryOp, UnaryOp, Conditional, DefineVariable, SetVariable,
    FunctionCall, PrintAndReturn,
)
from symbols import Function, FunctionTable
from values import EvalError

log = logging.getLogger(__name__)


class CheckError(EvalError):
    @classmethod
    def self_recursive(cls, name: str) -> "CheckError":
        return cls(f"Self recursive function '{name}'")

    @classmethod
    def dual_recursive(cls, name: str, other: str) -> "CheckError":
        return cls(f"Dual recursive functions '{name}' and '{other}'")

    @classmethod
    def cross_recursive(cls, name: str, other: str) -> "CheckError":
        return cls(f"Cross recursive functions '{name}' and '{other}'")


def _children(node: Code) -> List[Code]:
    if isinstance(node, (DefineVariable, SetVariable, PrintAndReturn)):
        return [node.code]
    if isinstance(node, BinaryOp):
        return [node.lhs, node.rhs]
    if isinstance(node, UnaryOp):
        return [node.arg]
    if isinstance(node, Conditional):
        return [node.cond, node.true_code, node.false_code]
    if isinstance(node, FunctionCall):
        return list(node.args)
    # leaves, and nested definitions whose bodies run only when called
    return []


def called_names(body: List[Code]) -> List[str]:
    """Distinct names of every function called anywhere in `body`, in source order."""
    names: Dict[str, None] = {}
    stack = list(reversed(body))
    while stack:
        node = stack.pop()
        if node.is_funcall():
            names.setdefault(node.bound_name(), None)
        stack.extend(reversed(_children(node)))
    return list(names)


class RecursionChecker:
    """Rejects a function definition that could ever reach itself.

    The language has no call depth limit, so a recursive function would
    never terminate. The check runs before the function is installed and
    only reads the current function table.
    """

    def __init__(self, funcs: FunctionTable):
        self.funcs = funcs

    def check(self, name: str, func: Function):
        calls = called_names(func.body)
        self.check_self_recursive(name, calls)
        self.check_dual_recursive(name, calls)
        self.check_cross_recursive(name, calls)

    def check_self_recursive(self, name: str, calls: List[str]):
        if name in calls:
            log.debug("rejecting %s: calls itself", name)
            raise CheckError.self_recursive(name)

    def check_dual_recursive(self, name: str, calls: List[str]):
        for other in calls:
            if other == name:
                continue
            func = self.funcs.lookup(other)
            if func is not None and name in called_names(func.body):
                log.debug("rejecting %s: mutual recursion with %s", name, other)
                raise CheckError.dual_recursive(name, other)

    def check_cross_recursive(self, name: str, calls: List[str]):
        # FIFO worklist, so the reported function is the first one reached
        to_visit = [n for n in calls if n != name]
        queued = set(to_visit)
        visited = set()
        while to_visit:
            current = to_visit.pop(0)
            visited.add(current)
            func = self.funcs.lookup(current)
            if func is None:
                continue
            for callee in called_names(func.body):
                if callee == name:
                    log.debug("rejecting %s: reached again through %s", name, current)
                    raise CheckError.cross_recursive(name, current)
                if callee not in visited and callee not in queued:
                    queued.add(callee)
                    to_visit.append(callee)
