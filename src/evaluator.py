from __future__ import annotations
import logging
import sys
from typing import List, Optional, TextIO

from ast_nodes import (
    Code, NoOp, Literal, GetVariable, DefineVariable, SetVariable,
    BinaryOp, UnaryOp, Conditional, PrintAndReturn,
    FunctionDefinition, FunctionCall,
)
from semantic import RecursionChecker
from symbols import Environment, Function
from values import Boolean, EvalError, Number, Value

log = logging.getLogger(__name__)


class Evaluator:
    """Tree-walking evaluator over the closed set of Code nodes."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def evaluate(self, code: Code, env: Environment) -> Value:
        try:
            return self._evaluate(code, env)
        except RecursionError as e:
            raise EvalError("Expression too deeply nested") from e

    def _evaluate(self, code: Code, env: Environment) -> Value:
        if isinstance(code, Literal):
            return code.value

        if isinstance(code, GetVariable):
            return env.get_var(code.name)

        if isinstance(code, DefineVariable):
            value = self._evaluate(code.code, env)
            return env.define_var(code.name, value)

        if isinstance(code, SetVariable):
            value = self._evaluate(code.code, env)
            return env.set_var(code.name, value)

        if isinstance(code, BinaryOp):
            lhs = self._evaluate(code.lhs, env)
            rhs = self._evaluate(code.rhs, env)
            return code.ftn(lhs, rhs)

        if isinstance(code, UnaryOp):
            return code.ftn(self._evaluate(code.arg, env))

        if isinstance(code, Conditional):
            if self._evaluate(code.cond, env).to_bool():
                return self._evaluate(code.true_code, env)
            return self._evaluate(code.false_code, env)

        if isinstance(code, PrintAndReturn):
            value = self._evaluate(code.code, env)
            print(value, file=self.out or sys.stdout)
            return value

        if isinstance(code, FunctionDefinition):
            return self._define_function(code, env)

        if isinstance(code, FunctionCall):
            func = env.get_func(code.name)
            return self.call(func, code.args, env)

        if isinstance(code, NoOp):
            raise EvalError("Eval called on noop")

        raise EvalError(f"Unknown code node {type(code).__name__}")

    def _define_function(self, code: FunctionDefinition, env: Environment) -> Value:
        func = Function(params=list(code.params), body=code.body)
        RecursionChecker(env.funcs).check(code.name, func)
        env.define_func(code.name, func)
        log.debug("installed function %s(%s)", code.name, ", ".join(func.params))
        return Boolean(True)

    def call(self, func: Function, args: List[Code], call_env: Environment) -> Value:
        if len(args) != len(func.params):
            raise EvalError("Invalid arguments length")

        values = [self._evaluate(arg, call_env) for arg in args]
        func_env = call_env.nested()
        for param, value in zip(func.params, values):
            func_env.define_var(param, value)

        result: Value = Number(0.0)
        for expr in func.body:
            result = self._evaluate(expr, func_env)
        return result
