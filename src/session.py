from __future__ import annotations
import sys
from typing import Optional, TextIO

from evaluator import Evaluator
from parser import Parser, ParseError
from symbols import Environment
from values import EvalError, Number

LAST_VAR = "last"

CMD_ENV = ":env"
CMD_RESET = ":reset"
CMD_BATCH = ":batch"
CMD_LAST = ":last"


class Session:
    """Drives a Parser and an Environment over lines of input.

    Several expressions may share a line, separated by ';'. The first
    failure abandons the rest of its line; the value of every successful
    expression is stored in the `last` variable.
    """

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None, batch: bool = False):
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.batch = batch
        self.parser = Parser()
        self.env = Environment()
        self.evaluator = Evaluator(out=self.out)
        self.reset()

    def reset(self):
        self.env.reset()
        self.env.define_var(LAST_VAR, Number(0.0))

    def pending(self) -> bool:
        """True while a multi-line function definition is incomplete."""
        return not self.parser.is_empty()

    def eval_lines(self, text: str) -> bool:
        for line in text.splitlines():
            if not line.strip():
                continue
            if not self.eval_line(line):
                return False
        return True

    def try_command(self, line: str) -> bool:
        """Run a session command such as `:env`; False if `line` is not one."""
        cmd = line.strip()
        if cmd == CMD_ENV:
            print(self.env.dump(), file=self.out)
        elif cmd == CMD_RESET:
            self.reset()
        elif cmd == CMD_BATCH:
            self.batch = not self.batch
            print(f"batch mode {'on' if self.batch else 'off'}", file=self.out)
        elif cmd == CMD_LAST:
            print(self.env.get_var(LAST_VAR), file=self.out)
        else:
            return False
        return True

    def eval_line(self, line: str) -> bool:
        if self.try_command(line):
            return True
        for expr in (e.strip() for e in line.split(";")):
            if not expr:
                continue
            if not self.eval_expr(expr):
                return False
        return True

    def eval_expr(self, expr: str) -> bool:
        try:
            code = self.parser.parse(expr)
        except ParseError as e:
            print(f"ParseError: {e.message}", file=self.err)
            return False

        if not code.is_evaluable():
            return True

        try:
            value = self.evaluator.evaluate(code, self.env)
        except EvalError as e:
            print(f"EvalError: {e.message}", file=self.err)
            return False

        if not self.batch:
            print(value, file=self.out)
        self.env.set_var(LAST_VAR, value)
        return True
