from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from values import EvalError, Value

if TYPE_CHECKING:
    from ast_nodes import Code


@dataclass
class Function:
    params: List[str] = field(default_factory=list)
    body: List["Code"] = field(default_factory=list)


def _two_columns(header: Tuple[str, str], rows: List[Tuple[str, str]]) -> List[str]:
    width = max([len(name) for name, _ in rows] + [len(header[0])])
    underline = ("-" * len(header[0]), "-" * len(header[1]))
    return [f"{name:<{width}}   {value}" for name, value in [header, underline] + rows]


class VariableTable:
    def __init__(self):
        self.vars: Dict[str, Value] = {}

    def get(self, name: str) -> Value:
        if name not in self.vars:
            raise EvalError(f"Unknown variable '{name}'")
        return self.vars[name]

    def define(self, name: str, value: Value) -> Value:
        if name in self.vars:
            raise EvalError(f"Duplicate variable definition '{name}'")
        self.vars[name] = value
        return value

    def set(self, name: str, value: Value) -> Value:
        if name not in self.vars:
            raise EvalError(f"Unknown variable '{name}'")
        self.vars[name] = value
        return value

    def reset(self):
        self.vars.clear()

    def names(self) -> List[str]:
        return list(self.vars)

    def __contains__(self, name: str) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def is_empty(self) -> bool:
        return not self.vars

    def dump(self) -> List[str]:
        return _two_columns(("var", "value"), [(n, str(v)) for n, v in self.vars.items()])


class FunctionTable:
    def __init__(self):
        self.funcs: Dict[str, Function] = {}

    def get(self, name: str) -> Function:
        func = self.lookup(name)
        if func is None:
            raise EvalError(f"Unknown function '{name}'")
        return func

    def lookup(self, name: str) -> Optional[Function]:
        return self.funcs.get(name)

    def define(self, name: str, func: Function):
        self.funcs[name] = func

    def reset(self):
        self.funcs.clear()

    def __contains__(self, name: str) -> bool:
        return name in self.funcs

    def __iter__(self) -> Iterator[str]:
        return iter(self.funcs)

    def __len__(self) -> int:
        return len(self.funcs)

    def is_empty(self) -> bool:
        return not self.funcs

    def dump(self) -> List[str]:
        rows = [(n, f"({', '.join(f.params)})") for n, f in self.funcs.items()]
        return _two_columns(("Func", "Params"), rows)


class Environment:
    """One call frame: a private variable table over a shared function table.

    Every environment created through `nested()` holds the very same
    FunctionTable instance, so a definition made in any frame is visible to
    all of them.
    """

    def __init__(self, funcs: Optional[FunctionTable] = None):
        self.vars = VariableTable()
        self.funcs = funcs if funcs is not None else FunctionTable()

    def nested(self) -> "Environment":
        return Environment(funcs=self.funcs)

    def get_var(self, name: str) -> Value:
        return self.vars.get(name)

    def define_var(self, name: str, value: Value) -> Value:
        return self.vars.define(name, value)

    def set_var(self, name: str, value: Value) -> Value:
        return self.vars.set(name, value)

    def get_func(self, name: str) -> Function:
        return self.funcs.get(name)

    def define_func(self, name: str, func: Function):
        self.funcs.define(name, func)

    def reset(self):
        self.vars.reset()
        self.funcs.reset()

    def __len__(self) -> int:
        return len(self.vars) + len(self.funcs)

    def is_empty(self) -> bool:
        return self.vars.is_empty() and self.funcs.is_empty()

    def dump(self) -> str:
        blocks = []
        if not self.vars.is_empty():
            blocks.append("\n".join(self.vars.dump()))
        if not self.funcs.is_empty():
            blocks.append("\n".join(self.funcs.dump()))
        return "\n\n".join(blocks)
