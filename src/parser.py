from __future__ import annotations
import logging
import math
from typing import List, Tuple

from ast_nodes import *
from lexer import PCalcLexer, LexerError, Token
from operators import binary_op, unary_op
from values import Boolean, Number
import keywords

log = logging.getLogger(__name__)

CONSTANTS = {
    keywords.PI: math.pi,
    keywords.TAU: math.tau,
    keywords.E: math.e,
    keywords.PHI: 1.618033988749895,
}


class ParseError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _title(kind: str) -> str:
    # THEN -> 'Then', as shown in error messages
    return kind.title()


class Parser:
    """Recursive-descent parser for one prefix expression per `parse` call.

    The token buffer survives between calls only while a `def` is still
    missing its closing `end`, so a function can be entered over several
    lines.
    """

    def __init__(self):
        self.lexer = PCalcLexer()

    def parse(self, text: str) -> Code:
        try:
            self.lexer.tokenize(text)
        except LexerError as e:
            self.lexer.clear()
            raise ParseError(e.message) from e

        if self.lexer.starts_with("DEFUN") and not self.lexer.ends_with("END"):
            log.debug("partial function definition, waiting for 'end'")
            return NoOp()

        try:
            code = self.parse_code()
        except ParseError:
            self.lexer.clear()
            raise
        except RecursionError as e:
            self.lexer.clear()
            raise ParseError("Expression too deeply nested") from e

        if not self.lexer.is_empty():
            self.lexer.clear()
            raise ParseError(f"Invalid expression - '{text}'")
        return code

    def is_empty(self) -> bool:
        return self.lexer.is_empty()

    # ---------------- EXPRESSIONS ----------------
    def parse_code(self) -> Code:
        tok = self.lexer.next_token()
        if tok is None:
            raise ParseError("Expecting token")

        kind = tok.kind
        if kind == "LITERAL":
            return self.parse_literal(tok)
        if kind == "CONST":
            return self.parse_const(tok)
        if kind == "DEFINE":
            return self.parse_define_variable()
        if kind == "ASSIGN":
            return self.parse_set_variable()
        if kind == "DEFUN":
            return self.parse_function()
        if kind == "FUNCALL":
            return self.parse_funcall()
        if kind == "BINARY_OP":
            return self.parse_binary_op(tok)
        if kind == "UNARY_OP":
            return self.parse_unary_op(tok)
        if kind == "SPECIAL":
            return self.parse_special(tok)
        if kind == "IDENTIFIER":
            return GetVariable(name=tok.lexeme)
        if kind == "IF":
            return self.parse_conditional()
        if kind == "BEGIN":
            raise ParseError("Invalid expression containing begin")
        if kind in ("END", "CEND"):
            raise ParseError("Invalid expression containing end")
        if kind in ("THEN", "ELSE", "FI"):
            raise ParseError(f"Invalid expression containing {kind.lower()}")

        raise ParseError(f"Unexpected token '{tok.lexeme}'")

    def parse_literal(self, tok: Token) -> Literal:
        if tok.lexeme == keywords.TRUE:
            return Literal(value=Boolean(True))
        if tok.lexeme == keywords.FALSE:
            return Literal(value=Boolean(False))
        return Literal(value=Number(float(tok.lexeme)))

    def parse_const(self, tok: Token) -> Literal:
        if tok.lexeme not in CONSTANTS:
            raise ParseError(f"Unknown constant - '{tok.lexeme}'")
        return Literal(value=Number(CONSTANTS[tok.lexeme]))

    def parse_define_variable(self) -> DefineVariable:
        name_tok = self.lexer.next_token()
        if name_tok is None:
            raise ParseError("Incomplete variable definition")
        if name_tok.kind != "IDENTIFIER":
            raise ParseError(f"Invalid variable definition name - '{name_tok.lexeme}'")
        return DefineVariable(name=name_tok.lexeme, code=self.parse_code())

    def parse_set_variable(self) -> SetVariable:
        name_tok = self.lexer.next_token()
        if name_tok is None:
            raise ParseError("Incomplete set variable")
        if name_tok.kind != "IDENTIFIER":
            raise ParseError(f"Invalid set variable name - '{name_tok.lexeme}'")
        return SetVariable(name=name_tok.lexeme, code=self.parse_code())

    def parse_binary_op(self, tok: Token) -> BinaryOp:
        ftn = binary_op(tok.lexeme)
        if ftn is None:
            raise ParseError(f"Unknown binary op - {tok.lexeme}")
        lhs = self.parse_code()
        rhs = self.parse_code()
        return BinaryOp(op=tok.lexeme, ftn=ftn, lhs=lhs, rhs=rhs)

    def parse_unary_op(self, tok: Token) -> UnaryOp:
        ftn = unary_op(tok.lexeme)
        if ftn is None:
            raise ParseError(f"Unknown unary op - {tok.lexeme}")
        return UnaryOp(op=tok.lexeme, ftn=ftn, arg=self.parse_code())

    def parse_special(self, tok: Token) -> Code:
        if tok.lexeme == keywords.XPRINT:
            return PrintAndReturn(code=self.parse_code())
        raise ParseError(f"Unknown special ftn - {tok.lexeme}")

    # ---------------- FUNCTIONS ----------------
    def _expect_name(self, tok: Token, what: str) -> str:
        if self.lexer.is_reserved(tok.lexeme):
            raise ParseError(f"Invalid reserved {what} - '{tok.lexeme}'")
        if tok.kind != "IDENTIFIER":
            raise ParseError(f"Invalid {what} - '{tok.lexeme}'")
        return tok.lexeme

    def parse_function(self) -> FunctionDefinition:
        name_tok = self.lexer.next_token()
        if name_tok is None:
            raise ParseError("Invalid function definition")
        name = self._expect_name(name_tok, "function name definition")

        params: List[str] = []
        while True:
            tok = self.lexer.next_token()
            if tok is None:
                raise ParseError("Invalid function definition/parameters")
            if tok.kind == "BEGIN":
                break
            params.append(self._expect_name(tok, "function parameter definition"))

        body: List[Code] = []
        while True:
            tok = self.lexer.peek()
            if tok is None:
                raise ParseError("Invalid function definition/body")
            if tok.kind == "END":
                self.lexer.next_token()
                break
            body.append(self.parse_code())

        return FunctionDefinition(name=name, params=params, body=body)

    def parse_funcall(self) -> FunctionCall:
        name_tok = self.lexer.next_token()
        if name_tok is None:
            raise ParseError("Invalid function call")
        if name_tok.kind != "IDENTIFIER":
            raise ParseError(f"Invalid function call name - '{name_tok.lexeme}'")

        args: List[Code] = []
        while True:
            tok = self.lexer.peek()
            if tok is None:
                raise ParseError("Invalid function call/arguments")
            if tok.kind == "CEND":
                self.lexer.next_token()
                break
            args.append(self.parse_code())

        return FunctionCall(name=name_tok.lexeme, args=args)

    # ---------------- CONDITIONALS ----------------
    def parse_conditional(self) -> Conditional:
        cond, _ = self._conditional_part("THEN", or_fi=False)
        true_code, stop = self._conditional_part("ELSE", or_fi=True)
        if stop:
            return Conditional(cond=cond, true_code=true_code)
        false_code, _ = self._conditional_part("FI", or_fi=False)
        return Conditional(cond=cond, true_code=true_code, false_code=false_code)

    def _conditional_part(self, ends_with: str, or_fi: bool) -> Tuple[Code, bool]:
        """Parse one part and its closing delimiter; True when it closed with 'fi'."""
        part = self.parse_code()
        tok = self.lexer.peek()
        if tok is None:
            raise ParseError(f"Incomplete if expression - missing '{_title(ends_with)}'")
        if tok.kind == ends_with:
            self.lexer.next_token()
            return part, False
        if or_fi and tok.kind == "FI":
            self.lexer.next_token()
            return part, True
        raise ParseError(f"Invalid if expression - expecting '{_title(ends_with)}'")
