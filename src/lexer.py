from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

import ply.lex as lex

from keywords import reserved_words

log = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"[^\W\d_]\w*\Z")


class LexerError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def invalid_identifier(cls, word: str) -> "LexerError":
        return cls(f"Invalid identifier - '{word}'")


@dataclass
class Token:
    kind: str
    lexeme: str
    column: int = 0


class PCalcLexer:

    tokens = (
        # Operators
        'BINARY_OP', 'UNARY_OP',

        # Values
        'LITERAL', 'CONST', 'IDENTIFIER',

        # Variables
        'DEFINE', 'ASSIGN',

        # Functions
        'DEFUN', 'FUNCALL', 'SPECIAL',
        'BEGIN', 'END', 'CEND',

        # Conditionals
        'IF', 'THEN', 'ELSE', 'FI',
    )

    reserved = reserved_words()

    # Words are whitespace separated
    t_ignore = ' \t\r\n\f\v'

    def __init__(self):
        self.lexer = None
        self.buffer: List[Token] = []

    # Every word is classified here, not just identifiers
    def t_IDENTIFIER(self, t):
        r'\S+'
        t.type = self.token_kind(t.value)
        return t

    def t_error(self, t):
        raise LexerError.invalid_identifier(t.value.split()[0])

    def build(self, **kwargs):
        """Build the lexer"""
        kwargs.setdefault('errorlog', log)
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    # ---------------- classification ----------------
    def token_kind(self, word: str) -> str:
        kind = self.reserved.get(word)
        if kind is not None:
            return kind
        if self.is_number(word):
            return 'LITERAL'
        if IDENTIFIER_RE.match(word):
            return 'IDENTIFIER'
        raise LexerError.invalid_identifier(word)

    @staticmethod
    def is_number(word: str) -> bool:
        if '_' in word:
            return False
        try:
            float(word)
        except ValueError:
            return False
        return True

    def is_reserved(self, word: str) -> bool:
        return word in self.reserved

    # ---------------- buffer ----------------
    def tokenize(self, data: str) -> List[Token]:
        """Append the tokens of `data` to the pending buffer.

        A failing call leaves the buffer as it was before the call.
        """
        if not self.lexer:
            self.build()

        self.lexer.input(data)
        tokens: List[Token] = []

        while True:
            tok = self.lexer.token()
            if not tok:
                break
            line_start = data.rfind('\n', 0, tok.lexpos) + 1
            tokens.append(Token(tok.type, tok.value, tok.lexpos - line_start + 1))

        self.buffer.extend(tokens)
        log.debug("tokenized %d token(s), %d pending", len(tokens), len(self.buffer))
        return tokens

    def peek(self) -> Optional[Token]:
        return self.buffer[0] if self.buffer else None

    def next_token(self) -> Optional[Token]:
        return self.buffer.pop(0) if self.buffer else None

    def clear(self):
        self.buffer.clear()

    def is_empty(self) -> bool:
        return not self.buffer

    def starts_with(self, kind: str) -> bool:
        return bool(self.buffer) and self.buffer[0].kind == kind

    def ends_with(self, kind: str) -> bool:
        return bool(self.buffer) and self.buffer[-1].kind == kind

    def contains(self, kind: str) -> bool:
        return any(tok.kind == kind for tok in self.buffer)


def print_tokens(tokens: List[Token]):
    if not tokens:
        print("No tokens found!")
        return

    print(f"{'Column':<7}| {'Token':<12}| Value")
    print("-" * 40)

    for tok in tokens:
        print(f"{tok.column:<7}| {tok.kind:<12}| {tok.lexeme}")
