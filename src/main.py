import logging
import os
import sys
from lexer import PCalcLexer, LexerError, print_tokens
from parser import Parser, ParseError
from session import Session

def read_input(argv):
    if len(argv) == 2:
        with open(argv[1], "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()

def usage():
    print("Usage:")
    print("  pcalc lex < input.pcalc")
    print("  pcalc check < input.pcalc")
    print("  pcalc run < input.pcalc")
    print("  or:")
    print("  pcalc lex file.pcalc")
    print("  pcalc check file.pcalc")
    print("  pcalc run file.pcalc")

def check(data):
    parser = Parser()
    errors = 0
    for line in data.splitlines():
        for expr in (e.strip() for e in line.split(";")):
            if not expr:
                continue
            try:
                parser.parse(expr)
            except ParseError as e:
                print(f"ParseError: {e.message}")
                errors += 1
    if not parser.is_empty():
        print("ParseError: Invalid function definition/body")
        errors += 1
    if not errors:
        print("OK: no syntax errors found.")
    return errors

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if os.environ.get("PCALC_DEBUG"):
        logging.basicConfig(level=logging.DEBUG)

    if len(argv) < 1:
        usage()
        sys.exit(1)

    mode = argv[0].lower()
    if mode not in ("lex", "check", "run"):
        usage()
        sys.exit(1)

    data = read_input(argv)

    if mode == "lex":
        lexer = PCalcLexer()
        try:
            tokens = lexer.tokenize(data)
        except LexerError as e:
            print(str(e))
            sys.exit(1)
        print_tokens(tokens)
        return

    if mode == "check":
        if check(data):
            sys.exit(1)
        return

    session = Session()
    if not session.eval_lines(data):
        sys.exit(1)

if __name__ == "__main__":
    main()
