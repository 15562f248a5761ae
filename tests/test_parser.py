"""
Parser tests: each expression form, error messages and multi-line definitions
"""

import math
import pytest
from ast_nodes import NoOp, Conditional, FunctionDefinition, Literal
from parser import Parser, ParseError
from semantic import CheckError
from values import Number, Boolean, EvalError


def parse_error(parser, text):
    with pytest.raises(ParseError) as excinfo:
        parser.parse(text)
    return str(excinfo.value)


def eval_error(run, text):
    with pytest.raises(EvalError) as excinfo:
        run(text)
    return str(excinfo.value)


class TestLiterals:

    @pytest.mark.parametrize("text, expected", [
        ("true", Boolean(True)),
        ("false", Boolean(False)),
        ("5.0", Number(5.0)),
        ("-5.0", Number(-5.0)),
        ("pi", Number(math.pi)),
        ("tau", Number(math.tau)),
        ("e", Number(math.e)),
        ("phi", Number(1.618033988749895)),
    ])
    def test_values(self, run, text, expected):
        assert run(text) == expected

    def test_empty_input(self, parser):
        assert parse_error(parser, "") == "Expecting token"

    def test_invalid_identifier(self, parser):
        assert parse_error(parser, "+ 1 $x") == "Invalid identifier - '$x'"
        assert parser.is_empty()


class TestVariables:

    def test_define(self, run, parser, env):
        assert run("var flag true") == Boolean(True)
        assert run("var num 10") == Number(10.0)
        assert len(env) == 2

        assert parse_error(parser, "var bad") == "Expecting token"
        assert parse_error(parser, "var") == "Incomplete variable definition"
        assert parse_error(parser, "var true 5") == "Invalid variable definition name - 'true'"
        assert parse_error(parser, "var sqrt 5") == "Invalid variable definition name - 'sqrt'"

    def test_define_twice(self, run):
        run("var x 5")
        assert run("x") == Number(5.0)
        assert eval_error(run, "var x 6") == "Duplicate variable definition 'x'"
        run("= x 10")
        assert run("x") == Number(10.0)

    def test_set(self, run, parser, env):
        run("var flag true")
        run("var num 10")
        assert run("= flag false") == Boolean(False)
        assert run("= num 20") == Number(20.0)
        assert env.get_var("num") == Number(20.0)

        assert parse_error(parser, "= bad") == "Expecting token"
        assert parse_error(parser, "=") == "Incomplete set variable"
        assert parse_error(parser, "= true 5") == "Invalid set variable name - 'true'"
        assert eval_error(run, "= missing 1") == "Unknown variable 'missing'"

    def test_unknown_variable(self, run):
        assert eval_error(run, "nope") == "Unknown variable 'nope'"


class TestOperators:

    @pytest.mark.parametrize("text, expected", [
        ("+ 2 3", Number(5.0)),
        ("- 4 2", Number(2.0)),
        ("* 2 3", Number(6.0)),
        ("/ 6 2", Number(3.0)),
        ("% 5 2", Number(1.0)),
        ("^ 2 3", Number(8.0)),
        ("max 2 4", Number(4.0)),
        ("min 2 4", Number(2.0)),
        ("== 1 1", Boolean(True)),
        ("!= 1 2", Boolean(True)),
        ("< 2 3", Boolean(True)),
        ("<= 2 3", Boolean(True)),
        ("> 3 2", Boolean(True)),
        (">= 3 2", Boolean(True)),
        ("and true true", Boolean(True)),
        ("or true false", Boolean(True)),
        ("* 2 + 5 20", Number(50.0)),
        ("sqrt + ^ 3 2 ^ 4 2", Number(5.0)),
        ("not true", Boolean(False)),
        ("abs -10", Number(10.0)),
        ("and asbool 5 true", Boolean(True)),
        ("+ 5 asnum true", Number(6.0)),
    ])
    def test_evaluate(self, run, text, expected):
        assert run(text) == expected

    def test_division_by_zero(self, run):
        assert run("/ 1 0") == Number(math.inf)

    def test_type_errors(self, run):
        assert eval_error(run, "+ 5 true") == "true not a number"
        assert eval_error(run, "and 1 0") == "1 not a boolean"
        assert eval_error(run, "== 1 true") == "Mismatched comparison - '1' and 'true'"

    def test_missing_operands(self, parser):
        assert parse_error(parser, "+") == "Expecting token"
        assert parse_error(parser, "+ 1") == "Expecting token"
        assert parse_error(parser, "sqrt") == "Expecting token"

    def test_leftover_tokens(self, parser):
        assert parse_error(parser, "+ 1 2 3") == "Invalid expression - '+ 1 2 3'"
        assert parser.is_empty()

    @pytest.mark.parametrize("text, word", [
        ("begin", "begin"),
        ("end", "end"),
        ("cend", "end"),
        ("?", "then"),
        (":", "else"),
        ("fi", "fi"),
    ])
    def test_misplaced_keywords(self, parser, text, word):
        assert parse_error(parser, text) == f"Invalid expression containing {word}"


class TestPrint:

    def test_xprint(self, run, capsys):
        assert run("xprint 10") == Number(10.0)
        assert run("xprint true") == Boolean(True)
        assert capsys.readouterr().out == "10\ntrue\n"


class TestFunctions:

    def test_define(self, run, parser):
        assert run("def add x y begin + x y end") == Boolean(True)
        assert run("def add x y\nbegin\n+ x y\nend") == Boolean(True)

        assert parse_error(parser, "def sqrt x begin ^ x 0.5 end") == \
            "Invalid reserved function name definition - 'sqrt'"
        assert parse_error(parser, "def mysqrt tau begin ^ tau 0.5 end") == \
            "Invalid reserved function parameter definition - 'tau'"
        assert parse_error(parser, "def 5 begin 1 end") == \
            "Invalid function name definition - '5'"

    def test_definition_node(self, parser):
        code = parser.parse("def add x y begin + x y end")
        assert isinstance(code, FunctionDefinition)
        assert code.name == "add"
        assert code.params == ["x", "y"]
        assert len(code.body) == 1

    def test_incomplete_definitions(self, parser):
        assert parse_error(parser, "def end") == "Invalid reserved function name definition - 'end'"
        assert parse_error(parser, "def f x end") == \
            "Invalid reserved function parameter definition - 'end'"
        assert parse_error(parser, "def f begin 1 fi end") == "Invalid expression containing fi"
        assert parse_error(parser, "def f begin call g end") == "Invalid expression containing end"

    def test_multi_line_definition(self, parser, env):
        assert isinstance(parser.parse("def dist x1 y1 x2 y2"), NoOp)
        assert not parser.is_empty()
        assert isinstance(parser.parse("begin"), NoOp)
        assert isinstance(parser.parse("var dx2 ^ - x2 x1 2"), NoOp)
        assert isinstance(parser.parse("var dy2 ^ - y2 y1 2"), NoOp)
        assert isinstance(parser.parse("sqrt + dx2 dy2"), NoOp)
        assert parser.parse("end").eval(env) == Boolean(True)
        assert parser.is_empty()
        assert parser.parse("call dist 3 4 6 8 cend").eval(env) == Number(5.0)

    def test_error_clears_pending_definition(self, parser, env):
        parser.parse("def f")
        assert parse_error(parser, "begin $ end") == "Invalid identifier - '$'"
        assert parser.is_empty()
        assert parser.parse("+ 1 1").eval(env) == Number(2.0)

    def test_call(self, run, parser):
        assert run("def bar1 begin 1 end") == Boolean(True)
        assert run("call bar1 cend") == Number(1.0)

        assert run("def add x y z begin + x + y z end") == Boolean(True)
        assert run("call add 1 2 3 cend") == Number(6.0)
        assert run("+ 1 call add + 2 3 1 - 5 3 cend") == Number(9.0)
        assert run("+ call add + 2 3 1 - 5 3 cend 1") == Number(9.0)

        assert parse_error(parser, "call bar1") == "Invalid function call/arguments"
        assert parse_error(parser, "call add 1 2 3") == "Invalid function call/arguments"
        assert parse_error(parser, "call") == "Invalid function call"
        assert parse_error(parser, "call sqrt 4 cend") == "Invalid function call name - 'sqrt'"

        assert eval_error(run, "call bar1 1 cend") == "Invalid arguments length"
        assert eval_error(run, "call add 1 2 cend") == "Invalid arguments length"
        assert eval_error(run, "call add 1 2 3 4 cend") == "Invalid arguments length"
        assert eval_error(run, "call sub 10 5 cend") == "Unknown function 'sub'"

    def test_parameters_are_local(self, run):
        run("def add x y begin + x y end")
        assert run("call add 4 6 cend") == Number(10.0)
        assert eval_error(run, "x") == "Unknown variable 'x'"
        assert eval_error(run, "y") == "Unknown variable 'y'"

    def test_redefinition_replaces(self, run):
        run("def f begin 1 end")
        run("def f begin 2 end")
        assert run("call f cend") == Number(2.0)


class TestRecursion:

    def test_self_recursive(self, run, env):
        with pytest.raises(CheckError) as excinfo:
            run("def foo begin call foo cend end")
        assert str(excinfo.value) == "Self recursive function 'foo'"
        assert env.funcs.lookup("foo") is None

    def test_self_recursive_nested_call(self, run):
        with pytest.raises(CheckError) as excinfo:
            run("def fact n begin if <= n 1 ? 1 : * n call fact - n 1 cend fi end")
        assert str(excinfo.value) == "Self recursive function 'fact'"

    def test_mutual_recursion(self, run, env):
        run("def bar begin call foo cend end")
        with pytest.raises(CheckError) as excinfo:
            run("def foo begin call bar cend end")
        assert str(excinfo.value) == "Dual recursive functions 'foo' and 'bar'"
        assert env.funcs.lookup("foo") is None

    def test_three_hop_cycle(self, run, env):
        run("def bar begin call tar cend end")
        run("def tar begin call foo cend end")
        with pytest.raises(CheckError) as excinfo:
            run("def foo begin call bar cend end")
        assert str(excinfo.value) == "Cross recursive functions 'foo' and 'tar'"
        assert env.funcs.lookup("foo") is None

    def test_rejected_redefinition_keeps_old(self, run):
        run("def foo begin 1 end")
        run("def bar begin call foo cend end")
        with pytest.raises(CheckError):
            run("def foo begin call bar cend end")
        assert run("call bar cend") == Number(1.0)


class TestConditionals:

    def test_two_armed(self, run):
        run("var x 5")
        run("var y 10")
        assert run("if true ? 1 : 2 fi") == Number(1.0)
        assert run("if false ? 1 : 2 fi") == Number(2.0)
        assert run("if <= x 5 ? x : y fi") == Number(5.0)
        assert run("if > x 5 ? x : y fi") == Number(10.0)

        assert run("if <= x 5 ? = x + x 1 : = y + y 1 fi") == Number(6.0)
        assert run("x") == Number(6.0)
        assert run("y") == Number(10.0)
        assert run("if < y 10 ? = x + x 1 : = y + y 1 fi") == Number(11.0)
        assert run("x") == Number(6.0)
        assert run("y") == Number(11.0)

    def test_one_armed(self, run):
        run("var x 5")
        run("var y 10")
        assert run("if true ? 1 fi") == Number(1.0)
        assert run("if false ? 1 fi") == Boolean(False)
        assert run("if <= x 5 ? = x + x 1 fi") == Number(6.0)
        assert run("if < y 10 ? = y + y 1 fi") == Boolean(False)
        assert run("y") == Number(10.0)

    def test_one_armed_node(self, parser):
        code = parser.parse("if true ? 1 fi")
        assert isinstance(code, Conditional)
        assert code.false_code == Literal(Boolean(False))

    def test_untaken_branch_never_prints(self, run, capsys):
        run("if true ? 1 : xprint 2 fi")
        run("if false ? xprint 3 fi")
        assert capsys.readouterr().out == ""

    def test_condition_must_be_boolean(self, run):
        assert eval_error(run, "if 1 ? 1 : 2 fi") == "1 not a boolean"

    def test_errors(self, parser):
        assert parse_error(parser, "if true 1 fi") == "Invalid if expression - expecting 'Then'"
        assert parse_error(parser, "if true ? 1 : 0") == "Incomplete if expression - missing 'Fi'"
        assert parse_error(parser, "if true ? 1 0 fi") == "Invalid if expression - expecting 'Else'"
        assert parse_error(parser, "if true fi") == "Invalid if expression - expecting 'Then'"
        assert parse_error(parser, "if true ? 1") == "Incomplete if expression - missing 'Else'"
        assert parse_error(parser, "if true") == "Incomplete if expression - missing 'Then'"
        assert parse_error(parser, "if true ? 1 : 2 3") == "Invalid if expression - expecting 'Fi'"


class TestEndToEnd:

    def test_pythagoras(self, run):
        run("var x 3")
        run("var y 4")
        run("var z sqrt + ^ x 2 ^ y 2")
        assert run("z") == Number(5.0)

    def test_function_uses_other_function(self, run):
        run("def dist x1 y1 x2 y2 begin var dx2 ^ - x2 x1 2 var dy2 ^ - y2 y1 2 sqrt + dx2 dy2 end")
        run("def near x1 y1 x2 y2 begin < call dist x1 y1 x2 y2 cend 1.0 end")
        assert run("call near 3 4 3.5 4.5 cend") == Boolean(True)
        assert run("call near 3 4 6 8 cend") == Boolean(False)


class TestNesting:

    def test_moderate_nesting(self, run):
        assert run("neg " * 50 + "1") == Number(1.0)

    def test_too_deep_is_a_parse_error(self, parser):
        assert parse_error(parser, "neg " * 5000 + "1") == "Expression too deeply nested"
        assert parser.is_empty()

    def test_parser_recovers_after_too_deep(self, parser):
        with pytest.raises(ParseError):
            parser.parse("+ 1 " * 5000 + "1")
        assert parser.parse("5") == Literal(Number(5.0))
