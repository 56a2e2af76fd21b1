import pytest

from climbcalc.errors import DivisionByZeroError, ParseError, UnimplementedOperatorError
from climbcalc.expression import Infix, Number, Postfix, Prefix
from climbcalc.lexer import Lexer
from climbcalc.operators import INFIX_OPS, POSTFIX_OPS, PREFIX_OPS
from climbcalc.parser import Parser, calculate, parse
from climbcalc.tokens import END_OF_INPUT, OperatorToken, RIGHT_PAREN


@pytest.mark.parametrize("n", [0, 7, 42, 1000000, 9223372036854775807])
def test_numeral_round_trip(n):
    assert calculate(str(n)) == n


@pytest.mark.parametrize("text", [
    "2+3*4",
    " 2 + 3 * 4 ",
    "\t2\t+3*\t4",
    "2 +3 *4",
])
def test_whitespace_does_not_change_result(text):
    assert calculate(text) == 14


def test_precedence_and_grouping():
    assert calculate("2+3*4") == 14
    assert calculate("(2+3)*4") == 20
    assert str(parse("2+3*4")) == "(2 + (3 * 4))"


def test_left_associativity():
    assert calculate("10-3-2") == 5
    assert str(parse("10-3-2")) == "((10 - 3) - 2)"
    assert calculate("100/10/5") == 2


def test_prefix_versus_infix_minus():
    assert calculate("-3+5") == 2
    assert str(parse("-3+5")) == "((-3) + 5)"
    assert calculate("3- -5") == 8
    assert calculate("3--5") == 8


def test_prefix_binds_tighter_than_infix():
    # (-7)/2, not -(7/2); both truncate to -3 but the tree shows the grouping
    assert str(parse("-7/2")) == "((-7) / 2)"
    assert calculate("-7%2") == -1


def test_stacked_prefix_operators():
    assert calculate("--5") == 5
    assert calculate("++5") == 5
    assert calculate("-~0") == 1
    assert calculate("!!7") == 1


def test_boolean_results_are_zero_or_one():
    assert calculate("3<5") == 1
    assert calculate("5<3") == 0
    assert calculate("5>3") == 1
    assert calculate("4=4") == 1
    assert calculate("4~4") == 0
    assert calculate("4~5") == 1
    assert calculate("!0") == 1
    assert calculate("!5") == 0


def test_bitwise_family():
    assert calculate("6&3") == 2
    assert calculate("6|1") == 7
    assert calculate("~0") == -1


def test_tilde_role_depends_on_position():
    # prefix bitwise-not, then infix not-equal
    assert str(parse("~1~2")) == "((~1) ~ 2)"
    assert calculate("~1~2") == 1


def test_mixed_precedence_levels():
    assert calculate("1+2<4=1") == 1
    assert str(parse("3~4&1")) == "((3 ~ 4) & 1)"
    assert calculate("1|2&4") == 0


def test_tree_shape():
    tree = parse("-(1+2)*3")
    expected = Infix(
        Prefix(PREFIX_OPS['-'], Infix(Number(1), INFIX_OPS['+'], Number(2))),
        INFIX_OPS['*'],
        Number(3),
    )
    assert tree == expected
    assert tree.evaluate() == -9


def test_postfix_parses_and_binds_tightest():
    assert parse("5!") == Postfix(Number(5), POSTFIX_OPS['!'])
    assert str(parse("-2!")) == "(-(2!))"
    assert str(parse("2*3!")) == "(2 * (3!))"


def test_parse_expression_leaves_weaker_operators_in_stream():
    lexer = Lexer("2*3+4")
    tree = Parser(lexer).parse_expression(7)
    assert str(tree) == "(2 * 3)"
    assert lexer.current() == OperatorToken('+')


def test_missing_close_paren():
    with pytest.raises(ParseError) as e:
        parse("(2+3")
    assert e.value.expected == ")"
    assert e.value.token == END_OF_INPUT
    assert str(e.value) == "Expected ), got EndOfInput"


def test_missing_operand_reports_offending_token():
    with pytest.raises(ParseError) as e:
        parse("*5")
    assert str(e.value) == "Expected expression, got Operator('*')"


@pytest.mark.parametrize("text,token", [
    ("", END_OF_INPUT),
    ("1+", END_OF_INPUT),
    ("()", RIGHT_PAREN),
    ("-", END_OF_INPUT),
])
def test_expected_expression(text, token):
    with pytest.raises(ParseError) as e:
        parse(text)
    assert e.value.expected == "expression"
    assert e.value.token == token


def test_trailing_tokens_rejected():
    with pytest.raises(ParseError) as e:
        parse("2 3")
    assert str(e.value) == "Expected end of input, got Number(3)"
    with pytest.raises(ParseError) as e:
        parse("1+2)")
    assert e.value.expected == "end of input"


def test_unstripped_newline_is_an_operator_character():
    with pytest.raises(ParseError) as e:
        parse("1+2\n")
    assert e.value.token == OperatorToken('\n')


def test_division_by_zero_is_a_typed_failure():
    with pytest.raises(DivisionByZeroError):
        calculate("5/0")
    with pytest.raises(DivisionByZeroError):
        calculate("5%(2-2)")


def test_factorial_is_a_typed_failure():
    with pytest.raises(UnimplementedOperatorError):
        calculate("5!")


def test_infix_evaluates_left_before_right():
    # left side fails first, so the factorial error wins over division by zero
    with pytest.raises(UnimplementedOperatorError):
        calculate("3! + 1/0")
    with pytest.raises(DivisionByZeroError):
        calculate("1/0 + 3!")


def test_no_short_circuit():
    with pytest.raises(DivisionByZeroError):
        calculate("0 & 1/0")


def test_results_do_not_wrap():
    assert calculate("9223372036854775807+1") == 9223372036854775808


def test_long_chain_evaluates_and_renders():
    text = "+".join(["1"] * 3000)
    tree = parse(text)
    assert tree.evaluate() == 3000
    rendered = str(tree)
    assert rendered.count("+") == 2999
    assert rendered.startswith("(" * 2999 + "1 + 1) + 1)")
    assert rendered.endswith(" + 1)")


def test_deep_right_leaning_tree_evaluates():
    node = Number(0)
    for _ in range(5000):
        node = Infix(Number(1), INFIX_OPS['-'], node)
    # 1-(1-(1-...(1-0))) alternates; an even depth ends at 0
    assert node.evaluate() == 0
    assert str(node).endswith("(1 - 0)" + ")" * 4999)


def test_moderate_nesting_still_parses():
    assert calculate("(" * 50 + "7" + ")" * 50) == 7
    assert calculate("-" * 40 + "3") == 3


@pytest.mark.parametrize("text", [
    "(" * 1000 + "1" + ")" * 1000,
    "-" * 3000 + "1",
])
def test_excessive_nesting_is_a_parse_error(text):
    with pytest.raises(ParseError) as e:
        parse(text)
    assert e.value.expected == "shallower nesting"
