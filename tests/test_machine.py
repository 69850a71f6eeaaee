'''
Evaluator tests
'''

from decimal import Decimal

import regex

from ccalc.environment import Environment
from ccalc.lexer import Kind, Token, scan
from ccalc.machine import Evaluation, evaluate, parse_number
from ccalc.number import Complex
from ccalc.operators import Op
from ccalc.util import (DivisionByZero, InvalidAssignmentTarget,
                        InvalidExpression, InvalidNumber,
                        MismatchedParentheses, MissingOperand,
                        MissingOperator, NumericOverflow, SemanticError,
                        UndefinedVariable, UnexpectedEndOfExpression)

from pytest import mark, param, raises


def c(real, imag=0):
    return Complex(Decimal(real), Decimal(imag))


@mark.parametrize('line, expected', [
    param('1', c(1)),
    param('1 + 2', c(3)),
    param('(1+2)', c(3)),
    param('(((1)))', c(1)),
    param('1 * 4 + 5', c(9)),
    param('1 + 4 * 5', c(21)),
    param('10 / 5 / 2 / 2', c('0.5')),
    param('10 - 5 - 2', c(3)),
    param('10 + 2 * (5 + 3 - 1)', c(24)),
    param('3 + 4i', c(3, 4)),
    param('i * i', c(-1)),
    param('(1 + 2i) * (3 + 4i)', c(-5, 10)),
    param('(-5 + 10i) / (3 + 4i)', c(1, 2)),
    param('2.5e2 + .5', c('250.5')),
    param('1e10i', c(0, '1e10')),
])
def test_arithmetic(calc, line, expected):
    assert calc(line) == expected


@mark.parametrize('line, expected', [
    param('-1', c(-1)),
    param('-5i', c(0, -5)),
    param('-i', c(0, -1)),
    param('+3', c(3)),
    param('3 - -2', c(5)),
    param('3 + -2', c(1)),
    param('3 - +2', c(1)),
    param('- - 2', c(2)),
    param('-(1+2)', c(-3)),
    param('2 * -3 + 1', c(-5)),
    param('-2 * 3', c(-6)),
    param('-2 - 3', c(-5)),
    param('2 - -3 * 4', c(14)),
    param('2 / -4 / 2', c('-0.25')),
    param('-mod(3+4i)', c(-5)),
])
def test_unary_signs(calc, line, expected):
    assert calc(line) == expected


def test_negated_imaginary_equals_subtraction(calc):
    assert calc('-5i') == calc('0 - 5i')


@mark.parametrize('line, expected', [
    param('mod(3+4i)', c(5)),
    param('con(2-3i)', c(2, 3)),
    param('con(con(2-3i))', c(2, -3)),
    param('mod(con(3+4i))', c(5)),
    param('mod(3+4i) * 2', c(10)),
    param('2 * con(i)', c(0, -2)),
    param('con i', c(0, -1)),
    param('mod -3', c(3)),
    param('con(2-3i) + mod(0-2i)', c(4, 3)),
    param('con -(1+i)', c(-1, 1)),
])
def test_functions(calc, line, expected):
    assert calc(line) == expected


def test_modulus_is_real(calc):
    assert calc('mod(3+4i)').imag == 0


def test_assignment(environment):
    value, is_assignment = evaluate(scan('x = 2 + i'), environment)
    assert value == c(2, 1)
    assert is_assignment
    assert environment.lookup('x') == c(2, 1)


def test_chained_assignment(environment):
    result = evaluate(scan('a = b = 3 + 4i'), environment)
    assert result == Evaluation(c(3, 4), True)
    assert environment.lookup('a') == c(3, 4)
    assert environment.lookup('b') == c(3, 4)


def test_assignment_inside_expression(environment):
    value, is_assignment = evaluate(scan('(a = 2) * a'), environment)
    assert value == c(4)
    assert is_assignment
    assert environment.lookup('a') == c(2)


def test_reassignment_uses_old_value(environment):
    environment.bind('x', c(1))
    evaluate(scan('x = x + 1'), environment)
    assert environment.lookup('x') == c(2)


def test_variables(environment, calc):
    calc('a = 1')
    calc('b = 2')
    assert calc('a + b') == c(3)
    assert calc('c = a + b') == c(3)


def test_read_only_is_not_assignment(environment):
    environment.bind('a', c(1, 1))
    result = evaluate(scan('a * 2'), environment)
    assert result == Evaluation(c(2, 2), False)


def test_read_only_is_idempotent(environment):
    environment.bind('z', c('0.3', '-1.7'))
    tokens = scan('mod(z) / con(z) - z * 3')
    assert evaluate(tokens, environment) == evaluate(tokens, environment)


def test_undefined_variable(calc):
    with raises(UndefinedVariable, match='Undefined variable: x') as e:
        calc('x + 1')
    assert e.value.position == 0


def test_failed_line_does_not_poison(environment, calc):
    with raises(UndefinedVariable):
        calc('x + 1')
    assert 'x' not in environment
    assert calc('x = 2') == c(2)
    assert calc('x + 1') == c(3)


def test_failed_assignment_leaves_environment(environment, calc):
    with raises(DivisionByZero):
        calc('x = 1 / 0')
    assert 'x' not in environment


def test_failed_line_commits_no_inner_assignment(environment, calc):
    with raises(UndefinedVariable):
        calc('a = (b = 2) + c')
    assert len(environment) == 0


def test_division_by_zero(calc):
    with raises(DivisionByZero):
        calc('1 / (i - i)')


@mark.parametrize('line, position', [
    param('1e999999999999999999 * 10', 21),
    param('mod(1e999999999999999999)', 0),
    param('2 + 1e999999999999999999 / .1', 25),
])
def test_overflow(calc, line, position):
    with raises(NumericOverflow) as e:
        calc(line)
    assert e.value.position == position


def test_missing_operator(calc):
    with raises(MissingOperator) as e:
        calc('2(3)')
    assert e.value.position == 1
    with raises(MissingOperator):
        calc('2 con(3)')


@mark.parametrize('line', ['* 2', '1 + * 2', '()', '(1 + )', '= 3'])
def test_missing_operand(calc, line):
    with raises(MissingOperand):
        calc(line)


@mark.parametrize('line', ['1 +', 'x =', 'con', '-', ''])
def test_unexpected_end(calc, line):
    with raises(UnexpectedEndOfExpression):
        calc(line)


def test_invalid_expression(calc):
    with raises(InvalidExpression) as e:
        calc('3 4')
    assert e.value.position == 2


@mark.parametrize('line', ['2 = 3', '(a) = 3', 'a = 1 + b = 2',
                           'con a = 3', '-a = 1'])
def test_invalid_assignment_target(environment, calc, line):
    environment.bind('a', c(1))
    with raises(InvalidAssignmentTarget):
        calc(line)
    assert environment.lookup('a') == c(1)


def test_hand_built_tokens(environment):
    tokens = [Token(Kind.NUMBER, '12abc', 0)]
    with raises(InvalidNumber, match=regex.escape('Invalid number: 12abc')):
        evaluate(tokens, environment)
    # The lexer would have caught this one
    tokens = [Token(Kind.NUMBER, '1', 0),
              Token(Kind.OPERATOR, ')', 1, Op.RPAREN)]
    with raises(MismatchedParentheses):
        evaluate(tokens, environment)


def test_semantic_errors_share_base(calc):
    for line in ['x', '1/0', '1 +', '2 = 1']:
        with raises(SemanticError):
            calc(line)


@mark.parametrize('text, expected', [
    param('i', c(0, 1)),
    param('+i', c(0, 1)),
    param('-i', c(0, -1)),
    param('2.5i', c(0, '2.5')),
    param('-2.5i', c(0, '-2.5')),
    param('1e3', c(1000)),
    param('.5', c('0.5')),
    param('3.', c(3)),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@mark.parametrize('text', ['', 'abc', 'inf', 'nan', '1.2.3i'])
def test_parse_number_invalid(text):
    with raises(InvalidNumber):
        parse_number(text)


def test_fresh_environment_per_session():
    first, second = Environment(), Environment()
    evaluate(scan('a = 1'), first)
    with raises(UndefinedVariable):
        evaluate(scan('a'), second)
