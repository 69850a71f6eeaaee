'''
Single pass evaluator.

Parsing and execution are fused: tokens are read left to right, operands and
operators go on two stacks, and an operator is applied as soon as binding
powers say nothing later can claim its operands.
'''

from collections import deque, namedtuple
from decimal import Decimal
import operator

from .lexer import Kind, Token
from .number import ONE, ZERO, Complex
from .operators import BINARY, Op, should_pop
from .util import (InvalidAssignmentTarget, InvalidExpression, InvalidNumber,
                   MismatchedParentheses, MissingOperand, MissingOperator,
                   SemanticError, UnexpectedEndOfExpression,
                   wrap_user_errors)


# Operand stack slot reserved for a variable about to be assigned.
PendingTarget = namedtuple('PendingTarget', ['name', 'position'])

Evaluation = namedtuple('Evaluation', ['value', 'is_assignment'])

# Coefficient of a bare imaginary unit, by its sign.
IMAGINARY_UNITS = {
    '': ONE,
    '+': ONE,
    '-': -ONE,
}

ARITHMETIC = {
    Op.ADD: operator.__add__,
    Op.SUB: operator.__sub__,
    Op.MUL: operator.__mul__,
    Op.DIV: operator.__truediv__,
    # Unary minus is 0 - x, the zero having been stacked with it.
    Op.NEG: operator.__sub__,
}

FUNCTIONS = {
    Op.CON: Complex.conjugate,
    Op.MOD: Complex.magnitude,
}


def _decimal(text):
    value = Decimal(text)
    if not value.is_finite():
        raise ValueError(text)
    return value


@wrap_user_errors(InvalidNumber, 'Invalid number: {0}')
def parse_number(text):
    '''
    Convert a number lexeme: 2, 2.5e3, 2.5i, -i, i.
    '''
    if text.endswith('i'):
        coefficient = text[:-1]
        if coefficient in IMAGINARY_UNITS:
            return Complex(ZERO, IMAGINARY_UNITS[coefficient])
        return Complex(ZERO, _decimal(coefficient))
    return Complex(_decimal(text), ZERO)


class Machine:
    '''
    Operand/operator stack machine for one line.

    Instantiate per line; the stacks do not outlive it. Assignments are
    staged and only reach the environment once the whole line succeeded.
    '''

    def __init__(self, environment):
        self.environment = environment
        self.operands = deque()
        # Operator tokens, so errors can point at them.
        self.operators = deque()
        self.staged = dict()
        self.expect_operand = True
        self.assigned = False
        # Position of the first operand that followed another operand.
        self.stray = None

    def run(self, tokens):
        '''
        Evaluate tokens, returning an Evaluation.
        '''
        for index, token in enumerate(tokens):
            if token.kind is Kind.NUMBER:
                self._operand(token, self._number(token))
            elif token.kind is Kind.IDENTIFIER:
                following = tokens[index + 1:index + 2]
                if following and following[0].op is Op.ASSIGN:
                    target = PendingTarget(token.text, token.position)
                    self._operand(token, target)
                else:
                    self._operand(token, self._lookup(token))
            else:
                self.feed(token)
        return self.finish(tokens)

    def feed(self, token):
        '''
        Stack or apply an operator token.
        '''
        op = token.op
        if op in (Op.CON, Op.MOD, Op.LPAREN):
            if not self.expect_operand:
                raise MissingOperator(
                    "Missing operator before '{}'".format(token.text),
                    token.position)
            self.operators.append(token)
            self.expect_operand = True
        elif op is Op.RPAREN:
            self._close(token)
        elif op in BINARY:
            if self.expect_operand:
                self._prefix(token)
                return
            while self.operators and should_pop(self.operators[-1].op, op):
                self._apply()
            self.operators.append(token)
            self.expect_operand = True
        else:
            raise InvalidExpression(
                "Unexpected operator '{}'".format(token.text), token.position)

    def finish(self, tokens):
        '''
        Apply everything left over and return the single remaining value.
        '''
        if self.expect_operand:
            if not tokens:
                raise UnexpectedEndOfExpression('Empty expression')
            last = tokens[-1]
            raise UnexpectedEndOfExpression(
                "Expression ends with '{}'".format(last.text), last.position)
        while self.operators:
            self._apply()
        if len(self.operands) != 1 or isinstance(self.operands[-1],
                                                 PendingTarget):
            raise InvalidExpression('Invalid expression', self.stray)
        self.environment.update(self.staged)
        return Evaluation(self.operands.pop(), self.assigned)

    def _operand(self, token, value):
        if not self.expect_operand and self.stray is None:
            self.stray = token.position
        self._pshstack(value)
        self.expect_operand = False

    def _number(self, token):
        try:
            return parse_number(token.text)
        except InvalidNumber as e:
            e.position = token.position
            raise

    def _lookup(self, token):
        if token.text in self.staged:
            return self.staged[token.text]
        return self.environment.lookup(token.text, token.position)

    def _prefix(self, token):
        '''
        Handle + or - where an operand is expected.
        '''
        if token.op is Op.ADD:
            return
        if token.op is Op.SUB:
            self._pshstack(Complex())
            self.operators.append(
                Token(Kind.OPERATOR, token.text, token.position, Op.NEG))
            return
        raise MissingOperand(
            "Missing operand before '{}'".format(token.text), token.position)

    def _close(self, token):
        if self.expect_operand:
            raise MissingOperand("Missing operand before ')'", token.position)
        while self.operators and self.operators[-1].op is not Op.LPAREN:
            self._apply()
        if not self.operators:
            raise MismatchedParentheses('Mismatched parentheses',
                                        token.position)
        self.operators.pop()
        if self.operators and self.operators[-1].op in FUNCTIONS:
            self._apply()
        self.expect_operand = False

    def _apply(self):
        '''
        Pop the top operator, apply it to its operands, push the result.
        '''
        token = self.operators.pop()
        op = token.op
        if op is Op.ASSIGN:
            self._assign(token)
        elif op in FUNCTIONS:
            operand, = self._popvalues(1, token)
            self._compute(token, FUNCTIONS[op], operand)
        elif op in ARITHMETIC:
            right, left = self._popvalues(2, token)
            self._compute(token, ARITHMETIC[op], left, right)
        else:
            raise MismatchedParentheses('Mismatched parentheses',
                                        token.position)

    def _compute(self, token, f, *operands):
        try:
            self._pshstack(f(*operands))
        except SemanticError as e:
            # Numeric failures are reported at the operator
            if e.position is None:
                e.position = token.position
            raise

    def _assign(self, token):
        value, target = self._popstack(2, token)
        if isinstance(value, PendingTarget):
            raise InvalidAssignmentTarget(
                "'{}' is assigned to but never given a value"
                .format(value.name), value.position)
        if not isinstance(target, PendingTarget):
            raise InvalidAssignmentTarget(
                'Left operand of assignment must be a variable',
                token.position)
        self.staged[target.name] = value
        self.assigned = True
        self._pshstack(value)

    def _pshstack(self, *new):
        '''
        Push all elements onto operand stack, leftmost at the bottom.
        '''
        self.operands.extend(new)

    def _popstack(self, n, token):
        '''
        Pop n operands, topmost first.
        '''
        if len(self.operands) < n:
            raise InvalidExpression(
                "Not enough operands for '{}'".format(token.text),
                token.position)
        return [self.operands.pop() for _ in range(n)]

    def _popvalues(self, n, token):
        '''
        Pop n operands, none of which may be a pending assignment target.
        '''
        values = self._popstack(n, token)
        for value in values:
            if isinstance(value, PendingTarget):
                raise InvalidAssignmentTarget(
                    "Cannot assign to '{}' inside an expression"
                    .format(value.name), value.position)
        return values


def evaluate(tokens, environment):
    '''
    Evaluate one line of tokens against environment.

    Returns Evaluation(value, is_assignment). The environment only changes if
    the whole line succeeds.
    '''
    return Machine(environment).run(tokens)
