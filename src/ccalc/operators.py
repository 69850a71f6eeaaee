'''
Operator tags and their binding powers.

Each tag has a (left, right) binding power pair. When an operator arrives,
operators already stacked are applied while their left power beats the
newcomer's right power.
'''

from collections import namedtuple
import enum

from .util import PrintableEnum


BindingPower = namedtuple('BindingPower', ['left', 'right'])


class Op(PrintableEnum):
    ASSIGN = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    CON = enum.auto()
    MOD = enum.auto()
    # Unary minus. Never produced by the lexer; the machine stacks it when a
    # '-' shows up where an operand is expected.
    NEG = enum.auto()


BINDING_POWERS = {
    # Right associative: a = b = c is a = (b = c)
    Op.ASSIGN: BindingPower(4, 5),
    Op.ADD: BindingPower(10, 9),
    Op.SUB: BindingPower(10, 9),
    Op.MUL: BindingPower(15, 14),
    Op.DIV: BindingPower(15, 14),
    # Only ever matched by a closing parenthesis, never compared.
    Op.LPAREN: BindingPower(100, None),
    Op.RPAREN: BindingPower(None, None),
    Op.CON: BindingPower(20, 19),
    Op.MOD: BindingPower(20, 19),
    Op.NEG: BindingPower(20, 19),
}

# Single character operators, as typed.
SYMBOLS = {
    '=': Op.ASSIGN,
    '+': Op.ADD,
    '-': Op.SUB,
    '*': Op.MUL,
    '/': Op.DIV,
    '(': Op.LPAREN,
    ')': Op.RPAREN,
}

# Reserved words, used in prefix position like a function call.
FUNCTIONS = {
    'con': Op.CON,
    'mod': Op.MOD,
}

BINARY = frozenset({Op.ASSIGN, Op.ADD, Op.SUB, Op.MUL, Op.DIV})


def binding(op):
    return BINDING_POWERS[op]


def should_pop(top, incoming):
    '''
    Return True if operator top must be applied before incoming is stacked.

    Assignment compares strictly, so that a pending assignment is not applied
    by the next one in a chain. Everything else compares inclusively, making
    equal powers left associative.
    '''
    if top is Op.LPAREN:
        return False
    if incoming is Op.RPAREN:
        return True
    top_power = binding(top).left
    incoming_power = binding(incoming).right
    if incoming is Op.ASSIGN:
        return top_power > incoming_power
    return top_power >= incoming_power
