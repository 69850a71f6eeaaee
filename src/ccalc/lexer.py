from dataclasses import dataclass
from functools import reduce
import enum
import operator

import regex

from .operators import FUNCTIONS, SYMBOLS, Op
from .util import (InvalidIdentifier, InvalidToken, MismatchedParentheses,
                   PrintableEnum, UnmatchedParenthesis)


class Kind(PrintableEnum):
    NUMBER = enum.auto()
    IDENTIFIER = enum.auto()
    OPERATOR = enum.auto()


@dataclass(frozen=True)
class Token:
    '''
    One lexeme. Numbers keep their raw text; converting it is the machine's
    job.
    '''
    kind: Kind
    text: str
    position: int
    op: Op = None

    def __str__(self):
        return '<{}>{}'.format(self.op or self.kind, self.text)


class Lexer:
    '''
    Lexer for one calculator line.

    Operator characters are always complete lexemes on their own. Anything
    between them (or whitespace) accumulates and is classified once complete.
    Holds no state between lines.
    '''
    # Mantissa of a number
    MANTISSA = r'''
                (?:
                    # 1, 12, 1. (notice trailing dot), 1.5
                    \d+
                    (?:
                        \.
                        \d*
                    )?
                    |
                    # .5
                    \.
                    \d+
                )
                '''
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    \d+
                )
                '''
    # Real or imaginary literal. The sign is part of the grammar although
    # operator characters never reach it; it keeps the grammar usable on its
    # own.
    NUMBER = r'''
              (?:
                  [+-]?
                  {MANTISSA}
                  {EXPONENT}?
                  i?
              )|(?:
                  # The imaginary unit on its own
                  i
              )
              '''.format(MANTISSA=MANTISSA, EXPONENT=EXPONENT)
    IDENTIFIER_START = r'[A-Za-z_]'
    IDENTIFIER = IDENTIFIER_START + r'[A-Za-z0-9_]*'
    SPACE = r'\s'

    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self):
        flags = type(self).FLAGS
        self._number = regex.compile(type(self).NUMBER, flags)
        self._identifier = regex.compile(type(self).IDENTIFIER, flags)
        self._identifier_start = regex.compile(type(self).IDENTIFIER_START,
                                               flags)
        self._space = regex.compile(type(self).SPACE, flags)

    def isnumber(self, text):
        return self._number.fullmatch(text) is not None

    def classify(self, text, position):
        '''
        Turn accumulated text into a token.
        '''
        if self.isnumber(text):
            return Token(Kind.NUMBER, text, position)
        if not self._identifier_start.match(text):
            raise InvalidToken('Invalid token: {}'.format(text), position)
        if not self._identifier.fullmatch(text):
            raise InvalidIdentifier('Invalid identifier: {}'.format(text),
                                    position)
        if text in FUNCTIONS:
            return Token(Kind.OPERATOR, text, position, FUNCTIONS[text])
        return Token(Kind.IDENTIFIER, text, position)

    def scan(self, line):
        '''
        Take a line and return its tokens.

        Stops on the first bad lexeme or unbalanced parenthesis.
        '''
        tokens = []
        # Positions of the currently open parentheses
        parens = []
        current = []
        start = 0

        def flush():
            if current:
                tokens.append(self.classify(''.join(current), start))
                current.clear()

        for position, char in enumerate(line):
            if self._space.match(char):
                flush()
                continue
            if char in SYMBOLS:
                flush()
                op = SYMBOLS[char]
                if op is Op.LPAREN:
                    parens.append(position)
                elif op is Op.RPAREN:
                    if not parens:
                        raise UnmatchedParenthesis(
                            "Unmatched ')' at position {}".format(position),
                            position)
                    parens.pop()
                tokens.append(Token(Kind.OPERATOR, char, position, op))
                continue
            if not current:
                start = position
            current.append(char)

        flush()

        if parens:
            raise MismatchedParentheses('Mismatched parentheses', parens[-1])

        return tokens


def scan(line):
    '''
    Tokenize line with a fresh Lexer.
    '''
    return Lexer().scan(line)


def untokenize(tokens):
    '''
    Rebuild readable source from tokens, e.g. for the token dump.
    '''
    return ' '.join(token.text for token in tokens)
