'''
Complex number calculator.

Evaluates one line at a time: + - * /, assignment to variables, and the
conjugate and modulus functions con(z) and mod(z), over complex numbers whose
parts are arbitrary precision decimals.

    >>> a = 3 + 4i
    >>> mod(a)
    5
    >>> con(a) / a
    -0.280000000000000000000000000000 - 0.960000000000000000000000000000i

Parsing and evaluation happen in the same pass, on an operand stack and an
operator stack ordered by binding power.
'''

from .cli import CLI
from .environment import Environment
from .formatting import FormatConfig, format_complex
from .lexer import Lexer, scan
from .machine import Machine, evaluate
from .number import Complex
from .session import Session
from .util import CalcError, LexicalError, SemanticError


__all__ = ('CLI', 'Complex', 'Environment', 'FormatConfig', 'Lexer',
           'Machine', 'Session', 'CalcError', 'LexicalError', 'SemanticError',
           'evaluate', 'format_complex', 'scan')
