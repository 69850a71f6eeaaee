'''
Complex numbers over arbitrary precision decimals.

Both parts are decimal.Decimal, so literals such as 0.1 are exact and a
chain of operations on one line does not drift at display precision.
'''

from dataclasses import dataclass
from decimal import (Context, Decimal, DecimalException, MAX_EMAX, MIN_EMIN,
                     ROUND_HALF_EVEN)

from .util import DivisionByZero, NumericOverflow, wrap_user_errors


# Working precision, in significant digits.
PRECISION = 100

# Private context: never touch the thread's current decimal context.
CONTEXT = Context(prec=PRECISION,
                  rounding=ROUND_HALF_EVEN,
                  Emax=MAX_EMAX,
                  Emin=MIN_EMIN)

ZERO = Decimal(0)
ONE = Decimal(1)

# Exponent beyond CONTEXT.Emax, or any other trapped decimal condition
OUT_OF_RANGE = 'Result out of range'


@dataclass(frozen=True)
class Complex:
    '''
    Immutable complex value. Every operation returns a new instance.
    '''
    real: Decimal = ZERO
    imag: Decimal = ZERO

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def __add__(self, other):
        return Complex(CONTEXT.add(self.real, other.real),
                       CONTEXT.add(self.imag, other.imag))

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def __sub__(self, other):
        return Complex(CONTEXT.subtract(self.real, other.real),
                       CONTEXT.subtract(self.imag, other.imag))

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def __mul__(self, other):
        a, b, c, d = self.real, self.imag, other.real, other.imag
        mul = CONTEXT.multiply
        return Complex(CONTEXT.subtract(mul(a, c), mul(b, d)),
                       CONTEXT.add(mul(a, d), mul(b, c)))

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def __truediv__(self, other):
        '''
        Divide, raising DivisionByZero if other is exactly 0 + 0i.
        '''
        a, b, c, d = self.real, self.imag, other.real, other.imag
        mul = CONTEXT.multiply
        denominator = CONTEXT.add(mul(c, c), mul(d, d))
        if denominator.is_zero():
            raise DivisionByZero('Division by zero')
        return Complex(
            CONTEXT.divide(CONTEXT.add(mul(a, c), mul(b, d)), denominator),
            CONTEXT.divide(CONTEXT.subtract(mul(b, c), mul(a, d)),
                           denominator),
        )

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def conjugate(self):
        return Complex(self.real, CONTEXT.minus(self.imag))

    @wrap_user_errors(NumericOverflow, OUT_OF_RANGE, DecimalException)
    def magnitude(self):
        '''
        Modulus, as a real valued Complex.
        '''
        mul = CONTEXT.multiply
        squared = CONTEXT.add(mul(self.real, self.real),
                              mul(self.imag, self.imag))
        return Complex(CONTEXT.sqrt(squared), ZERO)
