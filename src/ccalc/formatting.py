from dataclasses import dataclass

from .number import ONE, PRECISION


@dataclass
class FormatConfig:
    '''
    Output settings of a session. Only session commands change them.
    '''
    use_scientific: bool = False
    # Digits after the decimal point
    precision: int = 30


def _scientific_zero(precision):
    # Decimal moves the requested digits into the exponent of a zero
    # (0.000e+3), so spell it out.
    if precision:
        return '0.' + '0' * precision + 'e+0'
    return '0e+0'


def format_decimal(value, config):
    '''
    Render one part of a complex value.

    Fixed notation prints integral values without a decimal point, as long
    as they fit the working precision. Larger ones fall back to scientific
    notation.
    '''
    if config.use_scientific:
        if value.is_zero():
            return _scientific_zero(config.precision)
        return '{:.{}e}'.format(value, config.precision)
    if value.is_zero():
        # No -0
        return '0'
    if value.adjusted() >= PRECISION:
        return '{:.{}e}'.format(value, config.precision)
    if value == value.to_integral_value():
        return '{:f}'.format(value.to_integral_value())
    return '{:.{}f}'.format(value, config.precision)


def _imaginary(coefficient, config):
    if coefficient == ONE:
        return 'i'
    if coefficient == -ONE:
        return '-i'
    return format_decimal(coefficient, config) + 'i'


def format_complex(value, config):
    '''
    Render a complex value, e.g. 4, 2.5i, -i, 3 + 4i, 1 - i.
    '''
    real, imag = value.real, value.imag
    if imag.is_zero():
        return format_decimal(real, config)
    if real.is_zero():
        return _imaginary(imag, config)
    sign = ' + ' if imag > 0 else ' - '
    return (format_decimal(real, config) + sign
            + _imaginary(imag.copy_abs(), config))
