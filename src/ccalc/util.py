from functools import wraps
import enum


class PrintableEnum(enum.Enum):
    def __str__(self):
        return self.name

    __repr__ = __str__


class CalcError(Exception):
    '''
    Base of every error a user can provoke with a bad line.

    Never fatal; the session reports it and carries on.
    '''
    def __init__(self, message, position=None):
        super().__init__(message)
        self.message = message
        self.position = position

    def pointer(self, line, width=10):
        '''
        Return excerpt of line with a caret under the offending position.

        Empty string if the error has no position.
        '''
        if self.position is None:
            return ''
        line = line.rstrip('\n')
        start = max(0, self.position - width)
        end = min(len(line), self.position + width)
        prefix = '...' if start > 0 else ''
        suffix = '...' if end < len(line) else ''
        excerpt = prefix + line[start:end] + suffix
        caret = ' ' * (self.position - start + len(prefix)) + '^'
        return excerpt + '\n' + caret


class LexicalError(CalcError):
    pass


class InvalidToken(LexicalError):
    pass


class InvalidIdentifier(LexicalError):
    pass


class UnmatchedParenthesis(LexicalError):
    pass


class MismatchedParentheses(LexicalError):
    pass


class SemanticError(CalcError):
    pass


class UndefinedVariable(SemanticError):
    pass


class MissingOperator(SemanticError):
    pass


class MissingOperand(SemanticError):
    pass


class InvalidAssignmentTarget(SemanticError):
    pass


class UnexpectedEndOfExpression(SemanticError):
    pass


class InvalidExpression(SemanticError):
    pass


class DivisionByZero(SemanticError):
    pass


class NumericOverflow(SemanticError):
    pass


class InvalidNumber(SemanticError):
    pass


class CommandError(CalcError):
    pass


def wrap_user_errors(error, fmt, catch=Exception):
    '''
    Decorator that converts stray exceptions into calculator errors.

    Passes through CalcErrors. Only exceptions of type catch are converted.
    The message is fmt formatted with the call's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except catch as e:
                raise error(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
