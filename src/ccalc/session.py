'''
One calculator session: variables, output settings and commands.
'''

from collections import namedtuple

from .environment import Environment
from .formatting import FormatConfig, format_complex
from .lexer import Lexer
from .machine import evaluate
from .operators import FUNCTIONS, SYMBOLS
from .util import CalcError, CommandError, wrap_user_errors


# Result of one line. At most one of output and error is set.
Outcome = namedtuple('Outcome', ['output', 'error', 'quit'],
                     defaults=(None, None, False))

HELP = '''\
Commands:
  help              show this help
  format sci        scientific notation output, e.g. 1.5e+3, 2.0e-4
  format fixed      plain decimal output (integers without a decimal point)
  precision N       digits after the decimal point
  quit / exit       leave
Expressions:
  + - * /, assignment with =, con(z) conjugate, mod(z) modulus
  literals such as 3.14, .5, 1e10, 2.5i, -i, i'''


class Session:
    '''
    Drive the calculator one line at a time.

    Owns the environment and format configuration for its whole lifetime.
    '''

    QUIT = frozenset({'quit', 'exit'})

    def __init__(self, config=None, environment=None):
        self.config = config if config is not None else FormatConfig()
        self.environment = (environment if environment is not None
                            else Environment())
        self.lexer = Lexer()
        self.commands = {
            'help': self.show_help,
            'format': self.set_format,
            'precision': self.set_precision,
        }

    def words(self):
        '''
        Return every word worth completing at a prompt.
        '''
        return sorted(set(self.commands) | self.QUIT | set(FUNCTIONS)
                      | set(self.environment.names()))

    def execute(self, line):
        '''
        Run a command or evaluate an expression line.

        Calculator errors are returned in the Outcome, never raised.
        '''
        stripped = line.strip()
        if not stripped:
            return Outcome()
        if stripped in self.QUIT:
            return Outcome(quit=True)
        command, *args = stripped.split()
        try:
            if self.iscommand(command, args):
                return Outcome(output=self.commands[command](*args))
            return Outcome(output=self.calculate(line))
        except CalcError as e:
            return Outcome(error=e)

    def iscommand(self, command, args):
        '''
        Return True if the words of a line form a session command.

        A lone operator or an assignment after the first word makes it an
        expression, so variables may still be called precision or format.
        '''
        if command not in self.commands:
            return False
        if command == 'help':
            return not args
        return (len(args) == 1 and args[0] not in SYMBOLS
                and not args[0].startswith('='))

    def calculate(self, line):
        '''
        Evaluate an expression line. Returns None for assignments.
        '''
        tokens = self.lexer.scan(line)
        value, is_assignment = evaluate(tokens, self.environment)
        if is_assignment:
            return None
        return format_complex(value, self.config)

    def show_help(self):
        return HELP

    def set_format(self, *args):
        '''
        Switch between scientific and fixed output.
        '''
        if args == ('sci',):
            self.config.use_scientific = True
            return 'Scientific notation output'
        if args == ('fixed',):
            self.config.use_scientific = False
            return 'Fixed decimal output'
        raise CommandError('Usage: format sci|fixed')

    @wrap_user_errors(CommandError, 'Bad precision {1}')
    def set_precision(self, digits):
        '''
        Set output digits after the decimal point.
        '''
        self.config.precision = max(0, int(digits))
        return 'Precision set to {} digits'.format(self.config.precision)
