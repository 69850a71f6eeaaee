from os import path
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import sys
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .formatting import FormatConfig
from .lexer import Lexer, untokenize
from .session import Session
from .util import CalcError


class InteractiveInput:
    def __init__(self, prompt, history=None, completer=None):
        self.prompt = prompt
        self.history = history
        self.completer = completer

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=self.history,
                                    completer=self.completer,
                                    complete_while_typing=False,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the complex calculator.
    '''

    DEFAULT_PROMPT = '>>> '
    HISTORY_FILE = '~/.ccalc_history'
    DEFAULT_PRECISION = FormatConfig.precision

    def dumper(self):
        '''
        Dump the tokens of every line instead of evaluating.
        '''
        lexer = Lexer()
        print('<kind>\t<repr(text)>\t<position>')
        for line in self.args.expressions:
            try:
                tokens = lexer.scan(line)
            except CalcError as e:
                self.report(e, line)
                continue
            for token in tokens:
                print(token.op or token.kind,
                      repr(token.text),
                      token.position,
                      sep='\t')
            print('#', untokenize(tokens))

    def executor(self):
        '''
        Run a session over all lines until they run out or one says quit.
        '''
        session = self.session
        for line in self.args.expressions:
            outcome = session.execute(line)
            if outcome.quit:
                break
            if outcome.error is not None:
                self.report(outcome.error, line)
            elif outcome.output is not None:
                print(outcome.output)

    def report(self, error, line):
        '''
        Print error to stderr, pointing at the offending column.
        '''
        print('Error:', error.message, file=sys.stderr)
        pointer = error.pointer(line)
        if pointer:
            print(pointer, file=sys.stderr)
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            completer = WordCompleter(self.session.words)
            return InteractiveInput(
                prompt=self.args.prompt or self.DEFAULT_PROMPT,
                history=FileHistory(path.expanduser(self.HISTORY_FILE)),
                completer=completer)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Complex number calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=self.DEFAULT_PRECISION,
                                          help='digits after the decimal '
                                               'point')
        self.argument_parser.add_argument('-s', '--scientific',
                                          action='store_true',
                                          help='scientific notation output')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('-D', '--dump',
                                          action='store_const',
                                          const=self.dumper,
                                          dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        config = FormatConfig(use_scientific=self.args.scientific,
                              precision=max(0, self.args.precision))
        self.session = Session(config=config)
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
