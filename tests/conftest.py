from pytest import Item, fixture

from ccalc.environment import Environment
from ccalc.lexer import scan
from ccalc.machine import evaluate


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every assertion, in case we later need to audit a run.

    Excessive in most cases.

    Use with pytest -rP and enable_assertion_pass_hook.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!)
    print('actual', item.name + ':' + str(lineno),
          # Get rid of full-diff, -vv for full diff, etc.
          '\n'.join(str(expl).splitlines()[:-2]))


@fixture
def environment():
    return Environment()


@fixture
def calc(environment):
    '''
    Scan and evaluate a line against the test's environment.

    Returns the value only.
    '''
    def calc(line):
        return evaluate(scan(line), environment).value
    return calc
