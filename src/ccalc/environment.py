from .util import UndefinedVariable


class Environment:
    '''
    Variables of one calculator session.

    Created empty when the session starts and never cleared implicitly.
    Reading an unbound name is an error; there is no default value.
    '''
    def __init__(self, bindings=None):
        self._bindings = dict(bindings or {})

    def lookup(self, name, position=None):
        try:
            return self._bindings[name]
        except KeyError:
            raise UndefinedVariable('Undefined variable: {}'.format(name),
                                    position) from None

    def bind(self, name, value):
        self._bindings[name] = value

    def update(self, bindings):
        self._bindings.update(bindings)

    def names(self):
        return sorted(self._bindings)

    def __contains__(self, name):
        return name in self._bindings

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._bindings)
