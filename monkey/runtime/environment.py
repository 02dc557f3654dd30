"""Lexical scopes for the Monkey evaluator."""


class Environment:
    """Mapping from names to values, chained to an optional enclosing environment. Lookups walk outwards; bindings
    are always written into this (the innermost) environment.
    """

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def child(self):
        """Returns a new environment enclosed by this one, as created for every function call."""
        return Environment(self)

    def get(self, name):
        """Returns the value bound to name in this environment or any enclosing one, or None if it is unbound."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment({list(self.store)}, outer={self.outer!r})"
