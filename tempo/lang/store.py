"""Variable storage for a tempo session. Names are case-sensitive and map to Python ints. There is no removal: a
name, once bound, stays bound for the lifetime of the session.
"""


class VariableStore:
    """The only persistent state of a session. Passed explicitly to everything that reads or writes variables."""

    def __init__(self, variables=None):
        self._variables = dict(variables) if variables else {}

    def get(self, name):
        """Returns the value bound to name, or None if name is unbound."""
        return self._variables.get(name)

    def set(self, name, value):
        """Binds name to value, overwriting any previous binding."""
        if not name:
            raise ValueError("variable name cannot be empty")
        self._variables[name] = int(value)

    def items(self):
        return self._variables.items()

    def __contains__(self, name):
        return name in self._variables

    def __len__(self):
        return len(self._variables)

    def __repr__(self):
        return f"VariableStore({self._variables})"
