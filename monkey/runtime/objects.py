"""Runtime values of the Monkey language.

Every value reports its kind (used in error messages and for dispatch) and can render itself for the host with
inspect(). Two kinds never escape to a program: ReturnValue, the marker that carries a `return` up to the nearest
enclosing call, and Error, which short-circuits evaluation up to the top level.
"""

from abc import abstractmethod, ABC
from dataclasses import dataclass


INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
ERROR_OBJ = "ERROR"
RETURN_VALUE_OBJ = "RETURN_VALUE"
OPTIONAL_OBJ = "OPTIONAL"


class Object(ABC):
    """Superclass of every runtime value."""

    @property
    @abstractmethod
    def kind(self):
        """Name of this value's kind, e.g. "INTEGER"."""

    @abstractmethod
    def inspect(self):
        """Human-readable rendering, as printed by the shell."""

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()})"


@dataclass(frozen=True)
class HashKey:
    """Key under which a Hashable value is stored in a Hash."""
    kind: str
    value: object


@dataclass
class HashPair:
    """Entry of a Hash: keeps the original key value next to the stored value."""
    key: Object
    value: Object


class Hashable(ABC):
    """Capability of values that can be used as hash keys."""

    @abstractmethod
    def hash_key(self):
        """Returns the HashKey of this value. Equal values have equal keys."""


class Integer(Object, Hashable):

    def __init__(self, value):
        self.value = value

    @property
    def kind(self):
        return INTEGER_OBJ

    def inspect(self):
        return str(self.value)

    def hash_key(self):
        return HashKey(self.kind, self.value)


class Boolean(Object, Hashable):
    """Only ever instantiated twice: use TRUE, FALSE and Boolean.of."""

    def __init__(self, value):
        self.value = value

    @property
    def kind(self):
        return BOOLEAN_OBJ

    def inspect(self):
        return "true" if self.value else "false"

    def hash_key(self):
        return HashKey(self.kind, int(self.value))

    @staticmethod
    def of(value):
        return TRUE if value else FALSE


TRUE = Boolean(True)
FALSE = Boolean(False)


class String(Object, Hashable):

    def __init__(self, value):
        self.value = value

    @property
    def kind(self):
        return STRING_OBJ

    def inspect(self):
        return f'"{self.value}"'

    def hash_key(self):
        return HashKey(self.kind, self.value)


class Array(Object):
    """Mutable: builtins like push change elements in place, and every reference to the array sees it."""

    def __init__(self, elements=None):
        self.elements = elements if elements is not None else []

    @property
    def kind(self):
        return ARRAY_OBJ

    def inspect(self):
        return "[" + ", ".join(element.inspect() for element in self.elements) + "]"


class Hash(Object):

    def __init__(self, pairs=None):
        self.pairs = pairs if pairs is not None else {}  # dict of HashKey: HashPair

    @property
    def kind(self):
        return HASH_OBJ

    def get(self, key):
        """Returns the value stored under the Hashable key, or None."""
        pair = self.pairs.get(key.hash_key())
        return pair.value if pair is not None else None

    def inspect(self):
        return "{" + ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values()) + "}"


class Function(Object):
    """User-defined function. env is the environment the literal was evaluated in (its closure)."""

    def __init__(self, parameters, body, env):
        self.parameters = parameters
        self.body = body
        self.env = env

    @property
    def kind(self):
        return FUNCTION_OBJ

    def inspect(self):
        parameters = ", ".join(str(parameter) for parameter in self.parameters)
        body = "".join(str(statement) for statement in self.body.statements)
        return f"fn({parameters}) {{\n{body}\n}}"


class Builtin(Object):
    """Native function. fn takes the evaluated arguments and returns an Object, or raises BuiltinError."""

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    @property
    def kind(self):
        return BUILTIN_OBJ

    def inspect(self):
        return "builtin function"

    def __repr__(self):
        return f"Builtin({self.name})"


class Error(Object):
    """Runtime error, positioned at the node that caused it."""

    def __init__(self, message, line, column):
        self.message = message
        self.line = line
        self.column = column

    @property
    def kind(self):
        return ERROR_OBJ

    def inspect(self):
        return f"Error at position {self.line}:{self.column} - {self.message}"


class ReturnValue(Object):
    """Carries the value of a `return` statement up to the nearest enclosing function call."""

    def __init__(self, value):
        assert not isinstance(value, ReturnValue), "return values never nest"
        self.value = value

    @property
    def kind(self):
        return RETURN_VALUE_OBJ

    def inspect(self):
        return self.value.inspect()


class Optional(Object):
    """A value that may be absent. Produced by if-expressions and indexing; never wraps another Optional."""

    def __init__(self, value=None):
        assert not isinstance(value, Optional), "optionals never nest"
        self.value = value

    @property
    def kind(self):
        return OPTIONAL_OBJ

    @property
    def has_value(self):
        return self.value is not None

    @staticmethod
    def wrap(value):
        """Returns value as a present Optional. Optionals are returned unchanged (flattening) and None gives NONE."""
        if value is None:
            return NONE
        if isinstance(value, Optional):
            return value
        return Optional(value)

    def inspect(self):
        if self.has_value:
            return f"maybe({self.value.inspect()})"
        return "maybe([no value])"


NONE = Optional()
