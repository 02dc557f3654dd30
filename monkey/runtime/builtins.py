"""Native functions available to every Monkey program. The evaluator only consults this table after a name missed
the whole environment chain, so programs may shadow builtins with `let`.

A native function receives the evaluated arguments and either returns a value or raises BuiltinError; the evaluator
turns the latter into an Error positioned at the call.
"""

from types import MappingProxyType

from monkey.runtime.objects import Array, Builtin, Hash, Integer, Optional, String, ARRAY_OBJ


class BuiltinError(Exception):
    """Raised by a native function on bad arguments. Never escapes the evaluator."""


def _check_arity(args, want):
    if len(args) != want:
        raise BuiltinError(f"wrong number of arguments. got={len(args)}, want={want}")


def _check_array(name, arg):
    if not isinstance(arg, Array):
        raise BuiltinError(f"first argument to `{name}` must be {ARRAY_OBJ}, got {arg.kind}")


def monkey_len(*args):
    """Length of a string, array or hash."""
    _check_arity(args, 1)
    arg, = args

    if isinstance(arg, String):
        return Integer(len(arg.value))
    elif isinstance(arg, Array):
        return Integer(len(arg.elements))
    elif isinstance(arg, Hash):
        return Integer(len(arg.pairs))
    raise BuiltinError(f"argument to `len` not supported, got {arg.kind}")


def monkey_push(*args):
    """Appends to an array in place and returns that same array."""
    _check_arity(args, 2)
    array, value = args
    _check_array("push", array)

    array.elements.append(value)
    return array


def monkey_first(*args):
    _check_arity(args, 1)
    array, = args
    _check_array("first", array)

    return Optional.wrap(array.elements[0] if array.elements else None)


def monkey_last(*args):
    _check_arity(args, 1)
    array, = args
    _check_array("last", array)

    return Optional.wrap(array.elements[-1] if array.elements else None)


BUILTINS = MappingProxyType({
    "len": Builtin("len", monkey_len),
    "push": Builtin("push", monkey_push),
    "first": Builtin("first", monkey_first),
    "last": Builtin("last", monkey_last),
})
