"""Tree-walking evaluator for the Monkey language.

Language-level problems never raise: they are returned as Error values positioned at the offending node. Errors and
ReturnValues travel up through ordinary return values, so every place that combines sub-results (programs, blocks,
operands, arguments, indices, hash pairs) checks for them and stops early. Only bugs in the evaluator itself raise.
"""

import operator

from monkey.runtime.builtins import BUILTINS, BuiltinError
from monkey.runtime.objects import (Array, Boolean, Builtin, Error, Function, Hash, HashPair, Hashable, Integer,
                                    Optional, ReturnValue, String, BOOLEAN_OBJ, NONE)
from monkey.syntax import nodes


INTEGER_ARITHMETIC = {"+": operator.add, "-": operator.sub, "*": operator.mul}
INTEGER_COMPARISON = {"<": operator.lt, ">": operator.gt, "==": operator.eq, "!=": operator.ne}


def int64(value):
    """Wraps value around the way a two's complement 64-bit integer does."""
    return (value + 2 ** 63) % 2 ** 64 - 2 ** 63


def is_abrupt(obj):
    """Whether or not obj must stop the evaluation of whatever contains it."""
    return isinstance(obj, (Error, ReturnValue))


def new_error(node, msg):
    return Error(msg, node.line, node.column)


def values_equal(left, right):
    """Equality used by == and != for operands of any kind. Booleans, integers and strings compare by value, arrays,
    hashes and optionals structurally, and everything else (functions, builtins) by identity.
    """
    if left.kind != right.kind:
        return False

    if isinstance(left, Hashable):
        return left.hash_key() == right.hash_key()

    elif isinstance(left, Array):
        return len(left.elements) == len(right.elements) and all(
            values_equal(a, b) for a, b in zip(left.elements, right.elements))

    elif isinstance(left, Hash):
        return left.pairs.keys() == right.pairs.keys() and all(
            values_equal(pair.value, right.pairs[key].value) for key, pair in left.pairs.items())

    elif isinstance(left, Optional):
        if left.has_value and right.has_value:
            return values_equal(left.value, right.value)
        return left.has_value == right.has_value

    return left is right


class Evaluator:
    """Evaluates syntax trees. builtins is a read-only mapping of name: Builtin, consulted after the environment."""

    def __init__(self, builtins=BUILTINS):
        self.builtins = builtins

        self.eval_fns = {
            nodes.Program: self.eval_program,
            nodes.BlockStatement: self.eval_block_statement,
            nodes.ExpressionStatement: self.eval_expression_statement,
            nodes.LetStatement: self.eval_let_statement,
            nodes.ReturnStatement: self.eval_return_statement,
            nodes.Identifier: self.eval_identifier,
            nodes.IntegerLiteral: lambda node, env: Integer(node.value),
            nodes.StringLiteral: lambda node, env: String(node.value),
            nodes.Boolean: lambda node, env: Boolean.of(node.value),
            nodes.PrefixExpression: self.eval_prefix_expression,
            nodes.InfixExpression: self.eval_infix_expression,
            nodes.IfExpression: self.eval_if_expression,
            nodes.FunctionLiteral: lambda node, env: Function(node.parameters, node.body, env),
            nodes.CallExpression: self.eval_call_expression,
            nodes.ArrayLiteral: self.eval_array_literal,
            nodes.IndexExpression: self.eval_index_expression,
            nodes.HashLiteral: self.eval_hash_literal,
            nodes.PropertyExpression: self.eval_property_expression,
        }

    def eval(self, node, env):
        """Returns the value of node in env. Statements without a value (let) give None."""
        try:
            eval_fn = self.eval_fns[type(node)]
        except KeyError:
            raise TypeError(f"cannot evaluate {type(node).__name__}") from None
        return eval_fn(node, env)

    # ---------------------------------------------------------------------------------------------------------------
    # statements

    def eval_program(self, program, env):
        result = None
        for statement in program.statements:
            result = self.eval(statement, env)

            if isinstance(result, ReturnValue):
                return result.value
            elif isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, block, env):
        """Unlike eval_program, leaves ReturnValues wrapped so that they reach the enclosing call."""
        result = None
        for statement in block.statements:
            result = self.eval(statement, env)
            if is_abrupt(result):
                return result
        return result

    def eval_expression_statement(self, statement, env):
        return self.eval(statement.expression, env)

    def eval_let_statement(self, statement, env):
        value = self.eval(statement.value, env)
        if is_abrupt(value):
            return value

        env.set(statement.name.value, value)
        return None

    def eval_return_statement(self, statement, env):
        if statement.value is None:
            return ReturnValue(NONE)

        value = self.eval(statement.value, env)
        if is_abrupt(value):
            return value
        return ReturnValue(value)

    # ---------------------------------------------------------------------------------------------------------------
    # expressions

    def eval_identifier(self, identifier, env):
        value = env.get(identifier.value)
        if value is None:
            value = self.builtins.get(identifier.value)
        if value is None:
            return new_error(identifier, f"identifier not found: {identifier.value}")
        return value

    def eval_prefix_expression(self, node, env):
        right = self.eval(node.right, env)
        if is_abrupt(right):
            return right

        if node.operator == "!" and isinstance(right, Boolean):
            return Boolean.of(not right.value)
        elif node.operator == "-" and isinstance(right, Integer):
            return Integer(int64(-right.value))
        return new_error(node, f"unknown operator: {node.operator}{right.kind}")

    def eval_infix_expression(self, node, env):
        left = self.eval(node.left, env)
        if is_abrupt(left):
            return left

        right = self.eval(node.right, env)
        if is_abrupt(right):
            return right

        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(node, left, right)
        elif isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix_expression(node, left, right)
        elif isinstance(left, String) and isinstance(right, Integer):
            return self.eval_string_integer_infix_expression(node, left, right)
        elif left.kind != right.kind:
            msg = f"type mismatch: {left.kind} {node.operator} {right.kind}, expecting: {left.kind}"
            return new_error(node.right, msg)
        elif node.operator == "==":
            return Boolean.of(values_equal(left, right))
        elif node.operator == "!=":
            return Boolean.of(not values_equal(left, right))
        return self.unknown_operator(node, left, right)

    def eval_integer_infix_expression(self, node, left, right):
        op = node.operator

        if op in INTEGER_ARITHMETIC:
            return Integer(int64(INTEGER_ARITHMETIC[op](left.value, right.value)))

        elif op == "/":
            if right.value == 0:
                return new_error(node, "division by zero")
            quotient = abs(left.value) // abs(right.value)  # truncates towards zero, unlike //
            if (left.value < 0) != (right.value < 0):
                quotient = -quotient
            return Integer(int64(quotient))

        elif op in INTEGER_COMPARISON:
            return Boolean.of(INTEGER_COMPARISON[op](left.value, right.value))

        return self.unknown_operator(node, left, right)

    def eval_string_infix_expression(self, node, left, right):
        if node.operator == "+":
            return String(left.value + right.value)
        elif node.operator == "==":
            return Boolean.of(left.value == right.value)
        elif node.operator == "!=":
            return Boolean.of(left.value != right.value)
        return self.unknown_operator(node, left, right)

    def eval_string_integer_infix_expression(self, node, left, right):
        if node.operator != "*":
            return self.unknown_operator(node, left, right)
        if right.value < 0:
            return new_error(node.right, f"cannot repeat a string {right.value} times")
        return String(left.value * right.value)

    @staticmethod
    def unknown_operator(node, left, right):
        return new_error(node, f"unknown operator: {left.kind} {node.operator} {right.kind}")

    def eval_if_expression(self, node, env):
        """If-expressions produce an Optional: present with the value of the branch taken, absent if no branch was
        taken (or the branch had no value).
        """
        condition = self.eval(node.condition, env)
        if is_abrupt(condition):
            return condition

        if not isinstance(condition, Boolean):
            return new_error(node.condition, f"condition must be {BOOLEAN_OBJ}, got {condition.kind}")

        if condition.value:
            branch = node.consequence
        elif node.alternative is not None:
            branch = node.alternative
        else:
            return NONE

        value = self.eval(branch, env)
        if is_abrupt(value):
            return value
        return Optional.wrap(value)

    def eval_expressions(self, expressions, env):
        """Evaluates expressions left to right. Returns the list of values, or the first Error/ReturnValue met."""
        values = []
        for expression in expressions:
            value = self.eval(expression, env)
            if is_abrupt(value):
                return value
            values.append(value)
        return values

    def eval_call_expression(self, node, env):
        function = self.eval(node.function, env)
        if is_abrupt(function):
            return function

        args = self.eval_expressions(node.arguments, env)
        if is_abrupt(args):
            return args

        return self.apply_function(node, function, args)

    def apply_function(self, node, function, args):
        """Calls function with args. node is the call, used to position errors."""
        if isinstance(function, Function):
            if len(args) < len(function.parameters):
                missing = ", ".join(parameter.value for parameter in function.parameters[len(args):])
                return new_error(node, f'missing parameters "{missing}" in function call')

            extended_env = function.env.child()
            for parameter, arg in zip(function.parameters, args):
                extended_env.set(parameter.value, arg)

            result = self.eval(function.body, extended_env)
            if isinstance(result, ReturnValue):
                result = result.value
            return result if result is not None else NONE

        elif isinstance(function, Builtin):
            try:
                return function.fn(*args)
            except BuiltinError as error:
                return new_error(node, str(error))

        return new_error(node, f"not a function: {function.kind}")

    def eval_array_literal(self, node, env):
        elements = self.eval_expressions(node.elements, env)
        if is_abrupt(elements):
            return elements
        return Array(elements)

    def eval_index_expression(self, node, env):
        """Indexing never fails on a missing element: out-of-range positions and missing keys give an absent
        Optional.
        """
        left = self.eval(node.left, env)
        if is_abrupt(left):
            return left

        index = self.eval(node.index, env)
        if is_abrupt(index):
            return index

        if isinstance(left, Array):
            if not isinstance(index, Integer):
                return new_error(node.index, f"cannot use {index.kind} as index for array")
            if 0 <= index.value < len(left.elements):
                return Optional.wrap(left.elements[index.value])
            return NONE

        elif isinstance(left, Hash):
            if not isinstance(index, Hashable):
                return new_error(node.index, f"cannot use {index.kind} as key for hash")
            return Optional.wrap(left.get(index))

        return new_error(node, f"index operator not supported: {left.kind}")

    def eval_hash_literal(self, node, env):
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.eval(key_node, env)
            if is_abrupt(key):
                return key

            if not isinstance(key, Hashable):
                return new_error(value_node, f"cannot use type {key.kind} as key for hash")

            value = self.eval(value_node, env)
            if is_abrupt(value):
                return value

            pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)

    def eval_property_expression(self, node, env):
        subject = self.eval(node.subject, env)
        if is_abrupt(subject):
            return subject

        name = node.name.value
        if isinstance(subject, Optional):
            if name == "hasValue":
                return Boolean.of(subject.has_value)
            elif name == "value":
                if not subject.has_value:
                    return new_error(node, f'"{node}" has no value! check before with "hasValue"!')
                return subject.value

        return new_error(node, f'{subject.kind} has no property "{name}".')


def evaluate(node, env, builtins=BUILTINS):
    """Evaluates node in env with a fresh Evaluator."""
    return Evaluator(builtins).eval(node, env)
