"""Operator-precedence (Pratt) parser for the Monkey language.

Every token kind has at most one prefix rule (called when the token starts an expression) and at most one infix rule
(called when the token follows an already-parsed left-hand expression). parse_expression climbs precedence levels by
repeatedly handing the accumulated left expression to the next infix rule, which is what makes `a - b - c` associate
as `(a - b) - c` and `a + b * c` bind `b * c` first.

The parser never raises on malformed input. Problems are collected in Parser.errors as Diagnostics and the offending
construct is dropped, so one pass surfaces as many diagnostics as possible. Callers must check the errors before
evaluating the returned Program.
"""

from contextlib import contextmanager
from dataclasses import dataclass

from termcolor import colored

from monkey.syntax import nodes, tokens


LOWEST, EQUALS, LESS_GREATER, SUM, PRODUCT, PREFIX, CALL, INDEX = range(1, 9)

PRECEDENCES = {
    tokens.EQUAL: EQUALS,
    tokens.NOT_EQUAL: EQUALS,
    tokens.LESS_THAN: LESS_GREATER,
    tokens.GREATER_THAN: LESS_GREATER,
    tokens.PLUS: SUM,
    tokens.MINUS: SUM,
    tokens.SLASH: PRODUCT,
    tokens.ASTERISK: PRODUCT,
    tokens.LEFT_PAREN: CALL,
    tokens.LEFT_BRACKET: INDEX,
    tokens.DOT: INDEX,
}

# tokens that always end an expression, whatever their precedence
TERMINATORS = (tokens.SEMICOLON, tokens.LEFT_BRACE, tokens.RIGHT_BRACE)

INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class Diagnostic:
    """A syntax error found while parsing."""
    line: int
    column: int
    message: str

    def __str__(self):
        return f"{self.line}:{self.column}: {self.message}"


class Parser:
    """Builds a Program from a token source: any iterable of Tokens, such as a Lexer. Uses exactly one token of
    lookahead (self.peek_token).
    """

    def __init__(self, source, trace=False):
        self.tokens = iter(source)
        self.trace = trace
        self.errors = []

        self.current_token = None
        self.peek_token = None
        self._last_token = tokens.Token(tokens.EOF, "", 1, 1)
        self._trace_level = 0

        self.prefix_parse_fns = {
            tokens.IDENTIFIER: self.parse_identifier,
            tokens.INTEGER: self.parse_integer_literal,
            tokens.STRING: self.parse_string_literal,
            tokens.TRUE: self.parse_boolean,
            tokens.FALSE: self.parse_boolean,
            tokens.BANG: self.parse_prefix_expression,
            tokens.MINUS: self.parse_prefix_expression,
            tokens.LEFT_PAREN: self.parse_grouped_expression,
            tokens.IF: self.parse_if_expression,
            tokens.FUNCTION: self.parse_function_literal,
            tokens.LEFT_BRACKET: self.parse_array_literal,
            tokens.LEFT_BRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns = {
            tokens.PLUS: self.parse_infix_expression,
            tokens.MINUS: self.parse_infix_expression,
            tokens.SLASH: self.parse_infix_expression,
            tokens.ASTERISK: self.parse_infix_expression,
            tokens.EQUAL: self.parse_infix_expression,
            tokens.NOT_EQUAL: self.parse_infix_expression,
            tokens.LESS_THAN: self.parse_infix_expression,
            tokens.GREATER_THAN: self.parse_infix_expression,
            tokens.LEFT_PAREN: self.parse_call_expression,
            tokens.LEFT_BRACKET: self.parse_index_expression,
            tokens.DOT: self.parse_property_expression,
        }

        self.next_token()
        self.next_token()

    # ---------------------------------------------------------------------------------------------------------------
    # token stream

    def next_token(self):
        """Advances by one token. An exhausted source keeps producing its final EOF token."""
        self.current_token = self.peek_token
        token = next(self.tokens, None)
        if token is None:
            last = self._last_token
            token = tokens.Token(tokens.EOF, "", last.line, last.column)
        self._last_token = token
        self.peek_token = token

    def current_token_is(self, kind):
        return self.current_token.kind == kind

    def peek_token_is(self, kind):
        return self.peek_token.kind == kind

    def expect_peek(self, kind):
        """Advances if the next token is of the expected kind, otherwise records a diagnostic and stays put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current_token.kind, LOWEST)

    # ---------------------------------------------------------------------------------------------------------------
    # diagnostics

    def error(self, token, msg):
        self.errors.append(Diagnostic(token.line, token.column, msg))

    def peek_error(self, kind):
        self.error(self.peek_token, f"expected next token to be '{kind}', got '{self.peek_token.kind}' instead")

    def no_prefix_parse_fn_error(self, token):
        self.error(token, f"no prefix parse function for {token.kind} found")

    @contextmanager
    def traced(self, name):
        """Prints an indented BEGIN/END trace around a parse function when tracing is enabled."""
        if not self.trace:
            yield
            return

        indent = "    " * self._trace_level
        print(colored(f"{indent}BEGIN {name}", "cyan") + f" {self.current_token.literal!r}")
        self._trace_level += 1
        try:
            yield
        finally:
            self._trace_level -= 1
            print(colored(f"{indent}END {name}", "cyan"))

    # ---------------------------------------------------------------------------------------------------------------
    # statements

    def parse_program(self):
        """Parses statements until EOF. Statements that failed to parse are left out of the Program."""
        statements = []
        while not self.current_token_is(tokens.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()
        return nodes.Program(statements)

    def parse_statement(self):
        if self.current_token_is(tokens.LET):
            return self.parse_let_statement()
        elif self.current_token_is(tokens.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.current_token

        if not self.expect_peek(tokens.IDENTIFIER):
            return None
        name = nodes.Identifier(self.current_token)

        if not self.expect_peek(tokens.ASSIGN):
            return None
        self.next_token()

        value = self.parse_expression(LOWEST)
        if value is None:
            return None

        if self.peek_token_is(tokens.SEMICOLON):
            self.next_token()
        return nodes.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.current_token
        value = None

        if not any(self.peek_token_is(kind) for kind in TERMINATORS + (tokens.EOF,)):
            self.next_token()
            value = self.parse_expression(LOWEST)
            if value is None:
                return None

        if self.peek_token_is(tokens.SEMICOLON):
            self.next_token()
        return nodes.ReturnStatement(token, value)

    def parse_expression_statement(self):
        with self.traced("parse_expression_statement"):
            token = self.current_token

            expression = self.parse_expression(LOWEST)
            if expression is None:
                return None

            if self.peek_token_is(tokens.SEMICOLON):
                self.next_token()
            return nodes.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses statements from the current '{' up to the matching '}'."""
        with self.traced("parse_block_statement"):
            token = self.current_token
            statements = []

            self.next_token()
            while not self.current_token_is(tokens.RIGHT_BRACE):
                if self.current_token_is(tokens.EOF):
                    self.error(self.current_token, f"expected next token to be '{tokens.RIGHT_BRACE}', got "
                                                   f"'{tokens.EOF}' instead")
                    break

                statement = self.parse_statement()
                if statement is not None:
                    statements.append(statement)
                self.next_token()

            return nodes.BlockStatement(token, statements)

    # ---------------------------------------------------------------------------------------------------------------
    # expressions

    def parse_expression(self, precedence):
        """Parses an expression whose operators all bind tighter than precedence. Returns None on failure."""
        with self.traced("parse_expression"):
            prefix = self.prefix_parse_fns.get(self.current_token.kind)
            if prefix is None:
                self.no_prefix_parse_fn_error(self.current_token)
                return None

            left = prefix()

            while left is not None and self.peek_token.kind not in TERMINATORS and precedence < self.peek_precedence():
                infix = self.infix_parse_fns.get(self.peek_token.kind)
                if infix is None:
                    return left

                self.next_token()
                left = infix(left)

            return left

    def parse_identifier(self):
        return nodes.Identifier(self.current_token)

    def parse_integer_literal(self):
        with self.traced("parse_integer_literal"):
            token = self.current_token
            try:
                value = int(token.literal)
            except ValueError:
                value = None

            if value is None or value > INT64_MAX:
                self.error(token, f"could not parse '{token.literal}' as integer")
                return None
            return nodes.IntegerLiteral(token, value)

    def parse_string_literal(self):
        return nodes.StringLiteral(self.current_token)

    def parse_boolean(self):
        return nodes.Boolean(self.current_token, self.current_token_is(tokens.TRUE))

    def parse_prefix_expression(self):
        with self.traced("parse_prefix_expression"):
            token = self.current_token
            self.next_token()

            right = self.parse_expression(PREFIX)
            if right is None:
                return None
            return nodes.PrefixExpression(token, right)

    def parse_infix_expression(self, left):
        with self.traced("parse_infix_expression"):
            token = self.current_token
            precedence = self.current_precedence()
            self.next_token()

            right = self.parse_expression(precedence)
            if right is None:
                return None
            return nodes.InfixExpression(token, left, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(LOWEST)
        if expression is None or not self.expect_peek(tokens.RIGHT_PAREN):
            return None
        return expression

    def parse_if_expression(self):
        with self.traced("parse_if_expression"):
            token = self.current_token
            self.next_token()

            condition = self.parse_expression(LOWEST)
            if condition is None or not self.expect_peek(tokens.LEFT_BRACE):
                return None
            consequence = self.parse_block_statement()

            alternative = None
            if self.peek_token_is(tokens.ELSE):
                self.next_token()
                if not self.expect_peek(tokens.LEFT_BRACE):
                    return None
                alternative = self.parse_block_statement()

            return nodes.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.current_token

        if not self.expect_peek(tokens.LEFT_PAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None or not self.expect_peek(tokens.LEFT_BRACE):
            return None

        return nodes.FunctionLiteral(token, parameters, self.parse_block_statement())

    def parse_function_parameters(self):
        """Parses `ident (, ident)* )` after the current '('. Returns None on failure."""
        if self.peek_token_is(tokens.RIGHT_PAREN):
            self.next_token()
            return []

        parameters = []
        while True:
            if not self.expect_peek(tokens.IDENTIFIER):
                return None
            parameters.append(nodes.Identifier(self.current_token))

            if not self.peek_token_is(tokens.COMMA):
                break
            self.next_token()

        if not self.expect_peek(tokens.RIGHT_PAREN):
            return None
        return parameters

    def parse_expression_list(self, end):
        """Parses a comma-separated list of expressions closed by end. Returns None on failure."""
        if self.peek_token_is(end):
            self.next_token()
            return []

        self.next_token()
        expressions = [self.parse_expression(LOWEST)]

        while self.peek_token_is(tokens.COMMA):
            self.next_token()
            self.next_token()
            expressions.append(self.parse_expression(LOWEST))

        if None in expressions or not self.expect_peek(end):
            return None
        return expressions

    def parse_call_expression(self, function):
        token = self.current_token

        arguments = self.parse_expression_list(tokens.RIGHT_PAREN)
        if arguments is None:
            return None
        return nodes.CallExpression(token, function, arguments)

    def parse_array_literal(self):
        token = self.current_token

        elements = self.parse_expression_list(tokens.RIGHT_BRACKET)
        if elements is None:
            return None
        return nodes.ArrayLiteral(token, elements)

    def parse_index_expression(self, left):
        token = self.current_token
        self.next_token()

        index = self.parse_expression(LOWEST)
        if index is None or not self.expect_peek(tokens.RIGHT_BRACKET):
            return None
        return nodes.IndexExpression(token, left, index)

    def parse_hash_literal(self):
        with self.traced("parse_hash_literal"):
            token = self.current_token
            pairs = []

            while not self.peek_token_is(tokens.RIGHT_BRACE):
                self.next_token()
                key = self.parse_expression(LOWEST)
                if key is None or not self.expect_peek(tokens.COLON):
                    return None

                self.next_token()
                value = self.parse_expression(LOWEST)
                if value is None:
                    return None
                pairs.append((key, value))

                if not self.peek_token_is(tokens.RIGHT_BRACE) and not self.expect_peek(tokens.COMMA):
                    return None

            self.next_token()
            return nodes.HashLiteral(token, pairs)

    def parse_property_expression(self, subject):
        token = self.current_token

        if not self.expect_peek(tokens.IDENTIFIER):
            return None
        return nodes.PropertyExpression(token, subject, nodes.Identifier(self.current_token))


def parse_program(source, trace=False):
    """Parses a token source. Returns (Program, list of Diagnostics); the Program is only trustworthy if the list is
    empty.
    """
    parser = Parser(source, trace)
    program = parser.parse_program()
    return program, parser.errors
