"""Abstract syntax tree for the Monkey language.

The tree is built once by the parser and never mutated afterwards. Every node keeps the token it was created from so
that diagnostics can point at the exact source position:

```
<program>     ::= <statement>*
<statement>   ::= "let" <identifier> "=" <expression> ";"?
                | "return" <expression>? ";"?
                | <expression> ";"?
<block>       ::= "{" <statement>* "}"
<expression>  ::= <identifier> | <integer> | <string> | "true" | "false"
                | <prefix-op> <expression>
                | <expression> <infix-op> <expression>
                | "if" <expression> <block> ("else" <block>)?
                | "fn" "(" <identifier>,* ")" <block>
                | <expression> "(" <expression>,* ")"        ; call
                | "[" <expression>,* "]"                     ; array
                | <expression> "[" <expression> "]"          ; index
                | "{" (<expression> ":" <expression>),* "}"  ; hash
                | <expression> "." <identifier>              ; property
```

str(node) renders a node back into (fully parenthesized) source text, which re-parses to an equivalent tree.
"""

from abc import abstractmethod, ABC


class Node(ABC):
    """Superclass of every syntax tree node."""

    def __init__(self, token):
        self.token = token
        self._cls = type(self).__name__

    @property
    def literal(self):
        return self.token.literal

    @property
    def line(self):
        return self.token.line

    @property
    def column(self):
        return self.token.column

    @property
    def nodes(self):
        """Child nodes, in source order. Used by display."""
        return []

    @abstractmethod
    def __str__(self):
        """Renders this node back into source text."""

    def display(self, indents=0):
        """Recursively displays the tree under this node in a readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self}'"
        nodes = [node for node in self.nodes if node is not None]
        if nodes:
            result += ", nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self}')"


class Statement(Node):
    """Node that may appear directly in a program or block."""


class Expression(Node):
    """Node that computes a value."""


class Program(Node):
    """Root of every tree. Has no token of its own: its position is that of its first statement."""

    def __init__(self, statements):
        super().__init__(None)
        self.statements = statements

    @property
    def literal(self):
        return self.statements[0].literal if self.statements else ""

    @property
    def line(self):
        return self.statements[0].line if self.statements else 1

    @property
    def column(self):
        return self.statements[0].column if self.statements else 1

    @property
    def nodes(self):
        return self.statements

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


class Identifier(Expression):

    def __init__(self, token):
        super().__init__(token)
        self.value = token.literal

    def __str__(self):
        return self.value


class LetStatement(Statement):

    def __init__(self, token, name, value):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        value = str(self.value) if self.value is not None else ""
        return f"{self.literal} {self.name} = {value};"


class ReturnStatement(Statement):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value  # None for a bare return

    @property
    def nodes(self):
        return [self.value]

    def __str__(self):
        if self.value is None:
            return f"{self.literal};"
        return f"{self.literal} {self.value};"


class ExpressionStatement(Statement):

    def __init__(self, token, expression):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        return f"{self.expression};" if self.expression is not None else ""


class BlockStatement(Statement):

    def __init__(self, token, statements):
        super().__init__(token)
        self.statements = statements

    @property
    def nodes(self):
        return self.statements

    def __str__(self):
        return "{ " + "".join(str(statement) for statement in self.statements) + " }"


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.literal


class StringLiteral(Expression):

    def __init__(self, token):
        super().__init__(token)
        self.value = token.literal

    def __str__(self):
        return f'"{self.value}"'


class Boolean(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.literal


class PrefixExpression(Expression):

    def __init__(self, token, right):
        super().__init__(token)
        self.operator = token.literal
        self.right = right

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    """Binary operation. Positioned at its operator token."""

    def __init__(self, token, left, right):
        super().__init__(token)
        self.left = left
        self.operator = token.literal
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):

    def __init__(self, token, condition, consequence, alternative=None):
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    @property
    def nodes(self):
        return [self.condition, self.consequence, self.alternative]

    def __str__(self):
        result = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            result += f" else {self.alternative}"
        return result


class FunctionLiteral(Expression):

    def __init__(self, token, parameters, body):
        super().__init__(token)
        self.parameters = parameters
        self.body = body

    @property
    def nodes(self):
        return self.parameters + [self.body]

    def __str__(self):
        parameters = ",".join(str(parameter) for parameter in self.parameters)
        return f"{self.literal}({parameters}) {self.body}"


class CallExpression(Expression):
    """Function application. Positioned at the callee, not at the opening parenthesis."""

    def __init__(self, token, function, arguments):
        super().__init__(token)
        self.function = function
        self.arguments = arguments

    @property
    def line(self):
        return self.function.line

    @property
    def column(self):
        return self.function.column

    @property
    def nodes(self):
        return [self.function] + self.arguments

    def __str__(self):
        arguments = ", ".join(str(argument) for argument in self.arguments)
        return f"{self.function}({arguments})"


class ArrayLiteral(Expression):

    def __init__(self, token, elements):
        super().__init__(token)
        self.elements = elements

    @property
    def nodes(self):
        return self.elements

    def __str__(self):
        return "[" + ", ".join(str(element) for element in self.elements) + "]"


class IndexExpression(Expression):
    """Subscript. Positioned at the indexed expression, not at the opening bracket."""

    def __init__(self, token, left, index):
        super().__init__(token)
        self.left = left
        self.index = index

    @property
    def line(self):
        return self.left.line

    @property
    def column(self):
        return self.left.column

    @property
    def nodes(self):
        return [self.left, self.index]

    def __str__(self):
        return f"({self.left}[{self.index}])"


class HashLiteral(Expression):

    def __init__(self, token, pairs):
        super().__init__(token)
        self.pairs = pairs  # list of (key, value) expressions in source order

    @property
    def nodes(self):
        return [node for pair in self.pairs for node in pair]

    def __str__(self):
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.pairs) + "}"


class PropertyExpression(Expression):
    """Named property of a value, e.g. `maybe.hasValue`. Positioned at the receiver."""

    def __init__(self, token, subject, name):
        super().__init__(token)
        self.subject = subject
        self.name = name

    @property
    def line(self):
        return self.subject.line

    @property
    def column(self):
        return self.subject.column

    @property
    def nodes(self):
        return [self.subject, self.name]

    def __str__(self):
        return f"{self.subject}.{self.name}"
