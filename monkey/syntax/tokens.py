"""Token kinds for the Monkey language, plus the Token record handed from the lexer to the parser.

Kinds are plain strings so that they read well in diagnostics: operators and delimiters are their own literal text,
everything else is an upper-case name.
"""

from dataclasses import dataclass


ILLEGAL = "ILLEGAL"
EOF = "EOF"

# identifiers + literals
IDENTIFIER = "IDENTIFIER"  # add, foobar, x, y, ...
INTEGER = "INTEGER"        # 1343456
STRING = "STRING"          # "foo bar"

# operators
ASSIGN = "="
PLUS = "+"
MINUS = "-"
SLASH = "/"
ASTERISK = "*"
LESS_THAN = "<"
GREATER_THAN = ">"
BANG = "!"
EQUAL = "=="
NOT_EQUAL = "!="

# delimiters
COMMA = ","
SEMICOLON = ";"
COLON = ":"
DOT = "."
LEFT_PAREN = "("
RIGHT_PAREN = ")"
LEFT_BRACE = "{"
RIGHT_BRACE = "}"
LEFT_BRACKET = "["
RIGHT_BRACKET = "]"

# keywords
FUNCTION = "FUNCTION"
LET = "LET"
IF = "IF"
ELSE = "ELSE"
TRUE = "TRUE"
FALSE = "FALSE"
RETURN = "RETURN"

KEYWORDS = {
    "fn": FUNCTION,
    "let": LET,
    "if": IF,
    "else": ELSE,
    "true": TRUE,
    "false": FALSE,
    "return": RETURN,
}


def lookup_identifier(literal):
    """Returns the keyword kind of literal, or IDENTIFIER if literal is not reserved."""
    return KEYWORDS.get(literal, IDENTIFIER)


@dataclass(frozen=True)
class Token:
    """Smallest lexical unit: kind, literal text and the 1-based position of its first character."""
    kind: str
    literal: str
    line: int
    column: int

    def __str__(self):
        return f"{self.kind}({self.literal!r}) at {self.line}:{self.column}"
