"""Character-level scanner for Monkey source text. A simple linear scan with one character of lookahead: no
back-tracking, and no error reporting of its own (unknown characters become ILLEGAL tokens, which the parser reports).
"""

from monkey.syntax import tokens


SINGLE_CHARS = {
    ";": tokens.SEMICOLON,
    ",": tokens.COMMA,
    ":": tokens.COLON,
    ".": tokens.DOT,
    "(": tokens.LEFT_PAREN,
    ")": tokens.RIGHT_PAREN,
    "{": tokens.LEFT_BRACE,
    "}": tokens.RIGHT_BRACE,
    "[": tokens.LEFT_BRACKET,
    "]": tokens.RIGHT_BRACKET,
    "+": tokens.PLUS,
    "-": tokens.MINUS,
    "/": tokens.SLASH,
    "*": tokens.ASTERISK,
    "<": tokens.LESS_THAN,
    ">": tokens.GREATER_THAN,
}
WHITESPACE = " \t\r\n"


def is_digit(char):
    """ASCII decimal digits only: str.isdigit also accepts other scripts' digits."""
    return "0" <= char <= "9"


class Lexer:
    """Turns source text into Tokens, one per call to next_token. Iterating over a Lexer yields every token up to and
    including the first EOF.
    """

    def __init__(self, source):
        self.source = source
        self.pos = 0      # index of self.char in source
        self.line = 1
        self.column = 1   # column of self.char

    @property
    def char(self):
        """Current character, or "" at end of input."""
        return self.source[self.pos] if self.pos < len(self.source) else ""

    def peek_char(self):
        """Character after the current one, or "" at end of input."""
        return self.source[self.pos + 1] if self.pos + 1 < len(self.source) else ""

    def read_char(self):
        if self.char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

    def skip_whitespace(self):
        while self.char and self.char in WHITESPACE:
            self.read_char()

    def next_token(self):
        """Scans and returns the next Token. Returns EOF tokens forever once the input is exhausted."""
        self.skip_whitespace()

        line, column, char = self.line, self.column, self.char

        if not char:
            return tokens.Token(tokens.EOF, "", line, column)

        if char in "=!" and self.peek_char() == "=":
            self.read_char()
            self.read_char()
            return tokens.Token(tokens.EQUAL if char == "=" else tokens.NOT_EQUAL, char + "=", line, column)

        if char == "=":
            kind = tokens.ASSIGN
        elif char == "!":
            kind = tokens.BANG
        elif char == '"':
            return tokens.Token(tokens.STRING, self.read_string(), line, column)
        elif char.isalpha() or char == "_":
            literal = self.read_while(lambda c: c.isalpha() or is_digit(c) or c == "_")
            return tokens.Token(tokens.lookup_identifier(literal), literal, line, column)
        elif is_digit(char):
            return tokens.Token(tokens.INTEGER, self.read_while(is_digit), line, column)
        else:
            kind = SINGLE_CHARS.get(char, tokens.ILLEGAL)

        self.read_char()
        return tokens.Token(kind, char, line, column)

    def read_while(self, predicate):
        """Consumes characters while predicate holds and returns them."""
        start = self.pos
        while self.char and predicate(self.char):
            self.read_char()
        return self.source[start:self.pos]

    def read_string(self):
        """Consumes a string literal (surrounding quotes included) and returns its contents. An unterminated string
        runs to the end of input.
        """
        self.read_char()  # opening quote
        contents = self.read_while(lambda c: c != '"')
        if self.char == '"':
            self.read_char()
        return contents

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind == tokens.EOF:
                return
