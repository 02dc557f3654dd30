import unittest

from monkey.syntax import tokens
from monkey.syntax.lexer import Lexer


class LexerTestCase(unittest.TestCase):

    def test_next_token(self):
        source = 'let five = 5;\nlet add = fn(x, y) {\n  x + y;\n};\n!-/*<> == != "foo bar" [1]: {}.'

        expected = [
            (tokens.LET, "let", 1, 1), (tokens.IDENTIFIER, "five", 1, 5), (tokens.ASSIGN, "=", 1, 10),
            (tokens.INTEGER, "5", 1, 12), (tokens.SEMICOLON, ";", 1, 13),

            (tokens.LET, "let", 2, 1), (tokens.IDENTIFIER, "add", 2, 5), (tokens.ASSIGN, "=", 2, 9),
            (tokens.FUNCTION, "fn", 2, 11), (tokens.LEFT_PAREN, "(", 2, 13), (tokens.IDENTIFIER, "x", 2, 14),
            (tokens.COMMA, ",", 2, 15), (tokens.IDENTIFIER, "y", 2, 17), (tokens.RIGHT_PAREN, ")", 2, 18),
            (tokens.LEFT_BRACE, "{", 2, 20),

            (tokens.IDENTIFIER, "x", 3, 3), (tokens.PLUS, "+", 3, 5), (tokens.IDENTIFIER, "y", 3, 7),
            (tokens.SEMICOLON, ";", 3, 8),

            (tokens.RIGHT_BRACE, "}", 4, 1), (tokens.SEMICOLON, ";", 4, 2),

            (tokens.BANG, "!", 5, 1), (tokens.MINUS, "-", 5, 2), (tokens.SLASH, "/", 5, 3),
            (tokens.ASTERISK, "*", 5, 4), (tokens.LESS_THAN, "<", 5, 5), (tokens.GREATER_THAN, ">", 5, 6),
            (tokens.EQUAL, "==", 5, 8), (tokens.NOT_EQUAL, "!=", 5, 11), (tokens.STRING, "foo bar", 5, 14),
            (tokens.LEFT_BRACKET, "[", 5, 24), (tokens.INTEGER, "1", 5, 25), (tokens.RIGHT_BRACKET, "]", 5, 26),
            (tokens.COLON, ":", 5, 27), (tokens.LEFT_BRACE, "{", 5, 29), (tokens.RIGHT_BRACE, "}", 5, 30),
            (tokens.DOT, ".", 5, 31),

            (tokens.EOF, "", 5, 32),
        ]

        lexer = Lexer(source)
        for case in expected:
            token = lexer.next_token()
            self.assertEqual(case, (token.kind, token.literal, token.line, token.column), msg=case)

    def test_keywords(self):
        cases = {
            "fn": tokens.FUNCTION, "let": tokens.LET, "if": tokens.IF, "else": tokens.ELSE, "true": tokens.TRUE,
            "false": tokens.FALSE, "return": tokens.RETURN, "lets": tokens.IDENTIFIER, "iff": tokens.IDENTIFIER,
        }
        for case, kind in cases.items():
            self.assertEqual(kind, Lexer(case).next_token().kind, msg=case)

    def test_identifiers(self):
        should_pass = ["x", "foo_bar", "_private", "x1", "hasValue"]
        for case in should_pass:
            token = Lexer(case).next_token()
            self.assertEqual((tokens.IDENTIFIER, case), (token.kind, token.literal), msg=case)

        token = Lexer("1x").next_token()
        self.assertEqual((tokens.INTEGER, "1"), (token.kind, token.literal))

    def test_illegal(self):
        should_fail = ["@", "$", "&", "~", "#", "١٢", "²"]
        for case in should_fail:
            self.assertEqual(tokens.ILLEGAL, Lexer(case).next_token().kind, msg=case)

    def test_digits_are_ascii(self):
        token = Lexer("7١").next_token()
        self.assertEqual((tokens.INTEGER, "7"), (token.kind, token.literal))

        token = Lexer("x١").next_token()
        self.assertEqual((tokens.IDENTIFIER, "x"), (token.kind, token.literal))

    def test_strings(self):
        cases = {'""': "", '"a b"': "a b", '"unterminated': "unterminated", '"{x}"': "{x}"}
        for case, literal in cases.items():
            token = Lexer(case).next_token()
            self.assertEqual((tokens.STRING, literal), (token.kind, token.literal), msg=case)

    def test_eof_forever(self):
        lexer = Lexer("x")
        lexer.next_token()
        for __ in range(3):
            self.assertEqual(tokens.EOF, lexer.next_token().kind)

    def test_iteration(self):
        kinds = [token.kind for token in Lexer("a + 1")]
        self.assertEqual([tokens.IDENTIFIER, tokens.PLUS, tokens.INTEGER, tokens.EOF], kinds)

        self.assertEqual([tokens.EOF], [token.kind for token in Lexer("  \t\r\n ")])


if __name__ == '__main__':
    unittest.main()
