import unittest

from monkey.syntax import nodes, tokens
from monkey.syntax.lexer import Lexer
from monkey.syntax.parser import parse_program


class NodesTestCase(unittest.TestCase):

    def test_str(self):
        name = nodes.Identifier(tokens.Token(tokens.IDENTIFIER, "myVar", 1, 5))
        value = nodes.Identifier(tokens.Token(tokens.IDENTIFIER, "anotherVar", 1, 13))
        let = nodes.LetStatement(tokens.Token(tokens.LET, "let", 1, 1), name, value)

        self.assertEqual("let myVar = anotherVar;", str(nodes.Program([let])))

    def test_program_position(self):
        self.assertEqual((1, 1), (nodes.Program([]).line, nodes.Program([]).column))

        program, __ = parse_program(Lexer("\n\n   x"))
        self.assertEqual((3, 4), (program.line, program.column))

    def test_display(self):
        program, __ = parse_program(Lexer("-x"))
        expected = ("Program(expr='(-x);', nodes=[\n"
                    "    ExpressionStatement(expr='(-x);', nodes=[\n"
                    "        PrefixExpression(expr='(-x)', nodes=[\n"
                    "            Identifier(expr='x')\n"
                    "        ])\n"
                    "    ])\n"
                    "])")
        self.assertEqual(expected, program.display())

    def test_display_skips_missing_children(self):
        program, __ = parse_program(Lexer("return;"))
        self.assertEqual("Program(expr='return;', nodes=[\n    ReturnStatement(expr='return;')\n])", program.display())

    def test_repr(self):
        program, __ = parse_program(Lexer("a[1]"))
        self.assertEqual("IndexExpression('(a[1])')", repr(program.statements[0].expression))


if __name__ == '__main__':
    unittest.main()
