import contextlib
import io
import unittest

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def run_lines(self, *lines):
        output = io.StringIO()
        with contextlib.redirect_stdout(output):
            for line in lines:
                self.shell.onecmd(line)
        return output.getvalue()

    def test_intro(self):
        self.assertIn("! This is the Monkey programming language!", self.shell.intro)
        self.assertTrue(self.shell.intro.startswith("Hello "))

        name = Shell.user_name()
        self.assertEqual(name[:1].upper(), name[:1])

    def test_results_are_printed(self):
        output = self.run_lines("let x = 2", "x * 3", '"a" * 2', "if x > 5 { 1 }")
        self.assertEqual('6\n"aa"\nmaybe([no value])\n', output)

    def test_line_continuation(self):
        self.run_lines("let f = fn(a) {")
        self.assertEqual(self.shell.secondary_prompt, self.shell.prompt)

        self.run_lines("a + 1")
        self.assertEqual(self.shell.secondary_prompt, self.shell.prompt)

        self.assertEqual("", self.run_lines("}"))
        self.assertEqual(">>> ", self.shell.prompt)

        self.assertEqual("2\n", self.run_lines("f(1)"))

    def test_errors_do_not_stop_the_loop(self):
        output = self.run_lines("foo", "1 + 1")
        self.assertIn("identifier not found: foo", output)
        self.assertTrue(output.endswith("2\n"))

        output = self.run_lines("let = 1", "3")
        self.assertIn("expected next token to be 'IDENTIFIER', got '=' instead", output)
        self.assertTrue(output.endswith("3\n"))

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertIn("identifier not found: exit", self.run_lines("exit + 1"))

        with contextlib.redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))

    def test_emptyline(self):
        self.run_lines("1")
        self.assertEqual("", self.run_lines(""))

    def test_help(self):
        self.assertIn("Welcome to the monkey interpreter!", self.run_lines("help"))


if __name__ == '__main__':
    unittest.main()
