"""Session control for the Monkey language. Ties the lexer, parser and evaluator together to run the interpreter, either
in command-line mode or file interpretation mode.
"""

import sys

from monkey.lang.error import GenericException
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import Evaluator
from monkey.runtime.objects import Error
from monkey.syntax.lexer import Lexer
from monkey.syntax.nodes import LetStatement
from monkey.syntax.parser import parse_program


OPENERS = {"(": ")", "[": "]", "{": "}"}
RECURSION_LIMIT = 20000  # a monkey call takes about ten python frames


class Session:
    """Governs a monkey session: every program added to it is evaluated in one shared environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, trace=False, builtins=BUILTINS):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.trace = trace        # whether or not to trace the parser

        self.builtins = builtins
        self.evaluator = Evaluator(builtins)
        self.env = Environment()

        self.to_exec = []  # list of (source, line_num, Program) to evaluate on run
        self.results = []  # values of the programs that have been run

        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from the command-line. Returns the line stripped of trailing whitespace and whether or
        not it leaves a bracket open, in which case the next line should be appended to it.
        """
        line = line.rstrip()

        depth = 0
        in_string = False
        for char in line:
            if char == '"':
                in_string = not in_string
            elif in_string:
                continue
            elif char in OPENERS:
                depth += 1
            elif char in OPENERS.values():
                depth -= 1

        return line, depth > 0

    def _exception(self, msg, source, line_num, line, column):
        """Registers the offending line of source in the traceback and returns a GenericException pointing at it.
        line_num is the line of the session file on which source starts.
        """
        lines = source.splitlines()
        text = lines[line - 1] if 0 < line <= len(lines) else ""
        self.error_handler.register_line(self.path, text, line_num + line - 1)
        return GenericException.at(msg, source, line, column)

    def parse(self, source, line_num=1):
        """Parses source into a Program, raising a GenericException for its last syntax error after reporting all the
        others.
        """
        program, errors = parse_program(Lexer(source), self.trace)

        if errors:
            *others, last = errors
            for diagnostic in others:
                error = self._exception(diagnostic.message, source, line_num, diagnostic.line, diagnostic.column)
                self.error_handler.report(error)
            raise self._exception(last.message, source, line_num, last.line, last.column)

        return program

    def add(self, source, line_num=1):
        """Parses source and queues it in the current session. Evaluation is delayed until run is called."""
        program = self.parse(source, line_num)

        for statement in program.statements:
            name = statement.name if isinstance(statement, LetStatement) else None
            if name is not None and name.value in self.builtins:
                lines = source.splitlines()
                self.error_handler.register_line(self.path, lines[name.line - 1], line_num + name.line - 1)
                self.error_handler.warn(f"'{name.value}' shadows a builtin function", lines[name.line - 1],
                                        start=name.column - 1, end=name.column - 1 + len(name.value))

        self.to_exec.append((source, line_num, program))
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates this session's queued programs in order. Raises a GenericException for the first runtime error,
        and drops the programs after it.
        """
        while self.to_exec:
            source, line_num, program = self.to_exec.pop(0)

            result = self.evaluator.eval(program, self.env)
            if isinstance(result, Error):
                self.to_exec = []
                raise self._exception(result.inspect(), source, line_num, result.line, result.column)

            if result is not None:
                self.results.append(result)

        self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
