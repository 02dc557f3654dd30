"""Handles interactive/command-line mode for the monkey interpreter. Uses cmd as backend."""

import cmd
import getpass


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    greeting = "Hello {}! This is the Monkey programming language!\nType commands here, 'help' for more information."
    prompt = ">>> "
    secondary_prompt = "... "  # used for line continuations
    _tmp_prompt = ">>> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = self.greeting.format(Shell.user_name())

        self._tmp_line = ""
        self._tmp_line_num = 0
        self.line_num = 0

    @staticmethod
    def user_name():
        """Capitalized login name of the current user."""
        try:
            name = getpass.getuser()
        except (ImportError, KeyError, OSError):
            return "stranger"
        return name[:1].upper() + name[1:]

    def default(self, line):
        """Executes arbitrary monkey code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._tmp_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self._tmp_line_num)
                self.sess.run()

                while self.sess.results:
                    print(self.sess.pop().inspect())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the monkey interpreter!\n\n"
              "Monkey is a small language with integers, booleans, strings, arrays, hashes and \n"
              "first-class functions. Try typing 'let add = fn(x, y) { x + y };', then \n"
              "'add(1, 2)'. Conditionals produce maybe-values: 'if 1 > 2 { 10 }.hasValue' is \n"
              "'false'. Builtins: len, push, first, last. Type 'exit' to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter. 'exit' followed by anything else is monkey code using a variable named exit."""
        if arg:
            return self.default(f"exit {arg}")
        return True
