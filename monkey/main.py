"""Runs the monkey interpreter on a .mk file, or in command-line mode. Also uses error handling context manager.
Installed as the monkey executable script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs monkey interpreter. Called from monkey executable script."""
    assert sys.version_info >= (3, 7), "monkey cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print the syntax tree of file instead of running it")
        parser.add_argument("--trace", action="store_true", help="trace the parser while it runs")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, trace=args.trace)

            if args.ast:
                for __, __, program in sess.to_exec:
                    print(program.display())
                return

            sess.run()

            for value in sess.results:
                print(value.inspect())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, trace=args.trace)).cmdloop()


if __name__ == "__main__":
    main()
