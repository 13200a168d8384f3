"""Uses the tempo language implementation to interpret tempo files, run the demo program, or run in command-line
mode. Also uses error handling context manager. Called from the tempo console script.
"""

import argparse

from tempo.lang.error import ErrorHandler
from tempo.lang.shell import Shell
from tempo.lang.session import Session


DEMO = """
let a = 5;
let b = 3;
let c = 0;

if (a > b) {
    c = a;
} else {
    c = b;
}

print c;

exit(0);
"""


def build_parser():
    parser = argparse.ArgumentParser(prog="tempo", description="Interpreter for the tempo toy language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--demo", help="run the built-in demo program", action="store_true")
    return parser


def main(argv=None):
    """Runs tempo interpreter. Called from tempo console script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.demo:
            Session(error_handler, "<demo>").compile(DEMO)

        elif args.file is not None:
            sess, source = Session.from_file(error_handler, args.file)
            sess.compile(source)

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE)).cmdloop()


if __name__ == "__main__":
    main()
