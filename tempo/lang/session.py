"""Session control for tempo language. A session owns one VariableStore and runs source text line by line: each line
is classified and executed before the next one is read, so output for a line always precedes the reading of the next.
"""

import sys

from tempo.lang.error import GenericException
from tempo.lang.lexical import Grammar
from tempo.lang.store import VariableStore


def segment(source):
    """Yields (line_num, line) for every line in source. Call again to start over."""
    for line_num, line in enumerate(source.split("\n")):
        yield line_num + 1, line


class Session:
    """Governs a tempo session: the store, the output streams, and error reporting for one program."""
    SH_FILE = "<in>"       # command-line interpreter filename
    STR_FILE = "<string>"  # filename used when compiling a string directly
    RESULT_VAR = "c"       # variable assigned by every if statement

    def __init__(self, error_handler, path=STR_FILE, stdout=None, stderr=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)
        if stderr is not None:
            self.error_handler.stream = stderr

        self.path = path  # used for error messages
        self._stdout = stdout

        self.store = VariableStore()

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def warnings(self):
        """Plain-text messages of all warnings reported so far."""
        return [warning.plain for warning in self.error_handler.warnings]

    def write(self, text):
        """Writes a line of program output."""
        print(text, file=self.stdout, flush=True)

    @classmethod
    def from_file(cls, error_handler, path, **kwargs):
        """Returns (session, source) for the file at path."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except (OSError, UnicodeDecodeError):
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

        return cls(error_handler, path, **kwargs), source

    def execute(self, line, line_num):
        """Classifies and runs a single line. Returns the statement that was run, or None if line was ignored."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        stmt = Grammar.infer(line)
        if stmt is not None:
            stmt.execute(self)

        self.error_handler.remove_line(self.path)  # error was not raised
        return stmt

    def compile(self, source):
        """Runs every line of source in order. An exit statement raises SystemExit and ends the program."""
        for line_num, line in segment(source):
            self.execute(line, line_num)
