"""Error handling for tempo language. Warnings (unresolvable tokens, missing variables) are reported and execution
continues; errors (division by zero, unreadable files) go through throw and are fatal outside of the shell. If another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a tempo error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False, kind=None):
        """Parses args for GenericException or warning. kind optionally tags what went wrong (an ErrorKind)."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.plain = msg.format(*exprs)  # uncolored, for collected warnings
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal
        self.kind = kind

        super().__init__(self.plain)


class ErrorHandler:
    """Context manager that reports tempo errors/warnings instead of letting Python tracebacks through."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.traceback = {}
        self.warnings = []

    @property
    def out(self):
        """Stream diagnostics are written to. Resolved lazily so that redirected stderr is respected."""
        return self.stream if self.stream is not None else sys.stderr

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session execute."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session execute."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, line, col, warning=False):
        """Returns line with the offending part of error.expr highlighted and underlined."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        start = col
        end = col + max(error.end - error.start, 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def _locate(self, error, col=None):
        """Returns (file, line, line_num, col) of the most recently registered line. If col is not given, it is
        guessed as the first place error.expr appears in the line.
        """
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                if col is None:
                    found = line.find(error.expr) if error.expr else -1
                    col = found if found != -1 else None
                return file, line, line_num, (col + error.start if col is not None else None)
        return None, None, None, None

    def warn(self, *args, col=None, **kwargs):
        """Generates, prints, and records a runtime warning message based on args. col is the column of the
        offending expr in the current line, if known. Returns the warning.
        """
        error = GenericException(*args, **kwargs)
        self.warnings.append(error)

        file, line, line_num, col = self._locate(error, col)

        error_msg = ""
        if file is not None:
            location = f"{file}:{line_num}:{col}: " if col is not None else f"{file}:{line_num}: "
            error_msg += colored(location, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg, file=self.out, flush=True)

        if not error.internal and error.diagnosis and col is not None:
            print(ErrorHandler.diagnose(error, line, col, warning=True), file=self.out, flush=True)

        return error

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=self.out, flush=True)

        if self.fatal:
            sys.exit(1)
        self.traceback = {key: (None, None) for key in self.traceback}  # reset, no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
