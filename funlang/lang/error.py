"""Error handling for funlang. Only GenericExceptions should be encountered during running: if another type of error
is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a funlang error/warning. exprs are bolded and
    substituted into msg's '{}' placeholders.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom funlang errors/warnings. Also owns
    the trace channel used by the parser, resolver and interpreter.
    """
    ERROR = "red"
    WARNING = "magenta"
    TRACE = "blue"

    def __init__(self, fatal=True, trace=False):
        self.fatal = fatal
        self.tracing = trace
        self.source = None  # token file currently being run, used for error messages
        self.warnings = []  # plain-text warning messages, in the order they were emitted
        self.errors = []    # messages of reported errors, in the order they were reported

    def register_file(self, path):
        """Registers path as the source of subsequent errors/warnings."""
        self.source = path

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _prefix(self):
        return colored(f"{self.source}: ", attrs=["bold"]) if self.source else ""

    def trace(self, msg):
        """Prints a trace line if tracing is enabled. Trace output is informational only."""
        if self.tracing:
            print(colored(f"trace: {msg}", ErrorHandler.TRACE))

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)
        self.warnings.append(error.msg)

        print(self._prefix() + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def report(self, error):
        """Prints error without exiting, for errors that only abort a single statement."""
        self.errors.append(error.msg)

        error_msg = self._prefix()

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

    def throw(self, error):
        """Throws error. error must be a GenericException. Exits the process if this handler is fatal."""
        self.report(error)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded: call chain never bottoms out"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
