"""Tree-walking evaluation of a resolved funlang Program. Only top-level calls have a runtime effect: a top-level
declaration does nothing until it is called.
"""

import sys

from funlang.lang.error import GenericException
from funlang.pure.syntax import INTRINSICS, FunctionCall


class Interpreter:
    """Executes a resolved Program. println output is written to out and collected in self.output."""

    def __init__(self, program, error_handler, out=None, max_depth=None):
        self.program = program
        self.error_handler = error_handler
        self.out = out if out is not None else sys.stdout
        self.max_depth = max_depth  # None means unbounded (until Python's own recursion limit)

        self.output = []     # lines produced by println, in execution order
        self.undefined = []  # names of calls that were executed without a definition

        self.intrinsics = {name: getattr(self, f"_{name}") for name in INTRINSICS}

    def run(self):
        """Runs every top-level FunctionCall in order. Returns the lines printed. An error raised by one top-level call
        is reported and execution continues with the next statement.
        """
        for statement in self.program.statements:
            if isinstance(statement, FunctionCall):
                self.error_handler.trace(f"{statement.name} invoked")
                try:
                    self.run_function(statement)
                except GenericException as error:
                    self.error_handler.report(error)
        return self.output

    def run_function(self, call, depth=0):
        """Runs call: an intrinsic, a bound declaration's body, or a 'not defined' warning for anything else."""
        if self.max_depth is not None and depth > self.max_depth:
            msg = "maximum call depth ({}) exceeded while calling '{}'"
            raise GenericException(msg, (str(self.max_depth), call.name), diagnosis=False)

        intrinsic = self.intrinsics.get(call.name)
        if intrinsic is not None:
            intrinsic(call.arguments)

        elif call.definition is not None:
            for nested in call.definition.body.calls:
                self.run_function(nested, depth + 1)

        else:
            self.undefined.append(call.name)
            self.error_handler.warn("function '{}' not defined", call.name, diagnosis=False)

    def _println(self, arguments):
        line = " ".join(arguments)
        self.output.append(line)
        print(line, file=self.out)
