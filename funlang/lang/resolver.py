"""Semantic binding for funlang: links every call site to the declaration it invokes.

Resolution runs over the complete Program after parsing, so a call may appear before the declaration it refers to.
Calls to intrinsics are never bound, and calls to undeclared names are left unbound without error (they are reported
when executed, see interpreter.py).
"""

from funlang.pure.syntax import INTRINSICS, FunctionCall, FunctionDeclare


class Resolver:
    """Binds FunctionCalls in a Program to top-level FunctionDeclares by name."""

    def __init__(self, program, error_handler):
        self.program = program
        self.error_handler = error_handler

        self.unresolved = []  # names of calls that matched no declaration, in visiting order

    def visit_program(self):
        """Resolves every call in self.program and returns it."""
        self.unresolved = []

        for statement in self.program.statements:
            if isinstance(statement, FunctionDeclare):
                self.visit_function_declare(statement)
            elif isinstance(statement, FunctionCall):
                self.resolve_function_call(statement)

        return self.program

    def visit_function_declare(self, declare):
        for call in declare.body.calls:
            self.error_handler.trace(f"{call.name} is visited")
            self.resolve_function_call(call)

    def find_definition(self, name):
        """Returns the first top-level FunctionDeclare named name, or None."""
        for statement in self.program.statements:
            if isinstance(statement, FunctionDeclare) and statement.name == name:
                return statement
        return None

    def resolve_function_call(self, call):
        if call.name in INTRINSICS:
            self.error_handler.trace(f"{call.name} is resolved (intrinsic)")
            return

        if call.definition is None:
            call.definition = self.find_definition(call.name)

        if call.definition is None:
            self.unresolved.append(call.name)
        else:
            self.error_handler.trace(f"{call.name} is resolved")
