"""Abstract syntax tree for funlang. Nodes are plain containers built by the Parser: the only field mutated after
construction is FunctionCall.definition, which the Resolver sets.
"""

from abc import ABC


class AstNode(ABC):
    """Superclass of every funlang syntax tree node."""

    @property
    def nodes(self):
        """Child nodes, in source order."""
        return []

    def _fields(self):
        return ""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <AstNode>(<fields>, nodes=[
            <AstNode>(<fields>, nodes=[
                ...
                <AstNode>(<fields>)  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}({self._fields()}"
        if self.nodes:
            result += ", nodes=[" if self._fields() else "nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}({self._fields()})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self._fields() == other._fields() and self.nodes == other.nodes


class Statement(AstNode):
    """Top-level statement: either a FunctionDeclare or a FunctionCall."""


class Program(AstNode):

    def __init__(self, statements):
        self.statements = list(statements)

    @property
    def nodes(self):
        return self.statements

    def declarations(self):
        """Top-level FunctionDeclares in source order."""
        return [stmt for stmt in self.statements if isinstance(stmt, FunctionDeclare)]

    def calls(self):
        """Every FunctionCall in the program, top-level or nested, in source order."""
        for stmt in self.statements:
            if isinstance(stmt, FunctionDeclare):
                yield from stmt.body.calls
            else:
                yield stmt


class FunctionBody(AstNode):

    def __init__(self, calls):
        self.calls = list(calls)

    @property
    def nodes(self):
        return self.calls


class FunctionDeclare(Statement):

    def __init__(self, name, body):
        self.name = name
        self.body = body

    @property
    def nodes(self):
        return self.body.calls

    def _fields(self):
        return f"name='{self.name}'"


class FunctionCall(Statement):
    """Call site. definition is the binding to a FunctionDeclare, unset until resolution (and left unset for
    intrinsics or undeclared names).
    """

    def __init__(self, name, arguments=(), definition=None):
        self.name = name
        self.arguments = list(arguments)
        self.definition = definition

    @property
    def resolved(self):
        return self.definition is not None

    def _fields(self):
        return f"name='{self.name}', arguments={self.arguments}"


INTRINSICS = frozenset({"println"})  # names recognized as built-ins, never bound to a FunctionDeclare
