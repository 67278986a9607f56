"""Backtracking recursive-descent parser for funlang.

```
<program>          ::= (<function_declare> | <function_call>)+
<function_declare> ::= "fun" IDENTIFIER "(" ")" <function_body>
<function_body>    ::= "{" <function_call>* "}"
<function_call>    ::= IDENTIFIER "(" (STRING ("," STRING)*)? ")"   ; non-STRING arguments are skipped
```

Every sub-rule returns a node or None. A rule that returns None leaves the Tokenizer exactly where it found it (see
backtracking), so failed alternatives never consume input.
"""

import functools

from funlang.lang.error import GenericException
from funlang.pure.syntax import FunctionBody, FunctionCall, FunctionDeclare, Program
from funlang.pure.tokens import TokenType


def backtracking(rule):
    """Decorates a parser rule so that the token cursor is restored to its entry position whenever the rule returns
    None.
    """

    @functools.wraps(rule)
    def wrapper(self, *args, **kwargs):
        self.error_handler.trace(f"start {rule.__name__}")

        position = self.tokenizer.position()
        node = rule(self, *args, **kwargs)
        if node is None:
            self.tokenizer.rewind(position)
        return node

    return wrapper


class Parser:
    """Builds a Program from a Tokenizer."""
    FUN = "fun"

    def __init__(self, tokenizer, error_handler):
        self.tokenizer = tokenizer
        self.error_handler = error_handler

    def _expect(self, type_, value=None):
        """Consumes and returns the next token if it matches type_ (and value), else returns None."""
        token = self.tokenizer.next()
        return token if token.is_(type_, value) else None

    def parse_program(self):
        """Parses as many statements as possible. Raises a GenericException if none could be parsed."""
        statements = []

        while True:
            statement = self.parse_function_declare() or self.parse_function_call()
            if statement is None:
                break
            statements.append(statement)

        if not statements:
            expr, start, end = self.tokenizer.render()
            msg = "'{}' does not start with a function declaration or call (found '{}')"
            raise GenericException(msg, (expr, str(self.tokenizer.peek())), start=start, end=end)

        return Program(statements)

    @backtracking
    def parse_function_declare(self):
        if not self._expect(TokenType.KEYWORD, Parser.FUN):
            return None

        name = self._expect(TokenType.IDENTIFIER)
        if not (name and self._expect(TokenType.SEPARATOR, "(") and self._expect(TokenType.SEPARATOR, ")")):
            return None

        body = self.parse_function_body()
        return FunctionDeclare(name.value, body) if body is not None else None

    @backtracking
    def parse_function_body(self):
        if not self._expect(TokenType.SEPARATOR, "{"):
            return None

        calls = []
        call = self.parse_function_call()
        while call is not None:
            calls.append(call)
            call = self.parse_function_call()

        return FunctionBody(calls) if self._expect(TokenType.SEPARATOR, "}") else None

    @backtracking
    def parse_function_call(self):
        name = self._expect(TokenType.IDENTIFIER)
        if not (name and self._expect(TokenType.SEPARATOR, "(")):
            return None

        arguments = []
        token = self.tokenizer.next()
        while not token.is_(TokenType.SEPARATOR, ")"):
            if token.type is TokenType.EOF:
                return None  # unterminated argument list

            if token.type is TokenType.STRING:
                arguments.append(token.value)

            token = self.tokenizer.next()
            if token.is_(TokenType.SEPARATOR, ","):
                token = self.tokenizer.next()

        return FunctionCall(name.value, arguments)
