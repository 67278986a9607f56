"""Session control for funlang: loads a token file (or the built-in sample), then parses, resolves and runs it.

Token files hold one token per line, written as its kind followed by a single space and its literal text:

```
keyword fun
identifier foo
separator (
string hello, world!
eof
```

Kinds are TokenType names (case-insensitive). Text is taken verbatim, so string tokens may contain spaces and commas.
Blank lines and lines starting with ";;" are ignored, and a final EOF token is added if the file has none.
"""

from funlang.lang.error import GenericException
from funlang.lang.interpreter import Interpreter
from funlang.lang.resolver import Resolver
from funlang.pure.parser import Parser
from funlang.pure.tokens import SAMPLE_TOKENS, Token, Tokenizer, TokenType


class Session:
    """Governs a single funlang run over one token sequence."""
    SAMPLE = "<sample>"  # path used for the built-in sample program

    def __init__(self, error_handler, path=SAMPLE, tokens=None, out=None, max_depth=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.out = out              # stream println writes to (None means stdout)
        self.max_depth = max_depth  # max nested call depth (None means unbounded)

        if tokens is None:
            tokens = SAMPLE_TOKENS if path == Session.SAMPLE else Session.load(path)
        self.tokenizer = Tokenizer(tokens)

        self.program = None
        self.resolved = False
        self.results = []

    @staticmethod
    def preprocess_line(line, line_num):
        """Converts a line of a token file to a Token. Returns None for blank and comment lines."""
        line = line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith(";;"):
            return None

        kind, __, text = line.lstrip().partition(" ")
        try:
            type_ = TokenType[kind.upper()]
        except KeyError:
            raise GenericException("line {}: '{}' is not a token kind", (str(line_num), kind), diagnosis=False)

        return Token(type_, text)

    @staticmethod
    def tokenize_lines(lines):
        """Returns Tokens for lines of a token file, terminated by an EOF token."""
        tokens = []
        for line_num, line in enumerate(lines):
            token = Session.preprocess_line(line, line_num + 1)
            if token is not None:
                tokens.append(token)

        if not tokens or tokens[-1].type is not TokenType.EOF:
            tokens.append(Token(TokenType.EOF))
        return tokens

    @staticmethod
    def load(path):
        try:
            with open(path, "r") as file:
                return Session.tokenize_lines(file)
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False)

    def parse(self):
        """Parses the token sequence into self.program. Warns about trailing tokens that no rule matched. Always parses
        from the first token, so it can be called again after run.
        """
        self.tokenizer.rewind(0)
        self.program = Parser(self.tokenizer, self.error_handler).parse_program()
        self.resolved = False

        if not self.tokenizer.at_end():
            expr, start, end = self.tokenizer.render()
            self.error_handler.warn("'{}' has unparsed tokens starting at '{}'", (expr, str(self.tokenizer.peek())),
                                    start=start, end=end)

        return self.program

    def resolve(self):
        if self.program is None:
            self.parse()

        Resolver(self.program, self.error_handler).visit_program()
        self.resolved = True
        return self.program

    def dump(self):
        """Readable display of the parsed Program."""
        if self.program is None:
            self.parse()
        return self.program.display()

    def run(self):
        """Runs the program, parsing and resolving it first if needed. Returns the lines printed."""
        if not self.resolved:
            self.resolve()

        interpreter = Interpreter(self.program, self.error_handler, out=self.out, max_depth=self.max_depth)
        self.results = interpreter.run()
        return self.results
