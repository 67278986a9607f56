"""Token source for funlang. Lexing is not done here: tokens are supplied pre-built (see lang/session.py for the token
file format) and the Tokenizer only provides a rewindable cursor over them.

```
<token> ::= IDENTIFIER <text>   ; function names, including the intrinsic "println"
          | KEYWORD <text>      ; only "fun"
          | SEPARATOR <text>    ; one of "(", ")", "{", "}", ","
          | STRING <text>       ; string literal, without surrounding quotes
          | EOF                 ; must terminate every token sequence
```
"""

from dataclasses import dataclass
from enum import Enum

from funlang.lang.error import GenericException


class TokenType(Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    SEPARATOR = "separator"
    STRING = "string"
    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """A single token: kind plus literal text."""
    type: TokenType
    value: str = ""

    def is_(self, type_, value=None):
        """Whether or not this token has kind type_ (and text value, if given)."""
        return self.type is type_ and (value is None or self.value == value)

    def __str__(self):
        if self.type is TokenType.STRING:
            return f'"{self.value}"'
        if self.type is TokenType.EOF:
            return "<eof>"
        return self.value


class Tokenizer:
    """Cursor over a finite token sequence. Reading past the final EOF token keeps returning it, so callers are
    expected to use position/rewind rather than rely on next() failing.
    """

    def __init__(self, tokens):
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            raise GenericException("token sequence must end with an EOF token", diagnosis=False)

        self._position = 0

    def next(self):
        """Returns the token at the cursor and advances the cursor (never past the EOF token)."""
        token = self.tokens[self._position]
        if self._position < len(self.tokens) - 1:
            self._position += 1
        return token

    def peek(self):
        """Returns the token at the cursor without advancing."""
        return self.tokens[self._position]

    def position(self):
        return self._position

    def rewind(self, position):
        """Resets the cursor to a value previously returned by position()."""
        assert 0 <= position < len(self.tokens), f"{position} is not a valid token position"
        self._position = position

    def at_end(self):
        """Whether or not the cursor sits on the final EOF token (an EOF earlier in the sequence does not count)."""
        return self._position == len(self.tokens) - 1

    def render(self, position=None):
        """Renders the token stream as space-separated text. Returns (text, start, end), where start and end delimit
        the token at position (defaults to the cursor) within text.
        """
        if position is None:
            position = self._position

        text, start, end = "", 0, 0
        for idx, token in enumerate(self.tokens):
            if idx:
                text += " "
            if idx == position:
                start = len(text)
            text += str(token)
            if idx == position:
                end = len(text)

        return text, start, end

    def __repr__(self):
        return f"Tokenizer(position={self._position}, tokens={len(self.tokens)})"


def _sample():
    """Tokens for:

    fun foo(){}
    fun sayHello(){
        foo()
        println("hello, world!")
    }
    sayHello()
    println("first","second","three")
    """
    ident, keyword, sep, string = TokenType.IDENTIFIER, TokenType.KEYWORD, TokenType.SEPARATOR, TokenType.STRING

    return [
        Token(keyword, "fun"), Token(ident, "foo"), Token(sep, "("), Token(sep, ")"), Token(sep, "{"), Token(sep, "}"),
        Token(keyword, "fun"), Token(ident, "sayHello"), Token(sep, "("), Token(sep, ")"), Token(sep, "{"),
        Token(ident, "foo"), Token(sep, "("), Token(sep, ")"),
        Token(ident, "println"), Token(sep, "("), Token(string, "hello, world!"), Token(sep, ")"),
        Token(sep, "}"),
        Token(ident, "sayHello"), Token(sep, "("), Token(sep, ")"),
        Token(ident, "println"), Token(sep, "("),
        Token(string, "first"), Token(sep, ","), Token(string, "second"), Token(sep, ","), Token(string, "three"),
        Token(sep, ")"),
        Token(TokenType.EOF),
    ]


SAMPLE_TOKENS = tuple(_sample())
