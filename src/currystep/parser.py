"""Surface syntax of lambda terms.

```
term := variable
      | "(" term ")"
      | "#" variable "->" term
      | term term+
```

Applications associate to the left (`a b c` is `(a b) c`) and lambda bodies extend as far
right as possible (`#x -> a b` is `#x -> (a b)`).
"""

import re
from collections import namedtuple
from functools import reduce

from .errors import ParseError
from .term import Abstraction, Application, Identifier, Term, Variable

__all__ = ["Token", "tokenize", "parse"]

LAMBDA, ARROW, LPAREN, RPAREN, NAME, EOF = "#", "->", "(", ")", "name", "eof"

Token = namedtuple("Token", ["kind", "value", "position"])

_TOKEN = re.compile(r"(->)|([()#])|([A-Za-z_][A-Za-z0-9_']*)")
_SPACE = re.compile(r"\s*")


def tokenize(text: str) -> list[Token]:
    toks = []
    pos = _SPACE.match(text).end()
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        if m is None:
            raise ParseError(f"unexpected character {text[pos]!r}", text, pos)
        arrow, punct, name = m.groups()
        if name is not None:
            toks.append(Token(NAME, name, pos))
        else:
            symbol = arrow or punct
            toks.append(Token(symbol, symbol, pos))
        pos = _SPACE.match(text, m.end()).end()
    toks.append(Token(EOF, None, len(text)))
    return toks


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.toks = tokenize(text)
        self.pos = 0

    def peek(self) -> Token:
        return self.toks[self.pos]

    def error(self, message: str) -> ParseError:
        tok = self.peek()
        found = "end of input" if tok.kind == EOF else repr(tok.value)
        return ParseError(f"{message}, found {found}", self.text, tok.position)

    def expect(self, kind: str, what: str) -> Token:
        tok = self.peek()
        if tok.kind != kind:
            raise self.error(f"expected {what}")
        self.pos += 1
        return tok

    def abstraction(self) -> Term:
        self.expect(LAMBDA, "'#'")
        name = self.expect(NAME, "a parameter name").value
        self.expect(ARROW, "'->'")
        return Abstraction(Identifier.named(name), self.term())

    def atom(self):
        kind = self.peek().kind
        if kind == NAME:
            return Variable(Identifier.named(self.expect(NAME, "a name").value))
        if kind == LPAREN:
            self.pos += 1
            inner = self.term()
            self.expect(RPAREN, "')'")
            return inner
        return None

    def term(self) -> Term:
        items = []
        while True:
            if self.peek().kind == LAMBDA:
                # the body takes everything up to the closing paren
                items.append(self.abstraction())
                break
            atom = self.atom()
            if atom is None:
                break
            items.append(atom)
        if not items:
            raise self.error("expected a term")
        return reduce(Application, items)

    def parse(self) -> Term:
        result = self.term()
        self.expect(EOF, "end of input")
        return result


def parse(text: str) -> Term:
    """
    Read a term from its surface syntax.

    Raises:
        ParseError: if `text` is not a well-formed term
    """
    return _Parser(text).parse()
