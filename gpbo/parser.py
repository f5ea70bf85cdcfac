# gpbo/parser.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Parser for kernel and mean expressions.

Grammar (whitespace is ignored)::

    expr  := IDENT [ '(' expr (',' expr)* ')' ]
    IDENT := [A-Za-z_][A-Za-z0-9_]*

Examples: ``kSEISO``, ``kSum(kSEISO, kConst)``,
``mSum(mConst, mLinear)``.
"""
import re
from typing import NamedTuple, Tuple

from gpbo.errors import StructureError

_TOKEN = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_]*)|(.))")


class Expression(NamedTuple):
    """Node of a parsed expression tree."""

    name: str
    args: Tuple["Expression", ...] = ()

    def __str__(self):
        if not self.args:
            return self.name
        return f"{self.name}({', '.join(str(a) for a in self.args)})"


def _tokenize(text):
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        m = _TOKEN.match(text, pos)
        ident, other = m.group(1), m.group(2)
        if ident is not None:
            tokens.append(("ident", ident, m.start(1)))
        elif other in "(),":
            tokens.append((other, other, m.start(2)))
        else:
            raise StructureError(f"unexpected character {other!r} at position {m.start(2)}")
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, text):
        self.text = text
        self.tokens = _tokenize(text)
        self.i = 0

    def peek(self):
        return self.tokens[self.i][0] if self.i < len(self.tokens) else None

    def expect(self, kind):
        if self.peek() != kind:
            where = self.tokens[self.i][2] if self.i < len(self.tokens) else len(self.text)
            found = self.tokens[self.i][1] if self.i < len(self.tokens) else "end of input"
            raise StructureError(
                f"expected {kind!r} at position {where} in {self.text!r}, found {found!r}"
            )
        tok = self.tokens[self.i]
        self.i += 1
        return tok

    def expr(self):
        name = self.expect("ident")[1]
        if self.peek() != "(":
            return Expression(name)
        self.expect("(")
        args = [self.expr()]
        while self.peek() == ",":
            self.expect(",")
            args.append(self.expr())
        self.expect(")")
        return Expression(name, tuple(args))


def parse_expression(text: str) -> Expression:
    """Parse a kernel or mean expression.

    Parameters
    ----------
    text : str
        Expression such as ``"kSum(kSEISO, kConst)"``.

    Returns
    -------
    Expression
        Root of the expression tree.

    Raises
    ------
    StructureError
        If the text is empty or syntactically malformed.
    """
    if not isinstance(text, str) or not text.strip():
        raise StructureError("empty expression")
    p = _Parser(text)
    tree = p.expr()
    if p.i != len(p.tokens):
        raise StructureError(
            f"unexpected trailing input at position {p.tokens[p.i][2]} in {text!r}"
        )
    return tree
