# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

r"""Parser for license expression strings.

Turns the string form produced by ``str(expr)`` back into a
:mod:`~spdxrdf.license_expr` tree.

Grammar::

    expression  = and_expr ("OR" and_expr)*
    and_expr    = simple_expr ("AND" simple_expr)*
    simple_expr = "(" expression ")" / "NONE" / "NOASSERTION" / idstring
    idstring    = 1*(ALPHA / DIGIT / "-" / "." / "+")

Operator precedence (tightest to loosest)::

    AND  >  OR

Operators are matched case-insensitively (``AND``, ``and``, ``aNd``).
A chain of the same operator at one parenthesis level becomes one set,
so ``A AND B AND C`` is a single
:class:`~spdxrdf.license_expr.ConjunctiveSet` with three members.
Parentheses always keep their own set: ``(A AND B) AND C`` is a set of
two members, the first of which is ``(A AND B)``.  This makes
``str(expr)`` parse back to an equal expression.  A one-member set
renders as ``(A)``, which reads back as the bare leaf ``A``.

Identifiers carry no metadata of their own, so each one is looked up in
a caller-supplied table of known leaf licenses.

Usage::

    from spdxrdf.expression_parser import parse_license_expression

    known = {lic.id: lic for lic in (mit, custom)}
    expr = parse_license_expression('MIT OR (LicenseRef-1 AND NONE)', known)
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from spdxrdf._types import Sentinel
from spdxrdf.errors import ConstructionError
from spdxrdf.license_expr import AnyLicense, ConjunctiveSet, DisjunctiveSet, LeafLicense

__all__ = [
    'ParseError',
    'parse_license_expression',
]


class ParseError(ConstructionError):
    """Raised when a license expression string cannot be parsed.

    Attributes:
        expression: The original expression string.
        position: Character offset where the error was detected.
        detail: Human-readable description of the problem.
    """

    def __init__(self, expression: str, position: int, detail: str) -> None:
        """Initialize with expression text, error position, and detail message."""
        self.expression = expression
        self.position = position
        self.detail = detail
        marker = ' ' * position + '^'
        super().__init__(f'license expression error at position {position}: {detail}\n  {expression}\n  {marker}')


_TOKEN_RE = re.compile(
    r"""
    (?:
        ((?i:AND))(?![A-Za-z0-9.\-+:])  # group 1: AND operator
      | ((?i:OR))(?![A-Za-z0-9.\-+:])   # group 2: OR operator
      | (\()                            # group 3: left paren
      | (\))                            # group 4: right paren
      | ([A-Za-z0-9.\-+:]+)             # group 5: idstring
    )
    """,
    re.VERBOSE,
)

_TOK_AND = 'AND'
_TOK_OR = 'OR'
_TOK_LPAREN = '('
_TOK_RPAREN = ')'
_TOK_ID = 'ID'
_TOK_EOF = 'EOF'


@dataclass
class _Token:
    kind: str
    value: str
    pos: int


def _tokenize(expr: str) -> list[_Token]:
    """Tokenize a license expression string."""
    tokens: list[_Token] = []
    pos = 0
    while pos < len(expr):
        if expr[pos].isspace():
            pos += 1
            continue
        m = _TOKEN_RE.match(expr, pos)
        if m is None:
            raise ParseError(expr, pos, f'unexpected character {expr[pos]!r}')
        if m.group(1):
            tokens.append(_Token(_TOK_AND, 'AND', m.start(1)))
        elif m.group(2):
            tokens.append(_Token(_TOK_OR, 'OR', m.start(2)))
        elif m.group(3):
            tokens.append(_Token(_TOK_LPAREN, '(', m.start(3)))
        elif m.group(4):
            tokens.append(_Token(_TOK_RPAREN, ')', m.start(4)))
        else:
            tokens.append(_Token(_TOK_ID, m.group(5), m.start(5)))
        pos = m.end()
    tokens.append(_Token(_TOK_EOF, '', len(expr)))
    return tokens


class _Parser:
    """Recursive descent parser producing one license set per chain."""

    def __init__(self, expr: str, tokens: list[_Token], known: Mapping[str, LeafLicense]) -> None:
        self._expr = expr
        self._tokens = tokens
        self._known = known
        self._pos = 0

    def peek(self) -> _Token:
        return self._tokens[self._pos]

    def _advance(self) -> _Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def _expect(self, kind: str) -> _Token:
        tok = self.peek()
        if tok.kind != kind:
            raise ParseError(self._expr, tok.pos, f'expected {kind}, got {tok.kind} ({tok.value!r})')
        return self._advance()

    # expression = and_expr ("OR" and_expr)*
    def parse_expression(self) -> AnyLicense:
        operands = [self._parse_and_expr()]
        while self.peek().kind == _TOK_OR:
            self._advance()
            operands.append(self._parse_and_expr())
        if len(operands) == 1:
            return operands[0]
        return DisjunctiveSet(operands)

    # and_expr = simple_expr ("AND" simple_expr)*
    def _parse_and_expr(self) -> AnyLicense:
        operands = [self._parse_simple_expr()]
        while self.peek().kind == _TOK_AND:
            self._advance()
            operands.append(self._parse_simple_expr())
        if len(operands) == 1:
            return operands[0]
        return ConjunctiveSet(operands)

    # simple_expr = "(" expression ")" / "NONE" / "NOASSERTION" / idstring
    def _parse_simple_expr(self) -> AnyLicense:
        tok = self.peek()
        if tok.kind == _TOK_LPAREN:
            self._advance()
            node = self.parse_expression()
            self._expect(_TOK_RPAREN)
            return node
        if tok.kind == _TOK_ID:
            self._advance()
            return self._resolve(tok)
        raise ParseError(
            self._expr,
            tok.pos,
            f'expected license identifier or "(", got {tok.kind} ({tok.value!r})',
        )

    def _resolve(self, tok: _Token) -> AnyLicense:
        if tok.value in Sentinel.__members__:
            return Sentinel[tok.value]
        leaf = self._known.get(tok.value)
        if leaf is None:
            raise ParseError(self._expr, tok.pos, f'unknown license id {tok.value!r}')
        return leaf


def parse_license_expression(expression: str, known: Mapping[str, LeafLicense]) -> AnyLicense:
    """Parse a license expression string.

    Args:
        expression: Expression text (e.g. ``"(MIT AND LicenseRef-1)"``).
        known: Leaf licenses by id; every identifier in *expression*
            other than ``NONE`` / ``NOASSERTION`` must be a key.

    Returns:
        The root of the parsed expression.

    Raises:
        ParseError: If the text is empty, malformed, or names an
            unknown license id.
    """
    stripped = expression.strip()
    if not stripped:
        raise ParseError(expression, 0, 'empty expression')
    parser = _Parser(stripped, _tokenize(stripped), known)
    result = parser.parse_expression()
    end_tok = parser.peek()
    if end_tok.kind != _TOK_EOF:
        raise ParseError(
            stripped,
            end_tok.pos,
            f'unexpected token after expression: {end_tok.kind} ({end_tok.value!r})',
        )
    return result
