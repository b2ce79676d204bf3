"""Tokenizer for the Douro language.

The terminal definitions live in a small Lark grammar and the scanning is
done by Lark's `basic` lexer, which gives us line/column tracking and a
precise error for any character the language does not know. The grammar's
only rule accepts any sequence of tokens; it exists so that Lark keeps
every terminal, the parser itself is the hand-written one in
`douro.parser`.

Lark tokens are converted into the `Token` dataclass below, so the parser
never depends on Lark types. Identifiers that spell a reserved word are
reported as `KEYWORD` tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexicalError


KEYWORDS = frozenset({'print', 'function'})


DOURO_TOKENS = r"""
    start: _token*
    _token: NUMBER | NAME | OPERATOR | PUNCT | NEWLINE

    NUMBER: /\d+(\.\d+)?/
    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    OPERATOR: "+" | "-" | "*" | "/"
    PUNCT: "=" | "(" | ")" | "," | ";"
    NEWLINE: /\n/

    %import common.WS_INLINE
    %ignore WS_INLINE

    COMMENT: /#[^\n]*/
    %ignore COMMENT
"""


DOURO_LEXER = Lark(
    DOURO_TOKENS,
    parser='lalr',
    lexer='basic',
)


# Lark terminal name -> Douro token type
TOKEN_TYPES = {
    'NUMBER': 'NUMBER',
    'NAME': 'IDENT',
    'OPERATOR': 'OPERATOR',
    'PUNCT': 'PUNCT',
    'NEWLINE': 'NEWLINE',
}


@dataclass
class Token:
    type: str
    value: str
    line: int
    column: int


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Whitespace and `#` comments are dropped; newlines are kept because
    they separate statements. Raises `LexicalError` on the first
    character that does not start any token.
    """
    # \r\n and bare \r line endings both count as a single newline
    source = source.replace('\r\n', '\n').replace('\r', '\n')
    tokens: List[Token] = []
    try:
        for tok in DOURO_LEXER.lex(source):
            kind = TOKEN_TYPES[tok.type]
            if kind == 'IDENT' and tok.value in KEYWORDS:
                kind = 'KEYWORD'
            tokens.append(Token(kind, str(tok.value), tok.line, tok.column))
    except UnexpectedCharacters as e:
        raise LexicalError(f"unexpected character {e.char!r}", e.line, e.column) from None
    return tokens
