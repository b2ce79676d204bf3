"""Parser for the Douro language.

A hand-written recursive-descent parser over the tokens produced by
`douro.lexer.tokenize`. Arithmetic precedence is encoded in the call
structure: `parse_expression` handles `+`/`-`, `parse_term` handles
`*`/`/`, and `parse_primary` handles everything that binds tighter
(numbers, grouping, lookups, calls, `print` and function literals). Both
binary levels are left-associative.

Newlines terminate statements at the top level and inside a function
body, but are insignificant inside grouping parentheses, argument lists
and parameter lists. The parser tracks this with a stack of modes; when
newlines are insignificant `peek` simply steps over them.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import List, Optional, Union

from .ast import (
    Program, Assign, ExprStmt, NumberLiteral, Literal, Lookup,
    FunctionCall, PrintExpr, BinaryOp, Node
)
from .errors import ParseError
from .lexer import Token, tokenize
from .types import Function


SEPARATORS = ('NEWLINE', ';')


def describe(token: Token) -> str:
    if token.type == 'NEWLINE':
        return 'end of line'
    return f"{token.type} {token.value!r}"


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.newline_modes: List[bool] = [True]

    @contextmanager
    def newlines(self, significant: bool):
        self.newline_modes.append(significant)
        try:
            yield
        finally:
            self.newline_modes.pop()

    def peek(self) -> Optional[Token]:
        if not self.newline_modes[-1]:
            while self.pos < len(self.tokens) and self.tokens[self.pos].type == 'NEWLINE':
                self.pos += 1
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    @staticmethod
    def is_a(token: Token, expected: str) -> bool:
        # Token types match by name, fixed symbols and keywords by their text
        if token.type == expected:
            return True
        return token.type in ('KEYWORD', 'OPERATOR', 'PUNCT') and token.value == expected

    def match(self, expected: Union[str, List[str]]) -> bool:
        token = self.peek()
        if token is None:
            return False
        if isinstance(expected, list):
            return any(self.is_a(token, e) for e in expected)
        return self.is_a(token, expected)

    def consume(self, expected: Union[str, List[str]]) -> Token:
        token = self.peek()
        if token is None:
            raise ParseError(f"unexpected end of input, expected {expected}")
        if not self.match(expected):
            raise ParseError(f"expected {expected}, got {describe(token)}", token.line, token.column)
        self.pos += 1
        return token

    def skip_separators(self):
        while self.match(list(SEPARATORS)):
            self.pos += 1

    def parse_program(self) -> Program:
        return Program(self.parse_statements(closing=None))

    def parse_statements(self, closing: Optional[str]) -> List[Node]:
        """Parse separator-delimited statements up to `closing` (or end of input)."""
        statements: List[Node] = []
        while True:
            self.skip_separators()
            if self.at_block_end(closing):
                return statements
            statements.append(self.parse_statement())
            if self.at_block_end(closing):
                return statements
            if not self.match(list(SEPARATORS)):
                token = self.peek()
                raise ParseError(f"expected end of statement, got {describe(token)}", token.line, token.column)

    def at_block_end(self, closing: Optional[str]) -> bool:
        if self.peek() is None:
            return True
        return closing is not None and self.match(closing)

    def parse_statement(self) -> Node:
        token = self.peek()
        following = self.tokens[self.pos + 1] if self.pos + 1 < len(self.tokens) else None
        if token.type == 'IDENT' and following is not None and self.is_a(following, '='):
            self.consume('IDENT')
            self.consume('=')
            return Assign(token.value, self.parse_expression())
        return ExprStmt(self.parse_expression())

    def parse_expression(self) -> Node:
        node = self.parse_term()
        while self.match(['+', '-']):
            op_token = self.consume(['+', '-'])
            right = self.parse_term()
            node = BinaryOp(op_token.value, node, right, op_token.line, op_token.column)
        return node

    def parse_term(self) -> Node:
        node = self.parse_primary()
        while self.match(['*', '/']):
            op_token = self.consume(['*', '/'])
            right = self.parse_primary()
            node = BinaryOp(op_token.value, node, right, op_token.line, op_token.column)
        return node

    def parse_primary(self) -> Node:
        token = self.peek()
        if token is None:
            raise ParseError("unexpected end of input in expression")
        if token.type == 'NUMBER':
            self.consume('NUMBER')
            return NumberLiteral(token.value)
        if token.type == 'IDENT':
            self.consume('IDENT')
            if self.match('('):
                return FunctionCall(token.value, self.parse_arguments(), token.line, token.column)
            return Lookup(token.value, token.line, token.column)
        if self.is_a(token, 'print'):
            self.consume('print')
            return PrintExpr(self.parse_expression())
        if self.is_a(token, 'function'):
            return self.parse_function()
        # Grouping
        if self.is_a(token, '('):
            with self.newlines(False):
                self.consume('(')
                expr = self.parse_expression()
                self.consume(')')
            return expr
        raise ParseError(f"unexpected token {describe(token)}", token.line, token.column)

    def parse_arguments(self) -> List[Node]:
        args: List[Node] = []
        with self.newlines(False):
            self.consume('(')
            if not self.match(')'):
                args.append(self.parse_expression())
                while self.match(','):
                    self.consume(',')
                    args.append(self.parse_expression())
            self.consume(')')
        return args

    def parse_function(self) -> Literal:
        # function ( params ) ( statements )
        self.consume('function')
        params: List[str] = []
        with self.newlines(False):
            self.consume('(')
            if not self.match(')'):
                params.append(self.parse_param(params))
                while self.match(','):
                    self.consume(',')
                    params.append(self.parse_param(params))
            self.consume(')')
            self.consume('(')
        with self.newlines(True):
            body = self.parse_statements(closing=')')
        self.consume(')')
        return Literal(Function(tuple(params), tuple(body)))

    def parse_param(self, seen: List[str]) -> str:
        name_token = self.consume('IDENT')
        if name_token.value in seen:
            raise ParseError(f"duplicate parameter {name_token.value!r}", name_token.line, name_token.column)
        return name_token.value


def parse(tokens: List[Token]) -> Program:
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse Douro source code into a Program AST."""
    return parse(tokenize(source))
