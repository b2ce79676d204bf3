"""Indented, human-readable dump of a Douro AST, used for diagnostics."""

from __future__ import annotations

from typing import Any, List

from .ast import (
    Program, Assign, ExprStmt, NumberLiteral, Literal, Lookup,
    FunctionCall, PrintExpr, BinaryOp,
)
from .types import Number, Function, to_string


INDENT = '  '


def dump_tree(node: Any) -> str:
    lines: List[str] = []
    _dump(node, 0, lines)
    return '\n'.join(lines)


def _dump(node: Any, depth: int, lines: List[str]):
    pad = INDENT * depth
    if isinstance(node, Program):
        lines.append(pad + 'program:')
        for stmt in node.body:
            _dump(stmt, depth + 1, lines)
    elif isinstance(node, Assign):
        lines.append(pad + f'assign: {node.name}')
        _dump(node.expr, depth + 1, lines)
    elif isinstance(node, ExprStmt):
        lines.append(pad + 'expr:')
        _dump(node.expr, depth + 1, lines)
    elif isinstance(node, NumberLiteral):
        lines.append(pad + f'number: {node.text}')
    elif isinstance(node, Literal):
        _dump(node.value, depth, lines)
    elif isinstance(node, Number):
        lines.append(pad + f'number: {to_string(node)}')
    elif isinstance(node, Function):
        lines.append(pad + f"function ({', '.join(node.params)}) =>")
        for stmt in node.body:
            _dump(stmt, depth + 1, lines)
    elif isinstance(node, Lookup):
        lines.append(pad + f'lookup: {node.name}')
    elif isinstance(node, FunctionCall):
        lines.append(pad + f'call: {node.name}')
        for arg in node.args:
            _dump(arg, depth + 1, lines)
    elif isinstance(node, PrintExpr):
        lines.append(pad + 'print:')
        _dump(node.expr, depth + 1, lines)
    elif isinstance(node, BinaryOp):
        lines.append(pad + f'binary: {node.op}')
        _dump(node.left, depth + 1, lines)
        _dump(node.right, depth + 1, lines)
    else:
        raise TypeError(f"Unsupported node for dump: {type(node).__name__}")
