"""JSON serialization/deserialization for Douro AST.

This module converts between Douro AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types and for the values embedded in the tree
(function literals). Decimal numbers are stored as strings so no
precision is lost.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from .ast import (
    Program,
    Assign,
    ExprStmt,
    NumberLiteral,
    Literal,
    Lookup,
    FunctionCall,
    PrintExpr,
    BinaryOp,
)
from .types import Number, Function


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    # Values
    if isinstance(node, Number):
        return {"__value__": "Number", "value": str(node.value)}
    if isinstance(node, Function):
        return {
            "__value__": "Function",
            "params": list(node.params),
            "body": [ast_to_obj(s) for s in node.body],
        }

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": node.name, "expr": ast_to_obj(node.expr)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, NumberLiteral):
        return {"type": "NumberLiteral", "text": node.text}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value)}
    if isinstance(node, Lookup):
        return {"type": "Lookup", "name": node.name, "line": node.line, "column": node.column}
    if isinstance(node, FunctionCall):
        return {
            "type": "FunctionCall",
            "name": node.name,
            "args": [ast_to_obj(a) for a in node.args],
            "line": node.line,
            "column": node.column,
        }
    if isinstance(node, PrintExpr):
        return {"type": "PrintExpr", "expr": ast_to_obj(node.expr)}
    if isinstance(node, BinaryOp):
        return {
            "type": "BinaryOp",
            "op": node.op,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
            "line": node.line,
            "column": node.column,
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    v = obj.get("__value__")
    if v == "Number":
        return Number(Decimal(obj["value"]))
    if v == "Function":
        return Function(
            params=tuple(obj["params"]),
            body=tuple(ast_from_obj(s) for s in obj["body"]),
        )
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "Assign":
        return Assign(name=obj["name"], expr=ast_from_obj(obj["expr"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "NumberLiteral":
        return NumberLiteral(text=obj["text"])
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]))
    if t == "Lookup":
        return Lookup(name=obj["name"], line=obj.get("line"), column=obj.get("column"))
    if t == "FunctionCall":
        return FunctionCall(
            name=obj["name"],
            args=[ast_from_obj(a) for a in obj["args"]],
            line=obj.get("line"),
            column=obj.get("column"),
        )
    if t == "PrintExpr":
        return PrintExpr(expr=ast_from_obj(obj["expr"]))
    if t == "BinaryOp":
        return BinaryOp(
            op=obj["op"],
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
            line=obj.get("line"),
            column=obj.get("column"),
        )

    raise ValueError(f"Unknown AST node type: {t}")
