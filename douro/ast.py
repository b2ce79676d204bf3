"""Abstract Syntax Tree (AST) definitions for the Douro language.

The AST classes defined in this module represent the syntactic structure
of parsed Douro programs. A program is a list of statements; statements
and expressions are separate families of nodes. Runtime values (see
`douro.types`) appear in the tree only wrapped in a `Literal` node, which
is how the parser represents function literals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Any


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


# Statements

@dataclass
class Assign(Node):
    name: str
    expr: Node


@dataclass
class ExprStmt(Node):
    expr: Node


# Expressions

@dataclass
class NumberLiteral(Node):
    text: str  # decimal literal exactly as written


@dataclass
class Literal(Node):
    value: Any  # Number or Function


@dataclass
class Lookup(Node):
    name: str
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class FunctionCall(Node):
    name: str
    args: List[Node]
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class PrintExpr(Node):
    expr: Node


@dataclass
class BinaryOp(Node):
    op: str
    left: Node
    right: Node
    line: Optional[int] = None
    column: Optional[int] = None
