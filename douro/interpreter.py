"""Interpreter for the Douro language.

This module implements the tree-walking evaluator: statements of a
`Program` are executed in order against an `Environment`, expressions
are evaluated recursively, and function calls run their body in a fresh
call scope. Printed output goes to a pluggable text sink so that callers
(and tests) can capture it; by default it is the built-in `print`.
"""

from __future__ import annotations

from decimal import DecimalException
from typing import Any, Callable, List, Optional, Sequence

from .ast import (
    Program, Assign, ExprStmt, NumberLiteral, Literal, Lookup,
    FunctionCall, PrintExpr, BinaryOp, Node
)
from .environment import Environment
from .errors import ArityError, DivisionByZeroError, DouroArithmeticError, OperandTypeError
from .parser import parse_program
from .types import DECIMAL_CONTEXT, Function, Number, to_string, type_name


class Interpreter:
    """Core interpreter that executes Douro AST."""
    def __init__(self, output: Optional[Callable[[str], None]] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.global_env = Environment()
        self.output = output if output is not None else print
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> None:
        if env is None:
            env = self.global_env
        for stmt in program.body:
            if self.debug_level >= 1:
                self.debug(f"execute {type(stmt).__name__}")
            self.execute(stmt, env)

    def execute_block(self, statements: Sequence[Node], env: Environment) -> Any:
        """Run statements in order; the value of the last one is the block's value."""
        result: Any = Number.zero()
        for stmt in statements:
            result = self.execute(stmt, env)
        return result

    def execute(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Assign):
            value = self.evaluate(node.expr, env)
            env.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name} = {to_string(value)} (depth {env.depth})")
            return value
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr, env)
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, NumberLiteral):
            return Number.parse(node.text)
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, (Number, Function)):
            return node
        if isinstance(node, Lookup):
            return env.lookup(node.name, node.line, node.column)
        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            result = self.apply_binary_op(node, left, right)
            if self.debug_level >= 3:
                self.debug(f"{to_string(left)} {node.op} {to_string(right)} -> {to_string(result)}")
            return result
        if isinstance(node, PrintExpr):
            value = self.evaluate(node.expr, env)
            self.output(to_string(value))
            return value
        if isinstance(node, FunctionCall):
            func = env.lookup(node.name, node.line, node.column)
            if not isinstance(func, Function):
                raise OperandTypeError(f"{node.name} is a {type_name(func)}, not a Function", node.line, node.column)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(node, func, args, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, node: FunctionCall, func: Function, args: List[Any], env: Environment) -> Any:
        if len(args) != len(func.params):
            raise ArityError(
                f"{node.name} expects {len(func.params)} arguments, got {len(args)}", node.line, node.column)
        if self.debug_level >= 1:
            self.debug(f"call {node.name}({', '.join(to_string(a) for a in args)})")
        with env.scope():
            for param, arg in zip(func.params, args):
                env.define(param, arg)
            result = self.execute_block(func.body, env)
        if self.debug_level >= 1:
            self.debug(f"return {node.name} -> {to_string(result)}")
        return result

    def apply_binary_op(self, node: BinaryOp, a: Any, b: Any) -> Number:
        op = node.op
        if not isinstance(a, Number) or not isinstance(b, Number):
            raise OperandTypeError(
                f'unsupported {op} for {type_name(a)} and {type_name(b)}', node.line, node.column)
        try:
            if op == '+':
                return Number(DECIMAL_CONTEXT.add(a.value, b.value))
            if op == '-':
                return Number(DECIMAL_CONTEXT.subtract(a.value, b.value))
            if op == '*':
                return Number(DECIMAL_CONTEXT.multiply(a.value, b.value))
            if op == '/':
                if b.value.is_zero():
                    raise DivisionByZeroError('division by zero', node.line, node.column)
                return Number(DECIMAL_CONTEXT.divide(a.value, b.value))
        except DecimalException as e:
            raise DouroArithmeticError(
                f'{op} result out of range ({type(e).__name__})', node.line, node.column) from None
        raise OperandTypeError(f'unknown operator {op}', node.line, node.column)


def run_program(source: str, output: Optional[Callable[[str], None]] = None,
                debug_level: int = 0) -> Environment:
    """Convenience function to parse and run a Douro program from source string.

    Returns the global environment left behind by the run.
    """
    ast_program = parse_program(source)
    interpreter = Interpreter(output=output, debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    finally:
        interpreter.close()
    return interpreter.global_env


def run_file(file_path: str, output: Optional[Callable[[str], None]] = None,
             debug_level: int = 0) -> Interpreter:
    """Parse and execute a Douro file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    ast_program = parse_program(source)
    interpreter = Interpreter(output=output, debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    finally:
        interpreter.close()
    return interpreter
