# Douro language package
# This package provides a parser and tree-walking interpreter for the Douro language.
from .errors import (
    DouroError, LexicalError, ParseError, UnboundNameError,
    OperandTypeError, DouroArithmeticError, DivisionByZeroError, ArityError,
)
from .environment import Environment
from .interpreter import run_program, run_file, Interpreter
from .parser import parse, parse_program
from .lexer import tokenize

__all__ = [
    'run_program',
    'run_file',
    'parse',
    'parse_program',
    'tokenize',
    'Interpreter',
    'Environment',
    'DouroError',
    'LexicalError',
    'ParseError',
    'UnboundNameError',
    'OperandTypeError',
    'DouroArithmeticError',
    'DivisionByZeroError',
    'ArityError',
]
