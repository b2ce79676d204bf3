from typing import Optional


class DouroError(Exception):
    """Base exception for every failure raised while lexing, parsing or running Douro code."""
    kind = 'DouroError'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        text = f"{self.kind}: {message}"
        if line is not None:
            text += f" at {line}:{column}"
        super().__init__(text)
        self.message = message
        self.line = line
        self.column = column


class LexicalError(DouroError):
    kind = 'LexicalError'


class ParseError(DouroError):
    kind = 'SyntaxError'


class UnboundNameError(DouroError):
    kind = 'UnboundNameError'


class OperandTypeError(DouroError):
    """Arithmetic on a non-number, or a call whose target is not a function."""
    kind = 'TypeError'


class DouroArithmeticError(DouroError):
    """A numeric result that cannot be represented, such as a decimal overflow."""
    kind = 'ArithmeticError'


class DivisionByZeroError(DouroArithmeticError):
    pass


class ArityError(DouroError):
    kind = 'ArityError'
