from typing import Optional


class OcminusError(Exception):
    """Base class for every error the OCaml- toolchain raises.

    `kind` is the name under which the error is reported and matched by
    test specifications.
    """
    kind = 'Error'

    def __init__(self, message: str):
        super().__init__(f"{self.kind}: {message}")
        self.message = message


class PositionedError(OcminusError):
    """An error located at a line/column of the source text."""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        if line is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)
        self.line = line
        self.column = column


class LexError(PositionedError):
    kind = 'LexError'


class ParseError(PositionedError):
    kind = 'ParseError'


class UnboundVariable(OcminusError):
    kind = 'UnboundVariable'

    def __init__(self, name: str):
        super().__init__(f"variable '{name}' used but not declared")
        self.name = name


class UndefinedFunction(OcminusError):
    kind = 'UndefinedFunction'

    def __init__(self, name: str):
        super().__init__(f"function '{name}' called but not defined")
        self.name = name


class TypeMismatch(OcminusError):
    """Operand/operator kind mismatch or arity mismatch."""
    kind = 'TypeError'


class DivisionByZero(OcminusError):
    kind = 'DivisionByZero'

    def __init__(self, message: str = 'division by zero'):
        super().__init__(message)
