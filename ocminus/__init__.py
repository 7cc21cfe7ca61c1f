# OCaml- language package
# This package provides a parser and interpreter for the OCaml- language.
from .errors import (
    OcminusError, LexError, ParseError, UnboundVariable, UndefinedFunction,
    TypeMismatch, DivisionByZero,
)
from .interpreter import Interpreter, evaluate, exec_program, eval_source, run_program
from .parser import parse_expression, parse_program
from .types import IntVal, BoolVal, to_string

__all__ = [
    'Interpreter',
    'evaluate',
    'exec_program',
    'eval_source',
    'run_program',
    'parse_expression',
    'parse_program',
    'IntVal',
    'BoolVal',
    'to_string',
    'OcminusError',
    'LexError',
    'ParseError',
    'UnboundVariable',
    'UndefinedFunction',
    'TypeMismatch',
    'DivisionByZero',
]
