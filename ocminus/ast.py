"""Abstract Syntax Tree (AST) definitions for the OCaml- language.

The AST classes defined in this module represent the syntactic structure
of parsed OCaml- programs. They are plain immutable data: the parser
builds them and the interpreter walks them. Each node corresponds to a
construct in the OCaml- grammar.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class UnaryOperator(Enum):
    NEG = 'Neg'
    NOT = 'Not'


class BinaryOperator(Enum):
    PLUS = 'Plus'
    MINUS = 'Minus'
    TIMES = 'Times'
    DIV = 'Div'
    MOD = 'Mod'
    AND = 'And'
    OR = 'Or'
    EQ = 'Eq'
    NE = 'Ne'
    LT = 'Lt'
    LE = 'Le'
    GT = 'Gt'
    GE = 'Ge'


ARITHMETIC_OPS = frozenset({
    BinaryOperator.PLUS, BinaryOperator.MINUS, BinaryOperator.TIMES,
    BinaryOperator.DIV, BinaryOperator.MOD,
})
BOOLEAN_OPS = frozenset({BinaryOperator.AND, BinaryOperator.OR})
EQUALITY_OPS = frozenset({BinaryOperator.EQ, BinaryOperator.NE})
ORDERING_OPS = frozenset({
    BinaryOperator.LT, BinaryOperator.LE, BinaryOperator.GT, BinaryOperator.GE,
})


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Num(Expr):
    value: int


@dataclass(frozen=True)
class Bool(Expr):
    value: bool


@dataclass(frozen=True)
class Var(Expr):
    name: str


@dataclass(frozen=True)
class Unop(Expr):
    op: UnaryOperator
    operand: Expr


@dataclass(frozen=True)
class Binop(Expr):
    op: BinaryOperator
    left: Expr
    right: Expr


@dataclass(frozen=True)
class If(Expr):
    cond: Expr
    then_branch: Expr
    else_branch: Expr


@dataclass(frozen=True)
class Let(Expr):
    name: str
    bound: Expr
    body: Expr


@dataclass(frozen=True)
class Fun(Expr):
    params: Tuple[str, ...]
    body: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr  # only Var callees are evaluated
    args: Tuple[Expr, ...]


@dataclass(frozen=True)
class FunDef:
    name: str
    params: Tuple[str, ...]
    body: Expr


@dataclass(frozen=True)
class Program:
    fundefs: Tuple[FunDef, ...]
    main: Expr
