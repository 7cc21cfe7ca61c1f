"""Interpreter for the OCaml- language.

This module implements a big-step, call-by-value evaluator over the AST
produced by `ocminus.parser`. Evaluation is a function of three inputs:
the program's function table (a read-only sequence of `FunDef`), a
persistent `Environment` of variable bindings and the expression to
evaluate. Subexpressions are evaluated eagerly, left to right.

Functions are not closures. A call evaluates the function body in an
environment holding only its parameters, so a variable bound at the call
site but not passed as an argument is unbound inside the body. Functions
may call themselves and each other because the whole function table is
visible to every call.

Errors are raised at the point of violation and propagate to the caller
unchanged; see `ocminus.errors` for the taxonomy.
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence, TextIO, Tuple

from .ast import (
    Expr, Num, Bool, Var, Unop, Binop, If, Let, Call, FunDef, Program,
    UnaryOperator, BinaryOperator,
    ARITHMETIC_OPS, BOOLEAN_OPS, EQUALITY_OPS, ORDERING_OPS,
)
from .environment import Environment
from .errors import UndefinedFunction, TypeMismatch, DivisionByZero
from .parser import parse_expression, parse_program
from .types import Value, IntVal, BoolVal, type_name, to_string


def find_fundef(fundefs: Sequence[FunDef], name: str) -> FunDef:
    """Return the first declaration named `name`."""
    for fundef in fundefs:
        if fundef.name == name:
            return fundef
    raise UndefinedFunction(name)


def truncated_divmod(a: int, b: int) -> Tuple[int, int]:
    """Integer division rounding toward zero; the remainder takes the sign of `a`."""
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


class Interpreter:
    """Core interpreter that evaluates OCaml- ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = None):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = None
        if debug_level > 0 and debug_file is not None:
            self.debug_fp = open(debug_file, 'w', encoding='utf-8')

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Value:
        if env is None:
            env = Environment.empty()
        try:
            self.debug(f"exec: {len(program.fundefs)} function(s)")
            result = self.evaluate(program.fundefs, env, program.main)
            self.debug(f"result: {result!r}")
            return result
        finally:
            self.close()

    def evaluate(self, fundefs: Sequence[FunDef], env: Environment, node: Expr) -> Value:
        if isinstance(node, Num):
            return IntVal(node.value)
        if isinstance(node, Bool):
            return BoolVal(node.value)
        if isinstance(node, Var):
            return env.lookup(node.name)
        if isinstance(node, Unop):
            operand = self.evaluate(fundefs, env, node.operand)
            return self.apply_unary_op(node.op, operand)
        if isinstance(node, Binop):
            # Both operands are always evaluated, including for && and ||.
            left = self.evaluate(fundefs, env, node.left)
            right = self.evaluate(fundefs, env, node.right)
            return self.apply_binary_op(node.op, left, right)
        if isinstance(node, If):
            cond = self.evaluate(fundefs, env, node.cond)
            if not isinstance(cond, BoolVal):
                raise TypeMismatch(f"if condition must be bool, got {type_name(cond)}")
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)}")
            branch = node.then_branch if cond.value else node.else_branch
            return self.evaluate(fundefs, env, branch)
        if isinstance(node, Let):
            bound = self.evaluate(fundefs, env, node.bound)
            if self.debug_level >= 3:
                self.debug(f"let {node.name} = {to_string(bound)}")
            return self.evaluate(fundefs, env.update(node.name, bound), node.body)
        if isinstance(node, Call) and isinstance(node.callee, Var):
            return self.call_function(fundefs, env, node.callee.name, node.args)
        if isinstance(node, Call):
            raise TypeMismatch('only named functions can be called')
        raise TypeMismatch(f"cannot evaluate {type(node).__name__} expression")

    def call_function(self, fundefs: Sequence[FunDef], env: Environment,
                      name: str, arg_nodes: Sequence[Expr]) -> Value:
        fundef = find_fundef(fundefs, name)
        args = [self.evaluate(fundefs, env, arg) for arg in arg_nodes]
        if len(args) != len(fundef.params):
            raise TypeMismatch(
                f"arity mismatch: {name} expects {len(fundef.params)} arguments, got {len(args)}"
            )
        if self.debug_level >= 2:
            self.debug(f"call {name}({', '.join(to_string(a) for a in args)})")
        # The body sees its parameters and nothing else.
        call_env = Environment.empty()
        for param, arg in zip(fundef.params, args):
            call_env = call_env.update(param, arg)
        return self.evaluate(fundefs, call_env, fundef.body)

    def apply_unary_op(self, op: UnaryOperator, operand: Value) -> Value:
        if op is UnaryOperator.NEG:
            if isinstance(operand, IntVal):
                return IntVal(-operand.value)
            raise TypeMismatch(f"unary - expects int, got {type_name(operand)}")
        if op is UnaryOperator.NOT:
            if isinstance(operand, BoolVal):
                return BoolVal(not operand.value)
            raise TypeMismatch(f"not expects bool, got {type_name(operand)}")
        raise TypeMismatch(f"unsupported unary operator {op}")

    def apply_binary_op(self, op: BinaryOperator, a: Value, b: Value) -> Value:
        if op in ARITHMETIC_OPS:
            if not (isinstance(a, IntVal) and isinstance(b, IntVal)):
                raise TypeMismatch(
                    f"{op.value} expects int operands, got {type_name(a)} and {type_name(b)}")
            x, y = a.value, b.value
            if op is BinaryOperator.PLUS:
                return IntVal(x + y)
            if op is BinaryOperator.MINUS:
                return IntVal(x - y)
            if op is BinaryOperator.TIMES:
                return IntVal(x * y)
            if y == 0:
                raise DivisionByZero('division by zero' if op is BinaryOperator.DIV else 'modulo by zero')
            quotient, remainder = truncated_divmod(x, y)
            return IntVal(quotient if op is BinaryOperator.DIV else remainder)
        if op in BOOLEAN_OPS:
            if not (isinstance(a, BoolVal) and isinstance(b, BoolVal)):
                raise TypeMismatch(
                    f"{op.value} expects bool operands, got {type_name(a)} and {type_name(b)}")
            if op is BinaryOperator.AND:
                return BoolVal(a.value and b.value)
            return BoolVal(a.value or b.value)
        if op in EQUALITY_OPS:
            if type(a) is not type(b):
                raise TypeMismatch(f"cannot compare {type_name(a)} with {type_name(b)}")
            equal = a.value == b.value
            return BoolVal(equal if op is BinaryOperator.EQ else not equal)
        if op in ORDERING_OPS:
            if not (isinstance(a, IntVal) and isinstance(b, IntVal)):
                raise TypeMismatch(
                    f"{op.value} expects int operands, got {type_name(a)} and {type_name(b)}")
            x, y = a.value, b.value
            if op is BinaryOperator.LT:
                return BoolVal(x < y)
            if op is BinaryOperator.LE:
                return BoolVal(x <= y)
            if op is BinaryOperator.GT:
                return BoolVal(x > y)
            return BoolVal(x >= y)
        raise TypeMismatch(f"unknown operator {op}")


def evaluate(fundefs: Sequence[FunDef], env: Environment, expr: Expr) -> Value:
    """Evaluate `expr` with no tracing."""
    return Interpreter().evaluate(fundefs, env, expr)


def exec_program(program: Program, debug_level: int = 0,
                 debug_file: Optional[str] = None) -> Value:
    """Evaluate the program's main expression under its function table."""
    interpreter = Interpreter(debug_level=debug_level, debug_file=debug_file)
    return interpreter.run(program)


def eval_source(source: str, debug_level: int = 0) -> Value:
    """Parse and evaluate a free-standing expression."""
    return exec_program(Program((), parse_expression(source)), debug_level=debug_level)


def run_program(source: str, debug_level: int = 0) -> Value:
    """Parse and execute a whole program."""
    return exec_program(parse_program(source), debug_level=debug_level)
