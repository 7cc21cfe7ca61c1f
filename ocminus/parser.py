"""Parser for the OCaml- language.

This module implements a recursive-descent parser over the token list
produced by `ocminus.lexer.tokenize`. There is one method per precedence
level, loosest binding first:

1. `if`/`let`/`fun` expressions, which extend as far right as possible;
2. `||` chains (left-associative);
3. `&&` chains (left-associative);
4. comparisons `= <> < <= > >=` (non-associative: at most one);
5. `+`/`-` chains (left-associative);
6. `*`, `/`, `%` chains (left-associative);
7. prefix `-` and `not` (right-recursive, so they stack);
8. application by juxtaposition (`f a b`);
9. atoms: literals, identifiers and parenthesized expressions.

Each left-associative level collects its head operand and the list of
(operator, operand) pairs that follow, then folds the pairs into the head
from the left.

`parse_expression` and `parse_program` are the public entry points. Any
mismatch raises `ParseError` with the offending token's line and column;
no partial tree is ever returned.
"""

from __future__ import annotations

from functools import reduce
from typing import Callable, Dict, List, Tuple, Union

from lark import Token

from .ast import (
    Expr, Num, Bool, Var, Unop, Binop, If, Let, Fun, Call,
    FunDef, Program, UnaryOperator, BinaryOperator,
)
from .errors import ParseError
from .lexer import tokenize


OR_OPS: Dict[str, BinaryOperator] = {'OR': BinaryOperator.OR}
AND_OPS: Dict[str, BinaryOperator] = {'AND': BinaryOperator.AND}
COMPARISON_OPS: Dict[str, BinaryOperator] = {
    'EQ': BinaryOperator.EQ,
    'NE': BinaryOperator.NE,
    'LT': BinaryOperator.LT,
    'LE': BinaryOperator.LE,
    'GT': BinaryOperator.GT,
    'GE': BinaryOperator.GE,
}
ADDITIVE_OPS: Dict[str, BinaryOperator] = {
    'PLUS': BinaryOperator.PLUS,
    'MINUS': BinaryOperator.MINUS,
}
MULTIPLICATIVE_OPS: Dict[str, BinaryOperator] = {
    'TIMES': BinaryOperator.TIMES,
    'DIV': BinaryOperator.DIV,
    'MOD': BinaryOperator.MOD,
}
PREFIX_OPS: Dict[str, UnaryOperator] = {
    'MINUS': UnaryOperator.NEG,
    'NOT': UnaryOperator.NOT,
}

# Tokens that can start an atomic expression, and so an argument.
ATOM_START = ('NUM', 'TRUE', 'FALSE', 'ID', 'LPAREN')


def left_assoc(head: Expr, rest: List[Tuple[BinaryOperator, Expr]]) -> Expr:
    """Fold (operator, operand) pairs into `head` from the left.

    `left_assoc(e0, [(op1, e1), (op2, e2)])` is
    `Binop(op2, Binop(op1, e0, e1), e2)`.
    """
    return reduce(lambda acc, pair: Binop(pair[0], acc, pair[1]), rest, head)


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        # The token list always ends with EOF, which is never consumed past.
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def error(self, expected: str) -> ParseError:
        token = self.peek()
        found = 'end of input' if token.type == 'EOF' else f"{token.type} {token.value!r}"
        return ParseError(f"expected {expected}, got {found}", token.line, token.column)

    def match(self, expected: Union[str, Tuple[str, ...]]) -> bool:
        token_type = self.peek().type
        if isinstance(expected, tuple):
            return token_type in expected
        return token_type == expected

    def consume(self, expected: Union[str, Tuple[str, ...]]) -> Token:
        if not self.match(expected):
            raise self.error(expected if isinstance(expected, str) else ' or '.join(expected))
        token = self.peek()
        self.pos += 1
        return token

    # Entry points

    def parse_terminated_exp(self) -> Expr:
        expr = self.parse_exp()
        self.consume('EOF')
        return expr

    def parse_terminated_pgm(self) -> Program:
        fundefs: List[FunDef] = []
        if self.match('LETREC'):
            self.consume('LETREC')
            fundefs.append(self.parse_fundef())
            while self.match('KWAND'):
                self.consume('KWAND')
                fundefs.append(self.parse_fundef())
            self.parse_double_semi()
        main = self.parse_exp()
        self.parse_double_semi()
        self.consume('EOF')
        return Program(tuple(fundefs), main)

    def parse_double_semi(self) -> None:
        self.consume('SEMI')
        self.consume('SEMI')

    def parse_fundef(self) -> FunDef:
        name = self.consume('ID').value
        params = self.parse_identifiers()
        self.consume('EQ')
        body = self.parse_exp()
        return FunDef(name, params, body)

    def parse_identifiers(self) -> Tuple[str, ...]:
        names: List[str] = []
        while self.match('ID'):
            names.append(self.consume('ID').value)
        return tuple(names)

    # Expressions

    def parse_exp(self) -> Expr:
        if self.match('IF'):
            return self.parse_if()
        if self.match('LET'):
            return self.parse_let()
        if self.match('FUN'):
            return self.parse_fun()
        return self.parse_or()

    def parse_if(self) -> If:
        self.consume('IF')
        cond = self.parse_exp()
        self.consume('THEN')
        then_branch = self.parse_exp()
        self.consume('ELSE')
        else_branch = self.parse_exp()
        return If(cond, then_branch, else_branch)

    def parse_let(self) -> Let:
        self.consume('LET')
        name = self.consume('ID').value
        self.consume('EQ')
        bound = self.parse_exp()
        self.consume('IN')
        body = self.parse_exp()
        return Let(name, bound, body)

    def parse_fun(self) -> Fun:
        self.consume('FUN')
        params = self.parse_identifiers()
        self.consume('ARROW')
        body = self.parse_exp()
        return Fun(params, body)

    def parse_chain(self, operators: Dict[str, BinaryOperator],
                    operand: Callable[[], Expr]) -> Expr:
        head = operand()
        rest: List[Tuple[BinaryOperator, Expr]] = []
        while self.match(tuple(operators)):
            op = operators[self.consume(tuple(operators)).type]
            rest.append((op, operand()))
        return left_assoc(head, rest)

    def parse_or(self) -> Expr:
        return self.parse_chain(OR_OPS, self.parse_and)

    def parse_and(self) -> Expr:
        return self.parse_chain(AND_OPS, self.parse_comparison)

    def parse_comparison(self) -> Expr:
        left = self.parse_additive()
        if self.match(tuple(COMPARISON_OPS)):
            op = COMPARISON_OPS[self.consume(tuple(COMPARISON_OPS)).type]
            right = self.parse_additive()
            # A second comparison here is left for the caller to reject.
            return Binop(op, left, right)
        return left

    def parse_additive(self) -> Expr:
        return self.parse_chain(ADDITIVE_OPS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expr:
        return self.parse_chain(MULTIPLICATIVE_OPS, self.parse_unary)

    def parse_unary(self) -> Expr:
        if self.match(tuple(PREFIX_OPS)):
            op = PREFIX_OPS[self.consume(tuple(PREFIX_OPS)).type]
            return Unop(op, self.parse_unary())
        return self.parse_application()

    def parse_application(self) -> Expr:
        func = self.parse_atom()
        args: List[Expr] = []
        while self.match(ATOM_START):
            args.append(self.parse_atom())
        if not args:
            return func
        return Call(func, tuple(args))

    def parse_atom(self) -> Expr:
        token = self.peek()
        if token.type == 'NUM':
            self.consume('NUM')
            return Num(int(token.value))
        if token.type == 'TRUE':
            self.consume('TRUE')
            return Bool(True)
        if token.type == 'FALSE':
            self.consume('FALSE')
            return Bool(False)
        if token.type == 'ID':
            self.consume('ID')
            return Var(token.value)
        if token.type == 'LPAREN':
            self.consume('LPAREN')
            expr = self.parse_exp()
            self.consume('RPAREN')
            return expr
        raise self.error('an expression')


def parse_expression(source: str) -> Expr:
    """Parse a free-standing expression terminated by end of input."""
    return Parser(tokenize(source)).parse_terminated_exp()


def parse_program(source: str) -> Program:
    """Parse a program: optional `letrec` block, then `main ;;`."""
    return Parser(tokenize(source)).parse_terminated_pgm()
