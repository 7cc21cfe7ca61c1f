import pytest

from ocminus.ast import (
    Num, Bool, Var, Unop, Binop, If, Let, Fun, Call, FunDef, Program,
    UnaryOperator as U, BinaryOperator as B,
)
from ocminus.errors import ParseError
from ocminus.parser import left_assoc, parse_expression, parse_program


def test_atoms():
    assert parse_expression('42') == Num(42)
    assert parse_expression('true') == Bool(True)
    assert parse_expression('false') == Bool(False)
    assert parse_expression('x') == Var('x')
    assert parse_expression('((x))') == Var('x')


def test_multiplication_binds_tighter_than_addition():
    assert parse_expression('3 + 4 * 2') == Binop(B.PLUS, Num(3), Binop(B.TIMES, Num(4), Num(2)))


@pytest.mark.parametrize('source, op', [
    ('a - b - c', B.MINUS),
    ('a / b / c', B.DIV),
    ('a % b % c', B.MOD),
    ('a && b && c', B.AND),
    ('a || b || c', B.OR),
])
def test_chains_are_left_associative(source, op):
    assert parse_expression(source) == Binop(op, Binop(op, Var('a'), Var('b')), Var('c'))


def test_mixed_chain_folds_from_the_left():
    expected = Binop(B.PLUS, Binop(B.MINUS, Binop(B.PLUS, Num(1), Num(2)), Num(3)), Num(4))
    assert parse_expression('1 + 2 - 3 + 4') == expected


def test_left_assoc_helper():
    assert left_assoc(Num(0), []) == Num(0)
    assert left_assoc(Num(0), [(B.TIMES, Num(1)), (B.DIV, Num(2))]) == \
        Binop(B.DIV, Binop(B.TIMES, Num(0), Num(1)), Num(2))


def test_precedence_levels():
    # || < && < comparison < + < * < unary < application
    expected = Binop(
        B.OR,
        Binop(B.AND, Binop(B.LT, Var('a'), Num(1)), Binop(B.EQ, Var('b'), Var('c'))),
        Bool(False),
    )
    assert parse_expression('a < 1 && b = c || false') == expected


def test_comparison_operands_are_arithmetic():
    assert parse_expression('1 + 2 <> 3 * 4') == \
        Binop(B.NE, Binop(B.PLUS, Num(1), Num(2)), Binop(B.TIMES, Num(3), Num(4)))


@pytest.mark.parametrize('source', ['1 < 2 < 3', 'a = b = c', '1 <= 2 > 0'])
def test_comparisons_do_not_chain(source):
    with pytest.raises(ParseError):
        parse_expression(source)


def test_comparison_chain_error_points_at_second_operator():
    with pytest.raises(ParseError) as excinfo:
        parse_expression('1 < 2 < 3')
    assert (excinfo.value.line, excinfo.value.column) == (1, 7)


def test_unary_operators_stack():
    assert parse_expression('- - x') == Unop(U.NEG, Unop(U.NEG, Var('x')))
    assert parse_expression('not not b') == Unop(U.NOT, Unop(U.NOT, Var('b')))


def test_unary_binds_tighter_than_binary():
    assert parse_expression('-x * y') == Binop(B.TIMES, Unop(U.NEG, Var('x')), Var('y'))
    assert parse_expression('1 - -2') == Binop(B.MINUS, Num(1), Unop(U.NEG, Num(2)))


def test_application():
    assert parse_expression('f x (y + 1) 2') == \
        Call(Var('f'), (Var('x'), Binop(B.PLUS, Var('y'), Num(1)), Num(2)))


def test_application_binds_tighter_than_unary_and_binary():
    assert parse_expression('- f x + 1') == \
        Binop(B.PLUS, Unop(U.NEG, Call(Var('f'), (Var('x'),))), Num(1))


def test_parenthesized_callee_is_parsed():
    assert parse_expression('(f) 1') == Call(Var('f'), (Num(1),))


def test_if_let_fun():
    assert parse_expression('if b then 1 else 2') == If(Var('b'), Num(1), Num(2))
    assert parse_expression('let x = 1 in x') == Let('x', Num(1), Var('x'))
    assert parse_expression('fun x y -> x') == Fun(('x', 'y'), Var('x'))
    assert parse_expression('fun -> 1') == Fun((), Num(1))


def test_if_extends_as_far_right_as_possible():
    assert parse_expression('if b then 1 else 2 + 3') == \
        If(Var('b'), Num(1), Binop(B.PLUS, Num(2), Num(3)))
    assert parse_expression('fun x -> x || y') == \
        Fun(('x',), Binop(B.OR, Var('x'), Var('y')))


def test_let_body_swallows_operators():
    assert parse_expression('let x = 1 in x * 2') == \
        Let('x', Num(1), Binop(B.TIMES, Var('x'), Num(2)))


def test_if_requires_parentheses_inside_operators():
    with pytest.raises(ParseError):
        parse_expression('1 + if true then 1 else 2')
    assert parse_expression('1 + (if true then 1 else 2)') == \
        Binop(B.PLUS, Num(1), If(Bool(True), Num(1), Num(2)))


@pytest.mark.parametrize('source', [
    '', '1 +', '(1', '1)', 'if true then 1', 'let 1 = 2 in 3', 'let x = 1 x', 'fun x x',
    '1 2 +',
])
def test_malformed_expressions(source):
    with pytest.raises(ParseError):
        parse_expression(source)


def test_error_reports_position():
    with pytest.raises(ParseError) as excinfo:
        parse_expression('let x = 1\nin )')
    assert (excinfo.value.line, excinfo.value.column) == (2, 4)


def test_program_without_fundefs():
    assert parse_program('1 + 2 ;;') == Program((), Binop(B.PLUS, Num(1), Num(2)))


def test_program_with_fundefs():
    source = '''
        letrec f x y = x + y
        and g = 3
        and f z = z ;;
        f 3 4 ;;
    '''
    assert parse_program(source) == Program(
        (
            FunDef('f', ('x', 'y'), Binop(B.PLUS, Var('x'), Var('y'))),
            FunDef('g', (), Num(3)),
            FunDef('f', ('z',), Var('z')),
        ),
        Call(Var('f'), (Num(3), Num(4))),
    )


@pytest.mark.parametrize('source', [
    '1 + 2',
    '1 + 2 ;',
    'letrec f x = x ;; ',
    'letrec f x = x f 1 ;;',
    'letrec = 1 ;; 2 ;;',
    'letrec f x = x ;; 1 ;; 2 ;;',
])
def test_malformed_programs(source):
    with pytest.raises(ParseError):
        parse_program(source)


def test_let_with_parameters_is_not_a_fundef():
    with pytest.raises(ParseError):
        parse_program('let f x y = x + y in f 3 4 ;;')
