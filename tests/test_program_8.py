from pathlib import Path

import pytest

from ocminus.errors import DivisionByZero
from ocminus.interpreter import parse_program, Interpreter

PROGRAMS = Path(__file__).parent / 'suites' / 'core'


def test_program_8_and_evaluates_both_operands():
    with open(PROGRAMS / 'program_8.ocm', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(DivisionByZero):
        interp.run(ast)
