from pathlib import Path
from ocminus.interpreter import parse_program, Interpreter
from ocminus.types import to_string

PROGRAMS = Path(__file__).parent / 'suites' / 'core'


def test_program_2_two_parameter_function():
    with open(PROGRAMS / 'program_2.ocm', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    result = interp.run(ast)
    assert to_string(result) == '7'
