"""CLI entry point for the OCaml- interpreter.

Usage:
    python -m ocminus [-v|-vv|-vvv] [--debug-file FILE] ACTION ARG

Actions:
  lex EXPR        print the lexemes of expression EXPR, one per line
  lexpgm FILE     print the lexemes of program file FILE, one per line
  parse EXPR      parse expression EXPR and print its AST as JSON
  parsepgm FILE   parse program file FILE and print its AST as JSON
  eval EXPR       evaluate expression EXPR and print the result
  exec FILE       execute program file FILE and print the result
  test DIR        check the embedded test specs of every suite under DIR

Options:
  -v              Increase debug verbosity (can be repeated)
  --debug-file    Write debug information to FILE instead of stderr

Lexemes are printed surrounded by `.` so that whitespace problems are
visible. Results print as decimal integers or `true`/`false`.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast import Program
from .ast_json import ast_to_obj
from .errors import OcminusError, LexError, ParseError
from .interpreter import exec_program
from .lexer import lexemes
from .parser import parse_expression, parse_program
from .suites import run_suites
from .types import to_string

ACTIONS = ('lex', 'lexpgm', 'parse', 'parsepgm', 'eval', 'exec', 'test')


def read_source(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        with open(program_file, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError:
        print(f"Error: file {program_file} is not valid UTF-8", file=sys.stderr)
        sys.exit(1)


def show_lexemes(source: str) -> None:
    for lexeme in lexemes(source):
        print(f".{lexeme}.")


def show_ast(node) -> None:
    print(json.dumps(ast_to_obj(node), ensure_ascii=False, indent=2))


def run_tests(root: str) -> int:
    if not Path(root).is_dir():
        print(f"Error: directory {root} not found", file=sys.stderr)
        sys.exit(1)
    passed = failed = 0
    for result in run_suites(Path(root)):
        if result.passed:
            passed += 1
            continue
        failed += 1
        print(f"FAIL {result.path}({result.index}): expected {result.expected}, got {result.actual}")
    print(f"{passed} passed, {failed} failed")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='ocminus', description="OCaml- language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', metavar='FILE', help='write debug information to FILE')
    parser.add_argument('action', choices=ACTIONS, help='what to do with ARG')
    parser.add_argument('arg', help='expression text, program file or suite directory')
    args = parser.parse_args(argv)

    try:
        if args.action == 'lex':
            show_lexemes(args.arg)
        elif args.action == 'lexpgm':
            show_lexemes(read_source(args.arg))
        elif args.action == 'parse':
            show_ast(parse_expression(args.arg))
        elif args.action == 'parsepgm':
            show_ast(parse_program(read_source(args.arg)))
        elif args.action == 'eval':
            program = Program((), parse_expression(args.arg))
            print(to_string(exec_program(program, debug_level=args.v, debug_file=args.debug_file)))
        elif args.action == 'exec':
            program = parse_program(read_source(args.arg))
            print(to_string(exec_program(program, debug_level=args.v, debug_file=args.debug_file)))
        else:
            sys.exit(run_tests(args.arg))
    except (LexError, ParseError) as e:
        print(f"Parse error: {e.message}", file=sys.stderr)
        sys.exit(1)
    except OcminusError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Error: recursion too deep", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
