"""Embedded test specifications for OCaml- programs.

A program file may carry its own expected result in a block comment of
the form::

    (*!tests!
     *  {
     *      "output": [ "12" ]
     *  }
     *)

The opening line must start with exactly `(*!tests!`. Every following
line up to a line holding only `*)` has its leading whitespace and `*`
characters stripped; the remaining text is one or more JSON objects.
Each object has either an `output` attribute (a list of exactly one
string, compared with the printed result) or an `exception` attribute
(the kind of error the program must raise). When both are present the
`exception` attribute wins. A program that recurses until the Python
stack runs out is recorded with the kind `RecursionError`.

Suites are directories of `.ocm` files; `run_suites` walks every suite
directory below a root and checks every spec in every file.
"""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .errors import OcminusError
from .interpreter import exec_program
from .parser import parse_program
from .types import to_string

SPEC_START = '(*!tests!'
SPEC_LEADER = re.compile(r'^[ \t*]*')
PROGRAM_SUFFIX = '.ocm'


class BadSpec(Exception):
    """Raised when a test specification cannot be extracted or understood."""
    pass


@dataclass
class SpecResult:
    path: str
    index: int
    expected: str
    actual: str

    @property
    def passed(self) -> bool:
        return self.expected == self.actual


def read_spec_text(source: str) -> str:
    """Return the stripped text of the first `(*!tests!` block in `source`."""
    lines = iter(source.splitlines())
    for line in lines:
        if line.startswith(SPEC_START):
            break
    else:
        raise BadSpec('No specs found')
    spec_lines: List[str] = []
    for line in lines:
        if line.strip() == '*)':
            return '\n'.join(spec_lines)
        spec_lines.append(SPEC_LEADER.sub('', line, count=1))
    raise BadSpec('Unterminated spec comment')


def parse_specs(text: str) -> List[Dict[str, Any]]:
    """Decode a sequence of whitespace-separated JSON objects."""
    decoder = json.JSONDecoder()
    specs: List[Dict[str, Any]] = []
    pos = 0
    text = text.strip()
    while pos < len(text):
        try:
            obj, end = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise BadSpec(f"JSON: {e}") from e
        if not isinstance(obj, dict):
            raise BadSpec(f"JSON type error: expected an object, got {type(obj).__name__}")
        specs.append(obj)
        pos = end
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return specs


def read_program(path: Path) -> str:
    try:
        return Path(path).read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise BadSpec(f"{path}: not valid UTF-8") from e


def load_specs(path: Path, source: Optional[str] = None) -> List[Dict[str, Any]]:
    if source is None:
        source = read_program(path)
    try:
        return parse_specs(read_spec_text(source))
    except BadSpec as e:
        raise BadSpec(f"{path}: {e}") from e


def expected_result(spec: Dict[str, Any]) -> str:
    """Return the expected printed value, or the expected error kind."""
    if 'exception' in spec:
        if not isinstance(spec['exception'], str):
            raise BadSpec('exception attribute must be a string')
        return spec['exception']
    if 'output' in spec:
        output = spec['output']
        if not isinstance(output, list) or len(output) != 1 or not isinstance(output[0], str):
            raise BadSpec('Multiple outputs specified')
        return output[0]
    raise BadSpec('No output or exception attribute')


def actual_result(source: str) -> str:
    """Run `source` and describe the outcome the way specs describe it."""
    try:
        return to_string(exec_program(parse_program(source)))
    except OcminusError as e:
        return e.kind
    except RecursionError:
        return 'RecursionError'


def check_file(path: Path) -> List[SpecResult]:
    source = read_program(path)
    specs = load_specs(path, source)
    actual = actual_result(source)
    results: List[SpecResult] = []
    for index, spec in enumerate(specs):
        try:
            expected = expected_result(spec)
        except BadSpec as e:
            raise BadSpec(f"{path}({index}): {e}") from e
        results.append(SpecResult(str(path), index, expected, actual))
    return results


def suite_files(suite_dir: Path) -> List[Path]:
    return sorted(p for p in Path(suite_dir).iterdir() if p.suffix == PROGRAM_SUFFIX)


def suite_dirs(root: Path) -> List[Path]:
    return sorted(p for p in Path(root).iterdir() if p.is_dir())


def run_suites(root: Path, suite: Optional[str] = None) -> Iterator[SpecResult]:
    """Check every spec in every program file of every suite below `root`.

    A file whose spec block is missing or malformed is reported on stderr
    and contributes no results; the remaining files are still checked.
    """
    for directory in suite_dirs(root):
        if suite is not None and directory.name != suite:
            continue
        for path in suite_files(directory):
            try:
                results = check_file(path)
            except BadSpec as e:
                print(f"Bad test spec: {e}", file=sys.stderr)
                continue
            yield from results
