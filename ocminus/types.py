"""Runtime values for OCaml-.

The interpreter produces exactly two kinds of values: integers and
booleans. There are no function values and no compound data. This module
defines both value classes together with helpers for naming a value's
kind in error messages and rendering a value for output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class IntVal:
    value: int

    def __repr__(self) -> str:
        return f"V_Int {self.value}"


@dataclass(frozen=True)
class BoolVal:
    value: bool

    def __repr__(self) -> str:
        return f"V_Bool {to_string(self)}"


Value = Union[IntVal, BoolVal]


def type_name(value: Value) -> str:
    """Return the OCaml- name of the kind of `value`."""
    if isinstance(value, IntVal):
        return 'int'
    if isinstance(value, BoolVal):
        return 'bool'
    return type(value).__name__


def to_string(value: Value) -> str:
    """Convert a value to its user-visible representation.

    Integers are printed in decimal and booleans as `true`/`false`.
    """
    if isinstance(value, BoolVal):
        return 'true' if value.value else 'false'
    if isinstance(value, IntVal):
        return str(value.value)
    return str(value)
