"""JSON serialization/deserialization for OCaml- ASTs.

This module converts between the AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Operators are stored by
their constructor name (`"Plus"`, `"Neg"`, ...). It supports a full
round-trip for every expression node, `FunDef` and `Program`.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Num, Bool, Var, Unop, Binop, If, Let, Fun, Call,
    FunDef, Program, UnaryOperator, BinaryOperator,
)


def ast_to_obj(node: Any) -> Dict[str, Any]:
    if isinstance(node, Program):
        return {
            "type": "Program",
            "fundefs": [ast_to_obj(f) for f in node.fundefs],
            "main": ast_to_obj(node.main),
        }
    if isinstance(node, FunDef):
        return {
            "type": "FunDef",
            "name": node.name,
            "params": list(node.params),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Num):
        return {"type": "Num", "value": node.value}
    if isinstance(node, Bool):
        return {"type": "Bool", "value": node.value}
    if isinstance(node, Var):
        return {"type": "Var", "name": node.name}
    if isinstance(node, Unop):
        return {"type": "Unop", "op": node.op.value, "operand": ast_to_obj(node.operand)}
    if isinstance(node, Binop):
        return {
            "type": "Binop",
            "op": node.op.value,
            "left": ast_to_obj(node.left),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, If):
        return {
            "type": "If",
            "cond": ast_to_obj(node.cond),
            "then": ast_to_obj(node.then_branch),
            "else": ast_to_obj(node.else_branch),
        }
    if isinstance(node, Let):
        return {
            "type": "Let",
            "name": node.name,
            "bound": ast_to_obj(node.bound),
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Fun):
        return {"type": "Fun", "params": list(node.params), "body": ast_to_obj(node.body)}
    if isinstance(node, Call):
        return {"type": "Call", "callee": ast_to_obj(node.callee), "args": [ast_to_obj(a) for a in node.args]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(
            fundefs=tuple(ast_from_obj(f) for f in obj["fundefs"]),
            main=ast_from_obj(obj["main"]),
        )
    if t == "FunDef":
        return FunDef(name=obj["name"], params=tuple(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "Num":
        return Num(int(obj["value"]))
    if t == "Bool":
        return Bool(bool(obj["value"]))
    if t == "Var":
        return Var(obj["name"])
    if t == "Unop":
        return Unop(op=UnaryOperator(obj["op"]), operand=ast_from_obj(obj["operand"]))
    if t == "Binop":
        return Binop(
            op=BinaryOperator(obj["op"]),
            left=ast_from_obj(obj["left"]),
            right=ast_from_obj(obj["right"]),
        )
    if t == "If":
        return If(
            cond=ast_from_obj(obj["cond"]),
            then_branch=ast_from_obj(obj["then"]),
            else_branch=ast_from_obj(obj["else"]),
        )
    if t == "Let":
        return Let(name=obj["name"], bound=ast_from_obj(obj["bound"]), body=ast_from_obj(obj["body"]))
    if t == "Fun":
        return Fun(params=tuple(obj["params"]), body=ast_from_obj(obj["body"]))
    if t == "Call":
        return Call(callee=ast_from_obj(obj["callee"]), args=tuple(ast_from_obj(a) for a in obj["args"]))

    raise ValueError(f"Unknown AST node type: {t}")
