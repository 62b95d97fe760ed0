"""Node templates whose attribute values are arithmetic expressions.

Expressions are parsed with :mod:`ast` and checked against a whitelist of
node types before being compiled, so only arithmetic over numeric
literals, the base node's attribute names and ``rand(min, max)`` can run.
"""

from __future__ import annotations

import ast
import math
import random
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional

from rggs.core.node import Node
from rggs.core.value import Value
from rggs.utils.validation import ExpressionError

SAFE_AST_NODES = {
    ast.Expression,
    ast.BinOp,
    ast.UnaryOp,
    ast.Add,
    ast.Sub,
    ast.Mult,
    ast.Div,
    ast.FloorDiv,
    ast.Mod,
    ast.Pow,
    ast.USub,
    ast.UAdd,
    ast.Load,
    ast.Name,
    ast.Constant,
    ast.Call,
}

# name -> number of positional arguments
EXPRESSION_FUNCTIONS = {"rand": 2}

_POW = "__pow"


class _FloatPow(ast.NodeTransformer):
    """Rewrite ``a ** b`` as a float power call so huge exponents overflow."""

    def visit_BinOp(self, node: ast.BinOp) -> ast.AST:
        self.generic_visit(node)
        if not isinstance(node.op, ast.Pow):
            return node
        call = ast.Call(func=ast.Name(id=_POW, ctx=ast.Load()), args=[node.left, node.right], keywords=[])
        return ast.copy_location(call, node)


@lru_cache(maxsize=512)
def compile_expression(expr: str):
    """Parse and whitelist-check ``expr``; returns a code object."""
    try:
        node = ast.parse(expr.strip(), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError("expression_error", f"Invalid expression: {expr}", expr=expr) from exc

    for sub in ast.walk(node):
        if type(sub) not in SAFE_AST_NODES:
            raise ExpressionError(
                "unsafe_expression",
                f"Unsupported element {type(sub).__name__} in expression",
                expr=expr,
            )
        if isinstance(sub, ast.Constant) and (
            isinstance(sub.value, bool) or not isinstance(sub.value, (int, float))
        ):
            raise ExpressionError("unsafe_expression", "Only numeric literals are allowed", expr=expr)
        if isinstance(sub, ast.Call):
            if not isinstance(sub.func, ast.Name) or sub.func.id not in EXPRESSION_FUNCTIONS:
                raise ExpressionError("unsafe_expression", "Unknown function call", expr=expr)
            if sub.keywords or len(sub.args) != EXPRESSION_FUNCTIONS[sub.func.id]:
                raise ExpressionError(
                    "unsafe_expression",
                    f"{sub.func.id}() takes {EXPRESSION_FUNCTIONS[sub.func.id]} positional arguments",
                    expr=expr,
                )
    node = ast.fix_missing_locations(_FloatPow().visit(node))
    return compile(node, filename="<expr>", mode="eval")


def evaluate_expression(expr: str, env: Mapping[str, Any]) -> float:
    code = compile_expression(expr)
    try:
        result = eval(code, {"__builtins__": {}, _POW: math.pow}, dict(env))  # nosec - whitelisted AST
    except NameError as exc:
        raise ExpressionError("expression_error", f"Unknown variable in expression: {exc}", expr=expr) from exc
    except (ArithmeticError, TypeError, ValueError) as exc:
        raise ExpressionError("expression_error", f"Expression evaluation failed: {exc}", expr=expr) from exc
    if isinstance(result, bool) or not isinstance(result, (int, float)):
        raise ExpressionError("expression_error", "Expression did not produce a number", expr=expr)
    return float(result)


def _make_rand(rng: Optional[random.Random]) -> Callable[[float, float], float]:
    source = rng if rng is not None else random

    def rand(low: float, high: float) -> float:
        return source.uniform(low, high)

    return rand


@dataclass
class ToNode:
    """Template for a created or replacement node.

    Attributes:
        name: Name given to the resulting node
        values: Attribute name to expression text, e.g. ``{"dir": "dir + 1"}``
    """

    name: str
    values: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.values = {k: str(v) for k, v in self.values.items()}

    def validate(self) -> None:
        """Parse every expression; raises ExpressionError on the first bad one."""
        for expr in self.values.values():
            compile_expression(expr)

    def eval(self, base: Optional[Node] = None, rng: Optional[random.Random] = None) -> Node:
        """Evaluate the template against ``base``'s attributes.

        Every attribute of ``base`` is visible as a float variable. The
        result always holds Float values.
        """
        env: Dict[str, Any] = {}
        if base is not None:
            env.update({k: v.as_number() for k, v in base.values.items()})
        env["rand"] = _make_rand(rng)

        values: Dict[str, Value] = {}
        for key, expr in self.values.items():
            number = evaluate_expression(expr, env)
            try:
                values[key] = Value.float(number)
            except OverflowError as exc:
                raise ExpressionError(
                    "expression_error",
                    f"Result of {key!r} does not fit a 32-bit float",
                    expr=expr,
                ) from exc
        return Node(name=self.name, values=values)


__all__ = ["ToNode", "compile_expression", "evaluate_expression", "SAFE_AST_NODES"]
