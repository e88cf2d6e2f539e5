# src/notekind/kernel.py
from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Any, Protocol


class Kernel(Protocol):
    def evaluate(self, form: Any) -> Any: ...


@dataclass(frozen=True, slots=True)
class Binding:
    """Handle to a name bound by evaluation (e.g. `x = 1`)."""

    name: str
    namespace: dict[str, Any] = field(repr=False, compare=False)

    @property
    def value(self) -> Any:
        return self.namespace.get(self.name)

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        p.text(f"<binding {self.name}>")


class NamespaceKernel:
    """
    Minimal kernel over a plain namespace dict.

    Runs a cell the way a notebook does: every statement executes, and the
    value of a trailing expression is the result. A trailing simple
    assignment yields a `Binding` for the assigned name; anything else
    yields None. Compilation and execution are Python's own.
    """

    def __init__(self, namespace: dict[str, Any] | None = None) -> None:
        self.namespace: dict[str, Any] = namespace if namespace is not None else {}

    def evaluate(self, form: Any) -> Any:
        if not isinstance(form, str):
            raise TypeError(f"NamespaceKernel evaluates source strings, got {type(form)!r}")

        tree = ast.parse(form, mode="exec")
        if not tree.body:
            return None

        last = tree.body[-1]
        if isinstance(last, ast.Expr):
            head = ast.Module(body=tree.body[:-1], type_ignores=[])
            exec(compile(head, "<cell>", "exec"), self.namespace)
            expr = ast.Expression(body=last.value)
            return eval(compile(expr, "<cell>", "eval"), self.namespace)

        exec(compile(tree, "<cell>", "exec"), self.namespace)

        if (
            isinstance(last, ast.Assign)
            and len(last.targets) == 1
            and isinstance(last.targets[0], ast.Name)
        ):
            return Binding(last.targets[0].id, self.namespace)
        return None
