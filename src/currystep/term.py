"""
Lambda calculus term representation using named variables.

A term is an immutable tree made of three kinds of nodes:

- `Variable`, a reference to a name
- `Abstraction`, a lambda binding one name in its body
- `Application`, a function applied to an argument

Names are carried by `Identifier` values. An identifier remembers the name it had
in the source (`original_name`) so that a term can still be read after the
evaluator has renamed its bound variables.

Whether a variable is bound or free is not stored on the node: it depends on the
abstractions found on the path from the root.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Union

__all__ = ["Identifier", "Term", "Variable", "Abstraction", "Application", "V", "L"]


@dataclass(frozen=True)
class Identifier:
    """
    Name of a variable or of a lambda parameter.

    Attributes:
        current_name: the name used for scoping and comparison
        original_name: the name written in the source, only used for display
    """

    current_name: str
    original_name: str

    @staticmethod
    def named(name: str) -> Identifier:
        """Identifier that has not been renamed yet."""
        return Identifier(name, name)

    @property
    def renamed(self) -> bool:
        return self.current_name != self.original_name

    def rename(self, new_name: str) -> Identifier:
        return Identifier(new_name, self.original_name)


class Term(ABC):
    """
    Base class for lambda calculus terms.

    Terms are never mutated: every transformation builds a new tree.
    """

    def __call__(self, arg: Term) -> Term:
        """Apply this term to an argument"""
        return Application(self, arg)


@dataclass(frozen=True)
class Variable(Term):
    """
    A variable reference.

    Example:
        λx. x  =>  Abstraction(Identifier("x", "x"), Variable(Identifier("x", "x")))
    """

    identifier: Identifier

    @property
    def name(self) -> str:
        return self.identifier.current_name


@dataclass(frozen=True)
class Abstraction(Term):
    """
    Lambda abstraction.

    `parameter` binds the occurrences of `parameter.current_name` inside `body`,
    and nowhere else.
    """

    parameter: Identifier
    body: Term


@dataclass(frozen=True)
class Application(Term):
    """
    Function application.

    Chains associate to the left: `a b c` is `Application(Application(a, b), c)`.
    """

    function: Term
    argument: Term


def _as_term(t: Union[str, Term]) -> Term:
    if isinstance(t, Term):
        return t
    assert isinstance(t, str), f"expected a term or a name, got {t!r}"
    return V(t)


def V(name: str) -> Variable:
    return Variable(Identifier.named(name))


def L(*names_and_body: Union[str, Term]) -> Term:
    """
    Build nested abstractions.

    ```
    L("x", "y", V("x")(V("y")))   # #x -> #y -> x y
    L("x", "x")                   # #x -> x
    ```
    """
    if len(names_and_body) < 2:
        raise ValueError("L needs at least one parameter and a body")
    *names, body = names_and_body
    result = _as_term(body)
    for name in reversed(names):
        if not isinstance(name, str):
            raise ValueError(f"lambda parameter must be a name, got {name!r}")
        result = Abstraction(Identifier.named(name), result)
    return result
