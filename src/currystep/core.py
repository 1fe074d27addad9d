"""Core engine of lambda-calculus.

This file defines the operations needed to reduce a `Term` (see `term.py`) to its normal form.

Some definitions used in the comments below:

# 1. Redex

A "Redex" is an `Application` whose function is an `Abstraction`: `(#p -> b) a`.
Contracting it (beta-reduction) replaces it by `b` where every free `p` is replaced by `a`.

# 2. Normal order

A term can contain several redexes. We always contract the leftmost-outermost one first.
This strategy finds the normal form whenever one exists, which is not true of the
innermost-first strategy.

# 3. Capture

Substitution is the naive one: it does not rename binders. It is only correct when no free variable
of the replacement can be bound by an abstraction of the term it is inserted into.
We guarantee that by renaming every bound variable of the whole term to a fresh, globally unique
name before each step (see `uniquify`).

A step may copy the argument of the redex several times, so copies of the same binders appear
again in the result. This is why the renaming is done again before every step, not only once.
"""

from __future__ import annotations

import logging
from itertools import count
from typing import Iterable, Iterator, Optional

from .errors import FreshNamesExhausted
from .printer import render
from .term import Abstraction, Application, Term, Variable

__all__ = [
    "used_names",
    "free_names",
    "substitute",
    "FreshNames",
    "uniquify",
    "step",
    "evaluate",
    "reduction_chain",
    "alpha_equivalent",
]

logger = logging.getLogger(__name__)


def used_names(term: Term) -> set[str]:
    """
    Every name that appears in the term, whether free or bound.
    """
    if isinstance(term, Variable):
        return {term.name}
    if isinstance(term, Abstraction):
        return {term.parameter.current_name} | used_names(term.body)
    assert isinstance(term, Application)
    return used_names(term.function) | used_names(term.argument)


def free_names(term: Term) -> set[str]:
    if isinstance(term, Variable):
        return {term.name}
    if isinstance(term, Abstraction):
        return free_names(term.body) - {term.parameter.current_name}
    assert isinstance(term, Application)
    return free_names(term.function) | free_names(term.argument)


def substitute(term: Term, target_name: str, replacement: Term) -> Term:
    """
    Replace every free occurrence of `target_name` in `term` by `replacement`.

    This does not avoid capture: the caller must make sure that no binder of `term`
    has the name of a free variable of `replacement`.
    """
    if isinstance(term, Variable):
        return replacement if term.name == target_name else term
    if isinstance(term, Abstraction):
        if term.parameter.current_name == target_name:
            # shadowed
            return term
        return Abstraction(term.parameter, substitute(term.body, target_name, replacement))
    assert isinstance(term, Application)
    return Application(
        substitute(term.function, target_name, replacement),
        substitute(term.argument, target_name, replacement),
    )


class FreshNames:
    """
    Generator of fresh variable names: `v0`, `v1`, `v2` ...

    A candidate is skipped if it is one of the `used` names or if it has already been given.

    Args:
        used: names that must never be produced
        candidates: where to draw names from. Defaults to an unbounded counter.
    """

    def __init__(self, used: Iterable[str] = (), candidates: Optional[Iterable[str]] = None):
        if candidates is None:
            candidates = (f"v{i}" for i in count())
        self.used = set(used)
        self.given: set[str] = set()
        self._candidates = iter(candidates)

    def avoid(self, names: Iterable[str]):
        self.used.update(names)

    def __iter__(self) -> FreshNames:
        return self

    def __next__(self) -> str:
        for name in self._candidates:
            if name in self.used or name in self.given:
                continue
            self.given.add(name)
            return name
        raise FreshNamesExhausted("no variables left")


def _uniquify(term: Term, names: FreshNames) -> Term:
    if isinstance(term, Abstraction):
        old_name = term.parameter.current_name
        parameter = term.parameter.rename(next(names))
        logger.debug("renaming %s to %s", old_name, parameter.current_name)
        body = substitute(term.body, old_name, Variable(parameter))
        return Abstraction(parameter, _uniquify(body, names))
    if isinstance(term, Application):
        return Application(_uniquify(term.function, names), _uniquify(term.argument, names))
    return term


def uniquify(term: Term, names: Optional[FreshNames] = None) -> Term:
    """
    Rename every bound variable of the term to a fresh name.

    The result is alpha-equivalent to `term`, and no two binders share a name,
    nor does any binder share a name with a free variable.

    Args:
        names: the name generator to use. A new one is created if not given,
            so that two calls never share state.
    """
    if names is None:
        names = FreshNames()
    names.avoid(used_names(term))
    return _uniquify(term, names)


def step(term: Term) -> Optional[Term]:
    """
    Contract the leftmost-outermost redex.

    Returns None if the term is in normal form.
    """
    if isinstance(term, Application):
        function = term.function
        if isinstance(function, Abstraction):
            return substitute(function.body, function.parameter.current_name, term.argument)

        new_function = step(function)
        if new_function is not None:
            return Application(new_function, term.argument)

        new_argument = step(term.argument)
        if new_argument is not None:
            return Application(function, new_argument)
        return None

    if isinstance(term, Abstraction):
        body = step(term.body)
        if body is None:
            return None
        return Abstraction(term.parameter, body)

    return None


def evaluate(term: Term) -> Term:
    """
    Reduce the term to its normal form.

    This never returns if the term has no normal form, like `(#x -> x x) (#x -> x x)`.
    Use `reduction_chain` to bound the number of steps.
    """
    current = term
    n_steps = 0
    while True:
        current = uniquify(current)
        reduced = step(current)
        if reduced is None:
            logger.info("normal form reached after %d steps", n_steps)
            return current
        n_steps += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("step %d: %s", n_steps, render(reduced))
        current = reduced


def reduction_chain(term: Term) -> Iterator[Term]:
    """
    Yield the term before each reduction step, the last one being the normal form.

    Every yielded term has already been renamed with `uniquify`.
    """
    current = term
    for n_steps in count(1):
        current = uniquify(current)
        yield current
        reduced = step(current)
        if reduced is None:
            return
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("step %d: %s", n_steps, render(reduced))
        current = reduced


def _alpha_equivalent(
    a: Term, b: Term, left: dict[str, int], right: dict[str, int], depth: int
) -> bool:
    if isinstance(a, Variable) and isinstance(b, Variable):
        binder_a = left.get(a.name)
        binder_b = right.get(b.name)
        if binder_a is None and binder_b is None:
            return a.name == b.name
        return binder_a == binder_b
    if isinstance(a, Abstraction) and isinstance(b, Abstraction):
        return _alpha_equivalent(
            a.body,
            b.body,
            {**left, a.parameter.current_name: depth},
            {**right, b.parameter.current_name: depth},
            depth + 1,
        )
    if isinstance(a, Application) and isinstance(b, Application):
        return _alpha_equivalent(a.function, b.function, left, right, depth) and _alpha_equivalent(
            a.argument, b.argument, left, right, depth
        )
    return False


def alpha_equivalent(a: Term, b: Term) -> bool:
    """
    Whether two terms only differ by the names of their bound variables.
    """
    return _alpha_equivalent(a, b, {}, {}, 0)
