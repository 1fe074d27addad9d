"""Tabular views of terms, as polars dataframes.

# Node table

A term is flattened in pre-order, one row per node:

- `id`: position of the node in pre-order
- `kind`: "lambda", "variable" or "application"
- `ref`: for a bound variable, the id of its lambda. Null for free variables.
- `arg`: for an application, the id of its argument.
  The function of an application, and the body of a lambda, is always the node `id + 1`.
- `depth`: distance to the root
- `name`, `original`: the current and original names of the identifier (null for applications)

# Trace table

One row per term in the reduction chain (see `core.reduction_chain`).
"""

from itertools import islice
from typing import Iterable, Optional

import polars as pl
from polars import Schema, String, UInt32

from .core import free_names, reduction_chain
from .printer import render
from .term import Abstraction, Application, Identifier, Term, Variable

__all__ = ["SCHEMA", "TRACE_SCHEMA", "to_nodes", "from_nodes", "chain_to_frame", "trace"]

LAMBDA, VARIABLE, APPLICATION = "lambda", "variable", "application"

SCHEMA = Schema(
    {
        "id": UInt32,
        "kind": String,
        "ref": UInt32,
        "arg": UInt32,
        "depth": UInt32,
        "name": String,
        "original": String,
    },
)

TRACE_SCHEMA = Schema(
    {
        "step": UInt32,
        "expr": String,
        "size": UInt32,
        "depth": UInt32,
        "free": pl.List(String),
    },
)


def _flatten(term: Term, rows: list[dict], scope: dict[str, int], depth: int):
    my_id = len(rows)
    row = dict.fromkeys(SCHEMA.names(), None)
    row.update(id=my_id, depth=depth)
    rows.append(row)
    if isinstance(term, Variable):
        row.update(
            kind=VARIABLE,
            ref=scope.get(term.name),
            name=term.identifier.current_name,
            original=term.identifier.original_name,
        )
    elif isinstance(term, Abstraction):
        parameter = term.parameter
        row.update(kind=LAMBDA, name=parameter.current_name, original=parameter.original_name)
        _flatten(term.body, rows, {**scope, parameter.current_name: my_id}, depth + 1)
    else:
        assert isinstance(term, Application)
        row.update(kind=APPLICATION)
        _flatten(term.function, rows, scope, depth + 1)
        row["arg"] = len(rows)
        _flatten(term.argument, rows, scope, depth + 1)


def to_nodes(term: Term) -> pl.DataFrame:
    """
    Flatten a term into its node table.

    ```
    to_nodes(parse("(#x -> x) y"))
    # id  kind         ref   arg   depth  name  original
    # 0   application  null  3     0      null  null
    # 1   lambda       null  null  1      x     x
    # 2   variable     1     null  2      x     x
    # 3   variable     null  null  1      y     y
    ```
    """
    rows: list[dict] = []
    _flatten(term, rows, {}, 0)
    return pl.DataFrame(rows, schema=SCHEMA)


def _build(rows: list[dict], i: int) -> tuple[Term, int]:
    if i >= len(rows):
        raise ValueError(f"node table ends in the middle of a term (missing node {i})")
    row = rows[i]
    kind = row["kind"]
    if kind in (VARIABLE, LAMBDA):
        if row["name"] is None:
            raise ValueError(f"node {i} is a {kind} without a name")
        identifier = Identifier(row["name"], row["original"] or row["name"])
        if kind == VARIABLE:
            return Variable(identifier), i + 1
        body, end = _build(rows, i + 1)
        return Abstraction(identifier, body), end
    if kind == APPLICATION:
        function, end = _build(rows, i + 1)
        if row["arg"] != end:
            raise ValueError(f"application {i} should have its argument at {end}, got {row['arg']}")
        argument, end = _build(rows, end)
        return Application(function, argument), end
    raise ValueError(f"node {i} has unknown kind {kind!r}")


def from_nodes(nodes: pl.DataFrame) -> Term:
    """
    Rebuild a term from its node table.

    Binding is decided by names, the `ref` and `depth` columns are not read.
    """
    nodes = nodes.match_to_schema(SCHEMA).sort("id")
    rows = nodes.rows(named=True)
    if [row["id"] for row in rows] != list(range(len(rows))):
        raise ValueError("node ids must be 0, 1, 2 ...")
    term, end = _build(rows, 0)
    if end != len(rows):
        raise ValueError(f"{len(rows) - end} nodes are not part of the term")
    return term


def chain_to_frame(terms: Iterable[Term], origins: bool = True) -> pl.DataFrame:
    """
    Build the trace table of an already computed reduction chain.
    """
    rows = []
    for i, t in enumerate(terms):
        nodes = to_nodes(t)
        rows.append(
            {
                "step": i,
                "expr": render(t, origins),
                "size": len(nodes),
                "depth": nodes["depth"].max(),
                "free": sorted(free_names(t)),
            }
        )
    return pl.DataFrame(rows, schema=TRACE_SCHEMA)


def trace(term: Term, max_steps: Optional[int] = None, origins: bool = True) -> pl.DataFrame:
    """
    Reduce a term and collect every intermediate term in a dataframe.

    Args:
        max_steps: stop after this many reductions. If None, this does not return for a
            term without normal form.
        origins: see `printer.render`
    """
    chain = reduction_chain(term)
    if max_steps is not None:
        chain = islice(chain, max_steps + 1)
    return chain_to_frame(chain, origins)
