"""Lambda diagrams of terms, drawn with svg.py.

Every variable gets its own column. A lambda is a horizontal bar spanning the variables it binds,
a variable is a vertical line going up to the bar of its lambda, and an application is a link
between its function and its argument.

The layout is computed from the node table (see `dataframe.to_nodes`).
"""

from dataclasses import dataclass
from html import escape
from itertools import islice
from typing import Iterable, Optional

import polars as pl
import svg

from .core import reduction_chain
from .dataframe import APPLICATION, LAMBDA, VARIABLE, to_nodes
from .printer import render
from .term import Term

__all__ = ["compute_layout", "compute_height", "to_svg", "show", "show_reduction", "Html"]


@dataclass
class Interval:
    values: Optional[tuple[int, int]]

    def __or__(self, other: "Interval") -> "Interval":
        if self.values is None:
            return other
        if other.values is None:
            return self
        return Interval(
            (min(self.values[0], other.values[0]), max(self.values[1], other.values[1]))
        )

    def __getitem__(self, index):
        assert self.values is not None, "interval is empty"
        return self.values[index]

    def shift(self, offset: int) -> "Interval":
        if self.values is None:
            return self
        return Interval((self.values[0] + offset, self.values[1] + offset))


def log2(n):
    if n <= 0:
        raise ValueError(f"log2 of negative number {n}")
    elif n == 1:
        return 0
    return 1 + log2(n // 2)


def count_variables(nodes: pl.DataFrame) -> int:
    return nodes.filter(pl.col("kind") == VARIABLE).height


def compute_layout(nodes: pl.DataFrame) -> tuple[dict[int, Interval], dict[int, Interval]]:
    """
    Compute the columns (x) and rows (y) covered by each node.
    """
    kinds = nodes["kind"]
    y = {0: Interval((0, 0))}
    x = {}
    for node, kind, arg in nodes.select("id", "kind", "arg").iter_rows():
        if kind == VARIABLE:
            continue
        child = node + 1
        if kind == APPLICATION:
            y[child] = y[node].shift(1 if kinds[child] == APPLICATION else 0)
            y[arg] = y[node]
        else:
            y[child] = y[node].shift(1)

    next_var_x = count_variables(nodes) - 1

    for node, kind, ref in nodes.sort("id", descending=True).select("id", "kind", "ref").iter_rows():
        if kind == VARIABLE:
            x[node] = Interval((next_var_x, next_var_x))
            next_var_x -= 1
            if ref is not None:
                x[ref] = x[node] | x.get(ref, Interval(None))
        else:
            child = node + 1
            x[node] = x[child] | x.get(node, Interval(None))
            y[node] = y[child] | y[node]
    return x, y


def compute_height(nodes: pl.DataFrame) -> int:
    _, y = compute_layout(nodes)
    return max(interval[1] for interval in y.values() if interval.values)


def draw(
    x: dict[int, Interval],
    y: dict[int, Interval],
    node: int,
    kind: str,
    ref: Optional[int],
    arg: Optional[int],
) -> Iterable[svg.Element]:
    x_node = x[node]
    y_node = y[node]

    stroke_width = 0.05
    stroke = "gray"
    if kind == APPLICATION:
        color = "transparent"
        stroke_width = 0.1
        stroke = "orange"
    elif kind == LAMBDA:
        color = "blue"
    elif ref is not None:
        color = "red"
    else:
        # free variable
        color = "purple"

    yield svg.Rect(
        x=0.1 + x_node[0],
        y=0.1 + y_node[0],
        width=0.8 + x_node[1] - x_node[0],
        height=0.8,
        fill=color,
        fill_opacity=0 if kind == APPLICATION else 1,
        stroke=stroke,
        stroke_width=stroke_width,
    )

    if ref is not None:
        yield svg.Line(
            x1=x_node[0] + 0.5,
            y1=y_node[0] + 0.1,
            x2=x_node[0] + 0.5,
            y2=y[ref][0] + 0.9,
            stroke="gray",
            stroke_width=0.2,
        )

    if arg is not None:
        x_arg = x[arg]
        y_arg = y[arg]
        yield svg.Line(
            x1=0.5 + x_node[1],
            y1=0.5 + y_node[0],
            x2=0.5 + x_arg[0],
            y2=0.5 + y_arg[0],
            stroke="black",
            stroke_width=0.05,
        )
        yield svg.Circle(cx=0.5 + x_node[1], cy=0.5 + y_node[0], r=0.1, fill="black")


def to_svg(term: Term) -> svg.SVG:
    nodes = to_nodes(term)
    x, y = compute_layout(nodes)

    elements = []
    for node, kind, ref, arg in (
        nodes.sort("id", descending=True).select("id", "kind", "ref", "arg").iter_rows()
    ):
        elements.extend(draw(x, y, node, kind, ref, arg))

    width = (1 << (1 + log2(count_variables(nodes)))) + 4
    height = compute_height(nodes) + 1

    # prefered size in pixels
    H = height * 40
    return svg.SVG(
        xmlns="http://www.w3.org/2000/svg",
        viewBox=f"{-1} 0 {width} {height}",  # type: ignore
        elements=elements,
        style=f"max-height:{H}px",
    )


class Html:
    def __init__(self, content: str):
        self.content = content

    def _repr_html_(self):
        return self.content


def _figure(term: Term, origins: bool) -> str:
    return (
        '<figure style="margin:0 0 20px 0">'
        f"{to_svg(term).as_str()}"
        f"<figcaption><code>{escape(render(term, origins))}</code></figcaption>"
        "</figure>"
    )


def show(term: Term, origins: bool = True) -> Html:
    """Diagram of a term with its rendering, for notebooks."""
    return Html(f"<div>{_figure(term, origins)}</div>")


def show_reduction(term: Term, max_steps: int = 20, origins: bool = True) -> Html:
    """Diagram of every term of the reduction chain, up to `max_steps` reductions."""
    figures = [_figure(t, origins) for t in islice(reduction_chain(term), max_steps + 1)]
    return Html('<div style="width:100%">' + "".join(figures) + "</div>")
