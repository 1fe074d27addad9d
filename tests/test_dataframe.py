import polars as pl
import pytest

from currystep import from_nodes, parse, to_nodes, trace, uniquify
from currystep.dataframe import SCHEMA, TRACE_SCHEMA


def test_to_nodes():
    nodes = to_nodes(parse("(#x -> x) y"))
    assert nodes.schema == SCHEMA
    assert nodes.select("id", "kind", "ref", "arg", "depth", "name").rows() == [
        (0, "application", None, 3, 0, None),
        (1, "lambda", None, None, 1, "x"),
        (2, "variable", 1, None, 2, "x"),
        (3, "variable", None, None, 1, "y"),
    ]


def test_to_nodes_shadowing():
    nodes = to_nodes(parse("#x -> (#x -> x) x"))
    assert nodes["ref"].to_list() == [None, None, None, 2, 0]


def test_to_nodes_keeps_original_names():
    nodes = to_nodes(uniquify(parse("#x -> x")))
    assert nodes["name"].to_list() == ["v0", "v0"]
    assert nodes["original"].to_list() == ["x", "x"]


@pytest.mark.parametrize(
    "text",
    ["x", "a b c", "#x -> #y -> x y", "(#t -> t (#a -> #b -> a)) (#t -> t x y)"],
)
def test_from_nodes(text):
    term = uniquify(parse(text))
    assert from_nodes(to_nodes(term)) == term


def test_from_nodes_invalid():
    nodes = to_nodes(parse("a b"))
    with pytest.raises(ValueError):
        from_nodes(nodes.head(2))
    with pytest.raises(ValueError):
        from_nodes(nodes.with_columns(arg=pl.lit(None, dtype=pl.UInt32)))
    with pytest.raises(ValueError):
        from_nodes(nodes.with_columns(kind=pl.lit("constant")))

    b = to_nodes(parse("b")).with_columns(id=pl.lit(1, dtype=pl.UInt32))
    extra = pl.concat([to_nodes(parse("a")), b])
    with pytest.raises(ValueError):
        from_nodes(extra)


def test_trace():
    df = trace(parse("(#x -> x) y"))
    assert df.schema == TRACE_SCHEMA
    assert df["step"].to_list() == [0, 1]
    assert df["expr"].to_list() == ["(#v0<x> -> v0<x>) y", "y"]
    assert df["size"].to_list() == [4, 1]
    assert df["depth"].to_list() == [2, 0]
    assert df["free"].to_list() == [["y"], ["y"]]


def test_trace_plain():
    df = trace(parse("#x -> x"), origins=False)
    assert df["expr"].to_list() == ["#v0 -> v0"]


def test_trace_max_steps():
    omega = parse("(#x -> x x) (#x -> x x)")
    assert len(trace(omega, max_steps=0)) == 1
    assert len(trace(omega, max_steps=3)) == 4
    assert trace(parse("(#x -> x) y"), max_steps=10)["expr"].to_list()[-1] == "y"
