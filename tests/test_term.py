import pytest

from currystep import Abstraction, Application, Identifier, L, V, Variable


def test_identifier():
    x = Identifier.named("x")
    assert x.current_name == "x"
    assert x.original_name == "x"
    assert not x.renamed

    renamed = x.rename("v0")
    assert renamed == Identifier("v0", "x")
    assert renamed.renamed
    # renaming never edits the original identifier
    assert x == Identifier("x", "x")


def test_terms_are_frozen():
    x = V("x")
    with pytest.raises(AttributeError):
        x.identifier = Identifier.named("y")


def test_builders():
    assert V("x") == Variable(Identifier("x", "x"))
    assert L("x", "x") == Abstraction(Identifier.named("x"), V("x"))
    assert L("x", "y", V("x")(V("y"))) == Abstraction(
        Identifier.named("x"),
        Abstraction(Identifier.named("y"), Application(V("x"), V("y"))),
    )


def test_call_is_left_associative():
    a, b, c = V("a"), V("b"), V("c")
    assert a(b)(c) == Application(Application(a, b), c)


def test_invalid_builders():
    with pytest.raises(ValueError):
        L("x")
    with pytest.raises(ValueError):
        L(V("x"), "x")
