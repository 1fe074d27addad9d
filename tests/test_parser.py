import pytest

from currystep import L, ParseError, V, parse
from currystep.parser import tokenize


def test_tokenize():
    kinds = [tok.kind for tok in tokenize("(#x -> x) y")]
    assert kinds == ["(", "#", "name", "->", "name", ")", "name", "eof"]
    positions = [tok.position for tok in tokenize(" a  bc")]
    assert positions == [1, 4, 6]


def test_parse():
    a, b, c = V("a"), V("b"), V("c")
    assert parse("x") == V("x")
    assert parse("((x))") == V("x")
    assert parse("a b c") == a(b)(c)
    assert parse("a (b c)") == a(b(c))
    assert parse("#x -> x") == L("x", "x")
    assert parse("#x -> #y -> x") == L("x", "y", "x")
    assert parse("(#x -> x) y") == L("x", "x")(V("y"))
    assert parse("f #x -> x") == V("f")(L("x", "x"))
    assert parse("x' foo_bar") == V("x'")(V("foo_bar"))


def test_lambda_body_extends_right():
    assert parse("#x -> a b") == L("x", V("a")(V("b")))
    assert parse("(#x -> a) b") == L("x", "a")(V("b"))


@pytest.mark.parametrize(
    "text, position",
    [
        ("", 0),
        ("(a", 2),
        ("a )", 2),
        ("#x x", 3),
        ("#", 1),
        ("a $ b", 2),
        ("#(x) -> x", 1),
        ("()", 1),
    ],
)
def test_parse_errors(text, position):
    with pytest.raises(ParseError) as info:
        parse(text)
    assert info.value.position == position
    assert info.value.text == text
    assert isinstance(info.value, ValueError)
