import pytest

from fnkit.lambdas import lambda_
from fnkit.operators import OPERATORS, get_operator


@pytest.mark.parametrize("symbol, args, expected", [
    ("+", (2, 3), 5),
    ("-", (2, 3), -1),
    ("-", (2,), -2),
    ("*", (2, 3), 6),
    ("/", (3, 2), 1.5),
    ("//", (7, 2), 3),
    ("%", (7, 2), 1),
    ("**", (2, 10), 1024),
    ("^", (6, 3), 5),
    ("==", (1, 1), True),
    ("~=", (1, 2), True),
    ("<=", (2, 2), True),
    ("in", (2, [1, 2]), True),
    ("not", (0,), True),
    ("and", (1, 0), 0),
    ("or", (0, "x"), "x"),
    ("[]", ({"k": "v"}, "k"), "v"),
    ("{}", (1, 2), [1, 2]),
    ("..", ("a", 1, None), "a1None"),
    ("#", ([1, 2, 3],), 3),
])
def test_operator_semantics(symbol, args, expected):
    assert get_operator(symbol)(*args) == expected


def test_table_is_read_only():
    with pytest.raises(TypeError):
        OPERATORS["+"] = None


def test_unknown_symbol():
    with pytest.raises(KeyError):
        get_operator("<=>")


def test_minus_does_not_treat_none_as_missing():
    with pytest.raises(TypeError):
        OPERATORS["-"](3, None)
    with pytest.raises(TypeError):
        OPERATORS["-"]()


def test_operator_lambda_is_table_entry():
    assert lambda_("-") is get_operator("-")
    assert lambda_("..")("a", "b") == "ab"
