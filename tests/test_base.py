from fnkit.base import (
    identity, ipairs, ireverse, is_callable, is_positional, length, nop, pairs, tostring, unpack,
)
from fnkit.iteration import resolve, walk


def drain(triple):
    step, state, key = triple
    out = []
    while True:
        t = step(state, key)
        if t is None:
            return out
        out.append(t)
        key = t[0]


def test_pairs_over_list_is_positional():
    step, state, key = pairs(["a", "b"])
    assert is_positional(step)
    assert key is None
    assert drain((step, state, key)) == [(0, "a"), (1, "b")]


def test_pairs_over_dict_keeps_insertion_order():
    step, _, _ = pairs({"x": 1, "y": 2})
    assert not is_positional(step)
    assert drain(pairs({"x": 1, "y": 2})) == [("x", 1), ("y", 2)]


def test_pairs_step_is_pure():
    step, state, _ = pairs({"x": 1, "y": 2})
    assert step(state, "x") == step(state, "x") == ("y", 2)


def test_ipairs_stops_at_first_missing_index():
    assert drain(ipairs({0: "a", 1: "b", 3: "d", "k": "v"})) == [(0, "a"), (1, "b")]


def test_pairs_materializes_other_iterables():
    assert drain(pairs(c for c in "ab")) == [(0, "a"), (1, "b")]


def test_none_values_do_not_end_iteration():
    assert [t[1] for t in walk(resolve([1, None, 3]))] == [1, None, 3]


def test_length_and_unpack():
    assert length([1, 2, 3]) == 3
    assert length({0: "a", 1: "b", 5: "z"}) == 2
    assert unpack({0: "a", 1: "b", "x": 1}) == ("a", "b")
    assert ireverse([1, 2, 3]) == [3, 2, 1]


def test_identity_and_nop():
    assert identity(1) == 1
    assert identity(1, 2) == (1, 2)
    assert identity() == ()
    assert nop(1, 2, 3) is None
    assert is_callable(nop)
    assert not is_callable([])


def test_tostring_is_deterministic():
    assert tostring({"b": 1, "a": [1, (2, 3)]}) == tostring({"a": [1, (2, 3)], "b": 1})
    assert tostring(["1"]) != tostring([1])
    assert tostring({3, 1, 2}) == "set(1,2,3)"
