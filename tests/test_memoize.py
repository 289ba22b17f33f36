import threading

import pytest

from fnkit.memoize import Memoized, default_normalize, memoize


def test_computes_once_per_key():
    calls = []

    def square(x):
        calls.append(x)
        return x * x

    fast = memoize(square)
    assert fast(3) == 9
    assert fast(3) == 9
    assert fast(4) == 16
    assert calls == [3, 4]
    assert fast.cache_info() == (1, 2, 2)


def test_multiple_results_are_stored_whole():
    divmod_ = memoize(divmod)
    assert divmod_(7, 2) == (3, 1)
    assert divmod_(7, 2) == (3, 1)
    assert len(divmod_) == 1


def test_custom_normalize():
    calls = []

    @memoize(normalize=lambda name, *rest: name)
    def intern(name, value):
        calls.append(value)
        return (name, value)

    assert intern("a", 1) == ("a", 1)
    # same normalized key returns the first result
    assert intern("a", 2) == ("a", 1)
    assert calls == [1]
    assert "a" in intern


def test_default_normalize_includes_keywords():
    assert default_normalize(1, b=2) != default_normalize(1, b=3)
    assert default_normalize({"y": 1, "x": 2}) == default_normalize({"x": 2, "y": 1})


def test_failure_is_not_cached():
    attempts = []

    def flaky(x):
        attempts.append(x)
        if len(attempts) == 1:
            raise RuntimeError("boom")
        return x

    fn = memoize(flaky)
    with pytest.raises(RuntimeError):
        fn(1)
    assert len(fn) == 0
    assert fn(1) == 1
    assert attempts == [1, 1]


def test_cache_clear():
    fn = memoize(lambda x: [x])
    first = fn(1)
    fn.cache_clear()
    assert fn(1) is not first
    assert fn.cache_info().misses == 1


def test_keeps_wrapped_metadata():
    def documented(x):
        """Doc."""
        return x

    fn = memoize(documented)
    assert isinstance(fn, Memoized)
    assert fn.__name__ == "documented"
    assert fn.__doc__ == "Doc."


def test_recursive_memoized_function():
    @memoize
    def fib(n):
        return n if n < 2 else fib(n - 1) + fib(n - 2)

    assert fib(60) == 1548008755920


def test_method_decorator_binds_instance():
    class Grid:
        def __init__(self, size):
            self.size = size

        @memoize
        def cells(self, scale):
            return self.size * scale

    grid = Grid(3)
    assert grid.cells(2) == 6
    assert Grid.cells.cache_info().misses == 1


def test_concurrent_first_use_computes_once():
    calls = []
    gate = threading.Event()

    def slow(x):
        calls.append(x)
        gate.wait(0.05)
        return x

    fn = memoize(slow)
    threads = [threading.Thread(target=fn, args=(1,)) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert calls == [1]
