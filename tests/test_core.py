import copy

import pytest

from typereflect.core import Bool, List, Nat, Reflect, Reified, Unit, reify


class TestZero(Reflect):
    @classmethod
    def reflect(cls):
        return Nat(0)


class Three(Reflect):
    reflected = Nat(3)


def test_runtime_value_nat():
    assert Nat(42) == Nat(42)
    assert Nat(42).value == 42


def test_runtime_value_bool():
    assert Bool(True) == Bool(True)
    assert Bool(True) != Bool(False)


def test_runtime_value_list():
    val = List((Nat(1), Nat(2)))
    assert val == List([Nat(1), Nat(2)])
    assert len(val) == 2
    assert list(val) == [Nat(1), Nat(2)]
    assert val[1] == Nat(2)


def test_list_of_iterable():
    assert List.of(Nat(n) for n in (1, 2)) == List((Nat(1), Nat(2)))


def test_runtime_value_unit():
    assert Unit() == Unit()
    assert Unit() != List()


def test_runtime_value_clone():
    val = List([Bool(False)])
    assert copy.deepcopy(val) == val


def test_values_are_hashable():
    assert len({Nat(1), Nat(1), List([Nat(1)]), List([Nat(1)])}) == 2


def test_nat_rejects_negative():
    with pytest.raises(ValueError):
        Nat(-1)


def test_nat_rejects_too_large():
    with pytest.raises(ValueError):
        Nat(1 << 64)


def test_nat_rejects_bool():
    with pytest.raises(TypeError):
        Nat(True)


def test_bool_rejects_int():
    with pytest.raises(TypeError):
        Bool(1)


def test_list_rejects_non_values():
    with pytest.raises(TypeError):
        List([1, 2])


def test_reflect_trait_works():
    assert TestZero.reflect() == Nat(0)


def test_reflect_from_class_attribute():
    assert Three.reflect() == Nat(3)


def test_reflect_without_value_raises():
    class Empty(Reflect):
        pass

    with pytest.raises(TypeError):
        Reflect.reflect()
    with pytest.raises(TypeError):
        Empty.reflect()


def test_reify_basic():
    assert reify(42, lambda token: token.reflect() + 1) == 43


def test_reify_string():
    assert reify("hello", lambda token: len(token.reflect())) == 5


def test_reify_nested():
    result = reify(10, lambda outer: reify(20, lambda inner: outer.reflect() + inner.reflect()))
    assert result == 30


def test_reify_vec():
    assert reify([1, 2, 3, 4, 5], lambda token: sum(token.reflect())) == 15


def test_reify_with_reflect_trait():
    def body(token):
        value = token.reflect()
        assert isinstance(value, Nat)
        return value.value

    assert reify(TestZero.reflect(), body) == 0


def test_reify_object_with_method():
    class Hello:
        def greet(self):
            return "hi"

    assert reify(Hello(), lambda token: token.reflect().greet()) == "hi"


def test_reify_slice():
    data = [1, 2, 3]
    assert reify(data[:], lambda token: sum(token.reflect())) == 6


def test_reify_composes_with_reflect():
    def body(token):
        value = token.reflect()
        return value.value * 2

    assert reify(Three.reflect(), body) == 6


def test_token_cannot_escape():
    escaped = reify(42, lambda token: token)
    assert isinstance(escaped, Reified)
    with pytest.raises(RuntimeError):
        escaped.reflect()


def test_token_expires_after_exception():
    holder = []

    def body(token):
        holder.append(token)
        raise KeyError("boom")

    with pytest.raises(KeyError):
        reify(1, body)
    with pytest.raises(RuntimeError):
        holder[0].reflect()