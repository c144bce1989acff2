import pytest

from crypt0.environment import Env, empty_env


def test_lookup():
    env = empty_env().extend("x", 1)
    assert env.lookup("x") == 1

    with pytest.raises(LookupError):
        env.lookup("y")


def test_extend_does_not_modify_original():
    env = empty_env().extend("x", 1)
    env2 = env.extend("x", 2).extend("y", 3)

    assert env.lookup("x") == 1
    assert "y" not in env
    assert env2.lookup("x") == 2
    assert env2.lookup("y") == 3


def test_remove():
    env = empty_env().extend("x", 1).extend("y", 2)
    assert env.remove("x") == Env({"y": 2})
    assert env.remove("nope") == env
    assert len(env) == 2


def test_retain():
    env = Env({"a": 1, "b": 2, "c": 3})
    assert env.retain({"a", "c", "z"}) == Env({"a": 1, "c": 3})


def test_extend_many():
    env = empty_env().extend_many([("a", 1), ("b", 2), ("a", 3)])
    assert env.to_dict() == {"a": 3, "b": 2}
    assert env.names() == {"a", "b"}
