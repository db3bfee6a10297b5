import io

import pytest

from minish.environment import Environment, InvalidIdentifier, builtin_export


@pytest.fixture
def env():
    return Environment(["A=1", "B", "C=x=y"])


def test_entries_are_parsed(env):
    assert env.get("A") == "1"
    assert env.get("B") is None
    assert env.get("C") == "x=y"
    assert env.names() == ["A", "B", "C"]


def test_mapping_entries():
    env = Environment({"HOME": "/home/u"})
    assert env.get("HOME") == "/home/u"
    assert env.names() == ["HOME"]


def test_export_adds_at_end(env):
    env.export("D=4")
    assert env.names()[-1] == "D"
    assert env.get("D") == "4"


def test_export_updates_existing_in_place(env):
    env.export("A=9")
    assert env.get("A") == "9"
    assert env.names() == ["A", "B", "C"]


def test_export_without_value_keeps_existing(env):
    env.export("A")
    assert env.get("A") == "1"


def test_export_empty_value(env):
    env.export("B=")
    assert env.get("B") == ""


@pytest.mark.parametrize("argument", ["1X=2", "=x", "", "A-B=1", "A B"])
def test_export_rejects_invalid(env, argument):
    with pytest.raises(InvalidIdentifier):
        env.export(argument)
    assert env.names() == ["A", "B", "C"]


def test_declarations(env):
    assert env.declarations() == [
        'declare -x A="1"',
        "declare -x B",
        'declare -x C="x=y"',
    ]


def test_path_dirs_skips_empty_parts():
    env = Environment(["PATH=/bin::/usr/bin"])
    assert env.path_dirs() == ["/bin", "/usr/bin"]


def test_path_dirs_unset_or_empty():
    assert Environment([]).path_dirs() == []
    assert Environment(["PATH="]).path_dirs() == []


def test_to_mapping_omits_valueless(env):
    assert env.to_mapping() == {"A": "1", "C": "x=y"}


def test_builtin_export_lists_declarations(env):
    out = io.StringIO()
    assert builtin_export(env, [], out, io.StringIO()) == 0
    assert out.getvalue().splitlines() == env.declarations()


def test_builtin_export_sets_values(env):
    assert builtin_export(env, ["X=1", "Y"], io.StringIO(), io.StringIO()) == 0
    assert env.get("X") == "1"
    assert "Y" in env


def test_builtin_export_stops_on_invalid(env):
    err = io.StringIO()
    assert builtin_export(env, ["1bad", "OK=1"], io.StringIO(), err) == 1
    assert err.getvalue() == " not a valid identifier\n"
    assert "OK" not in env