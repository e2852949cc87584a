"""
Tests for the environment chain.
"""
import pytest

from loxlang.environment import Environment
from loxlang.exceptions import UndefinedVariableException
from loxlang.tokens import Token, TokenType


def name(lexeme: str, line: int = 1) -> Token:
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


def test_lookup_walks_outward():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    assert inner.get(name("a")) == 1.0


def test_inner_definition_shadows_outer():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    assert inner.get(name("a")) == 2.0
    assert outer.get(name("a")) == 1.0


def test_assign_updates_defining_scope():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 3.0)
    assert outer.values == {"a": 3.0}
    assert not inner.values


def test_define_allows_redefinition():
    env = Environment()
    env.define("a", 1.0)
    env.define("a", None)
    assert env.get(name("a")) is None


def test_missing_names_raise_with_line():
    env = Environment(Environment())
    with pytest.raises(UndefinedVariableException) as excinfo:
        env.get(name("ghost", 9))
    assert excinfo.value.line == 9
    with pytest.raises(UndefinedVariableException):
        env.assign(name("ghost"), 1.0)
