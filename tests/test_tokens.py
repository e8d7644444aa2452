import pytest
from pydantic import ValidationError

from eds_numerals.engine.tokens import (
    Dimension,
    GroupMatch,
    NumeralData,
    OrdinalData,
    Token,
    make_token,
)


def test_make_token():
    token = make_token(Dimension.NUMERAL, NumeralData(value=4), 0, 5)
    assert token.dim == Dimension.NUMERAL
    assert token.value.value == 4.0
    assert token.value.grain is None
    assert not token.value.multipliable
    assert token.rule is None
    assert token.rule_index == -1
    assert token.children == ()
    assert token.length == 5


def test_make_token_from_string_dimension():
    token = make_token("ordinal", OrdinalData(value=3))
    assert token.dim is Dimension.ORDINAL
    assert str(token.dim) == "ordinal"


def test_payload_mismatch():
    with pytest.raises(TypeError):
        make_token(Dimension.ORDINAL, NumeralData(value=3))
    with pytest.raises(TypeError):
        make_token(Dimension.REGEX_MATCH, OrdinalData(value=3))


def test_invalid_range():
    with pytest.raises(ValueError):
        make_token(Dimension.NUMERAL, NumeralData(value=1), 3, 2)


def test_negative_grain():
    with pytest.raises(ValidationError):
        NumeralData(value=100, grain=-1)


def test_payloads_are_hashable():
    assert NumeralData(value=2, grain=2) == NumeralData(value=2.0, grain=2)
    assert hash(GroupMatch(text="a", groups=("a",))) == hash(
        GroupMatch(text="a", groups=("a",))
    )


def test_overlaps():
    a = Token(Dimension.NUMERAL, 0, 4, NumeralData(value=1))
    b = Token(Dimension.NUMERAL, 3, 6, NumeralData(value=2))
    c = Token(Dimension.NUMERAL, 4, 6, NumeralData(value=3))
    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c)
    assert b.body("0123456") == "345"
