import pytest

from eds_numerals.engine.document import Document
from eds_numerals.engine.items import (
    OneOf,
    Predicate,
    Regex,
    Stash,
    dimension,
    match_item,
    one_of,
    predicate,
    regex,
)
from eds_numerals.engine.tokens import Dimension, NumeralData, OrdinalData, Token


def numeral(value, start, end, **kwargs):
    return Token(Dimension.NUMERAL, start, end, NumeralData(value=value), **kwargs)


def test_builders():
    assert isinstance(regex("a+"), Regex)
    assert regex("(").compiled is None
    assert isinstance(dimension(Dimension.NUMERAL), Predicate)
    assert dimension("ordinal").dim is Dimension.ORDINAL
    assert predicate("time", bool).dim == "time"
    item = one_of(range(20, 100, 10))
    assert isinstance(item, OneOf)
    assert item.dim is Dimension.NUMERAL
    assert 20.0 in item.values and 25.0 not in item.values


def test_stash_deduplicates():
    stash = Stash()
    assert stash.add(numeral(4, 0, 5, rule="a", rule_index=3))
    assert not stash.add(numeral(4, 0, 5, rule="b", rule_index=7))
    assert len(stash) == 1
    assert list(stash)[0].rule == "a"


def test_stash_keeps_highest_priority_provenance():
    stash = Stash([numeral(4, 0, 5, rule="b", rule_index=7)])
    assert not stash.add(numeral(4, 0, 5, rule="a", rule_index=3))
    assert [token.rule for token in stash] == ["a"]
    assert [token.rule for token in stash.starting_at(0)] == ["a"]


def test_stash_keeps_same_range_different_payloads():
    stash = Stash()
    stash.add(numeral(100, 0, 4, rule_index=1))
    stash.add(
        Token(
            Dimension.NUMERAL,
            0,
            4,
            NumeralData(value=100, grain=2, multipliable=True),
            rule_index=2,
        )
    )
    assert len(stash) == 2


def test_stash_order():
    tokens = [numeral(2, 4, 5), numeral(1, 0, 1), numeral(3, 4, 6)]
    stash = Stash(tokens)
    assert [t.value.value for t in stash] == [1.0, 2.0, 3.0]
    document = Document("1 - 2 3")
    assert [t.value.value for t in stash.starting_from(document, 1)] == [2.0, 3.0]


def test_match_regex_item():
    document = Document("5 و 3")
    stash = Stash()
    first = match_item(regex(r"(\d)"), document, stash, 0, first=True)
    assert [(t.start, t.end) for t in first] == [(0, 1), (4, 5)]
    assert all(t.dim == Dimension.REGEX_MATCH for t in first)
    assert first[1].value.groups == ("3",)

    adjacent = match_item(regex("و"), document, stash, 1, first=False)
    assert [(t.start, t.end) for t in adjacent] == [(2, 3)]
    assert match_item(regex(r"\d"), document, stash, 1, first=False) == []


def test_unmatched_groups_are_empty():
    document = Document("خمس")
    (token,) = match_item(regex("(خمس)(ة)?"), document, Stash(), 0, first=True)
    assert token.value.groups == ("خمس", "")


def test_match_token_items():
    document = Document("1 2")
    one, two = numeral(1, 0, 1), numeral(2, 2, 3)
    ordinal = Token(Dimension.ORDINAL, 2, 3, OrdinalData(value=2))
    stash = Stash([one, two, ordinal])

    assert match_item(dimension(Dimension.NUMERAL), document, stash, 0, True) == [
        one,
        two,
    ]
    assert match_item(one_of([2]), document, stash, 1, first=False) == [two]
    assert match_item(one_of([1]), document, stash, 1, first=False) == []
    big = predicate(Dimension.NUMERAL, lambda value: value.value > 1)
    assert match_item(big, document, stash, 0, first=True) == [two]
    assert match_item(dimension(Dimension.ORDINAL), document, stash, 1, False) == [
        ordinal
    ]


def test_unknown_item():
    with pytest.raises(TypeError):
        match_item("a", Document("a"), Stash(), 0, first=True)
