import logging

import pytest

from eds_numerals.dimensions.numeral.helpers import integer, numeral_value
from eds_numerals.engine.errors import MalformedRuleTable
from eds_numerals.engine.items import dimension, predicate, regex
from eds_numerals.engine.rules import RuleSet, apply, rule
from eds_numerals.engine.tokens import Dimension, GroupMatch, NumeralData, Token


def leaf(text, start=0):
    return Token(
        Dimension.REGEX_MATCH,
        start,
        start + len(text),
        GroupMatch(text=text, groups=(text,)),
    )


def test_apply_spans_the_window():
    r = rule("sum", [dimension(Dimension.NUMERAL)] * 2, lambda ts: integer(3))
    tokens = [
        Token(Dimension.NUMERAL, 0, 1, NumeralData(value=1)),
        Token(Dimension.NUMERAL, 2, 3, NumeralData(value=2)),
    ]
    token = apply(r, tokens, rule_index=4)
    assert (token.start, token.end) == (0, 3)
    assert token.value.value == 3.0
    assert token.rule == "sum"
    assert token.rule_index == 4
    assert token.children == tuple(tokens)


def test_apply_rejections(caplog):
    caplog.set_level(logging.DEBUG, logger="eds_numerals.engine.rules")
    none = rule("none", [regex("a")], lambda ts: None)
    assert apply(none, [leaf("a")]) is None

    division = rule("division", [regex("a")], lambda ts: integer(1 / 0))
    assert apply(division, [leaf("a")]) is None

    parse = rule("parse", [regex("a")], lambda ts: integer(int("a")))
    assert apply(parse, [leaf("a")]) is None

    regex_output = rule("regex", [regex("a")], lambda ts: ts[0])
    assert apply(regex_output, [leaf("a")]) is None

    assert "Rule 'none' rejected" in caplog.text


def test_apply_checks_the_window_size():
    r = rule("pair", [regex("a"), regex("b")], lambda ts: integer(1))
    assert apply(r, [leaf("a")]) is None
    assert apply(r, []) is None


def test_unexpected_errors_propagate():
    r = rule("broken", [regex("a")], lambda ts: {}["missing"])
    with pytest.raises(KeyError):
        apply(r, [leaf("a")])


def test_rule_set():
    rules = RuleSet(
        [
            rule("one", [regex("one")], lambda ts: integer(1)),
            rule(
                "next",
                [dimension(Dimension.NUMERAL)],
                lambda ts: integer(numeral_value(ts[0]) + 1),
            ),
        ],
        dim=Dimension.NUMERAL,
    )
    assert len(rules) == 2
    assert rules.names == ["one", "next"]
    assert rules[0].name == "one"
    assert isinstance(rules[0].pattern, tuple)

    other = RuleSet([rule("two", [regex("two")], lambda ts: integer(2))])
    assert (rules + other).names == ["one", "next", "two"]


@pytest.mark.parametrize(
    "rules,error",
    [
        (
            [
                rule("one", [regex("one")], lambda ts: integer(1)),
                rule("one", [regex("un")], lambda ts: integer(1)),
            ],
            "duplicate rule name",
        ),
        ([rule("empty", [], lambda ts: integer(1))], "empty pattern"),
        ([rule("invalid", [regex("(")], lambda ts: integer(1))], "invalid regex"),
        (
            [rule("time", [predicate("time", bool)], lambda ts: integer(1))],
            "unknown dimension",
        ),
        ([rule("not callable", [regex("a")], None)], "production is not callable"),
        ([rule("item", ["a"], lambda ts: integer(1))], "unknown pattern item"),
        (["not a rule"], "not a Rule"),
    ],
)
def test_malformed_rule_table(rules, error):
    with pytest.raises(MalformedRuleTable) as e:
        RuleSet(rules)
    assert any(error in err["error"] for err in e.value.errors)
    assert "Malformed rule table" in str(e.value)


def test_unknown_rule_set_dimension():
    with pytest.raises(MalformedRuleTable):
        RuleSet([], dim="time")


def test_concatenation_is_validated():
    one = RuleSet([rule("one", [regex("one")], lambda ts: integer(1))])
    with pytest.raises(MalformedRuleTable):
        one + one
