"""Estonian ordinals."""
from eds_numerals.engine.items import regex
from eds_numerals.engine.rules import RuleSet, rule
from eds_numerals.engine.tokens import Dimension

from ..numeral.helpers import parse_int
from .helpers import ordinal

ordinals = {
    "esimene": 1,
    "teine": 2,
    "kolmas": 3,
    "neljas": 4,
    "viies": 5,
    "kuues": 6,
    "seitsmes": 7,
    "kaheksas": 8,
    "üheksas": 9,
    "kümnes": 10,
    "üheteistkümnes": 11,
    "kaheteistkümnes": 12,
    "kolmeteistkümnes": 13,
    "neljateistkümnes": 14,
    "viieteistkümnes": 15,
    "kuueteistkümnes": 16,
    "seitsmeteistkümnes": 17,
    "kaheksateistkümnes": 18,
    "üheksateistkümnes": 19,
}


def ordinal_word(tokens):
    value = ordinals.get(tokens[0].value.groups[0].lower())
    return ordinal(value) if value is not None else None


def ordinal_digits(tokens):
    # leading zeros are left out of the group: "007." -> "7"
    return ordinal(parse_int(tokens[0].value.groups[0]))


rules = RuleSet(
    [
        rule("ordinal (digits)", [regex(r"0*(\d+)\.")], ordinal_digits),
        rule(
            "ordinals (first..19th)",
            [regex("(" + "|".join(ordinals) + ")")],
            ordinal_word,
        ),
    ],
    dim=Dimension.ORDINAL,
)
