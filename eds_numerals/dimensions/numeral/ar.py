"""Arabic numerals."""
from eds_numerals.engine.items import dimension, one_of, regex
from eds_numerals.engine.rules import RuleSet, rule
from eds_numerals.engine.tokens import Dimension

from .helpers import (
    decimals_to_double,
    double,
    integer,
    multiply,
    number_between,
    number_with,
    numeral_value,
    parse_decimal,
    parse_double,
    parse_int,
    with_grain,
    with_multipliable,
)

tens = {
    "عشرون": 20,
    "ثلاثون": 30,
    "أربعون": 40,
    "خمسون": 50,
    "ستون": 60,
    "سبعون": 70,
    "ثمانون": 80,
    "تسعون": 90,
}

hundreds = {
    "مائة": 100,
    "مائتان": 200,
    "ثلاثمائة": 300,
    "أربعمائة": 400,
    "خمسمائة": 500,
    "ستمائة": 600,
    "سبعمائة": 700,
    "ثمانمائة": 800,
    "تسعمائة": 900,
}

# value, grain
powers_of_ten = {
    "مائة": (1e2, 2),
    "مئات": (1e2, 2),
    "ألف": (1e3, 3),
    "الف": (1e3, 3),
    "آلاف": (1e3, 3),
    "ملايي": (1e6, 6),
    "ملايين": (1e6, 6),
}


def first_group(tokens):
    return tokens[0].value.groups[0]


def constant(value):
    return lambda tokens: integer(value)


def lookup(table):
    def produce(tokens):
        value = table.get(first_group(tokens).lower())
        return integer(value) if value is not None else None

    return produce


def sum_ends(tokens):
    return double(numeral_value(tokens[0]) + numeral_value(tokens[-1]))


def plus_ten(tokens):
    return double(numeral_value(tokens[0]) + 10)


def without_commas(tokens):
    return double(parse_double(first_group(tokens).replace(",", "")))


def power_of_ten(tokens):
    found = powers_of_ten.get(first_group(tokens).lower())
    if found is None:
        return None
    value, grain = found
    return with_multipliable(with_grain(grain, double(value)))


def negate(tokens):
    return double(-numeral_value(tokens[1]))


def with_decimals(tokens):
    return double(
        numeral_value(tokens[0]) + decimals_to_double(numeral_value(tokens[2]))
    )


rules = RuleSet(
    [
        rule(
            "decimal number",
            [regex(r"(\d*\.\d+)")],
            lambda tokens: parse_decimal(True, first_group(tokens)),
        ),
        rule(
            "decimal with thousands separator",
            [regex(r"(\d+(,\d\d\d)+\.\d+)")],
            without_commas,
        ),
        rule("integer 0", [regex("(صفر)")], constant(0)),
        rule("integer 7", [regex("(سبعة|سبع)")], constant(7)),
        rule("integer 8", [regex("(ثمانية|ثمان)")], constant(8)),
        rule("integer 9", [regex("(تسعة|تسع)")], constant(9)),
        rule("integer 10", [regex("(عشرة|عشر)")], constant(10)),
        rule("integer 11", [regex("(إحدى عشر(ة)?)")], constant(11)),
        rule("integer 12", [regex("(إثن(ت)?ى عشر)")], constant(12)),
        rule(
            "integer (20..90)",
            [regex("(عشرون|ثلاثون|أربعون|خمسون|ستون|سبعون|ثمانون|تسعون)")],
            lookup(tens),
        ),
        rule("integer 1", [regex("(واحدة|واحده|واحد)")], constant(1)),
        rule(
            "integer (100..900)",
            [
                regex(
                    "(مائة|مائتان|ثلاثمائة|أربعمائة|خمسمائة|ستمائة|سبعمائة"
                    "|ثمانمائة|تسعمائة)"
                )
            ],
            lookup(hundreds),
        ),
        rule(
            "integer (13..19)",
            [number_between(3, 10), number_with("value", lambda v: v == 10)],
            plus_ten,
        ),
        rule(
            "integer 21..99",
            [number_between(1, 10), regex("و"), one_of(range(20, 100, 10))],
            sum_ends,
        ),
        rule(
            "integer 101..999",
            [one_of(range(100, 1000, 100)), regex("و"), number_between(1, 100)],
            sum_ends,
        ),
        rule("integer 2", [regex("(اثنان|اثنين)")], constant(2)),
        rule("integer 3", [regex("(ثلاثة|ثلاث)")], constant(3)),
        rule("integer 4", [regex("(أربع(ة)?)")], constant(4)),
        rule("integer 5", [regex("(خمس)(ة)?")], constant(5)),
        rule("integer 6", [regex("(ست(ة)?)")], constant(6)),
        rule(
            "integer (numeric)",
            [regex(r"(\d{1,18})")],
            lambda tokens: integer(parse_int(first_group(tokens))),
        ),
        rule(
            "integer with thousands separator ,",
            [regex(r"(\d{1,3}(,\d\d\d){1,5})")],
            without_commas,
        ),
        rule(
            "compose by multiplication",
            [dimension(Dimension.NUMERAL), number_with("multipliable", bool)],
            lambda tokens: multiply(tokens[0], tokens[1]),
        ),
        rule(
            "number dot number",
            [
                dimension(Dimension.NUMERAL),
                regex("فاصلة"),
                number_with("grain", lambda grain: grain is None),
            ],
            with_decimals,
        ),
        rule(
            "numbers prefix with -, minus",
            [regex("-"), dimension(Dimension.NUMERAL)],
            negate,
        ),
        rule(
            "powers of tens",
            [regex("(مائة|مئات|ألف|الف|آلاف|ملايي(ن)?)")],
            power_of_ten,
        ),
    ],
    dim=Dimension.NUMERAL,
)
