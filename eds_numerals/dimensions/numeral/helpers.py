import math
from typing import Any, Callable, Optional

from eds_numerals.engine.items import Predicate, predicate
from eds_numerals.engine.tokens import Dimension, NumeralData, Token, make_token


def numeral_value(token: Token) -> Optional[float]:
    if token.dim != Dimension.NUMERAL:
        return None
    return token.value.value


def double(value: float) -> Optional[Token]:
    if math.isnan(value) or math.isinf(value):
        return None
    return make_token(Dimension.NUMERAL, NumeralData(value=value))


def integer(value: int) -> Optional[Token]:
    return double(float(value))


def with_grain(grain: int, token: Optional[Token]) -> Optional[Token]:
    if token is None or token.dim != Dimension.NUMERAL:
        return None
    value = token.value
    return token._replace(
        value=NumeralData(
            value=value.value, grain=grain, multipliable=value.multipliable
        )
    )


def with_multipliable(token: Optional[Token]) -> Optional[Token]:
    if token is None or token.dim != Dimension.NUMERAL:
        return None
    value = token.value
    return token._replace(
        value=NumeralData(value=value.value, grain=value.grain, multipliable=True)
    )


def multiply(token1: Token, token2: Token) -> Optional[Token]:
    """
    Compose two numerals by multiplication, e.g. "two" and "hundred".

    When the right operand has a grain, it must be larger than the left one
    ("two hundred" but not "hundred two"), and the product keeps that grain.
    """
    v1, v2 = numeral_value(token1), numeral_value(token2)
    if v1 is None or v2 is None:
        return None
    grain = token2.value.grain
    if grain is None:
        return double(v1 * v2)
    if v2 > v1:
        return with_grain(grain, double(v1 * v2))
    return None


def decimals_to_double(value: float) -> float:
    """
    Turn the digits after a decimal mark into a fraction: 5 -> 0.5, 25 -> 0.25.
    Only the first ten powers of ten are tried, larger values give 0.
    """
    for exponent in range(10):
        multiplier = 10**exponent
        if value < multiplier:
            return value / multiplier
    return 0.0


def parse_int(text: str) -> int:
    return int(text)


def parse_double(text: str) -> float:
    return float(text)


def parse_decimal(is_dot: bool, text: str) -> Optional[Token]:
    if not is_dot:
        text = text.replace(",", ".")
    return double(parse_double(text))


def number_with(attr: str, fn: Callable[[Any], bool]) -> Predicate:
    return predicate(
        Dimension.NUMERAL,
        lambda value: bool(fn(getattr(value, attr))),
        f"numeral with {attr}",
    )


def number_between(low: float, up: float) -> Predicate:
    """Non-multipliable numerals in `[low, up)`."""
    return predicate(
        Dimension.NUMERAL,
        lambda value: not value.multipliable and low <= value.value < up,
        f"numeral in [{low}, {up})",
    )
