from eds_numerals.engine.tokens import Dimension, OrdinalData, Token, make_token


def ordinal(value: int) -> Token:
    return make_token(Dimension.ORDINAL, OrdinalData(value=value))
