from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


class Dimension(str, Enum):
    """
    Kinds of values the engine can build. `regex_match` is internal: it tags the
    tokens bound to regex pattern items and never reaches the output.
    """

    REGEX_MATCH = "regex_match"
    NUMERAL = "numeral"
    ORDINAL = "ordinal"

    def __str__(self):
        return self.value


class GroupMatch(BaseModel):
    text: str
    groups: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class NumeralData(BaseModel):
    value: float
    # order of magnitude the number can be multiplied up to, e.g. 2 for "hundred"
    grain: Optional[int] = Field(None, ge=0)
    multipliable: bool = False

    model_config = ConfigDict(frozen=True)


class OrdinalData(BaseModel):
    value: int

    model_config = ConfigDict(frozen=True)


PAYLOAD_TYPES: Dict[Dimension, Type[BaseModel]] = {
    Dimension.REGEX_MATCH: GroupMatch,
    Dimension.NUMERAL: NumeralData,
    Dimension.ORDINAL: OrdinalData,
}

OUTPUT_DIMENSIONS = tuple(dim for dim in Dimension if dim != Dimension.REGEX_MATCH)


class Token(NamedTuple):
    """
    A typed value covering the `[start, end)` character range of the input.

    Tokens are immutable. `rule` and `rule_index` record which rule produced the
    token (`rule_index` is its position in the active rule list, `-1` for tokens
    created outside of a rule), and `children` holds the bound tokens the
    production consumed.
    """

    dim: Dimension
    start: int
    end: int
    value: Any
    rule: Optional[str] = None
    rule_index: int = -1
    children: Tuple["Token", ...] = ()

    @property
    def key(self) -> Tuple[Dimension, int, int, Any]:
        return self.dim, self.start, self.end, self.value

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Token") -> bool:
        return self.start < other.end and other.start < self.end

    def body(self, text: str) -> str:
        return text[self.start : self.end]


def make_token(dim: Dimension, value: Any, start: int = 0, end: int = 0) -> Token:
    """
    Build a token, checking that the payload is the one expected for `dim`.

    Parameters
    ----------
    dim: Dimension
        Kind of the token
    value: Any
        Payload, an instance of `PAYLOAD_TYPES[dim]`
    start: int
        Start character offset
    end: int
        End character offset (exclusive)

    Returns
    -------
    Token
    """
    dim = Dimension(dim)
    expected = PAYLOAD_TYPES[dim]
    if not isinstance(value, expected):
        raise TypeError(
            f"Payload of a {dim} token must be a {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    if not 0 <= start <= end:
        raise ValueError(f"Invalid token range ({start}, {end})")
    return Token(dim, start, end, value)
