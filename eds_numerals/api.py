import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from confit import validate_arguments
from pydantic import BaseModel, Field, StrictInt

from eds_numerals.engine.matcher import Matcher
from eds_numerals.engine.tokens import Dimension, Token
from eds_numerals.registry import get_rule_tables, normalize_locale


class ParseOptions(BaseModel):
    max_iterations: Optional[int] = Field(None, gt=0)
    # reference time of relative dimensions, unused by numerals and ordinals
    now: Optional[datetime.datetime] = None


class Entity(BaseModel):
    """
    Serializable view of a resolved token.
    """

    dim: Dimension
    body: str
    start: int
    end: int
    value: Union[StrictInt, float]
    grain: Optional[int] = None
    rule: Optional[str] = None

    @classmethod
    def from_token(cls, token: Token, text: str) -> "Entity":
        value = token.value.value
        if token.dim == Dimension.NUMERAL and float(value).is_integer():
            value = int(value)
        return cls(
            dim=token.dim,
            body=token.body(text),
            start=token.start,
            end=token.end,
            value=value,
            grain=getattr(token.value, "grain", None),
            rule=token.rule,
        )

    def to_dict(self) -> Dict[str, Any]:
        record = {
            "dim": str(self.dim),
            "body": self.body,
            "start": self.start,
            "end": self.end,
            "value": {"type": "value", "value": self.value},
        }
        if self.grain is not None:
            record["grain"] = self.grain
        return record


@validate_arguments
class Parser:
    """
    Parser for one locale, with its rules resolved once.

    Parameters
    ----------
    locale: str
        Locale identifier, e.g. `ar` or `et`. Region specific locales (`ar_EG`)
        fall back to their language.
    dims: Optional[List[Dimension]]
        Dimensions to extract, all of the locale's dimensions by default
    max_iterations: Optional[int]
        Maximum number of matching passes, see `Matcher`
    """

    def __init__(
        self,
        locale: str,
        dims: Optional[List[Dimension]] = None,
        max_iterations: Optional[int] = None,
    ):
        tables = get_rule_tables()
        self.locale = normalize_locale(locale)
        self.dims = tables.dimensions(self.locale) if dims is None else list(dims)
        self.matcher = Matcher(
            tables.rules(self.locale, self.dims),
            max_iterations=max_iterations,
        )

    def __call__(
        self,
        text: str,
        now: Optional[datetime.datetime] = None,
        seed: Iterable[Token] = (),
    ) -> List[Token]:
        return self.matcher(text, dims=self.dims, seed=seed)


def parse(
    text: str,
    locale: str,
    dims: Optional[List[Dimension]] = None,
    max_iterations: Optional[int] = None,
    now: Optional[datetime.datetime] = None,
) -> List[Entity]:
    """
    Extract the entities of `text`.

    Parameters
    ----------
    text: str
        The text to parse
    locale: str
        Locale identifier
    dims: Optional[List[Dimension]]
        Dimensions to extract, all of the locale's dimensions by default
    max_iterations: Optional[int]
        Maximum number of matching passes
    now: Optional[datetime.datetime]
        Reference time, for relative dimensions

    Returns
    -------
    List[Entity]
        Entities, by ascending start position
    """
    options = ParseOptions(max_iterations=max_iterations, now=now)
    parser = Parser(locale, dims=dims, max_iterations=options.max_iterations)
    return [Entity.from_token(token, text) for token in parser(text, now=options.now)]
