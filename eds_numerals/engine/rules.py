import logging
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence

from .errors import MalformedRuleTable
from .items import PATTERN_ITEM_TYPES, OneOf, PatternItem, Predicate, Regex
from .tokens import OUTPUT_DIMENSIONS, PAYLOAD_TYPES, Dimension, Token

logger = logging.getLogger(__name__)

Production = Callable[[Sequence[Token]], Optional[Token]]

# errors a production may raise on captures it cannot handle
REJECTED_ERRORS = (ValueError, ArithmeticError, IndexError)


class Rule(NamedTuple):
    name: str
    pattern: Sequence[PatternItem]
    produce: Production


def rule(name: str, pattern: Iterable[PatternItem], produce: Production) -> Rule:
    return Rule(name, tuple(pattern), produce)


def apply(
    rule: Rule, tokens: Sequence[Token], rule_index: int = -1
) -> Optional[Token]:
    """
    Run the production of `rule` on a bound window of tokens.

    Parameters
    ----------
    rule: Rule
        The rule that matched
    tokens: Sequence[Token]
        The bound tokens, one per pattern item, in pattern order
    rule_index: int
        Position of the rule in the active rule list

    Returns
    -------
    Optional[Token]
        The produced token, spanning the whole window, or None when the window
        does not bind the pattern or the production rejects it.
    """
    if not tokens or len(tokens) != len(rule.pattern):
        return None
    try:
        produced = rule.produce(tokens)
    except REJECTED_ERRORS as e:
        logger.debug("Rule %r raised on %r: %s", rule.name, tokens, e)
        return None
    if produced is None:
        logger.debug(
            "Rule %r rejected %r",
            rule.name,
            [token.value for token in tokens],
        )
        return None
    if not isinstance(produced, Token) or not isinstance(
        produced.value, PAYLOAD_TYPES.get(produced.dim, ())
    ):
        logger.debug("Rule %r produced an invalid token %r", rule.name, produced)
        return None
    if produced.dim == Dimension.REGEX_MATCH:
        return None
    return produced._replace(
        start=tokens[0].start,
        end=tokens[-1].end,
        rule=rule.name,
        rule_index=rule_index,
        children=tuple(tokens),
    )


class RuleSet(Sequence[Rule]):
    """
    Validated, immutable, ordered list of rules.

    The rule order is meaningful: it is the priority used to break ties between
    tokens covering the same range.

    Parameters
    ----------
    rules: Iterable[Rule]
        The rules, by decreasing priority
    dim: Optional[Dimension]
        Dimension the rules produce, when the set is a single table
    """

    def __init__(self, rules: Iterable[Rule], dim: Optional[Dimension] = None):
        self._rules = tuple(rules)
        self.dim = dim
        self.validate()

    def __getitem__(self, item):
        return self._rules[item]

    def __len__(self):
        return len(self._rules)

    def __add__(self, other: "RuleSet") -> "RuleSet":
        return RuleSet((*self._rules, *other))

    def __repr__(self):
        return f"RuleSet({[r.name for r in self._rules]!r}, dim={self.dim!r})"

    @property
    def names(self) -> List[str]:
        return [r.name for r in self._rules]

    def validate(self) -> None:
        errors: List[Dict[str, Any]] = []
        if self.dim is not None and self.dim not in OUTPUT_DIMENSIONS:
            errors.append({"rule": None, "error": f"unknown dimension {self.dim!r}"})
        seen = set()
        for r in self._rules:
            if not isinstance(r, Rule):
                errors.append({"rule": repr(r), "error": "not a Rule"})
                continue
            if r.name in seen:
                errors.append({"rule": r.name, "error": "duplicate rule name"})
            seen.add(r.name)
            if not r.pattern:
                errors.append({"rule": r.name, "error": "empty pattern"})
            if not callable(r.produce):
                errors.append({"rule": r.name, "error": "production is not callable"})
            for item in r.pattern:
                if not isinstance(item, PATTERN_ITEM_TYPES):
                    errors.append(
                        {"rule": r.name, "error": f"unknown pattern item {item!r}"}
                    )
                elif isinstance(item, Regex) and item.compiled is None:
                    errors.append(
                        {"rule": r.name, "error": f"invalid regex {item.pattern!r}"}
                    )
                elif isinstance(item, (Predicate, OneOf)) and (
                    item.dim not in OUTPUT_DIMENSIONS
                ):
                    errors.append(
                        {"rule": r.name, "error": f"unknown dimension {item.dim!r}"}
                    )
        if errors:
            raise MalformedRuleTable(errors)
