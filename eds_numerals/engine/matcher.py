import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .document import Document
from .errors import IterationLimitExceeded
from .items import Stash, match_item
from .ranking import select
from .rules import Rule, RuleSet, apply
from .tokens import OUTPUT_DIMENSIONS, PAYLOAD_TYPES, Dimension, Token

logger = logging.getLogger(__name__)

MIN_ITERATIONS = 16


def default_max_iterations(text: str) -> int:
    return max(MIN_ITERATIONS, 2 * len(text))


class Candidate(NamedTuple):
    rule: Rule
    rule_index: int
    tokens: Tuple[Token, ...]


class Matcher:
    """
    Saturates a text with the tokens a rule set can build.

    Each pass scans the text and the tokens produced so far for every rule,
    runs the productions of the bound windows, and merges the new tokens in the
    stash. Passes are repeated until one of them produces nothing new.

    Parameters
    ----------
    rules: RuleSet
        The active rules, by decreasing priority
    max_iterations: Optional[int]
        Maximum number of passes. Defaults to twice the length of the text,
        with a minimum of 16.
    """

    def __init__(self, rules: RuleSet, max_iterations: Optional[int] = None):
        if not isinstance(rules, RuleSet):
            rules = RuleSet(rules)
        if max_iterations is not None and max_iterations < 1:
            raise ValueError("max_iterations must be a positive integer")
        self.rules = rules
        self.max_iterations = max_iterations

    def _bind(
        self,
        items: Sequence,
        document: Document,
        stash: Stash,
        route: Tuple[Token, ...],
    ) -> Iterator[Tuple[Token, ...]]:
        if not items:
            yield route
            return
        position = route[-1].end
        for token in match_item(items[0], document, stash, position, first=False):
            yield from self._bind(items[1:], document, stash, (*route, token))

    def scan(self, document: Document, stash: Stash) -> List[Candidate]:
        candidates = []
        for index, rule in enumerate(self.rules):
            first, rest = rule.pattern[0], rule.pattern[1:]
            for token in match_item(first, document, stash, 0, first=True):
                for route in self._bind(rest, document, stash, (token,)):
                    candidates.append(Candidate(rule, index, route))
        return candidates

    def produce(self, candidates: Iterable[Candidate]) -> List[Token]:
        produced = []
        for candidate in candidates:
            token = apply(candidate.rule, candidate.tokens, candidate.rule_index)
            if token is not None:
                produced.append(token)
        return produced

    def _check_seed(self, document: Document, token: Token) -> None:
        if token.dim not in OUTPUT_DIMENSIONS:
            raise ValueError(f"Cannot seed a {token.dim} token")
        if not isinstance(token.value, PAYLOAD_TYPES[token.dim]):
            raise TypeError(
                f"Invalid payload for a {token.dim} token: {token.value!r}"
            )
        if not 0 <= token.start <= token.end <= len(document):
            raise ValueError(
                f"Token range ({token.start}, {token.end}) is outside of the text"
            )

    def run(self, text: str, seed: Iterable[Token] = ()) -> List[Token]:
        """
        Run passes until a fixpoint is reached.

        Parameters
        ----------
        text: str
            The text to parse
        seed: Iterable[Token]
            Tokens to start from, e.g. the output of a previous run

        Returns
        -------
        List[Token]
            Every token of the stable stash, unresolved
        """
        document = Document(text)
        seed = list(seed)
        for token in seed:
            self._check_seed(document, token)
        stash = Stash(seed)
        max_iterations = self.max_iterations or default_max_iterations(text)

        for iteration in range(1, max_iterations + 1):
            candidates = self.scan(document, stash)
            produced = self.produce(candidates)
            added = sum(stash.add(token) for token in produced)
            logger.debug(
                "Pass %d: %d candidates, %d produced, %d new tokens",
                iteration,
                len(candidates),
                len(produced),
                added,
            )
            if not added:
                return list(stash)

        raise IterationLimitExceeded(max_iterations, len(stash))

    def __call__(
        self,
        text: str,
        dims: Optional[Iterable[Dimension]] = None,
        seed: Iterable[Token] = (),
    ) -> List[Token]:
        """
        Parse `text` and resolve the competing tokens.

        Parameters
        ----------
        text: str
            The text to parse
        dims: Optional[Iterable[Dimension]]
            Dimensions to output, all of them by default
        seed: Iterable[Token]
            Tokens to start from

        Returns
        -------
        List[Token]
            Resolved tokens, by ascending start position
        """
        dims = set(OUTPUT_DIMENSIONS if dims is None else map(Dimension, dims))
        tokens = self.run(text, seed=seed)
        return select(token for token in tokens if token.dim in dims)
