from typing import Any, Dict, List, Sequence


class MalformedRuleTable(ValueError):
    """Raised when a rule table cannot be loaded (duplicate names, empty
    patterns, unknown dimensions or regexes that do not compile)."""

    def __init__(self, errors: Sequence[Dict[str, Any]]):
        self.errors: List[Dict[str, Any]] = list(errors)
        summary = ", ".join(
            f"{err.get('rule')!r}: {err.get('error')}" for err in self.errors
        )
        super().__init__(f"Malformed rule table: {summary}")


class IterationLimitExceeded(RuntimeError):
    """Raised when the matcher does not reach a fixpoint in time."""

    def __init__(self, max_iterations: int, stash_size: int):
        self.max_iterations = max_iterations
        self.stash_size = stash_size
        super().__init__(
            f"No fixpoint reached after {max_iterations} iterations "
            f"({stash_size} tokens in the stash)"
        )


class UnknownLocale(ValueError):
    def __init__(self, locale: str, available: Sequence[str]):
        self.locale = locale
        self.available = list(available)
        super().__init__(
            f"No rule table for locale {locale!r}. "
            f"Available locales: {', '.join(self.available)}"
        )
