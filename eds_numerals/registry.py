from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from eds_numerals.engine.errors import MalformedRuleTable, UnknownLocale
from eds_numerals.engine.rules import RuleSet
from eds_numerals.engine.tokens import OUTPUT_DIMENSIONS, Dimension


def normalize_locale(locale: str) -> str:
    """
    Normalize a locale identifier: `ar-eg`, `AR_EG` -> `ar_EG`, `ET` -> `et`.
    """
    parts = str(locale).strip().replace("-", "_").split("_")
    lang = parts[0].lower()
    if len(parts) > 1 and parts[1]:
        return f"{lang}_{parts[1].upper()}"
    return lang


class RuleTables:
    """
    Read-only table of rule sets keyed by (locale, dimension).

    Parameters
    ----------
    tables: Mapping[Tuple[str, Dimension], RuleSet]
        The rule sets. Locales may be bare languages (`ar`) or region specific
        (`ar_EG`); region specific locales fall back to their language.
    """

    def __init__(self, tables: Mapping[Tuple[str, Dimension], RuleSet]):
        errors = []
        normalized: Dict[Tuple[str, Dimension], RuleSet] = {}
        for (locale, dim), rules in tables.items():
            if dim not in OUTPUT_DIMENSIONS:
                errors.append(
                    {"rule": None, "error": f"unknown dimension {dim!r} for {locale}"}
                )
                continue
            if not isinstance(rules, RuleSet):
                rules = RuleSet(rules, dim=Dimension(dim))
            normalized[(normalize_locale(locale), Dimension(dim))] = rules
        if errors:
            raise MalformedRuleTable(errors)
        self._tables = normalized

    def locales(self) -> List[str]:
        return sorted({locale for locale, _ in self._tables})

    def _resolve(self, locale: str) -> str:
        locale = normalize_locale(locale)
        available = self.locales()
        if locale in available:
            return locale
        lang = locale.split("_")[0]
        if lang in available:
            return lang
        raise UnknownLocale(locale, available)

    def dimensions(self, locale: str) -> List[Dimension]:
        locale = self._resolve(locale)
        return [dim for dim in OUTPUT_DIMENSIONS if (locale, dim) in self._tables]

    def rules(
        self, locale: str, dims: Optional[Iterable[Dimension]] = None
    ) -> RuleSet:
        """
        Concatenate the rule sets of `locale` for the requested dimensions.

        Parameters
        ----------
        locale: str
            Locale identifier
        dims: Optional[Iterable[Dimension]]
            Dimensions whose rules should be active, all of the locale's
            dimensions by default

        Returns
        -------
        RuleSet
        """
        locale = self._resolve(locale)
        dims = self.dimensions(locale) if dims is None else list(map(Dimension, dims))
        rules = RuleSet([])
        for dim in OUTPUT_DIMENSIONS:
            if dim in dims and (locale, dim) in self._tables:
                rules = rules + self._tables[(locale, dim)]
        return rules


@lru_cache(maxsize=None)
def get_rule_tables() -> RuleTables:
    from eds_numerals.dimensions.numeral import ar as numeral_ar
    from eds_numerals.dimensions.ordinal import et as ordinal_et

    return RuleTables(
        {
            ("ar", Dimension.NUMERAL): numeral_ar.rules,
            ("et", Dimension.ORDINAL): ordinal_et.rules,
        }
    )
