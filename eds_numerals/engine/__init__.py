from .errors import IterationLimitExceeded, MalformedRuleTable, UnknownLocale
from .items import dimension, one_of, predicate, regex
from .matcher import Matcher
from .ranking import select
from .rules import Rule, RuleSet, rule
from .tokens import Dimension, GroupMatch, NumeralData, OrdinalData, Token, make_token
