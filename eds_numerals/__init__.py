from .api import Entity, Parser, parse
from .engine import Dimension, Token
from .pipes.numerals.numerals import NumeralsMatcher
from .adapter import NumeralsDoc2DictConverter
