from typing import List, Optional

from spacy.tokens import Doc, Span

from edsnlp import registry
from edsnlp.core import PipelineProtocol
from edsnlp.pipes.base import BaseNERComponent, SpanSetterArg
from edsnlp.utils.filter import filter_spans

from eds_numerals.api import Parser
from eds_numerals.engine.tokens import Dimension


@registry.factory.register(
    "eds_numerals.numerals",
    assigns=["doc.ents", "doc.spans"],
)
class NumeralsMatcher(BaseNERComponent):
    """
    The `eds_numerals.numerals` component extracts numbers written in digits or
    in words (e.g. `خمسة و عشرون` in Arabic, `kolmas` in Estonian) and resolves
    their value.

    The text of the document is parsed with the rule tables of the requested
    locale, and each resolved value becomes a span labelled with its dimension
    (`numeral`, `ordinal`).

    Parameters
    ----------
    nlp: PipelineProtocol
        The pipeline object
    name: str
        The name of the component
    locale: str
        Locale of the rule tables, e.g. `ar` or `et`
    dims: Optional[List[Dimension]]
        Dimensions to extract. Defaults to all the dimensions of the locale.
    max_iterations: Optional[int]
        Maximum number of matching passes per document
    span_setter: SpanSetterArg
        How to set the spans in the doc. Defaults to `doc.ents` and one span
        group per dimension.
    """

    def __init__(
        self,
        nlp: PipelineProtocol = None,
        name: str = "eds_numerals.numerals",
        *,
        locale: str = "ar",
        dims: Optional[List[Dimension]] = None,
        max_iterations: Optional[int] = None,
        span_setter: SpanSetterArg = {"ents": True, "*": True},
    ):
        super().__init__(nlp, name, span_setter=span_setter)
        self.parser = Parser(locale, dims=dims, max_iterations=max_iterations)

    def set_extensions(self):
        super().set_extensions()
        if not Span.has_extension("value"):
            Span.set_extension("value", default=None)
        if not Span.has_extension("grain"):
            Span.set_extension("grain", default=None)
        if not Span.has_extension("numeral_token"):
            Span.set_extension("numeral_token", default=None)

    def process(self, doc: Doc) -> List[Span]:
        """
        Parse the text of the doc.

        Parameters
        ----------
        doc: Doc
            spaCy Doc object

        Returns
        -------
        List[Span]
            One span per resolved value. Spans of different dimensions that
            overlap once aligned on the tokens are filtered, keeping the largest.
        """
        spans = []
        for token in self.parser(doc.text):
            span = doc.char_span(
                token.start,
                token.end,
                label=str(token.dim),
                alignment_mode="expand",
            )
            if span is None:
                continue
            span._.value = token.value.value
            span._.grain = getattr(token.value, "grain", None)
            span._.numeral_token = token
            spans.append(span)
        return filter_spans(spans)

    def __call__(self, doc: Doc) -> Doc:
        return self.set_spans(doc, self.process(doc))
