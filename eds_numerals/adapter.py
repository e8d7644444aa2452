from typing import Any, Dict, Optional

from spacy.tokens import Doc

from edsnlp import registry
from edsnlp.core.pipeline import PipelineProtocol
from edsnlp.utils.span_getters import SpanGetterArg, get_spans, validate_span_getter

import eds_numerals.pipes  # noqa: F401


@registry.factory.register("eds.numerals_doc2dict", spacy_compatible=False)
class NumeralsDoc2DictConverter:
    """
    Convert a Doc annotated by the `eds_numerals.numerals` component to a JSON
    serializable dictionary, e.g. to be written with `edsnlp.data.write_json`.

    Parameters
    ----------
    nlp: Optional[PipelineProtocol]
        The pipeline object (unused)
    name: str
        The name of the converter
    span_getter: SpanGetterArg
        The spans to export. Defaults to the spans in `doc.ents`.
    """

    def __init__(
        self,
        nlp: Optional[PipelineProtocol] = None,
        name: str = "numerals_doc2dict",
        *,
        span_getter: SpanGetterArg = {"ents": True},
    ):
        self.span_getter = validate_span_getter(span_getter)

    def __call__(self, doc: Doc) -> Dict[str, Any]:
        entities = []
        for span in get_spans(doc, self.span_getter):
            value = span._.get("value") if span.has_extension("value") else None
            grain = span._.get("grain") if span.has_extension("grain") else None
            entities.append(
                {
                    "start": span.start_char,
                    "end": span.end_char,
                    "label": span.label_,
                    "text": span.text,
                    "value": value,
                    "grain": grain,
                }
            )
        return {
            "note_id": doc._.note_id,
            "note_text": doc.text,
            "entities": sorted(entities, key=lambda ent: (ent["start"], ent["end"])),
        }
