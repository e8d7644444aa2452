from spacy.tokens import Doc

if not Doc.has_extension("note_id"):  # pragma: no cover
    Doc.set_extension("note_id", default=None)
