from pytest import fixture
from spacy.language import Language

import eds_numerals  # noqa: F401
import edsnlp


@fixture()
def blank_nlp() -> Language:
    nlp = edsnlp.blank("eds")
    nlp.add_pipe("eds.sentences")
    return nlp


@fixture()
def nlp(blank_nlp) -> Language:
    blank_nlp.add_pipe(
        "eds_numerals.numerals",
        name="numerals",
        config={"locale": "ar"},
    )
    return blank_nlp


@fixture()
def nlp_et(blank_nlp) -> Language:
    blank_nlp.add_pipe(
        "eds_numerals.numerals",
        name="ordinals",
        config={"locale": "et"},
    )
    return blank_nlp
