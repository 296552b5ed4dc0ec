import random

import pytest

from app.analytics.samples import EXAMPLE_TEXTS
from app.config import MAX_TEXT_CHARS
from app.nlu.errors import TextTooLongError
from app.nlu.extractor import extract, ner
from app.nlu.rules import RULES, model_bonus

PATHOLOGY = EXAMPLE_TEXTS["pathology"]
MID = lambda: 0.5  # noqa: E731  -> 0.85 + model bonus


def _by_type(ents, t):
    return [e.text for e in ents if e.type == t]


def test_pathology_note_core_entities():
    ents = extract(PATHOLOGY, "ClinicalBERT", rng=MID)
    assert "58-year-old" in _by_type(ents, "AGE")
    assert "2.3 cm" in _by_type(ents, "TUMOR_SIZE")
    assert "invasive ductal carcinoma" in _by_type(ents, "TUMOR_TYPE")
    assert _by_type(ents, "RECEPTOR_STATUS") == ["ER-positive", "PR-positive", "HER2-negative"]
    assert _by_type(ents, "TNM_STAGE") == ["T2N0M0"]
    assert _by_type(ents, "STAGE") == ["Stage IIA"]
    assert _by_type(ents, "GRADE") == ["grade 2"]


def test_spans_point_back_into_text():
    for text in EXAMPLE_TEXTS.values():
        for e in extract(text, "BioBERT"):
            assert 0 <= e.start < e.end <= len(text)
            assert text[e.start:e.end] == e.text
            assert 0.5 <= e.confidence <= 0.99


def test_rule_order_not_position_order():
    ents = extract(PATHOLOGY, "ClinicalBERT", rng=MID)
    age = next(e for e in ents if e.type == "AGE")
    # tumor size comes first even though the age appears earlier in the note
    assert ents[0].type == "TUMOR_SIZE"
    assert ents[0].start > age.start
    assert ents.index(age) > 0


def test_overlapping_rules_are_not_deduplicated():
    text = "Biopsy shows invasive ductal carcinoma in situ component."
    ents = extract(text, "BioBERT", rng=MID)
    spans = [(e.text, e.start, e.end) for e in ents if e.type == "TUMOR_TYPE"]
    assert ("invasive ductal carcinoma", 13, 38) in spans
    assert ("ductal carcinoma in situ", 22, 46) in spans


def test_female_is_not_also_male():
    ents = extract("A 40-year-old female.", "BioBERT", rng=MID)
    assert _by_type(ents, "GENDER") == ["female"]


def test_dcis_acronym_is_case_sensitive():
    assert _by_type(extract("DCIS noted", "BioBERT", rng=MID), "TUMOR_TYPE") == ["DCIS"]
    assert _by_type(extract("dcis noted", "BioBERT", rng=MID), "TUMOR_TYPE") == []


@pytest.mark.parametrize("model,expected", [
    ("BioBERT", 0.9),
    ("ClinicalBERT", 0.93),
    ("PubMedBERT", 0.88),
    ("SomethingElse", 0.85),
])
def test_model_bonus_applied(model, expected):
    ents = extract("Tumor 2 cm.", model, rng=MID)
    assert [e.confidence for e in ents] == [pytest.approx(expected)]


def test_confidence_is_capped():
    ents = extract("Tumor 2 cm.", "ClinicalBERT", rng=lambda: 0.999)
    assert ents[0].confidence == 0.99


def test_threshold_filters_matches():
    low = lambda: 0.0  # noqa: E731  -> 0.83 for ClinicalBERT
    assert len(extract(PATHOLOGY, "ClinicalBERT", threshold=0.83, rng=low)) > 0
    assert extract(PATHOLOGY, "ClinicalBERT", threshold=0.84, rng=low) == []


def test_raising_threshold_never_adds_entities():
    counts = []
    for threshold in (0.0, 0.8, 0.85, 0.9, 0.95, 1.0):
        rng = random.Random(7).random  # same draws for every threshold
        counts.append(len(extract(PATHOLOGY, "PubMedBERT", threshold=threshold, rng=rng)))
    assert counts == sorted(counts, reverse=True)
    assert counts[-1] == 0


def test_out_of_range_threshold_passes_through():
    assert extract(PATHOLOGY, "BioBERT", threshold=1.5) == []
    assert len(extract(PATHOLOGY, "BioBERT", threshold=-1)) == len(extract(PATHOLOGY, "BioBERT"))


def test_empty_text():
    res = ner("", "BioBERT")
    assert res.entity_count == 0
    assert res.avg_confidence == 0
    assert res.entity_types == []


def test_ner_aggregates():
    res = ner(PATHOLOGY, "BioBERT", rng=MID)
    assert res.entity_count == len(res.entities)
    assert res.avg_confidence == pytest.approx(0.9)
    assert set(res.entity_types) == {e.type for e in res.entities}
    assert len(res.entity_types) == len(set(res.entity_types))


def test_ner_wire_shape_is_camel_case():
    data = ner("Stage II, 45-year-old.", "BioBERT", rng=MID).model_dump(by_alias=True)
    assert set(data) == {"entities", "entityCount", "avgConfidence", "entityTypes"}
    assert data["entityTypes"] == ["STAGE", "AGE"]


def test_input_cap():
    with pytest.raises(TextTooLongError):
        extract("a" * (MAX_TEXT_CHARS + 1), "BioBERT")


def test_rule_table_covers_every_category():
    assert {r.type.value for r in RULES} == {
        "TUMOR_SIZE", "TUMOR_TYPE", "TUMOR_CLASSIFICATION", "RECEPTOR_STATUS", "STAGE",
        "GRADE", "TNM_STAGE", "TREATMENT", "MEDICATION", "AGE", "GENDER",
    }
    assert model_bonus("ClinicalBERT") == 0.08
