import json

from app.analytics.export import batch_summary_rows, to_csv, to_json
from app.analytics.insights import completeness_score, generate_insights
from app.analytics.samples import EXAMPLE_TEXTS
from app.nlu.extractor import extract
from app.nlu.schema import EntityMatch


def _ent(type_, confidence=0.9):
    return EntityMatch(text="x", type=type_, confidence=confidence, start=0, end=1)


def test_completeness_full_pathology_note():
    ents = extract(EXAMPLE_TEXTS["pathology"], "ClinicalBERT", rng=lambda: 0.5)
    assert completeness_score(ents) == {"score": 100.0, "matched": 4, "total": 4, "missing": []}


def test_completeness_partial():
    res = completeness_score([_ent("TUMOR_SIZE"), _ent("AGE")])
    assert res["score"] == 25.0
    assert res["missing"] == ["TUMOR_TYPE", "RECEPTOR_STATUS", "STAGE"]


def test_insights_for_pathology_note():
    ents = extract(EXAMPLE_TEXTS["pathology"], "ClinicalBERT", rng=lambda: 0.5)
    assert generate_insights(ents) == [
        "Complete tumor characterization detected",
        "Comprehensive receptor panel identified",
        "Cancer staging information present",
        "Treatment plan documented",
        "High confidence extraction (>85%)",
    ]


def test_insights_partial_receptors_and_moderate_confidence():
    out = generate_insights([_ent("RECEPTOR_STATUS", 0.8), _ent("TNM_STAGE", 0.8)])
    assert out == [
        "Partial receptor status information",
        "Cancer staging information present",
        "Moderate confidence extraction (70-85%)",
    ]


def test_insights_without_entities():
    assert generate_insights([]) == [
        "No staging information detected",
        "Low confidence extraction (<70%)",
    ]


def test_csv_quotes_every_cell():
    rows = [{"filename": 'a "b".txt', "success": True, "entityCount": 2, "avgConfidence": 0.9}]
    assert to_csv(rows) == (
        '"filename","success","entityCount","avgConfidence"\n'
        '"a ""b"".txt","true","2","0.9"\n'
    )


def test_csv_nested_values_are_json():
    assert to_csv([{"x": {"a": 1}}]) == '"x"\n"{""a"": 1}"\n'


def test_csv_empty():
    assert to_csv([]) == ""


def test_json_export():
    data = [{"filename": "a.txt", "success": False, "error": "boom"}]
    assert json.loads(to_json(data)) == data


def test_batch_summary_rows_fill_failures():
    rows = batch_summary_rows([{"filename": "a.txt", "success": False, "error": "boom"}])
    assert rows == [{"filename": "a.txt", "success": False, "entityCount": 0, "avgConfidence": 0}]
