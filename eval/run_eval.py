#!/usr/bin/env python3
"""
Offline evaluation runner:
- Loads YAML cases under eval/cases/*.yaml
- Posts each case to /api/analyze (NER, plus QA when the case has a question)
- Computes simple metrics and writes eval/report.json

Usage:
  python eval/run_eval.py --base-url http://localhost:8000
  python eval/run_eval.py --fast    # only the first N cases
"""

import argparse
import glob
import json
import os
from typing import Any, Dict, List

import httpx
import yaml

DEFAULT_BASE_URL = "http://localhost:8000"
CASES_GLOB = os.path.join(os.path.dirname(__file__), "cases", "*.yaml")
TIMEOUT = 8.0

def load_cases(limit: int | None = None) -> List[Dict[str, Any]]:
    paths = sorted(glob.glob(CASES_GLOB))
    cases: List[Dict[str, Any]] = []
    for p in paths:
        with open(p, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
            if isinstance(data, list):
                cases.extend(data)
    if limit is not None:
        cases = cases[:limit]
    return cases

def post_analyze(client: httpx.Client, base_url: str, body: Dict[str, Any]) -> Dict[str, Any]:
    r = client.post(f"{base_url}/api/analyze", json=body, timeout=TIMEOUT)
    r.raise_for_status()
    payload = r.json()
    if not payload.get("success"):
        raise RuntimeError(payload.get("error") or "analysis_failed")
    return payload["data"]

def eval_case(client: httpx.Client, base_url: str, case: Dict[str, Any], model: str) -> Dict[str, Any]:
    ner = post_analyze(client, base_url, {
        "type": "ner",
        "text": case["text"],
        "model": model,
        "confidenceThreshold": case.get("threshold", 0.5),
    })
    got_types = set(ner.get("entityTypes", []))
    expect_types = set(case.get("expect_types", []))
    missing = sorted(expect_types - got_types)
    recall = 1.0 if not expect_types else (len(expect_types) - len(missing)) / len(expect_types)

    qa_ok = None
    got_answer = None
    if case.get("question"):
        qa = post_analyze(client, base_url, {
            "type": "qa",
            "text": case["text"],
            "question": case["question"],
            "model": model,
        })
        got_answer = qa.get("answer")
        qa_ok = (got_answer or "").lower() == str(case.get("expect_answer", "")).lower()

    return {
        "id": case["id"],
        "expect_types": sorted(expect_types),
        "got_types": sorted(got_types),
        "missing_types": missing,
        "type_recall": round(recall, 3),
        "entity_count": ner.get("entityCount", 0),
        "question": case.get("question"),
        "expect_answer": case.get("expect_answer"),
        "got_answer": got_answer,
        "qa_ok": qa_ok,
    }

def summarize(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    n = len(results)
    mean_recall = sum(r.get("type_recall", 0.0) for r in results) / max(1, n)
    qa_cases = [r for r in results if r.get("qa_ok") is not None]
    qa_acc = sum(bool(r["qa_ok"]) for r in qa_cases) / max(1, len(qa_cases))
    return {
        "total_cases": n,
        "errors": sum(1 for r in results if "error" in r),
        "mean_type_recall": round(mean_recall, 3),
        "qa_cases": len(qa_cases),
        "qa_accuracy": round(qa_acc, 3),
    }

def print_table(results: List[Dict[str, Any]], summary: Dict[str, Any]) -> None:
    headers = ["id", "recall", "missing", "qa✓"]
    rows = []
    for r in results:
        rows.append([
            r["id"],
            r.get("type_recall", "-"),
            ",".join(r.get("missing_types", [])) or ("ERR" if "error" in r else "-"),
            "-" if r.get("qa_ok") is None else ("✓" if r["qa_ok"] else "✗"),
        ])
    colw = [max(len(str(x)) for x in col) for col in zip(*([headers] + rows))]
    def fmt_row(row): return "  ".join(str(x).ljust(w) for x, w in zip(row, colw))

    print(fmt_row(headers))
    print("-" * (sum(colw) + 2 * (len(headers) - 1)))
    for row in rows:
        print(fmt_row(row))
    print("\nSummary:")
    for k, v in summary.items():
        print(f"- {k}: {v}")

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default=DEFAULT_BASE_URL)
    ap.add_argument("--model", default="ClinicalBERT")
    ap.add_argument("--fast", action="store_true", help="Run only the first 5 cases")
    ap.add_argument("--out", default=os.path.join(os.path.dirname(__file__), "report.json"))
    args = ap.parse_args()

    cases = load_cases(limit=5 if args.fast else None)
    if not cases:
        print("No cases found under eval/cases/*.yaml")
        return

    results: List[Dict[str, Any]] = []
    with httpx.Client() as client:
        for c in cases:
            try:
                results.append(eval_case(client, args.base_url, c, args.model))
            except (httpx.HTTPError, RuntimeError) as e:
                results.append({
                    "id": c["id"],
                    "error": str(e),
                    "type_recall": 0.0,
                    "missing_types": sorted(c.get("expect_types", [])),
                    "qa_ok": False if c.get("question") else None,
                })

    summary = summarize(results)

    # JSON report for CI / diffing
    os.makedirs(os.path.dirname(args.out), exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump({"summary": summary, "results": results}, f, ensure_ascii=False, indent=2)

    print_table(results, summary)

    target = 0.95
    if summary["mean_type_recall"] < target:
        print(f"\nType recall below target ({summary['mean_type_recall']} < {target})")

if __name__ == "__main__":
    main()
