#!/usr/bin/env python3
"""
Batch NER over a directory of plain-text notes -> JSON results or CSV summary.

Usage:
  python scripts/batch_analyze.py notes/ --model ClinicalBERT --format csv
  python scripts/batch_analyze.py notes/ --dry-run

Notes:
- One document per *.txt file; the file name is the document name.
- Runs the engine in-process; no server needed.
"""

import argparse
import glob
import os
import sys
from typing import Dict, List

from app.analytics.batch import run_batch
from app.analytics.export import batch_summary_rows, to_csv, to_json
from app.config import DEFAULT_MODEL, DEFAULT_THRESHOLD
from app.nlu.rules import MODEL_ORDER


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_documents(directory: str) -> List[Dict[str, str]]:
    paths = sorted(glob.glob(os.path.join(directory, "*.txt")))
    return [{"name": os.path.basename(p), "text": _read_text(p)} for p in paths]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("directory", help="Folder containing *.txt notes")
    ap.add_argument("--model", default=DEFAULT_MODEL, choices=MODEL_ORDER)
    ap.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD)
    ap.add_argument("--format", choices=("json", "csv"), default="json")
    ap.add_argument("--out", help="Write here instead of stdout")
    ap.add_argument("--dry-run", action="store_true", help="List documents & exit")
    args = ap.parse_args()

    docs = load_documents(args.directory)
    print(f"Found {len(docs)} documents in {args.directory}", file=sys.stderr)
    if not docs:
        return

    if args.dry_run:
        for d in docs[:10]:
            print(f"- {d['name']} ({len(d['text'])} chars)", file=sys.stderr)
        if len(docs) > 10:
            print(f"... {len(docs)-10} more", file=sys.stderr)
        return

    results = run_batch(docs, args.model, args.threshold)
    if args.format == "csv":
        content = to_csv(batch_summary_rows(results))
    else:
        content = to_json(results)

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(content)
        failed = sum(1 for r in results if not r["success"])
        print(f"Wrote {len(results)} results ({failed} failed) to {args.out}", file=sys.stderr)
    else:
        print(content)


if __name__ == "__main__":
    main()
