import csv
import io
import json
from typing import Any, Dict, List, Sequence


def to_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def _cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv(rows: Sequence[Dict[str, Any]]) -> str:
    """
    Header comes from the first row's keys. Every cell is quoted; nested
    values are JSON-encoded.
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(row.get(h, "")) for h in headers])
    return buf.getvalue()


def batch_summary_rows(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "filename": r["filename"],
            "success": r["success"],
            "entityCount": r.get("entityCount") or 0,
            "avgConfidence": r.get("avgConfidence") or 0,
        }
        for r in results
    ]
