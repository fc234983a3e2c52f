"""
Score one or more institutions from a JSON file of raw metrics.

The input is either a single metrics object
    {"tlr": {...}, "research": {...}, "graduation": {...}, ...}
or a list of records
    [{"institution": "ABC Institute", "metrics": {...}}, ...]

Usage:
    python -m nirf_portal.scripts.score_institutions metrics.json
    python -m nirf_portal.scripts.score_institutions metrics.json --output scores.json --pretty
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from pydantic import ValidationError

from nirf_portal.logging_config import configure_logging
from nirf_portal.models.metrics import InstitutionMetrics
from nirf_portal.scoring.engine import ScoringEngine

logger = logging.getLogger(__name__)


def _validate(path: Path, label: str, metrics: Any) -> InstitutionMetrics:
    try:
        return InstitutionMetrics.model_validate(metrics)
    except ValidationError as e:
        raise ValueError(f"{path}: {label} has malformed metrics: {e}") from None


def load_records(path: Path) -> List[Dict[str, Any]]:
    """Read the input file into a list of validated {institution, metrics} records."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        return [{"institution": path.stem, "metrics": _validate(path, "file", payload)}]
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a JSON object or list, got {type(payload).__name__}")

    records = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: record {i} is not an object")
        records.append({
            "institution": item.get("institution") or f"record_{i}",
            "metrics": _validate(path, f"record {i}", item.get("metrics", {})),
        })
    return records


def score_records(records: List[Dict[str, Any]], engine: ScoringEngine) -> List[Dict[str, Any]]:
    results = []
    for record in records:
        result = engine.score(record["metrics"])
        logger.info(f"[{record['institution']}] final score = {float(result.final_score):.2f}")
        results.append({"institution": record["institution"], "scores": result.to_dict()})
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute ranking scores from raw institutional metrics"
    )
    parser.add_argument("input", type=Path, help="JSON file with raw metrics")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write results to this file instead of stdout",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output",
    )
    args = parser.parse_args(argv)

    configure_logging()

    try:
        records = load_records(args.input)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1

    results = score_records(records, ScoringEngine())
    text = json.dumps(results, indent=2 if args.pretty else None)

    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(results)} result(s) to {args.output}")
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
