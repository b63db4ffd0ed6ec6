"""
Session Report Writer

Writes session results to JSON reports with a schema version and a checksum
so replays can be compared across runs.
"""

import hashlib
from pathlib import Path
from typing import Any, Dict, Union

import orjson
from loguru import logger

from teller_types.schemas.models import SessionResult

SCHEMA_VERSION = "1.0"


def report_payload(result: SessionResult) -> Dict[str, Any]:
    """
    Build the report dictionary for a session result.

    Denomination keys become strings so the report is plain JSON.
    """
    data = result.model_dump(mode="json")
    return {
        "schema_version": SCHEMA_VERSION,
        "session": data["name"],
        "started_at": data["started_at"],
        "completed_at": data["completed_at"],
        "aborted": data["aborted"],
        "summary": {
            "steps": len(result.steps),
            "failed": len(result.failures),
            "final_total": result.final.total_value if result.final else None,
        },
        "steps": data["steps"],
        "final": data["final"],
    }


def write_report(result: SessionResult, output_path: Union[str, Path]) -> str:
    """
    Write a session report to a JSON file.

    Args:
        result: Session result to serialize
        output_path: Output file path; parent directories are created

    Returns:
        SHA256 hash of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = orjson.dumps(
        report_payload(result),
        option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS,
    )
    output_path.write_bytes(payload)
    logger.info(f"Wrote session report for '{result.name}' to {output_path}")

    return hashlib.sha256(payload).hexdigest()
