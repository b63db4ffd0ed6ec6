"""
JSON Schema export for teller models.

Writes one ``<name>.schema.json`` file per public model so session scripts and
reports can be validated outside Python.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel

from ..schemas.models import (
    NotePair,
    RegisterConfig,
    SessionResult,
    SessionScript,
    WithdrawalOutcome,
)

EXPORTED_MODELS: List[Tuple[Type[BaseModel], str]] = [
    (NotePair, "note_pair"),
    (RegisterConfig, "register_config"),
    (WithdrawalOutcome, "withdrawal_outcome"),
    (SessionScript, "session_script"),
    (SessionResult, "session_result"),
]


def export_model_schema(model_cls: Type[BaseModel], version: str = "1.0") -> Dict[str, Any]:
    """Build the JSON schema for a model, stamped with a schema version."""
    schema = model_cls.model_json_schema()
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["version"] = version
    return schema


def export_all_schemas(output_dir: Path, version: str = "1.0") -> List[Path]:
    """Export every public model schema into output_dir.

    Returns:
        Paths of the written schema files, in export order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for model_cls, filename_prefix in EXPORTED_MODELS:
        schema = export_model_schema(model_cls, version=version)
        output_file = output_dir / f"{filename_prefix}.schema.json"
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(schema, f, indent=2, ensure_ascii=False)
        written.append(output_file)

    return written
