"""Tests for JSON schema export."""

import json

from teller_types.schemas.models import NotePair
from teller_types.utils.export_schema import (
    EXPORTED_MODELS,
    export_all_schemas,
    export_model_schema,
)


def test_export_model_schema_stamps_version():
    schema = export_model_schema(NotePair, version="1.0")

    assert schema["version"] == "1.0"
    assert schema["title"] == "NotePair"
    assert set(schema["properties"]) == {"denomination", "quantity"}
    assert schema["required"] == ["denomination", "quantity"]


def test_export_all_schemas_writes_one_file_per_model(schemas_dir):
    written = export_all_schemas(schemas_dir)

    assert len(written) == len(EXPORTED_MODELS)
    for path in written:
        assert path.exists()
        assert path.name.endswith(".schema.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "$schema" in data


def test_export_all_schemas_creates_directory(tmp_path):
    target = tmp_path / "nested" / "schemas"
    export_all_schemas(target)
    assert (target / "session_script.schema.json").exists()
