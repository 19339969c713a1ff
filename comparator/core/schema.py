# comparator/core/schema.py
import json
from pathlib import Path
from typing import Any, Dict

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "comparison.json"
SCHEMA_NAME = "device_comparison"

def load_comparison_schema() -> Dict[str, Any]:
    """
    Loads the JSON Schema that constrains the model's comparison output.

    The schema lives in a data file so it can be versioned separately from
    the prompt text.

    Raises:
        FileNotFoundError: If the schema file is missing.
    """
    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)

# Loaded once at import; callers must not mutate it.
COMPARISON_SCHEMA = load_comparison_schema()

def response_format() -> Dict[str, Any]:
    """Builds the `response_format` payload for a JSON-schema constrained completion."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": SCHEMA_NAME,
            "schema": COMPARISON_SCHEMA,
        },
    }
