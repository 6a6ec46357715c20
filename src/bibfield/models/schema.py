"""JSON schema for serialized bibliographic records.

Records are exchanged as JSON objects, one per line, with the layout
produced by BibRecord.to_dict().
"""

from typing import Any

import jsonschema

__all__ = ["RECORD_SCHEMA", "validate_record_dict"]

RECORD_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "BibRecord",
    "type": "object",
    "required": ["entry_type"],
    "properties": {
        "entry_type": {"type": "string", "minLength": 1},
        "citation_key": {"type": ["string", "null"]},
        "fields": {
            "type": "object",
            "additionalProperties": {"type": ["string", "number", "null"]},
        },
    },
    "additionalProperties": False,
}


def validate_record_dict(data: Any) -> None:
    """Validate a decoded JSON object against RECORD_SCHEMA.

    Parameters
    ----------
    data : Any
        Decoded JSON value.

    Raises
    ------
    jsonschema.ValidationError
        If the value does not match the record schema.
    """
    jsonschema.validate(instance=data, schema=RECORD_SCHEMA)
