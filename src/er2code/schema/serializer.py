"""
JSON serializer for parsed Schema dataclasses.

Used for inspecting what the parser extracted from a diagram.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .classifier import classify_entity
from .models import Entity, Relationship, Schema


def serialize_entity(entity: Entity, schema: Optional[Schema] = None) -> Dict[str, Any]:
    """Serialize an entity; adds its classification when the schema is given"""
    result = asdict(entity)
    if schema is not None:
        result["kind"] = classify_entity(schema, entity).value
    return result


def serialize_relationship(relationship: Relationship) -> Dict[str, Any]:
    return asdict(relationship)


def serialize_schema_to_dict(schema: Schema, include_kinds: bool = True) -> Dict[str, Any]:
    """
    Serialize a Schema instance to a JSON-compatible dictionary.

    Args:
        schema: Schema instance to serialize
        include_kinds: Add the classifier label of each entity

    Returns:
        Dictionary that can be serialized to JSON
    """
    return {
        "entities": [
            serialize_entity(e, schema if include_kinds else None)
            for e in schema.entities
        ],
        "relationships": [serialize_relationship(r) for r in schema.relationships],
    }


def serialize_schema_to_json(schema: Schema, indent: int = 2, include_kinds: bool = True) -> str:
    return json.dumps(
        serialize_schema_to_dict(schema, include_kinds), indent=indent, ensure_ascii=False
    )


def save_schema_to_file(schema: Schema, path: Union[str, Path], indent: int = 2) -> Path:
    """Write the JSON serialization of a schema to a file"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_schema_to_json(schema, indent), encoding="utf-8")
    return path
