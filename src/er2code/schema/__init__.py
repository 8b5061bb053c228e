"""
Schema module for er2code.

This module provides tools for:
- Parsing Mermaid ER diagrams into a Schema
- Classifying entities (owned, join tables, composite keys, keyless)
- Generating entity classes and mapping configuration from a Schema
- Serializing a parsed Schema for inspection
"""

from .classifier import (EntityKind, classify_entity, find_join_tables,
                         find_owner_entity, is_join_table, is_keyless,
                         is_owned_entity, needs_composite_key)
from .exceptions import GenerationError, UnresolvedReferenceError
from .exporters import CodeRenderer, CSharpRenderer, get_renderer
from .generator import (generate_entities, generate_mapping_configuration,
                        plan_entities, plan_mapping)
from .models import Entity, EntityAttribute, Relationship, Schema
from .naming import (EntityNameMap, UsedNames, build_entity_name_map,
                     ensure_unique_name, pluralize, to_pascal_case)
from .parser import MermaidParser, parse_mermaid, parse_mermaid_file
from .serializer import (save_schema_to_file, serialize_schema_to_dict,
                         serialize_schema_to_json)

__all__ = [
    # Model
    "Schema",
    "Entity",
    "EntityAttribute",
    "Relationship",
    # Parsing
    "MermaidParser",
    "parse_mermaid",
    "parse_mermaid_file",
    # Classification
    "EntityKind",
    "classify_entity",
    "is_owned_entity",
    "find_owner_entity",
    "is_join_table",
    "find_join_tables",
    "needs_composite_key",
    "is_keyless",
    # Naming
    "to_pascal_case",
    "pluralize",
    "UsedNames",
    "ensure_unique_name",
    "EntityNameMap",
    "build_entity_name_map",
    # Generation
    "generate_entities",
    "generate_mapping_configuration",
    "plan_entities",
    "plan_mapping",
    "CodeRenderer",
    "CSharpRenderer",
    "get_renderer",
    "GenerationError",
    "UnresolvedReferenceError",
    # Serialization
    "serialize_schema_to_dict",
    "serialize_schema_to_json",
    "save_schema_to_file",
]
