"""
Entity classification over a parsed schema.

Every decision that depends on "the relationship into an entity" uses the
first matching relationship in schema order. Reordering relationship lines
in the diagram can therefore change owner resolution.
"""

from enum import Enum
from typing import Optional

from .models import EXACTLY_ONE, Entity, Relationship, Schema, same_name


class EntityKind(Enum):
    """How the generator configures an entity"""

    OWNED = "owned"
    JOIN_TABLE = "join_table"
    COMPOSITE_KEY = "composite_key"
    KEYLESS = "keyless"
    REGULAR = "regular"


def _first_incoming(schema: Schema, entity: Entity, one_to_one: bool = False) -> Optional[Relationship]:
    for rel in schema.relationships:
        if not same_name(rel.to_entity, entity.name):
            continue
        if one_to_one and not (
            EXACTLY_ONE in rel.to_cardinality and EXACTLY_ONE in rel.from_cardinality
        ):
            continue
        return rel
    return None


def is_owned_entity(schema: Schema, entity: Entity) -> bool:
    """
    An entity is owned when the first 1:1 relationship into it exists and its
    primary-key names are exactly its foreign-key names.
    """
    if _first_incoming(schema, entity, one_to_one=True) is None:
        return False

    pk_names = sorted(a.name for a in entity.primary_keys)
    fk_names = sorted(a.name for a in entity.foreign_keys)
    return pk_names == fk_names


def find_owner_entity(schema: Schema, owned: Entity) -> Optional[Entity]:
    """Origin entity of the first relationship into `owned`, any cardinality"""
    relationship = _first_incoming(schema, owned)
    if relationship is None:
        return None
    return schema.get_entity(relationship.from_entity)


def is_join_table(entity: Entity) -> bool:
    """Two or more primary keys, two or more foreign keys, every PK also a FK"""
    primary_keys = entity.primary_keys
    return (
        len(primary_keys) >= 2
        and len(entity.foreign_keys) >= 2
        and all(a.is_foreign_key for a in primary_keys)
    )


def find_join_tables(schema: Schema) -> list[Entity]:
    return [e for e in schema.entities if is_join_table(e)]


def needs_composite_key(schema: Schema, entity: Entity) -> bool:
    return (
        not is_owned_entity(schema, entity)
        and not is_join_table(entity)
        and len(entity.primary_keys) > 1
    )


def is_keyless(schema: Schema, entity: Entity) -> bool:
    return not is_owned_entity(schema, entity) and not entity.primary_keys


def classify_entity(schema: Schema, entity: Entity) -> EntityKind:
    """Single label for an entity, checked in generator precedence order"""
    if is_owned_entity(schema, entity):
        return EntityKind.OWNED
    if is_join_table(entity):
        return EntityKind.JOIN_TABLE
    if needs_composite_key(schema, entity):
        return EntityKind.COMPOSITE_KEY
    if is_keyless(schema, entity):
        return EntityKind.KEYLESS
    return EntityKind.REGULAR
