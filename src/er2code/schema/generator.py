"""
Code generation from a parsed schema.

Generation runs in two steps: the schema is first turned into
language-neutral plans (class names, properties, navigations, key and
ownership configuration), then a renderer turns the plans into source text.
Both public operations are pure functions of the schema.
"""

import time
from typing import Optional

from loguru import logger

from .classifier import (
    classify_entity,
    find_owner_entity,
    is_join_table,
    is_keyless,
    is_owned_entity,
    needs_composite_key,
)
from .exporters import get_renderer
from .exporters.base import CodeRenderer
from .models import EXACTLY_ONE, MANY, OPTIONAL, Entity, Relationship, Schema, same_name
from .naming import (
    EntityNameMap,
    UsedNames,
    build_entity_name_map,
    ensure_unique_name,
    pluralize,
    to_pascal_case,
)
from .plans import (
    EntityPlan,
    KeyConfiguration,
    MappingPlan,
    NavigationProperty,
    Ownership,
    QuerySurface,
    ScalarProperty,
    ScalarType,
    map_data_type,
)


def _first_per_name(relationships: list[Relationship], attr: str) -> list[Relationship]:
    """Keep the first relationship for each (case-insensitive) endpoint name"""
    seen = set()
    result = []
    for rel in relationships:
        key = getattr(rel, attr).casefold()
        if key not in seen:
            seen.add(key)
            result.append(rel)
    return result


def _plan_scalars(entity: Entity, used: UsedNames) -> list[ScalarProperty]:
    properties = []
    for attr in entity.attributes:
        scalar_type = map_data_type(attr.data_type)
        # FKs are always nullable; other non-key, non-text values are optional too
        nullable = attr.is_foreign_key or (
            not attr.is_primary_key and scalar_type is not ScalarType.TEXT
        )
        properties.append(
            ScalarProperty(
                name=ensure_unique_name(to_pascal_case(attr.name), used),
                scalar_type=scalar_type,
                nullable=nullable,
                attribute=attr,
            )
        )
    return properties


def _plan_entity(
    schema: Schema,
    entity: Entity,
    class_name: str,
    names: EntityNameMap,
    owned: list[Entity],
) -> EntityPlan:
    used = UsedNames()
    plan = EntityPlan(
        entity=entity,
        class_name=class_name,
        kind=classify_entity(schema, entity),
        properties=_plan_scalars(entity, used),
    )

    touching = schema.get_relationships_for_entity(entity.name)
    outgoing = [r for r in touching if same_name(r.from_entity, entity.name)]
    incoming = [r for r in touching if same_name(r.to_entity, entity.name)]

    outgoing_many = _first_per_name(
        [r for r in outgoing if MANY in r.to_cardinality], "to_entity"
    )
    outgoing_owned = _first_per_name(
        [r for r in outgoing if _is_in(schema.get_entity(r.to_entity), owned)], "to_entity"
    )
    if _is_in(entity, owned):
        incoming_one = []
    else:
        incoming_one = _first_per_name(
            [r for r in incoming if EXACTLY_ONE in r.to_cardinality], "from_entity"
        )
    incoming_optional = _first_per_name(
        [
            r
            for r in incoming
            if OPTIONAL in r.to_cardinality and MANY not in r.to_cardinality
        ],
        "from_entity",
    )

    for rel in outgoing_many:
        target = names.resolve(rel.to_entity, rel)
        plan.navigations.append(
            NavigationProperty(ensure_unique_name(pluralize(target), used), target, True)
        )

    for rel in outgoing_owned:
        target = names.resolve(rel.to_entity, rel)
        plan.navigations.append(
            NavigationProperty(ensure_unique_name(target, used), target)
        )

    for rel in incoming_one:
        source = names.resolve(rel.from_entity, rel)
        plan.navigations.append(
            NavigationProperty(ensure_unique_name(source, used), source)
        )

    for rel in incoming_optional:
        source = names.resolve(rel.from_entity, rel)
        plan.navigations.append(
            NavigationProperty(ensure_unique_name(pluralize(source), used), source, True)
        )

    return plan


def _owned_entities(schema: Schema) -> list[Entity]:
    return [e for e in schema.entities if is_owned_entity(schema, e)]


def _is_in(entity: Optional[Entity], entities: list[Entity]) -> bool:
    # Identity, not name: duplicated names map to distinct entities
    return any(entity is e for e in entities)


def plan_entities(schema: Schema, names: Optional[EntityNameMap] = None) -> list[EntityPlan]:
    """
    Build one EntityPlan per entity, in schema order.

    Raises:
        UnresolvedReferenceError: a relationship used for a navigation
            property points at an entity that is not declared
    """
    names = names or build_entity_name_map(schema)
    owned = _owned_entities(schema)
    return [
        _plan_entity(schema, entity, class_name, names, owned)
        for entity, class_name in zip(schema.entities, names.class_names)
    ]


def plan_mapping(schema: Schema, names: Optional[EntityNameMap] = None) -> MappingPlan:
    """Build the mapping configuration content, in its fixed section order"""
    names = names or build_entity_name_map(schema)
    owned = _owned_entities(schema)
    plan = MappingPlan()

    used_surfaces = UsedNames()
    for entity, class_name in zip(schema.entities, names.class_names):
        if _is_in(entity, owned) or is_join_table(entity):
            continue
        plan.query_surfaces.append(
            QuerySurface(class_name, ensure_unique_name(pluralize(class_name), used_surfaces))
        )

    for entity, class_name in zip(schema.entities, names.class_names):
        if not _is_in(entity, owned):
            continue
        owner = find_owner_entity(schema, entity)
        if owner is None:
            logger.warning(f"No owner found for owned entity {entity.name}, skipping")
            continue
        owner_index = next(i for i, e in enumerate(schema.entities) if e is owner)
        owner_plan = _plan_entity(
            schema, owner, names.class_names[owner_index], names, owned
        )
        navigation = owner_plan.navigation_to(class_name)
        if navigation is None:
            logger.warning(
                f"Owner {owner_plan.class_name} has no navigation to owned entity "
                f"{class_name}, skipping"
            )
            continue
        plan.ownerships.append(
            Ownership(
                owner=owner_plan.class_name,
                owned=class_name,
                navigation=navigation.name,
            )
        )

    for entity, class_name in zip(schema.entities, names.class_names):
        if needs_composite_key(schema, entity):
            scalars = _plan_scalars(entity, UsedNames())
            plan.composite_keys.append(
                KeyConfiguration(
                    class_name,
                    [p.name for p in scalars if p.attribute.is_primary_key],
                )
            )

    for entity, class_name in zip(schema.entities, names.class_names):
        if is_keyless(schema, entity):
            plan.keyless.append(class_name)

    for entity, class_name in zip(schema.entities, names.class_names):
        if not is_join_table(entity):
            continue
        keys = [
            p.name
            for p in _plan_scalars(entity, UsedNames())
            if p.attribute.is_primary_key and p.attribute.is_foreign_key
        ]
        if len(keys) != 2:
            logger.debug(
                f"Join table {entity.name} has {len(keys)} key columns, "
                "skipping key configuration"
            )
            continue
        plan.join_table_keys.append(KeyConfiguration(class_name, keys))

    return plan


def generate_entities(schema: Schema, renderer: Optional[CodeRenderer] = None) -> str:
    """
    Generate entity class source for every entity of the schema.

    Args:
        schema: Parsed schema
        renderer: Target-language renderer (default: C#)

    Returns:
        Source text with one class per entity
    """
    renderer = renderer or get_renderer()
    logger.info(f"GenerateEntities started with {len(schema.entities)} entities")
    start = time.perf_counter()

    result = renderer.render_entities(plan_entities(schema))

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"GenerateEntities completed in {elapsed_ms:.0f}ms. "
        f"Generated {len(result)} characters"
    )
    return result


def generate_mapping_configuration(
    schema: Schema, renderer: Optional[CodeRenderer] = None
) -> str:
    """
    Generate the mapping-context source (query surfaces, ownership, keys).

    Args:
        schema: Parsed schema
        renderer: Target-language renderer (default: C#)

    Returns:
        Source text of the mapping configuration
    """
    renderer = renderer or get_renderer()
    logger.info(f"GenerateMappingConfiguration started with {len(schema.entities)} entities")
    start = time.perf_counter()

    result = renderer.render_mapping(plan_mapping(schema))

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"GenerateMappingConfiguration completed in {elapsed_ms:.0f}ms. "
        f"Generated {len(result)} characters"
    )
    return result
