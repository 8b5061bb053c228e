from dataclasses import dataclass, field
from typing import Optional

# Cardinality markers, matched as substrings of the raw tokens
EXACTLY_ONE = "||"
MANY = "{"
OPTIONAL = "o"


@dataclass
class EntityAttribute:
    """Represents an attribute line inside an entity block"""

    name: str
    data_type: str
    is_primary_key: bool = False
    is_foreign_key: bool = False


@dataclass
class Entity:
    """Represents an entity block of the diagram"""

    name: str
    attributes: list[EntityAttribute] = field(default_factory=list)

    @property
    def primary_keys(self) -> list[EntityAttribute]:
        return [a for a in self.attributes if a.is_primary_key]

    @property
    def foreign_keys(self) -> list[EntityAttribute]:
        return [a for a in self.attributes if a.is_foreign_key]


@dataclass
class Relationship:
    """Represents a directional edge between two entities (referenced by name)"""

    from_entity: str
    to_entity: str
    from_cardinality: str
    to_cardinality: str
    label: str = ""


def same_name(left: str, right: str) -> bool:
    """Case-insensitive comparison of two diagram identifiers"""
    return left.casefold() == right.casefold()


@dataclass
class Schema:
    """
    Root container produced by the parser.
    Entities and relationships keep their insertion order, which drives
    output ordering and every first-match decision of the generator.
    """

    entities: list[Entity] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    def get_entity(self, name: str) -> Optional[Entity]:
        """Get the first entity with this name (case-insensitive)"""
        return next((e for e in self.entities if same_name(e.name, name)), None)

    def get_relationships_for_entity(self, name: str) -> list[Relationship]:
        """Get all relationships where the entity is origin or destination"""
        return [
            r
            for r in self.relationships
            if same_name(r.from_entity, name) or same_name(r.to_entity, name)
        ]
