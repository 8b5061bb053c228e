"""
Language-neutral description of the code to emit.

The generator fills these containers; renderers in `exporters` only turn
them into source text.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .classifier import EntityKind
from .models import Entity, EntityAttribute


class ScalarType(Enum):
    """Logical scalar types a diagram data type maps to"""

    INTEGER = "integer"
    TEXT = "text"
    DATETIME = "datetime"


# Keys are lowercase diagram data-type tokens; anything else is TEXT
DATA_TYPES = {
    "int": ScalarType.INTEGER,
    "string": ScalarType.TEXT,
    "datetime": ScalarType.DATETIME,
    "date_of_birth": ScalarType.DATETIME,
    "created_at": ScalarType.DATETIME,
    "tagged_at": ScalarType.DATETIME,
    "timestamp": ScalarType.DATETIME,
    "duration": ScalarType.INTEGER,
}


def map_data_type(data_type: str) -> ScalarType:
    return DATA_TYPES.get(data_type.lower(), ScalarType.TEXT)


@dataclass
class ScalarProperty:
    """A property generated from an entity attribute"""

    name: str
    scalar_type: ScalarType
    nullable: bool
    attribute: EntityAttribute


@dataclass
class NavigationProperty:
    """A property pointing at another generated class"""

    name: str
    target: str
    is_collection: bool = False


@dataclass
class EntityPlan:
    """Everything needed to render one entity class"""

    entity: Entity
    class_name: str
    kind: EntityKind
    properties: list[ScalarProperty] = field(default_factory=list)
    navigations: list[NavigationProperty] = field(default_factory=list)

    def navigation_to(self, target: str) -> Optional[NavigationProperty]:
        """First single-valued navigation to the given class"""
        return next(
            (n for n in self.navigations if n.target == target and not n.is_collection),
            None,
        )


@dataclass
class QuerySurface:
    """A top-level queryable set exposed by the mapping context"""

    class_name: str
    name: str


@dataclass
class Ownership:
    owner: str
    owned: str
    navigation: str


@dataclass
class KeyConfiguration:
    class_name: str
    properties: list[str]


@dataclass
class MappingPlan:
    """Ordered content of the mapping configuration"""

    query_surfaces: list[QuerySurface] = field(default_factory=list)
    ownerships: list[Ownership] = field(default_factory=list)
    composite_keys: list[KeyConfiguration] = field(default_factory=list)
    keyless: list[str] = field(default_factory=list)
    join_table_keys: list[KeyConfiguration] = field(default_factory=list)
