"""
Naming helpers: identifier casing, pluralization and collision-safe renaming.

Collision bookkeeping is explicit: callers own a UsedNames instance and pass
it to every naming call that must not repeat a name.
"""

import re
from typing import Iterable, Optional

from .exceptions import UnresolvedReferenceError
from .models import Schema

SEPARATORS = re.compile(r"[_\- ]")

VOWELS = "aeiou"


def to_pascal_case(name: str) -> str:
    """USER_PROFILE -> UserProfile, order-item -> OrderItem"""
    words = [w.strip() for w in SEPARATORS.split(name)]
    return "".join(
        w.upper() if len(w) == 1 else w[0].upper() + w[1:].lower() for w in words if w
    )


def pluralize(name: str) -> str:
    """
    Heuristic English plural.

    Names ending in "ings" are kept, consonant + "y" becomes "ies", a trailing
    "s" gets "es", anything else gets "s". Irregular plurals are not handled.
    """
    lowered = name.lower()
    if lowered.endswith("ings"):
        return name

    if lowered.endswith("y") and len(name) > 1 and lowered[-2] not in VOWELS:
        return name[:-1] + "ies"

    if lowered.endswith("s"):
        return name + "es"

    return name + "s"


class UsedNames:
    """Case-insensitive set of names already taken in one scope"""

    def __init__(self, names: Iterable[str] = ()):
        self._names: set[str] = set()
        for name in names:
            self.add(name)

    def __contains__(self, name: str) -> bool:
        return name.casefold() in self._names

    def __len__(self) -> int:
        return len(self._names)

    def add(self, name: str) -> bool:
        """Add a name; False if it was already taken"""
        key = name.casefold()
        if key in self._names:
            return False
        self._names.add(key)
        return True


def ensure_unique_name(base_name: str, used: UsedNames) -> str:
    """Return base_name, or base_name + the smallest free suffix starting at 2"""
    if used.add(base_name):
        return base_name

    suffix = 2
    while not used.add(f"{base_name}{suffix}"):
        suffix += 1
    return f"{base_name}{suffix}"


class EntityNameMap:
    """
    Output class names for the entities of one schema.

    Names are stored per entity position so that duplicated diagram names
    still produce distinct classes. Name lookups are case-insensitive and
    resolve to the first entity declared with that name.
    """

    def __init__(self, class_names: list[str], raw_names: list[str]):
        self.class_names = class_names
        self._by_raw_name: dict[str, str] = {}
        for raw_name, class_name in zip(raw_names, class_names):
            self._by_raw_name.setdefault(raw_name.casefold(), class_name)

    def __contains__(self, raw_name: str) -> bool:
        return raw_name.casefold() in self._by_raw_name

    def __len__(self) -> int:
        return len(self.class_names)

    def get(self, raw_name: str) -> Optional[str]:
        return self._by_raw_name.get(raw_name.casefold())

    def resolve(self, raw_name: str, relationship=None) -> str:
        """Get the class name for a raw entity name or raise UnresolvedReferenceError"""
        class_name = self.get(raw_name)
        if class_name is None:
            raise UnresolvedReferenceError(raw_name, relationship)
        return class_name


def build_entity_name_map(schema: Schema) -> EntityNameMap:
    """Assign collision-free class names in entity declaration order"""
    used = UsedNames()
    class_names = [
        ensure_unique_name(to_pascal_case(entity.name), used)
        for entity in schema.entities
    ]
    return EntityNameMap(class_names, [entity.name for entity in schema.entities])
