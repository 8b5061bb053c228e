"""
Code generation exceptions
"""

from typing import Optional


class GenerationError(Exception):
    """Base exception for code generation errors"""

    pass


class UnresolvedReferenceError(GenerationError):
    """Raised when a relationship references an entity absent from the schema"""

    def __init__(self, name: str, relationship: Optional["Relationship"] = None):
        self.name = name
        self.relationship = relationship
        message = f"Unresolved entity reference '{name}'"
        if relationship is not None:
            message += (
                f" in relationship {relationship.from_entity} "
                f"{relationship.from_cardinality}--{relationship.to_cardinality} "
                f"{relationship.to_entity}"
            )
        super().__init__(message)
