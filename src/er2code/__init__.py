"""
er2code - Generate entity classes and ORM mapping code from Mermaid ER diagrams.

This package provides tools for:
- Parsing Mermaid ER diagram text into a schema model
- Classifying entities (owned types, join tables, composite and missing keys)
- Rendering C# entity classes and an Entity Framework Core DbContext
"""

from er2code._version import __version__
from er2code.pipeline import GenerationResult, convert, convert_async
from er2code.schema import (Schema, generate_entities,
                            generate_mapping_configuration, parse_mermaid)

__all__ = [
    "__version__",
    "convert",
    "convert_async",
    "GenerationResult",
    "parse_mermaid",
    "generate_entities",
    "generate_mapping_configuration",
    "Schema",
]

__license__ = "BSD-3"
