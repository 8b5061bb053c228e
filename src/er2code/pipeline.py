"""
End-to-end conversion: diagram text -> schema -> generated sources.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from er2code.config import CodegenConfig
from er2code.schema import (Schema, generate_entities,
                            generate_mapping_configuration, get_renderer,
                            parse_mermaid)
from er2code.utils.decorators import log_timing


@dataclass
class GenerationResult:
    """The parsed schema and the two generated artifacts"""

    schema: Schema
    entities: str
    mapping: str
    warnings: list[str] = field(default_factory=list)


def collect_warnings(schema: Schema) -> list[str]:
    """Caller-level notices about a parsed schema; never affect generation"""
    warnings = []
    if not schema.entities:
        warnings.append("No entities found in diagram")
    if not schema.relationships:
        warnings.append("No relationships found in diagram")
    return warnings


@log_timing("convert")
def convert(text: str, settings: Optional[CodegenConfig] = None) -> GenerationResult:
    """
    Parse diagram text and generate entity and mapping sources.

    Args:
        text: Mermaid ER diagram text
        settings: Code generation settings (default: CodegenConfig())

    Returns:
        GenerationResult with schema, both sources and caller-level warnings

    Raises:
        UnresolvedReferenceError: a relationship references an undeclared entity
    """
    settings = settings or CodegenConfig()
    renderer = get_renderer(settings.target, **settings.renderer_options())

    schema = parse_mermaid(text)
    warnings = collect_warnings(schema)
    for warning in warnings:
        logger.warning(warning)

    return GenerationResult(
        schema=schema,
        entities=generate_entities(schema, renderer),
        mapping=generate_mapping_configuration(schema, renderer),
        warnings=warnings,
    )


async def convert_async(text: str, settings: Optional[CodegenConfig] = None) -> GenerationResult:
    """Run convert() in a worker thread; the computation itself is not interruptible"""
    return await asyncio.to_thread(convert, text, settings)
