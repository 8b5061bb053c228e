"""
Parser for Mermaid ER diagrams.

Lines are classified by their shape only. Anything that does not look like
an entity header, an attribute, or a relationship is dropped, so the parser
never raises for malformed content and simply returns a smaller schema.
"""

import asyncio
import re
import time
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .models import Entity, EntityAttribute, Relationship, Schema

IGNORED_PREFIXES = ("erDiagram", "%%")

RELATIONSHIP_SEPARATOR = "--"

# "USER ||" -> ("USER", "||")
LEFT_SIDE_PATTERN = re.compile(r"(\w+)\s*([|}o{]+)$")
# "o{ POST" -> ("o{", "POST")
RIGHT_SIDE_PATTERN = re.compile(r"^([|}o{]+)\s*(\w+)")


def _parse_attribute(line: str) -> Optional[EntityAttribute]:
    """Parse "type name [flags]"; None when the line has fewer than two tokens"""
    parts = line.split()
    if len(parts) < 2:
        return None

    flags = parts[2] if len(parts) > 2 else ""
    return EntityAttribute(
        name=parts[1],
        data_type=parts[0],
        is_primary_key="PK" in flags,
        is_foreign_key="FK" in flags,
    )


def _parse_relationship(line: str) -> Optional[Relationship]:
    """Parse 'A ||--o{ B : "label"'; None when either side does not match"""
    head, _, label = line.partition(":")
    label = label.strip().strip('"')

    sides = head.strip().split(RELATIONSHIP_SEPARATOR)
    if len(sides) != 2:
        return None

    left_match = LEFT_SIDE_PATTERN.search(sides[0].strip())
    right_match = RIGHT_SIDE_PATTERN.match(sides[1].strip())
    if not left_match or not right_match:
        return None

    return Relationship(
        from_entity=left_match.group(1),
        from_cardinality=left_match.group(2),
        to_cardinality=right_match.group(1),
        to_entity=right_match.group(2),
        label=label,
    )


def parse_mermaid(text: str) -> Schema:
    """
    Parse Mermaid ER diagram text into a Schema.

    Args:
        text: Raw diagram text, newline delimited

    Returns:
        Schema with entities and relationships in declaration order
    """
    logger.info("Parse started")
    start = time.perf_counter()

    schema = Schema()
    current_entity: Optional[Entity] = None

    for line_number, line in enumerate(text.splitlines(), start=1):
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.startswith(IGNORED_PREFIXES):
            continue

        # Entity header, e.g. "USER {"
        if trimmed.endswith("{") and "||" not in trimmed:
            current_entity = Entity(name=trimmed.replace("{", "").strip())
            schema.entities.append(current_entity)
            continue

        if trimmed == "}":
            current_entity = None
            continue

        if current_entity is not None:
            attribute = _parse_attribute(trimmed)
            if attribute is None:
                logger.debug(
                    f"Line {line_number}: skipping attribute line in "
                    f"{current_entity.name}: {trimmed!r}"
                )
            else:
                current_entity.attributes.append(attribute)
            continue

        if RELATIONSHIP_SEPARATOR in trimmed and ":" in trimmed:
            relationship = _parse_relationship(trimmed)
            if relationship is None:
                logger.debug(
                    f"Line {line_number}: skipping relationship line: {trimmed!r}"
                )
            else:
                schema.relationships.append(relationship)
            continue

        logger.debug(f"Line {line_number}: ignored: {trimmed!r}")

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Parse completed in {elapsed_ms:.0f}ms. Found {len(schema.entities)} "
        f"entities and {len(schema.relationships)} relationships"
    )
    return schema


def parse_mermaid_file(path: Union[str, Path], encoding: str = "utf-8") -> Schema:
    """Read a diagram file and parse it"""
    path = Path(path)
    logger.debug(f"Reading diagram from {path}")
    return parse_mermaid(path.read_text(encoding=encoding))


class MermaidParser:
    """Thin object wrapper around parse_mermaid, with a thread-offloaded variant"""

    def parse(self, text: str) -> Schema:
        return parse_mermaid(text)

    async def parse_async(self, text: str) -> Schema:
        return await asyncio.to_thread(parse_mermaid, text)
