"""Tests for the Mermaid ER diagram parser."""

import asyncio

import pytest

from er2code.schema import MermaidParser, parse_mermaid, parse_mermaid_file


def test_empty_input():
    schema = parse_mermaid("")
    assert schema.entities == []
    assert schema.relationships == []


def test_header_and_comments_only():
    schema = parse_mermaid("erDiagram\n%% nothing here\n\n")
    assert schema.entities == []
    assert schema.relationships == []


def test_blog_diagram(blog_diagram):
    schema = parse_mermaid(blog_diagram)

    assert [e.name for e in schema.entities] == ["USER", "POST"]
    assert [a.name for a in schema.entities[0].attributes] == [
        "user_id",
        "username",
        "created_at",
    ]
    assert len(schema.relationships) == 1

    rel = schema.relationships[0]
    assert rel.from_entity == "USER"
    assert rel.to_entity == "POST"
    assert rel.from_cardinality == "||"
    assert rel.to_cardinality == "o{"
    assert rel.label == "writes"


@pytest.mark.parametrize(
    "line, is_pk, is_fk",
    [
        ("int id PK", True, False),
        ("int id FK", False, True),
        ("int id PK,FK", True, True),
        ("string email", False, False),
        ("string code UK", False, False),
    ],
)
def test_attribute_flags(line, is_pk, is_fk):
    schema = parse_mermaid(f"erDiagram\nT {{\n{line}\n}}\n")
    attribute = schema.entities[0].attributes[0]
    assert attribute.is_primary_key is is_pk
    assert attribute.is_foreign_key is is_fk


def test_flags_read_from_third_token_only():
    schema = parse_mermaid("T {\nint id comment PK\nint other_id FK PK\n}\n")
    first, second = schema.entities[0].attributes
    assert first.is_primary_key is False
    assert second.is_foreign_key is True
    assert second.is_primary_key is False


def test_single_token_attribute_is_skipped():
    schema = parse_mermaid("T {\n    int\n    int id PK\n}\n")
    assert [a.name for a in schema.entities[0].attributes] == ["id"]


def test_header_name_is_trimmed():
    schema = parse_mermaid("   USER   {\n}\n")
    assert schema.entities[0].name == "USER"
    assert schema.entities[0].attributes == []


def test_relationship_without_colon_is_dropped():
    schema = parse_mermaid("A {\n}\nB {\n}\nA ||--o{ B\n")
    assert len(schema.entities) == 2
    assert schema.relationships == []


def test_relationship_with_malformed_side_is_dropped():
    schema = parse_mermaid('A ||--  : "broken"\n--o{ B : "broken"\n')
    assert schema.relationships == []


def test_label_splits_on_first_colon():
    schema = parse_mermaid('A ||--o{ B : "ratio: 1"\n')
    assert schema.relationships[0].label == "ratio: 1"


def test_unquoted_and_empty_labels():
    schema = parse_mermaid("A ||--o{ B : owns\nA ||--|| C :\n")
    assert [r.label for r in schema.relationships] == ["owns", ""]


def test_cardinality_tokens_kept_raw():
    schema = parse_mermaid('CUSTOMER }|--|{ DELIVERY_ADDRESS : "uses"\n')
    rel = schema.relationships[0]
    assert rel.from_entity == "CUSTOMER"
    assert rel.from_cardinality == "}|"
    assert rel.to_cardinality == "|{"
    assert rel.to_entity == "DELIVERY_ADDRESS"


def test_declaration_order_is_kept():
    text = 'B ||--o{ C : "x"\nC {\n}\nA ||--o{ B : "y"\nA {\n}\n'
    schema = parse_mermaid(text)
    assert [e.name for e in schema.entities] == ["C", "A"]
    assert [r.from_entity for r in schema.relationships] == ["B", "A"]


def test_relationships_to_undeclared_entities_are_kept():
    schema = parse_mermaid('USER {\nint id PK\n}\nUSER ||--o{ GHOST : "haunts"\n')
    assert schema.relationships[0].to_entity == "GHOST"
    assert schema.get_entity("GHOST") is None


def test_crlf_line_endings():
    schema = parse_mermaid("erDiagram\r\nUSER {\r\n  int id PK\r\n}\r\n")
    assert schema.entities[0].attributes[0].name == "id"


def test_unclosed_entity_block():
    schema = parse_mermaid("USER {\n  int id PK\n  string name\n")
    assert len(schema.entities[0].attributes) == 2


def test_get_entity_is_case_insensitive(blog_diagram):
    schema = parse_mermaid(blog_diagram)
    assert schema.get_entity("user") is schema.entities[0]
    assert len(schema.get_relationships_for_entity("post")) == 1


def test_parse_logs_summary(blog_diagram, loguru_capture):
    parse_mermaid(blog_diagram)
    output = loguru_capture.getvalue()
    assert "Parse started" in output
    assert "Found 2 entities and 1 relationships" in output


def test_parse_file(blog_file):
    schema = parse_mermaid_file(blog_file)
    assert len(schema.entities) == 2


def test_parse_async(blog_diagram):
    schema = asyncio.run(MermaidParser().parse_async(blog_diagram))
    assert schema == MermaidParser().parse(blog_diagram)
