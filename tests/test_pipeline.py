"""Tests for the end-to-end conversion."""

import asyncio

import pytest

from er2code import convert, convert_async
from er2code.config import CodegenConfig
from er2code.schema import UnresolvedReferenceError


def test_convert(blog_diagram):
    result = convert(blog_diagram)

    assert [e.name for e in result.schema.entities] == ["USER", "POST"]
    assert "public class User" in result.entities
    assert "public DbSet<Post> Posts" in result.mapping
    assert result.warnings == []


def test_convert_with_settings(blog_diagram):
    settings = CodegenConfig(context_name="BlogContext", namespace="Blog.Data")
    result = convert(blog_diagram, settings)

    assert result.entities.startswith("namespace Blog.Data;")
    assert "public class BlogContext : DbContext" in result.mapping


def test_convert_warnings(composite_key_diagram, loguru_capture):
    assert convert("").warnings == [
        "No entities found in diagram",
        "No relationships found in diagram",
    ]
    assert convert(composite_key_diagram).warnings == ["No relationships found in diagram"]
    assert "No relationships found in diagram" in loguru_capture.getvalue()


def test_convert_unresolved_reference():
    with pytest.raises(UnresolvedReferenceError):
        convert("USER {\nint id PK\n}\nUSER ||--o{ GHOST : haunts\n")


def test_convert_async(blog_diagram):
    result = asyncio.run(convert_async(blog_diagram))
    assert result.entities == convert(blog_diagram).entities
