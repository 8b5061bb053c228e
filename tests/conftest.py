"""Pytest configuration and fixtures."""

import io
import os
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add src to Python path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def pytest_configure(config):
    """Force test environment for all pytest runs"""
    os.environ["ER2CODE_ENVIRONMENT"] = "test"


@pytest.fixture(autouse=True)
def loguru_capture():
    stream = io.StringIO()
    logger.remove()
    logger.add(stream, level="DEBUG")
    yield stream
    logger.remove()


OWNED_DIAGRAM = """\
erDiagram
    USER ||--|| USER_PROFILE : "has"
    USER {
        int user_id PK
        string email
    }
    USER_PROFILE {
        int user_id PK,FK
        string bio
    }
"""

JOIN_TABLE_DIAGRAM = """\
erDiagram
    POST {
        int post_id PK
        string title
    }
    TAG {
        int tag_id PK
        string name
    }
    POST_TAG {
        int post_id PK,FK
        int tag_id PK,FK
    }
    POST ||--o{ POST_TAG : "tagged"
    TAG ||--o{ POST_TAG : "labels"
"""

COMPOSITE_KEY_DIAGRAM = """\
erDiagram
    ORDER_ITEM {
        int order_id PK,FK
        int line_number PK
        string sku
    }
"""

BLOG_DIAGRAM = """\
erDiagram
    %% Simple blog
    USER {
        int user_id PK
        string username
        datetime created_at
    }
    POST {
        int post_id PK
        int user_id FK
        string title
    }
    USER ||--o{ POST : "writes"
"""


@pytest.fixture
def owned_diagram():
    return OWNED_DIAGRAM


@pytest.fixture
def join_table_diagram():
    return JOIN_TABLE_DIAGRAM


@pytest.fixture
def composite_key_diagram():
    return COMPOSITE_KEY_DIAGRAM


@pytest.fixture
def blog_diagram():
    return BLOG_DIAGRAM


@pytest.fixture
def blog_file(tmp_path):
    path = tmp_path / "blog.mmd"
    path.write_text(BLOG_DIAGRAM, encoding="utf-8")
    return path
