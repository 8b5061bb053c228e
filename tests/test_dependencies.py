"""Test that required dependencies are available."""

import pytest


def test_required_dependencies():
    """Test that all required dependencies can be imported."""
    required_deps = [
        "click",
        "rich",
        "loguru",
        "pydantic",
        "yaml",  # pyyaml
        "dotenv",  # python-dotenv
    ]

    missing = []
    for dep in required_deps:
        try:
            __import__(dep)
        except ImportError:
            missing.append(dep)

    if missing:
        pytest.fail(f"Missing required dependencies: {missing}")
