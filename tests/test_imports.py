"""Test that all modules can be imported without errors."""


def test_main_package_import():
    """Test that main package imports successfully."""
    import er2code

    assert er2code.__name__ == "er2code"
    assert er2code.__version__


def test_cli_imports():
    """Test CLI module imports."""
    from er2code.cli import cli, main

    assert callable(main.cli)
    assert callable(main.main)
    assert main.cli is cli


def test_schema_imports():
    from er2code.schema import exporters, generator, parser, plans

    assert "csharp" in exporters.RENDERERS
    assert callable(parser.parse_mermaid)
    assert callable(generator.generate_entities)
    assert plans.ScalarType.TEXT


def test_utils_imports():
    from er2code.utils import er2code_logger, log_timing, setup_logging

    assert callable(setup_logging)
    assert callable(log_timing)
    assert er2code_logger is not None
