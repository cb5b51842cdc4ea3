"""
Unit Test Layer Configuration

Pure logic: CEP validation, unit conversion, config parsing, tracing and
deadline helpers. No sockets, no apps.

Usage:
    pytest tests/unit -v
    pytest -m unit -v
"""
import pytest


def pytest_collection_modifyitems(items):
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
