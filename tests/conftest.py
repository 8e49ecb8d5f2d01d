"""Shared fixtures for the test suite."""
import pytest
import yaml

from tests.helpers import FIXTURES_DIR, array_of, map_of, ref


@pytest.fixture
def invalid_pointers_path():
    return FIXTURES_DIR / "other-invalid-pointers.yaml"


@pytest.fixture
def invalid_pointers_spec(invalid_pointers_path):
    """Swagger document whose definitions hold dangling pointers"""
    with open(invalid_pointers_path) as f:
        return yaml.safe_load(f)


@pytest.fixture
def cyclic_spec():
    """Document with pointer cycles and recursive models"""
    return {
        "definitions": {
            "A": ref("#/definitions/B"),
            "B": ref("#/definitions/A"),
            "Self": ref("#/definitions/Self"),
            "Node": array_of(ref("#/definitions/Node")),
            "Dict": map_of(ref("#/definitions/Dict")),
            "Tree": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "children": array_of(ref("#/definitions/Tree")),
                },
            },
            "Name": {"type": "string"},
            "NameAlias": ref("#/definitions/Name"),
        }
    }
