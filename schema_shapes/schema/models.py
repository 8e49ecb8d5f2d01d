"""Models for schema nodes and their classification."""
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from schema_shapes.errors import InvalidInputError


def _sub_schema(value: Any, location: Optional[str], key: str) -> "SchemaNode":
    if not isinstance(value, Mapping):
        raise InvalidInputError(f"'{key}' must hold a schema object, got {type(value).__name__}")
    return SchemaNode.from_dict(value, location)


def _schema_or_bool(value: Any, location: Optional[str], key: str):
    if value is None or isinstance(value, bool):
        return value
    return _sub_schema(value, location, key)


@dataclass(frozen=True)
class SchemaNode:
    """Normalized view of one schema object.

    ``location`` is the canonical location of the document the node was read
    from; ``None`` stands for the root document of the current call.

    Nodes compare by value but are not hashable: ``properties`` and ``enum``
    may hold mutable values.
    """

    __hash__ = None

    pointer: Optional[str] = None
    types: Tuple[str, ...] = ()
    format: Optional[str] = None
    properties: Dict[str, "SchemaNode"] = field(default_factory=dict)
    additional_properties: Union[None, bool, "SchemaNode"] = None
    items: Union[None, "SchemaNode", Tuple["SchemaNode", ...]] = None
    additional_items: Union[None, bool, "SchemaNode"] = None
    discriminator: Optional[str] = None
    all_of: Tuple["SchemaNode", ...] = ()
    enum: Tuple[Any, ...] = ()
    location: Optional[str] = field(default=None, compare=False)

    @property
    def declared_type(self) -> Optional[str]:
        return self.types[0] if self.types else None

    @property
    def is_pointer(self) -> bool:
        return bool(self.pointer)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], location: Optional[str] = None) -> "SchemaNode":
        """
        Build a node from a parsed JSON/YAML mapping

        Args:
            data: Schema object as loaded from the document
            location: Canonical location of the owning document

        Returns:
            SchemaNode with nested schemas converted as well

        Raises:
            InvalidInputError: If data (or a nested schema) is not a mapping
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"Schema must be a mapping, got {type(data).__name__}")

        ref = data.get("$ref")
        if isinstance(ref, str) and ref:
            # Siblings of $ref carry no meaning until the pointer is resolved
            return cls(pointer=ref, location=location)

        raw_type = data.get("type")
        if isinstance(raw_type, str):
            types = (raw_type,) if raw_type else ()
        elif isinstance(raw_type, (list, tuple)):
            types = tuple(t for t in raw_type if isinstance(t, str) and t)
        else:
            types = ()

        properties = {
            name: _sub_schema(prop, location, f"properties/{name}")
            for name, prop in (data.get("properties") or {}).items()
        }

        raw_items = data.get("items")
        if raw_items is None:
            items = None
        elif isinstance(raw_items, (list, tuple)):
            items = tuple(_sub_schema(item, location, "items") for item in raw_items)
        else:
            items = _sub_schema(raw_items, location, "items")

        discriminator = data.get("discriminator")
        if isinstance(discriminator, Mapping):
            # OpenAPI 3 discriminator object
            discriminator = discriminator.get("propertyName")

        return cls(
            types=types,
            format=data.get("format") or None,
            properties=properties,
            additional_properties=_schema_or_bool(
                data.get("additionalProperties"), location, "additionalProperties"
            ),
            items=items,
            additional_items=_schema_or_bool(data.get("additionalItems"), location, "additionalItems"),
            discriminator=discriminator or None,
            all_of=tuple(_sub_schema(sub, location, "allOf") for sub in data.get("allOf") or ()),
            enum=tuple(data.get("enum") or ()),
            location=location,
        )


@dataclass(frozen=True)
class ClassificationResult:
    """Canonical shape flags of a classified schema"""

    is_known_type: bool = False
    is_array: bool = False
    is_simple_array: bool = False
    is_tuple: bool = False
    is_tuple_with_extra: bool = False
    is_map: bool = False
    is_simple_map: bool = False
    is_extended_object: bool = False
    is_base_type: bool = False
    is_simple_schema: bool = False
    is_enum: bool = False

    def to_dict(self) -> Dict[str, bool]:
        """Convert to dictionary representation"""
        return {f.name: getattr(self, f.name) for f in fields(self)}
