"""
Schema Classifier - Decides the canonical shape of a schema.

Shapes:
- Known types (primitives, wildcards, unconstrained objects)
- Arrays, tuples and tuples with extra items
- Maps and extended objects (properties plus additionalProperties)
- Polymorphic base types (discriminator)

Nested pointers are only dereferenced where a flag depends on them: the item
schema of a homogeneous array and the value schema of a map.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from schema_shapes.api.document_fetcher import DocumentFetcher
from schema_shapes.errors import InvalidInputError
from schema_shapes.schema.models import ClassificationResult, SchemaNode

from .known_types import is_known_type_format
from .reference_resolver import ReferenceResolver, ResolutionContext

logger = logging.getLogger(__name__)

SchemaInput = Union[SchemaNode, Mapping[str, Any]]


def _allows(value) -> bool:
    """additionalProperties / additionalItems: true or a schema"""
    return value is True or isinstance(value, SchemaNode)


@dataclass
class _Facts:
    """Structural facts derived once per concrete node"""

    object_typed: bool
    array_typed: bool
    has_properties: bool
    has_all_of: bool
    has_additional_properties: bool
    has_additional_items: bool
    is_tuple_like: bool

    @classmethod
    def of(cls, node: SchemaNode) -> "_Facts":
        return cls(
            object_typed=not node.types or "object" in node.types,
            array_typed="array" in node.types or node.items is not None,
            has_properties=bool(node.properties),
            has_all_of=bool(node.all_of),
            has_additional_properties=_allows(node.additional_properties),
            has_additional_items=_allows(node.additional_items),
            is_tuple_like=isinstance(node.items, tuple) and len(node.items) > 0,
        )


class SchemaClassifier:
    """Classifies schema nodes, resolving pointers as needed"""

    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()

    def classify(self, node: Optional[SchemaInput], context: ResolutionContext) -> ClassificationResult:
        """
        Classify a schema node

        Args:
            node: Schema node or raw schema mapping; may be a $ref
            context: Resolution state of the current call

        Returns:
            ClassificationResult with every shape flag set

        Raises:
            InvalidInputError: If node is None or not a schema
            UnresolvedReferenceError: If a required pointer cannot be resolved
            CircularReferenceError: If a required pointer leads back to itself
        """
        if node is None:
            raise InvalidInputError("No schema to classify")
        if not isinstance(node, SchemaNode):
            node = SchemaNode.from_dict(node)

        with self.resolver.resolving(node, context) as concrete:
            return self._classify_concrete(concrete, context)

    def _classify_concrete(self, node: SchemaNode, context: ResolutionContext) -> ClassificationResult:
        facts = _Facts.of(node)

        is_known_type = self._is_known_type(node, facts)
        is_base_type = facts.object_typed and bool(node.discriminator)

        # maps
        has_extra = facts.has_properties or facts.has_all_of
        is_map = facts.object_typed and facts.has_additional_properties and not has_extra
        is_extended_object = facts.object_typed and facts.has_additional_properties and has_extra
        is_simple_map = False
        if is_map:
            if isinstance(node.additional_properties, SchemaNode):
                is_simple_map = self.classify(node.additional_properties, context).is_simple_schema
            else:
                is_simple_map = True

        # arrays and tuples
        is_array = facts.array_typed
        is_tuple = is_array and facts.is_tuple_like and not facts.has_additional_items
        is_tuple_with_extra = is_array and facts.is_tuple_like and facts.has_additional_items
        is_simple_array = False
        if is_array and not facts.is_tuple_like:
            if isinstance(node.items, SchemaNode):
                is_simple_array = self.classify(node.items, context).is_simple_schema
            else:
                # unrestricted: no items, or an empty items list
                is_simple_array = True

        is_simple_schema = (is_known_type or is_simple_array or is_simple_map) and not is_base_type

        return ClassificationResult(
            is_known_type=is_known_type,
            is_array=is_array,
            is_simple_array=is_simple_array,
            is_tuple=is_tuple,
            is_tuple_with_extra=is_tuple_with_extra,
            is_map=is_map,
            is_simple_map=is_simple_map,
            is_extended_object=is_extended_object,
            is_base_type=is_base_type,
            is_simple_schema=is_simple_schema,
            is_enum=bool(node.enum),
        )

    @staticmethod
    def _is_known_type(node: SchemaNode, facts: _Facts) -> bool:
        if any(is_known_type_format(t, node.format) for t in node.types):
            return True

        # wildcard, format-only and unconstrained objects
        return (
            facts.object_typed
            and not facts.has_properties
            and not facts.has_all_of
            and not facts.has_additional_properties
            and not facts.has_additional_items
            and node.items is None
            and not node.discriminator
        )


def analyze_schema(
    schema: Optional[SchemaInput],
    root: Optional[Mapping[str, Any]] = None,
    base_location: Optional[str] = None,
    fetcher: Optional[DocumentFetcher] = None,
) -> ClassificationResult:
    """
    Classify a schema with a fresh resolution context

    Args:
        schema: Schema node or raw mapping to classify
        root: Root document used for same-document pointers (#/...)
        base_location: File path or URL of the root document
        fetcher: Loader for external documents (defaults to file/HTTP)

    Returns:
        ClassificationResult
    """
    context = ResolutionContext(root=root, base_location=base_location, fetcher=fetcher)
    try:
        result = SchemaClassifier().classify(schema, context)
    finally:
        context.close()
    if context.documents:
        logger.debug(f"Classification used {len(context.documents)} document(s)")
    return result
