"""Classification reports for the command line."""
import json
from typing import Dict, List, Optional, Tuple

import click
from colorama import Fore, Style

from schema_shapes.api.document_fetcher import DefaultDocumentFetcher, DocumentFetcher
from schema_shapes.api.fetch_cache import CachingDocumentFetcher
from schema_shapes.errors import SchemaClassificationError
from schema_shapes.introspection import analyze_schema
from schema_shapes.schema.models import ClassificationResult, SchemaNode

# Checked in order; the first matching flag names the shape
SHAPE_LABELS = [
    ("is_base_type", "base type"),
    ("is_extended_object", "extended object"),
    ("is_tuple_with_extra", "tuple with extra"),
    ("is_tuple", "tuple"),
    ("is_simple_map", "simple map"),
    ("is_map", "map"),
    ("is_simple_array", "simple array"),
    ("is_array", "array"),
    ("is_known_type", "known type"),
]

# Where Swagger 2 and OpenAPI 3 keep named schemas
DEFINITION_SECTIONS = [
    ("definitions",),
    ("components", "schemas"),
]


def describe_shape(result: ClassificationResult) -> str:
    """Short human label for a classification result"""
    for flag, label in SHAPE_LABELS:
        if getattr(result, flag):
            return label
    return "complex object"


def _escape(name: str) -> str:
    return name.replace("~", "~0").replace("/", "~1")


class SchemaReport:
    """Loads a document and prints classifications of its schemas."""

    def __init__(self, location: str, fetcher: Optional[DocumentFetcher] = None):
        """Initialize report."""
        self.location = location
        # Shared by every classification so a scan loads each document once
        self.fetcher = CachingDocumentFetcher(fetcher or DefaultDocumentFetcher())
        self.document = self.fetcher.fetch(location)

    def classify(self, pointer: str = "") -> ClassificationResult:
        """Classify the node at a JSON pointer ("" is the whole document)."""
        if pointer:
            if not pointer.startswith("/"):
                pointer = f"/{pointer}"
            schema = SchemaNode(pointer=f"#{pointer}")
        else:
            schema = SchemaNode.from_dict(self.document)
        return analyze_schema(schema, self.document, self.location, self.fetcher)

    def definition_pointers(self) -> List[Tuple[str, str]]:
        """List (name, pointer) for every named schema in the document."""
        pointers = []
        for section in DEFINITION_SECTIONS:
            container = self.document
            for key in section:
                container = container.get(key) if isinstance(container, dict) else None
            if not isinstance(container, dict):
                continue
            prefix = "".join(f"/{key}" for key in section)
            for name in container:
                pointers.append((name, f"{prefix}/{_escape(name)}"))
        return pointers

    def scan(self) -> Dict[str, object]:
        """
        Classify every named schema.

        Returns:
            Dict of name -> ClassificationResult, or the error raised for it
        """
        results: Dict[str, object] = {}
        for name, pointer in self.definition_pointers():
            try:
                results[name] = self.classify(pointer)
            except SchemaClassificationError as e:
                results[name] = e
        return results

    @staticmethod
    def print_result(result: ClassificationResult, as_json: bool = False) -> None:
        """Print the flags of one classification."""
        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
            return

        click.echo(f"{Fore.CYAN}Shape: {Fore.WHITE}{describe_shape(result)}{Style.RESET_ALL}")
        for flag, value in result.to_dict().items():
            color = Fore.GREEN if value else Fore.YELLOW
            click.echo(f"  {flag:22s} {color}{value}{Style.RESET_ALL}")

    @staticmethod
    def print_scan(results: Dict[str, object], as_json: bool = False) -> None:
        """Print one line per scanned schema."""
        if as_json:
            payload = {
                name: outcome.to_dict() if isinstance(outcome, ClassificationResult) else {"error": str(outcome)}
                for name, outcome in results.items()
            }
            click.echo(json.dumps(payload, indent=2))
            return

        if not results:
            click.echo(f"{Fore.YELLOW}No named schemas found")
            return

        for name in sorted(results):
            outcome = results[name]
            if isinstance(outcome, ClassificationResult):
                click.echo(f"{name:40s} {Fore.GREEN}{describe_shape(outcome)}{Style.RESET_ALL}")
            else:
                click.echo(f"{name:40s} {Fore.RED}{outcome}{Style.RESET_ALL}")
