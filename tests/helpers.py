"""Schema builders and HTTP fakes shared by the tests."""
from pathlib import Path
from unittest.mock import Mock

import requests

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def array_of(items):
    """Array schema; items=None leaves the array unrestricted"""
    schema = {"type": "array"}
    if items is not None:
        schema["items"] = items
    return schema


def map_of(values):
    """Map schema; values=None allows values of any type"""
    return {"type": "object", "additionalProperties": values if values is not None else True}


def ref(pointer):
    return {"$ref": pointer}


KNOWN_SCHEMAS = [
    {"type": "boolean"},
    {"type": "string"},
    {"type": "integer", "format": "int8"},
    {"type": "integer", "format": "int16"},
    {"type": "integer", "format": "int32"},
    {"type": "integer", "format": "int64"},
    {"type": "number", "format": "float"},
    {"type": "number", "format": "double"},
    {"type": "string", "format": "date"},
    {"type": "string", "format": "date-time"},
    {},
    {"type": "object"},
    {"type": ""},
    {"format": "uuid"},
]

COMPLEX_OBJECT = {
    "type": "object",
    "properties": {"id": {"type": "integer", "format": "int64"}},
}

COMPLEX_SCHEMAS = [
    COMPLEX_OBJECT,
    array_of(COMPLEX_OBJECT),
    map_of(COMPLEX_OBJECT),
]

REMOTE_BASE = "https://schemas.example.com"

REMOTE_DOCUMENTS = {
    f"{REMOTE_BASE}/known/bool": KNOWN_SCHEMAS[0],
    f"{REMOTE_BASE}/known/string": KNOWN_SCHEMAS[1],
    f"{REMOTE_BASE}/known/integer": KNOWN_SCHEMAS[5],
    f"{REMOTE_BASE}/known/float": KNOWN_SCHEMAS[6],
    f"{REMOTE_BASE}/known/date": KNOWN_SCHEMAS[8],
    f"{REMOTE_BASE}/known/object": KNOWN_SCHEMAS[11],
    f"{REMOTE_BASE}/known/format": KNOWN_SCHEMAS[13],
    f"{REMOTE_BASE}/complex/object": COMPLEX_SCHEMAS[0],
    f"{REMOTE_BASE}/complex/array": COMPLEX_SCHEMAS[1],
    f"{REMOTE_BASE}/complex/map": COMPLEX_SCHEMAS[2],
}

KNOWN_REFS = [url for url in REMOTE_DOCUMENTS if "/known/" in url]
COMPLEX_REFS = [url for url in REMOTE_DOCUMENTS if "/complex/" in url]


def fake_http_get(documents):
    """Side effect for a patched requests.Session.get serving JSON documents"""

    def _get(url, timeout=None, **kwargs):
        response = Mock()
        response.headers = {"Content-Type": "application/json"}
        if url in documents:
            response.json.return_value = documents[url]
        else:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"404 Not Found: {url}")
        return response

    return _get
