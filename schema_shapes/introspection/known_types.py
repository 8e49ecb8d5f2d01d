"""Declared types that never need a model of their own."""
from typing import Dict, FrozenSet, Iterable, Optional

# Sentinel for "any format, including none"
ANY_FORMAT: Optional[FrozenSet[str]] = None

# declared type -> formats counted as known
KNOWN_TYPE_FORMATS: Dict[str, Optional[FrozenSet[str]]] = {
    "boolean": ANY_FORMAT,
    "string": ANY_FORMAT,  # date, date-time, uuid, byte, binary, password...
    "integer": ANY_FORMAT,  # int8, int16, int32, int64, uint*
    "number": ANY_FORMAT,  # float, double
}


def is_known_type_format(declared_type: str, fmt: Optional[str] = None) -> bool:
    """Check whether a (type, format) pair is listed as a known type"""
    if declared_type not in KNOWN_TYPE_FORMATS:
        return False
    formats = KNOWN_TYPE_FORMATS[declared_type]
    return formats is ANY_FORMAT or fmt in formats


def register_known_type(declared_type: str, formats: Optional[Iterable[str]] = None) -> None:
    """
    Add (or widen) a known type entry

    Args:
        declared_type: Value of the schema's "type" keyword
        formats: Formats accepted for that type; None accepts any format
    """
    if formats is None:
        KNOWN_TYPE_FORMATS[declared_type] = ANY_FORMAT
        return

    current = KNOWN_TYPE_FORMATS.get(declared_type, frozenset())
    if current is ANY_FORMAT:
        return
    KNOWN_TYPE_FORMATS[declared_type] = current | frozenset(formats)
