"""Dataclass field descriptors carrying the Cairo kind of each struct member.

Declaration order of a struct's fields is its wire order; the metadata here
tells the serializer how wide each member is and whether it is an address or
a length-prefixed array.
"""

from __future__ import annotations

from dataclasses import field, fields
from typing import Any

from autoswappr.codec import WordKind, check_bool, check_width, normalize_address, parse_word
from autoswappr.errors import InvalidInput

KIND = "cairo_kind"
IS_ADDRESS = "cairo_address"
IS_ARRAY = "cairo_array"


def address_field(**kwargs: Any) -> Any:
    """A contract address, stored as canonical 0x + 64 hex digits."""
    return field(metadata={KIND: WordKind.FELT, IS_ADDRESS: True}, **kwargs)


def uint_field(kind: WordKind, **kwargs: Any) -> Any:
    """An unsigned integer member of the given width."""
    return field(metadata={KIND: kind}, **kwargs)


def bool_field(**kwargs: Any) -> Any:
    """A Cairo bool, encoded as a single 0 or 1 word."""
    return field(metadata={KIND: WordKind.BOOL}, **kwargs)


def felt_array_field(**kwargs: Any) -> Any:
    """A length-prefixed Array<felt252>, stored as a tuple of words."""
    kwargs.setdefault("default_factory", tuple)
    return field(metadata={KIND: WordKind.FELT, IS_ARRAY: True}, **kwargs)


def normalize_fields(obj: Any) -> None:
    """Validate and canonicalize annotated fields of a frozen dataclass in place.

    Raises:
        InvalidInput: On a malformed address, out-of-range integer, non-bool flag or
            non-numeric array element
    """
    name = type(obj).__name__
    for f in fields(obj):
        kind = f.metadata.get(KIND)
        if kind is None:
            continue
        value = getattr(obj, f.name)
        label = f"{name}.{f.name}"

        if f.metadata.get(IS_ADDRESS):
            object.__setattr__(obj, f.name, _canonical_address(value, label))
        elif f.metadata.get(IS_ARRAY):
            if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
                raise InvalidInput(f"{label} must be a sequence of words", value)
            words = tuple(parse_word(item, name=label) for item in value)
            object.__setattr__(obj, f.name, words)
        elif kind is WordKind.BOOL:
            check_bool(value, name=label)
        else:
            if isinstance(value, bool):
                raise InvalidInput(f"{label} must be an int, got bool", value)
            check_width(value, kind, name=label)


def _canonical_address(value: Any, label: str) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        value = hex(value)
    if not isinstance(value, str):
        raise InvalidInput(f"{label} must be a hex address string", value)
    return normalize_address(value)


__all__ = [
    "KIND",
    "IS_ADDRESS",
    "IS_ARRAY",
    "address_field",
    "uint_field",
    "bool_field",
    "felt_array_field",
    "normalize_fields",
]
