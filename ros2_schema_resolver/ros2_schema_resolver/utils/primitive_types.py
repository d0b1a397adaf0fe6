from __future__ import annotations

import re
from typing import Optional, Tuple


BOOL_TYPES = {"bool"}
BYTE_TYPES = {"byte", "char"}
INTEGER_TYPES = {
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
}
FLOAT_TYPES = {"float32", "float64"}
STRING_TYPES = {"string", "wstring"}

PRIMITIVE_TYPES = BOOL_TYPES | BYTE_TYPES | INTEGER_TYPES | FLOAT_TYPES | STRING_TYPES

# string<=N / wstring<=N
_BOUNDED_STRING_RE = re.compile(r"^(w?string)<=(.*)$")


def split_bounded_string(type_name: str) -> Tuple[str, Optional[int]]:
    """Split ``string<=N`` into ``("string", N)``.

    Plain keywords come back with a ``None`` bound. Raises ValueError when
    the bound is present but not a positive integer.
    """
    m = _BOUNDED_STRING_RE.match(type_name)
    if m is None:
        return type_name, None
    bound_text = m.group(2).strip()
    if not bound_text.isdigit() or int(bound_text) == 0:
        raise ValueError(f"Invalid string bound '{bound_text}' in '{type_name}'")
    return m.group(1), int(bound_text)


def is_primitive_type(type_name: Optional[str]) -> bool:
    if not type_name:
        return False
    try:
        base, _ = split_bounded_string(type_name)
    except ValueError:
        return False
    return base in PRIMITIVE_TYPES


def is_string_type(type_name: Optional[str]) -> bool:
    return bool(type_name) and type_name in STRING_TYPES


def looks_like_primitive_keyword(type_name: str) -> bool:
    """Bare lower-case names can only be primitives; message names start upper-case."""
    return "/" not in type_name and type_name[:1].islower()
