"""Data model for message types and flattened schemas."""

from .type_reference import TypeReference, MSG_NAMESPACE
from .descriptors import ArrayKind, ArraySpec, FieldType, FieldDescriptor, TypeDescriptor
from .resolved_schema import ResolvedSchema, SCHEMA_ENCODING, compute_fingerprint

__all__ = [
    "TypeReference",
    "MSG_NAMESPACE",
    "ArrayKind",
    "ArraySpec",
    "FieldType",
    "FieldDescriptor",
    "TypeDescriptor",
    "ResolvedSchema",
    "SCHEMA_ENCODING",
    "compute_fingerprint",
]
