"""Packaged JSON Schemas, one directory per bundle format version."""
