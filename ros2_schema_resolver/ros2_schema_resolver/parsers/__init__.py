"""Parsers for message interface definitions."""

from .definition_parser import DefinitionParser, definition_parser, parse_definition, strip_comment

__all__ = ["DefinitionParser", "definition_parser", "parse_definition", "strip_comment"]
