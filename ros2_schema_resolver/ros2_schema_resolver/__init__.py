"""Flatten ROS 2 message definitions into self-contained schema documents.

Typical use::

    from ros2_schema_resolver import CentralSchemaResolver, AmentPrefixLocator, split_sections

    resolver = CentralSchemaResolver(AmentPrefixLocator.from_env())
    schema = resolver.flatten("tf2_msgs/msg/TFMessage")
    for full_name, definition in split_sections(schema.text):
        ...

Sections are ordered dependencies first with the requested type last, and
each one carries a ``MSG:`` header. MCAP readers of the ``ros2msg`` schema
encoding expect the root first and unheaded, so the text is not a drop-in
schema for them.
"""

__version__ = "0.1.0"

# Layout version of schema bundle files this release reads and writes.
BUNDLE_FORMAT_VERSION = "0.1.0"

from .exceptions import (  # noqa: E402
    SchemaResolverError,
    MalformedDefinition,
    UnknownType,
    CyclicDependency,
    LocatorFailure,
    BundleFormatError,
    FormatVersionError,
)
from .models import TypeReference, TypeDescriptor, FieldDescriptor, ResolvedSchema, SCHEMA_ENCODING  # noqa: E402
from .file_io import (  # noqa: E402
    Locator,
    DictLocator,
    ChainLocator,
    AmentPrefixLocator,
    BundleLocator,
    split_sections,
)
from .resolver_config import ResolverConfig  # noqa: E402
from .resolvers import (  # noqa: E402
    CentralSchemaResolver,
    flatten,
    get_global_resolver,
    reset_global_resolver,
    set_global_resolver,
)

__all__ = [
    "BUNDLE_FORMAT_VERSION",
    "SchemaResolverError",
    "MalformedDefinition",
    "UnknownType",
    "CyclicDependency",
    "LocatorFailure",
    "BundleFormatError",
    "FormatVersionError",
    "TypeReference",
    "TypeDescriptor",
    "FieldDescriptor",
    "ResolvedSchema",
    "SCHEMA_ENCODING",
    "Locator",
    "DictLocator",
    "ChainLocator",
    "AmentPrefixLocator",
    "BundleLocator",
    "split_sections",
    "ResolverConfig",
    "CentralSchemaResolver",
    "flatten",
    "get_global_resolver",
    "reset_global_resolver",
    "set_global_resolver",
]
