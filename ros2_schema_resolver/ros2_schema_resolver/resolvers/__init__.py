from .central_resolver import (
    CentralSchemaResolver,
    flatten,
    get_global_resolver,
    reset_global_resolver,
    set_global_resolver,
)

__all__ = [
    "CentralSchemaResolver",
    "flatten",
    "get_global_resolver",
    "reset_global_resolver",
    "set_global_resolver",
]
