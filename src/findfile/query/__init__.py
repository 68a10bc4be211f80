"""Query classification and search compilation."""

from .compiler import (
    EntityKind,
    FragmentOrder,
    LinkMode,
    OutputMode,
    SearchSpec,
    SortKey,
    compile_search,
)
from .tokens import Classification, FlagId, classify_tokens, is_help_request

__all__ = [
    "Classification",
    "EntityKind",
    "FlagId",
    "FragmentOrder",
    "LinkMode",
    "OutputMode",
    "SearchSpec",
    "SortKey",
    "classify_tokens",
    "compile_search",
    "is_help_request",
]
