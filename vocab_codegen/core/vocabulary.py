"""
Vocabulary namespaces and identifier compaction.

Type references in the schema are fully-qualified URIs
(``https://schema.org/Event``), compact keys (``schema:Event``) or local
references (``#Event``). This module turns any of those into the compact key
used by the lookup tables and answers whether a reference belongs to the
foundation vocabulary.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

ARRAY_PREFIX = "ArrayOf"
LOCAL_MARKER = "#"

DEFAULT_NAMESPACES = {
    "schema": "https://schema.org/",
    "oa": "https://openactive.io/",
    "beta": "https://openactive.io/ns-beta#",
    "skos": "http://www.w3.org/2004/02/skos/core#",
}


def strip_array_marker(value: str) -> str:
    """
    Remove a leading ``ArrayOf`` marker, keeping the reference after it.

    ``ArrayOf#Offer`` keeps its local marker (``#Offer``) while
    ``ArrayOf#https://schema.org/Text`` uses ``#`` only as a separator.
    """
    if value.startswith(ARRAY_PREFIX):
        value = value[len(ARRAY_PREFIX):]
        if value.startswith(LOCAL_MARKER) and "://" in value:
            value = value[len(LOCAL_MARKER):]
    return value


def get_short_name(value: str) -> str:
    """Return the bare type name of a reference (``Event`` for any form)."""
    value = strip_array_marker(value)
    for separator in ("/", "#", ":"):
        if separator in value:
            value = value.rsplit(separator, 1)[1]
    return value


@dataclass(frozen=True)
class Vocabulary:
    """Immutable table of vocabulary prefixes for one compilation run."""

    namespaces: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_NAMESPACES))
    )
    local_prefix: str = "oa"
    foundation_prefix: str = "schema"

    # When set, only these names count as foundation vocabulary types
    foundation_types: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if not isinstance(self.namespaces, MappingProxyType):
            object.__setattr__(
                self, "namespaces", MappingProxyType(dict(self.namespaces))
            )
        if self.foundation_types is not None and not isinstance(
            self.foundation_types, frozenset
        ):
            object.__setattr__(
                self, "foundation_types", frozenset(self.foundation_types)
            )

    def compact(self, value: str) -> str:
        """
        Return the compact key (``prefix:Name``) for a reference.

        Unknown namespaces are returned unchanged so that they can never
        collide with a key of a known prefix.
        """
        value = strip_array_marker(value)

        if value.startswith(LOCAL_MARKER):
            return f"{self.local_prefix}:{value[len(LOCAL_MARKER):]}"

        # Longest namespace first: ns-beta# shares a stem with openactive.io/
        for prefix, namespace in sorted(
            self.namespaces.items(), key=lambda item: len(item[1]), reverse=True
        ):
            if value.startswith(namespace):
                return f"{prefix}:{value[len(namespace):]}"

        # Already compact, or outside every known namespace
        return value

    def short_name(self, value: str) -> str:
        return get_short_name(value)

    def prefix_of(self, value: str) -> Optional[str]:
        """Return the vocabulary prefix of a reference, if it has a known one."""
        compacted = self.compact(value)
        prefix, sep, _ = compacted.partition(":")
        if sep and prefix in self.namespaces:
            return prefix
        return None

    def is_foundation_namespace(self, value: Optional[str]) -> bool:
        """True if the namespace (or any reference inside it) is the foundation vocabulary."""
        if not value:
            return False
        return self.prefix_of(value) == self.foundation_prefix

    def is_foundation(self, value: Optional[str]) -> bool:
        """Membership test for foundation vocabulary types."""
        if not self.is_foundation_namespace(value):
            return False
        if self.foundation_types is None:
            return True
        return get_short_name(value) in self.foundation_types

    def expand(self, compacted: str) -> str:
        """Inverse of ``compact`` for keys with a known prefix."""
        prefix, sep, name = compacted.partition(":")
        if sep and prefix in self.namespaces:
            return f"{self.namespaces[prefix]}{name}"
        return compacted
