"""
Naming utilities for safe code generation.

Turns vocabulary names (``startDate``, ``beta:duration``) into identifiers
of the target language, escaping keywords and keeping names unique within
one scope.
"""

import re
from enum import Enum
from typing import Dict, Set


class NamingCase(Enum):
    """Identifier case styles."""

    UPPER_CAMEL = "upper_camel"  # startDate -> StartDate, URL -> URL
    CAMEL_CASE = "camel"  # StartDate -> startDate


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(
        self,
        reserved_words: Set[str] = None,
        case_sensitive: bool = False,
        conflict_prefix: str = "",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            case_sensitive: Compare against reserved words case-sensitively
            conflict_prefix: Prefix used to escape reserved words instead of a suffix
        """
        self.reserved_words = reserved_words or set()
        self.case_sensitive = case_sensitive
        self.conflict_prefix = conflict_prefix
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def convert_case(self, name: str, target_case: NamingCase) -> str:
        """Clean a name and convert it to the target case, without conflict tracking."""
        upper = self._to_upper_camel_case(self._clean_basic(name))
        if target_case == NamingCase.CAMEL_CASE and upper[:1].isalpha():
            return upper[0].lower() + upper[1:]
        return upper

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.UPPER_CAMEL,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Vocabulary name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Separator before the counter of a duplicate name

        Returns:
            Sanitized name, unique among names handed out since the last reset
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = self.convert_case(name, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

        return final_name

    def _clean_basic(self, name: str) -> str:
        """Replace characters that cannot appear in an identifier."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
        cleaned = cleaned.strip("_-")
        return cleaned or "field"

    def _to_upper_camel_case(self, name: str) -> str:
        """Uppercase the first letter of every word, keeping the rest as written."""
        parts = re.split(r"[_\-\s]+", name)
        result = "".join(part[0].upper() + part[1:] for part in parts if part)
        if result and result[0].isdigit():
            result = f"_{result}"
        return result

    def is_reserved(self, name: str) -> bool:
        candidate = name if self.case_sensitive else name.lower()
        return candidate in self.reserved_words

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Escape reserved words, then number duplicates."""
        if self.is_reserved(name):
            if self.conflict_prefix:
                name = f"{self.conflict_prefix}{name}"
            else:
                name = f"{name}{suffix}"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()
        self._name_cache.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
