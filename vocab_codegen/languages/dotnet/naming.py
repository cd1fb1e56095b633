"""
C#-specific naming utilities and sanitization.

Handles C# keywords and the upper camel case used for class, enum and
property names.
"""

from ...core.naming import NameSanitizer, NamingCase


# C# reserved keywords (case-sensitive)
CSHARP_RESERVED_WORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}


def create_csharp_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for C#; keywords are escaped with ``@``."""
    return NameSanitizer(
        CSHARP_RESERVED_WORDS, case_sensitive=True, conflict_prefix="@"
    )


_type_name_sanitizer = create_csharp_sanitizer()


def to_type_name(name: str) -> str:
    """Class or enum name for a vocabulary short name (``startDate`` -> ``StartDate``)."""
    converted = _type_name_sanitizer.convert_case(name, NamingCase.UPPER_CAMEL)
    if _type_name_sanitizer.is_reserved(converted):
        return f"@{converted}"
    return converted
