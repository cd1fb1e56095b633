"""
Base class resolution for generated .NET classes.

Every generated class has exactly one base class. An explicit parent
(``subClassOf``) wins over a derived-from marker; a derived-from target
outside the foundation vocabulary means the class only keeps the JSON-LD
root as its base.
"""

from typing import Optional

from ...core.config import GeneratorConfig
from ...core.generator import MissingBaseClassError
from ...core.schema import Model
from ...core.vocabulary import Vocabulary, get_short_name
from .naming import to_type_name
from .types import DotNetType, TypeKind


def foundation_root(config: GeneratorConfig) -> DotNetType:
    """The root object type of the foundation library."""
    return DotNetType(
        name=config.foundation_root,
        namespace=config.foundation_namespace,
        kind=TypeKind.FOUNDATION,
    )


def _named_base(value: str, vocabulary: Vocabulary, config: GeneratorConfig) -> DotNetType:
    name = to_type_name(get_short_name(value))
    if vocabulary.is_foundation(value):
        return DotNetType(
            name=name, namespace=config.foundation_namespace, kind=TypeKind.FOUNDATION
        )
    return DotNetType(name=name, kind=TypeKind.MODEL)


def resolve_base(
    subclass_of: Optional[str],
    derived_from: Optional[str],
    model: Model,
    vocabulary: Vocabulary,
    config: GeneratorConfig,
) -> DotNetType:
    """
    Determine the single base class of a model.

    Args:
        subclass_of: Explicit parent marker
        derived_from: Derived-from marker
        model: The model being resolved, for error context
        vocabulary: Run vocabulary, for the foundation membership test
        config: Generator configuration

    Raises:
        MissingBaseClassError: If neither marker is present
    """
    if subclass_of:
        return _named_base(subclass_of, vocabulary, config)

    if derived_from:
        if vocabulary.is_foundation(derived_from):
            return _named_base(derived_from, vocabulary, config)
        return foundation_root(config)

    raise MissingBaseClassError(model.type)


def has_base_class(base: DotNetType, config: GeneratorConfig) -> bool:
    """True when the base declares members of its own that fields may shadow."""
    return base != foundation_root(config)
