"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .dotnet import DotNetGenerator, create_dotnet_generator

__all__ = ["DotNetGenerator", "create_dotnet_generator"]
