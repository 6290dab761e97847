"""Trait pipeline.

This module handles:
- The Environment shared by the traits of one pass
- The ResourceSet of staged cluster objects
- Ordered Configure/Apply execution and post processing
- The built-in dependencies, deployment and service traits
"""

from camelk_reconciler.traits.base import Trait, TraitOptions
from camelk_reconciler.traits.catalog import TraitCatalog, apply_traits, default_traits
from camelk_reconciler.traits.environment import Environment, PostProcessor
from camelk_reconciler.traits.resources import ResourceSet

__all__ = [
    "Environment",
    "PostProcessor",
    "ResourceSet",
    "Trait",
    "TraitCatalog",
    "TraitOptions",
    "apply_traits",
    "default_traits",
]
