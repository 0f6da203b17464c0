"""
Persisted models of a repository world.

Importing this package registers every component with the declarative base so
that ``Base.metadata.create_all`` sees all tables.
"""

from .auth import EPersonComponent, ResourcePolicyComponent
from .content import (
    BitstreamComponent,
    BitstreamFormatComponent,
    BundleComponent,
    ItemComponent,
    MetadataValueComponent,
    SupportLevel,
)
from .core import REGISTERED_COMPONENT_TYPES, Base, BaseComponent, Component, Entity, UniqueComponent

__all__ = [
    "REGISTERED_COMPONENT_TYPES",
    "Base",
    "BaseComponent",
    "BitstreamComponent",
    "BitstreamFormatComponent",
    "BundleComponent",
    "Component",
    "EPersonComponent",
    "Entity",
    "ItemComponent",
    "MetadataValueComponent",
    "ResourcePolicyComponent",
    "SupportLevel",
    "UniqueComponent",
]
