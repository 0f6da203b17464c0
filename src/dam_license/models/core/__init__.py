"""Core ECS models."""

from .base_class import Base
from .base_component import ID_TYPE, REGISTERED_COMPONENT_TYPES, BaseComponent, Component, UniqueComponent
from .entity import Entity

__all__ = [
    "ID_TYPE",
    "REGISTERED_COMPONENT_TYPES",
    "Base",
    "BaseComponent",
    "Component",
    "Entity",
    "UniqueComponent",
]
