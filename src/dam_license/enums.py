"""Enumerations shared by the models, functions and services."""

from enum import Enum


class Action(str, Enum):
    """Actions a resource policy can grant."""

    READ = "READ"
    WRITE = "WRITE"
    ADD = "ADD"
    REMOVE = "REMOVE"
    DELETE = "DELETE"
