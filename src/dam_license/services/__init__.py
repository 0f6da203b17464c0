"""Services built on top of the repository functions."""

from .creative_commons_service import CreativeCommonsService

__all__ = ["CreativeCommonsService"]
