import logging
from typing import Any, TypeVar, cast

from dam_license.core.exceptions import DamLicenseException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ResourceNotFoundError(DamLicenseException, LookupError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: type[Any]):
        super().__init__(f"Resource of type {resource_type.__name__} not found.")


class ResourceManager:
    """
    A simple container for the shared objects of a world.

    Resources are registered against a type (normally their own class) and looked
    up by that type, or by any base class of it.
    """

    def __init__(self) -> None:
        self._resources: dict[type[Any], Any] = {}

    def add_resource(self, instance: Any, resource_type: type[Any] | None = None) -> None:
        """
        Add a resource instance to the manager.

        If a resource of the same type already exists, it is replaced and a warning is logged.

        Args:
            instance: The resource instance to add.
            resource_type: The type to register this instance against. Defaults to `type(instance)`.

        """
        res_type = type(instance) if resource_type is None else resource_type
        if res_type in self._resources:
            logger.warning("Replacing existing resource for type %s", res_type.__name__)
        self._resources[res_type] = instance

    def get_resource(self, resource_type: type[T]) -> T:
        """
        Retrieve a resource instance by its registered type, or by a registered subclass of it.

        Raises:
            ResourceNotFoundError: If no matching resource is registered.

        """
        instance = self._resources.get(resource_type)
        if instance is None:
            for res_type, res_instance in self._resources.items():
                if issubclass(res_type, resource_type):
                    return cast(T, res_instance)
            raise ResourceNotFoundError(resource_type)
        return cast(T, instance)

    def has_resource(self, resource_type: type[Any]) -> bool:
        """Check if a resource of the given type (or a subclass of it) is registered."""
        return any(issubclass(res_type, resource_type) for res_type in self._resources)
